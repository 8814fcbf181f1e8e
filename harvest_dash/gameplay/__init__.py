"""
Simulation core for Harvest Dash.
NO UI DEPENDENCIES.
"""

from .game import Game, GameState
from .level import DEFAULT_DIFFICULTY, LevelConfig

__all__ = ["Game", "GameState", "LevelConfig", "DEFAULT_DIFFICULTY"]
