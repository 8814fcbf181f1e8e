"""
Level definitions - difficulty per level and obstacle layout.
NO UI DEPENDENCIES.
"""
import random
from dataclasses import dataclass, replace
from typing import List, Optional, Sequence

from .entities import Obstacle
from .geometry import Rect, aabb
from .constants import (
    WIDTH, HEIGHT, OBSTACLE_WIDTH, OBSTACLE_HEIGHT,
    BASE_OBSTACLES, OBSTACLE_PLACEMENT_TRIES
)


@dataclass(frozen=True)
class LevelConfig:
    """Difficulty parameters for one level."""
    level: int              # 1-based
    spawn_interval: float   # seconds between crops
    time_limit: float       # seconds on the clock
    goal: int               # score needed to clear the level


# Used whenever no difficulty source is available
DEFAULT_DIFFICULTY = (
    LevelConfig(level=1, spawn_interval=0.8, time_limit=60.0, goal=10),
    LevelConfig(level=2, spawn_interval=0.6, time_limit=50.0, goal=15),
    LevelConfig(level=3, spawn_interval=0.4, time_limit=40.0, goal=20),
)


def config_for_level(table: Sequence[LevelConfig], level: int) -> LevelConfig:
    """
    Find the entry for a level.
    Levels missing from the table fall back to the built-in defaults;
    levels past the defaults reuse the hardest default entry.
    """
    for cfg in table:
        if cfg.level == level:
            return cfg
    if level > len(DEFAULT_DIFFICULTY):
        return replace(DEFAULT_DIFFICULTY[-1], level=level)
    return DEFAULT_DIFFICULTY[level - 1]


def obstacle_count(level: int) -> int:
    """Number of scarecrows on a level."""
    return BASE_OBSTACLES + level


def place_obstacles(
    count: int,
    rng: Optional[random.Random] = None,
    keep_clear: Optional[Rect] = None,
    width: float = WIDTH,
    height: float = HEIGHT
) -> List[Obstacle]:
    """
    Scatter scarecrows uniformly inside the field.

    A scarecrow landing on keep_clear (the player's start box) is
    re-rolled, otherwise the player could start the level stuck.
    After OBSTACLE_PLACEMENT_TRIES misses it goes in a free field corner.
    """
    rng = rng or random.Random()
    obstacles: List[Obstacle] = []

    for _ in range(count):
        for _attempt in range(OBSTACLE_PLACEMENT_TRIES):
            obstacle = Obstacle(
                rng.random() * (width - OBSTACLE_WIDTH),
                rng.random() * (height - OBSTACLE_HEIGHT),
            )
            if keep_clear is None or not aabb(obstacle, keep_clear):
                break
        else:
            obstacle = _corner_clear_of(keep_clear, width, height)
        obstacles.append(obstacle)

    return obstacles


def _corner_clear_of(keep_clear: Rect, width: float, height: float) -> Obstacle:
    """First field corner whose scarecrow box misses keep_clear."""
    corners = [
        (0.0, 0.0),
        (width - OBSTACLE_WIDTH, 0.0),
        (0.0, height - OBSTACLE_HEIGHT),
        (width - OBSTACLE_WIDTH, height - OBSTACLE_HEIGHT),
    ]
    for x, y in corners:
        obstacle = Obstacle(x, y)
        if not aabb(obstacle, keep_clear):
            return obstacle
    raise ValueError("keep_clear covers every field corner")
