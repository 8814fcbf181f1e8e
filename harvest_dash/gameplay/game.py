"""
Main Game class - orchestrates all gameplay systems.
NO UI DEPENDENCIES.

This is the central gameplay module. It can be fully tested
without any UI framework.
"""
import logging
import math
import random
import time
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Dict, List, Mapping, Optional, Sequence

from .controls import HeldKeys, InputProvider, read_held
from .entities import Crop, FrameContext, Obstacle, Player, update_entity
from .geometry import aabb
from .level import (
    DEFAULT_DIFFICULTY, LevelConfig, config_for_level, obstacle_count, place_obstacles
)
from .spawner import Spawner
from .constants import (
    PLAYER_SPAWN_X, PLAYER_SPAWN_Y, MAX_LEVELS,
    LEVEL_TRANSITION_DELAY, WIN_OVERLAY_DURATION
)

logger = logging.getLogger(__name__)

# Named write-only text targets: "score", "time", "goal", "status"
HudSinks = Mapping[str, Callable[[str], None]]


class GameState(Enum):
    """Session state machine."""
    MENU = auto()       # Waiting for start
    PLAYING = auto()    # Clock running, farmer moving
    PAUSED = auto()     # Frozen by the player or between levels
    GAME_OVER = auto()  # Time ran out
    WIN = auto()        # Final level cleared


@dataclass
class GameEvent:
    """An event that occurred during gameplay (for UI to react to)."""
    pass


@dataclass
class StateChangedEvent(GameEvent):
    """Session state changed."""
    old_state: GameState
    new_state: GameState


@dataclass
class LevelStartedEvent(GameEvent):
    """A level was configured and play began."""
    level: int
    config: LevelConfig


@dataclass
class CropSpawnedEvent(GameEvent):
    """A new crop sprouted."""
    crop: Crop


@dataclass
class CropsCollectedEvent(GameEvent):
    """The farmer picked up one or more crops this frame."""
    crops: List[Crop]
    points: int
    new_score: int


@dataclass(frozen=True)
class HudSnapshot:
    """Plain values for the score/time/goal/status readouts."""
    score: int
    time: int
    goal: int
    level: int
    status: str


class Game:
    """
    The main game class that orchestrates all gameplay.

    This class is COMPLETELY DECOUPLED from UI.
    It exposes state as plain data and accepts commands as method calls.

    Usage:
        game = Game(difficulty=load_difficulty(source))
        game.start()
        while running:
            events = game.update(dt)
            # UI reads game state and renders
    """

    def __init__(
        self,
        difficulty: Optional[Sequence[LevelConfig]] = None,
        input_provider: Optional[InputProvider] = None,
        hud: Optional[HudSinks] = None,
        rng: Optional[random.Random] = None,
        clock: Callable[[], float] = time.monotonic,
        max_levels: int = MAX_LEVELS
    ):
        # Resolved before the first frame; never re-read afterwards
        self.difficulty = tuple(difficulty) if difficulty else DEFAULT_DIFFICULTY
        self.max_levels = max_levels

        # Collaborators
        self.input = input_provider if input_provider is not None else HeldKeys()
        self._hud: Dict[str, Callable[[str], None]] = dict(hud or {})
        self.rng = rng or random.Random()
        self._clock = clock

        # Entities
        self.player = Player(PLAYER_SPAWN_X, PLAYER_SPAWN_Y)
        self.crops: List[Crop] = []
        self.obstacles: List[Obstacle] = []

        # Session state
        self.state = GameState.MENU
        self.level = 1
        self.score = 0
        first = config_for_level(self.difficulty, 1)
        self.goal = first.goal
        self.time_left = first.time_limit
        self.spawner = Spawner(first.spawn_interval, rng=self.rng)

        # Overlay and deferred level change (wall-clock driven)
        self.overlay_text = ""
        self.overlay_until = 0.0
        self._pending_level: Optional[int] = None
        self._transition_at = 0.0

        # Event queue for UI notifications
        self._events: List[GameEvent] = []

        self._configure_level(1)

    # =========================================================================
    # GAME FLOW COMMANDS
    # =========================================================================

    def start(self) -> None:
        """
        Begin a fresh session from level 1, or resume from pause.
        Ignored while already playing or while a level change is pending.
        """
        if self._pending_level is not None:
            return

        if self.state in (GameState.MENU, GameState.GAME_OVER, GameState.WIN):
            self.level = 1
            self._clear_overlay()
            self._configure_level(1)
            self._set_state(GameState.PLAYING)
            self._events.append(LevelStartedEvent(self.level, self.current_config))
        elif self.state == GameState.PAUSED:
            self._set_state(GameState.PLAYING)

    def toggle_pause(self) -> None:
        """Flip PLAYING <-> PAUSED. Does nothing in any other state."""
        if self._pending_level is not None:
            return

        if self.state == GameState.PLAYING:
            self._set_state(GameState.PAUSED)
        elif self.state == GameState.PAUSED:
            self._set_state(GameState.PLAYING)

    def reset(self) -> None:
        """Back to the menu with level 1 laid out and the score zeroed."""
        self._pending_level = None
        self._clear_overlay()
        self.level = 1
        self._configure_level(1)
        self._set_state(GameState.MENU)

    # =========================================================================
    # UPDATE LOOP
    # =========================================================================

    def update(self, dt: float) -> List[GameEvent]:
        """
        Update game state by dt seconds.
        Returns list of events that occurred since the last update,
        including those raised by commands.
        """
        if self._pending_level is not None and self._clock() >= self._transition_at:
            self._finish_level_transition()

        if self.state == GameState.PLAYING:
            self._update_playing(dt)
        # MENU, PAUSED, GAME_OVER and WIN don't simulate

        events = self._events
        self._events = []
        return events

    def _update_playing(self, dt: float) -> None:
        """One simulation step while the clock is running."""
        self.time_left = max(0.0, self.time_left - dt)
        if self.time_left <= 0:
            self._set_state(GameState.GAME_OVER)
            return

        ctx = FrameContext(obstacles=self.obstacles, held=read_held(self.input))

        # Player movement must be resolved before collection
        update_entity(self.player, dt, ctx)
        for crop in self.crops:
            update_entity(crop, dt, ctx)
        for obstacle in self.obstacles:
            update_entity(obstacle, dt, ctx)

        for crop in self.spawner.update(dt):
            self.crops.append(crop)
            self._events.append(CropSpawnedEvent(crop))

        self.collect_crops()

        if self.score >= self.goal:
            self._advance_level()

        self._sync_hud()

    def collect_crops(self) -> int:
        """
        Pick up every live crop under the farmer.
        Returns the points gained. Dead crops are dropped the same call.
        """
        collected = [c for c in self.crops if not c.dead and aabb(self.player, c)]
        points = 0
        if collected:
            for crop in collected:
                crop.dead = True
            points = sum(c.points for c in collected)
            self.score += points
            self._events.append(CropsCollectedEvent(collected, points, self.score))

        self.crops = [c for c in self.crops if not c.dead]
        return points

    # =========================================================================
    # LEVELS
    # =========================================================================

    @property
    def current_config(self) -> LevelConfig:
        return config_for_level(self.difficulty, self.level)

    @property
    def is_transitioning(self) -> bool:
        """True while the between-levels overlay is holding play."""
        return self._pending_level is not None

    def _configure_level(self, level: int) -> None:
        """Lay out a level: fresh clock, score, crops and scarecrows."""
        cfg = config_for_level(self.difficulty, level)
        self.goal = cfg.goal
        self.time_left = cfg.time_limit
        self.score = 0
        self.spawner.reset(cfg.spawn_interval)

        self.player.move_to(PLAYER_SPAWN_X, PLAYER_SPAWN_Y)
        self.crops = []
        self.obstacles = place_obstacles(
            obstacle_count(level), rng=self.rng, keep_clear=self.player
        )
        self._sync_hud()

    def _advance_level(self) -> None:
        """Goal reached: queue the next level, or win on the last one."""
        if self.level < self.max_levels:
            self._pending_level = self.level + 1
            self._transition_at = self._clock() + LEVEL_TRANSITION_DELAY
            self._show_overlay(f"LEVEL {self._pending_level} STARTING…", LEVEL_TRANSITION_DELAY)
            self._set_state(GameState.PAUSED)
        else:
            self._show_overlay("YOU BEAT ALL LEVELS!", WIN_OVERLAY_DURATION)
            self._set_state(GameState.WIN)

    def _finish_level_transition(self) -> None:
        self.level = self._pending_level
        self._pending_level = None
        self._configure_level(self.level)
        self._set_state(GameState.PLAYING)
        self._events.append(LevelStartedEvent(self.level, self.current_config))
        logger.info(
            f"Level {self.level} started (goal {self.goal}, "
            f"{self.time_left:.0f}s, spawn every {self.spawner.interval}s)"
        )

    # =========================================================================
    # STATE / OVERLAY HELPERS
    # =========================================================================

    def _set_state(self, new_state: GameState) -> None:
        old_state = self.state
        if old_state == new_state:
            return
        self.state = new_state
        self._events.append(StateChangedEvent(old_state, new_state))
        logger.info(f"State {old_state.name} -> {new_state.name} (level {self.level}, score {self.score})")
        self._sync_hud()

    def _show_overlay(self, text: str, duration: float) -> None:
        self.overlay_text = text
        self.overlay_until = self._clock() + duration

    def _clear_overlay(self) -> None:
        self.overlay_text = ""
        self.overlay_until = 0.0

    # =========================================================================
    # STATE QUERIES (for UI to read)
    # =========================================================================

    def get_overlay(self) -> Optional[str]:
        """Overlay text while it is still on screen, else None."""
        if self.overlay_text and self._clock() < self.overlay_until:
            return self.overlay_text
        return None

    def get_status(self) -> str:
        if self.state == GameState.PLAYING:
            return f"Level {self.level}"
        if self.state == GameState.PAUSED:
            return "Get Ready" if self._pending_level is not None else "Paused"
        if self.state == GameState.GAME_OVER:
            return "Game Over"
        if self.state == GameState.WIN:
            return "You Win!"
        return "Menu"

    def get_hud(self) -> HudSnapshot:
        return HudSnapshot(
            score=self.score,
            time=math.ceil(self.time_left),
            goal=self.goal,
            level=self.level,
            status=self.get_status(),
        )

    def _sync_hud(self) -> None:
        """Push HUD values to whichever sinks are attached."""
        hud = self.get_hud()
        self._write("score", str(hud.score))
        self._write("time", str(hud.time))
        self._write("goal", str(hud.goal))
        self._write("status", hud.status)

    def _write(self, name: str, text: str) -> None:
        sink = self._hud.get(name)
        if sink is not None:
            sink(text)

    # =========================================================================
    # CONVENIENCE METHODS FOR TESTING
    # =========================================================================

    def simulate(self, seconds: float, dt: float = 1 / 60) -> List[GameEvent]:
        """
        Run the game for a number of simulated seconds while PLAYING.
        Returns all events that occurred.
        """
        all_events = []
        elapsed = 0.0
        while elapsed < seconds and self.state == GameState.PLAYING:
            all_events.extend(self.update(dt))
            elapsed += dt
        return all_events
