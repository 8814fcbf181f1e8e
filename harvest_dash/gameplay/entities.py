"""
Field entities: Player, Crop, Obstacle.
NO UI DEPENDENCIES.

The set of entity kinds is closed. Every entity shares the same box
(x, y, w, h) and liveness flag; per-kind behaviour lives in plain
functions looked up through _UPDATERS rather than in overridden methods.
"""
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, ClassVar, Dict, FrozenSet, Sequence, Tuple

from .controls import Direction
from .crops import CropType
from .geometry import aabb, clamp
from .constants import (
    WIDTH, HEIGHT, PLAYER_WIDTH, PLAYER_HEIGHT, PLAYER_SPEED,
    CROP_WIDTH, CROP_HEIGHT, OBSTACLE_WIDTH, OBSTACLE_HEIGHT, SWAY_RATE
)


class EntityKind(Enum):
    """Tag for each entity variant."""
    PLAYER = auto()
    CROP = auto()
    OBSTACLE = auto()


@dataclass(eq=False)
class Entity:
    """Shared box and liveness state. Width and height never change."""
    x: float
    y: float
    w: float
    h: float
    dead: bool = False

    kind: ClassVar[EntityKind]

    def __setattr__(self, name, value):
        if name in ("w", "h") and name in self.__dict__:
            raise AttributeError(f"{name} is fixed after construction")
        super().__setattr__(name, value)


@dataclass(eq=False)
class Player(Entity):
    """The farmer. Velocity is recomputed from held keys every frame."""
    w: float = PLAYER_WIDTH
    h: float = PLAYER_HEIGHT
    vx: float = 0.0
    vy: float = 0.0
    speed: float = PLAYER_SPEED

    kind: ClassVar[EntityKind] = EntityKind.PLAYER

    def move_to(self, x: float, y: float) -> None:
        """Place the player and stop it."""
        self.x = x
        self.y = y
        self.vx = 0.0
        self.vy = 0.0

    def __repr__(self) -> str:
        return f"Player(x={self.x:.1f}, y={self.y:.1f}, v=({self.vx}, {self.vy}))"


@dataclass(eq=False)
class Crop(Entity):
    """A collectible crop. Sway is visual only."""
    w: float = CROP_WIDTH
    h: float = CROP_HEIGHT
    crop_type: CropType = CropType.WHEAT
    sway: float = 0.0

    kind: ClassVar[EntityKind] = EntityKind.CROP

    @property
    def points(self) -> int:
        return self.crop_type.points

    @property
    def color(self) -> str:
        return self.crop_type.color

    def __repr__(self) -> str:
        return f"Crop({self.crop_type.name}, x={self.x:.1f}, y={self.y:.1f}, dead={self.dead})"


@dataclass(eq=False)
class Obstacle(Entity):
    """A scarecrow. Blocks the player, never moves."""
    w: float = OBSTACLE_WIDTH
    h: float = OBSTACLE_HEIGHT

    kind: ClassVar[EntityKind] = EntityKind.OBSTACLE

    def __repr__(self) -> str:
        return f"Obstacle(x={self.x:.1f}, y={self.y:.1f})"


@dataclass(frozen=True)
class FrameContext:
    """Read-only world view handed to entity updates for one frame."""
    obstacles: Sequence[Obstacle] = ()
    held: FrozenSet[Direction] = frozenset()
    width: float = WIDTH
    height: float = HEIGHT


# =============================================================================
# PER-KIND UPDATES
# =============================================================================

def velocity_for(held: FrozenSet[Direction], speed: float) -> Tuple[float, float]:
    """
    Velocity from held directions. Opposite keys cancel on their axis;
    diagonals are not normalised.
    """
    horizontal = (Direction.RIGHT in held) - (Direction.LEFT in held)
    vertical = (Direction.DOWN in held) - (Direction.UP in held)
    return (horizontal * speed, vertical * speed)


def _update_player(player: Player, dt: float, ctx: FrameContext) -> None:
    player.vx, player.vy = velocity_for(ctx.held, player.speed)

    old_x, old_y = player.x, player.y
    player.x = clamp(player.x + player.vx * dt, 0, ctx.width - player.w)
    player.y = clamp(player.y + player.vy * dt, 0, ctx.height - player.h)

    # Any overlap undoes the whole move (no sliding along an axis)
    if any(aabb(player, o) for o in ctx.obstacles):
        player.x = old_x
        player.y = old_y


def _update_crop(crop: Crop, dt: float, ctx: FrameContext) -> None:
    crop.sway += dt * SWAY_RATE


def _update_obstacle(obstacle: Obstacle, dt: float, ctx: FrameContext) -> None:
    pass


_UPDATERS: Dict[EntityKind, Callable[..., None]] = {
    EntityKind.PLAYER: _update_player,
    EntityKind.CROP: _update_crop,
    EntityKind.OBSTACLE: _update_obstacle,
}


def update_entity(entity: Entity, dt: float, ctx: FrameContext) -> None:
    """Advance one entity by dt seconds."""
    _UPDATERS[entity.kind](entity, dt, ctx)
