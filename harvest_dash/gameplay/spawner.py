"""
Crop spawner - emits crops at a steady average rate.
NO UI DEPENDENCIES.
"""
import math
import random
from typing import List, Optional

from .crops import random_crop_type
from .entities import Crop
from .constants import WIDTH, HEIGHT, CROP_WIDTH, CROP_HEIGHT


class Spawner:
    """
    Accumulates elapsed time and drops one crop per full interval.

    The accumulator is drained in a loop, so a long frame can produce
    several crops at once and no time is lost between frames.
    """

    def __init__(
        self,
        interval: float,
        rng: Optional[random.Random] = None,
        width: float = WIDTH,
        height: float = HEIGHT
    ):
        self.rng = rng or random.Random()
        self.width = width
        self.height = height
        self.interval = 1.0
        self.accumulator: float = 0.0
        self.reset(interval)

    def reset(self, interval: float) -> None:
        """Start a fresh cadence with a new interval."""
        if interval <= 0:
            raise ValueError(f"spawn interval must be positive, got {interval}")
        self.interval = interval
        self.accumulator = 0.0

    def update(self, dt: float) -> List[Crop]:
        """Advance by dt seconds. Returns the crops spawned this step."""
        self.accumulator += dt
        spawned: List[Crop] = []
        while self.accumulator >= self.interval:
            self.accumulator -= self.interval
            spawned.append(self.spawn_crop())
        return spawned

    def spawn_crop(self) -> Crop:
        """A crop of random type, fully inside the field."""
        crop_type = random_crop_type(self.rng)
        x = self.rng.random() * (self.width - CROP_WIDTH)
        y = self.rng.random() * (self.height - CROP_HEIGHT)
        sway = self.rng.random() * math.pi * 2
        return Crop(x, y, crop_type=crop_type, sway=sway)

    def __repr__(self) -> str:
        return f"Spawner(interval={self.interval}, accumulator={self.accumulator:.3f})"
