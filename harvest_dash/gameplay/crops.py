"""
Crop types and their point values.
NO UI DEPENDENCIES.
"""
import random
from enum import Enum
from typing import Optional


class CropType(Enum):
    """Every crop that can sprout in the field: (display color, points)."""
    WHEAT = ("#d9a441", 1)
    PUMPKIN = ("orange", 3)
    GOLDEN_APPLE = ("yellow", 5)

    def __init__(self, color: str, points: int):
        self.color = color
        self.points = points


# Palette the spawner draws from, in declaration order
CROP_PALETTE = tuple(CropType)


def random_crop_type(rng: Optional[random.Random] = None) -> CropType:
    """Pick a crop type by uniform random index over the palette."""
    rng = rng or random
    return CROP_PALETTE[int(rng.random() * len(CROP_PALETTE))]
