"""
Pytest fixtures for Harvest Dash tests.
"""
import random

import pytest

from harvest_dash.gameplay.controls import HeldKeys
from harvest_dash.gameplay.game import Game


class FakeClock:
    """Manually advanced stand-in for time.monotonic."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def keys() -> HeldKeys:
    return HeldKeys()


@pytest.fixture
def game(clock, keys) -> Game:
    """A seeded game in the MENU state with a controllable clock and keyboard."""
    return Game(input_provider=keys, rng=random.Random(7), clock=clock)
