"""
Directional input as seen by the simulation.
NO UI DEPENDENCIES.

The game only ever asks "is this direction held right now?". Whatever
owns the keyboard (pygame, a test, a replay) answers through InputProvider.
"""
from enum import Enum, auto
from typing import FrozenSet, Iterable, Protocol, Set, runtime_checkable


class Direction(Enum):
    """The four movement directions."""
    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()


@runtime_checkable
class InputProvider(Protocol):
    """Live, read-only view of held directions."""

    def is_held(self, direction: Direction) -> bool:
        ...


class HeldKeys:
    """
    Set-backed InputProvider.
    Used by tests and headless runs; the pygame adapter has its own.
    """

    def __init__(self, held: Iterable[Direction] = ()):
        self._held: Set[Direction] = set(held)

    def press(self, direction: Direction) -> None:
        self._held.add(direction)

    def release(self, direction: Direction) -> None:
        self._held.discard(direction)

    def clear(self) -> None:
        self._held.clear()

    def is_held(self, direction: Direction) -> bool:
        return direction in self._held

    def __repr__(self) -> str:
        names = sorted(d.name for d in self._held)
        return f"HeldKeys({names})"


def read_held(provider: InputProvider) -> FrozenSet[Direction]:
    """Snapshot the held directions once for this frame."""
    return frozenset(d for d in Direction if provider.is_held(d))
