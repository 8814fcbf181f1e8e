"""
Rectangle math shared by the simulation.
NO UI DEPENDENCIES.
"""
from typing import Protocol

from .constants import MAX_FRAME_DT


class Rect(Protocol):
    """Anything with an axis-aligned box: x, y, w, h."""
    x: float
    y: float
    w: float
    h: float


def clamp(v: float, lo: float, hi: float) -> float:
    """Restrict v to [lo, hi]. Caller guarantees lo <= hi."""
    return min(hi, max(lo, v))


def aabb(a: Rect, b: Rect) -> bool:
    """
    True if the two boxes overlap on both axes.
    Edges that only touch do not count as overlap.
    """
    return (
        a.x < b.x + b.w and
        a.x + a.w > b.x and
        a.y < b.y + b.h and
        a.y + a.h > b.y
    )


def frame_step(elapsed: float, max_step: float = MAX_FRAME_DT) -> float:
    """
    Turn wall-clock seconds since the last frame into a simulation dt.
    Long stalls (window dragged, tab hidden) are capped at max_step.
    """
    return clamp(elapsed, 0.0, max_step)
