"""Drag path interpolation and pacing.

A drag is a press at the start point, a sequence of absolute moves along
a straight line, and a release at the end point. The moves are spread
evenly over the requested duration.
"""

from __future__ import annotations

DEFAULT_DRAG_STEPS = 30


def _div_trunc(numerator: int, denominator: int) -> int:
    """Integer division rounding toward zero (not toward -inf like //)."""
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator >= 0) == (denominator > 0) else -quotient


def drag_path(
    start: tuple[int, int],
    end: tuple[int, int],
    steps: int,
) -> list[tuple[int, int]]:
    """Compute evenly spaced integer waypoints from start to end.

    Exactly ``steps`` waypoints are returned. With two or more steps the
    first waypoint is ``start`` and the last is ``end``; a single step
    jumps straight to ``end``.

    Raises:
        ValueError: If steps is not positive.
    """
    if steps <= 0:
        raise ValueError(f"steps must be positive, got {steps}")
    x1, y1 = start
    x2, y2 = end
    if steps == 1:
        return [(x2, y2)]
    intervals = steps - 1
    return [
        (
            x1 + _div_trunc((x2 - x1) * i, intervals),
            y1 + _div_trunc((y2 - y1) * i, intervals),
        )
        for i in range(steps)
    ]


def step_delay(duration_ms: int, steps: int) -> float:
    """Seconds to pause after each waypoint so the drag lasts ~duration_ms."""
    if duration_ms <= 0 or steps <= 0:
        return 0.0
    return (duration_ms // steps) / 1000


def normalize_drag(
    duration_ms: int,
    steps: int,
    default_steps: int = DEFAULT_DRAG_STEPS,
) -> tuple[int, int]:
    """Apply drag defaults: non-positive steps -> default, negative duration -> 0."""
    if steps <= 0:
        steps = default_steps
    if duration_ms < 0:
        duration_ms = 0
    return duration_ms, steps
