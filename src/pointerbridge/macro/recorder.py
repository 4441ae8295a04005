"""Build macro steps from the live pointer position.

The user positions the pointer during the capture delay; the server
reports where it ended up and that becomes the step's coordinates.
"""

from __future__ import annotations

import logging

from pointerbridge.client import PointerClient
from pointerbridge.macro.models import (
    DEFAULT_DRAG_DURATION_MS,
    DEFAULT_DRAG_STEPS,
    DragStep,
    TapStep,
)

logger = logging.getLogger(__name__)


async def record_tap(
    client: PointerClient,
    capture_delay: int = 3,
    button: str = "left",
    delay_ms: int = 0,
) -> TapStep:
    x, y = await client.capture(capture_delay)
    logger.info("Recorded tap at (%d, %d)", x, y)
    return TapStep(x=x, y=y, button=button, delay_ms=delay_ms)


async def record_drag(
    client: PointerClient,
    capture_delay: int = 3,
    button: str = "left",
    duration_ms: int = DEFAULT_DRAG_DURATION_MS,
    steps: int = DEFAULT_DRAG_STEPS,
    delay_ms: int = 0,
) -> DragStep:
    """Capture the start point, then the end point, of a drag."""
    x, y = await client.capture(capture_delay)
    logger.info("Drag start at (%d, %d)", x, y)
    x2, y2 = await client.capture(capture_delay)
    logger.info("Drag end at (%d, %d)", x2, y2)
    return DragStep(
        x=x, y=y, x2=x2, y2=y2,
        button=button, duration_ms=duration_ms, steps=steps, delay_ms=delay_ms,
    )
