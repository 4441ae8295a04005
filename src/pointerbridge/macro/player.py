"""Replays macros against a pointerbridge server."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable

from pointerbridge.client import PointerClient
from pointerbridge.macro.models import (
    DragStep,
    KeyStep,
    Macro,
    MacroStep,
    TapStep,
    TypeStep,
    WaitStep,
)

logger = logging.getLogger(__name__)


class MacroPlayer:
    """Plays each step of a macro through a connected PointerClient.

    Usage::

        async with PointerClient(base_url) as pc:
            runs = await MacroPlayer(pc).run(load_macro("login.yaml"))
    """

    def __init__(
        self,
        client: PointerClient,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._client = client
        self._sleep = sleep
        self._stopped = False
        self._current_step = 0

    @property
    def current_step(self) -> int:
        """1-based index of the step being played, 0 when idle."""
        return self._current_step

    def stop(self) -> None:
        """Stop playback once the current step finishes."""
        self._stopped = True

    async def run(self, macro: Macro, loops: int | None = None) -> int:
        """Play the macro ``loops`` times (0 = until stopped).

        Returns:
            The number of completed runs.
        """
        loops = macro.loops if loops is None else loops
        self._stopped = False
        completed = 0
        logger.info(
            "Playing macro %r: %d steps, loops=%s",
            macro.name, len(macro.steps), loops or "forever",
        )
        while not self._stopped and (loops == 0 or completed < loops):
            if not await self._run_once(macro):
                break
            completed += 1
            logger.debug("Macro %r run %d complete", macro.name, completed)
            if loops == 0 and not macro.steps:
                # nothing to repeat
                break
        self._current_step = 0
        logger.info("Macro %r finished after %d run(s)", macro.name, completed)
        return completed

    async def _run_once(self, macro: Macro) -> bool:
        for index, step in enumerate(macro.steps, start=1):
            if self._stopped:
                return False
            self._current_step = index
            await self.play_step(step)
            await self._sleep(macro.pause_after(step))
        return True

    async def play_step(self, step: MacroStep) -> None:
        """Send the requests for a single step (without the trailing pause)."""
        pc = self._client
        if isinstance(step, TapStep):
            await pc.click(step.x, step.y, button=step.button)
        elif isinstance(step, DragStep):
            await pc.drag(
                (step.x, step.y),
                (step.x2, step.y2),
                duration_ms=step.duration_ms,
                steps=step.steps,
                button=step.button,
            )
        elif isinstance(step, TypeStep):
            await pc.type_text(step.text)
        elif isinstance(step, KeyStep):
            await pc.key(step.text)
        elif isinstance(step, WaitStep):
            pass
        else:
            raise TypeError(f"Unsupported macro step: {step!r}")
        logger.debug("Played step %s", step.kind)
