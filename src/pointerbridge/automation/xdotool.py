"""Runs xdotool commands for pointer and keyboard synthesis.

Every operation spawns one xdotool process and waits for it to exit:

    getmouselocation --shell      -> X=..., Y=..., SCREEN=..., WINDOW=...
    mousemove X Y                 absolute move
    mousemove_relative -- DX DY   relative move
    click / mousedown / mouseup N button 1 (left), 2 (middle), 3 (right)
    type --clearmodifiers ...     literal text
    key --clearmodifiers NAME     named key or combo (e.g. ctrl+c)

There is no timeout: a hung xdotool stalls the caller.
"""

from __future__ import annotations

import asyncio
import logging
import os
import shutil

from pointerbridge.automation.buttons import button_number

logger = logging.getLogger(__name__)

DEFAULT_BINARY = "xdotool"
# Milliseconds between typed characters
DEFAULT_TYPE_DELAY_MS = 10


class XdotoolError(Exception):
    """Raised when an xdotool command cannot be run or exits non-zero."""

    def __init__(self, message: str, command: list[str] | None = None) -> None:
        super().__init__(message)
        self.command = command or []


def parse_mouse_location(output: str) -> tuple[int, int]:
    """Extract X and Y from ``getmouselocation --shell`` output.

    Missing or non-numeric values read as 0.
    """
    x = y = 0
    for line in output.splitlines():
        line = line.strip()
        if line.startswith("X="):
            x = _to_int(line[2:])
        elif line.startswith("Y="):
            y = _to_int(line[2:])
    return x, y


def _to_int(value: str) -> int:
    try:
        return int(value)
    except ValueError:
        return 0


class XdotoolRunner:
    """Invokes the xdotool binary.

    Usage::

        runner = XdotoolRunner()
        x, y = await runner.get_mouse_location()
        await runner.move_to(x + 10, y)
        await runner.click("left")
    """

    def __init__(
        self,
        binary: str = DEFAULT_BINARY,
        type_delay_ms: int = DEFAULT_TYPE_DELAY_MS,
        display: str | None = None,
    ) -> None:
        self._binary = binary
        self._type_delay_ms = type_delay_ms
        self._display = display

    @property
    def binary(self) -> str:
        return self._binary

    def is_available(self) -> bool:
        """Whether the xdotool binary can be found on PATH."""
        return shutil.which(self._binary) is not None

    def _env(self) -> dict[str, str] | None:
        if not self._display:
            return None
        env = os.environ.copy()
        env["DISPLAY"] = self._display
        return env

    async def run(self, *args: str) -> str:
        """Run xdotool with the given arguments and return its stdout.

        Raises:
            XdotoolError: If the process cannot be started or exits non-zero.
        """
        command = [self._binary, *args]
        logger.debug("exec: %s", " ".join(command))
        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                env=self._env(),
            )
        except (OSError, ValueError) as e:
            # ValueError: an argument holds a NUL byte
            raise XdotoolError(str(e), command) from e

        try:
            stdout, stderr = await process.communicate()
        except asyncio.CancelledError:
            process.kill()
            raise
        if process.returncode != 0:
            message = stderr.decode(errors="replace").strip()
            raise XdotoolError(
                message or f"exit status {process.returncode}", command
            )
        return stdout.decode(errors="replace")

    async def get_mouse_location(self) -> tuple[int, int]:
        """Return the current pointer coordinates."""
        output = await self.run("getmouselocation", "--shell")
        return parse_mouse_location(output)

    async def move_relative(self, dx: int, dy: int) -> None:
        # "--" keeps negative offsets from being read as options
        await self.run("mousemove_relative", "--", str(dx), str(dy))

    async def move_to(self, x: int, y: int) -> None:
        await self.run("mousemove", str(x), str(y))

    async def click(self, button: str = "left") -> None:
        await self.run("click", button_number(button))

    async def mouse_down(self, button: str = "left") -> None:
        await self.run("mousedown", button_number(button))

    async def mouse_up(self, button: str = "left") -> None:
        await self.run("mouseup", button_number(button))

    async def type_text(self, text: str) -> None:
        """Type literal text with the configured per-character delay."""
        await self.run(
            "type", "--clearmodifiers", "--delay", str(self._type_delay_ms), "--", text
        )
        logger.debug("Typed text: %s", text[:50])

    async def key(self, code: str) -> None:
        """Press a named key or key combination (e.g. 'Return', 'ctrl+c')."""
        await self.run("key", "--clearmodifiers", code)
        logger.debug("Sent key: %s", code)
