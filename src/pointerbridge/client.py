"""HTTP client for the pointerbridge API.

Sends automation requests to a running pointerbridge server. Used by the
macro player and the CLI, and usable from any other Python program.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)


class PointerClientError(Exception):
    """Raised when a request fails or the server reports ok=false."""

    def __init__(self, message: str, path: str = "") -> None:
        super().__init__(message)
        self.path = path


class PointerClient:
    """Async client mirroring every pointerbridge route.

    Example usage::

        async with PointerClient("http://192.168.0.10:5005") as pc:
            x, y = await pc.position()
            await pc.click(x, y, button="right")
            await pc.type_text("hello")
            await pc.key("Return")
    """

    def __init__(
        self,
        base_url: str = "http://127.0.0.1:5005",
        timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def base_url(self) -> str:
        return self._base_url

    async def connect(self) -> None:
        """Create the HTTP client and verify the server answers /health."""
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout,
            transport=self._transport,
        )
        try:
            await self.health()
            logger.info("Connected to pointerbridge at %s", self._base_url)
        except PointerClientError:
            await self._client.aclose()
            self._client = None
            raise

    async def disconnect(self) -> None:
        """Close the HTTP client. Safe to call more than once."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            logger.info("Disconnected from pointerbridge")

    async def health(self) -> dict[str, Any]:
        return await self._get("/health")

    async def position(self) -> tuple[int, int]:
        """Current pointer coordinates."""
        data = await self._get("/pos")
        return int(data["x"]), int(data["y"])

    async def capture(self, delay: int = 3) -> tuple[int, int]:
        """Pointer coordinates after the server waits ``delay`` seconds."""
        data = await self._get("/capture", {"delay": delay})
        return int(data["x"]), int(data["y"])

    async def move(self, dx: int, dy: int) -> None:
        await self._get("/move", {"dx": dx, "dy": dy})

    async def click(
        self,
        x: int,
        y: int,
        button: str = "left",
        double: bool = False,
        move_only: bool = False,
    ) -> None:
        params: dict[str, Any] = {"x": x, "y": y, "button": button}
        if double:
            params["double"] = 1
        if move_only:
            params["move_only"] = 1
        await self._get("/click", params)

    async def down(self, button: str = "left") -> None:
        await self._get("/down", {"button": button})

    async def up(self, button: str = "left") -> None:
        await self._get("/up", {"button": button})

    async def drag(
        self,
        start: tuple[int, int],
        end: tuple[int, int],
        duration_ms: int = 600,
        steps: int = 30,
        button: str = "left",
    ) -> None:
        await self._get(
            "/drag",
            {
                "x1": start[0], "y1": start[1],
                "x2": end[0], "y2": end[1],
                "duration": duration_ms,
                "steps": steps,
                "button": button,
            },
        )

    async def type_text(self, text: str) -> None:
        await self._get("/type", {"text": text})
        logger.debug("Sent text: %s", text[:50])

    async def key(self, code: str) -> None:
        await self._get("/key", {"code": code})
        logger.debug("Sent key: %s", code)

    async def _get(self, path: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        """Send a GET request and return the decoded JSON body."""
        if self._client is None:
            raise PointerClientError("Not connected to pointerbridge", path=path)
        try:
            resp = await self._client.get(path, params=params)
            resp.raise_for_status()
            data = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            raise PointerClientError(f"Request to {path} failed: {e}", path=path) from e
        if not isinstance(data, dict):
            raise PointerClientError(f"Unexpected response from {path}: {data!r}", path=path)
        if data.get("ok") is False:
            raise PointerClientError(data.get("error") or "request failed", path=path)
        return data

    async def __aenter__(self) -> PointerClient:
        await self.connect()
        return self

    async def __aexit__(self, exc_type: type | None, exc_val: Exception | None, exc_tb: object) -> None:
        await self.disconnect()
