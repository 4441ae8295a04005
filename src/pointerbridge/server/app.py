"""REST API server that drives the local pointer and keyboard.

Accepts simple GET requests and translates each one into one or more
xdotool invocations. Handlers are stateless; a request that waits
(capture) or drags blocks for the corresponding wall-clock time.

    GET /health                                  -> {"ok": true, "xdotool": true}
    GET /pos                                     -> {"x": 10, "y": 20}
    GET /capture?delay=3                         -> {"x": 10, "y": 20}
    GET /move?dx=10&dy=-5                        -> {"ok": true}
    GET /click?x=&y=&button=&double=1&move_only=1
    GET /down?button=right
    GET /up?button=right
    GET /drag?x1=&y1=&x2=&y2=&duration=600&steps=30&button=left
    GET /type?text=hello
    GET /key?code=ctrl+c

Failures of the external tool are reported as {"ok": false, "error": "..."}
with HTTP 200. CORS is open to every origin.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Awaitable, Callable

import uvicorn
from fastapi import FastAPI, Request, Response
from pydantic import BaseModel

from pointerbridge.automation.buttons import resolve_button
from pointerbridge.automation.drag import drag_path, normalize_drag, step_delay
from pointerbridge.automation.xdotool import XdotoolError, XdotoolRunner
from pointerbridge.config.settings import Settings
from pointerbridge.server.params import decode_text, parse_delay, parse_flag, parse_int

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET,POST,OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

DEFAULT_KEY = "Return"

Sleeper = Callable[[float], Awaitable[None]]


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------

class ActionResponse(BaseModel):
    ok: bool = True
    error: str | None = None


class PositionResponse(BaseModel):
    x: int
    y: int


class HealthResponse(BaseModel):
    ok: bool = True
    xdotool: bool = False


def _ok() -> dict[str, Any]:
    return ActionResponse(ok=True).model_dump(exclude_none=True)


def _failed(action: str, exc: XdotoolError) -> dict[str, Any]:
    logger.error("xdotool %s error: %s", action, exc)
    return ActionResponse(ok=False, error=str(exc)).model_dump(exclude_none=True)


# ---------------------------------------------------------------------------
# Application factory
# ---------------------------------------------------------------------------

def create_app(
    runner: XdotoolRunner | None = None,
    settings: Settings | None = None,
    sleep: Sleeper | None = None,
) -> FastAPI:
    """Create the pointer automation API application.

    Args:
        runner: Optional pre-configured XdotoolRunner (for testing).
        settings: Configuration; defaults are used when omitted.
        sleep: Coroutine used for capture waits and drag pacing
               (for testing). Defaults to asyncio.sleep.
    """
    settings = settings or Settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        r: XdotoolRunner = app.state.runner
        if r.is_available():
            logger.info("Pointer server started (xdotool=%s)", r.binary)
        else:
            logger.warning(
                "%s not found on PATH -- every automation request will fail. "
                "Install xdotool and restart.",
                r.binary,
            )
        yield
        logger.info("Pointer server stopped")

    app = FastAPI(
        title="pointerbridge",
        description="HTTP control surface for xdotool pointer/keyboard automation",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.runner = runner or XdotoolRunner(
        binary=settings.xdotool.binary,
        type_delay_ms=settings.xdotool.type_delay_ms,
        display=settings.xdotool.display,
    )
    app.state.sleep = sleep or asyncio.sleep

    # Registered first so it runs inside the CORS layer
    @app.middleware("http")
    async def log_requests(request: Request, call_next):  # type: ignore[no-untyped-def]
        client = request.client
        origin = f"{client.host}:{client.port}" if client else "unknown"
        logger.info("%s %s from %s", request.method, request.url, origin)
        return await call_next(request)

    @app.middleware("http")
    async def allow_cors(request: Request, call_next):  # type: ignore[no-untyped-def]
        if request.method == "OPTIONS":
            return Response(status_code=204, headers=CORS_HEADERS)
        response = await call_next(request)
        response.headers.update(CORS_HEADERS)
        return response

    async def _position() -> dict[str, Any]:
        r: XdotoolRunner = app.state.runner
        try:
            x, y = await r.get_mouse_location()
        except XdotoolError as e:
            return _failed("pos", e)
        return PositionResponse(x=x, y=y).model_dump()

    @app.get("/health")
    async def health_check() -> HealthResponse:
        r: XdotoolRunner = app.state.runner
        return HealthResponse(ok=True, xdotool=r.is_available())

    @app.get("/pos")
    async def position() -> dict[str, Any]:
        return await _position()

    @app.get("/capture")
    async def capture(delay: str | None = None) -> dict[str, Any]:
        seconds = parse_delay(
            delay,
            default=settings.capture.default_delay,
            maximum=settings.capture.max_delay,
        )
        logger.debug("capture in %ds", seconds)
        await app.state.sleep(seconds)
        return await _position()

    @app.get("/move")
    async def move(dx: str | None = None, dy: str | None = None) -> dict[str, Any]:
        r: XdotoolRunner = app.state.runner
        ddx, ddy = parse_int(dx), parse_int(dy)
        logger.info("move dx=%d dy=%d", ddx, ddy)
        try:
            await r.move_relative(ddx, ddy)
        except XdotoolError as e:
            return _failed("move", e)
        return _ok()

    @app.get("/click")
    async def click(
        x: str | None = None,
        y: str | None = None,
        button: str | None = None,
        double: str | None = None,
        move_only: str | None = None,
    ) -> dict[str, Any]:
        r: XdotoolRunner = app.state.runner
        px, py = parse_int(x), parse_int(y)
        btn = resolve_button(button)
        dbl = parse_flag(double)
        only_move = parse_flag(move_only)
        logger.info(
            "click x=%d y=%d btn=%s dbl=%s moveOnly=%s", px, py, btn, dbl, only_move
        )
        try:
            await r.move_to(px, py)
        except XdotoolError as e:
            return _failed("move", e)
        if only_move:
            return _ok()
        try:
            for _ in range(2 if dbl else 1):
                await r.click(btn)
        except XdotoolError as e:
            return _failed("click", e)
        return _ok()

    @app.get("/down")
    async def down(button: str | None = None) -> dict[str, Any]:
        r: XdotoolRunner = app.state.runner
        try:
            await r.mouse_down(resolve_button(button))
        except XdotoolError as e:
            return _failed("down", e)
        return _ok()

    @app.get("/up")
    async def up(button: str | None = None) -> dict[str, Any]:
        r: XdotoolRunner = app.state.runner
        try:
            await r.mouse_up(resolve_button(button))
        except XdotoolError as e:
            return _failed("up", e)
        return _ok()

    @app.get("/drag")
    async def drag(
        x1: str | None = None,
        y1: str | None = None,
        x2: str | None = None,
        y2: str | None = None,
        duration: str | None = None,
        steps: str | None = None,
        button: str | None = None,
    ) -> dict[str, Any]:
        r: XdotoolRunner = app.state.runner
        start = (parse_int(x1), parse_int(y1))
        end = (parse_int(x2), parse_int(y2))
        btn = resolve_button(button)
        duration_ms, n_steps = normalize_drag(
            parse_int(duration),
            parse_int(steps),
            default_steps=settings.drag.default_steps,
        )
        logger.info(
            "drag %s -> %s btn=%s duration=%dms steps=%d",
            start, end, btn, duration_ms, n_steps,
        )

        try:
            await r.move_to(*start)
        except XdotoolError as e:
            return _failed("move(start)", e)
        try:
            await r.mouse_down(btn)
        except XdotoolError as e:
            return _failed("mousedown", e)

        pause = step_delay(duration_ms, n_steps)
        move_error: XdotoolError | None = None
        for wx, wy in drag_path(start, end, n_steps):
            try:
                await r.move_to(wx, wy)
            except XdotoolError as e:
                move_error = e
                break
            if pause > 0:
                await app.state.sleep(pause)

        # The button is released even when a step failed
        try:
            await r.mouse_up(btn)
        except XdotoolError as e:
            return _failed("mouseup", e)
        if move_error is not None:
            return _failed("move(step)", move_error)
        return _ok()

    @app.get("/type")
    async def type_text(text: str | None = None) -> dict[str, Any]:
        r: XdotoolRunner = app.state.runner
        try:
            await r.type_text(decode_text(text))
        except XdotoolError as e:
            return _failed("type", e)
        return _ok()

    @app.get("/key")
    async def key_press(code: str | None = None) -> dict[str, Any]:
        r: XdotoolRunner = app.state.runner
        try:
            await r.key(code or DEFAULT_KEY)
        except XdotoolError as e:
            return _failed("key", e)
        return _ok()

    return app


# ---------------------------------------------------------------------------
# Standalone entry point
# ---------------------------------------------------------------------------

def main(settings: Settings | None = None) -> None:
    """Run the pointer server."""
    settings = settings or Settings()
    app = create_app(settings=settings)
    logger.info("listening on %s:%d", settings.server.host, settings.server.port)
    # Logging is configured by setup_logging(); keep uvicorn from replacing it
    uvicorn.run(app, host=settings.server.host, port=settings.server.port, log_config=None)


if __name__ == "__main__":
    main()
