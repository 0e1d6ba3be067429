"""FastAPI HTTP server for sunset.

All endpoints are plain GETs so they can be bound to keyboard shortcuts
with nothing more than ``curl``:

    GET /get                    -> current brightness as plain text
    GET /set?brightness=<float> -> set brightness, restart tools
    GET /brighter               -> brightness += step, restart tools
    GET /darker                 -> brightness -= step, restart tools
    GET /health                 -> {"status": "ok", ...}
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import uvicorn
from fastapi import FastAPI, HTTPException, Query
from fastapi.responses import PlainTextResponse, Response
from pydantic import BaseModel

from sunset import __version__
from sunset.config.settings import Settings
from sunset.domain.models import format_value
from sunset.state import BrightnessState
from sunset.system.backlight import BacklightTool
from sunset.system.base import ExternalToolError
from sunset.system.redshift import RedshiftDaemon

logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    status: str = "ok"
    value: float
    light_level: float
    redshift_factor: float
    redshift_running: bool


def build_state(settings: Settings) -> BrightnessState:
    """Wire the external tools from settings into a new, unstarted state."""
    return BrightnessState(
        backlight=BacklightTool(command=settings.backlight.command),
        redshift=RedshiftDaemon(
            command=settings.redshift.command,
            method=settings.redshift.method,
            temperature=settings.redshift.temperature,
        ),
        minimum=settings.brightness.minimum,
        maximum=settings.brightness.maximum,
    )


def create_app(
    state: BrightnessState | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """Create the sunset application.

    Args:
        state: Optional pre-built state (for testing). If it has not been
               started yet, startup starts it.
        settings: Settings used to build the state and the step size.
                  Defaults to ``Settings()``.
    """
    if settings is None:
        settings = Settings()
    step = settings.brightness.step

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        s = app.state.brightness
        if s is None:
            s = build_state(settings)
            app.state.brightness = s
        if not s.is_started:
            # Failures here abort server startup.
            s.start()
        logger.info("sunset server started")
        yield
        logger.info("sunset server stopped")

    app = FastAPI(
        title="sunset",
        description="Display brightness and color temperature control",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.brightness = state

    def _mutate(action: str, fn, *args: float) -> Response:  # type: ignore[no-untyped-def]
        try:
            value = fn(*args)
        except ExternalToolError as e:
            logger.error("%s failed: %s", action, e)
            raise HTTPException(status_code=500, detail=str(e)) from e
        logger.info("%s -> %s", action, format_value(value))
        return Response(status_code=200)

    @app.get("/get", response_class=PlainTextResponse)
    def get_brightness() -> str:
        s: BrightnessState = app.state.brightness
        return format_value(s.value)

    @app.get("/set")
    def set_brightness(brightness: float = Query(description="New brightness value")) -> Response:
        s: BrightnessState = app.state.brightness
        return _mutate(f"set {format_value(brightness)}", s.set, brightness)

    @app.get("/brighter")
    def brighter() -> Response:
        s: BrightnessState = app.state.brightness
        return _mutate("brighter", s.change, step)

    @app.get("/darker")
    def darker() -> Response:
        s: BrightnessState = app.state.brightness
        return _mutate("darker", s.change, -step)

    @app.get("/health")
    def health_check() -> HealthResponse:
        s: BrightnessState = app.state.brightness
        snap = s.snapshot()
        return HealthResponse(status="ok", **snap.model_dump())

    return app


def main(settings: Settings | None = None) -> None:
    """Run the sunset server."""
    if settings is None:
        settings = Settings()
    app = create_app(settings=settings)
    uvicorn.run(app, host=settings.server.host, port=settings.server.port)


if __name__ == "__main__":
    main()
