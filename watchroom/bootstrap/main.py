from __future__ import annotations

import logging
import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..infrastructure.config import get_settings
from ..infrastructure.logging import configure_logging
from ..infrastructure.scheduling import PeriodicTask
from ..presentation.api.deps.containers import build_reaper, get_clock, get_room_registry
from ..presentation.api.routers import participants as participants_router
from ..presentation.api.routers import rooms as rooms_router
from ..presentation.api.routers import videos as videos_router
from ..presentation.errors import setup_error_handlers
from ..presentation.ws import rooms as ws_rooms

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    registry = get_room_registry()
    reaper_task: PeriodicTask | None = None
    if settings.REAPER_ENABLED:
        reaper = build_reaper(registry, get_clock())
        reaper_task = PeriodicTask("reaper", settings.REAPER_INTERVAL_SEC, reaper.sweep)
        reaper_task.start()
    else:
        logger.info("reaper disabled (REAPER_ENABLED=false)")
    app.state.reaper_task = reaper_task
    try:
        yield
    finally:
        if reaper_task is not None:
            await reaper_task.shutdown()
        # состояние комнат не переживает процесс
        await registry.clear()


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)

    is_docs_enabled = settings.APP_ENV in {"dev", "test"}
    app = FastAPI(
        title=settings.APP_NAME,
        description="Shared rooms for synchronized video watching",
        version="0.1.0",
        docs_url="/docs" if is_docs_enabled else None,
        redoc_url="/redoc" if is_docs_enabled else None,
        openapi_url="/openapi.json" if is_docs_enabled else None,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    setup_error_handlers(app)

    @app.middleware("http")
    async def request_id_timing_middleware(request, call_next):  # type: ignore[override]
        req_id = str(uuid.uuid4())
        start = time.perf_counter()
        request.state.request_id = req_id  # type: ignore[attr-defined]
        try:
            response = await call_next(request)
        finally:
            duration_ms = (time.perf_counter() - start) * 1000.0
            logging.getLogger("app.request").info(
                "request",
                extra={
                    "request_id": req_id,
                    "method": request.method,
                    "path": request.url.path,
                    "duration_ms": round(duration_ms, 2),
                },
            )
        response.headers.setdefault("X-Request-ID", req_id)
        response.headers.setdefault("Server-Timing", f"app;dur={duration_ms:.2f}")
        return response

    # Routers
    app.include_router(rooms_router.router, prefix=settings.API_PREFIX)
    app.include_router(participants_router.router, prefix=settings.API_PREFIX)
    app.include_router(videos_router.router, prefix=settings.API_PREFIX)

    # WS
    app.include_router(ws_rooms.router)

    @app.get("/healthz", tags=["health"])
    async def healthz():
        return {"status": "ok"}

    return app


def run() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run("watchroom.bootstrap.asgi:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
