from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ..core.errors import ConflictError, NotFoundError, ProviderError, ProviderTimeout, ValidationError


def setup_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ValidationError)
    async def _validation(_: Request, exc: ValidationError):
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(NotFoundError)
    async def _not_found(_: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(ConflictError)
    async def _conflict(_: Request, exc: ConflictError):
        return JSONResponse(status_code=409, content={"detail": str(exc)})

    # ProviderTimeout наследует ProviderError, Starlette выбирает обработчик по MRO
    @app.exception_handler(ProviderTimeout)
    async def _provider_timeout(_: Request, exc: ProviderTimeout):
        return JSONResponse(status_code=504, content={"detail": str(exc)})

    @app.exception_handler(ProviderError)
    async def _provider(_: Request, exc: ProviderError):
        return JSONResponse(status_code=502, content={"detail": str(exc)})
