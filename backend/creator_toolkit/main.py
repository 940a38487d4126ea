from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from creator_toolkit.config import Settings, settings as default_settings
from creator_toolkit.context import AppContext, build_context
from creator_toolkit.errors import ServiceError, error_body
from creator_toolkit.logging_conf import configure_logging
from creator_toolkit.middleware.no_cache import NoCacheMiddleware
from creator_toolkit.middleware.request_id import RequestIdMiddleware

from creator_toolkit.routes.health import router as health_router
from creator_toolkit.routes.version import router as version_router
from creator_toolkit.routes.tools import router as tools_router
from creator_toolkit.routes.auth import router as auth_router
from creator_toolkit.routes.me import router as me_router

log = logging.getLogger(__name__)


def _rid(request: Request) -> str:
    return getattr(request.state, "request_id", "") or ""


def create_app(settings: Settings | None = None, context: AppContext | None = None) -> FastAPI:
    settings = settings or (context.settings if context else default_settings)
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        ctx = getattr(app.state, "ctx", None) or build_context(settings)
        if ctx.database is not None:
            await ctx.database.create_all()
        app.state.ctx = ctx
        log.info("startup", extra={"store_configured": ctx.store_configured, "env": settings.app_env})
        try:
            yield
        finally:
            await ctx.close()

    app = FastAPI(title=settings.app_name, version=settings.app_version, lifespan=lifespan)
    if context is not None:
        app.state.ctx = context

    app.add_middleware(RequestIdMiddleware)
    app.add_middleware(NoCacheMiddleware, public_paths=("/tools",))

    app.include_router(health_router)
    app.include_router(version_router)
    app.include_router(tools_router)
    app.include_router(auth_router)
    app.include_router(me_router)

    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError):
        if exc.status_code >= 500:
            log.warning("service_error", extra={"request_id": _rid(request), "code": exc.code, "path": request.url.path})
        return JSONResponse(status_code=exc.status_code, content=exc.to_body(), headers={"X-Request-Id": _rid(request)})

    @app.exception_handler(HTTPException)
    async def http_error_handler(request: Request, exc: HTTPException):
        if isinstance(exc.detail, dict) and "error" in exc.detail:
            content = exc.detail
        else:
            content = error_body("HTTP_ERROR", str(exc.detail))
        return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        fields = [".".join(str(p) for p in e.get("loc", ())) for e in exc.errors()]
        return JSONResponse(
            status_code=422,
            content=error_body("VALIDATION_FAILED", "Request body is invalid", {"fields": fields}),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        rid = _rid(request)
        log.exception("unhandled_error", extra={"request_id": rid, "path": request.url.path})
        return JSONResponse(
            status_code=500,
            content=error_body("INTERNAL_ERROR", "Internal server error"),
            headers={"X-Request-Id": rid},
        )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "creator_toolkit.main:app",
        host="0.0.0.0",
        port=8000,
        access_log=default_settings.uvicorn_access_log,
    )
