from __future__ import annotations

import uuid
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from menu_api.core.config import settings
from menu_api.core.errors import MenuItemNotFoundError, MenuValidationError
from menu_api.core.logging import BODY_METHODS, RequestLogger, configure_logging, request_id_ctx
from menu_api.core.rate_limit import limiter
from menu_api.core.sentry import init_sentry
from menu_api.menu.router import router as menu_router
from menu_api.menu.seed import seed_store
from menu_api.menu.store import MenuStore

configure_logging(settings.log_level)
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("service_started", port=settings.port, items=len(app.state.menu_store))
    try:
        yield
    finally:
        logger.info("service_stopped")


def create_app(
    store: MenuStore | None = None,
    request_logger: RequestLogger | None = None,
    *,
    seed: bool | None = None,
) -> FastAPI:
    """
    Build the menu service.

    A fresh ``MenuStore`` is created (and seeded when ``settings.seed_menu``)
    unless one is passed in. ``request_logger`` replaces the default request
    tracing, e.g. ``RequestLogger(enabled=False)`` in tests.
    """
    init_sentry()

    if store is None:
        store = MenuStore()
        if settings.seed_menu if seed is None else seed:
            seed_store(store)
    if request_logger is None:
        request_logger = RequestLogger(include_body=settings.log_request_bodies)

    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    app.state.menu_store = store
    app.state.request_logger = request_logger
    app.state.limiter = limiter
    app.add_middleware(SlowAPIMiddleware)
    app.include_router(menu_router)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        body: bytes | None = None
        if request.method in BODY_METHODS:
            body = await request.body()

            async def receive() -> dict[str, object]:
                return {"type": "http.request", "body": body, "more_body": False}

            request._receive = receive  # type: ignore[attr-defined]

        path = request.url.path
        if request.url.query:
            path = f"{path}?{request.url.query}"
        request.app.state.request_logger.log_request(request.method, path, body)
        return await call_next(request)

    @app.middleware("http")
    async def add_request_context(request: Request, call_next):
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        request_id_token = request_id_ctx.set(request_id)
        try:
            response = await call_next(request)
        finally:
            request_id_ctx.reset(request_id_token)

        response.headers["x-request-id"] = request_id
        return response

    @app.exception_handler(MenuItemNotFoundError)
    async def menu_item_not_found_handler(request: Request, exc: MenuItemNotFoundError):
        logger.warning("menu_item_not_found", path=request.url.path, item_id=exc.item_id)
        return JSONResponse(status_code=404, content={"error": "Menu item not found"})

    @app.exception_handler(MenuValidationError)
    async def menu_validation_handler(request: Request, exc: MenuValidationError):
        logger.warning(
            "menu_validation_failed",
            path=request.url.path,
            fields=[error.path for error in exc.errors],
        )
        return JSONResponse(
            status_code=400,
            content={"errors": jsonable_encoder([error.to_body() for error in exc.errors])},
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        logger.warning("request_validation_failed", path=request.url.path, error=str(exc))
        return JSONResponse(status_code=422, content={"detail": jsonable_encoder(exc.errors())})

    @app.exception_handler(RateLimitExceeded)
    def rate_limit_handler(request: Request, exc: RateLimitExceeded):
        logger.warning("rate_limit_exceeded", path=request.url.path)
        return JSONResponse(
            status_code=429,
            content={"error": "Rate limit exceeded. Please slow down."},
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("unhandled_exception", path=request.url.path)
        return JSONResponse(status_code=500, content={"error": "Internal Server Error"})

    @app.get("/health")
    async def health(request: Request) -> dict[str, str | int]:
        return {"status": "ok", "items": len(request.app.state.menu_store)}

    return app


app = create_app()
