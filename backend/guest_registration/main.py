"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI, Request, status
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from guest_registration.config import get_settings
from guest_registration.infrastructure.dependencies import get_record_store
from guest_registration.infrastructure.logging.log_config import setup_logging
from guest_registration.presentation.api.router import router as api_router
from guest_registration.presentation.web.views import router as web_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan: configure logging, check the record store."""
    settings = get_settings()
    setup_logging()

    store = get_record_store()
    if await store.ping():
        logger.info("Record store reachable (%s)", type(store).__name__)
    else:
        # Submissions will fail with 500 until the store comes back
        logger.error("Record store is not reachable at startup (%s)", type(store).__name__)
    logger.info("%s %s started (%s)", settings.app_title, settings.app_version, settings.app_env)

    yield

    # Shutdown
    await store.close()


def _attach_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def on_http_exception(request: Request, exc: StarletteHTTPException):
        if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
            return JSONResponse(
                status_code=exc.status_code,
                content={"error": "Method not allowed"},
                headers=exc.headers,
            )
        return await http_exception_handler(request, exc)

    @app.exception_handler(Exception)
    async def on_unhandled(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "Internal server error",
                "message": "An unexpected error occurred. Please try again.",
            },
        )


def create_app() -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _attach_exception_handlers(app)

    # Mount API routes and confirmation pages
    app.include_router(api_router)
    app.include_router(web_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "guest_registration.main:app",
        host="0.0.0.0",
        port=8020,
        reload=True,
    )
