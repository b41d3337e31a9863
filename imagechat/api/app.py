"""FastAPI application factory and configuration.

Main application entry point with lifespan management, middleware,
error handling, and router registration.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from imagechat.api.analyze import router as analyze_router
from imagechat.api.chat import router as chat_router
from imagechat.errors import ProxyError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application startup and shutdown lifecycle.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control to the application while it runs.
    """
    # Startup
    logger.info("Starting Image Chat API...")
    yield
    # Shutdown
    logger.info("Shutting down Image Chat API...")


async def proxy_error_handler(request: Request, exc: ProxyError) -> JSONResponse:
    """Render a ProxyError as ``{"error": message}`` with its status code."""
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    application = FastAPI(
        title="Image Chat API",
        description=(
            "Chat proxy for a hosted completion API. Forwards a browser "
            "conversation, optionally with an uploaded image, and returns the "
            "assistant's reply. Also exposes a standalone image analysis endpoint."
        ),
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["*"],
    )

    application.add_exception_handler(ProxyError, proxy_error_handler)

    application.include_router(chat_router)
    application.include_router(analyze_router)

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        """Check service health status."""
        return {"status": "healthy", "service": "imagechat"}

    return application


app = create_app()
