"""FastAPI application entry point.

This module initialises the FastAPI app, configures logging and
registers API routes.  The `uvicorn` ASGI server can point to
``src.main:app`` to serve the application.
"""

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config.app_config import get_app_config
from .controllers.chat_controller import router as chat_router
from .utils.error_handler import (
    ChatError,
    chat_error_handler,
    http_exception_handler,
    request_validation_handler,
    unexpected_error_handler,
)
from .utils.logger import setup_logging


def create_app() -> FastAPI:
    """Create and configure a FastAPI application."""
    # Calling setup_logging() initialises Loguru with console and file sinks.
    setup_logging()
    app_config = get_app_config()

    app = FastAPI(title="Retrieval Chat", version="0.1.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_config.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ChatError, chat_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)

    app.include_router(chat_router)

    @app.get("/health", tags=["Health"])
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        logger.debug("Health check invoked")
        return {"status": "ok"}

    return app


# Create an application instance for ASGI servers
app = create_app()
