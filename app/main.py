"""
InfoHub — FastAPI application entry point.

Configures the app, middleware, and registers the /api routers.
"""

import logging

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api import currency, quote, system, weather
from app.config import Settings, settings as default_settings
from app.core.errors import register_exception_handlers
from app.core.logging import configure_logging

logger = logging.getLogger(__name__)

API_PREFIX = "/api"


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the FastAPI app around an explicit ``Settings`` instance."""
    settings = settings or default_settings

    application = FastAPI(
        title=settings.APP_NAME,
        description="Weather, INR currency conversion and quotes behind one small API.",
        version="0.1.0",
    )
    application.state.settings = settings

    # --- CORS Middleware ---
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # --- Routers ---
    application.include_router(system.router, prefix=API_PREFIX, tags=["System"])
    application.include_router(weather.router, prefix=API_PREFIX, tags=["Weather"])
    application.include_router(currency.router, prefix=API_PREFIX, tags=["Currency"])
    application.include_router(quote.router, prefix=API_PREFIX, tags=["Quotes"])

    register_exception_handlers(application)

    return application


app = create_app()


def run() -> None:
    """
    Start the server on HOST:PORT.

    uvicorn logs a failed bind and exits with status 1 on its own.
    """
    configure_logging(default_settings)
    logger.info("Starting server on port %s", default_settings.PORT)
    uvicorn.run(
        app,
        host=default_settings.HOST,
        port=default_settings.PORT,
        log_config=None,
    )


if __name__ == "__main__":
    run()
