"""FastAPI application factory."""

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
import os

from .api import api_router
from .web import web_router
from .errors import register_exception_handlers
from .middleware.logging import LoggingMiddleware


def create_app(service_instance, config, logger=None) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        service_instance: URLShortenerService, or None when the lifespan
            handler builds it at startup
        config: Configuration instance
        logger: Optional logger for request logging

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="tinylinks",
        description="Personal URL shortener",
        version="1.0.0",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
    )

    app.state.service = service_instance
    app.state.config = config

    register_exception_handlers(app)

    app.add_middleware(
        LoggingMiddleware,
        logger=logger.getChild("web") if logger else None,
    )

    # Homepage assets
    base_path = os.path.join(os.path.dirname(__file__), "..", "ux", "web")
    css_path = os.path.join(base_path, "css")
    js_path = os.path.join(base_path, "js")

    if os.path.exists(css_path):
        app.mount("/css", StaticFiles(directory=css_path), name="css")
    if os.path.exists(js_path):
        app.mount("/js", StaticFiles(directory=js_path), name="js")

    # API routes first: the redirect route catches every other single-segment path
    app.include_router(api_router, prefix="/api", tags=["API"])
    app.include_router(web_router, tags=["Web"])

    return app
