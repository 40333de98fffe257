from __future__ import annotations

from fastapi import FastAPI

from theme_gallery.logging_config import configure_logging
from theme_gallery.settings import settings
from theme_gallery.web.middleware import RequestLoggingMiddleware
from theme_gallery.web.routers import gallery

configure_logging(
    level=settings.log_level,
    log_format=settings.log_format,
    include_uvicorn_access=settings.log_uvicorn_access,
)

app = FastAPI(title=settings.app_name, docs_url=None, redoc_url=None, openapi_url=None)
app.add_middleware(RequestLoggingMiddleware, log_requests=settings.log_requests)
app.include_router(gallery.router)
