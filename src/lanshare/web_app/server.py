from __future__ import annotations

import logging
import webbrowser

from fastapi import FastAPI

from ..config import Settings
from ..models import AdvertisedEndpoints
from ..uploads import UploadCoordinator
from .routes import files, pages, upload

logger = logging.getLogger(__name__)


def create_app(settings: Settings, endpoints: AdvertisedEndpoints) -> FastAPI:
    """Собрать приложение FastAPI для выбранного адреса.

    Настройки и адреса неизменяемы и кладутся в ``app.state``; обработчики
    читают их оттуда и ничего не меняют.
    """
    app = FastAPI(title="LanShare", docs_url=None, redoc_url=None, openapi_url=None)
    app.state.settings = settings
    app.state.endpoints = endpoints
    app.state.listing_filter = settings.listing_filter()
    app.state.uploader = UploadCoordinator(settings.upload_directory)

    app.include_router(pages.router)
    if not settings.no_qrcode:
        app.include_router(pages.qr_router)
    app.include_router(upload.router)
    app.include_router(files.router)

    @app.on_event("startup")
    def _open_qrcode_page() -> None:
        if settings.no_qrcode or not settings.open_browser:
            return
        try:
            webbrowser.open(endpoints.qrcode)
        except webbrowser.Error:  # pragma: no cover - depends on desktop
            logger.warning("Could not open a browser for %s", endpoints.qrcode)

    return app
