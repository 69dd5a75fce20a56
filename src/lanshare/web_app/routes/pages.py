from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import Response

from ...models import INDEX_PATTERN, QR_PATTERN
from ...qr import encode_png
from ..rendering import render

router = APIRouter()
qr_router = APIRouter()

logger = logging.getLogger(__name__)


@router.get(INDEX_PATTERN)
def index_page(request: Request):
    """Стартовая страница со ссылками на просмотр и загрузку файлов."""
    return render(request, "index.html", "Index Page")


@qr_router.get(QR_PATTERN)
def qrcode_image(request: Request) -> Response:
    """QR-код со ссылкой на стартовую страницу."""
    url = request.app.state.endpoints.index
    try:
        png = encode_png(url)
    except Exception as exc:
        logger.exception("QR code generation failed for %s", url)
        raise HTTPException(status_code=500, detail="QR code generation failed") from exc
    return Response(content=png, media_type="image/png")
