from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from starlette.concurrency import run_in_threadpool

from ...models import UPLOAD_PATTERN
from ...uploads import MAX_UPLOAD_FILES, slot_name
from ..rendering import render

router = APIRouter()

logger = logging.getLogger(__name__)


@router.get(UPLOAD_PATTERN)
def upload_form(request: Request):
    """Отдать форму загрузки."""
    slots = [slot_name(idx) for idx in range(1, MAX_UPLOAD_FILES + 1)]
    return render(request, "upload.html", "Upload Files", slots=slots)


@router.post(UPLOAD_PATTERN)
async def upload_files(request: Request):
    """Принять до ``MAX_UPLOAD_FILES`` файлов и показать итог по каждому.

    Ошибки отдельных файлов попадают в список неудачных, ответ всегда 200.
    """
    async with request.form() as form:
        result = await run_in_threadpool(request.app.state.uploader.receive, form)
    logger.info(
        "Upload request from %s: ok=%s failed=%s",
        request.client.host if request.client else "-",
        result.ok_files,
        result.failed_files,
    )
    return render(request, "result.html", "Upload Result", result=result)
