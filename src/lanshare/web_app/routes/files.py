from __future__ import annotations

import logging
import os
import stat

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import FileResponse, RedirectResponse

from ...listing import OutsideRootError, list_directory, resolve_in_root
from ...models import FILE_PATTERN, ListingFilter
from ..rendering import render

router = APIRouter()
logger = logging.getLogger(__name__)


def _redirect(url_path: str) -> RedirectResponse:
    return RedirectResponse(url_path, status_code=301)


@router.get(FILE_PATTERN.rstrip("/"))
def files_root():
    return _redirect(FILE_PATTERN)


@router.get(FILE_PATTERN + "{path:path}")
def serve_path(path: str, request: Request):
    """Отдать файл или отфильтрованный листинг каталога.

    Путь с завершающим ``/`` считается каталогом: перед листингом выводится
    навигационная шапка. Остальные пути отдаются как есть, без фильтрации.
    """
    settings = request.app.state.settings
    rules: ListingFilter = request.app.state.listing_filter
    url_path = request.url.path

    try:
        target = resolve_in_root(settings.directory, path)
    except OutsideRootError:
        logger.warning("Rejected path outside serving root: %s", path)
        raise HTTPException(status_code=404, detail="File not found")
    except PermissionError:
        raise HTTPException(status_code=403, detail="Forbidden")

    try:
        is_dir = stat.S_ISDIR(target.stat().st_mode)
    except PermissionError:
        raise HTTPException(status_code=403, detail="Forbidden")
    except OSError:
        raise HTTPException(status_code=404, detail="File not found")

    if not is_dir:
        if url_path.endswith("/"):
            return _redirect(url_path.rstrip("/"))
        if not os.access(target, os.R_OK):
            raise HTTPException(status_code=403, detail="Forbidden")
        return FileResponse(target)

    if not url_path.endswith("/"):
        return _redirect(url_path + "/")
    if not rules.show_directories and target != settings.directory.resolve():
        raise HTTPException(status_code=404, detail="File not found")
    try:
        entries = list_directory(target, rules)
    except PermissionError:
        raise HTTPException(status_code=403, detail="Forbidden")
    except OSError:
        logger.warning("Cannot list directory %s", target, exc_info=True)
        raise HTTPException(status_code=404, detail="File not found")
    return render(request, "listing.html", "Get Files", entries=entries)
