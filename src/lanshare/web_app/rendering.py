from __future__ import annotations

from pathlib import Path

from fastapi import Request
from fastapi.templating import Jinja2Templates

TEMPLATES_DIR = Path(__file__).parent / "templates"
templates = Jinja2Templates(directory=TEMPLATES_DIR)


def render(request: Request, name: str, title: str, **extra):
    """Отрисовать страницу с общей навигационной шапкой."""
    state = request.app.state
    context = {
        "title": title,
        "endpoints": state.endpoints,
        "no_qrcode": state.settings.no_qrcode,
    }
    context.update(extra)
    return templates.TemplateResponse(request, name, context)
