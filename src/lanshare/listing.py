from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List

from .models import DirectoryEntry, ListingFilter

logger = logging.getLogger(__name__)


class OutsideRootError(ValueError):
    """Запрошенный путь указывает за пределы корня раздачи."""


def resolve_in_root(root: Path, relative: str) -> Path:
    """Преобразовать относительный путь запроса в путь внутри ``root``."""
    base = Path(root).resolve()
    target = (base / relative.lstrip("/")).resolve()
    if not target.is_relative_to(base):
        raise OutsideRootError(relative)
    return target


def is_visible(entry: DirectoryEntry, rules: ListingFilter) -> bool:
    """Показывать ли запись каталога при заданном фильтре."""
    if entry.is_dir and not rules.show_directories:
        return False
    return rules.matches(entry.name)


def list_directory(path: Path, rules: ListingFilter) -> List[DirectoryEntry]:
    """Просканировать каталог и вернуть видимые записи, отсортированные по имени.

    Кэша нет: каждый вызов заново читает файловую систему. Ошибки
    ``os.scandir`` (нет каталога, нет прав) пробрасываются вызывающему.
    """
    entries: List[DirectoryEntry] = []
    with os.scandir(path) as it:
        for item in it:
            try:
                is_dir = item.is_dir()
            except OSError:
                logger.debug("Cannot stat %s, skipped", item.path)
                continue
            entry = DirectoryEntry(name=item.name, is_dir=is_dir)
            if is_visible(entry, rules):
                entries.append(entry)
    entries.sort(key=lambda e: e.name)
    return entries
