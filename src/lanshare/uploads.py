"""Приём нескольких файлов одним запросом.

Форма содержит фиксированное число слотов ``upfile1``..``upfileN``. На
каждый слот запускается свой обработчик, результаты собираются отдельным
потоком-сборщиком через очередь. Ошибка одного файла не мешает остальным.
"""

from __future__ import annotations

import logging
import queue
import shutil
import threading
from concurrent.futures import ThreadPoolExecutor, wait
from pathlib import Path
from typing import Any, Mapping, Optional

from .models import UploadOutcome, UploadResult

logger = logging.getLogger(__name__)

MAX_UPLOAD_FILES = 5
SLOT_PREFIX = "upfile"
COPY_BUFFER = 1024 * 1024

_CLOSED = object()


def slot_name(index: int) -> str:
    return f"{SLOT_PREFIX}{index}"


def safe_filename(declared: str) -> Optional[str]:
    """Оставить от заявленного клиентом имени только последний компонент.

    Разделители ``/`` и ``\\`` считаются одинаково. Возвращает ``None``,
    если после очистки имени не осталось (``""``, ``"."``, ``".."``).
    """
    name = declared.replace("\\", "/").rsplit("/", 1)[-1]
    if name in {"", ".", ".."}:
        return None
    return name


class UploadCoordinator:
    """Записать файлы из слотов формы в ``upload_root``.

    Существующий файл с тем же именем перезаписывается.
    """

    def __init__(self, upload_root: Path | str, slots: int = MAX_UPLOAD_FILES) -> None:
        self.upload_root = Path(upload_root)
        self.slots = slots

    def receive(self, form: Mapping[str, Any]) -> UploadResult:
        """Обработать отправленную форму и вернуть разбиение на успех/ошибку."""
        outcomes: "queue.Queue[Any]" = queue.Queue()
        result = UploadResult(upload_root=str(self.upload_root.resolve()))

        collector = threading.Thread(
            target=self._collect, args=(outcomes, result), name="upload-collector"
        )
        collector.start()
        try:
            with ThreadPoolExecutor(
                max_workers=self.slots, thread_name_prefix="upload-slot"
            ) as pool:
                futures = [
                    pool.submit(self._write_slot, upload, outcomes, duplicate)
                    for upload, duplicate in self._slots(form)
                ]
                wait(futures)
            for future in futures:
                exc = future.exception()
                if exc is not None:
                    logger.error("Upload worker crashed", exc_info=exc)
        finally:
            # Все обработчики завершились: закрываем очередь ровно один раз
            outcomes.put(_CLOSED)
            collector.join()

        logger.info(
            "Upload finished: %d ok, %d failed", len(result.succeeded), len(result.failed)
        )
        return result

    def _slots(self, form: Mapping[str, Any]):
        """Вернуть пары (содержимое слота, повтор имени) для слотов 1..N.

        Если несколько слотов пишут в один и тот же файл, выигрывает первый
        по номеру, остальные помечаются как повторы.
        """
        claimed = set()
        for idx in range(1, self.slots + 1):
            upload = form.get(slot_name(idx))
            declared = getattr(upload, "filename", None)
            name = safe_filename(declared) if declared else None
            yield upload, name in claimed
            if name is not None:
                claimed.add(name)

    @staticmethod
    def _collect(outcomes: "queue.Queue[Any]", result: UploadResult) -> None:
        while True:
            item = outcomes.get()
            if item is _CLOSED:
                return
            if item.succeeded:
                result.succeeded.append(item.filename)
            else:
                result.failed.append(item.filename)

    def _write_slot(
        self, upload: Any, outcomes: "queue.Queue[Any]", duplicate: bool = False
    ) -> None:
        declared = getattr(upload, "filename", None)
        if not declared:
            return  # слот не заполнен

        name = safe_filename(declared)
        if name is None:
            logger.warning("Rejected upload with unusable filename %r", declared)
            outcomes.put(UploadOutcome(filename=declared, succeeded=False))
            return
        if duplicate:
            logger.warning("Rejected duplicate upload name %r", declared)
            outcomes.put(UploadOutcome(filename=declared, succeeded=False))
            return

        destination = self.upload_root / name
        try:
            source = upload.file
            source.seek(0)
            with open(destination, "wb") as dest:
                shutil.copyfileobj(source, dest, COPY_BUFFER)
        except Exception:
            logger.exception("Failed to save upload %s to %s", declared, destination)
            outcomes.put(UploadOutcome(filename=declared, succeeded=False))
            return
        logger.info("Saved upload %s to %s", declared, destination)
        outcomes.put(UploadOutcome(filename=declared, succeeded=True))
