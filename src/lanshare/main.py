"""Входная точка LanShare.

Разбирает флаги командной строки, выбирает сетевой интерфейс и запускает
сервер FastAPI на выбранном адресе. Флаги перекрывают значения из
переменных окружения ``LANSHARE_*`` и файла ``.env``.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

import uvicorn

from .config import Settings
from .logger import setup_logging
from .models import AdvertisedEndpoints
from .network import InterfaceSelectionError, enumerate_interfaces, select_interface
from .web_app.server import create_app

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lanshare",
        description="Share a directory over HTTP on the local network.",
        argument_default=argparse.SUPPRESS,
    )
    parser.add_argument("-p", "--port", type=int, help="Listen port (default 8000)")
    parser.add_argument("-d", "--directory", help="File server root path (default .)")
    parser.add_argument(
        "-u", "--upload-directory", dest="upload_directory",
        help="Upload files root path (default .)",
    )
    parser.add_argument(
        "-s", "--suffix", help="Suffix of filename, only matched file will be shown"
    )
    parser.add_argument(
        "-f", "--filename-contains", dest="filename_contains",
        help="Substring of filename, only matched file/dirs will be shown",
    )
    parser.add_argument(
        "-t", "--timeout", dest="select_timeout", type=int,
        help="Select timeout in seconds when more than one NIC is found (default 5)",
    )
    parser.add_argument(
        "-n", "--no-qrcode", dest="no_qrcode", action="store_true",
        help="Only serve files, do not generate and open QR code",
    )
    parser.add_argument(
        "-nd", "--no-dir", dest="no_dir", action="store_true",
        help="Do not show directories, serve only files",
    )
    parser.add_argument(
        "--log-level", dest="log_level",
        help="Logging level (default: config.yml, then INFO)",
    )
    return parser


def load_settings(argv: Sequence[str] | None = None) -> Settings:
    """Собрать настройки: окружение и ``.env``, поверх них — флаги."""
    args = build_parser().parse_args(argv)
    return Settings(**vars(args))


def main(argv: Sequence[str] | None = None) -> None:
    settings = load_settings(argv)
    level = setup_logging(settings.log_level)

    try:
        address = select_interface(enumerate_interfaces(), settings.select_timeout)
    except InterfaceSelectionError as exc:
        logger.error("%s", exc)
        sys.exit(1)

    endpoints = AdvertisedEndpoints.for_host(address, settings.port)
    settings.upload_directory.mkdir(parents=True, exist_ok=True)
    app = create_app(settings, endpoints)

    logger.info("Listen at %s:%s", address, settings.port)
    logger.info("Access files by %s", endpoints.files)
    try:
        uvicorn.run(
            app,
            host=address,
            port=settings.port,
            log_level=level,
        )
    except Exception:
        logger.exception("Не удалось запустить сервер")
        sys.exit(1)


if __name__ == "__main__":
    main()
