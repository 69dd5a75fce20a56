from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .models import ListingFilter


class Settings(BaseSettings):
    """Configuration settings for the application.

    Values come from ``LANSHARE_*`` environment variables and ``.env``;
    command line flags are applied on top of them in :mod:`lanshare.main`.
    The instance is frozen: nothing is reconfigured while the server runs.
    """

    port: int = 8000
    directory: Path = Path(".")
    upload_directory: Path = Path(".")
    suffix: Optional[str] = None
    filename_contains: Optional[str] = None
    select_timeout: int = 5
    no_qrcode: bool = False
    no_dir: bool = False
    open_browser: bool = True
    log_level: Optional[str] = None

    model_config = SettingsConfigDict(
        env_prefix="LANSHARE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    @field_validator("suffix", "filename_contains", "log_level")
    @classmethod
    def _empty_is_none(cls, value: Optional[str]) -> Optional[str]:
        return value or None

    def listing_filter(self) -> ListingFilter:
        """Собрать фильтр листинга из настроек."""
        return ListingFilter(
            suffix=self.suffix,
            contains=self.filename_contains,
            show_directories=not self.no_dir,
        )


__all__ = ["Settings"]
