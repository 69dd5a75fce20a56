from __future__ import annotations

from typing import List, Optional
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, Field

FILE_PATTERN = "/file/"
UPLOAD_PATTERN = "/upload"
INDEX_PATTERN = "/index"
QR_PATTERN = "/qrcode"


class InterfaceCandidate(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    address: str


class ListingFilter(BaseModel):
    """Правила отбора имён в листинге каталога."""

    model_config = ConfigDict(frozen=True)

    suffix: Optional[str] = None
    contains: Optional[str] = None
    show_directories: bool = True

    def matches(self, name: str) -> bool:
        if self.suffix and not name.endswith(self.suffix):
            return False
        if self.contains and self.contains not in name:
            return False
        return True


class DirectoryEntry(BaseModel):
    name: str
    is_dir: bool = False

    @property
    def display_name(self) -> str:
        return f"{self.name}/" if self.is_dir else self.name

    @property
    def href(self) -> str:
        return quote(self.display_name)


class UploadOutcome(BaseModel):
    filename: str
    succeeded: bool


class UploadResult(BaseModel):
    succeeded: List[str] = Field(default_factory=list)
    failed: List[str] = Field(default_factory=list)
    upload_root: str

    @property
    def ok_files(self) -> str:
        return ",".join(self.succeeded)

    @property
    def failed_files(self) -> str:
        return ",".join(self.failed)


class AdvertisedEndpoints(BaseModel):
    """Внешние адреса страниц, построенные от выбранного интерфейса."""

    model_config = ConfigDict(frozen=True)

    base_uri: str

    @classmethod
    def for_host(cls, address: str, port: int) -> "AdvertisedEndpoints":
        return cls(base_uri=f"http://{address}:{port}")

    @property
    def files(self) -> str:
        return self.base_uri + FILE_PATTERN

    @property
    def upload(self) -> str:
        return self.base_uri + UPLOAD_PATTERN

    @property
    def index(self) -> str:
        return self.base_uri + INDEX_PATTERN

    @property
    def qrcode(self) -> str:
        return self.base_uri + QR_PATTERN
