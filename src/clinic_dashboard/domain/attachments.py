"""Session attachment records and the input abstraction that produces them."""

import re
from abc import ABC, abstractmethod
from pathlib import PurePath
from typing import Any
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, Field, model_validator

from clinic_dashboard.exceptions import InvalidAttachmentError

DEFAULT_ATTACHMENT_NAME = "archivo"


class Attachment(BaseModel):
    """A file reference stored in a session's `archivosJson`."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(alias="nombre")
    url: str = Field(min_length=1)

    @model_validator(mode="before")
    @classmethod
    def _derive_missing_name(cls, data: Any) -> Any:
        if (
            isinstance(data, dict)
            and not data.get("nombre")
            and not data.get("name")
            and isinstance(data.get("url"), str)
        ):
            return {**data, "nombre": attachment_name_from_url(data["url"])}
        return data


def attachment_name_from_url(url: str) -> str:
    """Derives a display name from the last path segment of a URL or path."""
    path = urlsplit(url).path if "://" in url else url
    return re.split(r"[/\\]", path.strip())[-1] or DEFAULT_ATTACHMENT_NAME


class AttachmentInput(ABC):
    """A user-supplied reference to a session attachment."""

    def __init__(self, raw: str):
        self.raw = raw.strip()

    @abstractmethod
    def validate(self) -> None:
        """
        Checks the reference is usable.

        Raises:
            InvalidAttachmentError: If the reference is not acceptable.
        """

    def to_attachment(self) -> Attachment:
        """Validates the reference and builds the stored attachment record."""
        self.validate()
        return Attachment(name=attachment_name_from_url(self.raw), url=self.raw)


class UrlAttachmentInput(AttachmentInput):
    """An attachment hosted at an http(s) URL."""

    def validate(self) -> None:
        parts = urlsplit(self.raw)
        if parts.scheme not in ("http", "https"):
            raise InvalidAttachmentError(self.raw, "solo se admiten URLs http o https")
        if not parts.netloc:
            raise InvalidAttachmentError(self.raw, "la URL no tiene dominio")
        if any(ch.isspace() for ch in self.raw):
            raise InvalidAttachmentError(self.raw, "la URL contiene espacios")


class FileAttachmentInput(AttachmentInput):
    """An attachment referenced by a file path on shared storage."""

    def validate(self) -> None:
        if not self.raw:
            raise InvalidAttachmentError(self.raw, "la ruta está vacía")
        if self.raw.endswith(("/", "\\")) or not PurePath(self.raw).name:
            raise InvalidAttachmentError(self.raw, "la ruta no apunta a un archivo")


def parse_attachment_input(raw: str) -> AttachmentInput:
    """
    Picks the input type for a raw reference typed by the practitioner.

    Anything with a URL scheme is treated as a URL, everything else as a path.
    """
    if "://" in raw:
        return UrlAttachmentInput(raw)
    return FileAttachmentInput(raw)
