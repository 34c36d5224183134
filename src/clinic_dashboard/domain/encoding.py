"""JSON-in-a-string encoding used by the backend for tags and attachments."""

import json
from typing import Any

from pydantic import ValidationError

from clinic_dashboard.domain.attachments import Attachment
from clinic_dashboard.logging import setup_logging

logger = setup_logging()


def _load_list(raw: str | None, field: str) -> list[Any]:
    if not raw:
        return []
    try:
        value = json.loads(raw)
    except (TypeError, ValueError):
        logger.warning("Malformed stored JSON", extra={"field": field})
        return []
    if not isinstance(value, list):
        logger.warning("Stored JSON is not a list", extra={"field": field})
        return []
    return value


def encode_tags(tags: list[str]) -> str:
    """Encodes a tag list into the `tagsJson` string."""
    return json.dumps(list(tags), ensure_ascii=False)


def decode_tags(tags_json: str | None) -> list[str]:
    """Decodes `tagsJson`, yielding an empty list for anything unusable."""
    return [tag for tag in _load_list(tags_json, "tagsJson") if isinstance(tag, str)]


def encode_attachments(attachments: list[Attachment]) -> str:
    """Encodes attachment records into the `archivosJson` string."""
    return json.dumps(
        [a.model_dump(by_alias=True) for a in attachments], ensure_ascii=False
    )


def decode_attachments(attachments_json: str | None) -> list[Attachment]:
    """Decodes `archivosJson`, skipping records without a usable url."""
    attachments: list[Attachment] = []
    for item in _load_list(attachments_json, "archivosJson"):
        try:
            attachments.append(Attachment.model_validate(item))
        except ValidationError:
            logger.warning("Skipping malformed attachment record")
    return attachments
