"""Guard clauses run before any persistence access."""

from __future__ import annotations

import uuid
from typing import Any, Optional

from services.errors import ValidationError


def _normalize_text(value: Any) -> str:
    return str(value or "").strip()


def is_valid_id(value: Any) -> bool:
    text = _normalize_text(value)
    if not text:
        return False
    try:
        uuid.UUID(text)
    except ValueError:
        return False
    return True


def require_id(value: Any, label: str) -> str:
    """Return the trimmed identifier or raise when it is missing or malformed."""
    if not is_valid_id(value):
        raise ValidationError(f"provide valid {label} id", errors=[{"field": label, "value": value}])
    return _normalize_text(value)


def require_text(value: Any, label: str) -> str:
    """Return the trimmed text or raise when it is missing or blank."""
    text = _normalize_text(value)
    if not text:
        raise ValidationError(f"{label} is required", errors=[{"field": label}])
    return text


def optional_text(value: Any) -> Optional[str]:
    text = _normalize_text(value)
    return text or None


def parse_publish_flag(value: Any) -> bool:
    """Only the literal "true" (any case) publishes; anything else is a draft."""
    if value is None:
        raise ValidationError("Publish status is needed", errors=[{"field": "is_published"}])
    if isinstance(value, bool):
        return value
    return _normalize_text(value).lower() == "true"
