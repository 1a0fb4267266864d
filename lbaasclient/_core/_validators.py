"""Validation helpers used by the resource option classes."""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from ..exceptions import ValidationError


def require_non_empty(mapping: Mapping[str, Any], keys: Sequence[str]) -> None:
    """Raise ``ValidationError`` if any of *keys* are missing or empty in *mapping*."""
    missing = [k for k in keys if mapping.get(k) in (None, "")]
    if missing:
        raise ValidationError(
            f"Missing required parameters: {', '.join(missing)}", field=missing[0]
        )


def require_id(value: Any, name: str = "id") -> str:
    """Return *value* if it is a usable resource identifier."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{name} must be a non-empty string", name, value)
    return value


def compact(mapping: Mapping[str, Any]) -> dict:
    """Drop keys whose value is ``None``."""
    return {k: v for k, v in mapping.items() if v is not None}
