"""Turn raw HTTP response bodies into normalized values."""

from __future__ import annotations

import json
from typing import Optional

import requests

from ..exceptions import BodyParseError
from ..types import NormalizedBody

JSON_MEDIA_TYPE = "application/json"


def normalize_body(raw: bytes, content_type: Optional[str]) -> NormalizedBody:
    """Parse *raw* as JSON when *content_type* declares it, else pass it through.

    An empty body is never parsed, since services answer ``204`` without one
    even when they keep the JSON content type.

    Raises:
        BodyParseError: If the body claims to be JSON but does not parse.
    """
    if not (content_type or "").lower().startswith(JSON_MEDIA_TYPE):
        return raw
    if not raw.strip():
        return None
    try:
        return json.loads(raw)
    except ValueError as exc:
        raise BodyParseError(len(raw), str(exc)) from exc


def normalize_response(response: requests.Response) -> NormalizedBody:
    """Read *response* once and normalize its body."""
    return normalize_body(response.content, response.headers.get("Content-Type"))
