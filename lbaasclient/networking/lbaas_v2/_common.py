"""URL and option helpers shared by the LBaaS v2 resource modules."""

from __future__ import annotations

import dataclasses
from typing import Any, Dict, Mapping, Optional
from urllib.parse import urlencode

from ..._core._validators import compact, require_id
from ...client import ServiceClient

ROOT_PATH = ("v2.0", "lbaas")


def root_url(client: ServiceClient, *parts: str) -> str:
    """``<endpoint>/v2.0/lbaas/<parts...>``."""
    return client.service_url(*ROOT_PATH, *parts)


def resource_url(client: ServiceClient, family: str, resource_id: str) -> str:
    return root_url(client, family, require_id(resource_id, f"{family} id"))


def list_url(client: ServiceClient, base: str, opts: Optional[Any] = None) -> str:
    """Append the query string built from list *opts* to *base*."""
    query = to_query(opts) if opts is not None else {}
    return f"{base}?{urlencode(query, doseq=True)}" if query else base


def to_query(opts: Any) -> Dict[str, Any]:
    """Serialize a list options dataclass, skipping unset values."""
    query = {}
    for key, value in compact(dataclasses.asdict(opts)).items():
        query[key] = str(value).lower() if isinstance(value, bool) else value
    return query


def to_body(opts: Any, key: str) -> Dict[str, Mapping[str, Any]]:
    """Wrap the set fields of a create/update options dataclass under *key*."""
    return {key: compact(dataclasses.asdict(opts))}
