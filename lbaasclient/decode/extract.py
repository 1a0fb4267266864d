"""Project normalized response bodies onto record types.

Bodies wrap the actual payload under a resource key: the singular name for a
single resource (``{"pool": {...}}``) and the plural name for a collection
(``{"pools": [...]}``). These helpers unwrap the envelope and decode each
mapping field by field according to the record's ``wire_field`` declarations.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Any, List, Mapping, Optional, Type, TypeVar

from ..exceptions import MalformedError, NotFoundError
from ..types import NormalizedBody, Observer
from .fields import KIND, WIRE_KEY, Record

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=Record)


def decode_record(
    payload: Any,
    record_cls: Type[R],
    *,
    path: str = "",
    observer: Optional[Observer] = None,
) -> R:
    """Decode one wire mapping into a fresh *record_cls* instance.

    Wire keys without a declared field are ignored. Declared fields that are
    absent or ``null`` on the wire take the zero value of their kind.

    Raises:
        MalformedError: If *payload* is not a mapping or a value does not fit
            its field's kind.
    """
    if not isinstance(payload, Mapping):
        raise MalformedError(
            f"expected object for {record_cls.__name__}",
            path=path,
            value=payload,
        )

    values = {}
    for f in dataclasses.fields(record_cls):
        wire_key = f.metadata.get(WIRE_KEY)
        if wire_key is None or payload.get(wire_key) is None:
            continue
        field_path = f"{path}.{wire_key}" if path else wire_key
        values[f.name] = f.metadata[KIND].decode(
            payload[wire_key], field_path, observer
        )

    record = record_cls(**values)
    if observer is not None:
        observer("record.decoded", {"record": record, "path": path})
    return record


def extract_one(
    body: NormalizedBody,
    key: str,
    record_cls: Type[R],
    *,
    required: bool = True,
    observer: Optional[Observer] = None,
) -> Optional[R]:
    """Decode the single resource wrapped under *key*.

    Parameters:
        body: Normalized response body
        key: Singular wrapper key, e.g. ``"pool"``
        record_cls: Record type to decode into
        required: When False, an absent key yields ``None`` instead of raising

    Raises:
        NotFoundError: If *key* is absent (or ``null``) and *required* is True.
        MalformedError: If the body or the wrapped value has the wrong shape.
    """
    if not isinstance(body, Mapping):
        if body in (None, b"", ""):
            payload = None
        else:
            raise MalformedError("response body is not an object", value=body)
    else:
        payload = body.get(key)

    if payload is None:
        if required:
            raise NotFoundError(key)
        return None
    return decode_record(payload, record_cls, path=key, observer=observer)


def collection_items(body: NormalizedBody, key: str) -> List[Any]:
    """Return the raw list wrapped under *key*, or an empty list if absent.

    Raises:
        MalformedError: If the body is a non-empty non-mapping, or *key* maps
            to something other than a list.
    """
    if not isinstance(body, Mapping):
        if body in (None, b"", ""):
            return []
        raise MalformedError("response body is not an object", value=body)
    items = body.get(key)
    if items is None:
        return []
    if not isinstance(items, list):
        raise MalformedError("expected a list", path=key, value=items)
    return items


def extract_many(
    body: NormalizedBody,
    key: str,
    record_cls: Type[R],
    *,
    observer: Optional[Observer] = None,
) -> List[R]:
    """Decode every resource in the collection wrapped under *key*.

    A body without *key* is a legitimately empty collection.
    """
    items = collection_items(body, key)
    logger.debug("Decoding %d %s from %r", len(items), record_cls.__name__, key)
    return [
        decode_record(item, record_cls, path=f"{key}[{i}]", observer=observer)
        for i, item in enumerate(items)
    ]
