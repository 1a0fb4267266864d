"""Decoding of normalized bodies into record types."""

from .extract import collection_items, decode_record, extract_many, extract_one
from .fields import (
    BOOLEAN,
    INTEGER,
    NUMBER,
    REFERENCE_LIST,
    TEXT,
    TEXT_LIST,
    FieldKind,
    Nested,
    Record,
    wire_field,
)

__all__ = [
    "BOOLEAN",
    "INTEGER",
    "NUMBER",
    "REFERENCE_LIST",
    "TEXT",
    "TEXT_LIST",
    "FieldKind",
    "Nested",
    "Record",
    "wire_field",
    "collection_items",
    "decode_record",
    "extract_many",
    "extract_one",
]
