"""Field kinds and the ``Record`` base class.

A record shape is an ordinary dataclass whose fields are declared with
:func:`wire_field`. The declaration names the key the value travels under on
the wire and the *kind* of the value, which decides both its zero value and
how strictly a wire value is accepted.

Examples:
    >>> @dataclass
    ... class Member(Record):
    ...     id: str = wire_field("id")
    ...     weight: int = wire_field("weight", INTEGER)
    ...     admin_state_up: bool = wire_field("admin_state_up", BOOLEAN)
"""

from __future__ import annotations

import copy
import dataclasses
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Type

from ..exceptions import MalformedError
from ..types import Observer

WIRE_KEY = "wire_key"
KIND = "kind"


class FieldKind:
    """Semantic type of a record field."""

    name = "value"

    def zero(self) -> Any:
        """Value used when the wire omits the field or sends ``null``."""
        return None

    def decode(self, value: Any, path: str, observer: Optional[Observer] = None) -> Any:
        raise NotImplementedError

    def _reject(self, value: Any, path: str) -> MalformedError:
        return MalformedError(
            f"expected {self.name}, got {type(value).__name__}", path=path, value=value
        )

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__.lstrip('_')}>"


class _Text(FieldKind):
    name = "string"

    def zero(self) -> str:
        return ""

    def decode(self, value: Any, path: str, observer: Optional[Observer] = None) -> str:
        if not isinstance(value, str):
            raise self._reject(value, path)
        return value


class _Boolean(FieldKind):
    name = "boolean"

    def zero(self) -> bool:
        return False

    def decode(self, value: Any, path: str, observer: Optional[Observer] = None) -> bool:
        if not isinstance(value, bool):
            raise self._reject(value, path)
        return value


class _Integer(FieldKind):
    name = "integer"

    def zero(self) -> int:
        return 0

    def decode(self, value: Any, path: str, observer: Optional[Observer] = None) -> int:
        # bool is an int subclass but never a valid count or port
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise self._reject(value, path)
        if isinstance(value, float):
            if not value.is_integer():
                raise MalformedError(
                    "fractional value for integer field", path=path, value=value
                )
            return int(value)
        return value


class _Number(FieldKind):
    name = "number"

    def zero(self) -> float:
        return 0.0

    def decode(
        self, value: Any, path: str, observer: Optional[Observer] = None
    ) -> float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise self._reject(value, path)
        return float(value)


class _TextList(FieldKind):
    name = "list of strings"

    def zero(self) -> List[str]:
        return []

    def decode(
        self, value: Any, path: str, observer: Optional[Observer] = None
    ) -> List[str]:
        if not isinstance(value, list):
            raise self._reject(value, path)
        for i, item in enumerate(value):
            if not isinstance(item, str):
                raise MalformedError(
                    "expected string", path=f"{path}[{i}]", value=item
                )
        return list(value)


class _ReferenceList(FieldKind):
    """Cross-reference stubs such as ``[{"id": "..."}, ...]``.

    Stubs are kept as opaque mappings rather than decoded into records, so
    whatever sibling keys the service sends survive untouched. A bare
    identifier string is accepted and wrapped as ``{"id": value}``.
    """

    name = "list of references"

    def zero(self) -> List[Dict[str, Any]]:
        return []

    def decode(
        self, value: Any, path: str, observer: Optional[Observer] = None
    ) -> List[Dict[str, Any]]:
        if not isinstance(value, list):
            raise self._reject(value, path)
        stubs = []
        for i, item in enumerate(value):
            if isinstance(item, Mapping):
                stubs.append(copy.deepcopy(dict(item)))
            elif isinstance(item, str):
                stubs.append({"id": item})
            else:
                raise MalformedError(
                    "expected reference mapping or id", path=f"{path}[{i}]", value=item
                )
        return stubs


class Nested(FieldKind):
    """A sub-object decoded into another record type."""

    name = "object"

    def __init__(self, record_cls: Type["Record"]) -> None:
        self.record_cls = record_cls

    def zero(self) -> "Record":
        return self.record_cls()

    def decode(
        self, value: Any, path: str, observer: Optional[Observer] = None
    ) -> "Record":
        # Import here to avoid circular imports
        from .extract import decode_record

        if not isinstance(value, Mapping):
            raise self._reject(value, path)
        return decode_record(value, self.record_cls, path=path, observer=observer)

    def __repr__(self) -> str:
        return f"<Nested {self.record_cls.__name__}>"


TEXT = _Text()
BOOLEAN = _Boolean()
INTEGER = _Integer()
NUMBER = _Number()
TEXT_LIST = _TextList()
REFERENCE_LIST = _ReferenceList()


def wire_field(wire_key: str, kind: FieldKind = TEXT) -> Any:
    """Declare a record field travelling under *wire_key* with semantic *kind*."""
    return dataclasses.field(
        default_factory=kind.zero, metadata={WIRE_KEY: wire_key, KIND: kind}
    )


@dataclass
class Record:
    """Base class for decoded resources."""

    @classmethod
    def from_wire(
        cls, payload: Mapping[str, Any], observer: Optional[Observer] = None
    ) -> "Record":
        """Decode a single wire mapping into an instance of this record."""
        from .extract import decode_record

        return decode_record(payload, cls, observer=observer)

    def to_dict(self) -> Dict[str, Any]:
        """Return the record as a plain dictionary."""
        return dataclasses.asdict(self)
