"""Type aliases used throughout lbaasclient."""

from typing import Any, Callable, Dict, List, Mapping, Union

from typing_extensions import TypeAlias

Scalar: TypeAlias = Union[str, int, float, bool, None]
"""A JSON leaf value."""

NormalizedBody: TypeAlias = Union[Dict[str, Any], List[Any], Scalar, bytes]
"""A parsed response body: a JSON tree, or the raw bytes of a non-JSON body."""

Observer: TypeAlias = Callable[[str, Mapping[str, Any]], None]
"""Optional diagnostic hook called with an event name and its details."""

ReferenceStub: TypeAlias = Dict[str, Any]
"""A partial cross-reference to another resource, usually just ``{"id": ...}``."""
