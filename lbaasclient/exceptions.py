"""Exceptions raised by lbaasclient.

Every error raised by this package derives from :class:`LbaasError`, so callers
can catch the whole family with a single ``except`` clause while still telling
transport failures apart from shape problems in a response body.
"""

from __future__ import annotations

from typing import Any, Optional


class LbaasError(Exception):
    """Base class for all lbaasclient errors."""


class TransportError(LbaasError):
    """A request failed on the network or returned an unacceptable status.

    Attributes:
        method: HTTP method of the failed request
        url: Target URL of the failed request
        status_code: HTTP status, or ``None`` if no response was received
        body: Response text, empty when there was no response
    """

    def __init__(
        self,
        message: str,
        *,
        method: str = "GET",
        url: str = "",
        status_code: Optional[int] = None,
        body: str = "",
    ) -> None:
        super().__init__(message)
        self.method = method
        self.url = url
        self.status_code = status_code
        self.body = body


class DecodeError(LbaasError, ValueError):
    """A response body does not have the shape a caller asked for."""


class MalformedError(DecodeError):
    """A value in the body has the wrong type or an unusable value.

    Attributes:
        path: Dotted location of the value, e.g. ``pools[0].weight``
        value: The offending wire value
    """

    def __init__(self, message: str, path: str = "", value: Any = None) -> None:
        super().__init__(message)
        self.path = path
        self.value = value

    def __str__(self) -> str:
        if self.path:
            return f"{self.path}: {self.args[0]}"
        return str(self.args[0])


class BodyParseError(MalformedError):
    """A body declared as JSON could not be parsed."""

    def __init__(self, length: int, detail: str) -> None:
        super().__init__(f"cannot parse {length} byte body as JSON: {detail}")
        self.length = length
        self.detail = detail

    def __reduce__(self):
        return (self.__class__, (self.length, self.detail))


class NotFoundError(DecodeError):
    """A required wrapper key is missing from the body."""

    def __init__(self, key: str) -> None:
        super().__init__(f"response body has no {key!r} key")
        self.key = key

    def __reduce__(self):
        return (self.__class__, (self.key,))


class ValidationError(LbaasError, ValueError):
    """Caller supplied options are incomplete or invalid.

    Attributes:
        field: Name of the offending option
        value: The rejected value, if any
    """

    def __init__(self, message: str, field: str = "", value: Any = None) -> None:
        super().__init__(message)
        self.field = field
        self.value = value
