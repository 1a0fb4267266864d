"""Envelopes for single-resource operations.

Create, get and update calls return a :class:`DataResult` that can be decoded
into a record; delete calls return a :class:`DeleteResult` that only tells
whether the call failed. A failed call never raises on its own: the error is
kept on the result and re-raised when the caller asks for the data.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, ClassVar, Mapping, Optional, Type

import requests
from requests.structures import CaseInsensitiveDict

from .decode import Record, extract_one
from .exceptions import LbaasError, TransportError
from .pagination.body import normalize_response
from .types import NormalizedBody, Observer

logger = logging.getLogger(__name__)


class Result:
    """Outcome of a non-paginated call.

    Attributes:
        headers: Response headers, looked up case-insensitively
        error: The failure, if any
    """

    def __init__(
        self,
        headers: Optional[Mapping[str, str]] = None,
        error: Optional[LbaasError] = None,
    ) -> None:
        self.headers = CaseInsensitiveDict(headers or {})
        self.error = error

    @classmethod
    def capture(cls, call: Callable[[], requests.Response]) -> "Result":
        """Run a transport *call* and wrap its outcome.

        ``TransportError`` is stored on the result instead of being raised.
        """
        try:
            response = call()
        except TransportError as exc:
            logger.debug("Captured transport failure: %s", exc)
            return cls(error=exc)
        return cls._from_response(response)

    @classmethod
    def _from_response(cls, response: requests.Response) -> "Result":
        return cls(headers=response.headers)

    @property
    def ok(self) -> bool:
        return self.error is None

    def raise_for_error(self) -> None:
        """Re-raise the stored failure, if there is one."""
        if self.error is not None:
            raise self.error

    def __repr__(self) -> str:
        state = "ok" if self.ok else f"error={self.error!r}"
        return f"{self.__class__.__name__}({state})"


class DataResult(Result):
    """Result of a call that returns a resource.

    Attributes:
        body: Normalized response body, ``None`` when the call failed
    """

    resource_key: ClassVar[str] = ""
    record_cls: ClassVar[Optional[Type[Record]]] = None

    def __init__(
        self,
        body: NormalizedBody = None,
        headers: Optional[Mapping[str, str]] = None,
        error: Optional[LbaasError] = None,
    ) -> None:
        super().__init__(headers=headers, error=error)
        self.body = body

    @classmethod
    def _from_response(cls, response: requests.Response) -> "DataResult":
        # an unparsable body means the service answered with something unusable
        try:
            body = normalize_response(response)
        except LbaasError as exc:
            return cls(headers=response.headers, error=exc)
        return cls(body=body, headers=response.headers)

    def extract(
        self,
        record_cls: Optional[Type[Record]] = None,
        key: Optional[str] = None,
        observer: Optional[Observer] = None,
    ) -> Any:
        """Decode the wrapped resource.

        Parameters:
            record_cls: Record type, defaults to the class's ``record_cls``
            key: Singular wrapper key, defaults to the class's ``resource_key``

        Raises:
            LbaasError: The stored failure, unchanged, if the call failed.
            NotFoundError: If the body has no resource under *key*.
        """
        self.raise_for_error()
        record_cls = record_cls or self.record_cls
        key = key or self.resource_key
        if record_cls is None or not key:
            raise TypeError(f"{self.__class__.__name__} needs a record type and key")
        return extract_one(self.body, key, record_cls, observer=observer)


class DeleteResult(Result):
    """Result of a delete call; only the failure and headers are exposed."""
