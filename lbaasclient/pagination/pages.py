"""Page strategies.

A page wraps one normalized response body together with the URL it came from
and the response headers. Each strategy answers two questions for the pager:
is this page empty, and where is the next one. Resource modules subclass a
strategy and set ``resource_key`` (the plural wrapper key) and ``record_cls``.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, ClassVar, List, Mapping, Optional, Type
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from requests.structures import CaseInsensitiveDict

from .._core._models import extract_next_url, parse_links
from ..decode import Record, collection_items, extract_many
from ..types import NormalizedBody, Observer

logger = logging.getLogger(__name__)


class Page(ABC):
    """One response's worth of a collection traversal.

    Attributes:
        body: Normalized response body, never mutated after construction
        url: URL the page was fetched from
        headers: Response headers, looked up case-insensitively
    """

    resource_key: ClassVar[str] = ""
    record_cls: ClassVar[Optional[Type[Record]]] = None

    def __init__(
        self,
        body: NormalizedBody,
        url: str,
        headers: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.body = body
        self.url = url
        self.headers = CaseInsensitiveDict(headers or {})

    def items(self) -> List[Any]:
        """Raw entries under ``resource_key``."""
        return collection_items(self.body, self.resource_key)

    def is_empty(self) -> bool:
        """True iff the collection key is absent or holds an empty list.

        Raises:
            MalformedError: If the key holds something other than a list.
        """
        return len(self.items()) == 0

    @abstractmethod
    def next_page_url(self) -> Optional[str]:
        """URL of the following page, or ``None`` when this is the last."""

    def extract(self, observer: Optional[Observer] = None) -> List[Record]:
        """Decode this page's entries into ``record_cls`` instances."""
        if self.record_cls is None:
            raise TypeError(f"{self.__class__.__name__} does not declare record_cls")
        return extract_many(
            self.body, self.resource_key, self.record_cls, observer=observer
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(url={self.url!r})"


class LinkedPage(Page):
    """Pages that embed the next page's URL in a link array.

    The body carries ``"<resource_key>_links": [{"href": ..., "rel": "next"}]``.
    """

    links_key: ClassVar[Optional[str]] = None

    def _links_key(self) -> str:
        return self.links_key or f"{self.resource_key}_links"

    def next_page_url(self) -> Optional[str]:
        if not isinstance(self.body, Mapping):
            return None
        key = self._links_key()
        return extract_next_url(parse_links(self.body.get(key), path=key))


class MarkerPage(Page):
    """Pages addressed by the id of the last item seen.

    The next URL is the current one with ``marker`` set to the last item's id.
    """

    marker_param: ClassVar[str] = "marker"

    def next_page_url(self) -> Optional[str]:
        items = self.items()
        if not items or not isinstance(items[-1], Mapping):
            return None
        marker = items[-1].get("id")
        if not marker:
            return None
        scheme, netloc, path, query, fragment = urlsplit(self.url)
        params = [(k, v) for k, v in parse_qsl(query) if k != self.marker_param]
        params.append((self.marker_param, str(marker)))
        return urlunsplit((scheme, netloc, path, urlencode(params), fragment))


class SinglePage(Page):
    """A collection that is always returned in one response."""

    def next_page_url(self) -> Optional[str]:
        return None
