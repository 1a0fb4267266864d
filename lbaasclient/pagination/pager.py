"""Lazy traversal of multi-page collections.

The pager follows one URL chain strictly in order: a page is fetched,
normalized and handed to the caller before the next URL is even known, so
there is never more than one request in flight. Independent pagers share no
state and can run side by side in separate threads.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterator, List, Optional, Type

import requests

from ..decode import Record
from ..types import Observer
from .body import normalize_response
from .pages import Page

logger = logging.getLogger(__name__)

Fetch = Callable[[str], requests.Response]
PageCallback = Callable[[Page], Any]


class Pager:
    """Walk a paginated collection one page at a time.

    Attributes:
        fetch: Callable issuing a GET for a URL and returning the response;
            it raises ``TransportError`` on failure
        start_url: URL of the first page
        page_cls: Page strategy used to wrap each response

    Examples:
        Visit pages with a callback (return False to stop early):

        >>> pager = pools.list_pools(client)  # doctest: +SKIP
        >>> pager.each_page(lambda page: print(page.extract()) or True)  # doctest: +SKIP

        Iterate over decoded records directly:

        >>> for pool in pools.list_pools(client):  # doctest: +SKIP
        ...     print(pool.id)
    """

    def __init__(
        self,
        fetch: Fetch,
        start_url: str,
        page_cls: Type[Page],
        observer: Optional[Observer] = None,
    ) -> None:
        self.fetch = fetch
        self.start_url = start_url
        self.page_cls = page_cls
        self.observer = observer

    def _notify(self, event: str, **details: Any) -> None:
        if self.observer is not None:
            self.observer(event, details)

    def _fetch_page(self, url: str) -> Page:
        response = self.fetch(url)
        page = self.page_cls(normalize_response(response), url, response.headers)
        logger.debug("Fetched %s page from %s", self.page_cls.__name__, url)
        self._notify("page.fetched", url=url, status_code=response.status_code)
        return page

    def pages(self) -> Iterator[Page]:
        """Yield each non-empty page in server order.

        Traversal ends at the first empty page (even if it still links onward),
        at a page without a next link, or when the generator is abandoned.
        Errors from fetching or decoding propagate after the pages already
        yielded.
        """
        url: Optional[str] = self.start_url
        seen = set()
        while url:
            if url in seen:
                logger.warning("Next link %s was already visited, stopping", url)
                return
            seen.add(url)

            page = self._fetch_page(url)
            if page.is_empty():
                logger.debug("Empty page at %s, stopping", url)
                self._notify("page.empty", url=url)
                return

            yield page

            next_url = page.next_page_url()
            if next_url:
                logger.debug("Following next link %s", next_url)
                self._notify("page.next", url=url, next_url=next_url)
            url = next_url

    def each_page(self, callback: PageCallback) -> None:
        """Call *callback* with every page until it returns a falsy value.

        Any exception raised while fetching, decoding or inside *callback*
        stops the traversal and propagates to the caller.
        """
        for page in self.pages():
            if not callback(page):
                logger.debug("Callback stopped traversal at %s", page.url)
                return

    def records(self) -> Iterator[Record]:
        """Yield decoded records page by page."""
        for page in self.pages():
            yield from page.extract(observer=self.observer)

    def __iter__(self) -> Iterator[Record]:
        return self.records()

    def all_records(self) -> List[Record]:
        """Fetch every page and return all decoded records."""
        return list(self.records())

    def __repr__(self) -> str:
        return f"Pager({self.page_cls.__name__}, start_url={self.start_url!r})"


def each_page(
    start_url: str,
    fetch: Fetch,
    page_cls: Type[Page],
    callback: PageCallback,
    observer: Optional[Observer] = None,
) -> None:
    """Traverse the collection at *start_url*, see :meth:`Pager.each_page`."""
    Pager(fetch, start_url, page_cls, observer=observer).each_page(callback)
