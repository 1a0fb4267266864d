"""Pagination package: body normalization, page strategies and the pager."""

from .body import JSON_MEDIA_TYPE, normalize_body, normalize_response
from .pager import Pager, each_page
from .pages import LinkedPage, MarkerPage, Page, SinglePage

__all__ = [
    "JSON_MEDIA_TYPE",
    "normalize_body",
    "normalize_response",
    "Page",
    "LinkedPage",
    "MarkerPage",
    "SinglePage",
    "Pager",
    "each_page",
]
