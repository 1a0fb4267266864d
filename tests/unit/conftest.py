"""Pytest configuration and shared fixtures for unit tests."""

import json

import pytest
import requests
from fixtures import load_body_fixture

from lbaasclient import ServiceClient

ENDPOINT = "https://network.example.com"


def build_response(
    body=None,
    *,
    url: str = f"{ENDPOINT}/v2.0/lbaas/pools",
    status: int = 200,
    content_type: str = "application/json",
    raw: bytes = None,
) -> requests.Response:
    """Build a ``requests.Response`` without touching the network."""
    response = requests.Response()
    response.status_code = status
    response.url = url
    if raw is None:
        raw = json.dumps(body).encode("utf-8") if body is not None else b""
    response._content = raw
    if content_type:
        response.headers["Content-Type"] = content_type
    return response


def page_body(resource: str, items, next_url: str = None) -> dict:
    """Build a linked collection body for *resource*."""
    links = [{"href": next_url, "rel": "next"}] if next_url else []
    return {resource: list(items), f"{resource}_links": links}


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def make_response():
    """Factory fixture for offline ``requests.Response`` objects."""
    return build_response


@pytest.fixture
def make_page_body():
    """Factory fixture for linked collection bodies."""
    return page_body


@pytest.fixture
def load_body():
    """Return the loader for JSON body fixtures."""
    return load_body_fixture


@pytest.fixture
def client():
    """Service client with retries disabled so failures surface immediately."""
    return ServiceClient(ENDPOINT, token="secret-token", max_retries=0)


@pytest.fixture
def endpoint():
    return ENDPOINT
