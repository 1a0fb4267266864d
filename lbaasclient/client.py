"""Service client: endpoint, credentials and per-verb request defaults."""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Mapping, Optional, Sequence

import requests

from ._core._request import RequestConfig, request
from .exceptions import ValidationError
from .pagination.body import JSON_MEDIA_TYPE

logger = logging.getLogger(__name__)

DEFAULT_OK_CODES: Dict[str, Sequence[int]] = {
    "GET": (200, 204),
    "POST": (201, 202),
    "PUT": (200, 201, 202),
    "DELETE": (202, 204),
}


class ServiceClient:
    """Send requests to one service endpoint.

    Parameters:
        endpoint: Base URL of the networking service, e.g.
            ``https://network.example.com:9696``
        token: Authentication token sent as ``X-Auth-Token``
        session: ``requests.Session`` to reuse; a new one is created if omitted
        timeout: Per-request timeout in seconds
        max_retries: Extra attempts for transient failures of idempotent calls
        backoff_factor: Multiplier for the exponential retry delay
        headers: Extra headers sent with every request
    """

    def __init__(
        self,
        endpoint: str,
        token: Optional[str] = None,
        *,
        session: Optional[requests.Session] = None,
        timeout: float = 30,
        max_retries: int = 3,
        backoff_factor: float = 0.5,
        headers: Optional[Mapping[str, str]] = None,
    ) -> None:
        if not endpoint:
            raise ValidationError("endpoint must not be empty", "endpoint", endpoint)
        self.endpoint = endpoint.rstrip("/")
        self.token = token
        self.session = session or requests.Session()
        self.timeout = timeout
        self.max_retries = max_retries
        self.backoff_factor = backoff_factor
        self.headers = {"Accept": JSON_MEDIA_TYPE}
        if headers:
            self.headers.update(headers)

    @classmethod
    def from_environ(cls, environ: Optional[Mapping[str, str]] = None) -> "ServiceClient":
        """Build a client from ``LBAAS_*`` environment variables.

        Reads ``LBAAS_ENDPOINT`` (required), ``LBAAS_TOKEN``, ``LBAAS_TIMEOUT``
        and ``LBAAS_MAX_RETRIES``.
        """
        env = os.environ if environ is None else environ
        endpoint = env.get("LBAAS_ENDPOINT", "")
        if not endpoint:
            raise ValidationError(
                "LBAAS_ENDPOINT is not set", field="LBAAS_ENDPOINT"
            )
        try:
            timeout = float(env.get("LBAAS_TIMEOUT", 30))
            max_retries = int(env.get("LBAAS_MAX_RETRIES", 3))
        except ValueError as exc:
            raise ValidationError(f"Invalid numeric setting: {exc}") from exc
        return cls(
            endpoint,
            env.get("LBAAS_TOKEN") or None,
            timeout=timeout,
            max_retries=max_retries,
        )

    def service_url(self, *parts: str) -> str:
        """Join *parts* under the endpoint."""
        segments = [p.strip("/") for p in parts if p and p.strip("/")]
        return "/".join([self.endpoint, *segments])

    def request(
        self,
        method: str,
        url: str,
        *,
        json: Any = None,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
        ok_codes: Optional[Sequence[int]] = None,
    ) -> requests.Response:
        """Send one request; see :func:`lbaasclient._core._request.request`."""
        method = method.upper()
        config = RequestConfig(
            method=method,
            url=url,
            params=dict(params or {}),
            headers={**self.headers, **(headers or {})},
            json=json,
            timeout=self.timeout,
            ok_codes=ok_codes or DEFAULT_OK_CODES.get(method, (200,)),
            max_retries=self.max_retries,
            backoff_factor=self.backoff_factor,
        )
        return request(config, session=self.session, auth_token=self.token)

    def fetch(self, url: str) -> requests.Response:
        """GET one page of a collection."""
        return self.request("GET", url)

    def get(self, url: str, **kwargs: Any) -> requests.Response:
        return self.request("GET", url, **kwargs)

    def post(self, url: str, json: Any, **kwargs: Any) -> requests.Response:
        return self.request("POST", url, json=json, **kwargs)

    def put(self, url: str, json: Any, **kwargs: Any) -> requests.Response:
        return self.request("PUT", url, json=json, **kwargs)

    def delete(self, url: str, **kwargs: Any) -> requests.Response:
        return self.request("DELETE", url, **kwargs)

    def __repr__(self) -> str:
        return f"ServiceClient(endpoint={self.endpoint!r})"
