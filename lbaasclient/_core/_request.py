"""Core HTTP request wrapper used by the service client."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, MutableMapping, Optional, Sequence

import requests
from tenacity import (
    RetryError,
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from ..exceptions import TransportError

log = logging.getLogger(__name__)

RETRYABLE_STATUS = frozenset({429, 502, 503, 504})
IDEMPOTENT_METHODS = frozenset({"GET", "HEAD", "PUT", "DELETE"})


@dataclass
class RequestConfig:
    """Configuration for a single request."""

    method: str = "GET"
    url: str = ""
    params: Mapping[str, Any] = field(default_factory=dict)
    headers: MutableMapping[str, str] = field(default_factory=dict)
    json: Any = None
    timeout: float = 30
    ok_codes: Sequence[int] = (200,)
    max_retries: int = 3
    backoff_factor: float = 0.5


class _RetryableStatus(Exception):
    """Internal signal that a response status merits another attempt."""

    def __init__(self, response: requests.Response) -> None:
        super().__init__(response.status_code)
        self.response = response


def _should_retry(config: RequestConfig, resp: requests.Response) -> bool:
    """Return True for responses that merit a retry."""
    return (
        resp.status_code in RETRYABLE_STATUS
        and resp.status_code not in config.ok_codes
        and config.method.upper() in IDEMPOTENT_METHODS
    )


def _status_error(config: RequestConfig, resp: requests.Response) -> TransportError:
    return TransportError(
        f"{config.method} {config.url} returned {resp.status_code}, "
        f"expected one of {list(config.ok_codes)}",
        method=config.method,
        url=config.url,
        status_code=resp.status_code,
        body=resp.text,
    )


def request(
    config: RequestConfig,
    session: Optional[requests.Session] = None,
    auth_token: Optional[str] = None,
) -> requests.Response:
    """Perform an HTTP request with retry and status checking.

    Args:
        config: Fully populated ``RequestConfig`` instance.
        session: Session to send the request through; plain ``requests`` is used if
            omitted.
        auth_token: Optional token; if supplied it is sent as ``X-Auth-Token``.

    Returns:
        The ``requests.Response`` whose status is one of ``config.ok_codes``.

    Raises:
        TransportError: On network failure or any status outside
            ``config.ok_codes`` once retries are exhausted.
    """
    headers = dict(config.headers)  # copy to avoid mutating caller data
    if auth_token:
        headers["X-Auth-Token"] = auth_token
    method = config.method.upper()
    sender: Any = session or requests

    retryable: tuple = (_RetryableStatus,)
    if method in IDEMPOTENT_METHODS:
        retryable += (requests.ConnectionError, requests.Timeout)

    def _send() -> requests.Response:
        log.debug("%s %s", method, config.url)
        resp = sender.request(
            method=method,
            url=config.url,
            params=config.params or None,
            headers=headers,
            json=config.json,
            timeout=config.timeout,
        )
        if _should_retry(config, resp):
            log.info("Retryable response %s from %s", resp.status_code, config.url)
            raise _RetryableStatus(resp)
        return resp

    retrying = Retrying(
        stop=stop_after_attempt(config.max_retries + 1),
        wait=wait_exponential(multiplier=config.backoff_factor, max=30),
        retry=retry_if_exception_type(retryable),
        before_sleep=lambda state: log.warning(
            "Request to %s failed (attempt %s), retrying",
            config.url,
            state.attempt_number,
        ),
        reraise=True,
    )

    try:
        resp = retrying(_send)
    except _RetryableStatus as exc:
        raise _status_error(config, exc.response) from None
    except (requests.RequestException, RetryError) as exc:
        raise TransportError(
            f"{method} {config.url} failed: {exc}",
            method=method,
            url=config.url,
        ) from exc

    if resp.status_code not in config.ok_codes:
        raise _status_error(config, resp)
    return resp
