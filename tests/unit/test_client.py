"""Tests for the service client and the retrying request wrapper."""

import pytest
import requests
import responses
from responses import matchers

from lbaasclient import ServiceClient, TransportError, ValidationError
from lbaasclient._core._request import RequestConfig, request

ENDPOINT = "https://network.example.com"
POOLS = f"{ENDPOINT}/v2.0/lbaas/pools"


@pytest.fixture
def retrying_client():
    return ServiceClient(ENDPOINT, token="t", max_retries=2, backoff_factor=0)


class TestServiceClient:
    def test_empty_endpoint_is_rejected(self) -> None:
        with pytest.raises(ValidationError) as excinfo:
            ServiceClient("")

        assert excinfo.value.field == "endpoint"

    def test_service_url_joins_parts(self) -> None:
        client = ServiceClient(f"{ENDPOINT}/")

        assert client.service_url("v2.0", "lbaas", "pools") == POOLS
        assert client.service_url("/v2.0/", "", "lbaas") == f"{ENDPOINT}/v2.0/lbaas"

    def test_extra_headers_are_merged(self) -> None:
        client = ServiceClient(ENDPOINT, headers={"User-Agent": "tests"})

        assert client.headers == {
            "Accept": "application/json",
            "User-Agent": "tests",
        }

    def test_repr_hides_token(self) -> None:
        client = ServiceClient(ENDPOINT, token="secret-token")

        assert "secret-token" not in repr(client)


class TestFromEnviron:
    def test_reads_settings(self) -> None:
        client = ServiceClient.from_environ(
            {
                "LBAAS_ENDPOINT": ENDPOINT,
                "LBAAS_TOKEN": "tok",
                "LBAAS_TIMEOUT": "5",
                "LBAAS_MAX_RETRIES": "0",
            }
        )

        assert client.endpoint == ENDPOINT
        assert client.token == "tok"
        assert client.timeout == 5.0
        assert client.max_retries == 0

    def test_defaults(self) -> None:
        client = ServiceClient.from_environ({"LBAAS_ENDPOINT": ENDPOINT})

        assert client.token is None
        assert client.timeout == 30
        assert client.max_retries == 3

    def test_missing_endpoint(self) -> None:
        with pytest.raises(ValidationError, match="LBAAS_ENDPOINT"):
            ServiceClient.from_environ({})

    def test_bad_number(self) -> None:
        with pytest.raises(ValidationError):
            ServiceClient.from_environ(
                {"LBAAS_ENDPOINT": ENDPOINT, "LBAAS_MAX_RETRIES": "many"}
            )

    def test_process_environment(self, monkeypatch) -> None:
        monkeypatch.setenv("LBAAS_ENDPOINT", ENDPOINT)
        monkeypatch.delenv("LBAAS_TOKEN", raising=False)

        assert ServiceClient.from_environ().endpoint == ENDPOINT


@responses.activate
def test_token_and_accept_headers_are_sent(client):
    responses.add(
        responses.GET,
        POOLS,
        json={"pools": []},
        match=[
            matchers.header_matcher(
                {"X-Auth-Token": "secret-token", "Accept": "application/json"}
            )
        ],
    )

    response = client.get(POOLS)

    assert response.status_code == 200


@responses.activate
def test_no_token_header_without_token():
    responses.add(responses.GET, POOLS, json={"pools": []})

    ServiceClient(ENDPOINT, max_retries=0).get(POOLS)

    assert "X-Auth-Token" not in responses.calls[0].request.headers


@responses.activate
def test_post_sends_json_body(client):
    responses.add(
        responses.POST,
        POOLS,
        json={"pool": {"id": "p1"}},
        status=201,
        match=[matchers.json_params_matcher({"pool": {"protocol": "HTTP"}})],
    )

    response = client.post(POOLS, json={"pool": {"protocol": "HTTP"}})

    assert response.status_code == 201


@pytest.mark.parametrize(
    "method, status",
    [
        ("GET", 204),
        ("POST", 202),
        ("PUT", 201),
        ("PUT", 202),
        ("DELETE", 202),
        ("DELETE", 204),
    ],
)
@responses.activate
def test_default_ok_codes(client, method, status):
    responses.add(method, POOLS, status=status)

    assert client.request(method, POOLS).status_code == status


@pytest.mark.parametrize("method, status", [("POST", 200), ("DELETE", 200)])
@responses.activate
def test_status_outside_ok_codes_fails(client, method, status):
    responses.add(method, POOLS, status=status)

    with pytest.raises(TransportError) as excinfo:
        client.request(method, POOLS)

    assert excinfo.value.status_code == status
    assert excinfo.value.method == method


@responses.activate
def test_not_found_carries_details(client):
    responses.add(
        responses.GET,
        f"{POOLS}/missing",
        json={"NeutronError": {"message": "Pool missing could not be found"}},
        status=404,
    )

    with pytest.raises(TransportError) as excinfo:
        client.get(f"{POOLS}/missing")

    error = excinfo.value
    assert error.status_code == 404
    assert error.url == f"{POOLS}/missing"
    assert "could not be found" in error.body
    assert "404" in str(error)


@responses.activate
def test_explicit_ok_codes_override_defaults(client):
    responses.add(responses.GET, POOLS, status=202)

    assert client.get(POOLS, ok_codes=(202,)).status_code == 202


class TestRetries:
    @responses.activate
    def test_transient_status_is_retried(self, retrying_client) -> None:
        responses.add(responses.GET, POOLS, status=503)
        responses.add(responses.GET, POOLS, json={"pools": []})

        response = retrying_client.get(POOLS)

        assert response.status_code == 200
        assert len(responses.calls) == 2

    @responses.activate
    def test_retries_are_bounded(self, retrying_client) -> None:
        responses.add(responses.GET, POOLS, status=502)

        with pytest.raises(TransportError) as excinfo:
            retrying_client.get(POOLS)

        assert excinfo.value.status_code == 502
        assert len(responses.calls) == 3

    @responses.activate
    def test_post_is_not_retried(self, retrying_client) -> None:
        responses.add(responses.POST, POOLS, status=503)

        with pytest.raises(TransportError):
            retrying_client.post(POOLS, json={})

        assert len(responses.calls) == 1

    @responses.activate
    def test_client_errors_are_not_retried(self, retrying_client) -> None:
        responses.add(responses.GET, POOLS, status=400)

        with pytest.raises(TransportError):
            retrying_client.get(POOLS)

        assert len(responses.calls) == 1

    @responses.activate
    def test_zero_retries(self, client) -> None:
        responses.add(responses.GET, POOLS, status=429)

        with pytest.raises(TransportError):
            client.get(POOLS)

        assert len(responses.calls) == 1

    @responses.activate
    def test_connection_error_is_wrapped(self, retrying_client) -> None:
        responses.add(
            responses.GET, POOLS, body=requests.ConnectionError("refused")
        )

        with pytest.raises(TransportError) as excinfo:
            retrying_client.get(POOLS)

        assert excinfo.value.status_code is None
        assert isinstance(excinfo.value.__cause__, requests.ConnectionError)
        assert len(responses.calls) == 3


@responses.activate
def test_request_without_session():
    responses.add(
        responses.GET,
        POOLS,
        json={"pools": []},
        match=[matchers.query_param_matcher({"limit": "2"})],
    )
    config = RequestConfig(url=POOLS, params={"limit": 2}, max_retries=0)

    response = request(config)

    assert response.json() == {"pools": []}


@responses.activate
def test_request_does_not_mutate_config_headers():
    responses.add(responses.GET, POOLS, json={})
    config = RequestConfig(url=POOLS, headers={"Accept": "application/json"})

    request(config, auth_token="tok")

    assert config.headers == {"Accept": "application/json"}
