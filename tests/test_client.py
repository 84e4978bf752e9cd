"""Transport behaviour of :class:`cachet.client.Client`."""

from __future__ import annotations

import json

import pytest

from tests.conftest import BASE_URL, get_test_logger
from tests.helpers import FakeHttpResponse, RecordingSession, connection_error

from cachet.client import TOKEN_HEADER, Client
from cachet.core import single_decoder
from cachet.errors import (
    APIError,
    AuthenticationError,
    CachetError,
    DecodeError,
    NotFoundError,
    TransportError,
)
from cachet.models import MetricGroup
from cachet.settings import CachetSettings

logger = get_test_logger(__name__)
logger.info("Starting tests for client module")


def _client(*responses, **kwargs) -> tuple[Client, RecordingSession]:
    session = RecordingSession(*responses)
    return Client(BASE_URL, session=session, **kwargs), session


def test_token_and_default_headers() -> None:
    """The API token travels in the Cachet header on every request."""
    client, session = _client(FakeHttpResponse({"data": {"id": 1}}), token="abc")
    client.call("GET", "api/v1/metrics/groups/1", decode=single_decoder(MetricGroup))
    sent = session.last
    assert sent.headers[TOKEN_HEADER] == "abc"
    assert sent.headers["Accept"] == "application/json"
    assert sent.headers["Content-Type"] == "application/json"
    assert sent.url == "https://status.example.com/api/v1/metrics/groups/1"
    assert sent.timeout == 10.0


def test_basic_auth_is_set_on_session() -> None:
    client, session = _client(username="admin", password="pw")
    assert session.auth == ("admin", "pw")
    assert TOKEN_HEADER not in session.headers
    assert client.session is session


def test_from_settings_carries_timeout_and_token() -> None:
    session = RecordingSession(FakeHttpResponse(None, 204))
    settings = CachetSettings(base_url="https://status.example.com/", token="tok", timeout_s=3.5)
    client = Client.from_settings(settings, session=session)
    client.call("DELETE", "/api/v1/metrics/1")
    assert session.last.timeout == 3.5
    assert session.last.headers[TOKEN_HEADER] == "tok"
    assert session.last.url == "https://status.example.com/api/v1/metrics/1"


def test_record_bodies_are_serialized_with_payload_rules() -> None:
    client, session = _client(FakeHttpResponse({"data": {"id": 9, "name": "Perf"}}))
    envelope, resp = client.call("POST", "api/v1/metrics/groups", MetricGroup(name="Perf"), single_decoder(MetricGroup))
    assert session.last.body == {"name": "Perf"}
    assert envelope.data.id == 9
    assert resp.status_code == 200
    assert resp.ok


def test_call_without_decoder_ignores_body() -> None:
    client, _ = _client(FakeHttpResponse(None, 204))
    decoded, resp = client.call("DELETE", "api/v1/metrics/groups/1")
    assert decoded is None
    assert resp.status_code == 204


def test_not_found_carries_cachet_detail() -> None:
    payload = {"errors": [{"id": "x", "status": 404, "title": "Not Found", "detail": "Gone for good"}]}
    client, _ = _client(FakeHttpResponse(payload, 404))
    with pytest.raises(NotFoundError) as excinfo:
        client.call("GET", "api/v1/metrics/77", decode=single_decoder(MetricGroup))
    assert excinfo.value.status == 404
    assert excinfo.value.detail == ": Gone for good"
    assert excinfo.value.response.status_code == 404


@pytest.mark.parametrize("status", [401, 403])
def test_auth_failures(status: int) -> None:
    client, _ = _client(FakeHttpResponse({"errors": [{"title": "Unauthorized"}]}, status))
    with pytest.raises(AuthenticationError):
        client.call("POST", "api/v1/metrics", {"name": "x"})


def test_server_error_uses_raw_text_when_not_json() -> None:
    client, _ = _client(FakeHttpResponse(None, 500, text="<html>  boom  </html>"))
    with pytest.raises(APIError) as excinfo:
        client.call("GET", "api/v1/metrics")
    assert type(excinfo.value) is APIError
    assert "boom" in excinfo.value.detail


def test_transport_failure_is_wrapped() -> None:
    client, _ = _client(connection_error())
    with pytest.raises(TransportError) as excinfo:
        client.call("GET", "api/v1/metrics")
    assert excinfo.value.method == "GET"
    assert isinstance(excinfo.value, CachetError)
    assert excinfo.value.__cause__ is not None


@pytest.mark.parametrize(
    "response",
    [
        FakeHttpResponse(None, 200, text="not json"),
        FakeHttpResponse(None, 200, text=""),
        FakeHttpResponse({"data": "nope"}),
    ],
)
def test_decode_failures(response: FakeHttpResponse) -> None:
    client, _ = _client(response)
    with pytest.raises(DecodeError):
        client.call("GET", "api/v1/metrics/groups/1", decode=single_decoder(MetricGroup))


@pytest.mark.parametrize(
    "meta",
    [
        {"pagination": "x"},
        {"pagination": {"links": "x"}},
        {"pagination": {"total": 1e308 * 10}},
    ],
)
def test_malformed_meta_is_a_decode_error(meta) -> None:
    client, _ = _client(FakeHttpResponse(None, 200, text=json.dumps({"meta": meta, "data": []})))
    with pytest.raises(DecodeError):
        client.metric_groups.get_all()


def test_out_of_range_enum_value_is_kept() -> None:
    client, _ = _client(FakeHttpResponse(None, 200, text='{"data": {"id": 1, "visible": 1e400}}'))
    group, _ = client.metric_groups.get(1)
    assert group.id == 1
    assert group.visible == float("inf")


def test_base_url_is_required() -> None:
    with pytest.raises(ValueError):
        Client("")
