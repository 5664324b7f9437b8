# transport layer: status threshold, transport errors and json decoding, with a stubbed session

import pytest
import requests
from climaedge.client import DecodeFailure, EdgeFetchError, EdgeHTTPClient, FetchFailure
from conftest import StubResponse, StubSession


def make_client(outcome, timeout=5.0):
    client = EdgeHTTPClient(timeout=timeout)
    session = StubSession(outcome)
    client._local.session = session
    return client, session


def test_get_text_returns_body():
    client, session = make_client(StubResponse(200, "Sunny"))
    assert client.get_text("https://edge.test/paris") == "Sunny"
    assert session.requested == [("https://edge.test/paris", 5.0)]


def test_redirect_range_is_not_an_error():
    client, _ = make_client(StubResponse(304, "cached"))
    assert client.get_text("https://edge.test/paris") == "cached"


@pytest.mark.parametrize("status", [400, 404, 500, 503])
def test_error_status_raises_fetch_failure(status):
    client, _ = make_client(StubResponse(status, "nope"))
    with pytest.raises(FetchFailure) as info:
        client.get_text("https://edge.test/atlantis")
    assert info.value.status_code == status
    assert info.value.url == "https://edge.test/atlantis"


def test_transport_error_is_logged_and_wrapped(caplog):
    client, _ = make_client(requests.ConnectionError("connection refused"))
    with pytest.raises(FetchFailure) as info:
        client.get_text("https://edge.test/paris")
    assert info.value.status_code is None
    assert isinstance(info.value.__cause__, requests.ConnectionError)
    assert "Error fetching https://edge.test/paris" in caplog.text


def test_get_json_decodes():
    client, _ = make_client(StubResponse(200, '{"Advertisement": {"US": "ad-123"}}'))
    assert client.get_json("https://edge.test/ads.json") == {"Advertisement": {"US": "ad-123"}}


def test_get_json_decode_failure_is_distinct():
    client, _ = make_client(StubResponse(200, "<html>"))
    with pytest.raises(DecodeFailure) as info:
        client.get_json("https://edge.test/ads.json")
    assert not isinstance(info.value, FetchFailure)
    assert isinstance(info.value, EdgeFetchError)


def test_session_is_reused_within_a_thread():
    client = EdgeHTTPClient()
    session = client._session()
    assert client._session() is session
    assert session.headers["User-Agent"] == "clima-edge/0.1"


def test_get_json_too_deeply_nested_is_decode_failure():
    client, _ = make_client(StubResponse(200, "[" * 200000 + "]" * 200000))
    with pytest.raises(DecodeFailure):
        client.get_json("https://edge.test/ads.json")
