from __future__ import annotations

import base64
import json
import logging

import pytest
import requests
import responses

from tests._constants import MOCK_BASE_URL
from toggl.api import APIResponseParseError
from toggl.api import ContextNotFoundError
from toggl.api import TogglSession


class FakeError(Exception):
    def __init__(self, status_code: int) -> None:
        super().__init__(status_code)
        self.status_code = status_code


def fake_error_decoder(response: requests.Response) -> Exception:
    return FakeError(response.status_code)


@pytest.fixture
def session():
    with TogglSession(MOCK_BASE_URL, ("user", "pass"), fake_error_decoder) as s:
        yield s


def test_url_joins_base_and_path():
    s = TogglSession(MOCK_BASE_URL + "/", ("u", "p"), fake_error_decoder)
    assert s.url("/api/v9/me") == f"{MOCK_BASE_URL}/api/v9/me"
    assert s.url("api/v9/me") == f"{MOCK_BASE_URL}/api/v9/me"


@responses.activate
def test_request_without_timeout_sends_nothing(session):
    with pytest.raises(ContextNotFoundError) as excinfo:
        session.get("/anything", timeout=None)
    assert str(excinfo.value) == "The provided timeout must be non-nil"
    assert len(responses.calls) == 0


@responses.activate
def test_get_sends_auth_headers_and_params(session):
    responses.add(responses.GET, f"{MOCK_BASE_URL}/things", json={"ok": True})

    assert session.get("/things", {"a": "1"}, timeout=5) == {"ok": True}

    request = responses.calls[0].request
    expected_auth = base64.b64encode(b"user:pass").decode()
    assert request.headers["Authorization"] == f"Basic {expected_auth}"
    assert request.headers["Content-Type"] == "application/json"
    assert request.url == f"{MOCK_BASE_URL}/things?a=1"


@responses.activate
def test_post_drops_unset_fields_from_body(session):
    responses.add(responses.POST, f"{MOCK_BASE_URL}/things", json={"id": 1})

    session.post("/things", {"name": "x", "workspace_id": None}, timeout=5)

    assert json.loads(responses.calls[0].request.body) == {"name": "x"}


@responses.activate
def test_decode_is_applied_to_payload(session):
    responses.add(responses.GET, f"{MOCK_BASE_URL}/things", json=[1, 2, 3])

    assert session.get("/things", timeout=5, decode=sum) == 6


@responses.activate
def test_empty_body_decodes_to_none(session):
    responses.add(responses.DELETE, f"{MOCK_BASE_URL}/things/1", status=200)

    assert session.delete("/things/1", timeout=5, decode=sum) is None


@responses.activate
def test_invalid_json_raises_parse_error(session):
    responses.add(responses.GET, f"{MOCK_BASE_URL}/things", body="<html></html>")

    with pytest.raises(APIResponseParseError):
        session.get("/things", timeout=5)


@pytest.mark.parametrize("status", [400, 404, 429, 500, 503])
@responses.activate
def test_non_2xx_raises_decoded_error(session, status):
    responses.add(responses.GET, f"{MOCK_BASE_URL}/things", status=status)

    with pytest.raises(FakeError) as excinfo:
        session.get("/things", timeout=5)
    assert excinfo.value.status_code == status


@responses.activate
def test_transport_errors_propagate(session):
    responses.add(
        responses.GET,
        f"{MOCK_BASE_URL}/things",
        body=requests.ConnectionError("Connection refused"),
    )

    with pytest.raises(requests.ConnectionError):
        session.get("/things", timeout=5)


def test_custom_http_client_is_used():
    http_client = requests.Session()
    s = TogglSession(MOCK_BASE_URL, ("u", "p"), fake_error_decoder, http_client)
    assert s.http_client is http_client


@responses.activate
def test_requests_are_logged(session, caplog):
    responses.add(responses.GET, f"{MOCK_BASE_URL}/things", json={})

    with caplog.at_level(logging.DEBUG, logger="toggl"):
        session.get("/things", timeout=5)

    messages = [(r.name, r.levelno, r.getMessage()) for r in caplog.records]
    assert ("toggl", logging.DEBUG, f"GET {MOCK_BASE_URL}/things") in messages
    assert ("toggl", logging.DEBUG, f"200 OK <- {MOCK_BASE_URL}/things") in messages
    assert not [r for r in caplog.records if r.levelno >= logging.WARNING]


@responses.activate
def test_api_failures_are_logged_as_warnings(session, caplog):
    responses.add(responses.GET, f"{MOCK_BASE_URL}/things", status=404)

    with caplog.at_level(logging.DEBUG, logger="toggl"):
        with pytest.raises(FakeError):
            session.get("/things", timeout=5)

    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert warnings[0].name == "toggl"
    assert warnings[0].getMessage() == f"GET {MOCK_BASE_URL}/things failed: 404"


def test_library_installs_no_handlers():
    assert logging.getLogger("toggl").handlers == []
