"""
Tests for the request executor in dbxcore.api.dropbox_api

Covers authentication, URL building, locale defaulting and error translation.
"""

from unittest.mock import MagicMock

import pytest
import requests

from dbxcore.api import DropboxAPI
from dbxcore.exceptions import (
    DropboxAuthError,
    DropboxBadRequestError,
    DropboxMalformedReplyError,
    DropboxNotFoundError,
    DropboxRequestError,
    DropboxTransportError
)
from dbxcore.models import ClientConfig
from tests.conftest import FakeResponse, entry_json


def test_request_carries_bearer_token_and_default_locale(api, http):
    """Requests without parameters send only the configured locale"""
    http.return_value = FakeResponse(json_body={"display_name": "Jane", "uid": 12345})

    account = api.account_info()

    assert account.display_name == "Jane"
    assert account.uid == 12345
    method, url = http.call_args.args
    kwargs = http.call_args.kwargs
    assert method == "GET"
    assert url == "https://api.dropbox.com/1/account/info"
    assert kwargs["params"] == {"locale": "en"}
    assert kwargs["headers"]["Authorization"] == "Bearer test-token"


def test_locale_follows_config():
    client = DropboxAPI(ClientConfig(locale="fr"))
    client.credentials.set_access_token("t")
    client.credentials.session.request = MagicMock(return_value=FakeResponse(json_body={}))

    client.account_info()

    assert client.credentials.session.request.call_args.kwargs["params"] == {"locale": "fr"}


def test_explicit_params_are_sent_without_locale(api, http):
    http.return_value = FakeResponse(json_body=[])

    api.search("/docs", "report")

    assert "locale" not in http.call_args.kwargs["params"]
    assert http.call_args.kwargs["params"]["query"] == "report"


def test_path_is_percent_encoded(api, http):
    http.return_value = FakeResponse(json_body=entry_json("/My Docs/a b.txt"))

    api.metadata("/My Docs/a b.txt")

    url = http.call_args.args[1]
    assert url == "https://api.dropbox.com/1/metadata/dropbox/My%20Docs/a%20b.txt"


def test_sandbox_root_directory():
    client = DropboxAPI(ClientConfig(root_directory="sandbox"))
    client.credentials.set_access_token("t")
    client.credentials.session.request = MagicMock(return_value=FakeResponse(json_body=entry_json()))

    client.metadata("file.txt")

    assert client.credentials.session.request.call_args.args[1].endswith("/metadata/sandbox/file.txt")


def test_missing_token_fails_before_network(config):
    client = DropboxAPI(config)
    called = []
    client.credentials.session.request = lambda *a, **kw: called.append(a)

    with pytest.raises(DropboxAuthError):
        client.account_info()
    assert called == []


def test_401_raises_auth_error(api, http):
    response = FakeResponse(401, json_body={"error": "invalid token"})
    http.return_value = response

    with pytest.raises(DropboxAuthError):
        api.account_info()
    assert response.closed


def test_404_raises_not_found(api, http):
    response = FakeResponse(404, json_body={"error": "Path not found"})
    http.return_value = response

    with pytest.raises(DropboxNotFoundError):
        api.metadata("/missing")
    assert response.closed


def test_400_string_envelope(api, http):
    http.return_value = FakeResponse(400, json_body={"error": "Invalid cursor"})

    with pytest.raises(DropboxBadRequestError, match="Invalid cursor") as excinfo:
        api.restore("/file.txt", "bad")
    assert excinfo.value.status_code == 400


def test_400_parameter_envelope(api, http):
    http.return_value = FakeResponse(400, json_body={"error": {"rev": "not a valid revision"}})

    with pytest.raises(DropboxBadRequestError, match="rev: not a valid revision"):
        api.restore("/file.txt", "bad")


def test_405_envelope_without_string_reason(api, http):
    http.return_value = FakeResponse(405, json_body={"error": {"method": 42}})

    with pytest.raises(DropboxBadRequestError, match="wrong parameter"):
        api.delete("/file.txt")


def test_400_non_json_body(api, http):
    http.return_value = FakeResponse(400, content=b"<html>bad</html>")

    with pytest.raises(DropboxBadRequestError, match="request error HTTP code 400"):
        api.delete("/file.txt")


def test_other_status_raises_request_error(api, http):
    response = FakeResponse(503, json_body={"error": "try later"})
    http.return_value = response

    with pytest.raises(DropboxRequestError) as excinfo:
        api.account_info()
    assert excinfo.value.status_code == 503
    assert not isinstance(excinfo.value, DropboxBadRequestError)
    assert response.closed


def test_invalid_json_raises_malformed_reply(api, http):
    response = FakeResponse(200, content=b"{not json")
    http.return_value = response

    with pytest.raises(DropboxMalformedReplyError):
        api.account_info()
    assert response.closed


def test_successful_response_is_closed(api, http):
    response = FakeResponse(json_body=entry_json())
    http.return_value = response

    api.metadata("/file.txt")

    assert response.closed


def test_connection_error_raises_transport_error(api, http):
    http.side_effect = requests.exceptions.ConnectionError("refused")

    with pytest.raises(DropboxTransportError):
        api.account_info()


def test_timeout_raises_transport_error(api, http):
    http.side_effect = requests.exceptions.ReadTimeout("slow")

    with pytest.raises(DropboxTransportError, match="timed out"):
        api.account_info()


def test_not_modified_metadata_returns_none(api, http):
    http.return_value = FakeResponse(304)

    assert api.metadata("/folder", list_contents=True, hash="abc123") is None
    assert http.call_args.kwargs["params"]["hash"] == "abc123"
