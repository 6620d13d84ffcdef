"""
Shared fixtures for dbxcore tests.

HTTP traffic is intercepted at requests.Session.request; FakeResponse stands
in for requests.Response.
"""

import json
from unittest.mock import MagicMock

import pytest
from requests.structures import CaseInsensitiveDict

from dbxcore.api import DropboxAPI
from dbxcore.models import ClientConfig


class FakeResponse:
    """Minimal requests.Response replacement that records whether it was closed"""

    def __init__(self, status_code=200, json_body=None, content=b"", headers=None, stream_error=None):
        self.status_code = status_code
        if json_body is not None:
            content = json.dumps(json_body).encode()
        self.content = content
        self.headers = CaseInsensitiveDict(headers or {})
        self.stream_error = stream_error
        self.closed = False

    def json(self):
        return json.loads(self.content)

    def iter_content(self, chunk_size=1):
        for start in range(0, len(self.content), chunk_size):
            yield self.content[start:start + chunk_size]
        if self.stream_error is not None:
            raise self.stream_error

    def close(self):
        self.closed = True


def entry_json(path="/file.txt", **overrides):
    """Wire metadata object for a file."""
    data = {
        "bytes": 12,
        "client_mtime": "Sat, 21 Aug 2010 22:31:20 +0000",
        "hash": "",
        "icon": "page_white_text",
        "is_dir": False,
        "mime_type": "text/plain",
        "modified": "Tue, 19 Jul 2011 21:55:38 +0000",
        "path": path,
        "rev": "35e97029684fe",
        "root": "dropbox",
        "size": "12 bytes",
        "thumb_exists": False
    }
    data.update(overrides)
    return data


@pytest.fixture
def config():
    return ClientConfig()


@pytest.fixture
def api(config):
    """DropboxAPI with a token set and its HTTP session mocked out."""
    client = DropboxAPI(config)
    client.credentials.set_access_token("test-token")
    client.credentials.session.request = MagicMock()
    yield client
    client.close()


@pytest.fixture
def http(api):
    """The mocked Session.request of the api fixture."""
    return api.credentials.session.request
