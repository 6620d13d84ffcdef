"""
Tests for downloads and thumbnails
"""

import json

import pytest
import requests

from dbxcore.exceptions import DropboxNotFoundError, DropboxTransportError, DropboxUnsupportedMediaError
from dbxcore.operations import DownloadOperations
from tests.conftest import FakeResponse, entry_json


def test_download_streams_body(api, http):
    response = FakeResponse(content=b"file body", headers={"Content-Length": "9"})
    http.return_value = response

    with DownloadOperations(api).download("/Docs/notes.txt") as stream:
        assert stream.length == 9
        assert stream.read() == b"file body"

    assert response.closed
    method, url = http.call_args.args
    assert (method, url) == ("GET", "https://api-content.dropbox.com/1/files/dropbox/Docs/notes.txt")
    assert http.call_args.kwargs["stream"] is True
    assert http.call_args.kwargs["params"] is None


def test_download_revision_and_offset(api, http):
    http.return_value = FakeResponse(206, content=b"tail")

    stream = DownloadOperations(api).download("/notes.txt", rev="abc", offset=100)
    stream.close()

    kwargs = http.call_args.kwargs
    assert kwargs["params"] == {"rev": "abc"}
    assert kwargs["headers"]["Range"] == "bytes=100-"


def test_download_missing_file(api, http):
    response = FakeResponse(404, json_body={"error": "File not found"})
    http.return_value = response

    with pytest.raises(DropboxNotFoundError):
        DownloadOperations(api).download("/missing.txt")
    assert response.closed


def test_download_to_file(api, http, tmp_path):
    dst = tmp_path / "notes.txt"
    dst.write_bytes(b"old content that is longer")
    http.return_value = FakeResponse(content=b"new")

    DownloadOperations(api).download_to_file("/notes.txt", str(dst))

    assert dst.read_bytes() == b"new"


def test_download_to_file_removes_file_when_missing(api, http, tmp_path):
    dst = tmp_path / "notes.txt"
    http.return_value = FakeResponse(404)

    with pytest.raises(DropboxNotFoundError):
        DownloadOperations(api).download_to_file("/notes.txt", str(dst))

    assert not dst.exists()


def test_download_to_file_removes_partial_file(api, http, tmp_path):
    dst = tmp_path / "notes.txt"
    response = FakeResponse(content=b"partial",
                            stream_error=requests.exceptions.ChunkedEncodingError("connection reset"))
    http.return_value = response

    with pytest.raises(DropboxTransportError):
        DownloadOperations(api).download_to_file("/notes.txt", str(dst))

    assert not dst.exists()
    assert response.closed


def test_download_resume_appends(api, http, tmp_path):
    dst = tmp_path / "video.mp4"
    dst.write_bytes(b"abc")
    http.return_value = FakeResponse(206, content=b"def")

    DownloadOperations(api).download_to_file_resume("/video.mp4", str(dst))

    assert dst.read_bytes() == b"abcdef"
    assert http.call_args.kwargs["headers"]["Range"] == "bytes=3-"


def test_download_resume_from_empty_file_sends_no_range(api, http, tmp_path):
    dst = tmp_path / "video.mp4"
    http.return_value = FakeResponse(content=b"all")

    DownloadOperations(api).download_to_file_resume("/video.mp4", str(dst))

    assert dst.read_bytes() == b"all"
    assert http.call_args.kwargs["headers"] == {"Authorization": "Bearer test-token"}


def test_download_resume_keeps_partial_content(api, http, tmp_path):
    dst = tmp_path / "video.mp4"
    dst.write_bytes(b"abc")
    http.return_value = FakeResponse(206, content=b"de",
                                     stream_error=requests.exceptions.ConnectionError("connection reset"))

    with pytest.raises(DropboxTransportError):
        DownloadOperations(api).download_to_file_resume("/video.mp4", str(dst))

    assert dst.read_bytes() == b"abcde"


def test_download_resume_of_complete_file(api, http, tmp_path):
    dst = tmp_path / "video.mp4"
    dst.write_bytes(b"abcdef")
    http.return_value = FakeResponse(416)

    DownloadOperations(api).download_to_file_resume("/video.mp4", str(dst))

    assert dst.read_bytes() == b"abcdef"


@pytest.mark.parametrize("fmt, size", [("gif", ""), ("", "xxl"), ("bmp", "s")])
def test_thumbnail_rejects_unsupported_options(api, http, fmt, size):
    with pytest.raises(DropboxUnsupportedMediaError):
        DownloadOperations(api).thumbnails("/img.jpg", fmt, size)

    http.assert_not_called()


def test_thumbnail_defaults_and_metadata(api, http):
    metadata = json.dumps(entry_json("/img.jpg", mime_type="image/jpeg", thumb_exists=True))
    http.return_value = FakeResponse(content=b"\xff\xd8jpeg", headers={"x-dropbox-metadata": metadata})

    with DownloadOperations(api).thumbnails("/img.jpg") as stream:
        assert stream.entry.thumb_exists
        assert stream.read() == b"\xff\xd8jpeg"

    assert http.call_args.kwargs["params"] == {"format": "jpeg", "size": "s"}
    assert http.call_args.args[1].endswith("/thumbnails/dropbox/img.jpg")


def test_thumbnail_of_unconvertible_file(api, http):
    response = FakeResponse(415, json_body={"error": "cannot convert"})
    http.return_value = response

    with pytest.raises(DropboxUnsupportedMediaError):
        DownloadOperations(api).thumbnails("/doc.pdf", "png", "xl")
    assert response.closed


def test_thumbnails_to_file(api, http, tmp_path):
    dst = tmp_path / "thumb.png"
    metadata = json.dumps(entry_json("/img.png"))
    http.return_value = FakeResponse(content=b"png-bytes", headers={"x-dropbox-metadata": metadata})

    entry = DownloadOperations(api).thumbnails_to_file("/img.png", str(dst), "png", "m")

    assert dst.read_bytes() == b"png-bytes"
    assert entry.path == "/img.png"


def test_thumbnails_to_file_removes_file_on_failure(api, http, tmp_path):
    dst = tmp_path / "thumb.png"
    http.return_value = FakeResponse(404)

    with pytest.raises(DropboxNotFoundError):
        DownloadOperations(api).thumbnails_to_file("/missing.png", str(dst))

    assert not dst.exists()
