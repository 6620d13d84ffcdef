"""
Tests for the entry and delta codec in dbxcore.codec
"""

import locale
from datetime import timedelta

import pytest

from dbxcore.codec import (
    decode_delta_entry,
    decode_delta_page,
    decode_entry,
    decode_entry_header,
    encode_delta_entry,
    parse_date
)
from dbxcore.exceptions import DropboxMalformedReplyError
from dbxcore.models import DeltaEntry, Entry
from tests.conftest import entry_json


def test_entry_decodes_wire_names():
    entry = decode_entry(entry_json("/Docs/Report.pdf", rev="1f2e3d", bytes=2048))

    assert entry.path == "/Docs/Report.pdf"
    assert entry.revision == "1f2e3d"
    assert entry.bytes == 2048
    assert entry.contents is None


def test_entry_ignores_unknown_fields():
    entry = decode_entry(entry_json(photo_info={"time_taken": None}))
    assert entry.path == "/file.txt"


def test_entry_with_wrong_types_is_malformed():
    with pytest.raises(DropboxMalformedReplyError):
        decode_entry(entry_json(bytes="many"))


def test_delta_entry_round_trip():
    original = DeltaEntry(path="/docs/report.pdf", entry=decode_entry(entry_json("/Docs/Report.pdf")))

    decoded = decode_delta_entry(encode_delta_entry(original))

    assert decoded == original
    assert decoded.entry.revision == "35e97029684fe"


def test_delta_entry_round_trip_for_deletion():
    original = DeltaEntry(path="/gone.txt", entry=None)

    assert encode_delta_entry(original) == ["/gone.txt", None]
    assert decode_delta_entry(["/gone.txt", None]) == original


def test_delta_entry_with_empty_path_is_deletion():
    decoded = decode_delta_entry(["/gone.txt", {"path": "", "bytes": 0}])

    assert decoded.path == "/gone.txt"
    assert decoded.entry is None


@pytest.mark.parametrize("raw", [
    [],
    ["/only-path"],
    ["/a", entry_json("/a"), "extra"],
    {"path": "/a"},
    "/a",
])
def test_delta_entry_with_wrong_shape_is_malformed(raw):
    with pytest.raises(DropboxMalformedReplyError):
        decode_delta_entry(raw)


def test_delta_entry_with_non_string_path_is_malformed():
    with pytest.raises(DropboxMalformedReplyError):
        decode_delta_entry([42, None])


def test_delta_page_decodes_envelope():
    page = decode_delta_page({
        "reset": True,
        "has_more": False,
        "cursor": "AAE",
        "entries": [
            ["/photos", entry_json("/Photos", is_dir=True)],
            ["/old.txt", None],
        ]
    })

    assert page.reset
    assert not page.has_more
    assert page.cursor == "AAE"
    assert page.entries[0].entry.is_dir
    assert page.entries[1].entry is None


def test_delta_page_rejects_one_bad_element():
    with pytest.raises(DropboxMalformedReplyError):
        decode_delta_page({"cursor": "x", "entries": [["/a", None], ["/b"]]})


def test_delta_page_rejects_non_object():
    with pytest.raises(DropboxMalformedReplyError):
        decode_delta_page([["/a", None]])


def test_entry_header():
    assert decode_entry_header(None) is None
    assert decode_entry_header("") is None

    entry = decode_entry_header('{"path": "/img.jpg", "thumb_exists": true}')
    assert isinstance(entry, Entry)
    assert entry.thumb_exists

    with pytest.raises(DropboxMalformedReplyError):
        decode_entry_header("{broken")


def test_parse_date_keeps_offset():
    parsed = parse_date("Sat, 21 Aug 2010 22:31:20 -0700")

    assert parsed.utcoffset() == timedelta(hours=-7)
    assert (parsed.year, parsed.month, parsed.day, parsed.hour) == (2010, 8, 21, 22)


def test_parse_date_empty_and_invalid():
    assert parse_date("") is None
    with pytest.raises(DropboxMalformedReplyError):
        parse_date("2010-08-21T22:31:20Z")
    with pytest.raises(DropboxMalformedReplyError):
        parse_date("Tue, 19 Jul 2011 21:55:38")


def test_parse_date_ignores_process_locale():
    saved = locale.setlocale(locale.LC_TIME)
    for name in ("de_DE.UTF-8", "fr_FR.UTF-8", "es_ES.UTF-8"):
        try:
            locale.setlocale(locale.LC_TIME, name)
            break
        except locale.Error:
            continue
    else:
        pytest.skip("no non-English locale installed")

    try:
        parsed = parse_date("Tue, 19 Jul 2011 21:55:38 +0000")
    finally:
        locale.setlocale(locale.LC_TIME, saved)

    assert (parsed.year, parsed.month, parsed.day) == (2011, 7, 19)
    assert parsed.utcoffset() == timedelta(0)


def test_entry_date_properties():
    entry = decode_entry(entry_json())

    assert entry.modified_at.utcoffset() == timedelta(0)
    assert entry.client_modified_at.year == 2010
