import hashlib
import logging
from types import SimpleNamespace

import pytest

from csvscan.decoding import decode_bytes


class _Matches:
    def __init__(self, encoding):
        self._encoding = encoding

    def best(self):
        if self._encoding is None:
            return None
        return SimpleNamespace(encoding=self._encoding)


@pytest.fixture
def detect_as(monkeypatch):
    def _set(encoding):
        monkeypatch.setattr("csvscan.decoding.from_bytes", lambda raw: _Matches(encoding))

    return _set


def test_decode_utf8_keeps_line_endings():
    raw = "a,é\r\nb\rc\n".encode("utf-8")
    text, report = decode_bytes(raw)

    assert text == "a,é\r\nb\rc\n"
    assert report["decode_fallback"] is False
    assert report["size_bytes"] == len(raw)
    assert report["sha256"] == hashlib.sha256(raw).hexdigest()


def test_decode_utf8_bom_is_dropped():
    text, report = decode_bytes(b"\xef\xbb\xbfx,y")

    assert text == "x,y"
    assert report["decode_used"] == "utf-8-sig"


def test_decode_empty_bytes():
    text, report = decode_bytes(b"")

    assert text == ""
    assert report["size_bytes"] == 0


def test_no_detection_falls_back_to_replacement(detect_as, caplog):
    detect_as(None)

    with caplog.at_level(logging.WARNING, logger="csvscan.decoding"):
        text, report = decode_bytes(b"a,b\xff,c")

    assert text == "a,b\ufffd,c"
    assert report["detected"] is None
    assert report["decode_used"] == "utf-8"
    assert report["decode_fallback"] is True
    assert "Decoding with utf-8 failed" in caplog.text
    assert [r.levelno for r in caplog.records] == [logging.WARNING]


def test_wrong_detection_falls_back_to_utf8(detect_as, caplog):
    detect_as("ascii")

    with caplog.at_level(logging.WARNING, logger="csvscan.decoding"):
        text, report = decode_bytes("é,b".encode("utf-8"))

    assert text == "é,b"
    assert report["detected"] == "ascii"
    assert report["decode_used"] == "utf-8"
    assert report["decode_fallback"] is True
    assert "Decoding with ascii failed, used utf-8 instead" in caplog.text


def test_wrong_detection_and_invalid_utf8_uses_replacement(detect_as, caplog):
    detect_as("ascii")

    with caplog.at_level(logging.WARNING, logger="csvscan.decoding"):
        text, report = decode_bytes(b"x\xff")

    assert text == "x\ufffd"
    assert report["decode_fallback"] is True
    assert "Decoding with ascii failed" in caplog.text


def test_unknown_codec_name_falls_back(detect_as):
    detect_as("no-such-codec")

    text, report = decode_bytes(b"a,b")

    assert text == "a,b"
    assert report["decode_used"] == "utf-8"
    assert report["decode_fallback"] is True


def test_clean_decode_logs_nothing(detect_as, caplog):
    detect_as("utf_8")

    with caplog.at_level(logging.WARNING, logger="csvscan.decoding"):
        _, report = decode_bytes(b"a,b")

    assert report["decode_fallback"] is False
    assert caplog.records == []
