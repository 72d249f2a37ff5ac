"""Tests for opening sources and handling line terminators."""

import pytest

from unixtools.sources import (
    ReadError,
    SourceError,
    decode_lossy,
    open_source,
    strip_terminator,
    to_bytes,
    to_text,
)


class TestOpenSource:
    def test_reads_named_file_with_terminators(self, write_file) -> None:
        path = write_file("crlf.txt", b"one\r\ntwo\nthree")
        with open_source(path) as f:
            assert list(f) == [b"one\r\n", b"two\n", b"three"]

    def test_closes_named_file(self, write_file) -> None:
        path = write_file("a.txt", b"a\n")
        with open_source(path) as f:
            pass
        assert f.closed

    def test_dash_is_stdin_and_left_open(self, set_stdin) -> None:
        set_stdin(b"from stdin\n")
        with open_source("-") as f:
            assert f.read() == b"from stdin\n"
        assert not f.closed

    def test_missing_file_names_the_source(self, tmp_path) -> None:
        missing = str(tmp_path / "nope.txt")
        with pytest.raises(SourceError) as excinfo:
            with open_source(missing):
                pass
        assert str(excinfo.value) == f"{missing}: No such file or directory"
        assert excinfo.value.name == missing
        assert excinfo.value.reason == "No such file or directory"

    def test_read_failure_names_the_source(self, failing_stdin) -> None:
        with pytest.raises(ReadError) as excinfo:
            with open_source("-") as f:
                list(f)
        assert str(excinfo.value) == "-: Input/output error"
        assert isinstance(excinfo.value, SourceError)


class TestLineHelpers:
    @pytest.mark.parametrize(
        "line, expected",
        [
            (b"abc\n", b"abc"),
            (b"abc\r\n", b"abc"),
            (b"abc", b"abc"),
            (b"\n", b""),
            (b"abc\n\n", b"abc\n"),
        ],
    )
    def test_strip_terminator(self, line, expected) -> None:
        assert strip_terminator(line) == expected

    def test_decode_lossy_replaces_bad_bytes(self) -> None:
        assert decode_lossy(b"a\xffb") == "a�b"

    def test_text_round_trip_keeps_bad_bytes(self) -> None:
        assert to_bytes(to_text(b"a\xffb")) == b"a\xffb"
