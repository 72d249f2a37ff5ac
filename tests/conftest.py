"""Shared fixtures for the unixtools tests."""

import errno
import io
import os
import sys

import pytest


@pytest.fixture
def set_stdin(monkeypatch):
    """Replace standard input with the given bytes."""

    def _set(data: bytes) -> None:
        monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(data)))

    return _set


class FailingReader(io.RawIOBase):
    """Raw stream whose every read fails with EIO."""

    def readable(self) -> bool:
        return True

    def readinto(self, buffer):
        raise OSError(errno.EIO, os.strerror(errno.EIO))


@pytest.fixture
def failing_stdin(monkeypatch):
    """Replace standard input with a stream that cannot be read."""
    monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BufferedReader(FailingReader())))


@pytest.fixture
def run_tool():
    """Run a tool module's get_args/run pair and return what it wrote."""

    def _run(module, argv) -> bytes:
        out = io.BytesIO()
        module.run(module.get_args(argv), out)
        return out.getvalue()

    return _run


@pytest.fixture
def write_file(tmp_path):
    """Create a file under tmp_path and return its path as a string."""

    def _write(name: str, data: bytes) -> str:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        return str(path)

    return _write
