"""
Name: sources
Description: open files or standard input as byte streams
License: perl

A source is either a path or '-', which names standard input. Streams are
always binary: iterating one yields lines with their '\\n' or '\\r\\n'
terminator still attached.
"""

import sys
from contextlib import contextmanager

STDIN = '-'


class SourceError(OSError):
    """A source could not be opened. str() gives 'name: reason'."""

    def __init__(self, name, reason):
        super().__init__(f"{name}: {reason}")
        self.name = name
        self.reason = reason


class ReadError(SourceError):
    """Reading an opened source failed."""


class SourceReader:
    """
    Wraps a binary stream so that failed reads raise ReadError naming the
    source. Iteration yields lines with their terminators.
    """

    def __init__(self, stream, name):
        self.stream = stream
        self.name = name

    @property
    def closed(self) -> bool:
        return self.stream.closed

    def read(self, size=-1) -> bytes:
        try:
            return self.stream.read(size)
        except OSError as e:
            raise ReadError(self.name, e.strerror or e) from e

    def readline(self) -> bytes:
        try:
            return self.stream.readline()
        except OSError as e:
            raise ReadError(self.name, e.strerror or e) from e

    def __iter__(self):
        return iter(self.readline, b'')


@contextmanager
def open_source(name):
    """
    Yields a binary stream for the named source.

    Standard input is left open when the block ends; a named file is
    closed. Read failures surface as ReadError.
    """
    if name == STDIN:
        yield SourceReader(sys.stdin.buffer, name)
        return

    try:
        stream = open(name, 'rb')
    except OSError as e:
        raise SourceError(name, e.strerror or e) from e

    with stream:
        yield SourceReader(stream, name)


def strip_terminator(line: bytes) -> bytes:
    """Removes one trailing '\\r\\n' or '\\n'."""
    if line.endswith(b'\r\n'):
        return line[:-2]
    if line.endswith(b'\n'):
        return line[:-1]
    return line


def decode_lossy(data: bytes) -> str:
    """Decodes UTF-8, replacing malformed sequences with U+FFFD."""
    return data.decode('utf-8', errors='replace')


def to_text(line: bytes) -> str:
    """Decodes a line so that encoding it back gives the same bytes."""
    return line.decode('utf-8', errors='surrogateescape')


def to_bytes(text: str) -> bytes:
    return text.encode('utf-8', errors='surrogateescape')
