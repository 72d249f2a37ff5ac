"""
Name: walker
Description: depth-first directory traversal
License: perl

walk() yields the starting path followed by everything below it, each
directory's children in name order. Symbolic links below the start are
reported as links and never followed; the start itself is followed so
that walking a link to a directory lists the directory.
"""

import os
import stat
from collections import namedtuple

# Entry kinds
FILE = 'file'
DIRECTORY = 'directory'
SYMLINK = 'symlink'
OTHER = 'other'

Entry = namedtuple('Entry', ['path', 'kind', 'name'])


def kind_of_mode(mode: int) -> str:
    if stat.S_ISLNK(mode):
        return SYMLINK
    if stat.S_ISDIR(mode):
        return DIRECTORY
    if stat.S_ISREG(mode):
        return FILE
    return OTHER


def walk(top, onerror=None):
    """
    Yields an Entry for top and, if it is a directory, for every path
    beneath it.

    When a path cannot be read, onerror is called with the OSError and
    the walk carries on. Errors are ignored if onerror is None.
    """
    try:
        st = os.stat(top)
    except OSError as e:
        if onerror is not None:
            onerror(e)
        return

    name = os.path.basename(os.path.normpath(top))
    kind = kind_of_mode(st.st_mode)
    yield Entry(top, kind, name)
    if kind == DIRECTORY:
        yield from _walk_dir(top, onerror)


def _walk_dir(path, onerror):
    try:
        with os.scandir(path) as it:
            children = sorted(it, key=lambda entry: entry.name)
    except OSError as e:
        if onerror is not None:
            onerror(e)
        return

    for child in children:
        try:
            kind = kind_of_mode(child.stat(follow_symlinks=False).st_mode)
        except OSError as e:
            if onerror is not None:
                onerror(e)
            continue
        yield Entry(child.path, kind, child.name)
        if kind == DIRECTORY:
            yield from _walk_dir(child.path, onerror)
