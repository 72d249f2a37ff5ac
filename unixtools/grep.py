#!/usr/bin/env python3
"""
Name: grep
Description: search for regular expressions and print
License: perl
"""

import os
import re
import sys
import stat

from unixtools import cli, walker
from unixtools.sources import STDIN, SourceError, open_source, to_text

PROGRAM = 'grep'


class Operand:
    """A resolved input: either a file to search or an error to report."""

    def __init__(self, filename, error=None):
        self.filename = filename
        self.error = error


def find_files(paths, recursive: bool) -> list:
    """
    Expands the operands into the list of files to search.

    Directories are only descended into when recursive is set. Problems
    become Operands carrying an error message so they can be reported in
    order with the results.
    """
    results = []
    for path in paths:
        if path == STDIN:
            results.append(Operand(path))
            continue
        try:
            mode = os.stat(path).st_mode
        except OSError as e:
            results.append(Operand(path, f"{path}: {e.strerror}"))
            continue

        if stat.S_ISREG(mode):
            results.append(Operand(path))
        elif stat.S_ISDIR(mode):
            if not recursive:
                results.append(Operand(path, f"{path} is a directory"))
                continue
            for entry in walker.walk(path, onerror=lambda e: results.append(
                    Operand(e.filename, f"{e.filename}: {e.strerror}"))):
                if entry.kind == walker.FILE:
                    results.append(Operand(entry.path))
    return results


def find_lines(stream, pattern, invert: bool):
    """Yields the lines of stream that match (or, inverted, do not match)."""
    for line in stream:
        if bool(pattern.search(to_text(line))) ^ invert:
            yield line


def compile_pattern(source: str, insensitive: bool):
    flags = re.IGNORECASE if insensitive else 0
    try:
        return re.compile(source, flags)
    except re.error:
        raise ValueError(f'Invalid pattern: "{source}"') from None


def get_args(argv=None):
    parser = cli.ToolArgumentParser(
        prog=PROGRAM,
        description="Search for regular expressions and print matching lines.",
        usage="%(prog)s [-rcvi] pattern [file ...]"
    )
    parser.add_argument('-r', '--recursive', action='store_true', help='Search directories recursively.')
    parser.add_argument('-c', '--count', action='store_true', help='Print only a count of matching lines.')
    parser.add_argument('-v', '--invert-match', dest='invert', action='store_true',
                        help='Select lines that do not match.')
    parser.add_argument('-i', '--insensitive', action='store_true', help='Case insensitive matching.')
    parser.add_argument('pattern', help='The regular expression to search for.')
    parser.add_argument('files', nargs='*', help='Files to search. Reads from stdin if none are given.')

    args = parser.parse_args(argv)
    args.regex = compile_pattern(args.pattern, args.insensitive)
    return args


def run(args, out):
    """Searches every resolved file; per-file errors go to stderr."""
    operands = find_files(args.files or [STDIN], args.recursive)
    show_names = len(operands) > 1

    def emit(filename, data: bytes):
        if show_names:
            out.write(os.fsencode(filename) + b':')
        out.write(data)

    for operand in operands:
        if operand.error:
            cli.warn(operand.error)
            continue
        try:
            with open_source(operand.filename) as f:
                matches = find_lines(f, args.regex, args.invert)
                if args.count:
                    emit(operand.filename, b"%d\n" % sum(1 for _ in matches))
                else:
                    for line in matches:
                        emit(operand.filename, line)
        except SourceError as e:
            cli.warn(e)


def main(argv=None):
    try:
        args = get_args(argv)
    except ValueError as e:
        cli.fail(PROGRAM, e)

    out = cli.stdout()
    try:
        run(args, out)
        out.flush()
    except BrokenPipeError:
        sys.exit(cli.EX_FAILURE)
    except OSError as e:
        cli.fail(PROGRAM, e.strerror or e)
    sys.exit(cli.EX_SUCCESS)


if __name__ == '__main__':
    main()
