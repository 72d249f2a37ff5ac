#!/usr/bin/env python3
"""
Name: comm
Description: select or reject lines common to two files
License: public domain
"""

import os
import sys
from contextlib import ExitStack

from unixtools import cli
from unixtools.sources import STDIN, SourceError, open_source, strip_terminator, to_bytes, to_text

PROGRAM = 'comm'


def fold_case(line: bytes) -> bytes:
    """Lowercases a line without disturbing bytes that are not UTF-8."""
    return to_bytes(to_text(line).lower())


def read_keys(stream, insensitive: bool):
    """Yields the lines of stream without terminators, folded if asked."""
    for line in stream:
        line = strip_terminator(line)
        yield fold_case(line) if insensitive else line


def merge(lines1, lines2):
    """
    Walks two sorted line iterators side by side.
    Yields (column, line) pairs, where column is 1, 2 or 3.
    """
    line1 = next(lines1, None)
    line2 = next(lines2, None)

    # This loop continues as long as either file has lines left.
    while line1 is not None or line2 is not None:
        if line2 is None or (line1 is not None and line1 < line2):
            yield 1, line1
            line1 = next(lines1, None)
        elif line1 is None or line1 > line2:
            yield 2, line2
            line2 = next(lines2, None)
        else:
            yield 3, line1
            line1 = next(lines1, None)
            line2 = next(lines2, None)


def format_column(column: int, line: bytes, show_col: list, delimiter: bytes):
    """
    Builds the output record for a line in the given column, or returns
    None if that column is suppressed. Earlier columns that are shown get
    an empty field so later columns stay aligned.
    """
    if not show_col[column]:
        return None
    fields = [b''] * sum(1 for col in range(1, column) if show_col[col])
    fields.append(line)
    return delimiter.join(fields) + b'\n'


def get_args(argv=None):
    parser = cli.ToolArgumentParser(
        prog=PROGRAM,
        description="Select or reject lines common to two sorted files.",
        usage="%(prog)s [-123i] [-d delim] file1 file2"
    )
    parser.add_argument('-1', dest='suppress1', action='store_true', help='Suppress column 1 (lines unique to file1)')
    parser.add_argument('-2', dest='suppress2', action='store_true', help='Suppress column 2 (lines unique to file2)')
    parser.add_argument('-3', dest='suppress3', action='store_true', help='Suppress column 3 (lines common to both files)')
    parser.add_argument('-i', dest='insensitive', action='store_true', help='Case-insensitive comparison of lines')
    parser.add_argument('-d', '--output-delimiter', dest='delimiter', default='\t',
                        help='Output delimiter (default: TAB)')
    parser.add_argument('file1', help='First file to compare, or - for stdin.')
    parser.add_argument('file2', help='Second file to compare, or - for stdin.')
    return parser.parse_args(argv)


def run(args, out):
    """Compares the two files line by line and writes the three columns."""
    if args.file1 == STDIN and args.file2 == STDIN:
        raise ValueError('Both input files cannot be STDIN ("-")')

    # show_col[i] is True if column i should be printed.
    show_col = [None, not args.suppress1, not args.suppress2, not args.suppress3]
    delimiter = os.fsencode(args.delimiter)

    # The 'with' statement ensures files are automatically closed.
    with ExitStack() as stack:
        f1 = stack.enter_context(open_source(args.file1))
        f2 = stack.enter_context(open_source(args.file2))
        lines1 = read_keys(f1, args.insensitive)
        lines2 = read_keys(f2, args.insensitive)

        for column, line in merge(lines1, lines2):
            record = format_column(column, line, show_col, delimiter)
            if record is not None:
                out.write(record)


def main(argv=None):
    """Parses arguments and runs the line comparison logic."""
    args = get_args(argv)
    out = cli.stdout()
    try:
        run(args, out)
        out.flush()
    except ValueError as e:
        cli.fail(PROGRAM, e)
    except SourceError as e:
        cli.fail(PROGRAM, e)
    except BrokenPipeError:
        sys.exit(cli.EX_FAILURE)
    except OSError as e:
        cli.fail(PROGRAM, e.strerror or e)
    sys.exit(cli.EX_SUCCESS)


if __name__ == "__main__":
    main()
