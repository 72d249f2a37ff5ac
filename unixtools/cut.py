#!/usr/bin/env python3
"""
Name: cut
Description: select portions of each line of a file
License: perl
"""

import csv
import io
import os
import sys

from unixtools import cli
from unixtools.positions import parse_positions, select
from unixtools.sources import SourceError, decode_lossy, open_source, strip_terminator

PROGRAM = 'cut'

# Extraction modes
BYTES = 'bytes'
CHARS = 'chars'
FIELDS = 'fields'


def extract_bytes(line: bytes, positions) -> str:
    """Selects bytes by position and decodes the result lossily."""
    return decode_lossy(bytes(select(line, positions)))


def extract_chars(line: str, positions) -> str:
    """Selects characters by position."""
    return "".join(select(line, positions))


def extract_fields(record: list, positions) -> list:
    """Selects fields of a parsed record by position."""
    return list(select(record, positions))


def cut_fields(line: str, positions, delimiter: str) -> str:
    """
    Rebuilds a delimited line from the selected fields.
    A line without the delimiter is returned unchanged.
    """
    if delimiter not in line:
        return line
    record = next(csv.reader([line], delimiter=delimiter))
    buf = io.StringIO()
    csv.writer(buf, delimiter=delimiter, lineterminator='').writerow(extract_fields(record, positions))
    return buf.getvalue()


def cut_stream(stream, out, args):
    """Processes a whole stream in the selected mode."""
    for line in stream:
        line = strip_terminator(line)
        if args.mode == BYTES:
            text = extract_bytes(line, args.positions)
        elif args.mode == CHARS:
            text = extract_chars(decode_lossy(line), args.positions)
        else:
            text = cut_fields(decode_lossy(line), args.positions, args.delimiter)
        out.write(text.encode('utf-8') + b'\n')


def get_args(argv=None):
    """Parses the command line and validates the list and the delimiter."""
    parser = cli.ToolArgumentParser(
        prog=PROGRAM,
        description="Select portions of each line of a file.",
        usage="%(prog)s [-b list | -c list | -f list] [-d delim] [file ...]"
    )
    # The main modes are mutually exclusive.
    mode_group = parser.add_mutually_exclusive_group(required=True)
    mode_group.add_argument('-b', '--bytes', dest='byte_list', help='The list specifies byte positions.')
    mode_group.add_argument('-c', '--chars', dest='char_list', help='The list specifies character positions.')
    mode_group.add_argument('-f', '--fields', dest='field_list', help='The list specifies fields.')

    parser.add_argument('-d', '--delim', dest='delimiter', default='\t',
                        help="Use DELIM instead of TAB for field delimiter.")
    parser.add_argument('files', nargs='*', help='Files to process. Reads from stdin if none are given.')

    args = parser.parse_args(argv)

    if len(os.fsencode(args.delimiter)) != 1:
        raise ValueError(f'--delim "{args.delimiter}" must be a single byte')

    if args.field_list is not None:
        args.mode, list_str = FIELDS, args.field_list
    elif args.byte_list is not None:
        args.mode, list_str = BYTES, args.byte_list
    else:
        args.mode, list_str = CHARS, args.char_list
    args.positions = parse_positions(list_str)
    return args


def run(args, out):
    """Cuts each file in turn; a file that fails to open, read or parse is skipped."""
    for filename in args.files or ['-']:
        try:
            with open_source(filename) as f:
                cut_stream(f, out, args)
        except SourceError as e:
            cli.warn(e)
        except csv.Error as e:
            cli.warn(f"{filename}: {e}")


def main(argv=None):
    """Parses arguments and dispatches to the correct handler."""
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


if __name__ == "__main__":
    main()
