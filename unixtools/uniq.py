#!/usr/bin/env python3
"""
Name: uniq
Description: report or filter out repeated lines in a file
License: perl
"""

import sys
import itertools

from unixtools import cli
from unixtools.sources import SourceError, open_source

PROGRAM = 'uniq'


def comparison_key(line: bytes) -> bytes:
    """Adjacent lines are duplicates if they agree up to trailing whitespace."""
    return line.rstrip()


def collapse(stream, out, show_count: bool):
    """Writes the first line of every run of duplicate lines."""
    # itertools.groupby is the perfect tool for processing consecutive identical items.
    for _, group in itertools.groupby(stream, key=comparison_key):
        first_line = next(group)
        count = 1 + sum(1 for _ in group)
        if show_count:
            out.write(b"%4d " % count)
        out.write(first_line)


def get_args(argv=None):
    parser = cli.ToolArgumentParser(
        prog=PROGRAM,
        description="Report or filter out repeated adjacent lines in a file.",
        usage="%(prog)s [-c] [input_file [output_file]]"
    )
    parser.add_argument('-c', '--count', action='store_true', help='Precede each line with its repetition count.')
    parser.add_argument('input_file', nargs='?', default='-', help="Input file (default: stdin).")
    parser.add_argument('output_file', nargs='?', help="Output file (default: stdout).")
    return parser.parse_args(argv)


def run(args, out):
    """Collapses args.input_file into args.output_file, or out if none."""
    with open_source(args.input_file) as input_stream:
        if args.output_file is None:
            collapse(input_stream, out, args.count)
            return
        try:
            output_stream = open(args.output_file, 'wb')
        except OSError as e:
            raise SourceError(args.output_file, e.strerror) from e
        with output_stream:
            collapse(input_stream, output_stream, args.count)


def main(argv=None):
    """Parses arguments and runs the uniq logic."""
    args = get_args(argv)
    out = cli.stdout()
    try:
        run(args, out)
        out.flush()
    except SourceError as e:
        cli.fail(PROGRAM, e)
    except BrokenPipeError:
        sys.exit(cli.EX_FAILURE)
    except OSError as e:
        cli.fail(PROGRAM, f"I/O error: {e.strerror or e}")
    sys.exit(cli.EX_SUCCESS)


if __name__ == "__main__":
    main()
