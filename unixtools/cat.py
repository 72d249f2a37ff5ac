#!/usr/bin/env python3
"""
Name: cat
Description: concatenate and print files
License: perl
"""

import sys

from unixtools import cli
from unixtools.sources import ReadError, SourceError, open_source

PROGRAM = 'cat'


def number_lines(stream, out, args, count: int) -> int:
    """
    Copies the lines of stream to out, numbering them as args asks.
    Returns the updated line count so numbering runs on across files.
    """
    for line in stream:
        if args.number_lines or (args.number_nonblank and line.strip()):
            count += 1
            out.write(b"%6d\t" % count)
        out.write(line)
    return count


def get_args(argv=None):
    parser = cli.ToolArgumentParser(
        prog=PROGRAM,
        description="Concatenate and print files.",
        usage="%(prog)s [-n | -b] [file ...]"
    )
    # -n and -b cannot be combined.
    number_group = parser.add_mutually_exclusive_group()
    number_group.add_argument('-n', '--number', dest='number_lines', action='store_true',
                              help='Number all output lines.')
    number_group.add_argument('-b', '--number-nonblank', dest='number_nonblank', action='store_true',
                              help='Number non-empty output lines.')
    parser.add_argument('files', nargs='*', help='Files to process. Reads from stdin if none are given.')
    return parser.parse_args(argv)


def run(args, out):
    """Prints every file in turn; files that fail to open or read are skipped."""
    count = 0
    for filename in args.files or ['-']:
        try:
            with open_source(filename) as f:
                count = number_lines(f, out, args, count)
        except ReadError as e:
            cli.warn(e)
        except SourceError as e:
            cli.warn(f"Failed to open {filename}: {e.reason}")


def main(argv=None):
    """Parses arguments and runs the cat logic."""
    args = get_args(argv)
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
