#!/usr/bin/env python3
"""
Name: head
Description: print the first lines of a file
License: perl
"""

import sys
import argparse
import itertools

from unixtools import cli
from unixtools.sources import SourceError, decode_lossy, open_source

PROGRAM = 'head'
BUFLEN = 4096


def count_type(kind: str):
    """Builds an argparse type accepting non-negative integers."""
    def parse(value):
        try:
            num = int(value)
        except ValueError:
            num = -1
        if num < 0:
            raise argparse.ArgumentTypeError(f"illegal {kind} count -- {value}")
        return num
    return parse


def head_bytes(stream, out, count: int):
    """Writes at most count bytes of stream, decoded lossily."""
    data = bytearray()
    while len(data) < count:
        chunk = stream.read(min(BUFLEN, count - len(data)))
        if not chunk:
            break
        data += chunk
    out.write(decode_lossy(data).encode('utf-8'))


def head_lines(stream, out, count: int):
    """Writes the first count lines of stream, terminators included."""
    # islice accepts stops up to sys.maxsize only.
    for line in itertools.islice(stream, min(count, sys.maxsize)):
        out.write(line)


def get_args(argv=None):
    parser = cli.ToolArgumentParser(
        prog=PROGRAM,
        description="Print the first lines of a file.",
        usage="%(prog)s [-n count | -c bytes] [file ...]"
    )
    count_group = parser.add_mutually_exclusive_group()
    count_group.add_argument(
        '-n', '--lines',
        type=count_type('line'),
        default=10,
        help='The number of lines to print (default: 10).'
    )
    count_group.add_argument(
        '-c', '--bytes',
        type=count_type('byte'),
        help='The number of bytes to print.'
    )
    parser.add_argument(
        'files',
        nargs='*',  # Zero or more file arguments.
        help='Files to process. Reads from stdin if none are given.'
    )
    return parser.parse_args(argv)


def run(args, out):
    files = args.files or ['-']
    is_multi_file = len(files) > 1

    for file_num, filename in enumerate(files):
        try:
            with open_source(filename) as f:
                # Print a header for each file when there are several.
                if is_multi_file:
                    separator = b"\n" if file_num > 0 else b""
                    out.write(separator + f"==> {filename} <==\n".encode('utf-8', 'surrogateescape'))

                if args.bytes is not None:
                    head_bytes(f, out, args.bytes)
                else:
                    head_lines(f, out, args.lines)
        except SourceError as e:
            cli.warn(e)


def main(argv=None):
    """Parses arguments and prints the first N lines of files or stdin."""
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
