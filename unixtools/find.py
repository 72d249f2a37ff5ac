#!/usr/bin/env python3
"""
Name: find
Description: search directory trees for entries by name and type
License: perl
"""

import re
import sys
import argparse

from unixtools import cli, walker

PROGRAM = 'find'

# Letters accepted by -t and the entry kinds they select.
TYPE_CODES = {
    'd': walker.DIRECTORY,
    'f': walker.FILE,
    'l': walker.SYMLINK,
}


def regex_type(value):
    try:
        return re.compile(value)
    except re.error:
        raise argparse.ArgumentTypeError(f'invalid regex "{value}"') from None


def matches(entry, kinds, names) -> bool:
    """An entry is selected when it passes both the type and name filters."""
    if kinds and entry.kind not in kinds:
        return False
    if names and not any(name.search(entry.name) for name in names):
        return False
    return True


def find_entries(path, kinds, names):
    """Yields the selected paths below path; unreadable entries are reported."""
    def report(e):
        cli.warn(f"{e.filename}: {e.strerror}")

    for entry in walker.walk(path, onerror=report):
        if matches(entry, kinds, names):
            yield entry.path


def get_args(argv=None):
    parser = cli.ToolArgumentParser(
        prog=PROGRAM,
        description="Search directory trees for entries by name and type.",
        usage="%(prog)s [path ...] [-n regex ...] [-t d|f|l ...]"
    )
    parser.add_argument('paths', nargs='*', default=['.'], help='Starting paths (default: .).')
    parser.add_argument('-n', '--name', dest='names', action='extend', nargs='+', type=regex_type,
                        default=[], help='Select entries whose name matches a regex.')
    parser.add_argument('-t', '--type', dest='types', action='extend', nargs='+', choices=sorted(TYPE_CODES),
                        default=[], help='Select entries of type d (directory), f (file) or l (link).')

    args = parser.parse_args(argv)
    args.kinds = {TYPE_CODES[code] for code in args.types}
    return args


def run(args, out):
    for path in args.paths:
        found = [p.encode('utf-8', 'surrogateescape') for p in find_entries(path, args.kinds, args.names)]
        out.write(b"\n".join(found) + b"\n")


def main(argv=None):
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
