#!/usr/bin/env python3

"""
Name: ls
Description: list file/directory information
License: perl
"""

import os
import sys
import stat
import pwd
import grp
from datetime import datetime

from unixtools import cli

PROGRAM = 'ls'
TIME_FORMAT = '%b %d %y %H:%M'


def format_mode(mode: int) -> str:
    """
    Formats the permission bits into a string such as 'rwxr-xr-x'.
    """
    perms = ['---', '--x', '-w-', '-wx', 'r--', 'r-x', 'rw-', 'rwx']
    return perms[(mode & 0o700) >> 6] + perms[(mode & 0o070) >> 3] + perms[mode & 0o007]


def get_pwuid(uid):
    """Safely get username from uid."""
    try:
        return pwd.getpwuid(uid).pw_name
    except KeyError:
        return str(uid)


def get_grgid(gid):
    """Safely get group name from gid."""
    try:
        return grp.getgrgid(gid).gr_name
    except KeyError:
        return str(gid)


def find_files(paths, show_hidden: bool) -> list:
    """
    Expands the operands: a directory stands for its entries, anything
    else for itself. Paths that cannot be read are reported and skipped.
    """
    results = []
    for path in paths:
        try:
            if not os.path.isdir(path):
                os.stat(path)
                results.append(path)
                continue
            with os.scandir(path) as it:
                names = sorted(entry.name for entry in it)
        except OSError as e:
            cli.warn(f"{path}: {e.strerror}")
            continue
        for name in names:
            if show_hidden or not name.startswith('.'):
                results.append(os.path.join(path, name))
    return results


def format_output(paths) -> list:
    """Builds the aligned rows of a long listing."""
    rows = []
    for path in paths:
        try:
            s = os.stat(path)
        except OSError as e:
            # A dangling symlink found inside a directory.
            cli.warn(f"{path}: {e.strerror}")
            continue
        file_type = 'd' if stat.S_ISDIR(s.st_mode) else '-'
        modified = datetime.fromtimestamp(s.st_mtime).strftime(TIME_FORMAT)
        rows.append([
            file_type + format_mode(s.st_mode),
            str(s.st_nlink),
            get_pwuid(s.st_uid),
            get_grgid(s.st_gid),
            str(s.st_size),
            modified,
            path,
        ])

    if not rows:
        return []

    # Link counts and sizes are right-aligned, everything else left-aligned.
    widths = [max(len(row[i]) for row in rows) for i in range(len(rows[0]))]
    right_aligned = {1, 4}
    lines = []
    for row in rows:
        cells = [cell.rjust(widths[i]) if i in right_aligned else cell.ljust(widths[i])
                 for i, cell in enumerate(row)]
        lines.append(" ".join(cells).rstrip())
    return lines


def get_args(argv=None):
    parser = cli.ToolArgumentParser(
        prog=PROGRAM,
        description="List file/directory information.",
        usage="%(prog)s [-la] [path ...]"
    )
    parser.add_argument('-l', '--long', action='store_true', help='Use long format.')
    parser.add_argument('-a', '--all', dest='show_hidden', action='store_true',
                        help='List all files including dotfiles.')
    parser.add_argument('paths', nargs='*', default=['.'], help='Files and/or directories (default: .).')
    return parser.parse_args(argv)


def run(args, out):
    paths = find_files(args.paths, args.show_hidden)
    lines = format_output(paths) if args.long else paths
    for line in lines:
        out.write(line.encode('utf-8', 'surrogateescape') + b"\n")


def main(argv=None):
    """Main function to process command-line arguments and run the ls command."""
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


if __name__ == '__main__':
    main()
