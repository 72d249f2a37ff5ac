#!/usr/bin/env python3
"""
Name: unixtools
Description: a program launcher for the unixtools commands
License: artistic2
"""

import sys
import argparse
import importlib

from unixtools import TOOLS, __version__, cli


def main(argv=None):
    """Parses arguments and launches the specified tool."""
    parser = cli.ToolArgumentParser(
        prog='unixtools',
        description="A program launcher for unixtools.",
        usage="%(prog)s [-l | --list] [-V | --version] [-h | --help] tool [arg ...]"
    )
    parser.add_argument(
        '-V', '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )
    parser.add_argument(
        '-l', '--list',
        action='store_true',
        help='list available tools'
    )
    # This collects the tool name and all subsequent arguments.
    parser.add_argument(
        'command',
        nargs=argparse.REMAINDER,
        help='The tool to run followed by its arguments.'
    )

    args = parser.parse_args(argv)

    # If --list is used, print tools and exit.
    if args.list:
        print("\n".join(sorted(TOOLS)))
        sys.exit(cli.EX_SUCCESS)

    # If no tool is specified, show the help message.
    if not args.command:
        parser.print_help()
        sys.exit(cli.EX_FAILURE)

    tool, tool_args = args.command[0], args.command[1:]

    # Validate that the requested tool is in our list.
    if tool not in TOOLS:
        cli.fail('unixtools', f"'{tool}' is not a unixtools command")

    module = importlib.import_module(f"unixtools.{tool}")
    module.main(tool_args)


if __name__ == "__main__":
    main()
