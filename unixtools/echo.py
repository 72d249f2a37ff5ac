#!/usr/bin/env python3
"""
Name: echo
Description: echo arguments
License: perl

Prints the command line arguments separated by spaces. A newline is
printed at the end unless the '-n' option is given as the first argument.
"""

import sys

from unixtools import cli


def echo(args: list) -> str:
    """Returns the text echo prints for the given arguments."""
    print_newline = True

    # Manually check if the first argument is '-n'; echo takes no other options.
    if args and args[0] == '-n':
        print_newline = False
        args = args[1:]

    output_string = " ".join(args)
    return output_string + "\n" if print_newline else output_string


def main(argv=None):
    """
    The main entry point for the script. Handles argument parsing and printing.
    """
    args = sys.argv[1:] if argv is None else list(argv)
    out = cli.stdout()
    out.write(echo(args).encode('utf-8', 'surrogateescape'))
    out.flush()
    sys.exit(cli.EX_SUCCESS)


if __name__ == "__main__":
    main()
