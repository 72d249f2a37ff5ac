"""
Name: cli
Description: argument parsing and diagnostics shared by the tools
License: perl

Every tool builds its parser from ToolArgumentParser so that a usage
error exits with the same status as any other fatal error.
"""

import sys
import argparse
from typing import NoReturn

# Constants
EX_SUCCESS = 0
EX_FAILURE = 1


class ToolArgumentParser(argparse.ArgumentParser):
    """An ArgumentParser that exits with EX_FAILURE on a usage error."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(EX_FAILURE, f"{self.prog}: {message}\n")


def warn(message):
    """Writes a diagnostic line to stderr."""
    print(message, file=sys.stderr)


def fail(program: str, message) -> NoReturn:
    """Reports a fatal error as 'program: message' and exits."""
    warn(f"{program}: {message}")
    sys.exit(EX_FAILURE)


def stdout():
    """Returns the binary stream tools write their output to."""
    return sys.stdout.buffer
