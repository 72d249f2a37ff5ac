#!/usr/bin/env python3

"""
Name: fortune
Description: print a random, hopefully interesting, adage
License: gpl

Fortune files are plain text. Each fortune is a block of lines ended by
a line holding a single '%'. Companion '.dat' index files are skipped.
"""

import os
import re
import argparse
import sys
import random
from collections import namedtuple
from pathlib import Path

from unixtools import cli, walker
from unixtools.chacha import ChaChaRng, MASK64
from unixtools.sources import decode_lossy, strip_terminator

PROGRAM = 'fortune'

DELIMITER = '%'
INDEX_SUFFIX = '.dat'

Fortune = namedtuple('Fortune', ['source', 'text'])


class FortuneError(Exception):
    """A fortune source is missing or unreadable."""


def seed_type(value):
    """argparse type for --seed: an unsigned 64-bit integer."""
    message = f'invalid seed "{value}"'
    try:
        seed = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(message) from None
    if not 0 <= seed <= MASK64:
        raise argparse.ArgumentTypeError(message)
    return seed


def find_files(paths) -> list:
    """
    Collects every fortune file under the given files or directories,
    sorted and without duplicates.
    """
    files = set()
    for path in paths:
        try:
            os.stat(path)
        except OSError as e:
            raise FortuneError(f'"{path}": {e.strerror}') from e
        for entry in walker.walk(path):
            if entry.kind == walker.FILE and Path(entry.path).suffix != INDEX_SUFFIX:
                files.add(entry.path)
    return sorted(files)


def read_fortunes(paths) -> list:
    """Parses every file into Fortune records, in file order."""
    fortunes = []
    for path in paths:
        source = os.path.basename(path)
        try:
            with open(path, 'rb') as f:
                buffer = []
                for line in f:
                    line = decode_lossy(strip_terminator(line))
                    if line == DELIMITER:
                        if buffer:
                            fortunes.append(Fortune(source, "\n".join(buffer)))
                            buffer = []
                    else:
                        buffer.append(line)
        except OSError as e:
            raise FortuneError(f"{path}: {e.strerror}") from e
    return fortunes


def pick_fortune(fortunes, seed=None):
    """
    Chooses one fortune's text at random, or returns None if there are none.
    A seed selects through ChaChaRng so the same seed always gives the same
    choice; without one the generator is seeded from the OS.
    """
    if not fortunes:
        return None
    if seed is None:
        rng = random.Random()
    else:
        rng = ChaChaRng.seed_from_u64(seed)
    return rng.choice(fortunes).text


def print_matching_fortunes(fortunes, pattern, out):
    """Prints every fortune matching pattern, naming each new source on stderr."""
    prev_source = None
    for fortune in fortunes:
        if not pattern.search(fortune.text):
            continue
        if fortune.source != prev_source:
            cli.warn(f"({fortune.source})\n{DELIMITER}")
            prev_source = fortune.source
        out.write(f"{fortune.text}\n{DELIMITER}\n".encode('utf-8'))


def get_args(argv=None):
    parser = cli.ToolArgumentParser(
        prog=PROGRAM,
        description="Print a random, hopefully interesting, adage.",
        usage="%(prog)s [-m pattern] [-i] [-s seed] file/dir ..."
    )
    parser.add_argument('sources', nargs='+', help='Fortune files or directories.')
    parser.add_argument('-m', '--pattern', help='Print out all fortunes which match the regular expression pattern.')
    parser.add_argument('-i', '--insensitive', action='store_true', help='Ignore case for -m patterns.')
    parser.add_argument('-s', '--seed', type=seed_type, help='Random seed.')

    args = parser.parse_args(argv)
    args.regex = None
    if args.pattern is not None:
        try:
            args.regex = re.compile(args.pattern, re.IGNORECASE if args.insensitive else 0)
        except re.error:
            raise ValueError(f'Invalid --pattern: "{args.pattern}"') from None
    return args


def run(args, out):
    fortunes = read_fortunes(find_files(args.sources))
    if args.regex is not None:
        print_matching_fortunes(fortunes, args.regex, out)
    else:
        text = pick_fortune(fortunes, args.seed)
        if text is None:
            text = "No fortunes found"
        out.write(f"{text}\n".encode('utf-8'))


def main(argv=None):
    """Main function to parse arguments and run the fortune program."""
    try:
        args = get_args(argv)
    except ValueError as e:
        cli.fail(PROGRAM, e)

    out = cli.stdout()
    try:
        run(args, out)
        out.flush()
    except FortuneError as e:
        cli.fail(PROGRAM, e)
    except BrokenPipeError:
        sys.exit(cli.EX_FAILURE)
    except OSError as e:
        cli.fail(PROGRAM, e.strerror or e)
    sys.exit(cli.EX_SUCCESS)


if __name__ == '__main__':
    main()
