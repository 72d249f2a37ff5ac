"""
Name: positions
Description: parse cut-style position lists
License: perl

A list such as "1,3-5,7" names 1-based positions. It is turned into
zero-based half-open ranges straight away: [range(0, 1), range(2, 5),
range(6, 7)]. The ranges keep the order they were given in and may
overlap.
"""

import re

INDEX_RE = re.compile(r'[0-9]+')
RANGE_RE = re.compile(r'([0-9]+)-([0-9]+)')


def parse_index(value: str) -> int:
    """Converts a 1-based position to a 0-based index."""
    if INDEX_RE.fullmatch(value):
        num = int(value)
        if num > 0:
            return num - 1
    raise ValueError(f'illegal list value: "{value}"')


def parse_positions(list_str: str) -> list:
    """
    Parses a comma separated list of positions and N-M ranges.

    Raises ValueError naming the first bad token.
    """
    positions = []
    for part in list_str.split(','):
        try:
            index = parse_index(part)
        except ValueError:
            match = RANGE_RE.fullmatch(part)
            if not match:
                raise
            start = parse_index(match.group(1))
            end = parse_index(match.group(2))
            if start >= end:
                raise ValueError(
                    f"First number in range ({start + 1}) "
                    f"must be lower than second number ({end + 1})"
                )
            positions.append(range(start, end + 1))
        else:
            positions.append(range(index, index + 1))
    return positions


def select(items, positions):
    """Yields items at every index of every range, skipping missing ones."""
    for span in positions:
        for i in span:
            if i < len(items):
                yield items[i]
