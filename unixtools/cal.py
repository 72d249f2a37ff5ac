#!/usr/bin/env python3
"""
Name: cal
Description: displays a calendar
License: gpl

Months are drawn as blocks of eight rows, each 22 columns wide, so that
a year can be printed three months to a band. Dates follow the
proleptic Gregorian calendar.
"""

import re
import sys
from datetime import date

from unixtools import cli

PROGRAM = 'cal'

LINE_WIDTH = 22
MONTH_ROWS = 8
YEAR_WIDTH = 32

MONTH_NAMES = ['January', 'February', 'March', 'April', 'May', 'June',
               'July', 'August', 'September', 'October', 'November', 'December']
DAY_HEADER = "Su Mo Tu We Th Fr Sa  "

# ANSI SGR sequences for reverse video.
REVERSE = "\x1b[7m"
RESET = "\x1b[0m"

# --- Core Date Calculation Functions ---

def is_leap_year(year: int) -> bool:
    return (year % 4 == 0 and year % 100 != 0) or (year % 400 == 0)


def days_in_month(year: int, month: int) -> int:
    """Returns the number of days in a given month for a given year."""
    month_days = [0, 31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31]
    if month == 2 and is_leap_year(year):
        return 29
    return month_days[month]


def day_of_week(year: int, month: int, day: int) -> int:
    """Calculates the day of the week (0=Sun, 1=Mon...)."""
    a = (14 - month) // 12
    y = year - a
    m = month + (12 * a) - 2
    return (day + y + y // 4 - y // 100 + y // 400 + (31 * m) // 12) % 7

# --- Argument Validation ---

def parse_year(year: int) -> int:
    if 1 <= year <= 9999:
        return year
    raise ValueError(f'year "{year}" not in the range 1 through 9999')


def parse_month(month: str) -> int:
    """Accepts a month number or a unique prefix of a month name."""
    if re.fullmatch(r'\+?[0-9]+', month):
        num = int(month)
        if 1 <= num <= 12:
            return num
        raise ValueError(f'month "{num}" not in the range 1 through 12')

    lower = month.lower()
    matches = [i + 1 for i, name in enumerate(MONTH_NAMES) if name.lower().startswith(lower)]
    if len(matches) == 1:
        return matches[0]
    raise ValueError(f'invalid month name "{month}"')

# --- Formatting and Display Functions ---

def format_month(year: int, month: int, print_year: bool, today: date) -> list:
    """Generates the eight rows of a single formatted month."""
    title = MONTH_NAMES[month - 1]
    if print_year:
        title += f" {year}"
    lines = [f"{title:^20}  ", DAY_HEADER]

    # Blank cells for the weekdays before the 1st.
    cells = ["  "] * day_of_week(year, month, 1)
    for day in range(1, days_in_month(year, month) + 1):
        cell = f"{day:>2}"
        if (year, month, day) == (today.year, today.month, today.day):
            cell = f"{REVERSE}{cell}{RESET}"
        cells.append(cell)

    # Each cell is two visible columns; escapes do not count towards the padding.
    for i in range(0, len(cells), 7):
        week = cells[i:i + 7]
        padding = " " * (LINE_WIDTH - 2 - (3 * len(week) - 1))
        lines.append(" ".join(week) + padding + "  ")

    while len(lines) < MONTH_ROWS:
        lines.append(" " * LINE_WIDTH)

    return lines


def format_year(year: int, today: date) -> list:
    """Lays out all twelve months, three to a band."""
    lines = [f"{year:^{YEAR_WIDTH}}"]
    months = [format_month(year, month, False, today) for month in range(1, 13)]
    for band in range(4):
        if band > 0:
            lines.append("")
        row_months = months[band * 3:band * 3 + 3]
        for rows in zip(*row_months):
            lines.append("".join(rows))
    return lines


def get_args(argv=None, today=None):
    """Parses the command line and resolves which month and year to show."""
    parser = cli.ToolArgumentParser(
        prog=PROGRAM,
        description="Displays a calendar.",
        usage="%(prog)s [-m month] [-y] [year]"
    )
    parser.add_argument('year', nargs='?', type=int, help='Year (1-9999).')
    parser.add_argument('-m', dest='month', help='Month name or number (1-12).')
    parser.add_argument('-y', '--year', dest='show_year', action='store_true',
                        help='Show the whole current year.')

    args = parser.parse_args(argv)
    args.today = today or date.today()

    month = parse_month(args.month) if args.month is not None else None
    year = parse_year(args.year) if args.year is not None else None

    if args.show_year:
        month, year = None, args.today.year
    elif month is None and year is None:
        month, year = args.today.month, args.today.year

    args.month = month
    args.year = year if year is not None else args.today.year
    return args


def run(args, out):
    if args.month is not None:
        lines = format_month(args.year, args.month, True, args.today)
    else:
        lines = format_year(args.year, args.today)
    out.write(("\n".join(lines) + "\n").encode('utf-8'))


def main(argv=None):
    """Parses arguments and displays the appropriate calendar."""
    try:
        args = get_args(argv)
    except ValueError as e:
        cli.fail(PROGRAM, e)

    out = cli.stdout()
    try:
        run(args, out)
        out.flush()
    except BrokenPipeError:
        sys.exit(cli.EX_FAILURE)
    sys.exit(cli.EX_SUCCESS)


if __name__ == "__main__":
    main()
