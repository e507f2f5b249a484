"""Date-header detection and resolution of partial dump dates."""

import re
from datetime import date
from typing import NamedTuple

MONTH_ABBREVIATIONS = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)

DATE_HEADER_PATTERN = re.compile(
    rf"^(?P<day>\d{{1,2}}) (?P<month>{'|'.join(MONTH_ABBREVIATIONS)})\b"
    r"(?:\s+(?:(?P<year>\d{4})|(?P<time>\d{1,2}:\d{2}))\b|\s*$)"
)


class ResolvedDate(NamedTuple):
    """Calendar date and whether it had to be guessed."""

    date: date
    estimated: bool


def is_date_header(line: str) -> bool:
    """Return whether a stripped dump line opens a new transaction.

    A bare `<day> <Mon>` only counts when nothing else follows on the line.
    """
    return DATE_HEADER_PATTERN.match(line) is not None


def resolve_date(text: str, today: date | None = None) -> ResolvedDate:
    """Resolve `<day> <Mon>[ <year>|<HH:MM>]` to a calendar date.

    A 4-digit year is used when present; otherwise the current year is assumed.
    Input that cannot be resolved falls back to `today` with `estimated=True`.
    """
    today = today or date.today()
    tokens = text.split()
    try:
        day = int(tokens[0])
        month = MONTH_ABBREVIATIONS.index(tokens[1][:3].title()) + 1
        year = today.year
        if len(tokens) > 2 and re.fullmatch(r"\d{4}", tokens[2]):
            year = int(tokens[2])
        return ResolvedDate(date(year, month, day), False)
    except (IndexError, ValueError):
        return ResolvedDate(today, True)
