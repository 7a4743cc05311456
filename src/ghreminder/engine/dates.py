"""Extraction of literal dates that follow a trigger keyword in free text.

Month names are matched by strptime, which follows the process LC_TIME locale.
The month-name layouts only recognise English names under the default C locale;
a process that switches LC_TIME to another language loses them silently.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Iterator

DEADLINE_KEYWORD = "deadline"
REMINDER_KEYWORD = "reminder"

# Priority order: the first layout that parses wins.
DATE_LAYOUTS = (
    "%Y/%m/%d",  # 2024/01/02
    "%Y-%m-%d",  # 2024-01-02
    "%Y %B %d",  # 2024 January 2
    "%Y %b %d",  # 2024 Jan 2
    "%B %d %Y",  # January 2 2024
    "%b %d %Y",  # Jan 2 2024
    "%B %d, %Y",  # January 2, 2024
    "%b %d, %Y",  # Jan 2, 2024
)


def parse_date(text: str) -> date | None:
    """Parse a date phrase, tolerating surrounding whitespace and colons.

    Returns None when no layout matches the whole phrase.
    """
    candidate = text.strip().strip(":").strip()
    if not candidate:
        return None
    for layout in DATE_LAYOUTS:
        try:
            return datetime.strptime(candidate, layout).date()
        except ValueError:
            continue
    return None


def find_dates(text: str, keyword: str) -> Iterator[date]:
    """Yield the date following each occurrence of keyword on the same line.

    Matching is case-insensitive. Occurrences whose remaining line is not a
    recognised date are skipped.
    """
    if not keyword:
        raise ValueError("keyword must not be empty")
    remaining = text.lower()
    keyword = keyword.lower()
    while True:
        index = remaining.find(keyword)
        if index < 0:
            return
        remaining = remaining[index + len(keyword):]
        line_end = remaining.find("\n")
        if line_end < 0:
            line_end = len(remaining)
        parsed = parse_date(remaining[:line_end])
        if parsed is not None:
            yield parsed
