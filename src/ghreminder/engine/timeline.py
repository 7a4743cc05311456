from __future__ import annotations

from datetime import date
from typing import Iterator

from ghreminder.core.models import Issue
from ghreminder.engine.dates import find_dates


def authored_bodies(issue: Issue) -> Iterator[tuple[str, str]]:
    """Yield (author, body) for the issue body followed by each comment in creation order."""
    yield issue.author, issue.body or ""
    for comment in issue.comments:
        yield comment.author, comment.body or ""


def extract(issue: Issue, keyword: str) -> list[date]:
    """Return every date mentioned after keyword, in order of appearance.

    The order is kept as-is so the last element is the most recently mentioned date.
    """
    dates: list[date] = []
    for _author, body in authored_bodies(issue):
        dates.extend(find_dates(body, keyword))
    return dates
