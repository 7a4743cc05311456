from __future__ import annotations

from datetime import datetime, timezone

from ghreminder.core.models import Comment, Issue, Repository

REPO = Repository(owner="octo", name="project")
BOT = "deadline-reminder[bot]"


def dt(year: int, month: int, day: int, hour: int = 0) -> datetime:
    return datetime(year, month, day, hour, tzinfo=timezone.utc)


def make_issue(
    body: str = "",
    comments: list[tuple[str, str, datetime]] | None = None,
    author: str = "alice",
    state: str = "open",
    number: int = 1,
) -> Issue:
    return Issue(
        repository=REPO,
        number=number,
        title="Ship it",
        body=body,
        author=author,
        state=state,
        comments=tuple(
            Comment(author=who, body=text, created_at=when)
            for who, text, when in comments or []
        ),
    )
