from __future__ import annotations

import logging
from datetime import date, datetime, timezone

from ghreminder.core.models import Issue, PostComment
from ghreminder.engine.dates import REMINDER_KEYWORD, find_dates
from ghreminder.engine.timeline import authored_bodies

logger = logging.getLogger("Reminders")


def reminder_text(author: str) -> str:
    return f"hi @{author}, it's reminder day!"


def reminded_dates(issue: Issue, bot_login: str) -> set[date]:
    """Return the UTC days on which the bot already commented on the issue."""
    return {
        comment.created_at.astimezone(timezone.utc).date()
        for comment in issue.comments
        if comment.author == bot_login
    }


def evaluate_reminders(issue: Issue, now: datetime, bot_login: str) -> list[PostComment]:
    """Plan the reminder comments due today for an issue.

    A reminder is due when its date is today's UTC date and the bot has not
    commented on that day yet. Each date is reminded at most once per
    evaluation, addressed to the author of the first body mentioning it.
    """
    today = now.astimezone(timezone.utc).date()
    reminded = reminded_dates(issue, bot_login)
    actions: list[PostComment] = []
    for author, body in authored_bodies(issue):
        for reminder in find_dates(body, REMINDER_KEYWORD):
            if reminder != today:
                continue
            if reminder in reminded:
                logger.debug(
                    "Reminder already posted",
                    extra={"issue_number": issue.number, "date": reminder.isoformat()},
                )
                continue
            reminded.add(reminder)
            actions.append(PostComment(body=reminder_text(author)))
    return actions
