from __future__ import annotations

import logging
from datetime import date, datetime, time, timezone
from typing import Sequence

from ghreminder.core.models import Action, AddLabel, Issue, Label, RemoveLabel
from ghreminder.engine.dates import DEADLINE_KEYWORD
from ghreminder.engine.labels import select_label
from ghreminder.engine.reminders import evaluate_reminders
from ghreminder.engine.timeline import extract

logger = logging.getLogger("IssueUpdater")

SECONDS_PER_DAY = 24 * 60 * 60


def days_until(deadline: date, now: datetime) -> float:
    """Return the fractional number of days from now until UTC midnight of deadline."""
    deadline_at = datetime.combine(deadline, time.min, tzinfo=timezone.utc)
    return (deadline_at - now).total_seconds() / SECONDS_PER_DAY


def plan_issue_actions(
    issue: Issue,
    labels: Sequence[Label],
    now: datetime,
    bot_login: str,
) -> list[Action]:
    """Compute reminder comments and label changes for one issue snapshot.

    Closed issues get no actions. Without any deadline mention labels are left
    untouched; otherwise the last mentioned deadline decides the label.
    """
    if not issue.is_open:
        return []

    actions: list[Action] = list(evaluate_reminders(issue, now, bot_login))

    deadlines = extract(issue, DEADLINE_KEYWORD)
    if not deadlines:
        return actions

    deadline = deadlines[-1]
    days = days_until(deadline, now)
    selection = select_label(labels, days)
    logger.debug(
        "Deadline found",
        extra={
            "repo": issue.repository.full_name,
            "issue_number": issue.number,
            "deadline": deadline.isoformat(),
            "days": round(days, 2),
            "label": selection.keep.name if selection.keep else None,
        },
    )
    actions.extend(RemoveLabel(name=label.name) for label in selection.remove)
    if selection.keep is not None:
        actions.append(AddLabel(name=selection.keep.name))
    return actions
