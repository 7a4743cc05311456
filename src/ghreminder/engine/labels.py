from __future__ import annotations

import logging
from typing import Iterable, Sequence

from ghreminder.core.models import Label, LabelSelection

logger = logging.getLogger("Labels")

DEFAULT_LABEL_PREFIX = "deadline < "


def parse_threshold_labels(
    names: Iterable[str], prefix: str = DEFAULT_LABEL_PREFIX
) -> list[Label]:
    """Return the threshold labels among names, deduplicated and sorted by days ascending.

    Names with the prefix but without a non-negative integer suffix are skipped
    with a warning.
    """
    labels: dict[str, Label] = {}
    for name in names:
        if not name.startswith(prefix) or name in labels:
            continue
        suffix = name[len(prefix):]
        try:
            days = int(suffix)
        except ValueError:
            logger.warning("Could not parse days in label", extra={"label": name})
            continue
        if days < 0:
            logger.warning("Negative days in label", extra={"label": name})
            continue
        labels[name] = Label(name=name, days=days)
    return sorted(labels.values(), key=lambda label: (label.days, label.name))


def select_label(labels: Sequence[Label], days_until_deadline: float) -> LabelSelection:
    """Pick the single label to keep for a deadline and the labels to strip.

    labels must already be sorted by days ascending. The kept label is the first
    one whose ceiling exceeds the whole number of days left; past deadlines and
    deadlines beyond every ceiling keep nothing.
    """
    if not labels:
        return LabelSelection(keep=None, remove=())
    if days_until_deadline <= -1:
        return LabelSelection(keep=None, remove=tuple(labels))

    whole_days = int(days_until_deadline)
    keep = next((label for label in labels if label.days > whole_days), None)
    remove = tuple(label for label in labels if label != keep)
    return LabelSelection(keep=keep, remove=remove)
