import logging

import pytest

from ghreminder.core.models import Label
from ghreminder.engine.labels import parse_threshold_labels, select_label


def test_parse_keeps_matching_labels_sorted_and_deduplicated() -> None:
    names = ["bug", "deadline < 30", "deadline < 5", "deadline < 30", "Deadline < 1", "deadline < 14"]

    labels = parse_threshold_labels(names)

    assert labels == [
        Label(name="deadline < 5", days=5),
        Label(name="deadline < 14", days=14),
        Label(name="deadline < 30", days=30),
    ]


def test_parse_skips_malformed_labels_with_warning(caplog) -> None:
    caplog.set_level(logging.WARNING)

    labels = parse_threshold_labels(["deadline < soon", "deadline < -3", "deadline < 7"])

    assert labels == [Label(name="deadline < 7", days=7)]
    warned = [getattr(record, "label", None) for record in caplog.records]
    assert "deadline < soon" in warned
    assert "deadline < -3" in warned


def test_parse_honours_custom_prefix() -> None:
    assert parse_threshold_labels(["due < 3", "deadline < 3"], prefix="due < ") == [
        Label(name="due < 3", days=3)
    ]


@pytest.mark.parametrize("days", [-10.0, 0.0, 3.0, 100.0])
def test_no_labels_selects_nothing(days: float) -> None:
    selection = select_label([], days)
    assert selection.keep is None
    assert selection.remove == ()


@pytest.mark.parametrize(
    "days,keep,removed",
    [
        (3.0, "deadline < 5", ["deadline < 30"]),
        (10.0, "deadline < 30", ["deadline < 5"]),
        (40.0, None, ["deadline < 5", "deadline < 30"]),
        (-2.0, None, ["deadline < 5", "deadline < 30"]),
        # Exactly on a ceiling moves to the next label up.
        (5.0, "deadline < 30", ["deadline < 5"]),
        (4.9, "deadline < 5", ["deadline < 30"]),
        # Less than a day overdue still counts as day zero.
        (-0.5, "deadline < 5", ["deadline < 30"]),
        (-1.0, None, ["deadline < 5", "deadline < 30"]),
    ],
)
def test_select_label_policy(threshold_labels, days, keep, removed) -> None:
    selection = select_label(threshold_labels, days)

    assert (selection.keep.name if selection.keep else None) == keep
    assert [label.name for label in selection.remove] == removed


def test_at_most_one_label_is_kept() -> None:
    labels = parse_threshold_labels(["deadline < 1", "deadline < 3", "deadline < 7", "deadline < 30"])

    selection = select_label(labels, 2.5)

    assert selection.keep == Label(name="deadline < 3", days=3)
    assert {label.name for label in selection.remove} == {"deadline < 1", "deadline < 7", "deadline < 30"}
