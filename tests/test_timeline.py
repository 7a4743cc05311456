from datetime import date

from helpers import dt, make_issue

from ghreminder.engine.timeline import authored_bodies, extract


def test_last_mentioned_deadline_is_last_element_regardless_of_magnitude() -> None:
    issue = make_issue(body="deadline 2024/12/01\nactually deadline 2024/07/01")
    deadlines = extract(issue, "deadline")
    assert deadlines == [date(2024, 12, 1), date(2024, 7, 1)]
    assert deadlines[-1] == date(2024, 7, 1)


def test_body_then_comments_in_creation_order_without_dedup() -> None:
    issue = make_issue(
        body="deadline 2024/07/01",
        comments=[
            ("bob", "moving the deadline: 2024/08/01", dt(2024, 6, 1)),
            ("carol", "no dates here", dt(2024, 6, 2)),
            ("bob", "deadline 2024/07/01", dt(2024, 6, 3)),
        ],
    )
    assert extract(issue, "deadline") == [
        date(2024, 7, 1),
        date(2024, 8, 1),
        date(2024, 7, 1),
    ]


def test_authored_bodies_pairs_each_body_with_its_author() -> None:
    issue = make_issue(
        body="opening",
        author="alice",
        comments=[("bob", "reply", dt(2024, 6, 1))],
    )
    assert list(authored_bodies(issue)) == [("alice", "opening"), ("bob", "reply")]


def test_issue_without_mentions_has_empty_timeline() -> None:
    assert extract(make_issue(body="just a bug"), "deadline") == []
