from __future__ import annotations

from typing import Protocol, Sequence

from ghreminder.core.models import Action, Issue, Repository
from ghreminder.core.modes import MutationPolicy


class GitHubReader(Protocol):
    def list_repositories(self) -> Sequence[Repository]:
        """Return the repositories to scan during a pass."""

    def list_repository_labels(self, owner: str, repo: str) -> Sequence[str]:
        """Return every label name defined in a repository."""

    def list_open_issue_numbers(self, owner: str, repo: str) -> Sequence[int]:
        """Return the numbers of open issues and pull requests."""

    def fetch_issue(self, owner: str, repo: str, number: int) -> Issue:
        """Return an issue snapshot with its comments in creation order."""


class GitHubWriter(Protocol):
    def apply_actions(
        self,
        repo: Repository,
        number: int,
        actions: Sequence[Action],
        policy: MutationPolicy,
    ) -> None:
        """Execute planned actions against an issue when the policy allows it."""
