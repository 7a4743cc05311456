from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Sequence

from ghreminder.config.models import BotConfig
from ghreminder.core.errors import IssueUpdateError
from ghreminder.core.interfaces import GitHubReader, GitHubWriter
from ghreminder.core.models import Label, Repository, RunSummary
from ghreminder.core.modes import MutationPolicy
from ghreminder.engine.labels import parse_threshold_labels
from ghreminder.engine.updater import plan_issue_actions


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Orchestrator:
    github_reader: GitHubReader
    github_writer: GitHubWriter
    config: BotConfig
    clock: Callable[[], datetime] = field(default=_utcnow)

    @property
    def policy(self) -> MutationPolicy:
        return MutationPolicy(
            mode=self.config.runtime.mode,
            github_write_allowed=self.config.github.permissions.write,
        )

    def run_once(self) -> RunSummary:
        """Update every open issue of every repository once."""
        logger = logging.getLogger("Orchestrator")
        summary = RunSummary()
        repos = self.github_reader.list_repositories()
        logger.info("Starting deadline pass", extra={"repositories": len(repos)})
        for repo in repos:
            try:
                self.update_repository(repo, summary)
            except Exception as exc:  # noqa: BLE001
                logger.exception("Repository update failed", extra={"repo": repo.full_name})
                summary.failures.append(f"could not handle repository {repo.full_name}: {exc}")
        logger.info(
            "Deadline pass finished",
            extra={
                "repositories": summary.repositories,
                "issues": summary.issues,
                "failures": len(summary.failures),
            },
        )
        return summary

    def update_repository(self, repo: Repository, summary: RunSummary | None = None) -> RunSummary:
        """Update all open issues in a repository, continuing past per-issue failures."""
        logger = logging.getLogger("Orchestrator")
        summary = summary if summary is not None else RunSummary()
        summary.repositories += 1
        labels = self.load_labels(repo)
        logger.debug(
            "Handling repository",
            extra={"repo": repo.full_name, "labels": [label.name for label in labels]},
        )
        for number in self.github_reader.list_open_issue_numbers(repo.owner, repo.name):
            summary.issues += 1
            try:
                self._update_issue(repo, number, labels)
            except IssueUpdateError as exc:
                logger.error(
                    "Issue update failed",
                    extra={"repo": exc.repo, "issue_number": exc.number, "error": str(exc.cause)},
                )
                summary.failures.append(str(exc))
        return summary

    def update_issue(self, repo: Repository, number: int) -> None:
        """Update a single issue, loading the repository labels first."""
        self._update_issue(repo, number, self.load_labels(repo))

    def load_labels(self, repo: Repository) -> list[Label]:
        names = self.github_reader.list_repository_labels(repo.owner, repo.name)
        return parse_threshold_labels(names, prefix=self.config.reminder.label_prefix)

    def _update_issue(self, repo: Repository, number: int, labels: Sequence[Label]) -> None:
        try:
            issue = self.github_reader.fetch_issue(repo.owner, repo.name, number)
            actions = plan_issue_actions(
                issue, labels, self.clock(), self.config.reminder.bot_login
            )
            if actions:
                self.github_writer.apply_actions(repo, number, actions, self.policy)
        except Exception as exc:  # noqa: BLE001
            raise IssueUpdateError(repo.full_name, number, exc) from exc

    def close(self) -> None:
        for adapter in (self.github_reader, self.github_writer):
            close = getattr(adapter, "close", None)
            if callable(close):
                close()
