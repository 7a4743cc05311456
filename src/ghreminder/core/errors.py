from __future__ import annotations


class ConfigError(RuntimeError):
    """Configuration validation or loading error."""


class AdapterError(RuntimeError):
    """Raised for adapter initialization failures and GitHub requests that must succeed."""


class IssueUpdateError(RuntimeError):
    """Raised when a single issue could not be updated."""

    def __init__(self, repo: str, number: int, cause: BaseException) -> None:
        super().__init__(f"could not update {repo}#{number}: {cause}")
        self.repo = repo
        self.number = number
        self.cause = cause
