from __future__ import annotations

import logging
from typing import Sequence
from urllib.parse import quote

import httpx

from ghreminder.core.errors import AdapterError
from ghreminder.core.models import Action, AddLabel, PostComment, RemoveLabel, Repository
from ghreminder.core.modes import MutationPolicy, mutation_skip_reason


class GitHubActionWriter:
    """Thin executor for planned issue actions.

    This adapter only executes precomputed actions when MutationPolicy allows it.
    """

    def __init__(self, token: str, api_base: str) -> None:
        self._logger = logging.getLogger(self.__class__.__name__)
        self._client = httpx.Client(
            base_url=api_base,
            headers={
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
            },
            timeout=30.0,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "GitHubActionWriter":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def apply_actions(
        self,
        repo: Repository,
        number: int,
        actions: Sequence[Action],
        policy: MutationPolicy,
    ) -> None:
        skip_reason = mutation_skip_reason(policy)
        for action in actions:
            if skip_reason:
                self._log_action(repo, number, action, result=skip_reason)
                continue
            self._apply_action(repo, number, action)

    def _apply_action(self, repo: Repository, number: int, action: Action) -> None:
        issue_path = f"/repos/{repo.owner}/{repo.name}/issues/{number}"
        if isinstance(action, AddLabel):
            method, path, payload = "POST", f"{issue_path}/labels", {"labels": [action.name]}
        elif isinstance(action, RemoveLabel):
            method, path, payload = "DELETE", f"{issue_path}/labels/{quote(action.name, safe='')}", None
        elif isinstance(action, PostComment):
            method, path, payload = "POST", f"{issue_path}/comments", {"body": action.body}
        else:
            raise AdapterError(f"unknown action {action!r}")

        try:
            response = self._client.request(method, path, json=payload)
        except httpx.HTTPError as exc:
            self._log_action(repo, number, action, result="failed (network error)", error=str(exc))
            raise AdapterError(f"could not apply {_describe(action)} to {repo.full_name}#{number}") from exc

        if isinstance(action, RemoveLabel) and response.status_code == 404:
            self._log_action(repo, number, action, result="skipped (label not present)", status=404)
            return
        if response.status_code >= 300:
            self._log_action(repo, number, action, result="failed (http error)", status=response.status_code)
            raise AdapterError(
                f"could not apply {_describe(action)} to {repo.full_name}#{number}: "
                f"HTTP {response.status_code}"
            )

        self._log_action(repo, number, action, result="applied", status=response.status_code)

    def _log_action(
        self,
        repo: Repository,
        number: int,
        action: Action,
        result: str,
        status: int | None = None,
        error: str | None = None,
    ) -> None:
        self._logger.info(
            "GitHub action execution",
            extra={
                "repo": repo.full_name,
                "issue_number": number,
                "action": _describe(action),
                "result": result,
                "status": status,
                "error": error,
            },
        )


def _describe(action: Action) -> str:
    if isinstance(action, AddLabel):
        return f"add label {action.name!r}"
    if isinstance(action, RemoveLabel):
        return f"remove label {action.name!r}"
    return "post comment"
