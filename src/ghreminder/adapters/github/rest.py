from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Iterator, Sequence

import httpx

from ghreminder.config.models import RepoFilterConfig
from ghreminder.core.errors import AdapterError
from ghreminder.core.models import Comment, Issue, Repository


@dataclass(frozen=True)
class RateLimitStatus:
    remaining: int | None
    reset_at: datetime | None


class GitHubRestAdapter:
    """Read-only access to repositories, labels, issues and comments."""

    def __init__(
        self,
        token: str,
        api_base: str,
        org: str | None = None,
        user_fallback: bool = False,
        repo_filter: RepoFilterConfig | None = None,
    ) -> None:
        self._logger = logging.getLogger(self.__class__.__name__)
        self._org = org
        self._user_fallback = user_fallback
        self._repo_filter = repo_filter
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

    def __enter__(self) -> "GitHubRestAdapter":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def list_repositories(self) -> list[Repository]:
        if self._org:
            repos, status = self._list_repos_from_path(f"/orgs/{self._org}/repos")
            if status == 200 and not repos:
                self._logger.info("Organization has no repositories yet", extra={"org": self._org})
            if self._user_fallback and (status in {401, 403} or (status == 200 and not repos)):
                self._logger.info("Falling back to user repositories (not an org member)")
                repos, _ = self._list_repos_from_path("/user/repos")
        else:
            repos, _ = self._list_repos_from_path("/user/repos")

        if not repos:
            self._logger.warning("No repositories discovered", extra={"org": self._org})
        filtered = _apply_repo_filter(repos, self._repo_filter, self._logger)
        return [
            Repository(owner=repo["owner"]["login"], name=repo["name"])
            for repo in filtered
            if not repo.get("archived")
        ]

    def list_repository_labels(self, owner: str, repo: str) -> list[str]:
        names: list[str] = []
        for page in self._paginate(f"/repos/{owner}/{repo}/labels", params={"per_page": 100}):
            names.extend(label["name"] for label in page if label.get("name"))
        return names

    def list_open_issue_numbers(self, owner: str, repo: str) -> list[int]:
        # The issues endpoint also returns pull requests, which carry deadlines too.
        numbers: list[int] = []
        params = {"state": "open", "per_page": 100}
        for page in self._paginate(f"/repos/{owner}/{repo}/issues", params=params):
            numbers.extend(issue["number"] for issue in page)
        return numbers

    def fetch_issue(self, owner: str, repo: str, number: int) -> Issue:
        path = f"/repos/{owner}/{repo}/issues/{number}"
        response = self._request("GET", path, params={})
        if response is None or response.status_code != 200:
            raise AdapterError(f"could not fetch issue {owner}/{repo}#{number}")
        data = response.json()

        comments: list[Comment] = []
        comments_path = f"{path}/comments"
        for page in self._paginate(comments_path, params={"per_page": 100}):
            comments.extend(_to_comment(item) for item in page)

        return Issue(
            repository=Repository(owner=owner, name=repo),
            number=number,
            title=data.get("title") or "",
            body=data.get("body") or "",
            author=_login(data.get("user")),
            state=data.get("state") or "",
            comments=tuple(comments),
        )

    def _paginate(self, path: str, params: dict) -> Iterator[list]:
        """Yield every page of a listing, raising AdapterError if any page fails."""
        page = 1
        while True:
            response = self._request("GET", path, params={**params, "page": page})
            if response is None:
                raise AdapterError(f"GitHub request failed: {path} page {page}")
            if response.status_code != 200:
                raise AdapterError(
                    f"GitHub request failed: {path} page {page} (HTTP {response.status_code})"
                )
            data = response.json()
            if not isinstance(data, list) or not data:
                return
            yield data
            if not _has_next_page(response.headers.get("Link")):
                return
            page += 1

    def _list_repos_from_path(self, path: str) -> tuple[list[dict], int | None]:
        repos: list[dict] = []
        response = self._request("GET", path, params={"per_page": 100, "page": 1})
        if response is None:
            return [], None
        if response.status_code != 200:
            return [], response.status_code
        data = response.json()
        if isinstance(data, list):
            repos.extend(data)
        if _has_next_page(response.headers.get("Link")):
            page = 2
            while True:
                response = self._request("GET", path, params={"per_page": 100, "page": page})
                if response is None or response.status_code != 200:
                    break
                data = response.json()
                if not isinstance(data, list) or not data:
                    break
                repos.extend(data)
                if not _has_next_page(response.headers.get("Link")):
                    break
                page += 1
        return repos, 200

    def _request(self, method: str, path: str, params: dict) -> httpx.Response | None:
        try:
            response = self._client.request(method, path, params=params)
        except httpx.HTTPError as exc:
            self._logger.warning("GitHub request failed", extra={"path": path, "error": str(exc)})
            return None

        rate_limit = _parse_rate_limit(response.headers)
        if rate_limit.remaining is not None and rate_limit.remaining <= 1:
            self._logger.warning(
                "GitHub rate limit nearly exhausted",
                extra={
                    "path": path,
                    "remaining": rate_limit.remaining,
                    "reset_at": rate_limit.reset_at.isoformat()
                    if rate_limit.reset_at
                    else None,
                },
            )

        if response.status_code in {401, 403}:
            self._logger.warning(
                "GitHub permission or visibility issue",
                extra={
                    "path": path,
                    "status_code": response.status_code,
                    "response_message": response.text[:200],
                },
            )
        elif response.status_code == 404:
            self._logger.warning(
                "GitHub resource not found",
                extra={"path": path, "status_code": response.status_code},
            )
        return response


def _to_comment(item: dict[str, Any]) -> Comment:
    return Comment(
        author=_login(item.get("user")),
        body=item.get("body") or "",
        created_at=_parse_iso8601(item.get("created_at")) or datetime.fromtimestamp(0, tz=timezone.utc),
    )


def _login(user: dict | None) -> str:
    return (user or {}).get("login") or "<deleted>"


def _parse_rate_limit(headers: Any) -> RateLimitStatus:
    remaining = headers.get("X-RateLimit-Remaining")
    reset = headers.get("X-RateLimit-Reset")
    remaining_val = int(remaining) if remaining and remaining.isdigit() else None
    reset_at = (
        datetime.fromtimestamp(int(reset), tz=timezone.utc) if reset and reset.isdigit() else None
    )
    return RateLimitStatus(remaining=remaining_val, reset_at=reset_at)


def _has_next_page(link_header: str | None) -> bool:
    if not link_header:
        return False
    return 'rel="next"' in link_header


def _parse_iso8601(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


def _apply_repo_filter(
    repos: Sequence[dict],
    repo_filter: RepoFilterConfig | None,
    logger: logging.Logger,
) -> list[dict]:
    """Filter repos according to config. Returns a new list, never mutates input."""
    if repo_filter is None or not repos:
        return list(repos)

    names = {name.strip() for name in repo_filter.names}
    if repo_filter.mode == "allow":
        allowed = [repo for repo in repos if repo["name"] in names]
    else:
        allowed = [repo for repo in repos if repo["name"] not in names]

    logger.info(
        "Applied repo filter",
        extra={"mode": repo_filter.mode, "before": len(repos), "after": len(allowed)},
    )
    if not allowed:
        logger.warning(
            "All repositories filtered out",
            extra={"mode": repo_filter.mode, "requested": sorted(names)},
        )
    return allowed
