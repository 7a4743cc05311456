from __future__ import annotations

import argparse
import logging
import re

from ghreminder.config.loader import load_config
from ghreminder.core.errors import AdapterError, ConfigError, IssueUpdateError
from ghreminder.core.models import Repository
from ghreminder.engine.orchestrator import Orchestrator
from ghreminder.logging.setup import configure_logging
from ghreminder.plugins.registry import build_adapter

# owner/repo#123 or https://github.com/owner/repo/issues/123 (or /pull/123)
_ISSUE_REFERENCE = re.compile(
    r"^(?:https?://[^/]+/)?(?P<owner>[\w.-]+)/(?P<repo>[\w.-]+)"
    r"(?:#|/issues/|/pull/)(?P<number>\d+)/?(?:[?#].*)?$"
)


def parse_issue_reference(reference: str) -> tuple[Repository, int]:
    """Parse "owner/repo#N" or a GitHub issue/PR URL into (repository, number)."""
    match = _ISSUE_REFERENCE.match(reference.strip())
    if match is None:
        raise ValueError(
            f"Invalid issue reference: {reference} (expected owner/repo#123 or an issue URL)"
        )
    number = int(match.group("number"))
    if number <= 0:
        raise ValueError(f"Invalid issue number: {number}")
    return Repository(owner=match.group("owner"), name=match.group("repo")), number


def build_orchestrator(config_path: str) -> Orchestrator:
    config = load_config(config_path)
    configure_logging(config.runtime.log_level)
    logger = logging.getLogger("CLI")
    logger.info("Loaded configuration", extra={"mode": config.runtime.mode.value})

    github_reader = build_adapter(
        config.runtime.github_adapter,
        token=config.github.token,
        api_base=str(config.github.api_base),
        org=config.github.org,
        user_fallback=config.github.user_fallback,
        repo_filter=config.github.repos,
    )
    github_writer = build_adapter(
        config.runtime.github_writer,
        token=config.github.token,
        api_base=str(config.github.api_base),
    )
    return Orchestrator(
        github_reader=github_reader,
        github_writer=github_writer,
        config=config,
    )


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Deadline labels and reminder comments for GitHub issues")
    parser.add_argument("--config", required=True, help="Path to config YAML file")
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("run-once", help="Update every open issue in every repository once")
    issue_p = sub.add_parser("update-issue", help="Update a single issue or pull request")
    issue_p.add_argument("reference", help="owner/repo#123 or a GitHub issue URL")

    args = parser.parse_args(argv)
    logger = logging.getLogger("CLI")
    orchestrator = None
    try:
        if args.command == "update-issue":
            try:
                repo, number = parse_issue_reference(args.reference)
            except ValueError as exc:
                parser.error(str(exc))
            orchestrator = build_orchestrator(args.config)
            orchestrator.update_issue(repo, number)
        else:
            orchestrator = build_orchestrator(args.config)
            summary = orchestrator.run_once()
            if not summary.ok:
                logger.error("Some issues could not be updated", extra={"failures": len(summary.failures)})
                raise SystemExit(1)
    except (ConfigError, AdapterError, IssueUpdateError) as exc:
        logger.error("Fatal error: %s", exc)
        raise SystemExit(1) from exc
    except Exception as exc:  # noqa: BLE001
        logger.exception("Unhandled error")
        raise SystemExit(1) from exc
    finally:
        if orchestrator is not None:
            orchestrator.close()


if __name__ == "__main__":
    main()
