import pytest

from ghreminder import cli
from ghreminder.core.models import Repository, RunSummary
from ghreminder.plugins.registry import build_adapter, load_adapter
from ghreminder.core.errors import AdapterError


@pytest.mark.parametrize(
    "reference,expected",
    [
        ("octo/project#12", (Repository("octo", "project"), 12)),
        ("https://github.com/octo/project/issues/12", (Repository("octo", "project"), 12)),
        ("https://github.com/octo/my.repo/pull/3/", (Repository("octo", "my.repo"), 3)),
        ("https://github.com/octo/project/issues/7#issuecomment-1", (Repository("octo", "project"), 7)),
    ],
)
def test_parse_issue_reference(reference, expected) -> None:
    assert cli.parse_issue_reference(reference) == expected


@pytest.mark.parametrize("reference", ["12", "octo#12", "octo/project#0", "octo/project#x"])
def test_parse_issue_reference_rejects_invalid(reference) -> None:
    with pytest.raises(ValueError):
        cli.parse_issue_reference(reference)


class _StubOrchestrator:
    def __init__(self, summary: RunSummary) -> None:
        self._summary = summary
        self.closed = False
        self.updated: list[tuple] = []

    def run_once(self) -> RunSummary:
        return self._summary

    def update_issue(self, repo, number) -> None:
        self.updated.append((repo, number))

    def close(self) -> None:
        self.closed = True


def test_run_once_exits_nonzero_on_failures(monkeypatch) -> None:
    stub = _StubOrchestrator(RunSummary(repositories=1, issues=2, failures=["boom"]))
    monkeypatch.setattr(cli, "build_orchestrator", lambda _path: stub)

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--config", "c.yaml", "run-once"])

    assert excinfo.value.code == 1
    assert stub.closed


def test_update_issue_command(monkeypatch) -> None:
    stub = _StubOrchestrator(RunSummary())
    monkeypatch.setattr(cli, "build_orchestrator", lambda _path: stub)

    cli.main(["--config", "c.yaml", "update-issue", "octo/project#4"])

    assert stub.updated == [(Repository("octo", "project"), 4)]
    assert stub.closed


def test_missing_config_exits_with_error(tmp_path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--config", str(tmp_path / "nope.yaml"), "run-once"])

    assert excinfo.value.code == 1


def test_registry_loads_and_builds_adapters() -> None:
    writer = build_adapter(
        "ghreminder.adapters.github.writer:GitHubActionWriter",
        token="t",
        api_base="https://api.github.com",
    )
    writer.close()
    with pytest.raises(AdapterError):
        load_adapter("ghreminder.adapters.github.writer.GitHubActionWriter")
    with pytest.raises(AdapterError):
        load_adapter("ghreminder.adapters.github.writer:Missing")
