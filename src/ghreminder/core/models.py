from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Union


@dataclass(frozen=True)
class Repository:
    owner: str
    name: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


@dataclass(frozen=True)
class Comment:
    author: str
    body: str
    created_at: datetime


@dataclass(frozen=True)
class Issue:
    repository: Repository
    number: int
    title: str
    body: str
    author: str
    state: str  # "open" | "closed"
    comments: tuple[Comment, ...] = ()

    @property
    def is_open(self) -> bool:
        return self.state == "open"


@dataclass(frozen=True)
class Label:
    name: str
    days: int


@dataclass(frozen=True)
class LabelSelection:
    keep: Label | None
    remove: tuple[Label, ...] = ()


@dataclass(frozen=True)
class AddLabel:
    name: str


@dataclass(frozen=True)
class RemoveLabel:
    name: str


@dataclass(frozen=True)
class PostComment:
    body: str


Action = Union[AddLabel, RemoveLabel, PostComment]


@dataclass
class RunSummary:
    repositories: int = 0
    issues: int = 0
    failures: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures
