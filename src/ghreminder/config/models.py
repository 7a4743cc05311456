from __future__ import annotations

from pydantic import BaseModel, Field, HttpUrl, field_validator

from ghreminder.core.modes import RunMode


class PermissionConfig(BaseModel):
    read: bool = True
    write: bool = False


class RepoFilterConfig(BaseModel):
    mode: str
    names: list[str]

    @field_validator("mode")
    @classmethod
    def validate_mode(cls, value: str) -> str:
        if value not in {"allow", "deny"}:
            raise ValueError("repos.mode must be either 'allow' or 'deny'")
        return value

    @field_validator("names")
    @classmethod
    def validate_names(cls, value: list[str]) -> list[str]:
        if not value:
            raise ValueError("repos.names must be a non-empty list")
        return value


class RuntimeConfig(BaseModel):
    mode: RunMode = RunMode.DRY_RUN
    log_level: str = "INFO"
    github_adapter: str = "ghreminder.adapters.github.rest:GitHubRestAdapter"
    github_writer: str = "ghreminder.adapters.github.writer:GitHubActionWriter"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        if value.upper() not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError("Unsupported log level")
        return value.upper()


class GitHubConfig(BaseModel):
    token: str
    api_base: HttpUrl = Field(default="https://api.github.com")
    # Without an org, the authenticated user's repositories are scanned.
    org: str | None = None
    permissions: PermissionConfig = Field(default_factory=PermissionConfig)
    repos: RepoFilterConfig | None = None
    user_fallback: bool = False


class ReminderConfig(BaseModel):
    """Identity and wire format used by the deadline/reminder engine."""
    bot_login: str = "deadline-reminder[bot]"
    label_prefix: str = "deadline < "

    @field_validator("bot_login", "label_prefix")
    @classmethod
    def validate_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value


class BotConfig(BaseModel):
    runtime: RuntimeConfig = Field(default_factory=RuntimeConfig)
    github: GitHubConfig
    reminder: ReminderConfig = Field(default_factory=ReminderConfig)
