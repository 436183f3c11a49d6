"""Pydantic models for the declarative notifier configuration.

The shape mirrors the JSON document loaded by shared.config_loader:

    {
      "email": {"smtp": "...", "sender": "...", "archive": "...", "interval": "PT1S"},
      "repositories": {
        "openjdk/jdk": {
          "branches": "^master$",
          "branchnames": false,
          "json": {"folder": "...", "version": "21", "build": "b01"},
          "mailinglists": [{"recipient": "...", "mode": "pr", "domains": "openjdk\\.org"}]
        }
      }
    }

Values are only shape-checked here; semantic checks (address syntax, mode
names, author/domain exclusivity) happen during assembly so that a bad entry
aborts only its own pipeline.
"""

from datetime import timedelta

from pydantic import BaseModel, ConfigDict, Field

from models.types import HeaderMap


class JsonTarget(BaseModel):
    """JSON status file destination."""

    model_config = ConfigDict(str_strip_whitespace=True)

    folder: str = Field(..., min_length=1)
    version: str
    build: str


class MailingListTarget(BaseModel):
    """One mailing list that should receive notifications."""

    model_config = ConfigDict(str_strip_whitespace=True)

    recipient: str
    mode: str | None = None
    author: str | None = None
    domains: str | None = None
    headers: HeaderMap = Field(default_factory=dict)


class RepositorySettings(BaseModel):
    """Per-repository notification settings."""

    model_config = ConfigDict(populate_by_name=True)

    branches: str = "^master$"
    branchnames: bool = False
    basename: str | None = None
    json_status: JsonTarget | None = Field(None, alias="json")
    mailinglists: list[MailingListTarget] = Field(default_factory=list)


class EmailSettings(BaseModel):
    """Settings shared by every mailing-list pipeline of the process."""

    model_config = ConfigDict(str_strip_whitespace=True)

    smtp: str = Field(..., min_length=1)
    sender: str
    archive: str = Field(..., min_length=1)
    interval: timedelta = timedelta(seconds=1)


class NotifyConfig(BaseModel):
    """Top-level notifier configuration."""

    email: EmailSettings | None = None
    repositories: dict[str, RepositorySettings] = Field(default_factory=dict)
