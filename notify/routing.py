"""Delivery modes and per-pipeline routing settings."""

import re
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from models.mail import EmailAddress
from models.types import HeaderMap
from shared.errors import ConflictingAuthorSettings, UnknownMode


class Mode(str, Enum):
    """
    How a mailing-list pipeline delivers commit batches.

    ALL: one combined digest per batch, no correlation.
    PR: threaded replies for correlated commits, a digest for the rest.
    PR_ONLY: threaded replies only; tags and new branches are not announced.
    """

    ALL = "all"
    PR = "pr"
    PR_ONLY = "pr-only"

    @classmethod
    def from_config(cls, value: str | None) -> "Mode":
        """Map a configured mode name to a Mode; absent means ALL."""
        if value is None:
            return cls.ALL
        if value == cls.PR.value:
            return cls.PR
        if value == cls.PR_ONLY.value:
            return cls.PR_ONLY
        raise UnknownMode(f"Unknown mode: {value!r}")


class RoutingConfig(BaseModel):
    """Immutable routing settings of one mailing-list pipeline."""

    model_config = ConfigDict(frozen=True)

    recipient: EmailAddress
    sender: EmailAddress
    author: EmailAddress | None = None
    allowed_author_domains: re.Pattern | None = None
    mode: Mode = Mode.ALL
    headers: HeaderMap = Field(default_factory=dict)
    include_branch: bool = False

    @model_validator(mode="after")
    def _exactly_one_author_source(self) -> "RoutingConfig":
        if self.author is not None and self.allowed_author_domains is not None:
            raise ConflictingAuthorSettings(
                "Configure either a fixed author or allowed author domains, not both"
            )
        if self.author is None and self.allowed_author_domains is None:
            raise ConflictingAuthorSettings(
                "Allowed author domains are required when no fixed author is configured"
            )
        return self
