"""Pydantic models for data validation and type checking."""

from models.config import (
    EmailSettings,
    JsonTarget,
    MailingListTarget,
    NotifyConfig,
    RepositorySettings,
)
from models.forge import PullRequestCandidate
from models.mail import Conversation, Email, EmailAddress
from models.vcs import Author, Branch, Commit, Diff, Patch, PatchStatus, Tag

__all__ = [
    "Author",
    "Branch",
    "Commit",
    "Diff",
    "Patch",
    "PatchStatus",
    "Tag",
    "EmailAddress",
    "Email",
    "Conversation",
    "PullRequestCandidate",
    "NotifyConfig",
    "RepositorySettings",
    "EmailSettings",
    "JsonTarget",
    "MailingListTarget",
]
