"""
Ports (interfaces) used by the notification core.

The forge and the mailing-list transport are reached only through these
contracts so the core can run against in-memory fakes.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Protocol

from models.forge import PullRequestCandidate
from models.mail import Conversation, Email
from models.vcs import Branch, Commit, Tag


class HostedRepository(Protocol):
    """Forge-side view of a repository."""

    @property
    def name(self) -> str:
        ...

    @property
    def repository_type(self) -> str:
        """Short name of the VCS, e.g. "git" or "hg"."""
        ...

    def web_url(self, commit_hash: str) -> str:
        ...

    def find_pull_requests_with_comment(
        self, author: str | None, body: str
    ) -> list[PullRequestCandidate]:
        ...


class MailingList(Protocol):
    """Mailing-list transport operations."""

    def conversations(self, max_age: timedelta) -> list[Conversation]:
        ...

    def post(self, email: Email) -> None:
        ...


class UpdateConsumer(Protocol):
    """A notification pipeline fed by the repository diffing layer."""

    def handle_commits(
        self, repository: HostedRepository, commits: list[Commit], branch: Branch
    ) -> None:
        ...

    def handle_tag_commits(
        self, repository: HostedRepository, commits: list[Commit], tag: Tag
    ) -> None:
        ...

    def handle_new_branch(
        self,
        repository: HostedRepository,
        commits: list[Commit],
        parent: Branch,
        branch: Branch,
    ) -> None:
        ...
