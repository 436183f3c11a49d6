"""
Mailing-list notification pipeline.

Routes commit batches, tags and new branches of one repository to one
mailing list according to the pipeline's delivery mode.
"""

import logging

from models.mail import Email
from models.vcs import Branch, Commit, Tag
from notify.authorship import resolve_author
from notify.correlation import ThreadCorrelator
from notify.formatting import (
    commits_to_subject,
    commits_to_text,
    new_branch_subject,
    new_branch_to_text,
    tag_to_subject,
    tag_to_text,
)
from notify.ports import HostedRepository, MailingList
from notify.routing import Mode, RoutingConfig

logger = logging.getLogger(__name__)


class MailingListUpdater:
    """Update consumer that posts notifications to a mailing list."""

    def __init__(self, mailing_list: MailingList, routing: RoutingConfig) -> None:
        self._list = mailing_list
        self._routing = routing
        self._correlator = ThreadCorrelator(mailing_list, routing)

    @property
    def routing(self) -> RoutingConfig:
        return self._routing

    def __repr__(self) -> str:
        return f"MailingListUpdater({self._routing.recipient}, mode={self._routing.mode.value})"

    def _post(self, subject: str, body: str, commits: list[Commit]) -> None:
        email = Email.create(
            subject,
            body,
            sender=self._routing.sender,
            author=resolve_author(self._routing, commits),
            recipient=self._routing.recipient,
            headers=self._routing.headers,
        )
        self._list.post(email)
        logger.info("Posted %r to %s", subject, self._routing.recipient)

    def _send_combined_commits(
        self, repository: HostedRepository, commits: list[Commit], branch: Branch
    ) -> None:
        if not commits:
            return
        subject = commits_to_subject(
            repository, commits, branch, include_branch=self._routing.include_branch
        )
        self._post(subject, commits_to_text(repository, commits), commits)

    def handle_commits(
        self, repository: HostedRepository, commits: list[Commit], branch: Branch
    ) -> None:
        mode = self._routing.mode
        if mode is Mode.ALL:
            self._send_combined_commits(repository, commits, branch)
            return

        remaining = self._correlator.correlate(repository, commits)
        if mode is Mode.PR:
            self._send_combined_commits(repository, remaining, branch)

    def handle_tag_commits(
        self, repository: HostedRepository, commits: list[Commit], tag: Tag
    ) -> None:
        if self._routing.mode is Mode.PR_ONLY:
            return
        if not commits:
            logger.warning("Tag %s has no commits to announce", tag.display_name)
            return

        subject = tag_to_subject(repository, commits[-1], tag)
        self._post(subject, tag_to_text(commits, tag), commits)

    def handle_new_branch(
        self,
        repository: HostedRepository,
        commits: list[Commit],
        parent: Branch,
        branch: Branch,
    ) -> None:
        if self._routing.mode is Mode.PR_ONLY:
            return

        subject = new_branch_subject(repository, commits, parent, branch)
        self._post(subject, new_branch_to_text(commits, parent, branch), commits)
