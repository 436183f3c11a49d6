"""
Correlates pushed commits with the review threads that approved them.

A commit pushed from a pull request carries a marker comment on that pull
request ("Pushed as commit <hash>."). The pull request's web URL is quoted
in the body of the original "RFR: " email, so the two lookups together lead
from a commit to the thread where it should be announced.

Anything but exactly one match at either step leaves the commit
uncorrelated. Ambiguity is logged and never resolved by picking one.
"""

import logging
import re
from datetime import timedelta

from models.mail import Email
from models.vcs import Commit
from notify.authorship import resolve_author
from notify.formatting import commit_to_text
from notify.ports import HostedRepository, MailingList
from notify.routing import RoutingConfig

logger = logging.getLogger(__name__)

RFR_PREFIX = "RFR: "
INTEGRATED_PREFIX = "Re: [Integrated] "
LOOKBACK = timedelta(days=365)


def pushed_comment(commit: Commit) -> str:
    return f"Pushed as commit {commit.hash}."


def pr_link_pattern(web_url: str) -> re.Pattern:
    return re.compile(r"^(?:PR: )?" + re.escape(web_url), re.MULTILINE)


class ThreadCorrelator:
    """Posts threaded replies for commits whose RFR thread can be found."""

    def __init__(self, mailing_list: MailingList, routing: RoutingConfig) -> None:
        self._list = mailing_list
        self._routing = routing

    def _rfr_roots(self) -> list[Email]:
        roots = [conversation.first for conversation in self._list.conversations(LOOKBACK)]
        return [email for email in roots if email.subject.startswith(RFR_PREFIX)]

    def correlate(self, repository: HostedRepository, commits: list[Commit]) -> list[Commit]:
        """
        Reply in the review thread of every commit that correlates uniquely.

        Args:
            repository: Forge repository the commits were pushed to
            commits: The batch, in push order

        Returns:
            The commits that could not be correlated, in their original order
        """
        uncorrelated: list[Commit] = []
        rfrs: list[Email] | None = None

        for commit in commits:
            candidates = repository.find_pull_requests_with_comment(None, pushed_comment(commit))
            if len(candidates) != 1:
                logger.warning(
                    "Commit %s matches %d pull requests - expected 1",
                    commit.hash,
                    len(candidates),
                )
                uncorrelated.append(commit)
                continue

            pr_link = candidates[0].web_url
            pattern = pr_link_pattern(pr_link)

            # The archive is only read once a commit needs it
            if rfrs is None:
                rfrs = self._rfr_roots()
            matching = [email for email in rfrs if pattern.search(email.body)]
            if len(matching) != 1:
                logger.warning(
                    "Pull request %s found in %d RFR threads - expected 1",
                    pr_link,
                    len(matching),
                )
                uncorrelated.append(commit)
                continue

            rfr = matching[0]
            reply = Email.reply(
                rfr,
                INTEGRATED_PREFIX + rfr.subject,
                commit_to_text(repository, commit),
                sender=self._routing.sender,
                author=resolve_author(self._routing, commits),
                recipient=self._routing.recipient,
                headers=self._routing.headers,
            )
            self._list.post(reply)
            logger.info("Posted integration notice for %s in %s", commit.abbreviated_hash, rfr.id)

        return uncorrelated
