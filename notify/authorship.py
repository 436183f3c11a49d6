"""Picks the author identity of outgoing notification emails."""

import re

from models.mail import EmailAddress
from models.vcs import Commit
from notify.routing import RoutingConfig


def commits_to_author(
    commits: list[Commit], allowed_domains: re.Pattern, sender: EmailAddress
) -> EmailAddress:
    """
    Use the last committer as author when their domain is allowed.

    The domain must match the whole pattern. Otherwise the channel's own
    sender address is used so the message is never attributed to an
    outside address.
    """
    committer = commits[-1].committer
    address = EmailAddress.from_parts(committer.name, committer.email)
    if allowed_domains.fullmatch(address.domain):
        return address
    return sender


def resolve_author(routing: RoutingConfig, commits: list[Commit]) -> EmailAddress:
    if routing.author is not None:
        return routing.author
    if not commits:
        return routing.sender
    return commits_to_author(commits, routing.allowed_author_domains, routing.sender)
