"""
Fans repository events out to the notification pipelines of one repository.

Each consumer runs synchronously and in configuration order. A failing
consumer is logged and reported but does not keep the others from running.
"""

import logging
import re
from collections.abc import Callable

from models.vcs import Branch, Commit, Tag
from notify.error_logger import log_notification_error
from notify.ports import HostedRepository, UpdateConsumer

logger = logging.getLogger(__name__)


class RepositoryNotifier:
    """All notification pipelines configured for one repository."""

    def __init__(
        self,
        repository: HostedRepository,
        branch_pattern: re.Pattern,
        consumers: list[UpdateConsumer],
        basename: str | None = None,
    ) -> None:
        self.repository = repository
        self.branch_pattern = branch_pattern
        self.consumers = list(consumers)
        self.basename = basename or repository.name

    def tracks_branch(self, branch: Branch) -> bool:
        return self.branch_pattern.fullmatch(branch.name) is not None

    def _run(self, event: str, call: Callable[[UpdateConsumer], None]) -> dict[str, int]:
        stats = {"delivered": 0, "failed": 0}
        for consumer in self.consumers:
            try:
                call(consumer)
            except Exception as e:
                logger.exception(
                    "%s failed for %s in %r", event, self.repository.name, consumer
                )
                error_file = log_notification_error(
                    error_type="delivery",
                    error_message=str(e),
                    context={
                        "repository": self.repository.name,
                        "event": event,
                        "consumer": repr(consumer),
                    },
                )
                logger.error("Details logged to: %s", error_file)
                stats["failed"] += 1
            else:
                stats["delivered"] += 1
        return stats

    def handle_commits(self, commits: list[Commit], branch: Branch) -> dict[str, int]:
        """
        Notify every pipeline about commits pushed to a branch.

        Returns:
            Dictionary with stats: delivered, failed
        """
        return self._run(
            "handle_commits",
            lambda consumer: consumer.handle_commits(self.repository, commits, branch),
        )

    def handle_tag_commits(self, commits: list[Commit], tag: Tag) -> dict[str, int]:
        return self._run(
            "handle_tag_commits",
            lambda consumer: consumer.handle_tag_commits(self.repository, commits, tag),
        )

    def handle_new_branch(
        self, commits: list[Commit], parent: Branch, branch: Branch
    ) -> dict[str, int]:
        return self._run(
            "handle_new_branch",
            lambda consumer: consumer.handle_new_branch(
                self.repository, commits, parent, branch
            ),
        )
