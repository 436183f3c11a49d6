"""
Builds notification pipelines from the declarative configuration.

Every repository gets one RepositoryNotifier holding a JsonUpdater (when a
JSON target is declared) and one MailingListUpdater per declared mailing
list. A configuration error aborts only the pipeline it belongs to; a
repository left without pipelines is skipped with a warning.
"""

import logging
import re
from collections.abc import Callable
from pathlib import Path
from typing import Any, Protocol

from models.config import EmailSettings, JsonTarget, MailingListTarget, NotifyConfig
from models.mail import EmailAddress
from notify.dispatch import RepositoryNotifier
from notify.error_logger import log_notification_error
from notify.json_updater import JsonUpdater
from notify.mailing_list_updater import MailingListUpdater
from notify.ports import HostedRepository, MailingList, UpdateConsumer
from notify.routing import Mode, RoutingConfig
from shared.errors import ConfigurationError, ConflictingAuthorSettings

logger = logging.getLogger(__name__)


class ListServer(Protocol):
    def get_list(self, recipient: str) -> MailingList:
        ...


RepositoryFactory = Callable[[str], HostedRepository]
ListServerFactory = Callable[[EmailSettings], ListServer]


def _compile(pattern: str, what: str) -> re.Pattern:
    try:
        return re.compile(pattern)
    except re.error as e:
        raise ConfigurationError(f"Invalid {what} pattern {pattern!r}: {e}") from e


def build_routing(
    target: MailingListTarget, sender: EmailAddress, include_branch: bool
) -> RoutingConfig:
    """
    Validate one mailing-list declaration into routing settings.

    Raises:
        InvalidAddress: if the recipient or author address is malformed
        UnknownMode: if the mode name is not recognized
        ConflictingAuthorSettings: unless exactly one of author/domains is set
    """
    recipient = EmailAddress.parse(target.recipient)
    mode = Mode.from_config(target.mode)

    author = EmailAddress.parse(target.author) if target.author else None
    if author is None and not target.domains:
        raise ConflictingAuthorSettings(
            f"Mailing list {target.recipient} needs either 'author' or 'domains'"
        )
    if author is not None and target.domains:
        raise ConflictingAuthorSettings(
            f"Mailing list {target.recipient} sets both 'author' and 'domains'"
        )
    domains = _compile(target.domains, "domains") if author is None else None

    return RoutingConfig(
        recipient=recipient,
        sender=sender,
        author=author,
        allowed_author_domains=domains,
        mode=mode,
        headers=dict(target.headers),
        include_branch=include_branch,
    )


def build_json_updater(target: JsonTarget) -> JsonUpdater:
    return JsonUpdater(Path(target.folder), target.version, target.build)


def _default_repository_factory(name: str) -> HostedRepository:
    from forge.github import GitHubRepository

    return GitHubRepository.from_env(name)


def _default_list_server_factory(settings: EmailSettings) -> ListServer:
    from mailinglist.mailman import MailmanServer

    return MailmanServer.from_settings(settings)


class NotifierAssembly:
    """
    Assembles notifiers for every configured repository.

    The list server and repository bindings are created on first use and
    shared by all pipelines built by this assembly.
    """

    def __init__(
        self,
        config: NotifyConfig,
        repository_factory: RepositoryFactory = _default_repository_factory,
        list_server_factory: ListServerFactory = _default_list_server_factory,
    ) -> None:
        self._config = config
        self._repository_factory = repository_factory
        self._list_server_factory = list_server_factory
        self._list_server: ListServer | None = None
        self._repositories: dict[str, HostedRepository] = {}
        self.failures: list[dict[str, Any]] = []
        self.inert: list[str] = []

    def _repository(self, name: str) -> HostedRepository:
        if name not in self._repositories:
            self._repositories[name] = self._repository_factory(name)
        return self._repositories[name]

    def _server(self, settings: EmailSettings) -> ListServer:
        if self._list_server is None:
            self._list_server = self._list_server_factory(settings)
        return self._list_server

    def _record_failure(self, repo_name: str, pipeline: str, error: Exception) -> None:
        logger.error("Skipping %s pipeline for %s: %s", pipeline, repo_name, error)
        error_file = log_notification_error(
            error_type="configuration",
            error_message=str(error),
            context={"repository": repo_name, "pipeline": pipeline},
        )
        self.failures.append(
            {"repository": repo_name, "pipeline": pipeline, "error": str(error), "report": error_file}
        )

    def build_mailing_list_updater(
        self, target: MailingListTarget, include_branch: bool
    ) -> MailingListUpdater:
        settings = self._config.email
        if settings is None:
            raise ConfigurationError("Mailing lists are configured but 'email' settings are missing")
        sender = EmailAddress.parse(settings.sender)
        routing = build_routing(target, sender, include_branch)
        mailing_list = self._server(settings).get_list(target.recipient)
        return MailingListUpdater(mailing_list, routing)

    def create_notifiers(self) -> list[RepositoryNotifier]:
        notifiers = []
        for repo_name, repo in self._config.repositories.items():
            try:
                branch_pattern = _compile(repo.branches, "branches")
            except ConfigurationError as e:
                self._record_failure(repo_name, "repository", e)
                continue

            consumers: list[UpdateConsumer] = []
            if repo.json_status is not None:
                consumers.append(build_json_updater(repo.json_status))

            for target in repo.mailinglists:
                try:
                    consumers.append(self.build_mailing_list_updater(target, repo.branchnames))
                except ConfigurationError as e:
                    self._record_failure(repo_name, f"mailinglist {target.recipient}", e)

            if not consumers:
                logger.warning("No consumers configured for notify bot repository: %s", repo_name)
                self.inert.append(repo_name)
                continue

            notifiers.append(
                RepositoryNotifier(
                    self._repository(repo_name),
                    branch_pattern,
                    consumers,
                    basename=repo.basename,
                )
            )
        return notifiers


def create_notifiers(
    config: NotifyConfig,
    repository_factory: RepositoryFactory = _default_repository_factory,
    list_server_factory: ListServerFactory = _default_list_server_factory,
) -> list[RepositoryNotifier]:
    """Assemble notifiers for every repository in `config`."""
    assembly = NotifierAssembly(config, repository_factory, list_server_factory)
    return assembly.create_notifiers()
