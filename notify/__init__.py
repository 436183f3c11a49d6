"""
Repository change notifier.

This package handles:
- Rendering commits, tags and new branches as notification emails
- Correlating pushed commits with their review (RFR) threads
- Routing commit batches by delivery mode (all / pr / pr-only)
- Writing JSON status files
- Assembling per-repository pipelines from configuration
"""

from .dispatch import RepositoryNotifier
from .factory import NotifierAssembly, create_notifiers
from .json_updater import JsonUpdater
from .mailing_list_updater import MailingListUpdater
from .routing import Mode, RoutingConfig

__all__ = [
    "RepositoryNotifier",
    "NotifierAssembly",
    "create_notifiers",
    "JsonUpdater",
    "MailingListUpdater",
    "Mode",
    "RoutingConfig",
]
