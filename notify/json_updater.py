"""
JSON status file pipeline.

Writes one JSON file per commit batch or tag into a folder watched by
external status tooling. Each file holds an array with one entry per commit.
"""

import itertools
import json
import logging
import os
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from models.vcs import Branch, Commit, Tag
from notify.ports import HostedRepository

logger = logging.getLogger(__name__)

_ISSUE_PATTERN = re.compile(r"^([A-Z][A-Z0-9]*-)?([0-9]+): \S")


def parse_issue_ids(message: list[str]) -> list[str]:
    """Issue ids from the "<id>: <title>" lines heading a commit message."""
    issues = []
    for line in message:
        if not line.strip():
            break
        match = _ISSUE_PATTERN.match(line)
        if match:
            issues.append((match.group(1) or "") + match.group(2))
    return issues


class JsonUpdater:
    """Update consumer that records commits as JSON status files."""

    def __init__(self, folder: Path, version: str, build: str) -> None:
        self._folder = Path(folder)
        self._version = version
        self._build = build
        self._sequence = itertools.count()

    def __repr__(self) -> str:
        return f"JsonUpdater({self._folder}, version={self._version}, build={self._build})"

    def _commit_to_changes(
        self, repository: HostedRepository, commit: Commit, build: str
    ) -> dict[str, Any]:
        date = commit.date if commit.date.tzinfo else commit.date.replace(tzinfo=timezone.utc)
        return {
            "url": repository.web_url(commit.hash),
            "version": self._version,
            "build": build,
            "issue": parse_issue_ids(commit.message),
            "user": commit.author.name,
            "date": date.isoformat(),
        }

    def _write(self, repository: HostedRepository, entries: list[dict[str, Any]]) -> Path:
        self._folder.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
        stem = repository.name.replace("/", ".")
        target = self._folder / f"{stem}.{timestamp}.{next(self._sequence)}.json"
        temporary = target.with_suffix(".json.tmp")

        with open(temporary, "w", encoding="utf-8") as f:
            json.dump(entries, f, indent=2)
        os.replace(temporary, target)

        logger.info("Wrote %d status entries to %s", len(entries), target)
        return target

    def handle_commits(
        self, repository: HostedRepository, commits: list[Commit], branch: Branch
    ) -> None:
        if not commits:
            return
        entries = [self._commit_to_changes(repository, c, self._build) for c in commits]
        self._write(repository, entries)

    def handle_tag_commits(
        self, repository: HostedRepository, commits: list[Commit], tag: Tag
    ) -> None:
        build_number = tag.build_number
        if build_number is None or not commits:
            return
        build = "b%02d" % build_number
        entries = [self._commit_to_changes(repository, c, build) for c in commits]
        self._write(repository, entries)

    def handle_new_branch(
        self,
        repository: HostedRepository,
        commits: list[Commit],
        parent: Branch,
        branch: Branch,
    ) -> None:
        pass
