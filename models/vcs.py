"""Pydantic models for version-control records.

These are produced by the repository diffing layer and are read-only here.
"""

import re
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from models.types import CommitHash, MessageLines

ABBREVIATED_HASH_LENGTH = 8

_BUILD_NUMBER_PATTERN = re.compile(r"\+([0-9]+)$")


class Author(BaseModel):
    """Name and email of a commit author or committer."""

    model_config = ConfigDict(frozen=True)

    name: str
    email: str

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>"


class PatchStatus(str, Enum):
    ADDED = "added"
    DELETED = "deleted"
    MODIFIED = "modified"
    RENAMED = "renamed"
    COPIED = "copied"
    UNMODIFIED = "unmodified"


class Patch(BaseModel):
    """One file-level change within a diff."""

    model_config = ConfigDict(frozen=True)

    status: PatchStatus
    source_path: str | None = None
    target_path: str | None = None


class Diff(BaseModel):
    """Changes between a commit and one of its parents."""

    model_config = ConfigDict(frozen=True)

    patches: list[Patch] = Field(default_factory=list)


class Commit(BaseModel):
    """A commit as handed over by the diffing layer."""

    model_config = ConfigDict(frozen=True)

    hash: CommitHash
    author: Author
    committer: Author
    date: datetime
    message: MessageLines = Field(default_factory=list)
    parent_diffs: list[Diff] = Field(default_factory=list)

    @property
    def abbreviated_hash(self) -> str:
        return self.hash[:ABBREVIATED_HASH_LENGTH]

    @property
    def title(self) -> str:
        return self.message[0] if self.message else ""


class Branch(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str

    def __str__(self) -> str:
        return self.name


class Tag(BaseModel):
    """A tag; `label` is the semantic name shown to humans (e.g. jdk-21+5)."""

    model_config = ConfigDict(frozen=True)

    name: str
    label: str | None = None

    @property
    def display_name(self) -> str:
        return self.label or self.name

    @property
    def build_number(self) -> int | None:
        match = _BUILD_NUMBER_PATTERN.search(self.display_name)
        if not match:
            return None
        return int(match.group(1))

    def __str__(self) -> str:
        return self.display_name
