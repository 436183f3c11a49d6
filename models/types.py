"""Shared type definitions for type checking.

Uses NewType for identifiers that must not be mixed up (a commit hash is not a
Message-ID even though both are strings).

Uses TypeAlias for purely structural types.
"""

from typing import NewType, TypeAlias

# Identifier types
CommitHash = NewType("CommitHash", str)
MessageID = NewType("MessageID", str)

# Structural aliases
HeaderMap: TypeAlias = dict[str, str]
MessageLines: TypeAlias = list[str]
RepositoryName: TypeAlias = str  # e.g. "openjdk/jdk"
