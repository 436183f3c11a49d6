"""Factory functions for creating test commits, tags and emails."""

import hashlib
from datetime import datetime, timezone

from models.mail import Conversation, Email, EmailAddress
from models.types import MessageID
from models.vcs import Author, Commit, Diff, Patch, PatchStatus


def fake_hash(seed: str) -> str:
    """Deterministic 40-character hash for a seed."""
    return hashlib.sha1(seed.encode("utf-8")).hexdigest()


def create_test_author(name: str = "Duke", email: str = "duke@openjdk.org") -> Author:
    return Author(name=name, email=email)


def create_test_commit(
    seed: str = "c1",
    message: list[str] | None = None,
    author: Author | None = None,
    committer: Author | None = None,
    date: datetime | None = None,
    patches: list[Patch] | None = None,
    **overrides,
) -> Commit:
    """
    Factory for creating test commits.

    Args:
        seed: Seed for the deterministic hash
        message: Message lines (defaults to a single "<seed>: Fix <seed>" line)
        author: Commit author (defaults to Duke)
        committer: Committer (defaults to the author)
        date: Commit date (defaults to 2024-01-02 03:04:05 UTC)
        patches: Patches of the single parent diff (defaults to one modified file)
        **overrides: Override any field

    Returns:
        Commit model
    """
    author = author or create_test_author()
    fields = {
        "hash": fake_hash(seed),
        "author": author,
        "committer": committer or author,
        "date": date or datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
        "message": message if message is not None else [f"{seed}: Fix {seed}"],
        "parent_diffs": [
            Diff(
                patches=patches
                if patches is not None
                else [Patch(status=PatchStatus.MODIFIED, source_path="README", target_path="README")]
            )
        ],
    }
    fields.update(overrides)
    return Commit(**fields)


def create_test_email(
    subject: str = "RFR: 8000001: Fix something",
    body: str = "Please review.",
    sender: str = "Reviewer <reviewer@openjdk.org>",
    message_id: str | None = None,
    **overrides,
) -> Email:
    address = EmailAddress.parse(sender)
    fields = {
        "id": MessageID(message_id or f"<{fake_hash(subject + body)[:12]}@openjdk.org>"),
        "subject": subject,
        "body": body,
        "sender": address,
        "author": address,
        "date": datetime(2024, 1, 1, tzinfo=timezone.utc),
    }
    fields.update(overrides)
    return Email(**fields)


def create_test_conversation(first: Email, replies: list[Email] | None = None) -> Conversation:
    return Conversation(first=first, replies=replies or [])
