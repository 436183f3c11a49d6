"""
Plain-text rendering of commits, tags and branches for notification emails.

All data is extracted from the models here so the updaters only decide what
to send and where.
"""

from datetime import datetime, timezone

from models.vcs import Branch, Commit, Patch, PatchStatus, Tag
from notify.ports import HostedRepository
from shared.errors import MissingPath

DATE_FORMAT = "%Y-%m-%d %H:%M:%S +0000"
RULE = "=" * 56


def _require(path: str | None, patch: Patch, side: str) -> str:
    if not path:
        raise MissingPath(f"{patch.status.value} patch has no {side} path")
    return path


def patch_to_text(patch: Patch) -> str:
    """
    Render a file change as a one-line marker.

    Args:
        patch: The file-level change

    Returns:
        "+ path" for added, "- path" for deleted, "! path" for modified and
        "= path" for everything else (renames, copies, mode changes)

    Raises:
        MissingPath: if the path required by the patch status is absent
    """
    if patch.status is PatchStatus.ADDED:
        return "+ " + _require(patch.target_path, patch, "target")
    if patch.status is PatchStatus.DELETED:
        return "- " + _require(patch.source_path, patch, "source")
    if patch.status is PatchStatus.MODIFIED:
        return "! " + _require(patch.target_path, patch, "target")
    return "= " + _require(patch.target_path, patch, "target")


def format_commit_date(date: datetime) -> str:
    """Format a commit date in UTC; naive datetimes are taken as UTC."""
    if date.tzinfo is None:
        date = date.replace(tzinfo=timezone.utc)
    return date.astimezone(timezone.utc).strftime(DATE_FORMAT)


def commit_to_text(repository: HostedRepository, commit: Commit) -> str:
    """Render one commit as a changeset block."""
    lines = [
        f"Changeset: {commit.abbreviated_hash}",
        f"Author:    {commit.author}",
    ]
    if commit.author != commit.committer:
        lines.append(f"Committer: {commit.committer}")
    lines.extend(
        [
            f"Date:      {format_commit_date(commit.date)}",
            f"URL:       {repository.web_url(commit.hash)}",
            "",
            "\n".join(commit.message),
            "",
        ]
    )

    for diff in commit.parent_diffs:
        for patch in diff.patches:
            lines.append(patch_to_text(patch))

    return "\n".join(lines) + "\n"


def commits_to_text(repository: HostedRepository, commits: list[Commit]) -> str:
    """Body of a combined digest: every changeset block followed by a blank line."""
    return "".join(commit_to_text(repository, commit) + "\n" for commit in commits)


def _subject_prefix(repository: HostedRepository) -> str:
    return f"{repository.repository_type}: {repository.name}: "


def commits_to_subject(
    repository: HostedRepository,
    commits: list[Commit],
    branch: Branch,
    include_branch: bool = False,
) -> str:
    subject = _subject_prefix(repository)
    if include_branch:
        subject += f"{branch.name}: "
    if len(commits) > 1:
        subject += f"{len(commits)} new changesets"
    else:
        subject += commits[0].title
    return subject


def tag_to_subject(repository: HostedRepository, commit: Commit, tag: Tag) -> str:
    return (
        _subject_prefix(repository)
        + f"Added tag {tag.display_name} for changeset {commit.abbreviated_hash}"
    )


def new_branch_subject(
    repository: HostedRepository,
    commits: list[Commit],
    parent: Branch,
    branch: Branch,
) -> str:
    subject = (
        _subject_prefix(repository)
        + f"created branch {branch} based on the branch {parent}"
        + f" containing {len(commits)} unique commit"
    )
    if len(commits) != 1:
        subject += "s"
    return subject


def _commit_summary(commit: Commit) -> str:
    if commit.message:
        return f"{commit.abbreviated_hash}: {commit.message[0]}"
    return commit.abbreviated_hash


def tag_to_text(commits: list[Commit], tag: Tag) -> str:
    lines = [f"The following commits are included in {tag.display_name}", RULE]
    lines.extend(_commit_summary(commit) for commit in commits)
    return "\n".join(lines) + "\n"


def new_branch_to_text(commits: list[Commit], parent: Branch, branch: Branch) -> str:
    if not commits:
        return (
            f"The new branch {branch.name} is currently identical to the "
            f"{parent.name} branch.\n"
        )
    lines = [f"The following commits are unique to the {branch.name} branch", RULE]
    lines.extend(_commit_summary(commit) for commit in commits)
    return "\n".join(lines) + "\n"
