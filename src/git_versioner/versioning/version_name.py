"""Version name formatting.

Canonical form::

    <versionCode>[-<branchLabel>][+<featureCommits>][-SNAPSHOT[(<files> +<add> -<del>)]]
"""

from typing import Optional

from ..config import FormatOptions
from .models import NO_CHANGES, SHORT_SHA_LENGTH, CommitRef, LocalChanges

SNAPSHOT_SUFFIX = "-SNAPSHOT"


def branch_label(branch_name: str) -> str:
    """Last path segment of a branch name ("feature/bug_123" -> "bug_123")."""
    return branch_name.rsplit("/", 1)[-1]


def format_version_name(
    version_code: int,
    feature_branch_commit_count: int,
    current_commit: CommitRef,
    branch_name: Optional[str] = None,
    base_branch: Optional[str] = None,
    local_changes: LocalChanges = NO_CHANGES,
    options: Optional[FormatOptions] = None,
) -> str:
    """Render the version name for one computation."""
    options = options or FormatOptions()
    name = str(version_code)

    if branch_name is None:
        # Detached checkout, label with the commit instead
        name += f"-{current_commit[:SHORT_SHA_LENGTH]}"
    elif branch_name != base_branch:
        name += f"-{branch_label(branch_name)}"

    if feature_branch_commit_count > 0:
        name += f"+{feature_branch_commit_count}"

    if local_changes.has_changes():
        name += SNAPSHOT_SUFFIX
        if options.add_local_changes_details:
            name += f"({local_changes.short_stats()})"

    return name
