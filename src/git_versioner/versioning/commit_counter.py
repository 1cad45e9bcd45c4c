"""Commit counts relative to the origin commit."""

from dataclasses import dataclass

from .models import AncestorChain, CommitRef


@dataclass(frozen=True)
class CommitCounts:
    """Base and feature commit counts for one checkout."""

    base_branch_commit_count: int
    feature_branch_commit_count: int
    initial_commit: CommitRef


def count_commits(
    current_chain: AncestorChain, origin_commit: CommitRef
) -> CommitCounts:
    """Split the current chain at ``origin_commit``.

    The base count is the length of the origin commit's own history, so
    commits added to the base branch after the divergence never change it.
    Everything above the origin on the current chain is a feature commit.

    Raises:
        ValueError: If ``origin_commit`` is not on ``current_chain``
    """
    origin_chain = current_chain.from_commit(origin_commit)
    base_count = len(origin_chain)
    return CommitCounts(
        base_branch_commit_count=base_count,
        feature_branch_commit_count=len(current_chain) - base_count,
        initial_commit=current_chain.root,
    )
