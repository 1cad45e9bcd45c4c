"""Locating the divergence point between the checkout and the base branch."""

import logging
from typing import List, Optional, Tuple

from ..services.history_provider import HistoryProvider
from .errors import TopologyError, UnresolvedBaseBranch
from .models import AncestorChain, CommitRef

logger = logging.getLogger(__name__)


def select_base_branch(
    history: HistoryProvider, candidates: List[str]
) -> Tuple[str, CommitRef]:
    """Return the first candidate branch that exists, with its commit.

    Raises:
        UnresolvedBaseBranch: If no candidate resolves
    """
    for name in candidates:
        commit = history.resolve(name)
        if commit is not None:
            return name, commit
        logger.debug(f"Base branch candidate '{name}' does not exist, skipping")
    raise UnresolvedBaseBranch(candidates)


def find_origin_commit(
    current_chain: AncestorChain,
    base_chain: AncestorChain,
    base_branch: Optional[str] = None,
) -> CommitRef:
    """Nearest commit of ``current_chain`` that is also in ``base_chain``.

    The current chain is scanned head to root, so the first hit is the
    closest shared ancestor. When the head itself is on the base branch the
    head is returned.

    Raises:
        TopologyError: If the chains share no commit
    """
    base_commits = set(base_chain)
    for commit in current_chain:
        if commit in base_commits:
            return commit
    raise TopologyError(current_chain.head, base_branch or base_chain.head)
