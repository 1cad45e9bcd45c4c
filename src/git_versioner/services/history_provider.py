"""Capability contract for reading repository state."""

from abc import ABC, abstractmethod
from typing import Optional

from ..versioning.models import AncestorChain, CommitRef, LocalChanges


class HistoryProvider(ABC):
    """Source of truth for ancestry, timestamps and working tree state.

    Implementations own all I/O, including timeouts. Failures are raised as
    HistoryProviderError; lookups of unknown references return None.
    """

    @abstractmethod
    def resolve(self, reference: str) -> Optional[CommitRef]:
        """Resolve a branch name or commit id to a commit id, None if unknown."""

    @abstractmethod
    def ancestor_chain(self, reference: str) -> Optional[AncestorChain]:
        """Single-parent history of ``reference`` (head first), None if unknown."""

    @abstractmethod
    def timestamp(self, reference: str) -> int:
        """Commit time of ``reference`` in seconds since the epoch."""

    @abstractmethod
    def current_head(self) -> Optional[CommitRef]:
        """Commit checked out in the working tree, None without commits."""

    @abstractmethod
    def current_branch_name(self) -> Optional[str]:
        """Name of the checked out branch, None on a detached checkout."""

    @abstractmethod
    def local_changes(self) -> LocalChanges:
        """Uncommitted changes relative to the current head."""

    @abstractmethod
    def is_working_repository(self) -> bool:
        """True when the directory is a usable git working tree."""

    @abstractmethod
    def is_shallow_history(self) -> bool:
        """True when the history was truncated by a shallow clone."""
