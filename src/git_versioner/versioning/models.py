"""Value types shared by the version computation pipeline."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

# Opaque commit identifier, usually a full SHA-1.
CommitRef = str

SHORT_SHA_LENGTH = 7

FALLBACK_VERSION_CODE = 1
FALLBACK_VERSION_NAME = "undefined"


@dataclass(frozen=True)
class AncestorChain:
    """Linear history of a reference, ordered head first down to the root.

    Each commit's parent is the element that follows it. Walked once per
    computation and shared between the resolver and the counter.
    """

    commits: Tuple[CommitRef, ...]

    def __post_init__(self):
        if not self.commits:
            raise ValueError("AncestorChain must contain at least one commit")

    @classmethod
    def of(cls, commits: Sequence[CommitRef]) -> "AncestorChain":
        return cls(tuple(commits))

    @property
    def head(self) -> CommitRef:
        return self.commits[0]

    @property
    def root(self) -> CommitRef:
        return self.commits[-1]

    def __len__(self) -> int:
        return len(self.commits)

    def __iter__(self) -> Iterator[CommitRef]:
        return iter(self.commits)

    def __contains__(self, commit: object) -> bool:
        return commit in self.commits

    def from_commit(self, commit: CommitRef) -> "AncestorChain":
        """Return the chain as if ``commit`` were the tip.

        Raises:
            ValueError: If ``commit`` is not part of this chain
        """
        index = self.commits.index(commit)
        return AncestorChain(self.commits[index:])


@dataclass(frozen=True)
class LocalChanges:
    """Uncommitted working tree changes relative to HEAD."""

    files_changed: int = 0
    additions: int = 0
    deletions: int = 0

    def __post_init__(self):
        for name in ("files_changed", "additions", "deletions"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must not be negative")

    def has_changes(self) -> bool:
        return self != NO_CHANGES

    def short_stats(self) -> str:
        if not self.has_changes():
            return "no changes"
        return f"{self.files_changed} +{self.additions} -{self.deletions}"


NO_CHANGES = LocalChanges(0, 0, 0)


def _short(commit: Optional[CommitRef]) -> str:
    return commit[:SHORT_SHA_LENGTH] if commit else ""


@dataclass(frozen=True)
class VersionResult:
    """Snapshot of the version derived from one repository state."""

    version_code: int
    version_name: str
    base_branch_commit_count: int
    feature_branch_commit_count: int
    origin_commit: CommitRef
    initial_commit: CommitRef
    current_commit: CommitRef
    base_branch: Optional[str] = None
    branch_name: Optional[str] = None
    local_changes: LocalChanges = NO_CHANGES
    time_component: int = 0
    year_factor: int = 0

    @property
    def current_commit_short(self) -> str:
        return _short(self.current_commit)

    @property
    def base_branch_range(self) -> str:
        return f"{_short(self.initial_commit)}..{_short(self.origin_commit)}"

    @property
    def feature_branch_range(self) -> str:
        return f"{_short(self.origin_commit)}..{self.current_commit_short}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "versionCode": self.version_code,
            "versionName": self.version_name,
            "baseBranch": self.base_branch,
            "branchName": self.branch_name,
            "currentCommit": self.current_commit,
            "baseBranchCommitCount": self.base_branch_commit_count,
            "featureBranchCommitCount": self.feature_branch_commit_count,
            "originCommit": self.origin_commit,
            "initialCommit": self.initial_commit,
            "timeComponent": self.time_component,
            "yearFactor": self.year_factor,
            "localChanges": {
                "filesChanged": self.local_changes.files_changed,
                "additions": self.local_changes.additions,
                "deletions": self.local_changes.deletions,
            },
        }


class FallbackReason(str, Enum):
    """Why the repository cannot be versioned from its history."""

    NOT_A_REPOSITORY = "not_a_repository"
    SHALLOW_HISTORY = "shallow_history"
    NO_COMMITS = "no_commits"


@dataclass(frozen=True)
class FallbackResult:
    """Fixed default version reported when counting would be wrong."""

    reason: FallbackReason
    message: str
    remedy: str
    base_branch_candidates: List[str] = field(default_factory=list)
    version_code: int = FALLBACK_VERSION_CODE
    version_name: str = FALLBACK_VERSION_NAME

    def to_dict(self) -> Dict[str, Any]:
        return {
            "versionCode": self.version_code,
            "versionName": self.version_name,
            "fallbackReason": self.reason.value,
            "message": self.message,
            "remedy": self.remedy,
            "baseBranchCandidates": list(self.base_branch_candidates),
        }
