"""Error taxonomy for version computation.

Only NotAWorkingRepository and ShallowHistory are recoverable: the versioner
turns them into a fixed fallback result. Every other error aborts the
computation and reaches the caller unchanged.
"""

from typing import List, Optional


class GitVersionerError(Exception):
    """Base class for all Git Versioner errors."""

    def __init__(self, message: str, user_guidance: Optional[str] = None):
        super().__init__(message)
        self.user_guidance = user_guidance or ""


class NotAWorkingRepository(GitVersionerError):
    """The project directory is not a git working tree."""

    def __init__(self, message: str = "git not initialized"):
        super().__init__(message, user_guidance="git init")


class ShallowHistory(GitVersionerError):
    """The repository history is truncated (shallow clone)."""

    def __init__(self, message: str = "Git history is incomplete (shallow clone)"):
        super().__init__(message, user_guidance="git fetch --unshallow")


class UnresolvedBaseBranch(GitVersionerError):
    """None of the configured base branch candidates exist."""

    def __init__(self, candidates: List[str]):
        self.candidates = list(candidates)
        super().__init__(
            f"None of the base branch candidates exist: {', '.join(self.candidates)}",
            user_guidance="Configure an existing branch in base_branches",
        )


class TopologyError(GitVersionerError):
    """The current checkout and the base branch share no commit."""

    def __init__(self, head: str, base_branch: str):
        self.head = head
        self.base_branch = base_branch
        super().__init__(
            f"Commit {head} shares no history with base branch '{base_branch}'; "
            "repositories with multiple root commits are not supported"
        )


class MissingCommit(GitVersionerError):
    """A requested reference cannot be resolved in the repository."""

    def __init__(self, reference: str):
        self.reference = reference
        super().__init__(f"Reference '{reference}' not found in repository")


class HistoryProviderError(GitVersionerError):
    """Reading repository state failed (process error, timeout)."""

    def __init__(
        self,
        message: str,
        command: Optional[List[str]] = None,
        returncode: Optional[int] = None,
        stderr: str = "",
    ):
        super().__init__(message)
        self.command = list(command or [])
        self.returncode = returncode
        self.stderr = stderr
