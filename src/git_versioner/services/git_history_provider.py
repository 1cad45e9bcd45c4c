"""
Git-backed history provider.

Reads ancestry, timestamps and working tree statistics by invoking the git
binary in the project directory. Each call runs a fresh git process; nothing
is cached between calls so repeated computations always see the current
repository state.
"""

import logging
import re
import subprocess
from pathlib import Path
from typing import List, Optional

from ..utils.git_runner import DEFAULT_GIT_TIMEOUT, run_git_command
from ..versioning.errors import HistoryProviderError, MissingCommit
from ..versioning.models import NO_CHANGES, AncestorChain, CommitRef, LocalChanges
from .history_provider import HistoryProvider

logger = logging.getLogger(__name__)

_SHORTSTAT_FILES = re.compile(r"(\d+) files? changed")
_SHORTSTAT_INSERTIONS = re.compile(r"(\d+) insertions?\(\+\)")
_SHORTSTAT_DELETIONS = re.compile(r"(\d+) deletions?\(-\)")


def parse_shortstat(output: str) -> LocalChanges:
    """Parse the summary line printed by ``git diff --shortstat``.

    Example input: `` 3 files changed, 5 insertions(+), 7 deletions(-)``.
    Parts git omits (no insertions, no deletions) count as zero.
    """
    text = output.strip()
    if not text:
        return NO_CHANGES

    def _count(pattern: "re.Pattern[str]") -> int:
        match = pattern.search(text)
        return int(match.group(1)) if match else 0

    return LocalChanges(
        files_changed=_count(_SHORTSTAT_FILES),
        additions=_count(_SHORTSTAT_INSERTIONS),
        deletions=_count(_SHORTSTAT_DELETIONS),
    )


class GitHistoryProvider(HistoryProvider):
    """History provider that shells out to git."""

    def __init__(self, project_dir: Path, timeout: float = DEFAULT_GIT_TIMEOUT):
        """Initialize the provider.

        Args:
            project_dir: Directory inside the git working tree
            timeout: Timeout in seconds for each git invocation
        """
        self.project_dir = Path(project_dir)
        self.timeout = timeout

    def _run(self, args: List[str]) -> subprocess.CompletedProcess:
        """Run git without raising on non-zero exit codes.

        Raises:
            HistoryProviderError: If git cannot be started or the command times out
        """
        cmd = ["git"] + args
        try:
            return run_git_command(
                cmd, cwd=self.project_dir, check=False, timeout=self.timeout
            )
        except subprocess.TimeoutExpired as e:
            raise HistoryProviderError(
                f"Git command timed out after {self.timeout}s: {' '.join(cmd)}",
                command=cmd,
            ) from e
        except FileNotFoundError as e:
            raise HistoryProviderError(
                "git executable not found on PATH", command=cmd
            ) from e
        except OSError as e:
            raise HistoryProviderError(f"Unable to run git: {e}", command=cmd) from e

    def _run_checked(self, args: List[str]) -> str:
        """Run git and return stdout, raising on any non-zero exit code."""
        result = self._run(args)
        if result.returncode != 0:
            raise HistoryProviderError(
                f"Git command failed ({result.returncode}): git {' '.join(args)}: "
                f"{result.stderr.strip()}",
                command=["git"] + args,
                returncode=result.returncode,
                stderr=result.stderr,
            )
        return str(result.stdout)

    def resolve(self, reference: str) -> Optional[CommitRef]:
        result = self._run(
            ["rev-parse", "--verify", "--quiet", f"{reference}^{{commit}}"]
        )
        if result.returncode != 0:
            return None
        sha = result.stdout.strip()
        return sha or None

    def ancestor_chain(self, reference: str) -> Optional[AncestorChain]:
        if self.resolve(reference) is None:
            return None
        output = self._run_checked(["rev-list", "--first-parent", reference])
        commits = [line.strip() for line in output.splitlines() if line.strip()]
        if not commits:
            return None
        logger.debug(f"Ancestor chain of {reference}: {len(commits)} commits")
        return AncestorChain.of(commits)

    def timestamp(self, reference: str) -> int:
        if self.resolve(reference) is None:
            raise MissingCommit(reference)
        output = self._run_checked(["log", "-1", "--format=%ct", reference]).strip()
        try:
            return int(output)
        except ValueError as e:
            raise HistoryProviderError(
                f"Unexpected commit time for {reference}: {output!r}",
                command=["git", "log", "-1", "--format=%ct", reference],
            ) from e

    def current_head(self) -> Optional[CommitRef]:
        return self.resolve("HEAD")

    def current_branch_name(self) -> Optional[str]:
        result = self._run(["symbolic-ref", "--short", "-q", "HEAD"])
        if result.returncode != 0:
            # Detached HEAD
            return None
        branch = result.stdout.strip()
        return branch or None

    def local_changes(self) -> LocalChanges:
        output = self._run_checked(["diff", "--shortstat", "HEAD"])
        changes = parse_shortstat(output)
        logger.debug(f"Local changes: {changes.short_stats()}")
        return changes

    def is_working_repository(self) -> bool:
        try:
            result = self._run(["rev-parse", "--is-inside-work-tree"])
        except HistoryProviderError as e:
            if not isinstance(e.__cause__, FileNotFoundError):
                raise
            logger.warning(f"Unable to query git: {e}")
            return False
        return result.returncode == 0 and result.stdout.strip() == "true"

    def is_shallow_history(self) -> bool:
        output = self._run_checked(["rev-parse", "--is-shallow-repository"]).strip()
        if output in ("true", "false"):
            return output == "true"

        # git < 2.15 echoes unknown flags back instead of answering
        git_dir = Path(self._run_checked(["rev-parse", "--git-dir"]).strip())
        if not git_dir.is_absolute():
            git_dir = self.project_dir / git_dir
        return (git_dir / "shallow").exists()
