"""
Version computation from git history.

Pipeline: project-state gate -> ancestor chains -> origin commit ->
commit counts -> version code -> version name. Every call reads the
repository afresh and returns an immutable snapshot.
"""

import logging
from typing import List, Optional, Union

from ..config import BranchConfig, FormatOptions, TimeComponentConfig
from ..services.branch_name_providers import BranchNameResolver, GitBranchNameProvider
from ..services.history_provider import HistoryProvider
from .ancestor_resolver import find_origin_commit, select_base_branch
from .commit_counter import count_commits
from .errors import (
    GitVersionerError,
    MissingCommit,
    NotAWorkingRepository,
    ShallowHistory,
    UnresolvedBaseBranch,
)
from .models import AncestorChain, FallbackReason, FallbackResult, VersionResult
from .version_code import time_component, version_code
from .version_name import format_version_name

logger = logging.getLogger(__name__)

SHALLOW_HISTORY_MESSAGE = (
    "Git history is incomplete (shallow clone). The complete history is "
    "required to calculate the version; the version code would be incorrect."
)
NOT_A_REPOSITORY_MESSAGE = "git not initialized"
NO_COMMITS_MESSAGE = "The repository has no commits yet"

VersionOutcome = Union[VersionResult, FallbackResult]


class GitVersioner:
    """Derives version code and name from a history provider."""

    def __init__(
        self,
        history: HistoryProvider,
        branch_name_resolver: Optional[BranchNameResolver] = None,
    ):
        """Initialize the versioner.

        Args:
            history: Source of repository state
            branch_name_resolver: Chain used to name the current branch,
                defaults to asking git only
        """
        self.history = history
        self.branch_name_resolver = branch_name_resolver or BranchNameResolver(
            [GitBranchNameProvider(history)]
        )

    def check_project_state(self) -> None:
        """Verify the repository can be versioned from its history.

        Raises:
            NotAWorkingRepository: If the directory is not a git working tree
            ShallowHistory: If the history was truncated by a shallow clone
        """
        if not self.history.is_working_repository():
            raise NotAWorkingRepository(NOT_A_REPOSITORY_MESSAGE)
        if self.history.is_shallow_history():
            raise ShallowHistory(SHALLOW_HISTORY_MESSAGE)

    def compute_version(
        self,
        branch_config: Optional[BranchConfig] = None,
        format_options: Optional[FormatOptions] = None,
        time_config: Optional[TimeComponentConfig] = None,
    ) -> VersionOutcome:
        """Compute the version of the current checkout.

        Returns:
            VersionResult, or FallbackResult when the repository is not a
            working checkout, is shallow, or has no commits

        Raises:
            TopologyError: If the checkout shares no history with the base branch
            MissingCommit: If a resolved reference has no history
            HistoryProviderError: If reading the repository fails
        """
        branch_config = branch_config or BranchConfig()
        format_options = format_options or FormatOptions()
        time_config = time_config or TimeComponentConfig()
        candidates = list(branch_config.base_branches)

        try:
            self.check_project_state()
        except NotAWorkingRepository as e:
            return self._fallback(FallbackReason.NOT_A_REPOSITORY, e, candidates)
        except ShallowHistory as e:
            return self._fallback(FallbackReason.SHALLOW_HISTORY, e, candidates)

        head = self.history.current_head()
        if head is None:
            return self._fallback(
                FallbackReason.NO_COMMITS,
                GitVersionerError(NO_COMMITS_MESSAGE, "git commit"),
                candidates,
            )

        current_chain = self._chain(head)

        base_branch: Optional[str]
        try:
            base_branch, base_commit = select_base_branch(self.history, candidates)
        except UnresolvedBaseBranch as e:
            logger.warning(f"{e}; counting the whole history as base branch commits")
            base_branch = None
            origin_commit = head
        else:
            base_chain = self._chain(base_commit)
            origin_commit = find_origin_commit(current_chain, base_chain, base_branch)

        counts = count_commits(current_chain, origin_commit)
        logger.debug(
            f"Origin {origin_commit}: {counts.base_branch_commit_count} base commits, "
            f"{counts.feature_branch_commit_count} feature commits"
        )

        year_factor = time_config.year_factor
        time_points = 0
        if year_factor > 0:
            time_points = time_component(
                self.history.timestamp(origin_commit),
                self.history.timestamp(counts.initial_commit),
                year_factor,
            )

        code = version_code(counts.base_branch_commit_count, time_points)
        local_changes = self.history.local_changes()
        branch_name = self.branch_name_resolver.resolve()

        name = format_version_name(
            code,
            counts.feature_branch_commit_count,
            head,
            branch_name=branch_name,
            base_branch=base_branch,
            local_changes=local_changes,
            options=format_options,
        )

        return VersionResult(
            version_code=code,
            version_name=name,
            base_branch_commit_count=counts.base_branch_commit_count,
            feature_branch_commit_count=counts.feature_branch_commit_count,
            origin_commit=origin_commit,
            initial_commit=counts.initial_commit,
            current_commit=head,
            base_branch=base_branch,
            branch_name=branch_name,
            local_changes=local_changes,
            time_component=time_points,
            year_factor=year_factor,
        )

    def _chain(self, reference: str) -> AncestorChain:
        chain = self.history.ancestor_chain(reference)
        if chain is None:
            raise MissingCommit(reference)
        return chain

    @staticmethod
    def _fallback(
        reason: FallbackReason, error: GitVersionerError, candidates: List[str]
    ) -> FallbackResult:
        logger.warning(f"Using fallback version: {error}")
        return FallbackResult(
            reason=reason,
            message=str(error),
            remedy=error.user_guidance,
            base_branch_candidates=list(candidates),
        )
