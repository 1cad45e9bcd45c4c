"""
Branch name resolution for the current checkout.

CI systems often build a detached commit, so git alone cannot tell which
branch is being built. Providers are asked in order and the first non-empty
answer wins.
"""

import logging
import os
from abc import ABC, abstractmethod
from typing import Iterable, List, Mapping, Optional

from .history_provider import HistoryProvider

logger = logging.getLogger(__name__)

_HEADS_PREFIX = "refs/heads/"


class BranchNameProvider(ABC):
    """Source for the name of the branch being built."""

    @abstractmethod
    def branch_name(self) -> Optional[str]:
        """Return the branch name, or None if this source cannot tell."""


class GitBranchNameProvider(BranchNameProvider):
    """Branch name as reported by the history provider."""

    def __init__(self, history: HistoryProvider):
        self.history = history

    def branch_name(self) -> Optional[str]:
        return self.history.current_branch_name()


class EnvironmentBranchNameProvider(BranchNameProvider):
    """Branch name taken from CI environment variables.

    Variables are checked in the given order, e.g. ``BUILD_SOURCEBRANCHNAME``
    on Azure Pipelines or ``BRANCH_NAME`` on Jenkins.
    """

    def __init__(
        self,
        variables: Iterable[str],
        environ: Optional[Mapping[str, str]] = None,
    ):
        self.variables = list(variables)
        self.environ = environ if environ is not None else os.environ

    def branch_name(self) -> Optional[str]:
        for variable in self.variables:
            value = (self.environ.get(variable) or "").strip()
            if not value:
                continue
            if value.startswith(_HEADS_PREFIX):
                value = value[len(_HEADS_PREFIX) :]
            logger.debug(f"Branch name '{value}' taken from ${variable}")
            return value
        return None


class BranchNameResolver:
    """Ordered chain of branch name providers."""

    def __init__(self, providers: List[BranchNameProvider]):
        self.providers = list(providers)

    def resolve(self) -> Optional[str]:
        for provider in self.providers:
            name = provider.branch_name()
            if name:
                return name
        return None


def create_branch_name_resolver(
    history: HistoryProvider,
    env_vars: Optional[List[str]] = None,
    prefer_environment: bool = False,
    environ: Optional[Mapping[str, str]] = None,
) -> BranchNameResolver:
    """Build the default provider chain.

    Git answers first and the environment fills in for detached checkouts,
    unless ``prefer_environment`` puts the CI variables in front.
    """
    git_provider = GitBranchNameProvider(history)
    providers: List[BranchNameProvider] = [git_provider]
    if env_vars:
        env_provider = EnvironmentBranchNameProvider(env_vars, environ=environ)
        if prefer_environment:
            providers.insert(0, env_provider)
        else:
            providers.append(env_provider)
    return BranchNameResolver(providers)
