"""Tests for the project-state gate and error propagation of GitVersioner."""

import pytest

from git_versioner.config import BranchConfig
from git_versioner.versioning.errors import (
    MissingCommit,
    NotAWorkingRepository,
    ShallowHistory,
    TopologyError,
)
from git_versioner.versioning.models import (
    FallbackReason,
    FallbackResult,
    LocalChanges,
    VersionResult,
)
from git_versioner.versioning.versioner import GitVersioner
from tests.fixtures import Commit, FakeHistoryProvider
from tests.fixtures.fake_history import linear_graph


class TestProjectStateGate:
    def test_shallow_history_uses_fallback(self):
        git = FakeHistoryProvider(
            [Commit(sha1="X", parent="a", date=150_000_000)],
            "X",
            [("X", "main")],
            LocalChanges(3, 5, 7),
            is_shallow=True,
        )

        result = GitVersioner(git).compute_version()

        assert isinstance(result, FallbackResult)
        assert result.version_code == 1
        assert result.version_name == "undefined"
        assert result.reason == FallbackReason.SHALLOW_HISTORY
        assert result.remedy == "git fetch --unshallow"
        assert result.base_branch_candidates == ["main", "master"]

    def test_shallow_history_never_reads_ancestry(self):
        git = FakeHistoryProvider(
            [Commit(sha1="X", parent="a", date=150_000_000)],
            "X",
            [("X", "main")],
            is_shallow=True,
        )

        GitVersioner(git).compute_version()

        assert git.calls == []

    def test_not_a_repository_uses_fallback(self):
        git = FakeHistoryProvider(is_working=False)

        result = GitVersioner(git).compute_version()

        assert isinstance(result, FallbackResult)
        assert result.version_code == 1
        assert result.version_name == "undefined"
        assert result.reason == FallbackReason.NOT_A_REPOSITORY
        assert result.remedy == "git init"

    def test_repository_without_commits_uses_fallback(self):
        git = FakeHistoryProvider()

        result = GitVersioner(git).compute_version()

        assert isinstance(result, FallbackResult)
        assert result.reason == FallbackReason.NO_COMMITS
        assert result.version_name == "undefined"

    def test_check_project_state_raises(self):
        with pytest.raises(NotAWorkingRepository):
            GitVersioner(FakeHistoryProvider(is_working=False)).check_project_state()

        shallow = FakeHistoryProvider(
            [Commit(sha1="X", parent=None, date=1)], "X", is_shallow=True
        )
        with pytest.raises(ShallowHistory):
            GitVersioner(shallow).check_project_state()


class TestUnresolvedBaseBranch:
    def test_degrades_to_full_chain_as_base(self):
        git = FakeHistoryProvider(linear_graph("abcde"), "e", [("e", "trunk")])

        result = GitVersioner(git).compute_version(
            BranchConfig(base_branches=["main", "master"])
        )

        assert isinstance(result, VersionResult)
        assert result.base_branch is None
        assert result.origin_commit == "e"
        assert result.base_branch_commit_count == 5
        assert result.feature_branch_commit_count == 0
        assert result.version_code == 5
        assert result.version_name == "5-trunk"


class TestHardFailures:
    def test_disjoint_history_raises_topology_error(self):
        graph = [
            Commit(sha1="X", parent="r1", date=2),
            Commit(sha1="r1", parent=None, date=1),
            Commit(sha1="m", parent="r2", date=2),
            Commit(sha1="r2", parent=None, date=1),
        ]
        git = FakeHistoryProvider(graph, "X", [("m", "main"), ("X", "feature/x")])

        with pytest.raises(TopologyError):
            GitVersioner(git).compute_version()

    def test_missing_ancestor_chain_raises_missing_commit(self):
        class BrokenHistory(FakeHistoryProvider):
            def ancestor_chain(self, reference):
                return None

        git = BrokenHistory(linear_graph("abc"), "c", [("c", "main")])

        with pytest.raises(MissingCommit) as exc_info:
            GitVersioner(git).compute_version()

        assert exc_info.value.reference == "c"

    def test_provider_errors_propagate(self):
        class FailingHistory(FakeHistoryProvider):
            def local_changes(self):
                raise OSError("disk on fire")

        git = FailingHistory(linear_graph("abc"), "c", [("c", "main")])

        with pytest.raises(OSError, match="disk on fire"):
            GitVersioner(git).compute_version()
