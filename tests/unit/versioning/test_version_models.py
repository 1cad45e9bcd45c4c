"""Tests for the value types of the version pipeline."""

import dataclasses

import pytest

from git_versioner.versioning.models import (
    NO_CHANGES,
    AncestorChain,
    FallbackReason,
    FallbackResult,
    LocalChanges,
    VersionResult,
)


class TestAncestorChain:
    def test_head_root_and_length(self):
        chain = AncestorChain.of(["c", "b", "a"])

        assert chain.head == "c"
        assert chain.root == "a"
        assert len(chain) == 3
        assert "b" in chain
        assert "z" not in chain
        assert list(chain) == ["c", "b", "a"]

    def test_empty_chain_rejected(self):
        with pytest.raises(ValueError):
            AncestorChain.of([])

    def test_from_commit(self):
        chain = AncestorChain.of(["c", "b", "a"])

        assert chain.from_commit("b") == AncestorChain.of(["b", "a"])
        assert chain.from_commit("c") == chain


class TestLocalChanges:
    def test_equality_by_all_fields(self):
        assert LocalChanges(3, 5, 7) == LocalChanges(3, 5, 7)
        assert LocalChanges(3, 5, 7) != LocalChanges(3, 5, 8)
        assert LocalChanges() == NO_CHANGES

    def test_has_changes(self):
        assert not NO_CHANGES.has_changes()
        assert LocalChanges(0, 1, 0).has_changes()

    def test_short_stats(self):
        assert LocalChanges(3, 5, 7).short_stats() == "3 +5 -7"
        assert NO_CHANGES.short_stats() == "no changes"

    def test_negative_counts_rejected(self):
        with pytest.raises(ValueError):
            LocalChanges(-1, 0, 0)


class TestVersionResult:
    def make_result(self, **overrides) -> VersionResult:
        values = dict(
            version_code=7,
            version_name="7-bug_123+4",
            base_branch_commit_count=7,
            feature_branch_commit_count=4,
            origin_commit="g" * 40,
            initial_commit="a" * 40,
            current_commit="1234567890abcdef",
            base_branch="main",
            branch_name="feature/bug_123",
        )
        values.update(overrides)
        return VersionResult(**values)

    def test_is_immutable(self):
        result = self.make_result()

        with pytest.raises(dataclasses.FrozenInstanceError):
            result.version_code = 8  # type: ignore[misc]

    def test_ranges(self):
        result = self.make_result()

        assert result.current_commit_short == "1234567"
        assert result.base_branch_range == "aaaaaaa..ggggggg"
        assert result.feature_branch_range == "ggggggg..1234567"

    def test_to_dict(self):
        data = self.make_result(local_changes=LocalChanges(3, 5, 7)).to_dict()

        assert data["versionCode"] == 7
        assert data["versionName"] == "7-bug_123+4"
        assert data["baseBranch"] == "main"
        assert data["featureBranchCommitCount"] == 4
        assert data["localChanges"] == {"filesChanged": 3, "additions": 5, "deletions": 7}


class TestFallbackResult:
    def test_defaults(self):
        fallback = FallbackResult(
            reason=FallbackReason.SHALLOW_HISTORY,
            message="shallow",
            remedy="git fetch --unshallow",
        )

        assert fallback.version_code == 1
        assert fallback.version_name == "undefined"
        assert fallback.to_dict()["fallbackReason"] == "shallow_history"
