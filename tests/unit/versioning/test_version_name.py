"""Tests for version name formatting."""

import pytest

from git_versioner.config import FormatOptions
from git_versioner.versioning.models import LocalChanges
from git_versioner.versioning.version_name import branch_label, format_version_name


class TestBranchLabel:
    @pytest.mark.parametrize(
        "branch_name, expected",
        [
            ("feature/bug_123", "bug_123"),
            ("users/alice/feature/login", "login"),
            ("develop", "develop"),
        ],
    )
    def test_last_path_segment(self, branch_name, expected):
        assert branch_label(branch_name) == expected


class TestFormatVersionName:
    def test_feature_branch_with_commits(self):
        name = format_version_name(
            7, 4, "X", branch_name="feature/bug_123", base_branch="main"
        )
        assert name == "7-bug_123+4"

    def test_feature_branch_without_commits(self):
        name = format_version_name(
            7, 0, "X", branch_name="feature/bug_123", base_branch="main"
        )
        assert name == "7-bug_123"

    def test_local_changes_with_details(self):
        name = format_version_name(
            7,
            4,
            "X",
            branch_name="feature/bug_123",
            base_branch="main",
            local_changes=LocalChanges(3, 5, 7),
        )
        assert name == "7-bug_123+4-SNAPSHOT(3 +5 -7)"

    def test_local_changes_without_details(self):
        name = format_version_name(
            7,
            4,
            "X",
            branch_name="feature/bug_123",
            base_branch="main",
            local_changes=LocalChanges(3, 5, 7),
            options=FormatOptions(add_local_changes_details=False),
        )
        assert name == "7-bug_123+4-SNAPSHOT"

    def test_detached_checkout_uses_short_sha(self):
        name = format_version_name(5, 3, "abcdefghij", base_branch="main")
        assert name == "5-abcdefg+3"

    def test_short_commit_id_used_whole(self):
        assert format_version_name(5, 0, "abc", base_branch="main") == "5-abc"

    def test_base_branch_has_no_branch_segment(self):
        name = format_version_name(12, 0, "X", branch_name="main", base_branch="main")
        assert name == "12"

    def test_base_branch_with_local_changes(self):
        name = format_version_name(
            12,
            0,
            "X",
            branch_name="main",
            base_branch="main",
            local_changes=LocalChanges(1, 0, 0),
        )
        assert name == "12-SNAPSHOT(1 +0 -0)"

    def test_unresolved_base_branch_labels_every_branch(self):
        name = format_version_name(3, 0, "X", branch_name="main", base_branch=None)
        assert name == "3-main"

    def test_never_emits_plus_zero(self):
        name = format_version_name(3, 0, "X", branch_name="topic", base_branch="main")
        assert "+" not in name
