"""
Shared pytest fixtures for Git Versioner tests.

Provides the fake history graphs used by the core tests and real git
repositories for the provider and CLI tests.
"""

from pathlib import Path
from typing import List

import pytest

from tests.fixtures import Commit, GitTestRepository, git_available


@pytest.fixture
def feature_branch_graph() -> List[Commit]:
    """Eleven commits; main at g, feature/bug_123 four commits ahead at X."""
    return [
        Commit(sha1="X", parent="j", date=150_010_000),  # <-- feature/bug_123, HEAD
        Commit(sha1="j", parent="i", date=150_009_000),
        Commit(sha1="i", parent="h", date=150_008_000),
        Commit(sha1="h", parent="g", date=150_007_000),
        Commit(sha1="g", parent="f", date=150_006_000),  # <-- main
        Commit(sha1="f", parent="e", date=150_005_000),
        Commit(sha1="e", parent="d", date=150_004_000),
        Commit(sha1="d", parent="c", date=150_003_000),
        Commit(sha1="c", parent="b", date=150_002_000),
        Commit(sha1="b", parent="a", date=150_001_000),
        Commit(sha1="a", parent=None, date=150_000_000),
    ]


@pytest.fixture
def git_repo(tmp_path: Path) -> GitTestRepository:
    """Empty git repository on an unborn 'main' branch."""
    if not git_available():
        pytest.skip("git is not installed")
    return GitTestRepository(tmp_path / "repo").setup()
