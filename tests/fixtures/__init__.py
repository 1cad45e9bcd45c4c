"""
Test fixtures for Git Versioner tests.

Provides reusable test infrastructure including:
- FakeHistoryProvider: In-memory commit graph implementing HistoryProvider
- GitTestRepository: Real git repositories driven through subprocess
"""

from .fake_history import Commit, FakeHistoryProvider
from .git_repository import GitTestRepository, git_available

__all__ = ["Commit", "FakeHistoryProvider", "GitTestRepository", "git_available"]
