"""
Git Versioner - build versions derived from git history.

Computes a deterministic version code and version name from the commit
topology of a repository: the number of commits on the base branch up to
the point where the current checkout diverged, the number of feature
commits on top of it, and a summary of uncommitted changes.
"""

__version__ = "1.0.0"
