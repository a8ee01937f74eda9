"""Git queries.

Usage:
    from relflow.git import Repository

    branch = Repository(Path(".")).current_branch()
"""

from relflow.git.repository import GitError, Repository

__all__ = [
    "GitError",
    "Repository",
]
