"""Git-related services for git-worktree-ops."""

from .runner import GitRunner, is_git_repo
from .worktrees import WorktreeService
from .branches import BranchService
from .switcher import BranchSwitcher

__all__ = [
    "GitRunner",
    "is_git_repo",
    "WorktreeService",
    "BranchService",
    "BranchSwitcher",
]
