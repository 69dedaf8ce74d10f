"""
git-worktree-ops - List worktrees and branches, switch branches safely
"""

from .__version__ import __version__
from .config import Config
from .handlers import handle_list, handle_list_branches, handle_switch_branch
from .services.git import BranchService, BranchSwitcher, WorktreeService

__all__ = [
    "__version__",
    "Config",
    "WorktreeService",
    "BranchService",
    "BranchSwitcher",
    "handle_list",
    "handle_list_branches",
    "handle_switch_branch",
]
