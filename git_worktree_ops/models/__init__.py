"""Data models for git-worktree-ops."""

from .worktree import WorktreeInfo
from .branch import BranchInfo, BranchListing
from .switch import SwitchResult

__all__ = ["WorktreeInfo", "BranchInfo", "BranchListing", "SwitchResult"]
