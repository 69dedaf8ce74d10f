"""Version information for git-worktree-ops."""

__version__ = "0.1.0"
