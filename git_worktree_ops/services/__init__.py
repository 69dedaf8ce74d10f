"""Services for git-worktree-ops."""
