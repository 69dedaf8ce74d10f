"""Shared constants for git-worktree-ops."""

# Symbol constants
SYMBOL_CURRENT_BRANCH = "*"
SYMBOL_MAIN_WORKTREE = "✓"

# Rich styles
STYLE_CURRENT = "green"
STYLE_MAIN = "cyan"
STYLE_DIRTY = "yellow"
