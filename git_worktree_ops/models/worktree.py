"""Worktree data models."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class WorktreeInfo:
    """Information about a git worktree."""

    path: str
    branch: str
    is_main: bool  # First entry reported by git, the primary working tree
    has_changes: Optional[bool] = None  # Only set by detailed listing
    changed_files_count: Optional[int] = None

    def to_dict(self) -> dict:
        data = {
            "path": self.path,
            "branch": self.branch,
            "isMain": self.is_main,
        }
        if self.has_changes is not None:
            data["hasChanges"] = self.has_changes
        if self.changed_files_count is not None:
            data["changedFilesCount"] = self.changed_files_count
        return data

    def __str__(self) -> str:
        """String representation of worktree."""
        main_marker = " (main)" if self.is_main else ""
        return f"{self.branch} @ {self.path}{main_marker}"
