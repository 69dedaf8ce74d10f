"""Branch models"""
from dataclasses import dataclass, field
from typing import List


@dataclass
class BranchInfo:
    """A local branch of a worktree."""
    name: str
    is_current: bool
    is_remote: bool = False  # Remote branches are not listed

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "isCurrent": self.is_current,
            "isRemote": self.is_remote,
        }


@dataclass
class BranchListing:
    """Current branch plus every local branch of a worktree."""
    current_branch: str
    branches: List[BranchInfo] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "currentBranch": self.current_branch,
            "branches": [branch.to_dict() for branch in self.branches],
        }
