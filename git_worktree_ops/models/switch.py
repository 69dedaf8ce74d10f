"""Branch switch result model."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class SwitchResult:
    """Outcome of a branch switch attempt."""

    previous_branch: str
    current_branch: str
    message: str
    stashed: bool
    stash_conflict: Optional[bool] = None  # True when restored changes need manual resolution

    def to_dict(self) -> dict:
        data = {
            "previousBranch": self.previous_branch,
            "currentBranch": self.current_branch,
            "message": self.message,
            "stashed": self.stashed,
        }
        if self.stash_conflict is not None:
            data["stashConflict"] = self.stash_conflict
        return data
