"""Worktree listing service for git-worktree-ops."""

from typing import Optional, Dict, List, Union, TYPE_CHECKING

from git_worktree_ops.config import resolve_config
from git_worktree_ops.exceptions import ValidationError
from git_worktree_ops.models.worktree import WorktreeInfo
from git_worktree_ops.services.git.runner import GitRunner, is_git_repo
from git_worktree_ops.logging_config import get_logger

if TYPE_CHECKING:
    from git_worktree_ops.config import Config

logger = get_logger(__name__)

BRANCH_REF_PREFIX = "refs/heads/"


def parse_worktree_porcelain(output: str) -> List[WorktreeInfo]:
    """Parse ``git worktree list --porcelain`` output.

    Format:
        worktree /path/to/worktree
        HEAD commit_sha
        branch refs/heads/branch-name
        (blank line between worktrees)

    Records without both a path and a branch (detached HEAD, bare) are
    skipped. The first complete record is the main worktree, since git
    always reports the primary working tree first.
    """
    worktrees: List[WorktreeInfo] = []
    current: Dict[str, str] = {}

    def flush():
        if current.get("path") and current.get("branch"):
            worktrees.append(
                WorktreeInfo(
                    path=current["path"],
                    branch=current["branch"],
                    is_main=not worktrees,
                )
            )
        elif current:
            logger.debug(f"Skipping worktree record without branch: {current}")
        current.clear()

    for line in output.split("\n"):
        if not line.strip():
            flush()
            continue

        if line.startswith("worktree "):
            current["path"] = line[len("worktree "):]
        elif line.startswith("branch "):
            branch_ref = line[len("branch "):]
            if branch_ref.startswith(BRANCH_REF_PREFIX):
                branch_ref = branch_ref[len(BRANCH_REF_PREFIX):]
            current["branch"] = branch_ref

    # Handle last entry if no trailing blank line
    flush()
    return worktrees


def count_changed_files(status_output: str) -> int:
    """Number of non-blank lines in ``git status --porcelain`` output."""
    return sum(1 for line in status_output.split("\n") if line.strip())


class WorktreeService:
    """Service for listing the worktrees of a repository."""

    def __init__(self, config: Union["Config", dict, None] = None):
        self.config = resolve_config(config)

    def _get_runner(self, path: str) -> GitRunner:
        """Get a git runner whose commands execute inside ``path``."""
        return GitRunner(path, self.config.git_timeout)

    def _is_git_repo(self, path: str) -> bool:
        return is_git_repo(path, self.config.git_timeout)

    def list_worktrees(self, project_path: str, include_details: bool = False) -> List[WorktreeInfo]:
        """List all worktrees of the repository at ``project_path``.

        Args:
            project_path: Any path inside the repository
            include_details: Also report uncommitted changes per worktree

        Returns:
            WorktreeInfo entries in git's order; empty if the path is not a
            git repository

        Raises:
            ValidationError: project_path was not supplied
            GitOperationError: ``git worktree list`` failed
        """
        if not project_path:
            raise ValidationError("projectPath required")

        if not self._is_git_repo(project_path):
            logger.debug(f"{project_path} is not a git repository, nothing to list")
            return []

        output = self._get_runner(project_path).run("worktree", "list", "--porcelain", operation="worktree list")
        worktrees = parse_worktree_porcelain(output)

        if include_details:
            for worktree in worktrees:
                self._add_change_details(worktree)

        logger.debug(f"Found {len(worktrees)} worktrees")
        for wt in worktrees:
            logger.debug(f"  {wt}")
        return worktrees

    def _add_change_details(self, worktree: WorktreeInfo) -> None:
        """Fill in change status for one worktree; failures count as clean."""
        status: Optional[str] = self._get_runner(worktree.path).attempt(
            "status", "--porcelain", operation="status"
        )
        if status is None:
            logger.debug(f"Could not check status of {worktree.path}, assuming no changes")
            worktree.has_changes = False
            worktree.changed_files_count = 0
            return

        worktree.changed_files_count = count_changed_files(status)
        worktree.has_changes = worktree.changed_files_count > 0
