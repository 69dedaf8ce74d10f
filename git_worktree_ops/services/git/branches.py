"""Branch queries for a single worktree"""

from typing import List, Union, TYPE_CHECKING

from git_worktree_ops.config import resolve_config
from git_worktree_ops.exceptions import GitOperationError, GitTimeoutError, ValidationError
from git_worktree_ops.models.branch import BranchInfo, BranchListing
from git_worktree_ops.services.git.runner import GitRunner
from git_worktree_ops.logging_config import get_logger

if TYPE_CHECKING:
    from git_worktree_ops.config import Config

logger = get_logger(__name__)


def get_current_branch(runner: GitRunner) -> str:
    """Short name of the checked-out branch ("HEAD" when detached)."""
    return runner.run("rev-parse", "--abbrev-ref", "HEAD", operation="rev-parse").strip()


def branch_exists(runner: GitRunner, branch_name: str) -> bool:
    """Check whether ``branch_name`` resolves to a ref, without side effects."""
    try:
        runner.run("rev-parse", "--verify", branch_name, operation="rev-parse", branch=branch_name)
        return True
    except GitTimeoutError:
        raise
    except GitOperationError as e:
        logger.debug(f"Branch {branch_name} not found in {runner.working_dir}: {e}")
        return False


def parse_branch_names(output: str) -> List[str]:
    """Parse ``git for-each-ref --format=%(refname:short) refs/heads/`` output into names."""
    return [line.strip() for line in output.split("\n") if line.strip()]


class BranchService:
    """Service for reading the branches of a worktree."""

    def __init__(self, config: Union["Config", dict, None] = None):
        self.config = resolve_config(config)

    def _get_runner(self, path: str) -> GitRunner:
        """Get a git runner whose commands execute inside ``path``."""
        return GitRunner(path, self.config.git_timeout)

    def list_branches(self, worktree_path: str) -> BranchListing:
        """List local branches of a worktree and mark the current one.

        Raises:
            ValidationError: worktree_path was not supplied
            GitOperationError: either git query failed
        """
        if not worktree_path:
            raise ValidationError("worktreePath required")

        runner = self._get_runner(worktree_path)
        current_branch = get_current_branch(runner)
        # Local branches only, never a "(HEAD detached at ...)" line
        output = runner.run(
            "for-each-ref", "--format=%(refname:short)", "refs/heads/", operation="for-each-ref"
        )

        branches = [
            BranchInfo(name=name, is_current=name == current_branch)
            for name in parse_branch_names(output)
        ]
        logger.debug(f"Found {len(branches)} branches in {worktree_path}, current: {current_branch}")
        return BranchListing(current_branch=current_branch, branches=branches)
