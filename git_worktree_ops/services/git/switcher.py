"""Branch switching with automatic stash and restore of uncommitted changes."""

from typing import Union, TYPE_CHECKING

from git_worktree_ops.config import resolve_config
from git_worktree_ops.exceptions import BranchNotFoundError, GitOperationError, ValidationError
from git_worktree_ops.models.switch import SwitchResult
from git_worktree_ops.services.git.branches import branch_exists, get_current_branch
from git_worktree_ops.services.git.runner import GitRunner
from git_worktree_ops.services.git.worktrees import count_changed_files
from git_worktree_ops.logging_config import get_logger

if TYPE_CHECKING:
    from git_worktree_ops.config import Config

logger = get_logger(__name__)


class BranchSwitcher:
    """Switches a worktree to another branch without losing uncommitted work.

    Sequence for a dirty worktree::

        stash push -> checkout -> stash pop

    If checkout fails the stash is popped again (best effort) and the
    checkout error is raised unchanged. If the pop after a successful
    checkout conflicts, the switch is still reported as a success with
    ``stash_conflict=True``.

    Callers must not run two switches against the same worktree at once.
    """

    def __init__(self, config: Union["Config", dict, None] = None):
        self.config = resolve_config(config)

    def _get_runner(self, path: str) -> GitRunner:
        """Get a git runner whose commands execute inside ``path``."""
        return GitRunner(path, self.config.git_timeout)

    def is_conflict(self, error: GitOperationError) -> bool:
        """Check whether a failed ``stash pop`` left merge conflicts behind."""
        text = f"{error.stderr}\n{error.stdout}"
        return any(marker in text for marker in self.config.conflict_markers)

    def switch_branch(self, worktree_path: str, branch_name: str) -> SwitchResult:
        """Check out ``branch_name`` in ``worktree_path``.

        Raises:
            ValidationError: Missing input or invalid branch name
            BranchNotFoundError: The target branch does not exist
            GitOperationError: A git step failed (checkout, stash, or a
                non-conflict stash pop failure)
        """
        if not worktree_path:
            raise ValidationError("worktreePath required")
        if not branch_name:
            raise ValidationError("branchName required")
        if branch_name.startswith("-"):
            raise ValidationError(f"Invalid branch name '{branch_name}'")

        runner = self._get_runner(worktree_path)

        previous_branch = get_current_branch(runner)
        if previous_branch == branch_name:
            logger.info(f"Already on branch '{branch_name}' in {worktree_path}")
            return SwitchResult(
                previous_branch=previous_branch,
                current_branch=branch_name,
                message=f"Already on branch '{branch_name}'",
                stashed=False,
            )

        if not branch_exists(runner, branch_name):
            raise BranchNotFoundError(branch_name)

        status = runner.run("status", "--porcelain", operation="status")
        stashed = False
        if count_changed_files(status) > 0:
            logger.info(f"Stashing uncommitted changes in {worktree_path}")
            runner.run(
                "stash", "push", "--include-untracked", "-m", self.config.stash_message,
                operation="stash push",
            )
            stashed = True

        try:
            runner.run("checkout", branch_name, operation="checkout", branch=branch_name)
        except GitOperationError:
            if stashed:
                logger.warning(f"Checkout of '{branch_name}' failed, restoring stashed changes")
                runner.attempt("stash", "pop", operation="stash pop")
            raise

        logger.info(f"Switched {worktree_path} from '{previous_branch}' to '{branch_name}'")

        if not stashed:
            return SwitchResult(
                previous_branch=previous_branch,
                current_branch=branch_name,
                message=f"Switched to branch '{branch_name}'",
                stashed=False,
            )

        try:
            runner.run("stash", "pop", operation="stash pop", branch=branch_name)
        except GitOperationError as e:
            if not self.is_conflict(e):
                raise
            logger.warning(f"Restoring stashed changes on '{branch_name}' produced conflicts")
            return SwitchResult(
                previous_branch=previous_branch,
                current_branch=branch_name,
                message=(
                    f"Switched to '{branch_name}' but stash had conflicts. Please resolve manually; "
                    "the stash entry was kept and can be dropped once resolved."
                ),
                stashed=True,
                stash_conflict=True,
            )

        return SwitchResult(
            previous_branch=previous_branch,
            current_branch=branch_name,
            message=f"Switched to branch '{branch_name}' (changes stashed and restored)",
            stashed=True,
        )
