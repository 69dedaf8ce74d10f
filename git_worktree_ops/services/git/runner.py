"""Git command runner scoped to a single working directory."""

import os
import git
from typing import Any, Optional

from git_worktree_ops.exceptions import GitOperationError, GitTimeoutError
from git_worktree_ops.logging_config import get_logger

logger = get_logger(__name__)

# GitPython replaces stderr with this text when it kills a command
TIMEOUT_SIGNATURE = "did not complete in"


class GitRunner:
    """Runs git commands with the working directory set to one worktree."""

    def __init__(self, working_dir: str, timeout: Optional[float] = None):
        """Initialize the runner.

        Args:
            working_dir: Directory every command runs in
            timeout: Seconds before a command is killed (None = no limit)
        """
        self.working_dir = working_dir
        self.timeout = timeout

    def _get_git(self) -> git.Git:
        """Get a GitPython command wrapper bound to the working directory."""
        return git.Git(self.working_dir)

    def run(self, *args: str, operation: str, branch: Optional[str] = None) -> str:
        """Run ``git <args>`` and return its stdout.

        Raises:
            GitTimeoutError: The command was killed after ``timeout`` seconds
            GitOperationError: git exited nonzero or could not be started
        """
        command = ["git", *args]
        logger.debug(f"Running '{' '.join(command)}' in {self.working_dir}")
        if not os.path.isdir(self.working_dir):
            # GitPython would silently fall back to the process cwd
            raise GitOperationError(operation, branch, f"Not a directory: {self.working_dir}")
        try:
            status, stdout, stderr = self._get_git().execute(
                command,
                with_extended_output=True,
                with_exceptions=False,
                kill_after_timeout=self.timeout,
            )
        except git.exc.GitCommandNotFound as e:
            # Missing executable or missing working directory
            logger.debug(f"Could not start git in {self.working_dir}: {e}")
            raise GitOperationError(operation, branch, str(e)) from e

        if status != 0:
            stderr = (stderr or "").strip()
            if self.timeout is not None and TIMEOUT_SIGNATURE in stderr:
                logger.warning(f"git {operation} timed out after {self.timeout}s in {self.working_dir}")
                raise GitTimeoutError(operation, self.timeout, branch)
            if not stderr:
                stderr = f"exited with code {status}"
            logger.debug(f"git {operation} failed (exit {status}): {stderr}")
            raise GitOperationError(operation, branch, stderr, output=stdout)

        return stdout

    def attempt(self, *args: str, operation: str, default: Any = None) -> Any:
        """Best-effort variant of :meth:`run`.

        Returns ``default`` instead of raising when git fails. Only for steps
        whose failure must not abort the surrounding operation.
        """
        try:
            return self.run(*args, operation=operation)
        except GitOperationError as e:
            logger.debug(f"Ignoring failed git {operation} in {self.working_dir}: {e}")
            return default


def is_git_repo(path: str, timeout: Optional[float] = None) -> bool:
    """Check whether ``path`` lies inside a git working tree."""
    if not path:
        return False
    try:
        output = GitRunner(path, timeout).run("rev-parse", "--is-inside-work-tree", operation="rev-parse")
    except GitTimeoutError:
        raise
    except GitOperationError as e:
        logger.debug(f"{path} is not a git working tree: {e}")
        return False
    return output.strip() == "true"
