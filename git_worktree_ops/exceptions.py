"""Custom exceptions for git-worktree-ops"""

from typing import Optional


class WorktreeOpsError(Exception):
    """Base exception for all git-worktree-ops errors."""
    pass


class ValidationError(WorktreeOpsError):
    """Exception raised when required input is missing or invalid."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class BranchNotFoundError(ValidationError):
    """Exception raised when the target branch does not exist."""

    def __init__(self, branch: str):
        self.branch = branch
        super().__init__(f"Branch '{branch}' does not exist")


class GitOperationError(WorktreeOpsError):
    """Exception raised for errors in Git operations.

    ``message`` holds the raw error text git wrote to stderr; ``stdout`` keeps
    whatever it printed before failing (git reports merge conflicts there).
    """

    def __init__(
        self,
        operation: str,
        branch: Optional[str] = None,
        message: Optional[str] = None,
        output: Optional[str] = None,
    ):
        self.operation = operation
        self.branch = branch
        self.message = message
        self.stderr = message or ""
        self.stdout = output or ""

        error_msg = f"Git operation '{operation}' failed"
        if branch:
            error_msg += f" for branch '{branch}'"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class GitTimeoutError(GitOperationError):
    """Exception raised when a git invocation is killed after the configured timeout."""

    def __init__(self, operation: str, timeout: float, branch: Optional[str] = None):
        self.timeout = timeout
        super().__init__(operation, branch, f"timed out after {timeout:g} seconds")
