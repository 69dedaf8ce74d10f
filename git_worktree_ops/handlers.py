"""Request handlers for worktree operations.

Each handler takes a request mapping (the decoded body of a client request)
and returns a response envelope::

    {"success": True, ...payload}
    {"success": False, "error": "<message>", "status": 400 | 500}

Handlers never raise for expected failures.
"""

from typing import Any, Dict, Mapping, Optional, Union, TYPE_CHECKING

from git_worktree_ops.config import resolve_config
from git_worktree_ops.exceptions import GitOperationError, ValidationError
from git_worktree_ops.services.git import BranchService, BranchSwitcher, WorktreeService
from git_worktree_ops.logging_config import get_logger

if TYPE_CHECKING:
    from git_worktree_ops.config import Config

logger = get_logger(__name__)

Response = Dict[str, Any]


def get_error_message(error: BaseException) -> str:
    """Human-readable message for an error, preferring git's own text."""
    if isinstance(error, GitOperationError) and error.message:
        return error.message
    if isinstance(error, ValidationError):
        return error.message
    return str(error) or error.__class__.__name__


def error_response(error: BaseException, context: str) -> Response:
    """Build a failure envelope and log the error."""
    if isinstance(error, ValidationError):
        status = 400
        logger.warning(f"{context}: {error}")
    else:
        status = 500
        logger.error(f"{context}: {error}")
    return {"success": False, "error": get_error_message(error), "status": status}


def handle_list(request: Mapping[str, Any], config: Union["Config", dict, None] = None) -> Response:
    """List worktrees. Request: ``projectPath``, optional ``includeDetails``."""
    try:
        service = WorktreeService(config)
        worktrees = service.list_worktrees(
            request.get("projectPath"),
            include_details=bool(request.get("includeDetails", False)),
        )
        return {"success": True, "worktrees": [wt.to_dict() for wt in worktrees]}
    except (ValidationError, GitOperationError) as e:
        return error_response(e, "List worktrees failed")


def handle_list_branches(request: Mapping[str, Any], config: Union["Config", dict, None] = None) -> Response:
    """List local branches. Request: ``worktreePath``."""
    try:
        listing = BranchService(config).list_branches(request.get("worktreePath"))
        return {"success": True, "result": listing.to_dict()}
    except (ValidationError, GitOperationError) as e:
        return error_response(e, "List branches failed")


def handle_switch_branch(request: Mapping[str, Any], config: Union["Config", dict, None] = None) -> Response:
    """Switch branch. Request: ``worktreePath``, ``branchName``."""
    try:
        result = BranchSwitcher(config).switch_branch(
            request.get("worktreePath"),
            request.get("branchName"),
        )
        return {"success": True, "result": result.to_dict()}
    except (ValidationError, GitOperationError) as e:
        return error_response(e, "Switch branch failed")


HANDLERS = {
    "list": handle_list,
    "list-branches": handle_list_branches,
    "switch-branch": handle_switch_branch,
}


def dispatch(name: str, request: Mapping[str, Any], config: Optional["Config"] = None) -> Response:
    """Route a request to the handler registered under ``name``."""
    handler = HANDLERS.get(name)
    if handler is None:
        return {"success": False, "error": f"Unknown operation '{name}'", "status": 404}
    return handler(request, resolve_config(config))
