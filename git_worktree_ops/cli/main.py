"""Command-line entry point for git-worktree-ops"""

import json
import os
import sys
from typing import List, Optional

from rich.console import Console

from git_worktree_ops.cli.args import parse_args
from git_worktree_ops.config import Config
from git_worktree_ops.handlers import handle_list, handle_list_branches, handle_switch_branch
from git_worktree_ops.logging_config import setup_logging
from git_worktree_ops.models import BranchInfo, BranchListing, SwitchResult, WorktreeInfo
from git_worktree_ops.services.display_service import DisplayService

console = Console()


def run_command(parsed_args, config: Config) -> dict:
    """Dispatch the parsed command to its handler and return the response."""
    path = os.path.abspath(parsed_args.path)
    if parsed_args.command == "list":
        return handle_list({"projectPath": path, "includeDetails": parsed_args.details}, config)
    if parsed_args.command == "branches":
        return handle_list_branches({"worktreePath": path}, config)
    return handle_switch_branch({"worktreePath": path, "branchName": parsed_args.branch}, config)


def render(parsed_args, response: dict, display: DisplayService) -> None:
    """Print a successful response in human-readable form."""
    if parsed_args.command == "list":
        worktrees = [
            WorktreeInfo(
                path=wt["path"],
                branch=wt["branch"],
                is_main=wt["isMain"],
                has_changes=wt.get("hasChanges"),
                changed_files_count=wt.get("changedFilesCount"),
            )
            for wt in response["worktrees"]
        ]
        display.display_worktrees(worktrees, show_details=parsed_args.details)
    elif parsed_args.command == "branches":
        result = response["result"]
        display.display_branches(
            BranchListing(
                current_branch=result["currentBranch"],
                branches=[
                    BranchInfo(name=b["name"], is_current=b["isCurrent"], is_remote=b["isRemote"])
                    for b in result["branches"]
                ],
            )
        )
    else:
        result = response["result"]
        display.display_switch_result(
            SwitchResult(
                previous_branch=result["previousBranch"],
                current_branch=result["currentBranch"],
                message=result["message"],
                stashed=result["stashed"],
                stash_conflict=result.get("stashConflict"),
            )
        )


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the application."""
    parsed_args = None
    try:
        parsed_args = parse_args(argv)

        setup_logging(verbose=parsed_args.verbose, debug=parsed_args.debug)

        config = Config(
            git_timeout=parsed_args.timeout,
            verbose=parsed_args.verbose,
            debug=parsed_args.debug,
        )

        if parsed_args.debug:
            console.print("[yellow]Debug mode enabled[/yellow]")
            console.print("[yellow]Configuration:[/yellow]")
            for key, value in config.to_dict().items():
                console.print(f"  {key}: {value}")

        response = run_command(parsed_args, config)

        if parsed_args.json:
            print(json.dumps(response, indent=2))
        else:
            display = DisplayService(verbose=parsed_args.verbose, debug=parsed_args.debug)
            if response["success"]:
                render(parsed_args, response, display)
            else:
                display.display_error(response["error"])

        return 0 if response["success"] else 1
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        return 1
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        if parsed_args is not None and parsed_args.debug:
            console.print_exception()
        return 1


if __name__ == "__main__":
    sys.exit(main())
