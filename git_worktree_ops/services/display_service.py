"""Display service for worktree operation results"""
from typing import List

from rich.console import Console
from rich.table import Table

from git_worktree_ops.constants import (
    SYMBOL_CURRENT_BRANCH,
    SYMBOL_MAIN_WORKTREE,
    STYLE_CURRENT,
    STYLE_DIRTY,
    STYLE_MAIN,
)
from git_worktree_ops.models import BranchListing, SwitchResult, WorktreeInfo
from git_worktree_ops.logging_config import get_logger

console = Console()
logger = get_logger(__name__)


class DisplayService:
    """Renders worktree, branch and switch results with rich."""

    def __init__(self, verbose: bool = False, debug: bool = False):
        self.verbose = verbose
        self.debug_mode = debug

    def display_worktrees(self, worktrees: List[WorktreeInfo], show_details: bool = False) -> None:
        """Display a table of worktrees."""
        if not worktrees:
            console.print("[dim]No worktrees found[/dim]")
            return

        table = Table()
        table.add_column("Branch")
        table.add_column("Path")
        table.add_column("Main")
        if show_details:
            table.add_column("Changes", justify="right")

        for wt in worktrees:
            row = [wt.branch, wt.path, SYMBOL_MAIN_WORKTREE if wt.is_main else ""]
            style = STYLE_MAIN if wt.is_main else None
            if show_details:
                row.append(str(wt.changed_files_count or 0))
                if wt.has_changes:
                    style = STYLE_DIRTY
            table.add_row(*row, style=style)

        console.print(table)

    def display_branches(self, listing: BranchListing) -> None:
        """Display local branches, highlighting the current one."""
        for branch in listing.branches:
            if branch.is_current:
                console.print(f"[{STYLE_CURRENT}]{SYMBOL_CURRENT_BRANCH} {branch.name}[/{STYLE_CURRENT}]")
            else:
                console.print(f"  {branch.name}")
        if self.verbose:
            console.print(f"\n[dim]{len(listing.branches)} branches, current: {listing.current_branch}[/dim]")

    def display_switch_result(self, result: SwitchResult) -> None:
        """Display the outcome of a branch switch."""
        if result.stash_conflict:
            console.print(f"[yellow]{result.message}[/yellow]")
        else:
            console.print(f"[green]{result.message}[/green]")
        if self.verbose and result.previous_branch != result.current_branch:
            console.print(f"[dim]{result.previous_branch} -> {result.current_branch}[/dim]")

    def display_error(self, message: str) -> None:
        console.print(f"[red]Error: {message}[/red]")
