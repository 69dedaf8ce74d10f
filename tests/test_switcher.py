"""Tests for BranchSwitcher"""
from pathlib import Path
from unittest.mock import patch

import pytest

from git_worktree_ops.config import Config
from git_worktree_ops.exceptions import BranchNotFoundError, GitOperationError, ValidationError
from git_worktree_ops.services.git import BranchSwitcher

from conftest import FakeRunner, git_error


CURRENT = ("rev-parse", "--abbrev-ref", "HEAD")
VERIFY = ("rev-parse", "--verify")
STATUS = ("status", "--porcelain")
STASH_PUSH = ("stash", "push")
STASH_POP = ("stash", "pop")
CHECKOUT = ("checkout",)


def make_runner(dirty=False, overrides=None):
    responses = {
        CURRENT: "main",
        VERIFY: "0123abcd",
        STATUS: " M src/app.py\n?? scratch.txt" if dirty else "",
    }
    responses.update(overrides or {})
    return FakeRunner(responses)


def switch(runner, branch="feature-x", config=None):
    switcher = BranchSwitcher(config)
    with patch.object(switcher, "_get_runner", return_value=runner):
        return switcher.switch_branch("/fake/worktree", branch)


class TestSwitchValidation:
    """Input checks happen before any git call."""

    @pytest.mark.parametrize("path,branch,message", [
        ("", "feature-x", "worktreePath required"),
        (None, "feature-x", "worktreePath required"),
        ("/fake/worktree", "", "branchName required"),
        ("/fake/worktree", None, "branchName required"),
    ])
    def test_missing_input(self, path, branch, message):
        switcher = BranchSwitcher()
        with patch.object(switcher, "_get_runner") as mock_get_runner:
            with pytest.raises(ValidationError, match=message):
                switcher.switch_branch(path, branch)
            mock_get_runner.assert_not_called()

    def test_option_like_branch_name_rejected(self):
        runner = make_runner()
        with pytest.raises(ValidationError, match="Invalid branch name"):
            switch(runner, branch="--orphan")
        assert runner.calls == []

    def test_nonexistent_branch_has_no_side_effects(self):
        runner = make_runner(dirty=True, overrides={VERIFY: git_error("rev-parse", "fatal: Needed a single revision")})

        with pytest.raises(BranchNotFoundError, match="Branch 'nope' does not exist"):
            switch(runner, branch="nope")

        assert runner.commands() == ["rev-parse", "rev-parse"]


class TestSwitchStateMachine:
    """Test the stash / checkout / restore sequence."""

    def test_already_on_branch_is_noop(self):
        runner = make_runner(dirty=True)

        result = switch(runner, branch="main")

        assert runner.calls == [CURRENT]
        assert result.stashed is False
        assert result.previous_branch == "main"
        assert result.current_branch == "main"
        assert result.message == "Already on branch 'main'"

    def test_clean_switch(self):
        runner = make_runner()

        result = switch(runner)

        assert runner.commands() == ["rev-parse", "rev-parse", "status", "checkout"]
        assert runner.calls[-1] == ("checkout", "feature-x")
        assert result.to_dict() == {
            "previousBranch": "main",
            "currentBranch": "feature-x",
            "message": "Switched to branch 'feature-x'",
            "stashed": False,
        }

    def test_dirty_switch_stashes_before_checkout_and_restores(self):
        runner = make_runner(dirty=True)

        result = switch(runner)

        assert runner.commands() == [
            "rev-parse", "rev-parse", "status", "stash push", "checkout", "stash pop",
        ]
        assert result.stashed is True
        assert result.stash_conflict is None
        assert result.message == "Switched to branch 'feature-x' (changes stashed and restored)"
        assert "stashConflict" not in result.to_dict()

    def test_stash_uses_configured_message_and_includes_untracked(self):
        runner = make_runner(dirty=True)

        switch(runner, config=Config(stash_message="wip before switch"))

        stash_call = next(call for call in runner.calls if call[:2] == STASH_PUSH)
        assert "--include-untracked" in stash_call
        assert stash_call[-2:] == ("-m", "wip before switch")

    def test_conflicting_restore_is_success_with_flag(self):
        pop_error = git_error(
            "stash pop",
            stderr="The stash entry is kept in case you need it again.",
            stdout="Auto-merging notes.txt\nCONFLICT (content): Merge conflict in notes.txt",
        )
        runner = make_runner(dirty=True, overrides={STASH_POP: pop_error})

        result = switch(runner)

        assert result.stashed is True
        assert result.stash_conflict is True
        assert result.current_branch == "feature-x"
        assert "conflicts" in result.message
        assert result.to_dict()["stashConflict"] is True
        assert "stash entry was kept" in result.message

    def test_conflict_marker_in_stderr(self):
        pop_error = git_error("stash pop", stderr="error: conflict while restoring index")
        runner = make_runner(dirty=True, overrides={STASH_POP: pop_error})

        assert switch(runner).stash_conflict is True

    def test_non_conflict_restore_failure_propagates(self):
        pop_error = git_error("stash pop", stderr="scratch.txt already exists, no checkout")
        runner = make_runner(dirty=True, overrides={STASH_POP: pop_error})

        with pytest.raises(GitOperationError) as exc_info:
            switch(runner)

        assert exc_info.value is pop_error

    def test_custom_conflict_markers(self):
        pop_error = git_error("stash pop", stderr="Konflikt beim Zusammenführen")
        runner = make_runner(dirty=True, overrides={STASH_POP: pop_error})

        result = switch(runner, config=Config(conflict_markers=["Konflikt"]))

        assert result.stash_conflict is True

    def test_checkout_failure_restores_stash_then_reraises(self):
        checkout_error = git_error("checkout", stderr="fatal: 'feature-x' is already checked out at '/other'")
        runner = make_runner(dirty=True, overrides={CHECKOUT: checkout_error})

        with pytest.raises(GitOperationError) as exc_info:
            switch(runner)

        assert exc_info.value is checkout_error
        assert runner.commands() == [
            "rev-parse", "rev-parse", "status", "stash push", "checkout", "stash pop",
        ]

    def test_checkout_failure_keeps_original_error_when_recovery_fails(self):
        checkout_error = git_error("checkout", stderr="error: Your local changes would be overwritten")
        runner = make_runner(dirty=True, overrides={
            CHECKOUT: checkout_error,
            STASH_POP: git_error("stash pop", stderr="No stash entries found."),
        })

        with pytest.raises(GitOperationError) as exc_info:
            switch(runner)

        assert exc_info.value is checkout_error
        assert str(exc_info.value) == str(checkout_error)

    def test_checkout_failure_without_stash_does_not_pop(self):
        checkout_error = git_error("checkout", stderr="fatal: invalid reference")
        runner = make_runner(overrides={CHECKOUT: checkout_error})

        with pytest.raises(GitOperationError):
            switch(runner)

        assert "stash pop" not in runner.commands()

    def test_stash_failure_aborts_before_checkout(self):
        runner = make_runner(dirty=True, overrides={STASH_PUSH: git_error("stash push", stderr="fatal: cannot stash")})

        with pytest.raises(GitOperationError, match="cannot stash"):
            switch(runner)

        assert "checkout" not in runner.commands()


class TestSwitchWithRealRepo:
    """End-to-end switches against a real repository."""

    def test_clean_switch(self, git_repo_with_branches):
        repo = git_repo_with_branches

        result = BranchSwitcher().switch_branch(repo.working_dir, "feature-x")

        assert result.previous_branch == "main"
        assert result.current_branch == "feature-x"
        assert result.stashed is False
        assert repo.active_branch.name == "feature-x"

    def test_dirty_switch_carries_changes(self, git_repo_with_branches):
        repo = git_repo_with_branches
        readme = Path(repo.working_dir) / "README.md"
        readme.write_text("# Edited\n")

        result = BranchSwitcher().switch_branch(repo.working_dir, "feature-y")

        assert result.stashed is True
        assert result.stash_conflict is None
        assert repo.active_branch.name == "feature-y"
        assert readme.read_text() == "# Edited\n"
        assert repo.git.stash("list") == ""

    def test_untracked_only_changes_are_carried(self, git_repo_with_branches):
        repo = git_repo_with_branches
        scratch = Path(repo.working_dir) / "scratch.txt"
        scratch.write_text("todo\n")

        result = BranchSwitcher().switch_branch(repo.working_dir, "feature-x")

        assert result.stashed is True
        assert scratch.read_text() == "todo\n"
        assert repo.git.stash("list") == ""

    def test_conflicting_restore(self, git_repo_with_branches):
        repo = git_repo_with_branches
        notes = Path(repo.working_dir) / "notes.txt"
        notes.write_text("dirty\n")

        result = BranchSwitcher().switch_branch(repo.working_dir, "feature-x")

        assert result.stashed is True
        assert result.stash_conflict is True
        assert repo.active_branch.name == "feature-x"
        assert "<<<<<<<" in notes.read_text()
        assert "stash entry was kept" in result.message
        assert "auto-stash before branch switch" in repo.git.stash("list")

    def test_checkout_failure_restores_changes(self, git_repo_with_branches, temp_dir):
        repo = git_repo_with_branches
        repo.git.worktree("add", str(temp_dir / "wt-feature"), "feature-x")
        readme = Path(repo.working_dir) / "README.md"
        readme.write_text("# Edited\n")

        with pytest.raises(GitOperationError) as exc_info:
            BranchSwitcher().switch_branch(repo.working_dir, "feature-x")

        assert exc_info.value.operation == "checkout"
        assert "feature-x" in str(exc_info.value)
        assert repo.active_branch.name == "main"
        assert readme.read_text() == "# Edited\n"
        assert repo.git.stash("list") == ""

    def test_nonexistent_branch(self, git_repo_with_branches):
        repo = git_repo_with_branches
        readme = Path(repo.working_dir) / "README.md"
        readme.write_text("# Edited\n")

        with pytest.raises(BranchNotFoundError):
            BranchSwitcher().switch_branch(repo.working_dir, "does-not-exist")

        assert repo.git.stash("list") == ""
        assert readme.read_text() == "# Edited\n"
