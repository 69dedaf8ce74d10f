"""Pytest fixtures for git-worktree-ops tests"""
import tempfile
from pathlib import Path
from typing import Dict, List, Tuple, Union

import pytest
import git

from git_worktree_ops.config import Config
from git_worktree_ops.exceptions import GitOperationError
from git_worktree_ops.services.git.runner import GitRunner


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture
def config():
    """Default configuration."""
    return Config()


@pytest.fixture
def git_repo(temp_dir):
    """Create a real Git repository with one commit on main."""
    repo_path = temp_dir / "test_repo"
    repo_path.mkdir()

    repo = git.Repo.init(repo_path)

    # Configure git user for commits
    with repo.config_writer() as writer:
        writer.set_value("user", "name", "Test User")
        writer.set_value("user", "email", "test@example.com")

    test_file = repo_path / "README.md"
    test_file.write_text("# Test Repository\n")
    repo.index.add(["README.md"])
    repo.index.commit("Initial commit")

    repo.git.branch("-M", "main")

    yield repo

    repo.close()


@pytest.fixture
def git_repo_with_branches(git_repo):
    """Repository with main and feature-x, where both edit notes.txt differently."""
    repo = git_repo
    repo_path = Path(repo.working_dir)

    (repo_path / "notes.txt").write_text("base\n")
    repo.index.add(["notes.txt"])
    repo.index.commit("Add notes")

    repo.git.checkout("-b", "feature-x")
    (repo_path / "notes.txt").write_text("feature\n")
    repo.index.add(["notes.txt"])
    repo.index.commit("Change notes on feature-x")

    repo.git.checkout("main")
    repo.git.branch("feature-y")

    yield repo


class FakeRunner(GitRunner):
    """GitRunner that records calls and answers from a script instead of git.

    ``responses`` maps an argument prefix (tuple) to stdout text or to an
    exception instance to raise. The longest matching prefix wins; commands
    without a match return an empty string.
    """

    def __init__(self, responses: Dict[Tuple[str, ...], Union[str, Exception]] = None):
        super().__init__("/fake/worktree")
        self.responses = responses or {}
        self.calls: List[Tuple[str, ...]] = []

    def run(self, *args, operation, branch=None):
        self.calls.append(args)
        matches = [prefix for prefix in self.responses if args[:len(prefix)] == prefix]
        if not matches:
            return ""
        response = self.responses[max(matches, key=len)]
        if isinstance(response, Exception):
            raise response
        return response

    def commands(self) -> List[str]:
        """Calls as 'subcommand' or 'subcommand action' strings."""
        names = []
        for args in self.calls:
            if args[0] == "stash":
                names.append(f"stash {args[1]}")
            else:
                names.append(args[0])
        return names


def git_error(operation: str, stderr: str = "", stdout: str = "") -> GitOperationError:
    return GitOperationError(operation, message=stderr, output=stdout)
