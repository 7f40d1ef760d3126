"""Pytest fixtures for shadow-clone-jutsu tests"""
import tempfile
from pathlib import Path
from unittest.mock import Mock
import pytest
import git

from shadow_clone_jutsu.config import Config
from shadow_clone_jutsu.exceptions import PaneLimitExceededError, TmuxCommandError
from shadow_clone_jutsu.models.tmux import AttachResult
from shadow_clone_jutsu.services.git import GitOperations
from shadow_clone_jutsu.services.path_guard import PathLoopGuard
from shadow_clone_jutsu.services.prompt_service import PromptService


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def git_repo(temp_dir):
    """Create a real Git repository for testing."""
    repo_path = temp_dir / "test_repo"
    repo_path.mkdir()

    # Initialize repository
    repo = git.Repo.init(repo_path)

    # Configure git user for commits
    repo.config_writer().set_value("user", "name", "Test User").release()
    repo.config_writer().set_value("user", "email", "test@example.com").release()

    # Create initial commit on main branch
    test_file = repo_path / "README.md"
    test_file.write_text("# Test Repository\n")
    repo.index.add(["README.md"])
    repo.index.commit("Initial commit")

    # Rename master to main if needed
    repo.git.branch('-M', 'main')

    yield repo

    # Cleanup
    repo.close()


@pytest.fixture
def git_repo_with_branches(git_repo):
    """Create a Git repository with a few extra branches."""
    git_repo.git.branch('feature-1')
    git_repo.git.branch('feature/login')
    git_repo.git.branch('bugfix')
    yield git_repo


@pytest.fixture
def config():
    """Configuration placing worktrees under <repo>/worktrees."""
    return Config(worktrees_path="worktrees")


@pytest.fixture
def mock_git_ops():
    """Create a mock GitOperations rooted at /repo."""
    ops = Mock(spec=GitOperations)
    ops.cwd = "/repo"
    ops.repository_root.return_value = "/repo"
    ops.check_branch_name_collision.return_value = []
    ops.list_local_branches.return_value = ["main"]
    ops.get_current_branch.return_value = "main"
    return ops


@pytest.fixture
def path_guard():
    return PathLoopGuard()


@pytest.fixture
def mock_prompt():
    """Prompt service whose answers are set per test."""
    prompt = Mock(spec=PromptService)
    prompt.confirm.return_value = False
    return prompt


class FakeTmuxClient:
    """In-memory stand-in for TmuxClient that records every call."""

    def __init__(self, sessions=None, no_space_after=None, missing_panes=()):
        self.sessions = set(sessions or [])
        self.calls = []
        self.no_space_after = no_space_after
        self.splits = 0
        self.missing_panes = set(missing_panes)

    def is_available(self):
        return True

    def has_session(self, name):
        self.calls.append(("has_session", name))
        return name in self.sessions

    def new_session(self, name, cwd):
        self.calls.append(("new_session", name, cwd))
        self.sessions.add(name)

    def kill_session(self, name):
        self.calls.append(("kill_session", name))
        self.sessions.discard(name)

    def split_window(self, name, orientation, cwd, pane_count=0):
        self.calls.append(("split_window", name, orientation, cwd))
        self.splits += 1
        if self.no_space_after is not None and self.splits > self.no_space_after:
            raise PaneLimitExceededError(pane_count, orientation.value)

    def select_layout(self, name, layout):
        self.calls.append(("select_layout", name, layout))

    def select_pane(self, target, title=None):
        self.calls.append(("select_pane", target, title))
        if target in self.missing_panes:
            raise TmuxCommandError("select-pane", "exit 1", f"can't find pane: {target}")

    def rename_window(self, name, title):
        self.calls.append(("rename_window", name, title))

    def attach(self, name):
        self.calls.append(("attach", name))
        return AttachResult(replaced=True)

    def call_names(self):
        return [call[0] for call in self.calls]


@pytest.fixture
def fake_tmux():
    return FakeTmuxClient()
