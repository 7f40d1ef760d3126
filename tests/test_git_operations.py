"""Tests for git operations against real repositories"""
import os
from unittest.mock import patch
import git
import pytest

from shadow_clone_jutsu.exceptions import (
    GitOperationError,
    NotARepositoryError,
    error_from_git_failure,
)
from shadow_clone_jutsu.services.git import GitOperations, WorktreeService, parse_worktree_porcelain


PORCELAIN = """worktree /repo
HEAD 1111111111111111111111111111111111111111
branch refs/heads/main

worktree /repo/.git/orchestrations/feature-x
HEAD 2222222222222222222222222222222222222222
branch refs/heads/feature-x
locked reviewing changes

worktree /repo/.git/orchestrations/detached
HEAD 3333333333333333333333333333333333333333
detached
prunable gitdir file points to non-existent location

worktree /repo/.git/orchestrations/plain-lock
HEAD 4444444444444444444444444444444444444444
branch refs/heads/plain-lock
locked"""


class TestPorcelainParsing:
    """Test parsing of `git worktree list --porcelain`."""

    def test_entries(self):
        worktrees = parse_worktree_porcelain(PORCELAIN)

        assert [wt.path for wt in worktrees] == [
            "/repo",
            "/repo/.git/orchestrations/feature-x",
            "/repo/.git/orchestrations/detached",
            "/repo/.git/orchestrations/plain-lock",
        ]
        assert [wt.is_main for wt in worktrees] == [True, False, False, False]

    def test_branch_and_head(self):
        feature = parse_worktree_porcelain(PORCELAIN)[1]
        assert feature.branch_ref == "refs/heads/feature-x"
        assert feature.branch_name == "feature-x"
        assert feature.head_commit == "2" * 40

    def test_lock_reason(self):
        worktrees = parse_worktree_porcelain(PORCELAIN)
        assert worktrees[1].locked is True
        assert worktrees[1].lock_reason == "reviewing changes"
        assert worktrees[3].locked is True
        assert worktrees[3].lock_reason is None

    def test_detached_and_prunable(self):
        detached = parse_worktree_porcelain(PORCELAIN)[2]
        assert detached.detached is True
        assert detached.branch_ref is None
        assert detached.branch_name is None
        assert detached.prunable is True

    def test_empty_output(self):
        assert parse_worktree_porcelain("") == []

    def test_matches_branch(self):
        feature = parse_worktree_porcelain(PORCELAIN)[1]
        assert feature.matches_branch("feature-x")
        assert feature.matches_branch("refs/heads/feature-x")
        assert not feature.matches_branch("feature")


class TestRepositoryQueries:
    """Test repository detection and branch queries."""

    def test_is_repository(self, git_repo, temp_dir):
        outside = temp_dir / "outside"
        outside.mkdir()

        assert GitOperations(git_repo.working_dir).is_repository() is True
        assert GitOperations(str(outside)).is_repository() is False

    def test_repository_root_from_subdirectory(self, git_repo):
        subdir = os.path.join(git_repo.working_dir, "src", "pkg")
        os.makedirs(subdir)

        root = GitOperations(subdir).repository_root()

        assert os.path.realpath(root) == os.path.realpath(git_repo.working_dir)

    def test_repository_root_outside_repository(self, temp_dir):
        outside = temp_dir / "outside"
        outside.mkdir()

        with pytest.raises(NotARepositoryError):
            GitOperations(str(outside)).repository_root()

    def test_list_local_branches(self, git_repo_with_branches):
        ops = GitOperations(git_repo_with_branches.working_dir)
        assert set(ops.list_local_branches()) == {"main", "feature-1", "feature/login", "bugfix"}

    def test_no_remote_branches(self, git_repo):
        assert GitOperations(git_repo.working_dir).list_remote_branches() == []

    def test_current_branch(self, git_repo):
        ops = GitOperations(git_repo.working_dir)
        assert ops.get_current_branch() == "main"

        git_repo.git.checkout(git_repo.head.commit.hexsha)
        assert ops.get_current_branch() is None

    def test_branch_collisions(self, git_repo_with_branches):
        ops = GitOperations(git_repo_with_branches.working_dir)

        assert ops.check_branch_name_collision("bugfix") == ["bugfix"]
        assert ops.check_branch_name_collision("feature") == ["feature/login"]
        assert ops.check_branch_name_collision("feature/login/extra") == ["feature/login"]
        assert ops.check_branch_name_collision("brand-new") == []


class TestWorktreeCommands:
    """Test worktree add, list and remove."""

    def test_add_new_branch(self, git_repo, temp_dir):
        ops = GitOperations(git_repo.working_dir)
        path = temp_dir / "worktrees" / "feature-x"

        ops.worktree_add(str(path), "feature-x", base="main")

        assert path.is_dir()
        assert "feature-x" in ops.list_local_branches()
        worktrees = ops.list_worktrees()
        assert len(worktrees) == 2
        assert worktrees[0].is_main
        assert worktrees[1].branch_name == "feature-x"
        assert os.path.realpath(worktrees[1].path) == os.path.realpath(str(path))

    def test_add_existing_branch(self, git_repo_with_branches, temp_dir):
        ops = GitOperations(git_repo_with_branches.working_dir)
        path = temp_dir / "bugfix"

        ops.worktree_add(str(path), "bugfix", new_branch=False)

        assert WorktreeService(git_repo_with_branches.working_dir).find_by_branch("bugfix") is not None

    def test_add_failure(self, git_repo_with_branches, temp_dir):
        ops = GitOperations(git_repo_with_branches.working_dir)

        with pytest.raises(GitOperationError) as exc_info:
            ops.worktree_add(str(temp_dir / "bugfix"), "bugfix", base="main")

        assert "worktree add" in str(exc_info.value)
        assert exc_info.value.stderr

    def test_remove(self, git_repo, temp_dir):
        ops = GitOperations(git_repo.working_dir)
        path = temp_dir / "feature-x"
        ops.worktree_add(str(path), "feature-x", base="main")

        ops.worktree_remove(str(path))

        assert not path.exists()
        assert len(ops.list_worktrees()) == 1

    def test_remove_unknown_path(self, git_repo, temp_dir):
        ops = GitOperations(git_repo.working_dir)
        with pytest.raises(GitOperationError):
            ops.worktree_remove(str(temp_dir / "nope"))

    def test_delete_branch(self, git_repo_with_branches):
        ops = GitOperations(git_repo_with_branches.working_dir)

        ops.delete_branch("bugfix", force=True)

        assert "bugfix" not in ops.list_local_branches()

    def test_delete_checked_out_branch_fails(self, git_repo, temp_dir):
        ops = GitOperations(git_repo.working_dir)
        ops.worktree_add(str(temp_dir / "feature-x"), "feature-x", base="main")

        with pytest.raises(GitOperationError):
            ops.delete_branch("feature-x", force=True)

    def test_find_by_path(self, git_repo, temp_dir):
        ops = GitOperations(git_repo.working_dir)
        path = temp_dir / "feature-x"
        ops.worktree_add(str(path), "feature-x", base="main")
        nested = path / "deep"
        nested.mkdir()

        found = ops.worktree_service.find_by_path(str(nested))

        assert found.branch_name == "feature-x"

    def test_list_never_cached(self, git_repo):
        service = WorktreeService(git_repo.working_dir)
        with patch.object(WorktreeService, "_git", wraps=service._git) as spy:
            service.list_worktrees()
            service.list_worktrees()
        assert spy.call_count == 2


class TestErrorTranslation:
    """Test mapping of git failures to typed errors."""

    def test_not_a_repository(self):
        error = git.exc.GitCommandError(
            ["git", "worktree", "list"], 128, stderr="fatal: not a git repository (or any of the parent directories): .git"
        )
        assert isinstance(error_from_git_failure("worktree list", error), NotARepositoryError)

    def test_other_failure(self):
        error = git.exc.GitCommandError(["git", "worktree", "add"], 128, stderr="fatal: invalid reference: nope")
        result = error_from_git_failure("worktree add", error)
        assert isinstance(result, GitOperationError)
        assert result.operation == "worktree add"
        assert "invalid reference" in result.message
