"""Git operations service"""

import git
import os
from typing import List, Optional

from shadow_clone_jutsu.exceptions import NotARepositoryError, error_from_git_failure
from shadow_clone_jutsu.logging_config import get_logger
from shadow_clone_jutsu.models.worktree import Worktree
from shadow_clone_jutsu.services.git.worktrees import WorktreeService

logger = get_logger(__name__)


class GitOperations:
    """Version-control access for worktree creation."""

    def __init__(self, cwd: Optional[str] = None):
        """Initialize the service.

        Args:
            cwd: Directory git commands run from (defaults to the process cwd)
        """
        self.cwd = cwd or os.getcwd()
        self.worktree_service = WorktreeService(self.cwd)

    def _git(self) -> git.Git:
        return git.Git(self.cwd)

    def _get_repo(self) -> git.Repo:
        """Open the repository containing cwd.

        Raises:
            NotARepositoryError: If cwd is not inside a repository
        """
        try:
            return git.Repo(self.cwd, search_parent_directories=True)
        except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError) as e:
            raise NotARepositoryError(self.cwd) from e

    def is_repository(self) -> bool:
        """Check whether cwd is inside a git work tree."""
        try:
            return self._git().rev_parse("--is-inside-work-tree").strip() == "true"
        except git.exc.GitCommandError:
            return False

    def repository_root(self) -> str:
        """Absolute path of the top-level working directory.

        Raises:
            NotARepositoryError: If cwd is not inside a repository
        """
        try:
            root = self._git().rev_parse("--show-toplevel").strip()
        except git.exc.GitCommandError as e:
            raise error_from_git_failure("rev-parse", e) from e
        logger.debug(f"Repository root: {root}")
        return root

    def list_local_branches(self) -> List[str]:
        """Names of all local branches."""
        repo = self._get_repo()
        return [head.name for head in repo.heads]

    def list_remote_branches(self) -> List[str]:
        """Remote branch names without the remote prefix (HEAD excluded)."""
        repo = self._get_repo()
        names = []
        for remote in repo.remotes:
            for ref in remote.refs:
                if ref.remote_head != "HEAD":
                    names.append(ref.remote_head)
        return names

    def get_current_branch(self) -> Optional[str]:
        """Current branch name, or None on a detached HEAD."""
        repo = self._get_repo()
        if repo.head.is_detached:
            return None
        return repo.active_branch.name

    def check_branch_name_collision(self, branch: str) -> List[str]:
        """Existing branches that prevent creating `branch`.

        A branch collides when the same name exists locally or on a remote, or
        when one name is a ref-namespace prefix of the other (`a` vs `a/b`).

        Returns:
            Sorted list of conflicting names; empty when `branch` is free
        """
        existing = set(self.list_local_branches()) | set(self.list_remote_branches())
        conflicts = set()
        for name in existing:
            if name == branch:
                conflicts.add(name)
            elif name.startswith(branch + "/") or branch.startswith(name + "/"):
                conflicts.add(name)
        if conflicts:
            logger.debug(f"Branch {branch} conflicts with {sorted(conflicts)}")
        return sorted(conflicts)

    def list_worktrees(self) -> List[Worktree]:
        return self.worktree_service.list_worktrees()

    def worktree_add(self, path: str, branch: str, base: Optional[str] = None, new_branch: bool = True) -> None:
        """Run `git worktree add`.

        Args:
            path: Directory for the new worktree
            branch: Branch to create (new_branch) or check out
            base: Start point for a new branch
            new_branch: Create `branch` with -b instead of checking it out

        Raises:
            GitOperationError: If git fails; never retried
        """
        if new_branch:
            args = ["add", "-b", branch, path]
            if base:
                args.append(base)
        else:
            args = ["add", path, branch]

        logger.debug(f"git worktree {' '.join(args)}")
        try:
            self._git().worktree(*args)
        except git.exc.GitCommandError as e:
            raise error_from_git_failure("worktree add", e) from e
        logger.info(f"Added worktree for {branch} at {path}")

    def worktree_remove(self, path: str, force: bool = False) -> None:
        self.worktree_service.remove_worktree(path, force=force)

    def delete_branch(self, branch: str, force: bool = False) -> None:
        """Delete a local branch with `git branch -d`, or `-D` when forced."""
        try:
            self._git().branch("-D" if force else "-d", branch)
        except git.exc.GitCommandError as e:
            raise error_from_git_failure("branch delete", e) from e
        logger.info(f"Deleted branch {branch}")
