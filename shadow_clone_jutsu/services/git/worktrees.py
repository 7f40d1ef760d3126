"""Worktree listing and removal service for shadow-clone-jutsu."""

import git
import os
from typing import Any, Dict, List, Optional

from shadow_clone_jutsu.exceptions import error_from_git_failure
from shadow_clone_jutsu.logging_config import get_logger
from shadow_clone_jutsu.models.worktree import Worktree

logger = get_logger(__name__)


def _build_worktree(entry: Dict[str, Any], is_main: bool) -> Worktree:
    return Worktree(
        path=entry["path"],
        head_commit=entry.get("HEAD", ""),
        branch_ref=entry.get("branch"),
        detached=entry.get("detached", False),
        locked=entry.get("locked", False),
        lock_reason=entry.get("lock_reason"),
        prunable=entry.get("prunable", False),
        is_main=is_main,
    )


def parse_worktree_porcelain(output: str) -> List[Worktree]:
    """Parse `git worktree list --porcelain` output.

    Format:
        worktree /path/to/worktree
        HEAD commit_sha
        branch refs/heads/branch-name | detached
        locked [reason]
        prunable [reason]
        (blank line between worktrees)

    The first entry is always the main working tree.
    """
    worktrees: List[Worktree] = []
    current: Dict[str, Any] = {}

    def flush():
        if current.get("path"):
            worktrees.append(_build_worktree(current, is_main=not worktrees))

    for raw_line in output.splitlines():
        line = raw_line.strip()

        if not line:
            # Empty line marks end of worktree entry
            flush()
            current = {}
            continue

        key, _, value = line.partition(" ")
        if key == "worktree":
            current["path"] = value
        elif key == "HEAD":
            current["HEAD"] = value
        elif key == "branch":
            current["branch"] = value
        elif key == "detached":
            current["detached"] = True
        elif key == "locked":
            current["locked"] = True
            current["lock_reason"] = value or None
        elif key == "prunable":
            current["prunable"] = True

    # Handle last entry if no trailing blank line
    flush()
    return worktrees


class WorktreeService:
    """Service for listing and removing git worktrees."""

    def __init__(self, repo_path: str):
        """Initialize the worktree service.

        Args:
            repo_path: Path inside the git repository
        """
        self.repo_path = repo_path

    def _git(self) -> git.Git:
        return git.Git(self.repo_path)

    def list_worktrees(self) -> List[Worktree]:
        """Get all worktrees of the repository.

        Queried fresh on every call; nothing is cached.

        Returns:
            List of Worktree records, main working tree first

        Raises:
            NotARepositoryError: If repo_path is not inside a repository
            GitOperationError: If git fails for any other reason
        """
        try:
            output = self._git().worktree("list", "--porcelain")
        except git.exc.GitCommandError as e:
            raise error_from_git_failure("worktree list", e) from e

        worktrees = parse_worktree_porcelain(output)
        logger.debug(f"Found {len(worktrees)} worktrees")
        for wt in worktrees:
            logger.debug(f"  {wt}")
        return worktrees

    def find_by_branch(self, branch: str) -> Optional[Worktree]:
        """Worktree with `branch` checked out, if any."""
        for worktree in self.list_worktrees():
            if worktree.matches_branch(branch):
                return worktree
        return None

    def find_by_path(self, path: str) -> Optional[Worktree]:
        """Worktree containing `path`, if any (deepest match wins)."""
        target = os.path.realpath(path)
        best = None
        for worktree in self.list_worktrees():
            root = os.path.realpath(worktree.path)
            if target == root or target.startswith(root + os.sep):
                if best is None or len(root) > len(os.path.realpath(best.path)):
                    best = worktree
        return best

    def remove_worktree(self, path: str, force: bool = False) -> None:
        """Remove a worktree at the specified path.

        Args:
            path: Path to the worktree directory
            force: Force removal even if working tree is dirty or locked

        Raises:
            GitOperationError: If git refuses the removal
        """
        args = ["remove", path]
        if force:
            args.append("--force")

        try:
            self._git().worktree(*args)
        except git.exc.GitCommandError as e:
            error = error_from_git_failure("worktree remove", e)
            logger.error(f"Failed to remove worktree at {path}: {error.message}")
            raise error from e
        logger.info(f"Removed worktree at {path}")
