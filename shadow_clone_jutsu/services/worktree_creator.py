"""Worktree creation with existing-directory conflict resolution."""

import os
import shutil
import stat
from dataclasses import dataclass
from typing import Iterable, Optional

from shadow_clone_jutsu.config import Config
from shadow_clone_jutsu.constants import DEFAULT_BASE_BRANCH
from shadow_clone_jutsu.exceptions import (
    BranchAlreadyExistsError,
    DirectoryConflictCancelledError,
    OperationCancelledError,
    PathLoopDetectedError,
)
from shadow_clone_jutsu.logging_config import get_logger
from shadow_clone_jutsu.models.conflict import ConflictResolution, DirectoryConflict
from shadow_clone_jutsu.services.git.operations import GitOperations
from shadow_clone_jutsu.services.naming import (
    next_available_name,
    ref_namespace_names,
    sanitize_branch_name,
    with_prefix,
)
from shadow_clone_jutsu.services.path_guard import PathLoopGuard
from shadow_clone_jutsu.services.prompt_service import PromptService

logger = get_logger(__name__)


@dataclass
class CreatedWorktree:
    """Final branch and path of a created worktree (either may have been renamed)."""

    path: str
    branch: str


class WorktreeCreator:
    """Creates worktrees, resolving collisions with existing directories.

    Each call runs strictly in order: resolve the repository root, compute the
    target path, check for an existing directory (delete, rename once, or
    cancel), guard against creation loops, then `git worktree add`.
    """

    def __init__(
        self,
        git_ops: GitOperations,
        config: Config,
        prompt: Optional[PromptService] = None,
        path_guard: Optional[PathLoopGuard] = None,
        forced_resolution: Optional[ConflictResolution] = None,
    ):
        """Initialize the creator.

        Args:
            git_ops: Version-control access
            config: Supplies worktree root and name prefixes
            prompt: Used for the conflict question unless a resolution is forced
            path_guard: Shared loop guard; a private one is made if omitted
            forced_resolution: Answer every conflict with this choice; defaults
                to delete when config.assume_yes is set
        """
        self.git_ops = git_ops
        self.config = config
        self.prompt = prompt or PromptService(assume_yes=config.assume_yes)
        self.path_guard = path_guard or PathLoopGuard()
        if forced_resolution is None and config.assume_yes:
            forced_resolution = ConflictResolution.DELETE
        self.forced_resolution = forced_resolution

    def create_worktree(self, branch: str, base: Optional[str] = None, skip_directory_check: bool = False) -> str:
        """Create a worktree on a new branch and return its path."""
        return self.create(branch, base=base, skip_directory_check=skip_directory_check).path

    def attach_worktree(self, branch: str, skip_directory_check: bool = False) -> str:
        """Create a worktree for an existing branch and return its path."""
        return self.attach(branch, skip_directory_check=skip_directory_check).path

    def create(self, branch: str, base: Optional[str] = None, skip_directory_check: bool = False) -> CreatedWorktree:
        """Create a worktree on a new branch forked from `base`.

        Args:
            branch: New branch name; the configured branch prefix is added
            base: Start point; defaults to the current branch, or main when detached
            skip_directory_check: Go straight to `git worktree add`

        Returns:
            Final path and branch

        Raises:
            NotARepositoryError: If not inside a repository
            BranchAlreadyExistsError: If the branch name is taken
            DirectoryConflictCancelledError: If the user cancels at a conflict
            PathLoopDetectedError: If the target path is refused by the loop guard
            GitOperationError: If worktree add fails
        """
        repo_root = self.git_ops.repository_root()
        branch = with_prefix(branch, self.config.branch_prefix)

        conflicts = self.git_ops.check_branch_name_collision(branch)
        if conflicts:
            raise BranchAlreadyExistsError(branch, conflicts)

        if base is None:
            base = self.git_ops.get_current_branch() or DEFAULT_BASE_BRANCH
        logger.debug(f"Creating {branch} from {base}")

        path = self._target_path(repo_root, branch)
        if skip_directory_check:
            self._guard(path)
        else:
            path, branch = self._resolve_conflicts(path, branch, rename_branch=True)

        self.git_ops.worktree_add(path, branch, base=base, new_branch=True)
        return CreatedWorktree(path=path, branch=branch)

    def attach(self, branch: str, skip_directory_check: bool = False) -> CreatedWorktree:
        """Create a worktree that checks out the existing `branch`.

        Only the directory can be renamed on conflict; the branch is kept.
        """
        repo_root = self.git_ops.repository_root()
        path = self._target_path(repo_root, branch)
        if skip_directory_check:
            self._guard(path)
        else:
            path, _ = self._resolve_conflicts(path, branch, rename_branch=False)

        self.git_ops.worktree_add(path, branch, new_branch=False)
        return CreatedWorktree(path=path, branch=branch)

    def _directory_name(self, branch: str) -> str:
        return with_prefix(sanitize_branch_name(branch), self.config.directory_prefix)

    def _target_path(self, repo_root: str, branch: str) -> str:
        root = self.config.resolve_worktrees_root(repo_root)
        return os.path.join(root, self._directory_name(branch))

    def _guard(self, path: str) -> None:
        if not self.path_guard.track(path):
            raise PathLoopDetectedError(path)

    def _resolve_conflicts(self, path: str, branch: str, rename_branch: bool):
        """Run the existing-directory check, renaming at most once.

        The final path passes the loop guard before anything is deleted.
        """
        if not self._existing_directory(path):
            self._guard(path)
            return path, branch

        conflict = DirectoryConflict(desired_path=path, desired_branch_name=branch)
        conflict.resolution = self._ask_resolution(conflict, allow_rename=True)
        if conflict.resolution is ConflictResolution.DELETE:
            self._guard(path)
            self._remove_directory(path)
            return path, branch

        # Rename, then check the new target exactly once more
        renamed = self._alternative_name(branch, self.git_ops.list_local_branches())
        new_branch = renamed if rename_branch else branch
        new_path = os.path.join(os.path.dirname(path), self._directory_name(renamed))
        logger.info(f"Using alternative name {renamed}")

        if self._existing_directory(new_path):
            retry = DirectoryConflict(desired_path=new_path, desired_branch_name=new_branch)
            retry.resolution = self._ask_resolution(retry, allow_rename=False)
            self._guard(new_path)
            self._remove_directory(new_path)
        else:
            self._guard(new_path)
        return new_path, new_branch

    def _ask_resolution(self, conflict: DirectoryConflict, allow_rename: bool) -> ConflictResolution:
        """Forced or interactive resolution; cancel raises."""
        resolution = self.forced_resolution
        if resolution is ConflictResolution.RENAME and not allow_rename:
            resolution = ConflictResolution.CANCEL

        if resolution is None:
            choices = [ConflictResolution.DELETE.value]
            if allow_rename:
                choices.append(ConflictResolution.RENAME.value)
            choices.append(ConflictResolution.CANCEL.value)
            try:
                answer = self.prompt.choose(
                    f"{conflict}. How do you want to proceed?",
                    choices,
                    default=ConflictResolution.CANCEL.value,
                )
            except OperationCancelledError:
                answer = ConflictResolution.CANCEL.value
            resolution = ConflictResolution(answer)

        logger.debug(f"Conflict at {conflict.desired_path} resolved with {resolution.value}")
        if resolution is ConflictResolution.CANCEL:
            raise DirectoryConflictCancelledError(conflict.desired_path)
        return resolution

    @staticmethod
    def _alternative_name(name: str, branches: Iterable[str]) -> str:
        """First `name-N` free among branches; `name` itself counts as taken."""
        taken = ref_namespace_names(branches)
        taken.add(name)
        return next_available_name(name, taken)

    @staticmethod
    def _existing_directory(path: str) -> bool:
        """True if `path` is an existing directory; stat errors count as absent."""
        try:
            return stat.S_ISDIR(os.stat(path).st_mode)
        except OSError:
            return False

    @staticmethod
    def _remove_directory(path: str) -> None:
        logger.info(f"Removing existing directory {path}")
        shutil.rmtree(path)
