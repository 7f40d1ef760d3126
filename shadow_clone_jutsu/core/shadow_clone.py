"""Command implementations for shadow-clone-jutsu"""

import difflib
from dataclasses import replace
from typing import List, Optional

from rich.console import Console

from shadow_clone_jutsu.config import Config, load_config
from shadow_clone_jutsu.exceptions import (
    MultiplexerUnavailableError,
    NotARepositoryError,
    OperationCancelledError,
    PaneLimitExceededError,
    ShadowCloneError,
    TmuxCommandError,
    WorktreeNotFoundError,
)
from shadow_clone_jutsu.logging_config import get_logger
from shadow_clone_jutsu.models.conflict import ConflictResolution
from shadow_clone_jutsu.models.tmux import Orientation, SessionResult, TmuxOptions
from shadow_clone_jutsu.models.worktree import Worktree
from shadow_clone_jutsu.services.display_service import DisplayService
from shadow_clone_jutsu.services.git import GitOperations, WorktreeService
from shadow_clone_jutsu.services.path_guard import PathLoopGuard
from shadow_clone_jutsu.services.prompt_service import PromptService
from shadow_clone_jutsu.services.tmux import (
    TmuxClient,
    TmuxSessionOrchestrator,
    validate_tmux_options,
)
from shadow_clone_jutsu.services.worktree_creator import CreatedWorktree, WorktreeCreator

console = Console()
logger = get_logger(__name__)


class ShadowClone:
    """Wires the services together and implements each CLI command."""

    def __init__(
        self,
        config: Config,
        git_ops: GitOperations,
        prompt: Optional[PromptService] = None,
        path_guard: Optional[PathLoopGuard] = None,
        tmux_client: Optional[TmuxClient] = None,
        forced_resolution: Optional[ConflictResolution] = None,
    ):
        """Initialize ShadowClone.

        Args:
            config: Loaded configuration
            git_ops: Version-control access rooted in the repository
            prompt: Prompt service; built from config.assume_yes if omitted
            path_guard: Loop guard shared by every creation in this process
            tmux_client: tmux wrapper
            forced_resolution: Answer for every directory conflict
        """
        self.config = config
        self.git_ops = git_ops
        self.worktree_service: WorktreeService = git_ops.worktree_service
        self.prompt = prompt or PromptService(assume_yes=config.assume_yes)
        self.path_guard = path_guard or PathLoopGuard()
        self.tmux_client = tmux_client or TmuxClient()
        self.creator = WorktreeCreator(
            git_ops,
            config,
            prompt=self.prompt,
            path_guard=self.path_guard,
            forced_resolution=forced_resolution,
        )
        self.orchestrator = TmuxSessionOrchestrator(self.tmux_client, self.prompt)
        self.display_service = DisplayService()

    @classmethod
    def open(
        cls,
        cwd: str,
        overrides: Optional[dict] = None,
        forced_resolution: Optional[ConflictResolution] = None,
    ) -> "ShadowClone":
        """Locate the repository containing `cwd` and load its configuration.

        Raises:
            NotARepositoryError: If `cwd` is not inside a repository
            ConfigurationError: If a configuration file is invalid
        """
        git_ops = GitOperations(cwd)
        if not git_ops.is_repository():
            raise NotARepositoryError(cwd)

        config = load_config(git_ops.repository_root(), overrides)
        logger.debug(f"Configuration: {config.to_dict()}")
        return cls(config, git_ops, forced_resolution=forced_resolution)

    def create(
        self,
        branch: str,
        base: Optional[str] = None,
        skip_directory_check: bool = False,
        tmux: Optional[TmuxOptions] = None,
    ) -> str:
        """Create a worktree on a new branch, optionally with a tmux session."""
        tmux = self._preflight_tmux(tmux)
        created = self.creator.create(branch, base=base, skip_directory_check=skip_directory_check)
        console.print(f"[green]Created worktree '{created.branch}' at {created.path}[/green]")

        if tmux is not None:
            self._start_session_or_rollback(created, tmux, delete_branch=True)
        return created.path

    def attach(self, branch: str, skip_directory_check: bool = False, tmux: Optional[TmuxOptions] = None) -> str:
        """Create a worktree for an existing branch, optionally with a tmux session."""
        tmux = self._preflight_tmux(tmux)
        created = self.creator.attach(branch, skip_directory_check=skip_directory_check)
        console.print(f"[green]Attached worktree '{created.branch}' at {created.path}[/green]")

        if tmux is not None:
            self._start_session_or_rollback(created, tmux, delete_branch=False)
        return created.path

    def list_worktrees(self, as_json: bool = False) -> List[Worktree]:
        worktrees = self.worktree_service.list_worktrees()
        if as_json:
            self.display_service.display_worktree_json(worktrees)
        else:
            self.display_service.display_worktree_table(worktrees)
        return worktrees

    def delete(self, branch: str, force: bool = False) -> Worktree:
        """Remove the worktree that has `branch` checked out.

        Raises:
            WorktreeNotFoundError: If no worktree has the branch
            OperationCancelledError: If the user declines
        """
        worktree = self.find_worktree(branch)
        if worktree.is_main:
            raise ShadowCloneError(f"'{branch}' is checked out in the main worktree, which cannot be deleted")

        if not force:
            confirmed = self.prompt.confirm(f"Delete worktree '{branch}' at {worktree.path}?", default=False)
            if not confirmed:
                raise OperationCancelledError("Worktree deletion")

        self.git_ops.worktree_remove(worktree.path, force=force)
        console.print(f"[green]Deleted worktree '{branch}'[/green]")
        return worktree

    def where(self, branch: Optional[str] = None, current: bool = False) -> str:
        """Path of the worktree for `branch`, or of the one containing cwd."""
        if current or branch is None:
            worktree = self.worktree_service.find_by_path(self.git_ops.cwd)
            if worktree is None:
                raise ShadowCloneError(f"No worktree contains {self.git_ops.cwd}")
        else:
            worktree = self.find_worktree(branch)

        console.print(worktree.path, highlight=False, soft_wrap=True)
        return worktree.path

    def open_session(self, branch: str, tmux: Optional[TmuxOptions] = None) -> SessionResult:
        """Start a tmux session for an existing worktree."""
        tmux = self._preflight_tmux(tmux or TmuxOptions(enabled=True)) or TmuxOptions(enabled=True)
        worktree = self.find_worktree(branch)
        return self._start_session(worktree.branch_name or branch, worktree.path, tmux)

    def find_worktree(self, branch: str) -> Worktree:
        """Worktree with `branch` checked out.

        Raises:
            WorktreeNotFoundError: With similarly named branches as suggestions
        """
        worktrees = self.worktree_service.list_worktrees()
        for worktree in worktrees:
            if worktree.matches_branch(branch):
                return worktree

        names = [wt.branch_name for wt in worktrees if wt.branch_name]
        similar = difflib.get_close_matches(branch, names, n=3, cutoff=0.5)
        raise WorktreeNotFoundError(branch, similar)

    def _preflight_tmux(self, tmux: Optional[TmuxOptions]) -> Optional[TmuxOptions]:
        """Validate tmux flags and check for tmux before anything is created.

        Returns:
            Effective options with the configured default layout, or None when
            no tmux integration was requested
        """
        if tmux is None or not tmux.requested:
            return None

        if tmux.layout is None and self.config.tmux_layout:
            tmux = replace(tmux, layout=self.config.tmux_layout)
        validate_tmux_options(tmux)

        if not self.tmux_client.is_available():
            raise MultiplexerUnavailableError()
        return tmux

    def _start_session(self, branch: str, path: str, tmux: TmuxOptions) -> SessionResult:
        plan = validate_tmux_options(tmux)
        if plan is None:
            # A plain --tmux gets a single pane
            pane_count, orientation, layout = 1, Orientation.VERTICAL, tmux.layout
        else:
            pane_count, orientation, layout = plan.pane_count, plan.orientation, plan.layout

        return self.orchestrator.create_session(
            session_name=branch,
            worktree_path=path,
            pane_count=pane_count,
            orientation=orientation,
            layout=layout,
            interactive_attach=tmux.attach,
            title=branch,
        )

    def _start_session_or_rollback(
        self, created: CreatedWorktree, tmux: TmuxOptions, delete_branch: bool
    ) -> SessionResult:
        """Start the session; remove the fresh worktree if tmux setup fails."""
        try:
            return self._start_session(created.branch, created.path, tmux)
        except (PaneLimitExceededError, TmuxCommandError, MultiplexerUnavailableError):
            self._rollback(created, delete_branch)
            raise

    def _rollback(self, created: CreatedWorktree, delete_branch: bool) -> None:
        """Undo a worktree creation, printing manual commands for any step that fails."""
        logger.warning(f"tmux setup failed, removing worktree {created.path}")
        console.print(f"[yellow]tmux setup failed, removing worktree '{created.branch}'[/yellow]")

        manual = []
        try:
            self.git_ops.worktree_remove(created.path, force=True)
        except ShadowCloneError as e:
            logger.error(f"Rollback could not remove worktree {created.path}: {e.message}")
            manual.append(f"git worktree remove --force {created.path}")

        if delete_branch:
            try:
                self.git_ops.delete_branch(created.branch, force=True)
            except ShadowCloneError as e:
                logger.error(f"Rollback could not delete branch {created.branch}: {e.message}")
                manual.append(f"git branch -D {created.branch}")

        if manual:
            console.print("[red]Automatic cleanup failed. Clean up manually with:[/red]")
            for command in manual:
                console.print(f"   {command}", markup=False, highlight=False, soft_wrap=True)
