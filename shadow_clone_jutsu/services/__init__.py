"""Services for shadow-clone-jutsu."""

from .display_service import DisplayService
from .git import GitOperations, WorktreeService
from .naming import next_available_name, sanitize_branch_name, sanitize_session_name
from .path_guard import PathLoopGuard
from .prompt_service import PromptService
from .worktree_creator import WorktreeCreator

__all__ = [
    "DisplayService",
    "GitOperations",
    "PathLoopGuard",
    "PromptService",
    "WorktreeCreator",
    "WorktreeService",
    "next_available_name",
    "sanitize_branch_name",
    "sanitize_session_name",
]
