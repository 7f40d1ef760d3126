"""Data models for shadow-clone-jutsu."""

from .conflict import ConflictResolution, DirectoryConflict
from .tmux import AttachResult, Orientation, PaneConfiguration, SessionResult, TmuxOptions
from .worktree import Worktree

__all__ = [
    "AttachResult",
    "ConflictResolution",
    "DirectoryConflict",
    "Orientation",
    "PaneConfiguration",
    "SessionResult",
    "TmuxOptions",
    "Worktree",
]
