"""tmux session and pane models."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Orientation(Enum):
    """Pane split direction: horizontal splits left-right, vertical top-bottom."""
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"

    @property
    def split_flag(self) -> str:
        """tmux split-window flag for this orientation."""
        return "-h" if self is Orientation.HORIZONTAL else "-v"


@dataclass
class TmuxOptions:
    """tmux-related command-line options for one invocation."""

    enabled: bool = False
    horizontal: bool = False
    vertical: bool = False
    horizontal_panes: Optional[int] = None
    vertical_panes: Optional[int] = None
    layout: Optional[str] = None
    attach: bool = True

    @property
    def requested(self) -> bool:
        """True if any tmux flag was given."""
        return bool(
            self.enabled
            or self.horizontal
            or self.vertical
            or self.horizontal_panes is not None
            or self.vertical_panes is not None
            or self.layout is not None
        )

    @property
    def split_requested(self) -> bool:
        return bool(
            self.horizontal
            or self.vertical
            or self.horizontal_panes is not None
            or self.vertical_panes is not None
        )


@dataclass(frozen=True)
class PaneConfiguration:
    """Normalized pane plan; derived from options, never mutated."""

    pane_count: int = 2
    orientation: Orientation = Orientation.VERTICAL
    layout: Optional[str] = None

    @property
    def is_horizontal(self) -> bool:
        return self.orientation is Orientation.HORIZONTAL


@dataclass
class AttachResult:
    """Outcome of attaching the terminal to a session.

    `replaced` marks a handoff through exec, which only returns to the caller
    when exec is stubbed. Otherwise the attach ran as a blocking child process
    and `exit_code` holds its status.
    """

    replaced: bool
    exit_code: Optional[int] = None


@dataclass
class SessionResult:
    """Outcome of TmuxSessionOrchestrator.create_session."""

    session_name: str
    created: bool
    attach: Optional[AttachResult] = None
