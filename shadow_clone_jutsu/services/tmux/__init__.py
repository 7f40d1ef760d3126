"""tmux integration for shadow-clone-jutsu."""

from .client import TmuxClient, select_attacher
from .panes import get_pane_configuration, validate_pane_count, validate_tmux_options
from .session import TmuxSessionOrchestrator

__all__ = [
    "TmuxClient",
    "TmuxSessionOrchestrator",
    "get_pane_configuration",
    "select_attacher",
    "validate_pane_count",
    "validate_tmux_options",
]
