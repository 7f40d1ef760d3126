"""Shared constants for shadow-clone-jutsu."""

from typing import Dict, List


# Pane ceilings per split direction; beyond these tmux cannot fit panes on a typical terminal
MAX_HORIZONTAL_PANES = 10
MAX_VERTICAL_PANES = 15
DEFAULT_PANE_COUNT = 2

# tmux select-layout algorithms
TMUX_LAYOUTS: List[str] = [
    "even-horizontal",
    "even-vertical",
    "main-horizontal",
    "main-vertical",
    "tiled",
]

# Applied when more than two panes are requested without an explicit layout
DEFAULT_LAYOUTS: Dict[str, str] = {
    "horizontal": "even-horizontal",
    "vertical": "even-vertical",
}

# Directory-creation loop detection
MAX_PATH_DEPTH = 10
MAX_SAME_PATH_ATTEMPTS = 3

# tmux reports this when a split does not fit the window
TMUX_NO_SPACE_MESSAGE = "no space for new pane"

DEFAULT_WORKTREES_PATH = ".git/orchestrations"
DEFAULT_BASE_BRANCH = "main"

CONFIG_FILE_NAMES: List[str] = [".scj.json", ".scjrc.json", "scj.config.json"]
USER_CONFIG_FILE_NAME = ".scjrc.json"

LOG_DIR_NAME = ".shadow-clone-jutsu"
LOG_FILE_NAME = "scj.log"


# Symbol constants
SYMBOL_MAIN_WORKTREE = "@"
SYMBOL_LOCKED = "locked"
SYMBOL_PRUNABLE = "prunable"
SYMBOL_DETACHED = "(detached)"

ATTACH_HINT = "Detach from a session with Ctrl+B, D"
