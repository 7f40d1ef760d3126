"""Configuration handling for shadow-clone-jutsu"""

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, List

from shadow_clone_jutsu.constants import (
    CONFIG_FILE_NAMES,
    DEFAULT_WORKTREES_PATH,
    TMUX_LAYOUTS,
    USER_CONFIG_FILE_NAME,
)
from shadow_clone_jutsu.exceptions import ConfigurationError
from shadow_clone_jutsu.logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class Config:
    """Configuration for shadow-clone-jutsu with validation."""

    # Worktree placement
    worktrees_path: str = DEFAULT_WORKTREES_PATH  # Relative paths resolve against the repo root
    branch_prefix: str = ""
    directory_prefix: str = ""

    # Default pane layout for tmux sessions (None = tmux default)
    tmux_layout: Optional[str] = None

    # Execution modes
    assume_yes: bool = False
    verbose: bool = False
    debug: bool = False

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_worktrees_path()
        self._validate_prefixes()
        self._validate_tmux_layout()

    def _validate_worktrees_path(self):
        """Validate worktrees_path is not empty."""
        if not self.worktrees_path or not str(self.worktrees_path).strip():
            raise ValueError("worktrees_path cannot be empty")
        self.worktrees_path = str(self.worktrees_path).strip()

    def _validate_prefixes(self):
        """Validate prefixes are strings."""
        for name in ("branch_prefix", "directory_prefix"):
            value = getattr(self, name)
            if value is None:
                setattr(self, name, "")
            elif not isinstance(value, str):
                raise ValueError(f"{name} must be a string, got {type(value).__name__}")

    def _validate_tmux_layout(self):
        """Validate tmux_layout is one of the tmux layouts."""
        if self.tmux_layout is not None and self.tmux_layout not in TMUX_LAYOUTS:
            raise ValueError(f"tmux_layout must be one of {TMUX_LAYOUTS}, got '{self.tmux_layout}'")

    def resolve_worktrees_root(self, repo_root: str) -> str:
        """Absolute directory under which new worktrees are placed."""
        path = os.path.expanduser(self.worktrees_path)
        if not os.path.isabs(path):
            path = os.path.join(repo_root, path)
        return os.path.normpath(path)

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {
            "worktrees_path": self.worktrees_path,
            "branch_prefix": self.branch_prefix,
            "directory_prefix": self.directory_prefix,
            "tmux_layout": self.tmux_layout,
            "assume_yes": self.assume_yes,
            "verbose": self.verbose,
            "debug": self.debug,
        }

    def get(self, key: str, default=None):
        """Get config value by key."""
        return getattr(self, key, default)

    @classmethod
    def from_dict(cls, config_dict: dict) -> "Config":
        """Create Config from dictionary."""
        # Extract only known fields
        known_fields = {
            "worktrees_path",
            "branch_prefix",
            "directory_prefix",
            "tmux_layout",
            "assume_yes",
            "verbose",
            "debug",
        }

        filtered = {k: v for k, v in config_dict.items() if k in known_fields}
        return cls(**filtered)


def _flatten_file_config(data: dict) -> dict:
    """Map the nested JSON file layout onto Config field names."""
    flat = {}
    worktrees = data.get("worktrees") or {}
    tmux = data.get("tmux") or {}
    if not isinstance(worktrees, dict) or not isinstance(tmux, dict):
        raise ConfigurationError("'worktrees' and 'tmux' sections must be JSON objects")

    if "path" in worktrees:
        flat["worktrees_path"] = worktrees["path"]
    if "branchPrefix" in worktrees:
        flat["branch_prefix"] = worktrees["branchPrefix"]
    if "directoryPrefix" in worktrees:
        flat["directory_prefix"] = worktrees["directoryPrefix"]
    if "layout" in tmux:
        flat["tmux_layout"] = tmux["layout"]
    return flat


def find_config_file(repo_root: Optional[str] = None) -> Optional[Path]:
    """Return the first configuration file that exists, project files first."""
    candidates: List[Path] = []
    if repo_root:
        candidates.extend(Path(repo_root) / name for name in CONFIG_FILE_NAMES)
    candidates.append(Path.home() / USER_CONFIG_FILE_NAME)

    for candidate in candidates:
        if candidate.is_file():
            return candidate
    return None


def load_config(repo_root: Optional[str] = None, overrides: Optional[dict] = None) -> Config:
    """
    Build a Config from the first configuration file found plus CLI overrides.

    Args:
        repo_root: Repository root searched for project configuration files
        overrides: Values from command-line flags; None values are ignored

    Returns:
        Validated Config

    Raises:
        ConfigurationError: If the file is unreadable, malformed or invalid
    """
    values: dict = {}
    config_file = find_config_file(repo_root)
    if config_file is not None:
        logger.debug(f"Loading configuration from {config_file}")
        try:
            with open(config_file, encoding="utf-8") as handle:
                data = json.load(handle)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Could not read {config_file}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigurationError(f"{config_file} must contain a JSON object")
        values.update(_flatten_file_config(data))

    if overrides:
        values.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return Config.from_dict(values)
    except ValueError as e:
        source = f" in {config_file}" if config_file else ""
        raise ConfigurationError(f"Invalid configuration{source}: {e}") from e
