"""Loop detection for worktree directory creation."""

import os
from typing import Dict

from shadow_clone_jutsu.constants import MAX_PATH_DEPTH, MAX_SAME_PATH_ATTEMPTS
from shadow_clone_jutsu.logging_config import get_logger

logger = get_logger(__name__)


class PathLoopGuard:
    """Counts directory-creation attempts per normalized path.

    One instance is meant to live for a whole process (the CLI builds one per
    invocation) and is handed to every component that creates directories.
    Call `reset()` before an unrelated batch of creations.
    """

    def __init__(self, max_depth: int = MAX_PATH_DEPTH, max_attempts: int = MAX_SAME_PATH_ATTEMPTS):
        self.max_depth = max_depth
        self.max_attempts = max_attempts
        self._counts: Dict[str, int] = {}

    @staticmethod
    def normalize(path: str) -> str:
        return os.path.normpath(os.path.abspath(os.path.expanduser(path)))

    @staticmethod
    def depth(normalized_path: str) -> int:
        """Number of non-empty segments below the filesystem root."""
        _, tail = os.path.splitdrive(normalized_path)
        return len([segment for segment in tail.split(os.sep) if segment])

    def track(self, path: str) -> bool:
        """Record an attempt to create `path`.

        Returns:
            True if it is safe to proceed, False if the path is too deep or has
            already been attempted `max_attempts` times
        """
        normalized = self.normalize(path)
        previous = self._counts.get(normalized, 0)
        self._counts[normalized] = previous + 1

        depth = self.depth(normalized)
        if depth > self.max_depth:
            logger.warning(f"Refusing to create {normalized}: depth {depth} exceeds {self.max_depth}")
            return False

        if previous >= self.max_attempts:
            logger.warning(
                f"Refusing to create {normalized}: attempted {previous + 1} times "
                f"(limit {self.max_attempts})"
            )
            return False

        logger.debug(f"Tracked {normalized} (attempt {previous + 1})")
        return True

    def attempts(self, path: str) -> int:
        return self._counts.get(self.normalize(path), 0)

    def reset(self) -> None:
        """Forget every tracked path."""
        self._counts.clear()
