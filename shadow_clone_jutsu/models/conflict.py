"""Directory conflict models."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ConflictResolution(Enum):
    """How to handle a worktree directory that already exists."""
    DELETE = "delete"
    RENAME = "rename"
    CANCEL = "cancel"

    @classmethod
    def choices(cls) -> list:
        return [member.value for member in cls]


@dataclass
class DirectoryConflict:
    """Decision record for an existing target directory; never persisted."""

    desired_path: str
    desired_branch_name: str
    resolution: Optional[ConflictResolution] = None

    def __str__(self) -> str:
        return f"Directory already exists: {self.desired_path}"
