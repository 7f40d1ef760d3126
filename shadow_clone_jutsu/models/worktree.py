"""Worktree data models."""

from dataclasses import dataclass, asdict
from typing import Optional

BRANCH_REF_PREFIX = "refs/heads/"


@dataclass
class Worktree:
    """One entry of `git worktree list --porcelain`."""

    path: str
    head_commit: str = ""
    branch_ref: Optional[str] = None  # None for detached checkouts
    detached: bool = False
    locked: bool = False
    lock_reason: Optional[str] = None
    prunable: bool = False
    is_main: bool = False  # Is this the main working tree?

    @property
    def branch_name(self) -> Optional[str]:
        """Short branch name without the refs/heads/ prefix."""
        if self.branch_ref is None:
            return None
        if self.branch_ref.startswith(BRANCH_REF_PREFIX):
            return self.branch_ref[len(BRANCH_REF_PREFIX):]
        return self.branch_ref

    def matches_branch(self, branch: str) -> bool:
        """True if this worktree has `branch` checked out (short or full ref)."""
        if self.branch_ref is None:
            return False
        return branch in (self.branch_ref, self.branch_name)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["branch"] = self.branch_name
        return data

    def __str__(self) -> str:
        """String representation of worktree."""
        name = self.branch_name or "(detached)"
        main_marker = " (main)" if self.is_main else ""
        return f"{name} @ {self.path}{main_marker}"
