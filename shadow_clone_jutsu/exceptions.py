"""Custom exceptions for shadow-clone-jutsu"""

from dataclasses import dataclass
from typing import List, Optional


@dataclass
class Suggestion:
    """A hint shown to the user below an error message."""

    message: str
    command: Optional[str] = None
    url: Optional[str] = None


class ShadowCloneError(Exception):
    """Base exception for all shadow-clone-jutsu errors."""

    def __init__(self, message: str, suggestions: Optional[List[Suggestion]] = None):
        self.message = message
        self.suggestions = suggestions or []
        super().__init__(message)

    def format_message(self) -> str:
        """Render the message followed by numbered suggestions."""
        lines = [f"Error: {self.message}"]
        if self.suggestions:
            lines.append("")
            lines.append("How to fix:")
            for index, suggestion in enumerate(self.suggestions, start=1):
                lines.append(f"  {index}. {suggestion.message}")
                if suggestion.command:
                    lines.append(f"     run: {suggestion.command}")
                if suggestion.url:
                    lines.append(f"     see: {suggestion.url}")
        return "\n".join(lines)


class NotARepositoryError(ShadowCloneError):
    """Exception raised when the working directory is not inside a git repository."""

    def __init__(self, path: Optional[str] = None):
        self.path = path
        message = f"{path} is not a git repository" if path else "Not inside a git repository"
        super().__init__(
            message,
            [
                Suggestion("Initialize a repository", command="git init"),
                Suggestion("Clone an existing repository", command="git clone <repository-url>"),
            ],
        )


class ConfigurationError(ShadowCloneError):
    """Exception raised for unreadable or invalid configuration files."""


class OperationCancelledError(ShadowCloneError):
    """Exception raised when the user aborts an operation."""

    def __init__(self, operation: Optional[str] = None):
        self.operation = operation
        message = f"{operation} was cancelled" if operation else "Operation cancelled"
        super().__init__(message)


class DirectoryConflictCancelledError(OperationCancelledError):
    """Exception raised when the user cancels at an existing-directory prompt."""

    def __init__(self, path: str):
        self.path = path
        super().__init__("Worktree creation")
        self.message = f"Worktree creation was cancelled: {path} already exists"
        self.args = (self.message,)


class PathLoopDetectedError(ShadowCloneError):
    """Exception raised when the same directory is targeted too often or is too deep."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Directory creation loop detected: {path}")


class BranchAlreadyExistsError(ShadowCloneError):
    """Exception raised when a new branch would collide with an existing one."""

    def __init__(self, branch: str, conflicts: Optional[List[str]] = None):
        self.branch = branch
        self.conflicts = conflicts or []
        if self.conflicts:
            examples = ", ".join(self.conflicts[:3])
            more = f" and {len(self.conflicts) - 3} more" if len(self.conflicts) > 3 else ""
            message = f"Cannot create branch '{branch}': conflicts with {examples}{more}"
        else:
            message = f"Branch '{branch}' already exists"
        super().__init__(
            message,
            [Suggestion("Attach a worktree to the existing branch", command=f"scj attach {branch}")],
        )


class WorktreeNotFoundError(ShadowCloneError):
    """Exception raised when no worktree is checked out on the given branch."""

    def __init__(self, branch: str, similar: Optional[List[str]] = None):
        self.branch = branch
        self.similar = similar or []
        suggestions = []
        if self.similar:
            suggestions.append(Suggestion(f"Similar worktrees: {', '.join(self.similar)}"))
        suggestions.append(Suggestion("Create it", command=f"scj create {branch}"))
        super().__init__(f"Worktree '{branch}' not found", suggestions)


class PaneConfigurationError(ShadowCloneError):
    """Exception raised for contradictory or invalid tmux pane options."""


class PaneLimitExceededError(ShadowCloneError):
    """Exception raised when more panes are requested than fit in one direction."""

    def __init__(self, pane_count: int, orientation: str, limit: Optional[int] = None):
        self.pane_count = pane_count
        self.orientation = orientation
        self.limit = limit
        limit_msg = f" (maximum {limit})" if limit else ""
        super().__init__(
            f"Too many panes ({pane_count}) for the screen size{limit_msg}, "
            f"the session could not be created ({orientation} split)",
            [
                Suggestion("Enlarge the terminal window"),
                Suggestion("Request fewer panes"),
            ],
        )


class MultiplexerUnavailableError(ShadowCloneError):
    """Exception raised when the tmux binary cannot be found."""

    def __init__(self):
        super().__init__(
            "tmux is not installed",
            [
                Suggestion("Install tmux with Homebrew", command="brew install tmux"),
                Suggestion("Install tmux with apt", command="sudo apt install tmux"),
                Suggestion("Build from source", url="https://github.com/tmux/tmux"),
            ],
        )


class ExternalCommandError(ShadowCloneError):
    """Exception raised when an external command exits non-zero."""

    def __init__(self, command: str, message: Optional[str] = None, stderr: Optional[str] = None):
        self.command = command
        self.stderr = stderr.strip() if stderr else None

        error_msg = f"Command '{command}' failed"
        if message:
            error_msg += f": {message}"
        if self.stderr and (not message or self.stderr not in message):
            error_msg += f"\n{self.stderr}"

        super().__init__(error_msg)


class GitOperationError(ExternalCommandError):
    """Exception raised for errors in git operations."""

    def __init__(self, operation: str, message: Optional[str] = None, stderr: Optional[str] = None):
        self.operation = operation
        super().__init__(f"git {operation}", message, stderr)


class TmuxCommandError(ExternalCommandError):
    """Exception raised for errors in tmux commands."""

    def __init__(self, operation: str, message: Optional[str] = None, stderr: Optional[str] = None):
        self.operation = operation
        super().__init__(f"tmux {operation}", message, stderr)


def error_from_git_failure(operation: str, error: Exception) -> ShadowCloneError:
    """Translate a GitPython failure into the matching typed error."""
    stderr = getattr(error, "stderr", None) or str(error)
    status = getattr(error, "status", None)
    if "not a git repository" in stderr.lower():
        return NotARepositoryError()

    message = f"exit {status}" if status is not None else None
    return GitOperationError(operation, message, stderr)
