"""Thin wrapper around the tmux binary."""

import os
import signal
import subprocess
from typing import List, Optional

from shadow_clone_jutsu.constants import TMUX_NO_SPACE_MESSAGE
from shadow_clone_jutsu.exceptions import (
    MultiplexerUnavailableError,
    PaneLimitExceededError,
    TmuxCommandError,
)
from shadow_clone_jutsu.logging_config import get_logger
from shadow_clone_jutsu.models.tmux import AttachResult, Orientation

logger = get_logger(__name__)

DEFAULT_SHELL = "/bin/bash"


def user_shell() -> str:
    return os.environ.get("SHELL") or DEFAULT_SHELL


def inside_tmux() -> bool:
    return "TMUX" in os.environ


class ExecAttacher:
    """Attach by replacing the current process with `tmux attach-session`."""

    def attach(self, session_name: str) -> AttachResult:
        argv = ["tmux", "attach-session", "-t", session_name]
        logger.debug(f"exec {' '.join(argv)}")
        try:
            os.execvp(argv[0], argv)
        except FileNotFoundError as e:
            raise MultiplexerUnavailableError() from e
        return AttachResult(replaced=True)


class SubprocessAttacher:
    """Attach as a blocking child process, forwarding SIGINT/SIGTERM to it."""

    def attach(self, session_name: str) -> AttachResult:
        argv = ["tmux", "attach-session", "-t", session_name]
        logger.debug(f"spawn {' '.join(argv)}")
        try:
            process = subprocess.Popen(argv)
        except FileNotFoundError as e:
            raise MultiplexerUnavailableError() from e

        def forward(signum, frame):
            if process.poll() is None:
                process.send_signal(signum)

        previous = {sig: signal.signal(sig, forward) for sig in (signal.SIGINT, signal.SIGTERM)}
        try:
            exit_code = process.wait()
        finally:
            for sig, handler in previous.items():
                signal.signal(sig, handler)

        logger.debug(f"tmux attach exited with {exit_code}")
        return AttachResult(replaced=False, exit_code=exit_code)


def select_attacher():
    """Process replacement where the platform has it, a child process otherwise."""
    if os.name == "posix" and hasattr(os, "execvp"):
        return ExecAttacher()
    return SubprocessAttacher()


class TmuxClient:
    """Runs tmux commands; every failure surfaces as a typed error."""

    def __init__(self, attacher=None):
        self.attacher = attacher or select_attacher()

    def _run(self, args: List[str], check: bool = True) -> subprocess.CompletedProcess:
        logger.debug(f"tmux {' '.join(args)}")
        try:
            result = subprocess.run(["tmux", *args], capture_output=True, text=True)
        except FileNotFoundError as e:
            raise MultiplexerUnavailableError() from e

        if check and result.returncode != 0:
            raise TmuxCommandError(args[0], f"exit {result.returncode}", result.stderr)
        return result

    def is_available(self) -> bool:
        try:
            self._run(["-V"])
        except (MultiplexerUnavailableError, TmuxCommandError):
            return False
        return True

    def has_session(self, session_name: str) -> bool:
        return self._run(["has-session", "-t", session_name], check=False).returncode == 0

    def new_session(self, session_name: str, cwd: str) -> None:
        """Create a detached session running a login shell in `cwd`."""
        self._run(["new-session", "-d", "-s", session_name, "-c", cwd, user_shell(), "-l"])

    def kill_session(self, session_name: str) -> None:
        self._run(["kill-session", "-t", session_name])

    def split_window(self, session_name: str, orientation: Orientation, cwd: str, pane_count: int = 0) -> None:
        """Add one pane to the session's window.

        Raises:
            PaneLimitExceededError: If tmux reports there is no room for the pane
        """
        try:
            self._run([
                "split-window", "-t", session_name, orientation.split_flag,
                "-c", cwd, user_shell(), "-l",
            ])
        except TmuxCommandError as e:
            if e.stderr and TMUX_NO_SPACE_MESSAGE in e.stderr:
                raise PaneLimitExceededError(pane_count, orientation.value) from e
            raise

    def select_layout(self, session_name: str, layout: str) -> None:
        self._run(["select-layout", "-t", session_name, layout])

    def select_pane(self, target: str, title: Optional[str] = None) -> None:
        args = ["select-pane", "-t", target]
        if title is not None:
            args.extend(["-T", title])
        self._run(args)

    def rename_window(self, session_name: str, name: str) -> None:
        self._run(["rename-window", "-t", session_name, name])

    def switch_client(self, session_name: str) -> AttachResult:
        result = self._run(["switch-client", "-t", session_name])
        return AttachResult(replaced=False, exit_code=result.returncode)

    def attach(self, session_name: str) -> AttachResult:
        """Attach the terminal, or switch clients when already inside tmux."""
        if inside_tmux():
            return self.switch_client(session_name)
        return self.attacher.attach(session_name)
