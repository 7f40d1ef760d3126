"""Interactive prompts for shadow-clone-jutsu"""

from typing import List, Optional

from rich.console import Console
from rich.prompt import Prompt

from shadow_clone_jutsu.exceptions import OperationCancelledError
from shadow_clone_jutsu.logging_config import get_logger

console = Console()
logger = get_logger(__name__)


class PromptService:
    """Single-choice and yes/no prompts.

    With `assume_yes` every prompt is bypassed and its default is returned.
    An aborted prompt (Ctrl+C, Ctrl+D) raises OperationCancelledError.
    """

    def __init__(self, assume_yes: bool = False, output: Optional[Console] = None):
        self.assume_yes = assume_yes
        self.console = output or console

    def choose(self, message: str, choices: List[str], default: str) -> str:
        """Ask the user to pick one of `choices`."""
        if self.assume_yes:
            logger.debug(f"Auto-selecting '{default}' for: {message}")
            return default

        try:
            answer = Prompt.ask(message, choices=choices, default=default, console=self.console)
        except (EOFError, KeyboardInterrupt) as e:
            raise OperationCancelledError() from e
        logger.debug(f"User chose '{answer}' for: {message}")
        return answer

    def confirm(self, message: str, default: bool = False) -> bool:
        """Ask a yes/no question."""
        if self.assume_yes:
            return default

        hint = "[Y/n]" if default else "[y/N]"
        try:
            response = self.console.input(f"{message} {hint} ")
        except (EOFError, KeyboardInterrupt) as e:
            raise OperationCancelledError() from e

        response = response.strip().lower()
        if not response:
            return default
        return response in ("y", "yes")
