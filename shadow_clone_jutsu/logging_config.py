"""Logging for the scj command.

Every module logs below the ``scj`` logger, so `setup_logging` only touches
that tree. GitPython logs each git command line under ``git``; those lines
are kept out of the terminal and go to the debug log file only.
"""
import logging
import sys
from pathlib import Path
from typing import Optional

from shadow_clone_jutsu.constants import LOG_DIR_NAME, LOG_FILE_NAME

LOGGER_NAME = "scj"
PACKAGE_PREFIX = "shadow_clone_jutsu."

DEBUG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class ColoredFormatter(logging.Formatter):
    """Colors the level name when stderr is a terminal."""

    COLORS = {
        'DEBUG': '\033[36m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[35m',
    }
    RESET = '\033[0m'

    def format(self, record):
        color = self.COLORS.get(record.levelname)
        if color and sys.stderr.isatty():
            record = logging.makeLogRecord(record.__dict__)
            record.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(record)


def log_file_path(home: Optional[Path] = None) -> Path:
    """Where `--debug` writes its log: ~/.shadow-clone-jutsu/scj.log."""
    return (home or Path.home()) / LOG_DIR_NAME / LOG_FILE_NAME


def setup_logging(verbose: bool = False, debug: bool = False) -> Optional[Path]:
    """Configure the scj logger tree for one CLI invocation.

    Args:
        verbose: Show INFO messages on stderr
        debug: Show DEBUG messages and write a fresh log file that also
            records the git commands GitPython runs

    Returns:
        Path of the debug log file, or None without `debug`
    """
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    git_logger = logging.getLogger("git")
    for handler in git_logger.handlers[:]:
        git_logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    if debug:
        console_handler.setFormatter(ColoredFormatter(fmt=DEBUG_FORMAT, datefmt=DATE_FORMAT))
    else:
        console_handler.setFormatter(ColoredFormatter(fmt='[%(name)s] %(message)s'))
    logger.addHandler(console_handler)

    if not debug:
        return None

    path = log_file_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(path, mode='w')
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(fmt=DEBUG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(file_handler)

    git_logger.setLevel(logging.DEBUG)
    git_logger.addHandler(file_handler)
    git_logger.propagate = False

    logger.debug(f"Writing debug log to {path}")
    return path


def get_logger(name: str) -> logging.Logger:
    """Logger for a module, named below ``scj``.

    ``shadow_clone_jutsu.services.tmux.session`` becomes ``scj.tmux.session``.
    """
    if name.startswith(PACKAGE_PREFIX):
        name = name[len(PACKAGE_PREFIX):]
    if name.startswith('services.'):
        name = name[len('services.'):]
    return logging.getLogger(f"{LOGGER_NAME}.{name}")
