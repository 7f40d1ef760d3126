"""Tests for logging setup"""
import logging
from unittest.mock import patch
import pytest

from shadow_clone_jutsu.logging_config import ColoredFormatter, get_logger, log_file_path, setup_logging


@pytest.fixture
def restore_loggers():
    """Undo handler and level changes made by setup_logging."""
    loggers = [logging.getLogger("scj"), logging.getLogger("git")]
    saved = [(lg, lg.level, lg.handlers[:], lg.propagate) for lg in loggers]
    yield
    for lg, level, handlers, propagate in saved:
        for handler in lg.handlers[:]:
            if handler not in handlers:
                lg.removeHandler(handler)
                handler.close()
        lg.setLevel(level)
        lg.propagate = propagate


class TestGetLogger:
    """Test module logger naming."""

    def test_service_module(self):
        assert get_logger("shadow_clone_jutsu.services.tmux.session").name == "scj.tmux.session"

    def test_core_module(self):
        assert get_logger("shadow_clone_jutsu.core.shadow_clone").name == "scj.core.shadow_clone"


class TestSetupLogging:
    """Test levels and the debug log file."""

    def test_default_level_is_warning(self, restore_loggers):
        assert setup_logging() is None
        assert logging.getLogger("scj").level == logging.WARNING

    def test_verbose(self, restore_loggers):
        setup_logging(verbose=True)
        assert logging.getLogger("scj").level == logging.INFO

    def test_repeated_setup_keeps_one_handler(self, restore_loggers):
        setup_logging()
        setup_logging(verbose=True)
        assert len(logging.getLogger("scj").handlers) == 1

    def test_debug_writes_log_file(self, restore_loggers, temp_dir):
        with patch("shadow_clone_jutsu.logging_config.Path.home", return_value=temp_dir):
            path = setup_logging(debug=True)

        assert path == temp_dir / ".shadow-clone-jutsu" / "scj.log"
        get_logger("shadow_clone_jutsu.services.naming").debug("picked feature-3")
        logging.getLogger("git.cmd").debug("Popen(['git', 'worktree', 'list'])")
        for handler in logging.getLogger("scj").handlers:
            handler.flush()

        text = path.read_text()
        assert "scj.naming - DEBUG - picked feature-3" in text
        assert "git.cmd - DEBUG - Popen(['git', 'worktree', 'list'])" in text
        assert logging.getLogger("git").propagate is False

    def test_log_file_path(self, temp_dir):
        assert log_file_path(temp_dir) == temp_dir / ".shadow-clone-jutsu" / "scj.log"


class TestColoredFormatter:
    """Test level coloring."""

    def test_plain_when_not_a_terminal(self):
        record = logging.LogRecord("scj.core", logging.WARNING, __file__, 1, "careful", None, None)
        with patch("shadow_clone_jutsu.logging_config.sys.stderr") as stderr:
            stderr.isatty.return_value = False
            assert ColoredFormatter(fmt="%(levelname)s %(message)s").format(record) == "WARNING careful"

    def test_colored_on_terminal_leaves_record_intact(self):
        record = logging.LogRecord("scj.core", logging.ERROR, __file__, 1, "failed", None, None)
        with patch("shadow_clone_jutsu.logging_config.sys.stderr") as stderr:
            stderr.isatty.return_value = True
            text = ColoredFormatter(fmt="%(levelname)s %(message)s").format(record)

        assert text == "\033[31mERROR\033[0m failed"
        assert record.levelname == "ERROR"
