"""Tests for tmux pane planning and validation"""
import pytest

from shadow_clone_jutsu.exceptions import PaneConfigurationError, PaneLimitExceededError
from shadow_clone_jutsu.models.tmux import Orientation, TmuxOptions
from shadow_clone_jutsu.services.tmux.panes import (
    get_pane_configuration,
    validate_pane_count,
    validate_tmux_options,
)


class TestGetPaneConfiguration:
    """Test normalization of tmux options into a pane plan."""

    def test_defaults(self):
        config = get_pane_configuration()
        assert config.pane_count == 2
        assert config.orientation is Orientation.VERTICAL
        assert config.layout is None

    def test_simple_horizontal_split(self):
        config = get_pane_configuration(TmuxOptions(horizontal=True))
        assert config.pane_count == 2
        assert config.is_horizontal

    def test_simple_vertical_split(self):
        config = get_pane_configuration(TmuxOptions(vertical=True))
        assert config.pane_count == 2
        assert config.orientation is Orientation.VERTICAL

    def test_horizontal_pane_count(self):
        config = get_pane_configuration(TmuxOptions(horizontal_panes=4))
        assert config.pane_count == 4
        assert config.orientation is Orientation.HORIZONTAL
        assert config.layout == "even-horizontal"

    def test_vertical_pane_count_default_layout(self):
        config = get_pane_configuration(TmuxOptions(vertical_panes=3))
        assert config.orientation is Orientation.VERTICAL
        assert config.layout == "even-vertical"

    def test_named_layout_kept(self):
        config = get_pane_configuration(TmuxOptions(vertical_panes=3, layout="tiled"))
        assert config.layout == "tiled"

    def test_two_panes_no_default_layout(self):
        config = get_pane_configuration(TmuxOptions(horizontal_panes=2))
        assert config.layout is None


class TestValidatePaneCount:
    """Test orientation-specific pane ceilings."""

    def test_horizontal_limit(self):
        validate_pane_count(10, True)
        with pytest.raises(PaneLimitExceededError) as exc_info:
            validate_pane_count(11, True)
        assert "11" in str(exc_info.value)
        assert "horizontal" in str(exc_info.value)

    def test_vertical_limit(self):
        validate_pane_count(15, False)
        with pytest.raises(PaneLimitExceededError) as exc_info:
            validate_pane_count(16, False)
        assert "16" in str(exc_info.value)
        assert "vertical" in str(exc_info.value)

    def test_error_carries_details(self):
        with pytest.raises(PaneLimitExceededError) as exc_info:
            validate_pane_count(20, True)
        assert exc_info.value.pane_count == 20
        assert exc_info.value.orientation == "horizontal"
        assert exc_info.value.limit == 10


class TestValidateTmuxOptions:
    """Test the pre-flight check of tmux flags."""

    def test_no_split_returns_none(self):
        assert validate_tmux_options(TmuxOptions()) is None
        assert validate_tmux_options(TmuxOptions(enabled=True)) is None

    def test_split_returns_plan(self):
        plan = validate_tmux_options(TmuxOptions(vertical_panes=15))
        assert plan.pane_count == 15

    @pytest.mark.parametrize("options", [
        TmuxOptions(horizontal=True, vertical=True),
        TmuxOptions(horizontal=True, horizontal_panes=3),
        TmuxOptions(horizontal_panes=3, vertical_panes=3),
        TmuxOptions(vertical=True, horizontal_panes=3),
    ])
    def test_mutually_exclusive_flags(self, options):
        with pytest.raises(PaneConfigurationError):
            validate_tmux_options(options)

    def test_pane_count_below_one(self):
        with pytest.raises(PaneConfigurationError):
            validate_tmux_options(TmuxOptions(horizontal_panes=0))

    def test_unknown_layout(self):
        with pytest.raises(PaneConfigurationError):
            validate_tmux_options(TmuxOptions(enabled=True, layout="spiral"))

    def test_too_many_panes(self):
        with pytest.raises(PaneLimitExceededError):
            validate_tmux_options(TmuxOptions(horizontal_panes=11))
