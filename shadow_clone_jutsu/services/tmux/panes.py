"""Pane count and orientation planning for tmux sessions."""

from typing import Optional

from shadow_clone_jutsu.constants import (
    DEFAULT_LAYOUTS,
    DEFAULT_PANE_COUNT,
    MAX_HORIZONTAL_PANES,
    MAX_VERTICAL_PANES,
    TMUX_LAYOUTS,
)
from shadow_clone_jutsu.exceptions import PaneConfigurationError, PaneLimitExceededError
from shadow_clone_jutsu.models.tmux import Orientation, PaneConfiguration, TmuxOptions


def get_pane_configuration(options: Optional[TmuxOptions] = None) -> PaneConfiguration:
    """Normalize tmux options into a pane plan.

    No options gives two vertically split panes. A simple horizontal flag
    gives two horizontal panes; an explicit pane count fixes both count and
    orientation. More than two panes without a named layout get the even
    layout for their orientation.
    """
    options = options or TmuxOptions()
    pane_count = options.horizontal_panes or options.vertical_panes or DEFAULT_PANE_COUNT
    is_horizontal = bool(options.horizontal or options.horizontal_panes)
    orientation = Orientation.HORIZONTAL if is_horizontal else Orientation.VERTICAL

    layout = options.layout
    if layout is None and pane_count > DEFAULT_PANE_COUNT:
        layout = DEFAULT_LAYOUTS[orientation.value]

    return PaneConfiguration(pane_count=pane_count, orientation=orientation, layout=layout)


def validate_pane_count(pane_count: int, is_horizontal: bool) -> None:
    """Raise PaneLimitExceededError if the panes cannot fit one direction.

    Raises:
        PaneLimitExceededError: Over 10 horizontal or 15 vertical panes
    """
    limit = MAX_HORIZONTAL_PANES if is_horizontal else MAX_VERTICAL_PANES
    if pane_count > limit:
        orientation = Orientation.HORIZONTAL if is_horizontal else Orientation.VERTICAL
        raise PaneLimitExceededError(pane_count, orientation.value, limit)


def validate_tmux_options(options: TmuxOptions) -> Optional[PaneConfiguration]:
    """Pre-flight check of tmux flags, run before anything is created.

    Returns:
        The pane plan when a split was requested, otherwise None

    Raises:
        PaneConfigurationError: For contradictory or out-of-range flags
        PaneLimitExceededError: For too many panes
    """
    split_flags = [
        name
        for name, value in (
            ("--tmux-h", options.horizontal),
            ("--tmux-v", options.vertical),
            ("--tmux-h-panes", options.horizontal_panes is not None),
            ("--tmux-v-panes", options.vertical_panes is not None),
        )
        if value
    ]
    if len(split_flags) > 1:
        raise PaneConfigurationError(f"Options {', '.join(split_flags)} cannot be used together")

    for name, count in (("--tmux-h-panes", options.horizontal_panes), ("--tmux-v-panes", options.vertical_panes)):
        if count is not None and count < 1:
            raise PaneConfigurationError(f"{name} must be at least 1, got {count}")

    if options.layout is not None and options.layout not in TMUX_LAYOUTS:
        raise PaneConfigurationError(
            f"Unknown tmux layout '{options.layout}'. Choose one of: {', '.join(TMUX_LAYOUTS)}"
        )

    if not options.split_requested:
        return None

    config = get_pane_configuration(options)
    # The default two-pane split always fits
    if config.pane_count > DEFAULT_PANE_COUNT:
        validate_pane_count(config.pane_count, config.is_horizontal)
    return config
