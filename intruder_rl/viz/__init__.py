"""Visualization layer: themes and matplotlib renderers."""

from intruder_rl.viz.render import (
    build_occupancy_array,
    render_board,
    render_outcome_curve,
    rolling_outcome_rates,
)
from intruder_rl.viz.theme import (
    DEFAULT_THEME,
    PAPER_THEME,
    REGISTERED_THEMES,
    Theme,
    get_theme,
)

__all__ = [
    "DEFAULT_THEME",
    "PAPER_THEME",
    "REGISTERED_THEMES",
    "Theme",
    "build_occupancy_array",
    "get_theme",
    "render_board",
    "render_outcome_curve",
    "rolling_outcome_rates",
]
