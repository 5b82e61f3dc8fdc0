"""Visualization theme presets for board and outcome renderers.

Themes are frozen dataclasses that group all styling constants together so
renderers take a ``Theme`` instead of module-level colour literals.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Theme:
    """Complete collection of visualization style tokens."""

    # Board cells
    empty_color: str = "white"
    citizen_color: str = "blue"
    intruder_color: str = "red"
    cell_edge_color: str = "#333333"
    cell_edge_width: float = 2.0

    # Outcome curves
    outcome_colors: dict[str, str] = field(default_factory=dict)
    outcome_labels: dict[str, str] = field(default_factory=dict)


_DEFAULT_OUTCOME_COLORS: dict[str, str] = {
    "collide": "tab:red",
    "move_to_citizen": "tab:orange",
    "move_to_empty": "tab:green",
    "stay": "tab:gray",
}

_DEFAULT_OUTCOME_LABELS: dict[str, str] = {
    "collide": "Collide",
    "move_to_citizen": "Move to citizen",
    "move_to_empty": "Move to empty",
    "stay": "Stay",
}

DEFAULT_THEME = Theme(
    outcome_colors=_DEFAULT_OUTCOME_COLORS,
    outcome_labels=_DEFAULT_OUTCOME_LABELS,
)

PAPER_THEME = Theme(
    empty_color="#FFFFFF",
    citizen_color="#1f77b4",
    intruder_color="#d62728",
    cell_edge_color="#7f7f7f",
    cell_edge_width=1.0,
    outcome_colors={
        "collide": "#d62728",
        "move_to_citizen": "#ff7f0e",
        "move_to_empty": "#2ca02c",
        "stay": "#7f7f7f",
    },
    outcome_labels=_DEFAULT_OUTCOME_LABELS,
)

REGISTERED_THEMES: dict[str, Theme] = {
    "default": DEFAULT_THEME,
    "paper": PAPER_THEME,
}


def get_theme(name: str) -> Theme:
    """Look up a theme by name (case-insensitive)."""
    key = name.lower()
    if key not in REGISTERED_THEMES:
        valid = ", ".join(sorted(REGISTERED_THEMES))
        raise ValueError(f"Unknown theme {name!r}; available: {valid}")
    return REGISTERED_THEMES[key]
