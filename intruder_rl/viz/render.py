"""Matplotlib-based rendering for the board and training outcome curves."""

from __future__ import annotations

from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402
import pyarrow.parquet as pq  # noqa: E402
from matplotlib.patches import Circle, Patch  # noqa: E402

from intruder_rl.config.types import OutcomeKind  # noqa: E402
from intruder_rl.domain.grid_world import GridWorld, Occupant  # noqa: E402
from intruder_rl.io.paths import resolve_within_base  # noqa: E402
from intruder_rl.viz.theme import DEFAULT_THEME, Theme  # noqa: E402

_OCCUPANT_CODES: dict[Occupant, int] = {
    Occupant.EMPTY: 0,
    Occupant.CITIZEN: 1,
    Occupant.INTRUDER: 2,
}


def build_occupancy_array(world: GridWorld) -> np.ndarray:
    """Return (H, W) int array: 0 empty, 1 citizen, 2 intruder."""
    grid = np.zeros((world.height, world.width), dtype=int)
    for x in range(world.width):
        for y in range(world.height):
            grid[y, x] = _OCCUPANT_CODES[world.object_at(x, y)]
    return grid


def _occupant_color(code: int, theme: Theme) -> str:
    if code == _OCCUPANT_CODES[Occupant.CITIZEN]:
        return theme.citizen_color
    if code == _OCCUPANT_CODES[Occupant.INTRUDER]:
        return theme.intruder_color
    return theme.empty_color


def render_board(
    world: GridWorld,
    output_path: Path,
    base_dir: Path | None = None,
    theme: Theme = DEFAULT_THEME,
) -> Path:
    """Draw every cell as a circle coloured by occupant and save to *output_path*."""
    if base_dir is not None:
        output_path = resolve_within_base(Path(output_path), base_dir)
    grid = build_occupancy_array(world)
    h, w = grid.shape
    radius = 0.5 / 1.25

    fig, ax = plt.subplots(figsize=(max(3.0, w * 0.3), max(3.0, h * 0.3)))
    for y in range(h):
        for x in range(w):
            ax.add_patch(
                Circle(
                    (x + 0.5, y + 0.5),
                    radius,
                    facecolor=_occupant_color(int(grid[y, x]), theme),
                    edgecolor=theme.cell_edge_color,
                    linewidth=theme.cell_edge_width,
                )
            )
    ax.set_xlim(0, w)
    ax.set_ylim(h, 0)
    ax.set_aspect("equal")
    ax.set_xticks([])
    ax.set_yticks([])
    ax.legend(
        handles=[
            Patch(facecolor=theme.citizen_color, edgecolor="gray", label="Citizen"),
            Patch(facecolor=theme.intruder_color, edgecolor="gray", label="Intruder"),
        ],
        loc="upper center",
        bbox_to_anchor=(0.5, -0.02),
        ncol=2,
        frameon=False,
    )
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=150, bbox_inches="tight")
    plt.close(fig)
    return output_path


def rolling_outcome_rates(tick_log_path: Path, window: int = 50) -> dict[str, np.ndarray]:
    """Return per-outcome rolling frequencies from a tick log.

    Each array has one entry per tick; early ticks average over the ticks seen
    so far rather than a full window.
    """
    if window < 1:
        raise ValueError("window must be >= 1")
    outcomes = np.asarray(pq.read_table(tick_log_path, columns=["outcome"]).column(0).to_pylist())
    kernel = np.ones(window)
    denom = np.convolve(np.ones(len(outcomes)), kernel)[: len(outcomes)]
    rates: dict[str, np.ndarray] = {}
    for kind in OutcomeKind:
        hits = (outcomes == kind.value).astype(float)
        rates[kind.value] = np.convolve(hits, kernel)[: len(outcomes)] / np.maximum(denom, 1.0)
    return rates


def render_outcome_curve(
    tick_log_path: Path,
    output_path: Path,
    window: int = 50,
    base_dir: Path | None = None,
    theme: Theme = DEFAULT_THEME,
) -> Path:
    """Plot rolling outcome rates over ticks."""
    if base_dir is not None:
        tick_log_path = resolve_within_base(Path(tick_log_path), base_dir)
        output_path = resolve_within_base(Path(output_path), base_dir)
    rates = rolling_outcome_rates(tick_log_path, window=window)

    fig, ax = plt.subplots(figsize=(8, 4))
    for name, series in rates.items():
        ax.plot(
            np.arange(len(series)),
            series,
            label=theme.outcome_labels.get(name, name),
            color=theme.outcome_colors.get(name),
            linewidth=1.2,
        )
    ax.set_xlabel("Tick")
    ax.set_ylabel(f"Rate (rolling window={window})")
    ax.set_ylim(0.0, 1.0)
    ax.legend(loc="upper right", fontsize=8)
    ax.grid(alpha=0.3)
    fig.tight_layout()
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=150)
    plt.close(fig)
    return output_path
