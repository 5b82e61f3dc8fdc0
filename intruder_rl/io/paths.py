"""Path construction helpers for training output directories."""

from __future__ import annotations

from pathlib import Path


def resolve_within_base(path: Path, base_dir: Path) -> Path:
    """Resolve *path* and ensure it stays within the trusted *base_dir*.

    Raises :exc:`ValueError` if the resolved path escapes the base directory.
    """
    candidate = path if path.is_absolute() else base_dir / path
    resolved = candidate.resolve()
    base_resolved = base_dir.resolve()
    if resolved != base_resolved and base_resolved not in resolved.parents:
        raise ValueError(f"Path escapes base_dir: {path}")
    return resolved


def logs_dir(out_dir: Path) -> Path:
    """Return path to the logs subdirectory within an output directory."""
    return out_dir / "logs"


def tick_log_path(out_dir: Path) -> Path:
    """Return path to the per-tick Parquet log."""
    return logs_dir(out_dir) / "tick_log.parquet"


def summary_path(out_dir: Path) -> Path:
    """Return path to the run summary JSON file."""
    return out_dir / "summary.json"


def board_image_path(out_dir: Path) -> Path:
    """Return path to the final board rendering."""
    return out_dir / "board.png"


def outcome_curve_path(out_dir: Path) -> Path:
    """Return path to the rolling outcome-rate plot."""
    return out_dir / "outcome_curve.png"
