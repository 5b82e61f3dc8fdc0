"""CLI entrypoint for headless intruder training runs.

This module owns CLI argument parsing and dispatch. Domain logic lives in:

- ``intruder_rl.config``             – configuration dataclasses
- ``intruder_rl.simulation.engine``  – ``run_training`` engine and summary writer
- ``intruder_rl.viz``                – board and outcome-curve renderers
"""

from __future__ import annotations

import argparse
import json
import logging
from collections.abc import Iterable
from dataclasses import fields
from pathlib import Path
from typing import Any

from intruder_rl.config.constants import NUM_TICKS
from intruder_rl.config.types import (
    LearningConfig,
    RewardConfig,
    SimulationConfig,
    TrainingMode,
    WorldConfig,
)
from intruder_rl.io.paths import board_image_path, outcome_curve_path, tick_log_path
from intruder_rl.simulation.engine import build_trainer, run_training
from intruder_rl.viz.render import render_board, render_outcome_curve

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# CLI parsing helpers
# ---------------------------------------------------------------------------


def _parse_mode(raw_mode: str) -> TrainingMode:
    """Parse training mode from CLI/config."""
    try:
        return TrainingMode(raw_mode)
    except ValueError as exc:
        valid = ", ".join(mode.value for mode in TrainingMode)
        raise ValueError(f"mode must be one of {valid}") from exc


def _coerce_bool(raw: object, key: str) -> bool:
    """Coerce raw value to bool with strict string-check."""
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str):
        normalized = raw.strip().lower()
        if normalized in {"1", "true", "yes", "on"}:
            return True
        if normalized in {"0", "false", "no", "off"}:
            return False
    raise ValueError(f"{key} must be a boolean value")


def _coerce_int(raw: object, key: str) -> int:
    """Coerce raw value to int; rejects booleans and non-integer floats."""
    if isinstance(raw, bool):
        raise ValueError(f"{key} must be an integer value")
    if isinstance(raw, float):
        if raw != int(raw):
            raise ValueError(f"{key} must be an integer value, got {raw!r}")
        return int(raw)
    if isinstance(raw, (int, str)):
        return int(raw)
    raise ValueError(f"{key} must be an integer value")


def _coerce_float(raw: object, key: str) -> float:
    """Coerce raw value to float; rejects booleans."""
    if isinstance(raw, bool):
        raise ValueError(f"{key} must be a float value")
    if isinstance(raw, (int, float, str)):
        return float(raw)
    raise ValueError(f"{key} must be a float value")


def _get_val(cli_val: object, key: str, file_cfg: dict[str, Any], default: object) -> object:
    """CLI > file > default resolution."""
    if cli_val is not None:
        return cli_val
    return file_cfg.get(key, default)


def _get_bool(cli_val: bool | None, key: str, file_cfg: dict[str, Any], default: bool) -> bool:
    return _coerce_bool(_get_val(cli_val, key, file_cfg, default), key)


def _get_int(cli_val: int | None, key: str, file_cfg: dict[str, Any], default: int) -> int:
    return _coerce_int(_get_val(cli_val, key, file_cfg, default), key)


def _get_float(
    cli_val: float | None, key: str, file_cfg: dict[str, Any], default: float
) -> float:
    return _coerce_float(_get_val(cli_val, key, file_cfg, default), key)


def _get_section(file_cfg: dict[str, Any], name: str, allowed: Iterable[str]) -> dict[str, Any]:
    """Return a nested config section, rejecting non-mappings and unknown keys."""
    section = file_cfg.get(name, {})
    if not isinstance(section, dict):
        raise ValueError(f"{name} config section must be an object")
    unknown = set(section) - set(allowed)
    if unknown:
        raise ValueError(f"unknown {name} config keys: {', '.join(sorted(unknown))}")
    return section


def _build_config(args: argparse.Namespace, file_cfg: dict[str, Any]) -> SimulationConfig:
    """Merge CLI flags over the file's ``world``/``reward``/``learning`` sections.

    Every field is resolved (CLI > file > default) and coerced before any
    config dataclass validates, so a flag always replaces the file value.
    """
    base = SimulationConfig()
    world_cfg = _get_section(file_cfg, "world", (f.name for f in fields(WorldConfig)))
    reward_cfg = _get_section(file_cfg, "reward", (f.name for f in fields(RewardConfig)))
    learning_cfg = _get_section(file_cfg, "learning", (f.name for f in fields(LearningConfig)))
    world = {
        "width": _get_int(args.width, "width", world_cfg, base.world.width),
        "height": _get_int(args.height, "height", world_cfg, base.world.height),
        "density": _get_float(args.density, "density", world_cfg, base.world.density),
    }
    learning = {
        "learning_rate": _get_float(
            args.learning_rate, "learning_rate", learning_cfg, base.learning.learning_rate
        ),
        "discount": _get_float(args.discount, "discount", learning_cfg, base.learning.discount),
        "exploration_rate": _get_float(
            args.exploration_rate,
            "exploration_rate",
            learning_cfg,
            base.learning.exploration_rate,
        ),
        "learn_iterations": _get_int(
            args.learn_iterations,
            "learn_iterations",
            learning_cfg,
            base.learning.learn_iterations,
        ),
        "replay_window": _get_int(
            args.replay_window, "replay_window", learning_cfg, base.learning.replay_window
        ),
    }
    # Reward values have no CLI flags
    reward = {
        f.name: _get_float(None, f.name, reward_cfg, getattr(base.reward, f.name))
        for f in fields(RewardConfig)
    }
    return SimulationConfig.from_dict({"world": world, "reward": reward, "learning": learning})


def _build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(description="Train the intruder's Q-table on a toroidal grid")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON config file (CLI args override file values)",
    )
    parser.add_argument("--ticks", type=int, default=None)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--out-dir", type=Path, default=None)
    parser.add_argument(
        "--mode",
        type=str,
        choices=[mode.value for mode in TrainingMode],
        default=None,
    )
    parser.add_argument("--width", type=int, default=None)
    parser.add_argument("--height", type=int, default=None)
    parser.add_argument("--density", type=float, default=None)
    parser.add_argument("--exploration-rate", type=float, default=None)
    parser.add_argument("--learning-rate", type=float, default=None)
    parser.add_argument("--discount", type=float, default=None)
    parser.add_argument("--learn-iterations", type=int, default=None)
    parser.add_argument("--replay-window", type=int, default=None)
    parser.add_argument("--render", action=argparse.BooleanOptionalAction, default=None)
    parser.add_argument("--curve-window", type=int, default=None)
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser


# ---------------------------------------------------------------------------
# Main CLI
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for a headless training run.

    Supports ``--config path/to/config.json`` for reproducibility. Top-level
    keys (``ticks``, ``seed``, ``out_dir``, ``mode``, ``render``) and nested
    ``world``/``reward``/``learning`` sections are read from the file; CLI
    arguments override file values, which override built-in defaults.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    file_cfg: dict[str, Any] = {}
    if args.config is not None:
        try:
            file_cfg = json.loads(Path(args.config).read_text())
        except FileNotFoundError:
            parser.error(f"Config file not found: {args.config}")
        except json.JSONDecodeError as exc:
            parser.error(f"Config file is not valid JSON: {args.config}: {exc}")

    try:
        config = _build_config(args, file_cfg)
        ticks = _get_int(args.ticks, "ticks", file_cfg, NUM_TICKS)
        if ticks < 1:
            raise ValueError("ticks must be >= 1")
        seed = _get_int(args.seed, "seed", file_cfg, 0)
        mode = _parse_mode(str(_get_val(args.mode, "mode", file_cfg, TrainingMode.LEARNED.value)))
        render = _get_bool(args.render, "render", file_cfg, False)
        curve_window = _get_int(args.curve_window, "curve_window", file_cfg, 50)
    except ValueError as exc:
        parser.error(str(exc))
    out_dir = Path(str(_get_val(args.out_dir, "out_dir", file_cfg, "data")))

    trainer = build_trainer(config, seed)
    result = run_training(config, out_dir, ticks=ticks, seed=seed, mode=mode, trainer=trainer)

    if render:
        render_board(trainer.world, board_image_path(out_dir))
        render_outcome_curve(
            tick_log_path(out_dir), outcome_curve_path(out_dir), window=curve_window
        )
        logger.info("rendered board and outcome curve into %s", out_dir)

    summary = {
        "run_id": result.run_id,
        "mode": result.mode.value,
        "ticks": result.ticks,
        "outcome_counts": result.outcome_counts,
        "citizen_hit_ratio": result.citizen_hit_ratio,
        "table_size": result.table_size,
        "state_count": result.state_count,
    }
    print(json.dumps(summary, ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
