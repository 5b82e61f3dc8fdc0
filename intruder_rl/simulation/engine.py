"""Headless training engine: seeded tick runs with Parquet and JSON persistence."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from random import Random

import pyarrow.parquet as pq

from intruder_rl.config.constants import FLUSH_THRESHOLD, PROGRESS_LOG_INTERVAL
from intruder_rl.config.types import SimulationConfig, TrainingMode, TrainingResult
from intruder_rl.io.paths import logs_dir, summary_path, tick_log_path
from intruder_rl.io.schemas import SUMMARY_SCHEMA_VERSION
from intruder_rl.simulation.persistence import empty_tick_columns, flush_tick_columns
from intruder_rl.simulation.trainer import StepRecord, Trainer

logger = logging.getLogger(__name__)


def deterministic_run_id(mode: TrainingMode, seed: int) -> str:
    """Build reproducible run ID stable across runs for identical seeds."""
    return f"{mode.value}_seed{seed}"


def build_trainer(config: SimulationConfig, seed: int) -> Trainer:
    """Create a trainer whose world layout and exploration share one seeded RNG."""
    return Trainer.create(config, Random(seed))


def run_ticks(
    trainer: Trainer,
    ticks: int,
    out_dir: Path,
    run_id: str,
    mode: TrainingMode = TrainingMode.LEARNED,
) -> TrainingResult:
    """Advance *trainer* for *ticks* ticks, logging every tick to Parquet."""
    if ticks < 1:
        raise ValueError("ticks must be >= 1")

    out_dir = Path(out_dir)
    logs_dir(out_dir).mkdir(parents=True, exist_ok=True)
    log_path = tick_log_path(out_dir)
    tick_columns = empty_tick_columns()
    tick_writer: pq.ParquetWriter | None = None
    advance = trainer.step if mode is TrainingMode.LEARNED else trainer.baseline_step

    logger.info(
        "starting %s run %s: %d ticks on %dx%d board with %d citizens",
        mode.value,
        run_id,
        ticks,
        trainer.world.width,
        trainer.world.height,
        len(trainer.world.citizens),
    )
    try:
        for _ in range(ticks):
            record = advance()
            _append_record(tick_columns, run_id, record)
            if len(tick_columns["run_id"]) >= FLUSH_THRESHOLD:
                tick_writer = flush_tick_columns(tick_columns, log_path, tick_writer)
            if trainer.ticks % PROGRESS_LOG_INTERVAL == 0:
                logger.info(
                    "run %s tick %d: table_size=%d states=%d counts=%s",
                    run_id,
                    trainer.ticks,
                    len(trainer.value_table),
                    sum(1 for _ in trainer.value_table.states()),
                    {kind.value: n for kind, n in trainer.counts.items()},
                )
        tick_writer = flush_tick_columns(tick_columns, log_path, tick_writer)
    finally:
        if tick_writer is not None:
            tick_writer.close()

    summary = trainer.score_summary()
    ratio = summary.pop("citizen_hit_ratio")
    result = TrainingResult(
        run_id=run_id,
        mode=mode,
        ticks=trainer.ticks,
        outcome_counts={key: int(value) for key, value in summary.items()},  # type: ignore[arg-type]
        table_size=len(trainer.value_table),
        state_count=sum(1 for _ in trainer.value_table.states()),
        citizen_count=len(trainer.world.citizens),
        citizen_hit_ratio=ratio,
    )
    logger.info("finished run %s: %s", run_id, result.outcome_counts)
    return result


def run_training(
    config: SimulationConfig,
    out_dir: Path,
    ticks: int,
    seed: int = 0,
    mode: TrainingMode = TrainingMode.LEARNED,
    trainer: Trainer | None = None,
) -> TrainingResult:
    """Run one seeded training (or baseline) session and persist its artifacts.

    Pass *trainer* to keep a handle on the world after the run; it defaults to
    ``build_trainer(config, seed)``.
    """
    if trainer is None:
        trainer = build_trainer(config, seed)
    result = run_ticks(
        trainer,
        ticks=ticks,
        out_dir=out_dir,
        run_id=deterministic_run_id(mode, seed),
        mode=mode,
    )
    write_summary(result, config, Path(out_dir), seed)
    return result


def write_summary(
    result: TrainingResult, config: SimulationConfig, out_dir: Path, seed: int
) -> Path:
    """Persist the run summary next to the logs."""
    payload = {
        "schema_version": SUMMARY_SCHEMA_VERSION,
        "run_id": result.run_id,
        "mode": result.mode.value,
        "seed": seed,
        "ticks": result.ticks,
        "outcome_counts": result.outcome_counts,
        "citizen_hit_ratio": result.citizen_hit_ratio,
        "table_size": result.table_size,
        "state_count": result.state_count,
        "citizen_count": result.citizen_count,
        "config": config.to_dict(),
    }
    path = summary_path(out_dir)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, ensure_ascii=False, indent=2))
    return path


def _append_record(
    tick_columns: dict[str, list[int | str | float]], run_id: str, record: StepRecord
) -> None:
    tick_columns["run_id"].append(run_id)
    tick_columns["tick"].append(record.tick)
    tick_columns["x"].append(record.x)
    tick_columns["y"].append(record.y)
    tick_columns["action"].append(record.action)
    tick_columns["decision"].append(record.decision)
    tick_columns["outcome"].append(record.outcome.value)
    tick_columns["reward"].append(record.reward)
    tick_columns["state"].append(record.state)
    tick_columns["next_state"].append(record.next_state)
    tick_columns["table_size"].append(record.table_size)
