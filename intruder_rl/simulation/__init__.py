"""Simulation layer: tick loop, scheduler, and headless training engine."""

from intruder_rl.simulation.engine import (
    build_trainer,
    run_ticks,
    run_training,
    write_summary,
)
from intruder_rl.simulation.persistence import flush_tick_columns
from intruder_rl.simulation.scheduler import TickScheduler
from intruder_rl.simulation.trainer import StepRecord, Trainer, resolve_outcome

__all__ = [
    "StepRecord",
    "TickScheduler",
    "Trainer",
    "build_trainer",
    "flush_tick_columns",
    "resolve_outcome",
    "run_ticks",
    "run_training",
    "write_summary",
]
