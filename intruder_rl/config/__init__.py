"""Configuration layer: constants and typed config dataclasses."""

from intruder_rl.config.constants import (
    ACTIONS,
    CITIZEN_DENSITY,
    DISCOUNT,
    EXPLORATION_RATE,
    FAST_INTERVAL_S,
    FLUSH_THRESHOLD,
    GRID_HEIGHT,
    GRID_WIDTH,
    LEARN_ITERATIONS,
    LEARNING_RATE,
    NUM_TICKS,
    REPLAY_WINDOW,
    SLOW_INTERVAL_S,
)
from intruder_rl.config.types import (
    LearningConfig,
    OutcomeKind,
    RewardConfig,
    SimulationConfig,
    TrainingMode,
    TrainingResult,
    WorldConfig,
)

__all__ = [
    "ACTIONS",
    "CITIZEN_DENSITY",
    "DISCOUNT",
    "EXPLORATION_RATE",
    "FAST_INTERVAL_S",
    "FLUSH_THRESHOLD",
    "GRID_HEIGHT",
    "GRID_WIDTH",
    "LEARN_ITERATIONS",
    "LEARNING_RATE",
    "LearningConfig",
    "NUM_TICKS",
    "OutcomeKind",
    "REPLAY_WINDOW",
    "RewardConfig",
    "SLOW_INTERVAL_S",
    "SimulationConfig",
    "TrainingMode",
    "TrainingResult",
    "WorldConfig",
]
