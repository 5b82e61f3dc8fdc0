"""Configuration dataclasses for intruder training runs.

All frozen dataclasses that parameterise the world, the reward table, and
the learning loop live here. Instances are passed explicitly into
``GridWorld``/``Trainer`` constructors; there is no process-wide config.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any

from intruder_rl.config.constants import (
    CITIZEN_DENSITY,
    DISCOUNT,
    EXPLORATION_RATE,
    GRID_HEIGHT,
    GRID_WIDTH,
    LEARN_ITERATIONS,
    LEARNING_RATE,
    REPLAY_WINDOW,
    REWARD_COLLIDE,
    REWARD_MOVE_TO_CITIZEN,
    REWARD_MOVE_TO_EMPTY,
    REWARD_STAY,
)

__all__ = [
    "OutcomeKind",
    "TrainingMode",
    "WorldConfig",
    "RewardConfig",
    "LearningConfig",
    "SimulationConfig",
    "TrainingResult",
]


class OutcomeKind(Enum):
    """Consequence of one intruder move, used to select the reward."""

    COLLIDE = "collide"
    MOVE_TO_CITIZEN = "move_to_citizen"
    MOVE_TO_EMPTY = "move_to_empty"
    STAY = "stay"


class TrainingMode(Enum):
    """Which discipline drives the intruder during a run."""

    LEARNED = "learned"
    BASELINE = "baseline"


# ---------------------------------------------------------------------------
# Config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class WorldConfig:
    """Grid dimensions and citizen placement density."""

    width: int = GRID_WIDTH
    height: int = GRID_HEIGHT
    density: float = CITIZEN_DENSITY
    """Independent per-cell citizen placement probability."""

    def __post_init__(self) -> None:
        if self.width < 1 or self.height < 1:
            raise ValueError("grid dimensions must be >= 1")
        if not 0.0 <= self.density <= 1.0:
            raise ValueError("density must be in [0.0, 1.0]")


@dataclass(frozen=True)
class RewardConfig:
    """Immutable reward table keyed by move outcome."""

    collide: float = REWARD_COLLIDE
    move_to_citizen: float = REWARD_MOVE_TO_CITIZEN
    move_to_empty: float = REWARD_MOVE_TO_EMPTY
    stay: float = REWARD_STAY

    def reward_for(self, outcome: OutcomeKind) -> float:
        """Return the configured reward for *outcome*."""
        return float(getattr(self, outcome.value))


@dataclass(frozen=True)
class LearningConfig:
    """Q-learning and exploration knobs."""

    learning_rate: float = LEARNING_RATE
    discount: float = DISCOUNT
    exploration_rate: float = EXPLORATION_RATE
    learn_iterations: int = LEARN_ITERATIONS
    """Replay rounds per tick."""
    replay_window: int = REPLAY_WINDOW
    """Most recent transitions replayed each round (1 = latest only)."""

    def __post_init__(self) -> None:
        if not 0.0 < self.learning_rate <= 1.0:
            raise ValueError("learning_rate must be in (0.0, 1.0]")
        if not 0.0 <= self.discount < 1.0:
            raise ValueError("discount must be in [0.0, 1.0)")
        if not 0.0 <= self.exploration_rate <= 1.0:
            raise ValueError("exploration_rate must be in [0.0, 1.0]")
        if self.learn_iterations < 0:
            raise ValueError("learn_iterations must be >= 0")
        if self.replay_window < 1:
            raise ValueError("replay_window must be >= 1")


@dataclass(frozen=True)
class SimulationConfig:
    """Bundle of world, reward and learning settings for one run."""

    world: WorldConfig = field(default_factory=WorldConfig)
    reward: RewardConfig = field(default_factory=RewardConfig)
    learning: LearningConfig = field(default_factory=LearningConfig)

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> SimulationConfig:
        """Build from a nested ``{"world": ..., "reward": ..., "learning": ...}`` mapping.

        Missing sections fall back to defaults; unknown keys raise ``ValueError``.
        """
        unknown = set(payload) - {"world", "reward", "learning"}
        if unknown:
            raise ValueError(f"unknown config sections: {', '.join(sorted(unknown))}")
        try:
            return cls(
                world=WorldConfig(**payload.get("world", {})),
                reward=RewardConfig(**payload.get("reward", {})),
                learning=LearningConfig(**payload.get("learning", {})),
            )
        except TypeError as exc:
            raise ValueError(f"invalid config payload: {exc}") from exc

    def to_dict(self) -> dict[str, dict[str, Any]]:
        """Return a JSON-serializable nested mapping."""
        return {
            "world": asdict(self.world),
            "reward": asdict(self.reward),
            "learning": asdict(self.learning),
        }


# ---------------------------------------------------------------------------
# Result container
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TrainingResult:
    """Top-level result for one headless training run."""

    run_id: str
    mode: TrainingMode
    ticks: int
    outcome_counts: dict[str, int]
    table_size: int
    state_count: int
    citizen_count: int
    citizen_hit_ratio: float | None
