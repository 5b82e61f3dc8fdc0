"""Tests for intruder_rl.config.types."""

from __future__ import annotations

import pytest

from intruder_rl.config.types import (
    LearningConfig,
    OutcomeKind,
    RewardConfig,
    SimulationConfig,
    WorldConfig,
)


class TestWorldConfig:
    def test_defaults_are_valid(self) -> None:
        config = WorldConfig()
        assert config.width == 15
        assert config.height == 15

    @pytest.mark.parametrize("width,height", [(0, 5), (5, 0), (-1, -1)])
    def test_rejects_non_positive_dimensions(self, width: int, height: int) -> None:
        with pytest.raises(ValueError, match="grid dimensions"):
            WorldConfig(width=width, height=height)

    @pytest.mark.parametrize("density", [-0.1, 1.5])
    def test_rejects_density_outside_unit_interval(self, density: float) -> None:
        with pytest.raises(ValueError, match="density"):
            WorldConfig(density=density)


class TestLearningConfig:
    @pytest.mark.parametrize("rate", [0.0, 1.1])
    def test_rejects_bad_learning_rate(self, rate: float) -> None:
        with pytest.raises(ValueError, match="learning_rate"):
            LearningConfig(learning_rate=rate)

    def test_accepts_learning_rate_of_one(self) -> None:
        assert LearningConfig(learning_rate=1.0).learning_rate == 1.0

    @pytest.mark.parametrize("discount", [-0.1, 1.0])
    def test_rejects_bad_discount(self, discount: float) -> None:
        with pytest.raises(ValueError, match="discount"):
            LearningConfig(discount=discount)

    def test_rejects_bad_exploration_rate(self) -> None:
        with pytest.raises(ValueError, match="exploration_rate"):
            LearningConfig(exploration_rate=1.5)

    def test_rejects_negative_learn_iterations(self) -> None:
        with pytest.raises(ValueError, match="learn_iterations"):
            LearningConfig(learn_iterations=-1)

    def test_rejects_empty_replay_window(self) -> None:
        with pytest.raises(ValueError, match="replay_window"):
            LearningConfig(replay_window=0)


class TestRewardConfig:
    def test_reward_for_each_outcome(self) -> None:
        rewards = RewardConfig(collide=-9.0, move_to_citizen=-3.0, move_to_empty=-0.5, stay=0.25)
        assert rewards.reward_for(OutcomeKind.COLLIDE) == -9.0
        assert rewards.reward_for(OutcomeKind.MOVE_TO_CITIZEN) == -3.0
        assert rewards.reward_for(OutcomeKind.MOVE_TO_EMPTY) == -0.5
        assert rewards.reward_for(OutcomeKind.STAY) == 0.25

    def test_is_immutable(self) -> None:
        rewards = RewardConfig()
        with pytest.raises(AttributeError):
            rewards.stay = 1.0  # type: ignore[misc]


class TestSimulationConfig:
    def test_from_dict_round_trips_through_to_dict(self) -> None:
        config = SimulationConfig(
            world=WorldConfig(width=7, height=4, density=0.5),
            reward=RewardConfig(collide=-50.0),
            learning=LearningConfig(exploration_rate=0.0, replay_window=3),
        )
        assert SimulationConfig.from_dict(config.to_dict()) == config

    def test_missing_sections_use_defaults(self) -> None:
        config = SimulationConfig.from_dict({"world": {"width": 3}})
        assert config.world.width == 3
        assert config.reward == RewardConfig()
        assert config.learning == LearningConfig()

    def test_unknown_section_rejected(self) -> None:
        with pytest.raises(ValueError, match="unknown config sections"):
            SimulationConfig.from_dict({"canvas": {}})

    def test_unknown_field_rejected(self) -> None:
        with pytest.raises(ValueError, match="invalid config payload"):
            SimulationConfig.from_dict({"world": {"depth": 3}})
