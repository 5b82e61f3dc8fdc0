"""One-tick training loop tying the world, value table and policy together."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from random import Random

from intruder_rl.config.types import OutcomeKind, SimulationConfig
from intruder_rl.domain.grid_world import GridWorld, Occupant
from intruder_rl.domain.state_encoder import StateKey, decode, encode
from intruder_rl.domain.trajectory import parametric_position
from intruder_rl.learning.policy import EpsilonGreedyPolicy
from intruder_rl.learning.value_table import ValueTable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StepRecord:
    """What happened during one tick."""

    tick: int
    x: int
    y: int
    action: int
    decision: str
    outcome: OutcomeKind
    reward: float
    state: StateKey
    next_state: StateKey
    table_size: int


def resolve_outcome(collided_with: Occupant, moved: bool) -> OutcomeKind:
    """Map the post-move occupant and whether the cell changed to an outcome kind."""
    if collided_with is Occupant.EMPTY:
        return OutcomeKind.MOVE_TO_EMPTY if moved else OutcomeKind.STAY
    if moved:
        return OutcomeKind.MOVE_TO_CITIZEN
    return OutcomeKind.COLLIDE


class Trainer:
    """Drives the intruder one tick at a time and learns from each move."""

    def __init__(
        self,
        world: GridWorld,
        value_table: ValueTable,
        policy: EpsilonGreedyPolicy,
        config: SimulationConfig,
    ) -> None:
        self.world = world
        self.value_table = value_table
        self.policy = policy
        self.config = config
        self.counts: Counter[OutcomeKind] = Counter({kind: 0 for kind in OutcomeKind})
        self.ticks = 0

    @classmethod
    def create(cls, config: SimulationConfig, rng: Random) -> Trainer:
        """Build a fresh world, empty table and policy sharing *rng*."""
        world = GridWorld.create(config.world, rng)
        table = ValueTable(
            learning_rate=config.learning.learning_rate,
            discount=config.learning.discount,
            replay_window=config.learning.replay_window,
        )
        return cls(world, table, EpsilonGreedyPolicy(table, rng), config)

    def observe(self) -> StateKey:
        return encode(self.world.neighborhood(self.world.intruder_position))

    def step(self) -> StepRecord:
        """Observe, act, apply, reward, record, learn, tally."""
        current_state = self.observe()
        action = self.policy.select_action(current_state, self.config.learning.exploration_rate)

        x, y = self.world.intruder_position
        new_position = ((x + action) % self.world.width, y)
        self.world.move_intruder_to(*new_position)

        outcome, reward = self._score_move(new_position, moved=new_position != (x, y))
        next_state = self.observe()

        self.value_table.record_transition(current_state, next_state, reward, action)
        self.value_table.learn(self.config.learning.learn_iterations)

        record = self._tally(
            action=action,
            decision=self.policy.last_decision or "explore",
            outcome=outcome,
            reward=reward,
            state=current_state,
            next_state=next_state,
        )
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "tick=%d action=%d decision=%s outcome=%s reward=%.1f citizens_seen=%d",
                record.tick,
                action,
                record.decision,
                outcome.value,
                reward,
                decode(next_state).count(Occupant.CITIZEN),
            )
        return record

    def baseline_step(self) -> StepRecord:
        """Advance the intruder along the parametric trajectory without learning."""
        current_state = self.observe()
        x, y = self.world.intruder_position
        self.world.time += 1
        new_position = parametric_position(self.world.width, self.world.height, self.world.time)
        self.world.move_intruder_to(*new_position)
        outcome, reward = self._score_move(new_position, moved=new_position != (x, y))
        return self._tally(
            action=0,
            decision="baseline",
            outcome=outcome,
            reward=reward,
            state=current_state,
            next_state=self.observe(),
        )

    def score_summary(self) -> dict[str, int | float | None]:
        """Per-outcome counts plus the citizen-hit ratio (None without any empty moves)."""
        summary: dict[str, int | float | None] = {
            kind.value: self.counts[kind] for kind in OutcomeKind
        }
        empty_moves = self.counts[OutcomeKind.MOVE_TO_EMPTY]
        citizen_hits = self.counts[OutcomeKind.MOVE_TO_CITIZEN]
        summary["citizen_hit_ratio"] = citizen_hits / empty_moves if empty_moves else None
        return summary

    def _score_move(self, position: tuple[int, int], moved: bool) -> tuple[OutcomeKind, float]:
        collided_with = self.world.resolve_collision(position)
        outcome = resolve_outcome(collided_with, moved)
        return outcome, self.config.reward.reward_for(outcome)

    def _tally(
        self,
        action: int,
        decision: str,
        outcome: OutcomeKind,
        reward: float,
        state: StateKey,
        next_state: StateKey,
    ) -> StepRecord:
        self.counts[outcome] += 1
        self.ticks += 1
        x, y = self.world.intruder_position
        return StepRecord(
            tick=self.ticks - 1,
            x=x,
            y=y,
            action=action,
            decision=decision,
            outcome=outcome,
            reward=reward,
            state=state,
            next_state=next_state,
            table_size=len(self.value_table),
        )
