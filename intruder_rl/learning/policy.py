"""Action selection over the value table."""

from __future__ import annotations

from random import Random
from typing import Literal

from intruder_rl.config.constants import ACTIONS
from intruder_rl.domain.state_encoder import StateKey
from intruder_rl.learning.value_table import ValueTable

Decision = Literal["explore", "exploit"]


class EpsilonGreedyPolicy:
    """Epsilon-greedy selection biased toward unrecorded (state, action) pairs.

    A random candidate is drawn every call. It is taken when the state has no
    recorded action at all, or when the candidate itself is unrecorded for the
    state and a uniform draw falls below the exploration rate. Otherwise the
    best recorded action is exploited.
    """

    def __init__(self, value_table: ValueTable, rng: Random | None = None) -> None:
        self.value_table = value_table
        self._rng = rng or Random()
        self.last_decision: Decision | None = None

    def random_action(self) -> int:
        return self._rng.choice(ACTIONS)

    def select_action(self, state: StateKey, exploration_rate: float) -> int:
        if not 0.0 <= exploration_rate <= 1.0:
            raise ValueError("exploration_rate must be in [0.0, 1.0]")
        candidate = self.random_action()
        best = self.value_table.best_action(state)
        if best is None or (
            not self.value_table.knows_action(state, candidate)
            and self._rng.random() < exploration_rate
        ):
            self.last_decision = "explore"
            return candidate
        self.last_decision = "exploit"
        return best
