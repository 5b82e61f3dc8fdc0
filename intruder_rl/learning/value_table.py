"""Tabular action-value store with staged, batched Q-learning updates.

Entries are created lazily on first update. A missing entry means the
(state, action) pair has never been learned, which is distinct from a
learned value of exactly 0.0; ``best_action`` returns ``None`` for states
with no recorded actions so callers fall back to exploration.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterator
from dataclasses import dataclass

from intruder_rl.config.constants import ACTIONS, DISCOUNT, LEARNING_RATE, REPLAY_WINDOW
from intruder_rl.domain.state_encoder import StateKey


@dataclass(frozen=True)
class Transition:
    """One observed (s, a, r, s') step awaiting replay."""

    state: StateKey
    next_state: StateKey
    reward: float
    action: int


class ValueTable:
    """Q-table keyed by state, then action."""

    def __init__(
        self,
        learning_rate: float = LEARNING_RATE,
        discount: float = DISCOUNT,
        replay_window: int = REPLAY_WINDOW,
    ) -> None:
        if not 0.0 < learning_rate <= 1.0:
            raise ValueError("learning_rate must be in (0.0, 1.0]")
        if not 0.0 <= discount < 1.0:
            raise ValueError("discount must be in [0.0, 1.0)")
        if replay_window < 1:
            raise ValueError("replay_window must be >= 1")
        self.learning_rate = learning_rate
        self.discount = discount
        self._values: dict[StateKey, dict[int, float]] = {}
        self._staged: deque[Transition] = deque(maxlen=replay_window)

    def __len__(self) -> int:
        return sum(len(actions) for actions in self._values.values())

    def states(self) -> Iterator[StateKey]:
        return iter(self._values)

    @property
    def staged(self) -> tuple[Transition, ...]:
        return tuple(self._staged)

    def value(self, state: StateKey, action: int) -> float | None:
        """Return the learned value, or None if the pair was never updated."""
        return self._values.get(state, {}).get(action)

    def knows_action(self, state: StateKey, action: int) -> bool:
        return action in self._values.get(state, {})

    def best_action(self, state: StateKey) -> int | None:
        """Return the highest-valued recorded action for *state*, or None if none is recorded.

        Ties resolve to the earliest action in ``ACTIONS`` order.
        """
        recorded = self._values.get(state)
        if not recorded:
            return None
        return max((a for a in ACTIONS if a in recorded), key=lambda a: recorded[a])

    def max_value(self, state: StateKey) -> float:
        """Return max_a Q(state, a), treating a state with no entries as 0.0."""
        recorded = self._values.get(state)
        if not recorded:
            return 0.0
        return max(recorded.values())

    def record_transition(
        self, state: StateKey, next_state: StateKey, reward: float, action: int
    ) -> None:
        """Stage a transition for the next ``learn`` call; values are not touched."""
        if action not in ACTIONS:
            raise ValueError(f"action must be one of {ACTIONS}, got {action!r}")
        self._staged.append(
            Transition(state=state, next_state=next_state, reward=float(reward), action=action)
        )

    def learn(self, iterations: int) -> None:
        """Replay the staged window *iterations* times, oldest transition first."""
        if iterations < 0:
            raise ValueError("iterations must be >= 0")
        if not self._staged:
            return
        for _ in range(iterations):
            for transition in self._staged:
                self._update(transition)

    def _update(self, transition: Transition) -> None:
        actions = self._values.setdefault(transition.state, {})
        current = actions.get(transition.action, 0.0)
        target = transition.reward + self.discount * self.max_value(transition.next_state)
        actions[transition.action] = current + self.learning_rate * (target - current)
