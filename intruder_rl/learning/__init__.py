"""Learning layer: Q-table and action-selection policy."""

from intruder_rl.learning.policy import Decision, EpsilonGreedyPolicy
from intruder_rl.learning.value_table import Transition, ValueTable

__all__ = [
    "Decision",
    "EpsilonGreedyPolicy",
    "Transition",
    "ValueTable",
]
