"""Centralized domain constants for intruder training runs.

All magic numbers that appear across multiple modules are defined here.
Consuming modules should import from this module rather than defining
their own inline literals.
"""

from __future__ import annotations

GRID_WIDTH = 15
"""Default grid width in cells."""

GRID_HEIGHT = 15
"""Default grid height in cells."""

CITIZEN_DENSITY = 0.3
"""Per-cell probability of placing a citizen when the board is filled."""

EXPLORATION_RATE = 0.2
"""Default probability of taking an unrecorded random action."""

LEARNING_RATE = 0.1
"""Default Q-learning step size (alpha)."""

DISCOUNT = 0.8
"""Default Q-learning discount factor (gamma)."""

LEARN_ITERATIONS = 10
"""Number of replay rounds applied by ``ValueTable.learn`` after each tick."""

REPLAY_WINDOW = 1
"""Number of most recent transitions replayed per learn round."""

ACTIONS: tuple[int, ...] = (-1, 0, 1)
"""Horizontal intruder moves: left, stay, right."""

NEIGHBORHOOD_SIZE = 9
"""Cells in a 3x3 observation window."""

REWARD_COLLIDE = -100.0
"""Reward for staying on a cell shared with a citizen."""

REWARD_MOVE_TO_CITIZEN = -5.0
"""Reward for moving onto a cell occupied by a citizen."""

REWARD_MOVE_TO_EMPTY = -1.0
"""Reward for moving onto an empty cell."""

REWARD_STAY = 0.0
"""Reward for staying on an empty cell."""

TRAJECTORY_VELOCITY = 0.1
"""Angular velocity of the parametric baseline trajectory."""

SLOW_INTERVAL_S = 0.5
"""Tick interval for the slow scheduler cadence, in seconds."""

FAST_INTERVAL_S = 0.02
"""Tick interval for the fast scheduler cadence, in seconds."""

NUM_TICKS = 1_000
"""Default number of ticks for a headless training run."""

PROGRESS_LOG_INTERVAL = 500
"""Emit an INFO progress line every this many ticks."""

FLUSH_THRESHOLD = 8_192
"""Flush tick log rows to Parquet once this in-memory row count is reached."""
