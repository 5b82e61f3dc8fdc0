"""Parametric intruder trajectory used as the baseline motion generator."""

from __future__ import annotations

import math

from intruder_rl.config.constants import TRAJECTORY_VELOCITY


def parametric_position(
    width: int, height: int, time: int, velocity: float = TRAJECTORY_VELOCITY
) -> tuple[int, int]:
    """Return the baseline intruder cell at *time*.

    Traces a Lissajous-like loop: x oscillates at twice the frequency of y.
    Both coordinates are truncated toward zero and wrapped onto the torus
    (the peak of ``sin``/``cos`` lands exactly on ``width``/``height``).
    """
    if width < 1 or height < 1:
        raise ValueError("grid dimensions must be >= 1")
    x = int(width * 0.5 * (math.sin(2 * velocity * time) + 1))
    y = int(height * 0.5 * (math.cos(velocity * time) + 1))
    return x % width, y % height
