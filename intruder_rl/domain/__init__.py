"""Domain layer: grid world, state encoding, and baseline trajectory."""

from intruder_rl.domain.grid_world import (
    NEIGHBORHOOD_OFFSETS,
    Agent,
    GridWorld,
    Occupant,
    Position,
)
from intruder_rl.domain.state_encoder import StateKey, decode, encode
from intruder_rl.domain.trajectory import parametric_position

__all__ = [
    "Agent",
    "GridWorld",
    "NEIGHBORHOOD_OFFSETS",
    "Occupant",
    "Position",
    "StateKey",
    "decode",
    "encode",
    "parametric_position",
]
