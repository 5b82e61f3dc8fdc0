"""Canonical state keys for 3x3 occupancy observations.

Keys are built from occupant *kind*, never agent identity: two different
citizens in the same relative layout always produce the same key.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TypeAlias

from intruder_rl.config.constants import NEIGHBORHOOD_SIZE
from intruder_rl.domain.grid_world import Agent, Occupant

StateKey: TypeAlias = str
"""Nine occupant codes, row-major over the 3x3 window (e.g. ``"....I..C."``)."""

Cell: TypeAlias = Occupant | Agent | None

_CODE_TO_OCCUPANT = {occupant.value: occupant for occupant in Occupant}


def _kind_of(cell: Cell) -> Occupant:
    if cell is None:
        return Occupant.EMPTY
    if isinstance(cell, Agent):
        return cell.kind
    if isinstance(cell, Occupant):
        return cell
    raise ValueError(f"cannot encode cell of type {type(cell).__name__}")


def encode(neighborhood: Iterable[Cell]) -> StateKey:
    """Encode nine cells into a state key."""
    codes = [_kind_of(cell).value for cell in neighborhood]
    if len(codes) != NEIGHBORHOOD_SIZE:
        raise ValueError(f"neighborhood must have {NEIGHBORHOOD_SIZE} cells, got {len(codes)}")
    return "".join(codes)


def decode(state_key: StateKey) -> tuple[Occupant, ...]:
    """Inverse of :func:`encode` for keys built from kinds."""
    if len(state_key) != NEIGHBORHOOD_SIZE:
        raise ValueError(f"state key must have {NEIGHBORHOOD_SIZE} codes, got {len(state_key)}")
    try:
        return tuple(_CODE_TO_OCCUPANT[code] for code in state_key)
    except KeyError as exc:
        raise ValueError(f"unknown occupant code in state key: {state_key!r}") from exc
