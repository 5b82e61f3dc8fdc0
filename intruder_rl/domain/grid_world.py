"""Toroidal grid world with stationary citizens and one mobile intruder.

Board invariant: at most one agent reference per slot, and every agent held
by a slot has ``position`` equal to that slot. When the intruder steps onto a
citizen's cell the citizen is held aside as the displaced occupant and put
back when the intruder leaves, so citizens never vanish from the board.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from random import Random
from typing import TYPE_CHECKING

from intruder_rl.domain.trajectory import parametric_position

if TYPE_CHECKING:
    from intruder_rl.config.types import WorldConfig

Position = tuple[int, int]

# Row-major 3x3 offsets: dy outer, dx inner
NEIGHBORHOOD_OFFSETS: tuple[tuple[int, int], ...] = tuple(
    (dx, dy) for dy in (-1, 0, 1) for dx in (-1, 0, 1)
)


class Occupant(Enum):
    """Occupant kind of a cell; the value is its single-char state-key code."""

    EMPTY = "."
    CITIZEN = "C"
    INTRUDER = "I"


@dataclass(eq=False)
class Agent:
    """A citizen or the intruder. Equality is identity."""

    kind: Occupant
    position: Position | None = None
    previous_position: Position | None = None

    def set_position(self, x: int, y: int) -> None:
        """Move to (x, y), remembering the current cell as previous."""
        self.previous_position = self.position
        self.position = (x, y)


@dataclass
class GridWorld:
    """Owns occupancy and position truth for one simulation."""

    width: int
    height: int
    density: float = 0.0
    board: list[list[Agent | None]] = field(default_factory=list)  # board[x][y]
    citizens: list[Agent] = field(default_factory=list)
    intruder: Agent | None = None
    time: int = 0
    _displaced: Agent | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if self.width < 1 or self.height < 1:
            raise ValueError("grid dimensions must be >= 1")
        if not self.board:
            self.board = [[None] * self.height for _ in range(self.width)]

    @classmethod
    def empty(cls, config: WorldConfig) -> GridWorld:
        """Return a world with no citizens and no intruder."""
        return cls(width=config.width, height=config.height, density=config.density)

    @classmethod
    def create(cls, config: WorldConfig, rng: Random) -> GridWorld:
        """Initialize world with randomly placed citizens and the intruder."""
        world = cls.empty(config)
        world.fill_board(rng)
        return world

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def matrix_dimensions(self) -> tuple[int, int]:
        return self.width, self.height

    @property
    def intruder_position(self) -> Position:
        return self._require_intruder().position  # type: ignore[return-value]

    @property
    def displaced(self) -> Agent | None:
        """Citizen currently sharing the intruder's cell, if any."""
        return self._displaced

    def wrap(self, x: int, y: int) -> Position:
        """Map any integer pair onto the torus."""
        return x % self.width, y % self.height

    def agent_at(self, x: int, y: int) -> Agent | None:
        """Return the agent reference at the wrapped cell, or None."""
        wx, wy = self.wrap(x, y)
        return self.board[wx][wy]

    def object_at(self, x: int, y: int) -> Occupant:
        """Return the occupant kind at the wrapped cell."""
        agent = self.agent_at(x, y)
        return agent.kind if agent is not None else Occupant.EMPTY

    def neighborhood(self, position: Position) -> tuple[Occupant, ...]:
        """Return the 9 occupant kinds around *position*, row-major, wrapping both axes."""
        x, y = position
        return tuple(
            self.object_at((x + dx + self.width) % self.width, (y + dy + self.height) % self.height)
            for dx, dy in NEIGHBORHOOD_OFFSETS
        )

    def resolve_collision(self, position: Position) -> Occupant:
        """Return what coexists with the intruder at *position*.

        On the intruder's own cell this is the displaced citizen (or EMPTY);
        elsewhere it is simply the cell's occupant kind.
        """
        x, y = self.wrap(*position)
        agent = self.board[x][y]
        if agent is not None and agent is self.intruder:
            return self._displaced.kind if self._displaced is not None else Occupant.EMPTY
        return agent.kind if agent is not None else Occupant.EMPTY

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def update_agent(self, agent: Agent) -> None:
        """Sync the board with *agent*: clear its previous slot, then claim its current one."""
        if agent.position is None:
            raise ValueError("agent position is unset")
        x, y = agent.position
        self._check_bounds(x, y)
        if agent.previous_position is not None:
            px, py = agent.previous_position
            if self.board[px][py] is agent:
                self.board[px][py] = None
        self.board[x][y] = agent

    def place_citizen(self, x: int, y: int) -> Agent:
        """Create a stationary citizen at (x, y)."""
        self._check_bounds(x, y)
        if self.board[x][y] is not None:
            raise ValueError(f"cell ({x}, {y}) is already occupied")
        citizen = Agent(kind=Occupant.CITIZEN)
        citizen.set_position(x, y)
        self.citizens.append(citizen)
        self.update_agent(citizen)
        return citizen

    def place_intruder(self, x: int, y: int) -> Agent:
        """Create the intruder at (x, y), displacing a citizen there if present."""
        if self.intruder is not None:
            raise ValueError("intruder is already placed")
        self._check_bounds(x, y)
        self._displaced = self.board[x][y]
        intruder = Agent(kind=Occupant.INTRUDER)
        intruder.set_position(x, y)
        self.intruder = intruder
        self.update_agent(intruder)
        return intruder

    def move_intruder_to(self, new_x: int, new_y: int) -> None:
        """Move the intruder, restoring any citizen it was standing on."""
        intruder = self._require_intruder()
        self._check_bounds(new_x, new_y)
        if intruder.position == (new_x, new_y):
            intruder.set_position(new_x, new_y)
            self.update_agent(intruder)
            return
        leaving = self._displaced
        self._displaced = self.board[new_x][new_y]
        intruder.set_position(new_x, new_y)
        self.update_agent(intruder)
        if leaving is not None:
            self.update_agent(leaving)

    def fill_board(self, rng: Random) -> None:
        """Reset the board, scatter citizens with probability ``density``, place the intruder."""
        self.board = [[None] * self.height for _ in range(self.width)]
        self.citizens = []
        self.intruder = None
        self._displaced = None
        self.time = 0
        for x in range(self.width):
            for y in range(self.height):
                if rng.random() < self.density:
                    self.place_citizen(x, y)
        self.place_intruder(*parametric_position(self.width, self.height, self.time))

    def _check_bounds(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise ValueError(
                f"position ({x}, {y}) is outside the {self.width}x{self.height} board"
            )

    def _require_intruder(self) -> Agent:
        if self.intruder is None or self.intruder.position is None:
            raise ValueError("intruder has not been placed")
        return self.intruder
