"""
Shared data types for the Tic-Tac-Toe system.

These types are the contracts between modules.
All modules communicate using these structures.
"""

import random
from dataclasses import dataclass, field
from enum import Enum, auto

import numpy as np


EMPTY = ""


# ─────────────────────────────────────────────────────────────
# PLAYER & GAME PHASE
# ─────────────────────────────────────────────────────────────


class PlayerKind(Enum):
    """How a player picks its cells."""

    HUMAN = "human"  # Prompted through the front-end
    BOT = "bot"  # Resolved by the move heuristic

    def __str__(self) -> str:
        return self.value


class GamePhase(Enum):
    """Current phase of the game."""

    WAITING_FOR_START = auto()  # Turn not seeded yet
    IN_PROGRESS = auto()
    GAME_OVER = auto()


def is_valid_marker(marker: object) -> bool:
    """One printable, non-blank character."""
    return (
        isinstance(marker, str)
        and len(marker) == 1
        and marker.isprintable()
        and not marker.isspace()
    )


def validate_marker(marker: str) -> str:
    if not is_valid_marker(marker):
        raise ValueError(f"Marker must be a single printable character, got {marker!r}")
    return marker


@dataclass
class Player:
    """A seat at the table.

    Attributes:
        number: 1-based seat number, doubles as turn order
        marker: Single character placed into cells
        kind: Human or bot
        score: Current score
        last_score: Score before the most recent update
    """

    number: int
    marker: str
    kind: PlayerKind = PlayerKind.HUMAN
    score: int = 0
    last_score: int = 0

    def __post_init__(self) -> None:
        if self.number < 1:
            raise ValueError(f"Player number must be >= 1, got {self.number}")
        validate_marker(self.marker)

    @property
    def name(self) -> str:
        return "Bot" if self.kind == PlayerKind.BOT else "Player"

    @property
    def label(self) -> str:
        """Display label, e.g. ``Bot-2 (O)``."""
        return f"{self.name}-{self.number} ({self.marker})"

    @property
    def score_gained(self) -> int:
        return self.score - self.last_score

    def set_score(self, score: int) -> None:
        self.last_score = self.score
        self.score = score

    def reset(self) -> None:
        self.score = 0
        self.last_score = 0

    def __str__(self) -> str:
        return self.label


# ─────────────────────────────────────────────────────────────
# GRID REPRESENTATION
# ─────────────────────────────────────────────────────────────


class Grid:
    """Square mark matrix.

    Cells are numbered row-major from zero:
    ``number = row * size + column``. Empty cells hold ``""``
    in the backing array and read back as ``None``.
    """

    MIN_SIZE = 3

    def __init__(self, size: int):
        if size < self.MIN_SIZE:
            raise ValueError(f"Grid size must be >= {self.MIN_SIZE}, got {size}")
        self.size = size
        self._cells = np.full((size, size), EMPTY, dtype="<U1")

    @classmethod
    def from_rows(cls, rows: list[str] | list[list[str | None]]) -> "Grid":
        """Build a grid from row strings, ``.`` / ``None`` / ``" "`` meaning empty.

        Example:
            Grid.from_rows(["XX.", ".O.", "..."])
        """
        grid = cls(len(rows))
        for r, row in enumerate(rows):
            if len(row) != grid.size:
                raise ValueError(f"Row {r} has {len(row)} cells, expected {grid.size}")
            for c, cell in enumerate(row):
                if cell not in (None, ".", " ", EMPTY):
                    grid._cells[r, c] = validate_marker(cell)
        return grid

    # Addressing

    def cell_number(self, row: int, column: int) -> int:
        return row * self.size + column

    def row_of(self, cell_number: int) -> int:
        return cell_number // self.size

    def column_of(self, cell_number: int) -> int:
        return cell_number % self.size

    def position_of(self, cell_number: int) -> tuple[int, int]:
        return self.row_of(cell_number), self.column_of(cell_number)

    def in_bounds(self, row: int, column: int) -> bool:
        return 0 <= row < self.size and 0 <= column < self.size

    @property
    def cell_count(self) -> int:
        return self.size * self.size

    # Queries

    def marker_at(self, row: int, column: int) -> str | None:
        value = str(self._cells[row, column])
        return value or None

    def is_empty(self, row: int, column: int) -> bool:
        return self._cells[row, column] == EMPTY

    def available_cells(self) -> list[int]:
        """Empty cell numbers in ascending order."""
        rows, cols = np.nonzero(self._cells == EMPTY)
        return [self.cell_number(int(r), int(c)) for r, c in zip(rows, cols)]

    def is_full(self) -> bool:
        return not bool((self._cells == EMPTY).any())

    def as_matrix(self) -> np.ndarray:
        """Read-only view of the backing array (``""`` for empty)."""
        view = self._cells.view()
        view.flags.writeable = False
        return view

    # Mutation

    def mark(self, row: int, column: int, marker: str) -> bool:
        """Place a marker.

        Returns:
            False (grid unchanged) when the cell is out of bounds or occupied
        """
        validate_marker(marker)
        if not self.in_bounds(row, column) or not self.is_empty(row, column):
            return False
        self._cells[row, column] = marker
        return True

    def clear(self) -> None:
        self._cells[:, :] = EMPTY

    def snapshot(self) -> "Grid":
        """Frozen copy. Writing to it raises ``ValueError``."""
        frozen = Grid.__new__(Grid)
        frozen.size = self.size
        frozen._cells = self._cells.copy()
        frozen._cells.flags.writeable = False
        return frozen

    def rows(self) -> list[list[str | None]]:
        return [[cell or None for cell in row.tolist()] for row in self._cells]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self.size == other.size and bool((self._cells == other._cells).all())

    def __repr__(self) -> str:
        body = "/".join("".join(c or "." for c in row) for row in self.rows())
        return f"Grid({self.size}, {body})"


# ─────────────────────────────────────────────────────────────
# CONNECTIVITY & MOVES
# ─────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class ConnectedCell:
    """Connectivity report for one (cell, marker) query.

    Chains exclude the cell itself. ``diagonal_left`` runs top-left to
    bottom-right, ``diagonal_right`` runs top-right to bottom-left.
    """

    row: int
    column: int
    vertical: int = 0
    horizontal: int = 0
    diagonal_left: int = 0
    diagonal_right: int = 0
    total_connected: int = 0

    @property
    def chains(self) -> tuple[int, int, int, int]:
        return (self.vertical, self.horizontal, self.diagonal_left, self.diagonal_right)

    @property
    def chain_sum(self) -> int:
        return sum(self.chains)

    @property
    def has_chain(self) -> bool:
        return any(chain >= 1 for chain in self.chains)

    def same_position(self, other: "ConnectedCell") -> bool:
        return self.row == other.row and self.column == other.column


@dataclass
class Move:
    """A completed turn."""

    cell: int
    player_number: int
    marker: str
    score_gained: int = 0


@dataclass(frozen=True)
class GameContext:
    """Everything a cell selector may look at.

    Passed explicitly into every selection call. ``grid`` is a frozen
    snapshot, never the engine's own grid.
    """

    grid: Grid
    players: tuple[Player, ...]
    acting: Player
    available_cells: tuple[int, ...]
    rng: random.Random = field(default_factory=random.Random)
