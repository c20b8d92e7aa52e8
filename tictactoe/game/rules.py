"""Game mode rules: how big the grid is and when a game is over."""

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum, auto

from ..core.types import Grid, Player


class GridSizePolicy(Enum):
    """Where the grid size comes from."""

    DERIVED_FROM_PLAYER_COUNT = auto()  # player count + 1
    EXPLICIT = auto()  # supplied by the caller


class CompletionPolicy(Enum):
    """When a game is over (a full grid always ends it)."""

    FIRST_NONZERO_SCORE = auto()
    GRID_FULL = auto()


@dataclass(frozen=True)
class GameModeRule:
    """Rules for one game mode.

    Classic: grid is one larger than the player count and the first
    connection wins.
    Frenzy: grid size is chosen up front and points accumulate until
    the grid is full.
    """

    name: str
    title: str
    description: str
    grid_size_policy: GridSizePolicy
    completion_policy: CompletionPolicy

    def grid_size(self, player_count: int, requested: int | None = None) -> int:
        """Resolve the grid size for a game.

        Args:
            player_count: Number of players in the roster
            requested: Size asked for by the user (explicit policy only)

        Returns:
            Grid size (>= 3)

        Raises:
            ValueError: If an explicit size is missing or too small
        """
        if self.grid_size_policy == GridSizePolicy.DERIVED_FROM_PLAYER_COUNT:
            return player_count + 1

        if requested is None:
            raise ValueError(f"{self.title} mode needs an explicit grid size")
        if requested < Grid.MIN_SIZE:
            raise ValueError(f"Grid size must be >= {Grid.MIN_SIZE}, got {requested}")
        return requested

    def is_complete(self, grid: Grid, players: Sequence[Player]) -> bool:
        """Check if the game is over."""
        if grid.is_full():
            return True

        if self.completion_policy == CompletionPolicy.FIRST_NONZERO_SCORE:
            return any(player.score > 0 for player in players)

        return False

    def winner(self, players: Sequence[Player]) -> Player | None:
        """Player with the strictly highest non-zero score.

        Returns:
            The winner, or None on a draw (shared top score or nobody scored)
        """
        top_player: Player | None = None
        top_score = 0

        for player in players:
            if player.score > top_score:
                top_player = player
                top_score = player.score
            elif player.score == top_score:
                top_player = None

        return top_player

    def header(self) -> str:
        """Title, underline and description as shown above the grid."""
        return f"{self.title}\n{'-' * len(self.title)}\n{self.description}\n"


CLASSIC = GameModeRule(
    name="classic",
    title="Classic",
    description="Connect three characters to win the game.",
    grid_size_policy=GridSizePolicy.DERIVED_FROM_PLAYER_COUNT,
    completion_policy=CompletionPolicy.FIRST_NONZERO_SCORE,
)

FRENZY = GameModeRule(
    name="frenzy",
    title="Frenzy",
    description=(
        "Connect three or more characters to earn points.\n"
        "The one with the most points wins."
    ),
    grid_size_policy=GridSizePolicy.EXPLICIT,
    completion_policy=CompletionPolicy.GRID_FULL,
)

GAME_MODES: tuple[GameModeRule, ...] = (CLASSIC, FRENZY)


def get_mode(name: str) -> GameModeRule:
    """Look up a game mode by name (case-insensitive)."""
    key = name.strip().lower()
    for mode in GAME_MODES:
        if mode.name == key:
            return mode
    known = ", ".join(mode.name for mode in GAME_MODES)
    raise ValueError(f"Unknown game mode '{name}'. Use one of: {known}")
