"""Game engine for Tic-Tac-Toe state management."""

import logging
import random
from collections.abc import Mapping, Sequence
from dataclasses import replace
from typing import TYPE_CHECKING

from ..core.bus import EventBus, get_event_bus
from ..core.errors import GameContextUnavailableError
from ..core.events import Event, EventType
from ..core.types import GameContext, GamePhase, Grid, Move, Player, PlayerKind
from .connectivity import find_connected_cell
from .rules import CLASSIC, GameModeRule
from .turns import TurnScheduler


if TYPE_CHECKING:
    from ..ai.interface import CellSelector


logger = logging.getLogger(__name__)


class GameEngine:
    """Manages game state and enforces rules.

    Stateful engine that:
    - Owns the grid and the turn order
    - Validates and applies marks
    - Scores connections
    - Detects completion through its game mode rule
    - Emits events for state changes
    """

    def __init__(
        self,
        players: Sequence[Player],
        rule: GameModeRule = CLASSIC,
        grid_size: int | None = None,
        rng: random.Random | None = None,
        bus: EventBus | None = None,
    ):
        """Initialize game engine.

        Args:
            players: Roster in turn order, numbered 1..n
            rule: Game mode (Classic if None)
            grid_size: Explicit grid size (Frenzy)
            rng: Random source for turn seeding and bot fallbacks
            bus: Event bus (uses global if None)

        Raises:
            ValueError: If the roster or grid size is invalid
        """
        self._validate_roster(players)
        self.rule = rule
        self.rng = rng or random.Random()
        self.bus = bus or get_event_bus()
        self._players = list(players)
        self._grid = Grid(rule.grid_size(len(self._players), grid_size))
        self._turns = TurnScheduler(len(self._players), self.rng)
        self._phase = GamePhase.WAITING_FOR_START
        self._history: list[Move] = []

    @staticmethod
    def _validate_roster(players: Sequence[Player]) -> None:
        if len(players) < 2:
            raise ValueError(f"Need at least 2 players, got {len(players)}")

        numbers = [player.number for player in players]
        if numbers != list(range(1, len(players) + 1)):
            raise ValueError(f"Players must be numbered 1..{len(players)} in order, got {numbers}")

        markers = [player.marker for player in players]
        if len(set(markers)) != len(markers):
            raise ValueError(f"Player markers must be unique, got {markers}")

    def start(self) -> Player:
        """Seed the first turn.

        Returns:
            The player who moves first
        """
        self._turns.advance()
        self._phase = GamePhase.IN_PROGRESS
        player = self.current_player
        assert player is not None

        self.bus.publish(Event(
            type=EventType.GAME_STARTED,
            data={"mode": self.rule.name, "grid_size": self._grid.size, "first_player": player.number},
            source="game_engine"
        ))

        return player

    def mark_cell(self, cell_number: int) -> bool:
        """Mark a cell for the current player and score it.

        Args:
            cell_number: Row-major cell number

        Returns:
            False (nothing changed) if the game is not in progress, no
            turn is set, or the cell is out of range or taken
        """
        player = self.current_player
        row, column = self._grid.position_of(cell_number)

        if (
            self._phase != GamePhase.IN_PROGRESS
            or player is None
            or not 0 <= cell_number < self._grid.cell_count
            or not self._grid.mark(row, column, player.marker)
        ):
            logger.warning("Rejected mark on cell %s", cell_number)
            self.bus.publish(Event(
                type=EventType.INVALID_CELL,
                data={"cell": cell_number, "player": player.number if player else None},
                source="game_engine"
            ))
            return False

        connected = find_connected_cell(self._grid, row, column, player.marker)
        player.set_score(player.score + connected.total_connected)

        self.bus.publish(Event(
            type=EventType.CELL_MARKED,
            data={
                "cell": cell_number,
                "player": player.number,
                "marker": player.marker,
                "score_gained": player.score_gained,
            },
            source="game_engine"
        ))

        return True

    def play_turn(self, cell_number: int) -> Move | None:
        """Mark a cell, then either finish the game or pass the turn.

        Returns:
            The move made, or None if the cell was rejected (turn unchanged)
        """
        if self._phase != GamePhase.IN_PROGRESS:
            raise GameContextUnavailableError(f"Cannot play a turn while {self._phase.name}")

        player = self.current_player
        assert player is not None

        if not self.mark_cell(cell_number):
            return None

        move = Move(
            cell=cell_number,
            player_number=player.number,
            marker=player.marker,
            score_gained=player.score_gained,
        )
        self._history.append(move)
        self._turns.advance()

        if self.is_complete():
            self._phase = GamePhase.GAME_OVER
            winner = self.winner()
            self.bus.publish(Event(
                type=EventType.GAME_COMPLETED,
                data={
                    "winner": winner.number if winner else None,
                    "scores": {p.number: p.score for p in self._players},
                },
                source="game_engine"
            ))
        else:
            next_player = self.current_player
            assert next_player is not None
            self.bus.publish(Event(
                type=EventType.TURN_CHANGED,
                data={"player": next_player.number, "turn": len(self._history) + 1},
                source="game_engine"
            ))

        return move

    def context(self, player: Player | None = None) -> GameContext:
        """Build the read-only context handed to cell selectors.

        Args:
            player: Acting player (current player if None)

        Raises:
            GameContextUnavailableError: If the game has not been started
        """
        acting = player or self.current_player
        if acting is None:
            raise GameContextUnavailableError("Game not started. Call start() first.")

        roster = tuple(replace(p) for p in self._players)
        return GameContext(
            grid=self._grid.snapshot(),
            players=roster,
            acting=roster[acting.number - 1],
            available_cells=tuple(self._grid.available_cells()),
            rng=self.rng,
        )

    def request_cell(self, selectors: Mapping[PlayerKind, "CellSelector"]) -> int:
        """Ask the current player's selector for a cell.

        Args:
            selectors: Selector per player kind

        Returns:
            Cell number chosen by the selector (not yet applied)
        """
        context = self.context()
        selector = selectors.get(context.acting.kind)
        if selector is None:
            raise GameContextUnavailableError(f"No cell selector for {context.acting.kind} players")

        cell = selector.select_cell(context)
        logger.debug("%s selected cell %s", context.acting.label, cell)
        return cell

    def is_complete(self) -> bool:
        return self.rule.is_complete(self._grid, self._players)

    def winner(self) -> Player | None:
        return self.rule.winner(self._players)

    def reset(self) -> Player:
        """Restart the round with the same roster and a new random first player."""
        self._grid.clear()
        self._history = []
        self._turns.reset()
        for player in self._players:
            player.reset()
        self._phase = GamePhase.WAITING_FOR_START

        self.bus.publish(Event(
            type=EventType.GAME_RESET,
            source="game_engine"
        ))

        return self.start()

    @property
    def grid(self) -> Grid:
        """Read-only snapshot of the grid."""
        return self._grid.snapshot()

    @property
    def grid_size(self) -> int:
        return self._grid.size

    @property
    def players(self) -> list[Player]:
        return list(self._players)

    @property
    def current_player(self) -> Player | None:
        index = self._turns.current_index
        return None if index is None else self._players[index]

    @property
    def phase(self) -> GamePhase:
        return self._phase

    @property
    def history(self) -> list[Move]:
        return list(self._history)

    @property
    def is_game_over(self) -> bool:
        return self._phase == GamePhase.GAME_OVER
