"""Single-ply heuristic bot: extend own runs, block the most dangerous opponent."""

import logging
from collections.abc import Iterable, Sequence
from itertools import takewhile

from ..core.types import ConnectedCell, GameContext, Grid, Player
from ..game.connectivity import find_connected_cell
from .interface import CellSelector


logger = logging.getLogger(__name__)


OFFENSE_THRESHOLD = 3


def rank_cells(grid: Grid, marker: str, cells: Iterable[int]) -> list[ConnectedCell]:
    """Evaluate each cell for ``marker`` and rank best first.

    Ranked by total connected, then by the raw chain sum so a cell that
    is mid-build on more lines beats one that is not. Ties keep ascending
    cell order.
    """
    evaluated = [
        find_connected_cell(grid, grid.row_of(cell), grid.column_of(cell), marker)
        for cell in sorted(cells)
    ]
    return sorted(evaluated, key=lambda c: (c.total_connected, c.chain_sum), reverse=True)


def turn_distance(acting_number: int, candidate_number: int, roster_size: int) -> int:
    """How many turns after the acting player the candidate moves.

    With players {1, 2, 3, 4, 5} and player 3 acting, player 4 is at
    distance 1 and player 1 at distance 3.
    """
    return (candidate_number - acting_number) % roster_size


def nearer_player(acting: Player, first: Player, second: Player, roster_size: int) -> Player:
    """Of two opponents, the one whose turn comes sooner after ``acting``.

    ``first`` wins ties, which only happen if both are the same player.
    """
    if turn_distance(acting.number, second.number, roster_size) < turn_distance(
        acting.number, first.number, roster_size
    ):
        return second
    return first


def _top_total(ranked: Sequence[ConnectedCell]) -> int:
    return ranked[0].total_connected if ranked else 0


def find_threat(
    grid: Grid,
    players: Sequence[Player],
    acting: Player,
    cells: Sequence[int],
) -> tuple[Player | None, list[ConnectedCell]]:
    """Find the opponent most worth blocking.

    Opponents are scanned in turn order starting right after ``acting``.
    A later opponent replaces the tracked one if its best cell connects
    strictly more, or equally much while its turn is nearer.

    Returns:
        Tuple of (opponent, opponent's ranked cells); (None, []) if alone
    """
    roster_size = len(players)
    start = acting.number % roster_size
    threat: Player | None = None
    threat_cells: list[ConnectedCell] = []

    for offset in range(roster_size - 1):
        player = players[(start + offset) % roster_size]
        player_cells = rank_cells(grid, player.marker, cells)

        if (
            threat is None
            or _top_total(player_cells) > _top_total(threat_cells)
            or (
                _top_total(player_cells) == _top_total(threat_cells)
                and nearer_player(acting, threat, player, roster_size) is player
            )
        ):
            threat = player
            threat_cells = player_cells

    return threat, threat_cells


def choose_cell(
    own_cells: Sequence[ConnectedCell],
    threat_cells: Sequence[ConnectedCell],
    offense_threshold: int = OFFENSE_THRESHOLD,
) -> ConnectedCell | None:
    """Decide between extending own runs and blocking.

    Starts from the own best cell if it connects at least
    ``offense_threshold``. Then walks the threat cells best first:

    - a threat cell connecting nothing ends the walk;
    - a threat cell connecting more than the own best is taken at once;
    - a threat cell connecting exactly as much as the own best is taken,
      and the walk ends if that cell is also among the own cells of that
      same value (blocks and extends in one move). Otherwise the walk
      goes on and a later equal threat cell may replace it.

    Returns:
        The chosen cell, or None if neither offense nor defense applies
    """
    if not own_cells:
        return None

    own_top = own_cells[0].total_connected
    best = own_cells[0] if own_top >= offense_threshold else None

    for threat_cell in threat_cells:
        if threat_cell.total_connected == 0:
            break

        if threat_cell.total_connected > own_top:
            best = threat_cell
            break

        if threat_cell.total_connected == own_top:
            best = threat_cell
            equal_own = takewhile(lambda c: c.total_connected == own_top, own_cells)
            if any(threat_cell.same_position(own_cell) for own_cell in equal_own):
                break

    return best


class HeuristicAI(CellSelector):
    """Bot that looks one move ahead.

    Features:
    - Ranks every empty cell by the runs it would complete
    - Tracks the opponent with the strongest next move
    - Blocks when the opponent is ahead, prefers cells that block and
      extend at the same time
    - Falls back to any partial run, then to a random cell
    """

    def __init__(self, offense_threshold: int = OFFENSE_THRESHOLD):
        """Initialize heuristic AI.

        Args:
            offense_threshold: Minimum total connected to play offensively
        """
        self.offense_threshold = offense_threshold
        self._last_explanation = ""

    def select_cell(self, context: GameContext) -> int:
        """Pick a cell for ``context.acting``."""
        if not context.available_cells:
            raise ValueError("No available cells")

        grid = context.grid
        own_cells = rank_cells(grid, context.acting.marker, context.available_cells)
        threat, threat_cells = find_threat(
            grid, context.players, context.acting, context.available_cells
        )
        logger.debug(
            "%s best own cell %s, threat %s best %s",
            context.acting.label,
            own_cells[0],
            threat.label if threat else None,
            threat_cells[0] if threat_cells else None,
        )

        best = choose_cell(own_cells, threat_cells, self.offense_threshold)

        if best is not None:
            cell = grid.cell_number(best.row, best.column)
            self._last_explanation = self._explain(best, own_cells, threat, cell)
            return cell

        if own_cells[0].has_chain:
            cell = grid.cell_number(own_cells[0].row, own_cells[0].column)
            self._last_explanation = f"Building on a partial run at cell {cell}"
            return cell

        cell = context.rng.choice(list(context.available_cells))
        self._last_explanation = f"Nothing to connect, random cell {cell}"
        return cell

    def _explain(
        self,
        best: ConnectedCell,
        own_cells: Sequence[ConnectedCell],
        threat: Player | None,
        cell: int,
    ) -> str:
        if best is own_cells[0]:
            return f"Connecting {best.total_connected} at cell {cell}"

        blocked = threat.label if threat else "opponent"
        if any(
            best.same_position(own) and own.total_connected == best.total_connected
            for own in own_cells
        ):
            return f"Blocking {blocked} and connecting {best.total_connected} at cell {cell}"
        return f"Blocking {blocked} ({best.total_connected} connected) at cell {cell}"

    def get_name(self) -> str:
        return f"Heuristic (offense>={self.offense_threshold})"

    def select_cell_with_explanation(self, context: GameContext) -> tuple[int, str]:
        """Get cell with explanation."""
        self._last_explanation = ""
        cell = self.select_cell(context)
        return cell, self._last_explanation
