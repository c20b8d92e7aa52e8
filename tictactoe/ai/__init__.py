"""AI module for Tic-Tac-Toe."""

from .heuristic import HeuristicAI, choose_cell, find_threat, nearer_player, rank_cells, turn_distance
from .interface import CellSelector


__all__ = [
    "CellSelector",
    "HeuristicAI",
    "choose_cell",
    "find_threat",
    "nearer_player",
    "rank_cells",
    "turn_distance",
]
