"""Game logic module for Tic-Tac-Toe."""

from .connectivity import count_chain, find_connected_cell
from .engine import GameEngine
from .rules import CLASSIC, FRENZY, CompletionPolicy, GameModeRule, GridSizePolicy, get_mode
from .turns import TurnScheduler


__all__ = [
    "CLASSIC",
    "FRENZY",
    "CompletionPolicy",
    "GameEngine",
    "GameModeRule",
    "GridSizePolicy",
    "TurnScheduler",
    "count_chain",
    "find_connected_cell",
    "get_mode",
]
