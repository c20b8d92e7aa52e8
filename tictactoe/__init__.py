"""N-player Tic-Tac-Toe with Classic and Frenzy modes and heuristic bots."""

__version__ = "0.1.0"
