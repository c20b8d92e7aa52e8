"""Abstract interface for cell selectors."""

from abc import ABC, abstractmethod

from ..core.types import GameContext


class CellSelector(ABC):
    """Abstract interface for anything that picks a cell.

    Bots implement it with a heuristic, front-ends implement it with a
    prompt. The engine dispatches on ``Player.kind`` to pick one.
    """

    @abstractmethod
    def select_cell(self, context: GameContext) -> int:
        """Choose a cell for ``context.acting``.

        Args:
            context: Read-only game context

        Returns:
            Row-major number of an empty cell
        """
        pass

    @abstractmethod
    def get_name(self) -> str:
        """Get selector name for display."""
        pass

    def select_cell_with_explanation(self, context: GameContext) -> tuple[int, str]:
        """Get cell with explanation (optional override).

        Returns:
            Tuple of (cell_number, explanation_string)
        """
        cell = self.select_cell(context)
        return cell, f"Selected cell {cell}"
