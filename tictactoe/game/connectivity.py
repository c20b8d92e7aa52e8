"""Run detection through a single cell."""

from ..core.types import ConnectedCell, Grid


# Each axis is a pair of opposite (d_row, d_column) steps.
VERTICAL = ((-1, 0), (1, 0))
HORIZONTAL = ((0, -1), (0, 1))
DIAGONAL_LEFT = ((-1, -1), (1, 1))  # top-left ↔ bottom-right
DIAGONAL_RIGHT = ((-1, 1), (1, -1))  # top-right ↔ bottom-left

AXES = (VERTICAL, HORIZONTAL, DIAGONAL_LEFT, DIAGONAL_RIGHT)

# An axis only counts as a run when at least this many neighbours match.
MIN_CHAIN = 2


def count_chain(
    grid: Grid,
    row: int,
    column: int,
    d_row: int,
    d_column: int,
    target_marker: str,
    max_chain: int | None = None,
) -> int:
    """Count matching cells walking away from (row, column).

    The origin cell is never inspected. Walking stops at the grid edge,
    at the first cell not holding ``target_marker``, or once ``max_chain``
    matches have been counted.
    """
    chain = 0

    while max_chain is None or chain < max_chain:
        row += d_row
        column += d_column

        if not grid.in_bounds(row, column) or grid.marker_at(row, column) != target_marker:
            break

        chain += 1

    return chain


def axis_chain(
    grid: Grid,
    row: int,
    column: int,
    axis: tuple[tuple[int, int], tuple[int, int]],
    target_marker: str,
    max_chain: int | None = None,
) -> int:
    """Sum of both opposite directions of one axis."""
    return sum(
        count_chain(grid, row, column, d_row, d_column, target_marker, max_chain)
        for d_row, d_column in axis
    )


def axis_contribution(chain: int) -> int:
    """Score an axis: ``chain + 1`` (the cell itself) once it is a real run."""
    return chain + 1 if chain >= MIN_CHAIN else 0


def find_connected_cell(
    grid: Grid,
    row: int,
    column: int,
    target_marker: str,
    max_chain: int | None = None,
) -> ConnectedCell:
    """Evaluate the runs of ``target_marker`` passing through (row, column).

    Opposite directions are summed before thresholding, so a marker
    sitting between two single neighbours (``X [x] X``) is a run of three,
    while an L-shaped zig-zag is not. Axes are scored independently: a
    junction cell counts every run crossing it.

    The cell itself does not need to hold ``target_marker``; evaluating an
    empty cell answers "what if I played here".

    Args:
        grid: Grid to inspect (never modified)
        row: Row of the cell
        column: Column of the cell
        target_marker: Marker whose runs are counted
        max_chain: Per-direction cap, ``None`` for unbounded

    Returns:
        ConnectedCell with the four axis chains and their total
    """
    vertical, horizontal, diagonal_left, diagonal_right = (
        axis_chain(grid, row, column, axis, target_marker, max_chain) for axis in AXES
    )
    total = sum(
        axis_contribution(chain)
        for chain in (vertical, horizontal, diagonal_left, diagonal_right)
    )

    return ConnectedCell(
        row=row,
        column=column,
        vertical=vertical,
        horizontal=horizontal,
        diagonal_left=diagonal_left,
        diagonal_right=diagonal_right,
        total_connected=total,
    )
