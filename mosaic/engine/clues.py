"""Clue derivation from a ground-truth image."""

from __future__ import annotations

from typing import Tuple

from ..core.models import BoardCell, ClueCell, Puzzle
from .grid import Grid


def edge_flags(grid: Grid, x: int, y: int) -> Tuple[bool, bool]:
    """Return ``(x_edge, y_edge)``: whether the cell abuts a vertical/horizontal border."""

    x_edge = grid.at(x - 1, y) is None or grid.at(x + 1, y) is None
    y_edge = grid.at(x, y - 1) is None or grid.at(x, y + 1) is None
    return x_edge, y_edge


def shortcut_flags(grid: Grid, x: int, y: int, clue: int) -> Tuple[bool, bool]:
    """Return ``(full, empty)`` for a clue value placed at ``(x, y)``.

    ``full`` means every live cell of the neighbourhood must be filled: 9 for
    interior cells, 6 along an edge and 4 in a corner.
    """

    if clue == 0:
        return False, True
    x_edge, y_edge = edge_flags(grid, x, y)
    if x_edge and y_edge:
        return clue == 4, False
    if x_edge or y_edge:
        return clue == 6, False
    return clue == 9, False


def derive_clue(image: Grid[bool], x: int, y: int) -> ClueCell:
    clue = sum(1 for _nx, _ny, filled in image.around(x, y) if filled)
    full, empty = shortcut_flags(image, x, y, clue)
    value = image.at(x, y)
    return ClueCell(clue=clue, shown=True, value=bool(value), full=full, empty=empty)


def derive_clues(image: Grid[bool]) -> Grid[ClueCell]:
    """Compute the fully-shown clue grid for a ground-truth image."""

    return Grid.build(image.width, image.height, lambda x, y: derive_clue(image, x, y))


def start_point_check(clues: Grid[ClueCell]) -> bool:
    """Require a ``full`` or ``empty`` clue outside the last row and column.

    Without such a clue the solver has no deterministic entry point.
    """

    for x, y in clues.coords():
        if x >= clues.width - 1 or y >= clues.height - 1:
            continue
        cell = clues.at(x, y)
        if cell.full or cell.empty:
            return True
    return False


def clues_from_puzzle(puzzle: Puzzle) -> Grid[ClueCell]:
    """Rebuild solver-ready clue cells from a persisted puzzle.

    The shortcut flags are not part of the persisted form, so they are
    re-derived from each shown clue and its position.
    """

    shell: Grid[bool] = Grid(puzzle.width, puzzle.height, [False] * (puzzle.width * puzzle.height))

    def build(x: int, y: int) -> ClueCell:
        cell = puzzle.at(x, y)
        if not cell.shown:
            return ClueCell(clue=-1, shown=False)
        full, empty = shortcut_flags(shell, x, y, cell.clue)
        return ClueCell(clue=cell.clue, shown=True, full=full, empty=empty)

    return Grid.build(puzzle.width, puzzle.height, build)


def to_puzzle(clues: Grid[ClueCell]) -> Puzzle:
    """Drop the generation-only fields, keeping the shown/hidden layout."""

    cells = tuple(
        BoardCell(clue=cell.clue, shown=True) if cell.shown else BoardCell()
        for cell in clues
    )
    return Puzzle(width=clues.width, height=clues.height, cells=cells)
