"""Deterministic checking of a player's marks against the clues."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

from ..core.constants import NEIGHBOURHOOD, CellState
from ..core.models import PlayCell, Puzzle
from .grid import Grid


@dataclass
class BoardStatus:
    cells: Grid[PlayCell]
    errors: List[Tuple[int, int]] = field(default_factory=list)
    complete: bool = False


def toggle_mark(cell: PlayCell, state: CellState) -> PlayCell:
    """Apply ``state`` to ``cell``; applying the current mark clears it."""

    if cell.mark is state:
        cell.mark = CellState.UNMARKED
    else:
        cell.mark = state
    return cell


def evaluate_marks(puzzle: Puzzle, marks: Sequence[CellState]) -> BoardStatus:
    """Flag every shown clue as solved or in error given the current marks."""

    if len(marks) != puzzle.width * puzzle.height:
        raise ValueError(
            f"Expected {puzzle.width * puzzle.height} marks, got {len(marks)}"
        )
    cells: Grid[PlayCell] = Grid(
        puzzle.width, puzzle.height, [PlayCell(mark=mark) for mark in marks]
    )
    status = BoardStatus(cells=cells)
    all_clues_satisfied = True
    for x, y in cells.coords():
        clue = puzzle.at(x, y)
        if not clue.shown:
            continue
        marked = blank = total = 0
        for _nx, _ny, neighbour in cells.around(x, y, NEIGHBOURHOOD):
            total += 1
            if neighbour.mark is CellState.MARKED:
                marked += 1
            elif neighbour.mark is CellState.BLANK:
                blank += 1
        play = cells.at(x, y)
        play.error = marked > clue.clue or total - blank < clue.clue
        play.solved = marked + blank == total and marked == clue.clue
        if play.error:
            status.errors.append((x, y))
        if not play.solved:
            all_clues_satisfied = False

    decided = all(cell.mark is not CellState.UNMARKED for cell in cells)
    status.complete = decided and not status.errors and all_clues_satisfied
    return status
