"""Pretty-print helpers for mosaic puzzles."""

from __future__ import annotations

import sys
from typing import List, Optional, Sequence

from ..core.models import Puzzle


def _render(width: int, height: int, symbols: Sequence[str]) -> str:
    header_cells = [f"{c:>2}" for c in range(width)]
    lines = ["    " + " ".join(header_cells)]
    lines.append("    " + "-" * (3 * width - 1))
    for r in range(height):
        row_cells = symbols[r * width:(r + 1) * width]
        row_render = " ".join(f"{symbol:>2}" for symbol in row_cells)
        lines.append(f"{r:>2} | {row_render}")
    return "\n".join(lines)


def format_puzzle(puzzle: Puzzle) -> str:
    symbols: List[str] = [str(cell.clue) if cell.shown else "." for cell in puzzle.cells]
    return _render(puzzle.width, puzzle.height, symbols)


def format_solution(puzzle: Puzzle, solution: Sequence[bool]) -> str:
    return _render(puzzle.width, puzzle.height, ["#" if filled else "." for filled in solution])


def pretty_print_puzzle(
    puzzle: Puzzle,
    solution: Optional[Sequence[bool]] = None,
    *,
    label: str | None = None,
    stream=None,
) -> None:
    """Print the clue grid, and the solution beside it when given."""

    stream = stream or sys.stdout
    if label:
        print(label, file=stream)
    print(format_puzzle(puzzle), file=stream)
    if solution is not None:
        print(file=stream)
        print(format_solution(puzzle, solution), file=stream)
    print(file=stream)
    print(f"Clues shown: {puzzle.shown_count}/{puzzle.width * puzzle.height}", file=stream)
