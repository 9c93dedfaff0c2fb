"""Compact run-length descriptor codec.

A shown clue is written as its digit. A run of hidden cells is written as a
letter, ``a`` for one hidden cell up to ``z`` for twenty-six; longer runs are
split into several letters.
"""

from __future__ import annotations

from typing import List

from ..core.exceptions import DescriptorError
from ..core.models import BoardCell, Puzzle

MAX_RUN = 26


def _run_letter(run: int) -> str:
    return chr(ord("a") + run - 1)


def encode_descriptor(puzzle: Puzzle) -> str:
    parts: List[str] = []
    run = 0
    for cell in puzzle.cells:
        if cell.shown:
            if run > 0:
                parts.append(_run_letter(run))
                run = 0
            parts.append(str(cell.clue))
        else:
            if run == MAX_RUN:
                parts.append(_run_letter(run))
                run = 0
            run += 1
    if run > 0:
        parts.append(_run_letter(run))
    return "".join(parts)


def decode_cells(descriptor: str) -> List[BoardCell]:
    cells: List[BoardCell] = []
    for index, char in enumerate(descriptor):
        if "0" <= char <= "9":
            cells.append(BoardCell(clue=int(char), shown=True))
        elif "a" <= char <= "z":
            cells.extend(BoardCell() for _ in range(ord(char) - ord("a") + 1))
        else:
            raise DescriptorError(f"Invalid character {char!r} at position {index}")
    return cells


def validate_descriptor(descriptor: str, width: int, height: int) -> None:
    """Raise :class:`DescriptorError` unless ``descriptor`` fits the board."""

    decode_descriptor(descriptor, width, height)


def decode_descriptor(descriptor: str, width: int, height: int) -> Puzzle:
    cells = decode_cells(descriptor)
    expected = width * height
    if len(cells) != expected:
        raise DescriptorError(
            f"Descriptor describes {len(cells)} cells, expected {expected} for {width}x{height}"
        )
    return Puzzle(width=width, height=height, cells=tuple(cells))
