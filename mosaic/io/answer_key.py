"""Bit-per-cell answer key used to reveal a solution."""

from __future__ import annotations

from typing import List, Sequence

from ..core.constants import SolveMode
from ..core.exceptions import UnsolvableError
from ..core.models import Puzzle
from ..engine.clues import clues_from_puzzle
from ..engine.solver import ConstraintSolver
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


def encode_answer_key(solution: Sequence[bool]) -> bytes:
    """Pack filled flags eight to a byte, most significant bit first."""

    packed = bytearray((len(solution) + 7) // 8)
    for index, filled in enumerate(solution):
        if filled:
            packed[index // 8] |= 0x80 >> (index % 8)
    return bytes(packed)


def decode_answer_key(data: bytes, width: int, height: int) -> List[bool]:
    size = width * height
    if len(data) != (size + 7) // 8:
        raise ValueError(f"Answer key holds {len(data)} bytes, expected {(size + 7) // 8}")
    return [bool(data[index // 8] & (0x80 >> (index % 8))) for index in range(size)]


def solve_puzzle(puzzle: Puzzle) -> List[bool]:
    """Solve ``puzzle`` from its shown clues, sweeping in raster order."""

    result = ConstraintSolver(clues_from_puzzle(puzzle), mode=SolveMode.ADVANCED).solve()
    if not result.solved:
        LOGGER.error("Puzzle %sx%s could not be solved from its clues", puzzle.width, puzzle.height)
        raise UnsolvableError(
            f"Puzzle {puzzle.width}x{puzzle.height} cannot be resolved from its shown clues"
        )
    return result.solution()


def compute_answer_key(puzzle: Puzzle) -> bytes:
    return encode_answer_key(solve_puzzle(puzzle))
