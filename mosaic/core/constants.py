"""Shared constants and enumerations for the mosaic engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class CellState(str, Enum):
    """Deduced state of a single cell."""

    UNMARKED = "UNMARKED"
    MARKED = "MARKED"
    BLANK = "BLANK"


class SolveMode(str, Enum):
    """Deduction rules available to the solver."""

    BASIC = "BASIC"
    ADVANCED = "ADVANCED"


DEFAULT_SIZE = 5
MIN_DIMENSION = 3
MAX_DIMENSION = 50
MAX_TILES = MAX_DIMENSION * MAX_DIMENSION

# 3x3 neighbourhood, self included.
NEIGHBOURHOOD: Tuple[Tuple[int, int], ...] = tuple(
    (dx, dy) for dy in (-1, 0, 1) for dx in (-1, 0, 1)
)

# Partner offsets examined by the overlap technique.
OVERLAP_WINDOW: Tuple[Tuple[int, int], ...] = tuple(
    (dx, dy)
    for dy in (-2, -1, 0, 1, 2)
    for dx in (-2, -1, 0, 1, 2)
    if (dx, dy) != (0, 0)
)


@dataclass(frozen=True)
class Bounds:
    """Simple rectangle bounds helper."""

    width: int
    height: int

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height
