"""Data models supporting the mosaic engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .constants import (MAX_DIMENSION, MAX_TILES, MIN_DIMENSION, DEFAULT_SIZE,
                        Bounds, CellState)
from .exceptions import ParameterError


@dataclass(frozen=True)
class GameParams:
    """Dimensions and generation flags for one puzzle."""

    width: int = DEFAULT_SIZE
    height: int = DEFAULT_SIZE
    aggressive: bool = True
    advanced: bool = False

    def validate(self) -> None:
        if self.width < MIN_DIMENSION or self.height < MIN_DIMENSION:
            raise ParameterError(f"Minimal size is {MIN_DIMENSION}x{MIN_DIMENSION}")
        if self.width > MAX_DIMENSION or self.height > MAX_DIMENSION:
            raise ParameterError(f"Maximum size is {MAX_DIMENSION}x{MAX_DIMENSION}")
        if self.width * self.height > MAX_TILES:
            raise ParameterError(f"Puzzle may not exceed {MAX_TILES} tiles")


@dataclass
class ClueCell:
    """Generation-time clue with its ground truth and shortcut flags."""

    clue: int
    shown: bool = True
    value: bool = False
    full: bool = False
    empty: bool = False


@dataclass(frozen=True)
class BoardCell:
    """Persisted form of a cell: clue is -1 when hidden."""

    clue: int = -1
    shown: bool = False


@dataclass
class SolverCell:
    state: CellState = CellState.UNMARKED
    solved: bool = False
    needed: bool = False

    def is_decided(self) -> bool:
        return self.state is not CellState.UNMARKED


@dataclass
class PlayCell:
    """Player-facing state: a mark plus independent solved/error flags."""

    mark: CellState = CellState.UNMARKED
    solved: bool = False
    error: bool = False


@dataclass(frozen=True)
class Puzzle:
    """Immutable shown/hidden clue layout of a finished puzzle."""

    width: int
    height: int
    cells: Tuple[BoardCell, ...]

    def bounds(self) -> Bounds:
        return Bounds(width=self.width, height=self.height)

    def at(self, x: int, y: int) -> Optional[BoardCell]:
        if not self.bounds().contains(x, y):
            return None
        return self.cells[y * self.width + x]

    @property
    def shown_count(self) -> int:
        return sum(1 for cell in self.cells if cell.shown)
