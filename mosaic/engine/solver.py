"""Deductive mosaic solver.

Two rule sets are available:
  1. Basic: per-clue counting (full/empty shortcuts, then marked/blank totals).
  2. Advanced: Basic plus the pairwise overlap technique, tried only when the
     counting rules make no progress on a clue.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import AbstractSet, FrozenSet, Iterable, List, Optional, Tuple

from ..core.constants import NEIGHBOURHOOD, OVERLAP_WINDOW, Bounds, CellState, SolveMode
from ..core.exceptions import ContradictionError
from ..core.models import ClueCell, SolverCell
from ..utils.logger import get_logger
from .grid import Grid


LOGGER = get_logger(__name__)

Coord = Tuple[int, int]
AreaTable = Grid[FrozenSet[Coord]]


def neighbourhood_table(width: int, height: int) -> AreaTable:
    """Clipped 3x3 coordinate set of every cell, computed once per board."""

    bounds = Bounds(width=width, height=height)
    return Grid.build(
        width,
        height,
        lambda x, y: frozenset(
            (x + dx, y + dy) for dx, dy in NEIGHBOURHOOD if bounds.contains(x + dx, y + dy)
        ),
    )


@dataclass
class SolveResult:
    cells: Grid[SolverCell]
    solved: bool
    advanced_used: bool = False
    sweeps: int = 0
    contradiction: Optional[ContradictionError] = None

    def solution(self) -> List[bool]:
        """Row-major filled flags; only meaningful when ``solved`` holds."""
        return [cell.state is CellState.MARKED for cell in self.cells]

    def needed(self) -> List[Coord]:
        return [coord for coord in self.cells.coords() if self.cells.at(*coord).needed]


class ConstraintSolver:
    """Runs deduction sweeps over the shown clues until a fixed point.

    When ``rng`` is given the sweep order is shuffled once per solve, which
    changes which clues end up flagged as needed. Without it clues are swept
    in raster order.
    """

    def __init__(
        self,
        clues: Grid[ClueCell],
        mode: SolveMode = SolveMode.BASIC,
        rng: Optional[random.Random] = None,
        areas: Optional[AreaTable] = None,
    ) -> None:
        self.clues = clues
        self.mode = mode
        self.rng = rng
        self.areas = areas if areas is not None else neighbourhood_table(clues.width, clues.height)
        if (self.areas.width, self.areas.height) != (clues.width, clues.height):
            raise ValueError(
                f"Area table is {self.areas.width}x{self.areas.height}, "
                f"board is {clues.width}x{clues.height}"
            )
        self.cells: Grid[SolverCell] = Grid.build(clues.width, clues.height, lambda _x, _y: SolverCell())
        self.advanced_used = False

    # ------------------------------------------------------------------
    # Public entrypoints
    # ------------------------------------------------------------------
    def clue_order(self) -> List[Coord]:
        order = [(x, y) for x, y in self.clues.coords() if self.clues.at(x, y).shown]
        if self.rng is not None:
            self.rng.shuffle(order)
        return order

    def solve(self) -> SolveResult:
        order = self.clue_order()
        sweeps = 0
        made_progress = True
        try:
            while made_progress:
                made_progress = False
                sweeps += 1
                for x, y in order:
                    if self.solve_step(x, y):
                        made_progress = True
        except ContradictionError as exc:
            LOGGER.debug("Solve aborted after %d sweeps: %s", sweeps, exc)
            return SolveResult(
                cells=self.cells,
                solved=False,
                advanced_used=self.advanced_used,
                sweeps=sweeps,
                contradiction=exc,
            )

        solved = all(cell.is_decided() for cell in self.cells)
        LOGGER.debug(
            "Solve finished after %d sweeps over %d clues (solved=%s, advanced=%s)",
            sweeps,
            len(order),
            solved,
            self.advanced_used,
        )
        return SolveResult(
            cells=self.cells,
            solved=solved,
            advanced_used=self.advanced_used,
            sweeps=sweeps,
        )

    def solve_step(self, x: int, y: int) -> bool:
        """Apply one deduction for the clue at ``(x, y)``.

        Returns True when the step solved the clue or changed any cell.
        Raises :class:`ContradictionError` when the clue cannot be satisfied.
        """

        clue = self.clues.at(x, y)
        cell = self.cells.at(x, y)
        if cell.solved or not clue.shown:
            return False

        marked, blank, total = self._count(self._area(x, y))
        undecided = marked + blank < total

        # Shortcuts take precedence over the counting rules.
        if clue.full:
            if blank:
                raise ContradictionError(x, y, f"full clue {clue.clue} has {blank} blank neighbours")
            return self._resolve(x, y, CellState.MARKED, undecided)
        if clue.empty:
            if marked:
                raise ContradictionError(x, y, f"empty clue has {marked} marked neighbours")
            return self._resolve(x, y, CellState.BLANK, undecided)
        if marked == clue.clue:
            return self._resolve(x, y, CellState.BLANK, undecided)
        if clue.clue == total - blank:
            return self._resolve(x, y, CellState.MARKED, undecided)

        if not undecided:
            raise ContradictionError(x, y, f"neighbourhood decided with {marked} marks, clue {clue.clue}")
        if marked > clue.clue:
            raise ContradictionError(x, y, f"{marked} marks exceed clue {clue.clue}")
        if clue.clue > total - blank:
            raise ContradictionError(x, y, f"clue {clue.clue} exceeds {total - blank} available cells")

        if self.mode is SolveMode.ADVANCED:
            return self._overlap(x, y)
        return False

    # ------------------------------------------------------------------
    # Basic rules
    # ------------------------------------------------------------------
    def _area(self, x: int, y: int) -> FrozenSet[Coord]:
        return self.areas.at(x, y)

    def _count(self, area: Iterable[Coord]) -> Tuple[int, int, int]:
        marked = blank = total = 0
        for coord in area:
            state = self.cells.at(*coord).state
            total += 1
            if state is CellState.MARKED:
                marked += 1
            elif state is CellState.BLANK:
                blank += 1
        return marked, blank, total

    def _resolve(self, x: int, y: int, state: CellState, needed: bool) -> bool:
        cell = self.cells.at(x, y)
        cell.solved = True
        if needed:
            cell.needed = True
        self._mark(self._area(x, y), state)
        return True

    def _mark(self, area: Iterable[Coord], state: CellState) -> int:
        """Set every unmarked cell of ``area``; decided cells are left alone."""
        changed = 0
        for coord in area:
            if self.cells.at(*coord).state is CellState.UNMARKED:
                self._assign(coord, state)
                changed += 1
        return changed

    def _assign(self, coord: Coord, state: CellState) -> bool:
        cell = self.cells.at(*coord)
        if cell.state is state:
            return False
        if cell.state is not CellState.UNMARKED:
            raise ContradictionError(
                coord[0], coord[1], f"cannot change {cell.state.value} to {state.value}"
            )
        cell.state = state
        return True

    # ------------------------------------------------------------------
    # Overlap technique
    # ------------------------------------------------------------------
    def _overlap(self, x: int, y: int) -> bool:
        clue_a = self.clues.at(x, y)
        area_a = self._area(x, y)
        progress = False
        for bx, by, clue_b in self.clues.around(x, y, OVERLAP_WINDOW):
            if not clue_b.shown:
                continue
            area_b = self._area(bx, by)
            only_a = area_a - area_b
            only_b = area_b - area_a
            _marked, blank_a, total_a = self._count(only_a)
            _marked, blank_b, total_b = self._count(only_b)

            fired = self._apply_overlap(clue_a.clue - clue_b.clue, total_a - blank_a, only_a, only_b)
            if not fired:
                fired = self._apply_overlap(clue_b.clue - clue_a.clue, total_b - blank_b, only_b, only_a)
            if fired:
                LOGGER.debug("Overlap between (%d,%d) and (%d,%d) made progress", x, y, bx, by)
                self.cells.at(x, y).needed = True
                self.cells.at(bx, by).needed = True
                self.advanced_used = True
                progress = True
        return progress

    def _apply_overlap(
        self, difference: int, capacity: int, fill: AbstractSet[Coord], clear: AbstractSet[Coord]
    ) -> bool:
        """Fill ``fill`` and clear ``clear`` when the clue difference saturates ``fill``.

        The shared cells count toward both clues, so the difference must be
        made up entirely by filled cells outside the overlap.
        """

        if difference <= 0 or difference != capacity:
            return False
        changed = self._mark(fill, CellState.MARKED)
        for coord in clear:
            if self._assign(coord, CellState.BLANK):
                changed += 1
        return changed > 0
