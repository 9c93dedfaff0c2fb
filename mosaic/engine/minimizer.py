"""Clue hiding while preserving solvability."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List, Optional

from ..core.constants import SolveMode
from ..core.models import ClueCell
from ..utils.logger import get_logger
from .grid import Grid
from .solver import AreaTable, ConstraintSolver, Coord, neighbourhood_table


LOGGER = get_logger(__name__)


@dataclass
class MinimizeReport:
    initially_shown: int
    needed: List[Coord]
    hidden_unneeded: int = 0
    hidden_aggressive: int = 0

    @property
    def final_shown(self) -> int:
        return self.initially_shown - self.hidden_unneeded - self.hidden_aggressive


class ClueMinimizer:
    """Hides clues from a fully-shown, solvable clue grid.

    Clues the solver never used are dropped outright. With ``aggressive`` set
    the remaining clues are tried in random order, each one staying hidden
    only if the board is still solvable without it.
    """

    def __init__(self, rng: random.Random, aggressive: bool = True, mode: SolveMode = SolveMode.BASIC) -> None:
        self.rng = rng
        self.aggressive = aggressive
        self.mode = mode

    def minimize(self, clues: Grid[ClueCell], areas: Optional[AreaTable] = None) -> MinimizeReport:
        # Every re-solve below shares one neighbourhood table.
        if areas is None:
            areas = neighbourhood_table(clues.width, clues.height)
        result = ConstraintSolver(clues, mode=self.mode, rng=self.rng, areas=areas).solve()
        needed = result.needed()
        report = MinimizeReport(
            initially_shown=sum(1 for cell in clues if cell.shown),
            needed=needed,
        )

        needed_set = set(needed)
        for x, y in clues.coords():
            cell = clues.at(x, y)
            if cell.shown and (x, y) not in needed_set:
                cell.shown = False
                report.hidden_unneeded += 1

        if self.aggressive:
            candidates = list(needed)
            self.rng.shuffle(candidates)
            for x, y in candidates:
                cell = clues.at(x, y)
                cell.shown = False
                if self._still_solvable(clues, areas):
                    report.hidden_aggressive += 1
                else:
                    cell.shown = True
                    LOGGER.debug("Clue at (%d,%d) is required, restoring", x, y)

        LOGGER.debug(
            "Minimized clues: %d shown -> %d (unneeded %d, aggressive %d)",
            report.initially_shown,
            report.final_shown,
            report.hidden_unneeded,
            report.hidden_aggressive,
        )
        return report

    def _still_solvable(self, clues: Grid[ClueCell], areas: AreaTable) -> bool:
        return ConstraintSolver(clues, mode=self.mode, areas=areas).solve().solved
