"""CP-SAT solution counting using OR-Tools.

This is independent of the deductive solver: it ignores which rules a human
would use and only asks how many fillings satisfy the shown clues.
"""

from __future__ import annotations

from typing import List, Optional

from ortools.sat.python import cp_model

from ..core.constants import NEIGHBOURHOOD
from ..core.models import Puzzle
from ..utils.logger import get_logger

LOGGER = get_logger(__name__)


def _build_model(puzzle: Puzzle):
    model = cp_model.CpModel()
    cell_vars = [
        model.new_bool_var(f"F_{index % puzzle.width}_{index // puzzle.width}")
        for index in range(puzzle.width * puzzle.height)
    ]
    bounds = puzzle.bounds()
    for index, cell in enumerate(puzzle.cells):
        if not cell.shown:
            continue
        x, y = index % puzzle.width, index // puzzle.width
        area = [
            cell_vars[(y + dy) * puzzle.width + (x + dx)]
            for dx, dy in NEIGHBOURHOOD
            if bounds.contains(x + dx, y + dy)
        ]
        model.add(sum(area) == cell.clue)
    return model, cell_vars


def _new_solver(timeout: float) -> cp_model.CpSolver:
    solver = cp_model.CpSolver()
    solver.parameters.max_time_in_seconds = timeout
    solver.parameters.num_workers = 4
    return solver


def solve_exhaustively(puzzle: Puzzle, timeout: float = 10.0) -> Optional[List[bool]]:
    """Return any filling consistent with the shown clues, or None."""

    model, cell_vars = _build_model(puzzle)
    solver = _new_solver(timeout)
    status = solver.solve(model)
    if status not in (cp_model.OPTIMAL, cp_model.FEASIBLE):
        LOGGER.info("CP-SAT: no filling found (status=%s)", solver.status_name(status))
        return None
    return [bool(solver.value(var)) for var in cell_vars]


def count_solutions(puzzle: Puzzle, limit: int = 2, timeout: float = 10.0) -> int:
    """Count fillings up to ``limit`` by forbidding each one found."""

    model, cell_vars = _build_model(puzzle)
    found = 0
    while found < limit:
        solver = _new_solver(timeout)
        status = solver.solve(model)
        if status == cp_model.UNKNOWN:
            LOGGER.warning("CP-SAT: timed out after %d solutions", found)
            break
        if status not in (cp_model.OPTIMAL, cp_model.FEASIBLE):
            break
        found += 1
        # At least one cell must differ from this filling next time.
        model.add_bool_or([~var if solver.value(var) else var for var in cell_vars])
    LOGGER.info("CP-SAT: %d solution(s) found (limit %d)", found, limit)
    return found


def has_unique_solution(puzzle: Puzzle, timeout: float = 10.0) -> bool:
    return count_solutions(puzzle, limit=2, timeout=timeout) == 1
