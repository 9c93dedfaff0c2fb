import random
import unittest

from mosaic.core.constants import CellState, SolveMode
from mosaic.core.exceptions import ContradictionError
from mosaic.core.models import ClueCell
from mosaic.engine.clues import derive_clues, shortcut_flags
from mosaic.engine.grid import Grid
from mosaic.engine.image import synthesize_image
from mosaic.engine.solver import ConstraintSolver, neighbourhood_table

SAMPLE = [True, True, False, True, True, False, False, False, False]


def clue_grid(width, height, shown):
    """Build clue cells with only the given ``{(x, y): clue}`` entries shown."""

    shell = Grid(width, height, [False] * (width * height))

    def build(x, y):
        if (x, y) not in shown:
            return ClueCell(clue=-1, shown=False)
        full, empty = shortcut_flags(shell, x, y, shown[(x, y)])
        return ClueCell(clue=shown[(x, y)], shown=True, full=full, empty=empty)

    return Grid.build(width, height, build)


class RecordingSolver(ConstraintSolver):
    """Checks after every step that no decided cell changed."""

    violations = 0

    def solve_step(self, x, y):
        before = [cell.state for cell in self.cells]
        progressed = super().solve_step(x, y)
        after = [cell.state for cell in self.cells]
        for old, new in zip(before, after):
            if old is not CellState.UNMARKED and old is not new:
                RecordingSolver.violations += 1
        return progressed


class BasicSolverTests(unittest.TestCase):
    def test_solves_sample_with_all_clues(self) -> None:
        clues = derive_clues(Grid(3, 3, SAMPLE))
        result = ConstraintSolver(clues).solve()
        self.assertTrue(result.solved)
        self.assertIsNone(result.contradiction)
        self.assertFalse(result.advanced_used)
        self.assertEqual(result.solution(), SAMPLE)

    def test_full_shortcut_marks_corner(self) -> None:
        solver = ConstraintSolver(clue_grid(3, 3, {(0, 0): 4}))
        self.assertTrue(solver.solve_step(0, 0))
        states = [solver.cells.at(x, y).state for x, y in [(0, 0), (1, 0), (0, 1), (1, 1), (2, 2)]]
        self.assertEqual(states, [CellState.MARKED] * 4 + [CellState.UNMARKED])
        self.assertTrue(solver.cells.at(0, 0).solved)
        self.assertTrue(solver.cells.at(0, 0).needed)

    def test_single_corner_clue_leaves_board_unsolved(self) -> None:
        result = ConstraintSolver(clue_grid(3, 3, {(0, 0): 4})).solve()
        self.assertFalse(result.solved)
        self.assertIsNone(result.contradiction)

    def test_step_on_solved_cell_is_noop(self) -> None:
        solver = ConstraintSolver(derive_clues(Grid(3, 3, SAMPLE)))
        solver.solve()
        before = [(cell.state, cell.solved, cell.needed) for cell in solver.cells]
        for x, y in solver.cells.coords():
            self.assertFalse(solver.solve_step(x, y))
        after = [(cell.state, cell.solved, cell.needed) for cell in solver.cells]
        self.assertEqual(before, after)

    def test_hidden_clue_is_never_used(self) -> None:
        solver = ConstraintSolver(clue_grid(3, 3, {}))
        self.assertFalse(solver.solve_step(1, 1))
        self.assertEqual(solver.clue_order(), [])

    def test_counting_rules_blank_remaining_cells(self) -> None:
        solver = ConstraintSolver(clue_grid(3, 3, {(0, 0): 4, (2, 2): 1}))
        result = solver.solve()
        self.assertEqual(solver.cells.at(2, 2).state, CellState.BLANK)
        self.assertEqual(solver.cells.at(2, 1).state, CellState.BLANK)
        self.assertTrue(solver.cells.at(2, 2).needed)
        self.assertFalse(result.solved)

    def test_unused_clue_is_not_needed(self) -> None:
        result = ConstraintSolver(derive_clues(Grid(3, 3, SAMPLE))).solve()
        self.assertTrue(result.cells.at(0, 0).needed)
        # Clues whose neighbourhood was already decided made no deduction.
        self.assertLess(len(result.needed()), 9)

    def test_contradiction_aborts_solve(self) -> None:
        clues = clue_grid(3, 3, {(0, 0): 4, (1, 0): 1})
        result = ConstraintSolver(clues).solve()
        self.assertFalse(result.solved)
        self.assertIsInstance(result.contradiction, ContradictionError)
        self.assertEqual((result.contradiction.x, result.contradiction.y), (1, 0))

    def test_empty_shortcut_over_marked_cell_aborts_solve(self) -> None:
        result = ConstraintSolver(clue_grid(3, 3, {(0, 0): 4, (1, 1): 0})).solve()
        self.assertFalse(result.solved)
        self.assertIsInstance(result.contradiction, ContradictionError)
        self.assertEqual((result.contradiction.x, result.contradiction.y), (1, 1))

    def test_full_shortcut_over_blank_cell_raises(self) -> None:
        solver = ConstraintSolver(clue_grid(3, 3, {(0, 0): 4, (1, 1): 0}))
        self.assertTrue(solver.solve_step(1, 1))
        with self.assertRaises(ContradictionError):
            solver.solve_step(0, 0)
        self.assertFalse(solver.cells.at(0, 0).solved)

    def test_step_raises_on_overfull_clue(self) -> None:
        solver = ConstraintSolver(clue_grid(3, 3, {(0, 0): 4, (1, 0): 1}))
        solver.solve_step(0, 0)
        with self.assertRaises(ContradictionError):
            solver.solve_step(1, 0)

    def test_reassigning_decided_cell_raises(self) -> None:
        solver = ConstraintSolver(clue_grid(3, 3, {}))
        solver.cells.at(0, 0).state = CellState.MARKED
        self.assertFalse(solver._assign((0, 0), CellState.MARKED))
        with self.assertRaises(ContradictionError):
            solver._assign((0, 0), CellState.BLANK)

    def test_shuffled_order_is_a_permutation(self) -> None:
        clues = derive_clues(Grid(3, 3, SAMPLE))
        ordered = ConstraintSolver(clues).clue_order()
        shuffled = ConstraintSolver(clues, rng=random.Random(5)).clue_order()
        self.assertEqual(ordered, list(clues.coords()))
        self.assertEqual(sorted(shuffled), sorted(ordered))

    def test_states_never_revert(self) -> None:
        RecordingSolver.violations = 0
        rng = random.Random(42)
        for _ in range(40):
            clues = derive_clues(synthesize_image(6, 5, rng))
            for x, y in clues.coords():
                clues.at(x, y).shown = rng.random() < 0.6
            RecordingSolver(clues, mode=SolveMode.ADVANCED, rng=rng).solve()
        self.assertEqual(RecordingSolver.violations, 0)


class AreaTableTests(unittest.TestCase):
    def test_areas_are_clipped_at_edges(self) -> None:
        table = neighbourhood_table(4, 3)
        self.assertEqual(table.at(0, 0), frozenset({(0, 0), (1, 0), (0, 1), (1, 1)}))
        self.assertEqual(len(table.at(1, 0)), 6)
        self.assertEqual(len(table.at(1, 1)), 9)
        self.assertEqual(len(table.at(3, 2)), 4)

    def test_solver_reuses_supplied_table(self) -> None:
        table = neighbourhood_table(3, 3)
        solver = ConstraintSolver(derive_clues(Grid(3, 3, SAMPLE)), areas=table)
        self.assertIs(solver.areas, table)
        self.assertIs(solver._area(1, 1), table.at(1, 1))
        self.assertTrue(solver.solve().solved)

    def test_mismatched_table_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            ConstraintSolver(clue_grid(3, 3, {}), areas=neighbourhood_table(4, 3))


class OverlapTechniqueTests(unittest.TestCase):
    # Two horizontally adjacent interior clues on a 4x3 board: the left one
    # owns column 0 exclusively, the right one column 3.
    def test_basic_mode_cannot_progress(self) -> None:
        solver = ConstraintSolver(clue_grid(4, 3, {(1, 1): 5, (2, 1): 2}))
        result = solver.solve()
        self.assertFalse(result.solved)
        self.assertFalse(result.advanced_used)
        self.assertTrue(all(cell.state is CellState.UNMARKED for cell in result.cells))

    def test_difference_fills_exclusive_region(self) -> None:
        solver = ConstraintSolver(clue_grid(4, 3, {(1, 1): 5, (2, 1): 2}), mode=SolveMode.ADVANCED)
        result = solver.solve()
        self.assertTrue(result.advanced_used)
        for y in range(3):
            self.assertEqual(result.cells.at(0, y).state, CellState.MARKED)
            self.assertEqual(result.cells.at(3, y).state, CellState.BLANK)
            self.assertEqual(result.cells.at(1, y).state, CellState.UNMARKED)
        self.assertTrue(result.cells.at(1, 1).needed)
        self.assertTrue(result.cells.at(2, 1).needed)

    def test_difference_applies_symmetrically(self) -> None:
        solver = ConstraintSolver(clue_grid(4, 3, {(1, 1): 2, (2, 1): 5}), mode=SolveMode.ADVANCED)
        result = solver.solve()
        self.assertTrue(result.advanced_used)
        for y in range(3):
            self.assertEqual(result.cells.at(0, y).state, CellState.BLANK)
            self.assertEqual(result.cells.at(3, y).state, CellState.MARKED)

    def test_unsaturated_difference_does_nothing(self) -> None:
        solver = ConstraintSolver(clue_grid(4, 3, {(1, 1): 4, (2, 1): 2}), mode=SolveMode.ADVANCED)
        result = solver.solve()
        self.assertFalse(result.advanced_used)
        self.assertTrue(all(cell.state is CellState.UNMARKED for cell in result.cells))

    def test_overlap_completes_board(self) -> None:
        # Column 0 filled, everything else blank except (1,1). Basic rules
        # stall; the left column only follows from the (1,0)/(2,1) pair.
        bits = [
            1, 0, 0, 0,
            1, 1, 0, 0,
            1, 0, 0, 0,
        ]
        clues = derive_clues(Grid(4, 3, [bool(b) for b in bits]))
        for x, y in clues.coords():
            clues.at(x, y).shown = (x, y) in {(1, 0), (1, 1), (2, 1), (3, 0), (0, 2)}
        self.assertEqual([clues.at(x, y).clue for x, y in [(1, 0), (1, 1), (2, 1), (3, 0), (0, 2)]], [3, 4, 1, 0, 3])
        basic = ConstraintSolver(clues).solve()
        self.assertFalse(basic.solved)
        advanced = ConstraintSolver(clues, mode=SolveMode.ADVANCED).solve()
        self.assertTrue(advanced.solved)
        self.assertTrue(advanced.advanced_used)
        self.assertEqual(advanced.solution(), [bool(b) for b in bits])


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
