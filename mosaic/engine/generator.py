"""Main puzzle generator orchestration.

Each attempt is independent rejection sampling:
  1. Synthesize a random image and derive every clue (all shown).
  2. Reject boards with no full/empty entry point.
  3. Solve the fully-shown board; reject when unsolvable, or when an advanced
     puzzle was requested and the overlap technique never fired.
  4. Hide clues with the minimizer, then encode the descriptor.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List, Optional

from ..core.constants import DEFAULT_SIZE, SolveMode
from ..core.exceptions import GenerationError
from ..core.models import GameParams, Puzzle
from ..io.answer_key import encode_answer_key
from ..io.descriptor import encode_descriptor
from ..utils.logger import get_logger
from .clues import derive_clues, start_point_check, to_puzzle
from .grid import Grid
from .image import synthesize_image
from .minimizer import ClueMinimizer, MinimizeReport
from .solver import ConstraintSolver, neighbourhood_table


LOGGER = get_logger(__name__)


@dataclass
class GeneratorConfig:
    width: int = DEFAULT_SIZE
    height: int = DEFAULT_SIZE
    aggressive: bool = True
    advanced: bool = False
    seed: Optional[int] = None
    max_attempts: Optional[int] = 10_000

    def to_params(self) -> GameParams:
        params = GameParams(
            width=self.width,
            height=self.height,
            aggressive=self.aggressive,
            advanced=self.advanced,
        )
        params.validate()
        return params


@dataclass
class GeneratedPuzzle:
    puzzle: Puzzle
    descriptor: str
    answer_key: bytes
    solution: List[bool]
    attempts: int
    report: MinimizeReport
    seed: Optional[int] = None


class MosaicGenerator:
    """High-level orchestrator: synthesize, validate, minimize, encode."""

    def __init__(self, config: GeneratorConfig, rng: Optional[random.Random] = None) -> None:
        self.config = config
        self.params = config.to_params()
        self.rng = rng or random.Random(config.seed)
        self.mode = SolveMode.ADVANCED if self.params.advanced else SolveMode.BASIC
        self.areas = neighbourhood_table(self.params.width, self.params.height)

    # ------------------------------------------------------------------
    # Public entrypoints
    # ------------------------------------------------------------------
    def generate(self) -> GeneratedPuzzle:
        LOGGER.info(
            "Generating %sx%s puzzle (aggressive=%s, advanced=%s)",
            self.params.width,
            self.params.height,
            self.params.aggressive,
            self.params.advanced,
        )
        attempt = 0
        while self.config.max_attempts is None or attempt < self.config.max_attempts:
            attempt += 1
            image = synthesize_image(self.params.width, self.params.height, self.rng)
            result = self._attempt(image, attempt)
            if result is not None:
                return result
        LOGGER.warning("No valid puzzle after %s attempts", attempt)
        raise GenerationError(f"Unable to generate puzzle after {attempt} attempts")

    def generate_from_image(self, image: Grid[bool]) -> GeneratedPuzzle:
        """Run a single attempt on a caller-supplied ground truth."""

        if (image.width, image.height) != (self.params.width, self.params.height):
            raise GenerationError(
                f"Image is {image.width}x{image.height}, expected "
                f"{self.params.width}x{self.params.height}"
            )
        result = self._attempt(image, 1)
        if result is None:
            raise GenerationError("Supplied image does not produce an acceptable puzzle")
        return result

    # ------------------------------------------------------------------
    # Attempt pipeline
    # ------------------------------------------------------------------
    def _attempt(self, image: Grid[bool], attempt: int) -> Optional[GeneratedPuzzle]:
        clues = derive_clues(image)
        if not start_point_check(clues):
            LOGGER.debug("Attempt %d rejected: no starting point", attempt)
            return None

        check = ConstraintSolver(clues, mode=self.mode, rng=self.rng, areas=self.areas).solve()
        if not check.solved:
            LOGGER.debug("Attempt %d rejected: not solvable with all clues shown", attempt)
            return None
        if self.params.advanced and not check.advanced_used:
            LOGGER.debug("Attempt %d rejected: solvable without the overlap technique", attempt)
            return None

        minimizer = ClueMinimizer(self.rng, aggressive=self.params.aggressive, mode=self.mode)
        report = minimizer.minimize(clues, self.areas)
        puzzle = to_puzzle(clues)
        solution = check.solution()
        descriptor = encode_descriptor(puzzle)
        LOGGER.info(
            "Accepted puzzle on attempt %d with %d/%d clues shown",
            attempt,
            puzzle.shown_count,
            self.params.width * self.params.height,
        )
        return GeneratedPuzzle(
            puzzle=puzzle,
            descriptor=descriptor,
            answer_key=encode_answer_key(solution),
            solution=solution,
            attempts=attempt,
            report=report,
            seed=self.config.seed,
        )
