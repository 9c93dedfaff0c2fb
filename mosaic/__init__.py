"""Mosaic puzzle generator and deductive solver.

This package exposes the public API surface via:

- ``mosaic.engine.generator.MosaicGenerator``: rejection-sampling puzzle generation.
- ``mosaic.engine.solver.ConstraintSolver``: basic and overlap deduction rules.
- ``mosaic.io.descriptor``: the compact run-length puzzle descriptor.
- ``mosaic.engine.uniqueness``: CP-SAT solution counting for auditing puzzles.
"""

from .engine.generator import GeneratedPuzzle, GeneratorConfig, MosaicGenerator
from .engine.solver import ConstraintSolver, SolveResult
from .engine.uniqueness import count_solutions, has_unique_solution
from .io.answer_key import compute_answer_key, decode_answer_key
from .io.descriptor import decode_descriptor, encode_descriptor

__all__ = [
    "GeneratedPuzzle",
    "GeneratorConfig",
    "MosaicGenerator",
    "ConstraintSolver",
    "SolveResult",
    "count_solutions",
    "has_unique_solution",
    "compute_answer_key",
    "decode_answer_key",
    "decode_descriptor",
    "encode_descriptor",
]

__version__ = "0.1.0"
