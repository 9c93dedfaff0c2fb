"""CLI entrypoint for the mosaic puzzle generator."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from mosaic.core.constants import DEFAULT_SIZE
from mosaic.core.exceptions import MosaicError
from mosaic.core.models import GameParams
from mosaic.engine.generator import GeneratorConfig, MosaicGenerator
from mosaic.engine.uniqueness import has_unique_solution
from mosaic.io.answer_key import encode_answer_key, solve_puzzle
from mosaic.io.descriptor import decode_descriptor
from mosaic.utils.logger import configure_logging
from mosaic.utils.pretty import pretty_print_puzzle


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate or decode mosaic logic puzzles",
    )
    parser.add_argument("--width", type=int, default=DEFAULT_SIZE, help="Grid width in cells")
    parser.add_argument("--height", type=int, default=DEFAULT_SIZE, help="Grid height in cells")
    parser.add_argument(
        "--aggressive",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Search for a minimal clue set after dropping unused clues",
    )
    parser.add_argument(
        "--advanced",
        action="store_true",
        help="Require the overlap technique to be used when solving",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility")
    parser.add_argument(
        "--max-attempts",
        type=int,
        default=10_000,
        help="Rejected candidates allowed before giving up (0 for no limit)",
    )
    parser.add_argument(
        "--decode",
        type=str,
        metavar="DESCRIPTOR",
        help="Decode and solve an existing descriptor instead of generating",
    )
    parser.add_argument("--output", type=Path, help="Optional path to JSON output")
    parser.add_argument(
        "--pretty",
        action="store_true",
        help="Also print the clue grid and solution to stderr",
    )
    parser.add_argument(
        "--verify",
        action="store_true",
        help="Check with CP-SAT that the puzzle has exactly one solution",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = getattr(logging, args.log_level.upper(), logging.INFO)
    configure_logging(level)

    payload: Dict[str, Any] = {
        "width": args.width,
        "height": args.height,
        "aggressive": args.aggressive,
        "advanced": args.advanced,
        "seed": args.seed,
    }

    try:
        if args.decode is not None:
            GameParams(width=args.width, height=args.height).validate()
            puzzle = decode_descriptor(args.decode, args.width, args.height)
            solution = solve_puzzle(puzzle)
            descriptor = args.decode
        else:
            config = GeneratorConfig(
                width=args.width,
                height=args.height,
                aggressive=args.aggressive,
                advanced=args.advanced,
                seed=args.seed,
                max_attempts=args.max_attempts or None,
            )
            result = MosaicGenerator(config).generate()
            puzzle = result.puzzle
            solution = result.solution
            descriptor = result.descriptor
            payload["attempts"] = result.attempts
    except MosaicError as exc:
        parser.error(str(exc))

    payload.update(
        {
            "descriptor": descriptor,
            "answer_key": encode_answer_key(solution).hex(),
            "shown_clues": puzzle.shown_count,
        }
    )
    if args.verify:
        payload["unique"] = has_unique_solution(puzzle)

    if args.pretty:
        pretty_print_puzzle(puzzle, solution, label=descriptor, stream=sys.stderr)

    output_text = json.dumps(payload, indent=2)
    if args.output:
        args.output.write_text(output_text, encoding="utf-8")
    else:
        print(output_text)


if __name__ == "__main__":  # pragma: no cover
    main()
