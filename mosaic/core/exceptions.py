"""Custom exception hierarchy for mosaic generation and solving."""


class MosaicError(Exception):
    """Base exception for engine failures."""


class ParameterError(MosaicError, ValueError):
    """Raised when puzzle dimensions are outside the supported range."""


class ContradictionError(MosaicError):
    """Raised when a deduction step finds clues inconsistent with the marks."""

    def __init__(self, x: int, y: int, reason: str) -> None:
        super().__init__(f"Contradiction at ({x},{y}): {reason}")
        self.x = x
        self.y = y
        self.reason = reason


class DescriptorError(MosaicError, ValueError):
    """Raised when a puzzle descriptor string cannot be decoded."""


class UnsolvableError(MosaicError):
    """Raised when a board that must be solvable cannot be resolved."""


class GenerationError(MosaicError):
    """Raised when the generator exhausts its attempt budget."""
