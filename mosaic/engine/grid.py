"""Grid representation and neighbourhood helpers."""

from __future__ import annotations

from typing import Callable, Generic, Iterator, List, Optional, Sequence, Tuple, TypeVar

from ..core.constants import NEIGHBOURHOOD, Bounds

T = TypeVar("T")


class Grid(Generic[T]):
    """Row-major width x height storage with bounds-checked addressing.

    Every neighbourhood scan in the engine goes through :meth:`at`, so edge
    and corner cells need no special handling at the call sites.
    """

    def __init__(self, width: int, height: int, cells: Sequence[T]) -> None:
        if len(cells) != width * height:
            raise ValueError(
                f"Expected {width * height} cells for a {width}x{height} grid, got {len(cells)}"
            )
        self.bounds = Bounds(width=width, height=height)
        self.cells: List[T] = list(cells)

    @classmethod
    def build(cls, width: int, height: int, factory: Callable[[int, int], T]) -> "Grid[T]":
        return cls(width, height, [factory(x, y) for y in range(height) for x in range(width)])

    @property
    def width(self) -> int:
        return self.bounds.width

    @property
    def height(self) -> int:
        return self.bounds.height

    def at(self, x: int, y: int) -> Optional[T]:
        if not self.bounds.contains(x, y):
            return None
        return self.cells[y * self.bounds.width + x]

    def coords(self) -> Iterator[Tuple[int, int]]:
        for y in range(self.bounds.height):
            for x in range(self.bounds.width):
                yield x, y

    def around(
        self, x: int, y: int, offsets: Sequence[Tuple[int, int]] = NEIGHBOURHOOD
    ) -> Iterator[Tuple[int, int, T]]:
        """Yield ``(x, y, cell)`` for every in-bounds cell at the given offsets."""

        for dx, dy in offsets:
            cell = self.at(x + dx, y + dy)
            if cell is not None:
                yield x + dx, y + dy, cell

    def __iter__(self) -> Iterator[T]:
        return iter(self.cells)
