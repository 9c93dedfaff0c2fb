"""Random ground-truth image synthesis."""

from __future__ import annotations

import random

from .grid import Grid


def synthesize_image(width: int, height: int, rng: random.Random) -> Grid[bool]:
    """Fill every cell with one independent, unbiased random bit."""

    return Grid.build(width, height, lambda _x, _y: bool(rng.getrandbits(1)))
