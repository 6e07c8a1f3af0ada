"""Random character source for the falling glyphs."""

from __future__ import annotations

import string
import time
from typing import Optional

import numpy as np
from numpy.typing import NDArray


# 26 lowercase + 26 uppercase + 10 digits.
ALPHABET = string.ascii_lowercase + string.ascii_uppercase + string.digits

_ALPHABET_ARRAY = np.array(list(ALPHABET), dtype="<U1")


def time_seed() -> int:
    """Return a seed derived from the wall clock."""

    return time.time_ns()


class CharacterSource:
    """Draw characters from :data:`ALPHABET` using an owned generator.

    The generator is created once, either from ``seed`` or from the current
    time, and is never reseeded.  Pass ``rng`` to share or mock a generator.
    """

    def __init__(self, seed: Optional[int] = None, *, rng: Optional[np.random.Generator] = None) -> None:
        if rng is None:
            rng = np.random.default_rng(time_seed() if seed is None else seed)
        self.rng = rng

    def draw(self) -> str:
        """Return a single random alphabet character."""

        return str(_ALPHABET_ARRAY[self.rng.integers(len(ALPHABET))])

    def draw_many(self, count: int) -> NDArray[np.str_]:
        """Return ``count`` random alphabet characters as an array."""

        return _ALPHABET_ARRAY[self.rng.integers(len(ALPHABET), size=count)]

    def chance(self, count: int, probability: float) -> NDArray[np.bool_]:
        """Return ``count`` independent booleans, each ``True`` with ``probability``."""

        return self.rng.random(count) < probability


__all__ = ["ALPHABET", "CharacterSource", "time_seed"]
