"""
Random engine: the single source of randomness for password generation.
"""

from __future__ import annotations

import logging
import random
import secrets
from typing import MutableSequence, Sequence, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RandomEngine:
    """
    Encapsulates all randomness used by the generator.

    Backed by the operating system CSPRNG (`secrets.SystemRandom`). Tests
    may pass a seeded `random.Random` to get reproducible output; nothing
    in the package does so.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng if rng is not None else secrets.SystemRandom()

        if not isinstance(self.rng, random.SystemRandom):
            logger.debug(
                "RandomEngine using non-system source %s", type(self.rng).__name__
            )

    def choice(self, seq: Sequence[T]) -> T:
        """
        Uniformly pick one element of a non-empty sequence.
        """
        if not seq:
            raise IndexError("Cannot choose from an empty sequence")
        return seq[self.rng.randrange(len(seq))]

    def shuffle(self, items: MutableSequence[T]) -> None:
        """
        In-place uniform (Fisher-Yates) shuffle.
        """
        self.rng.shuffle(items)
