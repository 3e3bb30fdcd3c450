"""Deterministic random utilities."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .exceptions import InvalidArgumentError


@dataclass(slots=True)
class RandomState:
    """Seeded generator handle passed explicitly to the random tree operations."""

    seed: int
    generator: np.random.Generator

    @classmethod
    def create(cls, seed: int) -> "RandomState":
        return cls(seed=seed, generator=np.random.default_rng(seed))

    def spawn(self, offset: int) -> "RandomState":
        """Derive an independent child stream, e.g. one per concurrent proposer."""

        if offset < 1:
            raise InvalidArgumentError(
                f"spawn offset must be at least 1, got {offset}",
                {"offset": offset},
            )
        bit_generator = self.generator.bit_generator.jumped(offset)
        return RandomState(seed=self.seed + offset, generator=np.random.Generator(bit_generator))


def choose_rng(seed: int) -> np.random.Generator:
    """Convenience helper returning a seeded ``np.random.Generator``."""

    return RandomState.create(seed).generator
