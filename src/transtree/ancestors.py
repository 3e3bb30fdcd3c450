"""Ancestor candidates and random ancestor proposals."""

from __future__ import annotations

import logging
from collections.abc import Set
from typing import Iterable, List, Sequence

import numpy as np

from .exceptions import InvalidArgumentError
from .tree import check_case

logger = logging.getLogger(__name__)


def find_possible_ancestors(t_inf: Sequence[int], i: int) -> List[int]:
    """Cases infected strictly before case ``i``, in ascending order.

    An empty list means ``i`` has the earliest infection time and so no valid
    infector; callers must not pick an ancestor in that case.
    """
    times = np.asarray(t_inf)
    slot = check_case(i, len(times))
    return (np.flatnonzero(times < times[slot]) + 1).tolist()


def sample_one(candidates: Iterable[int], rng: np.random.Generator) -> int:
    """Draw one element uniformly from a non-empty collection of cases.

    Sets are sorted first so that a seeded generator gives a reproducible draw.

    Raises:
        InvalidArgumentError: if ``candidates`` is empty
    """
    if isinstance(candidates, Set):
        pool = sorted(candidates)
    else:
        pool = list(candidates)
    if not pool:
        logger.debug("Empty candidate set passed to sample_one")
        raise InvalidArgumentError("Trying to sample from an empty candidate set")
    return int(pool[rng.integers(len(pool))])


def propose_ancestor(t_inf: Sequence[int], i: int, rng: np.random.Generator) -> int:
    """Pick a random possible infector for case ``i``.

    Raises:
        InvalidArgumentError: if no case was infected before ``i``
    """
    return sample_one(find_possible_ancestors(t_inf, i), rng)
