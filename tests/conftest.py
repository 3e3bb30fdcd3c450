"""
Test configuration and fixtures for transtree tests.
"""

import shutil
import tempfile
from pathlib import Path

import numpy as np
import pytest

from transtree.genetics import GeneticData
from transtree.rng import choose_rng
from transtree.tree import TreeState


@pytest.fixture
def seed():
    """Fixed random seed for reproducible tests."""
    return 42


@pytest.fixture
def rng(seed):
    """Seeded generator passed to the random operations."""
    return choose_rng(seed)


@pytest.fixture
def temp_dir():
    """Temporary directory for test outputs."""
    temp_dir = tempfile.mkdtemp()
    yield Path(temp_dir)
    shutil.rmtree(temp_dir)


@pytest.fixture
def imported_parent_tree():
    """Case 1 imported, 2 and 3 infected by 1, 4 infected by 3."""
    return TreeState([None, 1, 1, 3], [10, 15, 12, 20])


@pytest.fixture
def chain_tree():
    """Case 1 imported, 2 infected by 1, 3 and 4 infected by 2."""
    return TreeState([None, 1, 2, 2], [5, 8, 11, 9])


@pytest.fixture
def deep_tree():
    """Two transmission chains with siblings at several levels.

    1 -> 2 -> {3, 4, 5}, 3 -> {6, 7}, and a second chain 8 -> 9.
    """
    alpha = [None, 1, 2, 2, 2, 3, 3, None, 8]
    t_inf = [0, 3, 6, 7, 7, 9, 10, 2, 5]
    return TreeState(alpha, t_inf)


@pytest.fixture
def genetic_data():
    """Five cases, cases 2 and 4 unsequenced; rows ordered by case."""
    D = np.array([
        [0, 2, 5],
        [2, 0, 3],
        [5, 3, 0],
    ])
    return GeneticData(
        has_dna=[True, False, True, False, True],
        id_in_dna=[1, None, 2, None, 3],
        D=D,
    )


