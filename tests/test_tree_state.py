"""
Tests for the tree state container and its conversions.
"""

import numpy as np
import pandas as pd
import pytest

from transtree.exceptions import InvalidArgumentError, ValidationError
from transtree.tree import IMPORTED, TreeState, check_case


class TestTreeState:
    """Test construction, queries and copying."""

    def test_construction(self, chain_tree):
        assert chain_tree.n_cases == 4
        assert chain_tree.alpha == [None, 1, 2, 2]
        assert chain_tree.t_inf.dtype == np.int64

    def test_unequal_lengths(self):
        with pytest.raises(ValidationError, match="equal length"):
            TreeState([None, 1], [1, 2, 3])

    def test_fractional_times_rejected(self):
        with pytest.raises(ValidationError, match="integers"):
            TreeState([None, 1], [1, 8.7])
        with pytest.raises(ValidationError, match="integers"):
            TreeState([None, 1], [1, np.nan])

    def test_integral_float_times_accepted(self):
        state = TreeState([None, 1], [1.0, 8.0])
        assert state.t_inf.tolist() == [1, 8]
        assert state.t_inf.dtype == np.int64

    def test_nan_marks_imported(self):
        state = TreeState([np.nan, 1.0, 1.0], [0, 1, 2])
        assert state.alpha == [IMPORTED, 1, 1]
        assert all(a is None or type(a) is int for a in state.alpha)

    def test_queries(self, chain_tree):
        assert chain_tree.ancestor_of(3) == 2
        assert chain_tree.is_imported(1)
        assert not chain_tree.is_imported(4)

    @pytest.mark.parametrize("i", [0, 5, -2])
    def test_queries_out_of_range(self, chain_tree, i):
        with pytest.raises(InvalidArgumentError):
            chain_tree.ancestor_of(i)

    def test_check_case_offsets(self):
        assert check_case(1, 3) == 0
        assert check_case(3, 3) == 2
        with pytest.raises(InvalidArgumentError) as excinfo:
            check_case(4, 3)
        assert excinfo.value.details == {"case": 4, "n_cases": 3}

    def test_copy_is_independent(self, chain_tree):
        clone = chain_tree.copy()
        assert clone == chain_tree
        clone.alpha[2] = None
        clone.t_inf[0] = 100
        assert chain_tree.alpha == [None, 1, 2, 2]
        assert chain_tree.t_inf[0] == 5

    def test_equality(self, chain_tree):
        assert chain_tree == TreeState([None, 1, 2, 2], [5, 8, 11, 9])
        assert chain_tree != TreeState([None, 1, 2, 2], [5, 8, 11, 10])
        assert chain_tree != TreeState([None, 1, 2, 1], [5, 8, 11, 9])
        assert chain_tree != "not a tree"

    def test_unhashable(self, chain_tree):
        with pytest.raises(TypeError):
            hash(chain_tree)

    def test_validate_chains(self, deep_tree):
        assert deep_tree.validate() is deep_tree

    def test_validate_rejects_cycle(self):
        with pytest.raises(ValidationError, match="cycle"):
            TreeState([2, 3, 1], [0, 1, 2]).validate()


class TestDictConversion:
    """Test the parameter-list form used by samplers."""

    def test_round_trip(self, chain_tree):
        payload = chain_tree.to_dict()
        assert payload == {"alpha": [None, 1, 2, 2], "t_inf": [5, 8, 11, 9]}
        assert TreeState.from_dict(payload) == chain_tree

    def test_numpy_payload(self):
        payload = {"alpha": np.array([np.nan, 1, 1]), "t_inf": np.array([3, 4, 5])}
        state = TreeState.from_dict(payload)
        assert state.alpha == [None, 1, 1]
        assert state.t_inf.tolist() == [3, 4, 5]

    def test_missing_key(self):
        with pytest.raises(ValidationError, match="t_inf"):
            TreeState.from_dict({"alpha": [None]})

    def test_non_integer_time(self):
        with pytest.raises(ValidationError):
            TreeState.from_dict({"alpha": [None, 1], "t_inf": [0, 1.5]})

    def test_zero_ancestor(self):
        with pytest.raises(ValidationError):
            TreeState.from_dict({"alpha": [None, 0], "t_inf": [0, 1]})

    def test_length_mismatch(self):
        with pytest.raises(ValidationError) as excinfo:
            TreeState.from_dict({"alpha": [None, 1], "t_inf": [0]})
        assert excinfo.value.details == {"n_alpha": 2, "n_t_inf": 1}

    def test_not_a_mapping(self):
        with pytest.raises(ValidationError):
            TreeState.from_dict([[None], [0]])


class TestFrameConversion:
    """Test the pandas boundary."""

    def test_to_frame(self, chain_tree):
        frame = chain_tree.to_frame()
        assert list(frame.columns) == ["case", "alpha", "t_inf"]
        assert frame["case"].tolist() == [1, 2, 3, 4]
        assert str(frame["alpha"].dtype) == "Int64"
        assert frame["alpha"].isna().tolist() == [True, False, False, False]

    def test_round_trip(self, deep_tree):
        assert TreeState.from_frame(deep_tree.to_frame()) == deep_tree

    def test_unsorted_frame(self):
        frame = pd.DataFrame({"case": [2, 1], "alpha": [1, None], "t_inf": [4, 1]})
        state = TreeState.from_frame(frame)
        assert state.alpha == [None, 1]
        assert state.t_inf.tolist() == [1, 4]

    def test_missing_column(self):
        with pytest.raises(ValidationError, match="Missing expected columns"):
            TreeState.from_frame(pd.DataFrame({"case": [1], "alpha": [None]}))

    def test_gap_in_cases(self):
        frame = pd.DataFrame({"case": [1, 3], "alpha": [None, 1], "t_inf": [0, 1]})
        with pytest.raises(ValidationError, match="1..N"):
            TreeState.from_frame(frame)


class TestFingerprint:
    def test_stable(self, chain_tree):
        assert chain_tree.fingerprint() == chain_tree.copy().fingerprint()
        assert len(chain_tree.fingerprint()) == 16

    def test_changes_with_state(self, chain_tree):
        other = TreeState([None, 1, 2, 3], [5, 8, 11, 9])
        assert chain_tree.fingerprint() != other.fingerprint()
