"""Transmission tree state: ancestries plus infection times.

Case identifiers are 1-based everywhere a caller can see them. Conversion to
0-based slots happens once, at the top of each function, via ``case - 1``.
"""

from __future__ import annotations

import hashlib
import json
from typing import Any, Dict, List, Mapping, Optional, Sequence

import numpy as np
import pandas as pd

from .exceptions import InvalidArgumentError, ValidationError
from .validation import check_ancestry, validate_tree_payload

#: Ancestry value of a case with no local infector.
IMPORTED = None

Ancestor = Optional[int]


def check_case(i: int, n_cases: int) -> int:
    """Return the 0-based slot for case ``i``, failing outside ``1..n_cases``."""
    if not 1 <= i <= n_cases:
        raise InvalidArgumentError(
            f"Case index {i} outside 1..{n_cases}",
            {"case": i, "n_cases": n_cases},
        )
    return i - 1


def _as_ancestor(value: Any) -> Ancestor:
    if value is None or pd.isna(value):
        return IMPORTED
    return int(value)


def _to_native(value: Any) -> Any:
    """Map NumPy scalars and NaN onto the JSON types the payload schema expects."""
    if value is None:
        return None
    if isinstance(value, (float, np.floating)):
        if np.isnan(value):
            return None
        return int(value) if float(value).is_integer() else float(value)
    if isinstance(value, np.integer):
        return int(value)
    if value is pd.NA:
        return None
    return value


class TreeState:
    """Ancestry vector and infection-time vector, always of equal length."""

    __slots__ = ("alpha", "t_inf")

    def __init__(self, alpha: Sequence[Ancestor], t_inf: Sequence[int]):
        self.alpha: List[Ancestor] = [_as_ancestor(a) for a in alpha]
        times = np.asarray(t_inf)
        if times.dtype.kind == "f" and not np.all(np.mod(times, 1) == 0):
            raise ValidationError(
                "Infection times must be integers",
                {"t_inf": times.tolist()},
            )
        self.t_inf: np.ndarray = np.array(times, dtype=np.int64)
        if self.t_inf.ndim != 1 or len(self.alpha) != len(self.t_inf):
            raise ValidationError(
                f"alpha and t_inf must be vectors of equal length, "
                f"got {len(self.alpha)} and {self.t_inf.shape}"
            )

    @property
    def n_cases(self) -> int:
        return len(self.alpha)

    def check_case(self, i: int) -> int:
        return check_case(i, self.n_cases)

    def ancestor_of(self, i: int) -> Ancestor:
        return self.alpha[self.check_case(i)]

    def is_imported(self, i: int) -> bool:
        return self.ancestor_of(i) is IMPORTED

    def copy(self) -> "TreeState":
        clone = TreeState.__new__(TreeState)
        clone.alpha = list(self.alpha)
        clone.t_inf = self.t_inf.copy()
        return clone

    def validate(self) -> "TreeState":
        """Check the forest invariant; returns ``self`` for chaining."""
        check_ancestry(self.alpha)
        return self

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TreeState):
            return NotImplemented
        return self.alpha == other.alpha and np.array_equal(self.t_inf, other.t_inf)

    __hash__ = None

    def __repr__(self) -> str:
        return f"TreeState(alpha={self.alpha}, t_inf={self.t_inf.tolist()})"

    def to_dict(self) -> Dict[str, Any]:
        return {"alpha": list(self.alpha), "t_inf": self.t_inf.tolist()}

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "TreeState":
        """Build a state from the ``{"alpha": ..., "t_inf": ...}`` parameter form.

        Missing ancestors may be given as ``None`` or ``NaN``.
        """
        if not isinstance(payload, Mapping):
            raise ValidationError(f"Tree state payload must be a mapping, got {type(payload).__name__}")
        normalised = dict(payload)
        for key in ("alpha", "t_inf"):
            if isinstance(normalised.get(key), (list, tuple, np.ndarray, pd.Series)):
                normalised[key] = [_to_native(v) for v in normalised[key]]
        validate_tree_payload(normalised)
        return cls(normalised["alpha"], normalised["t_inf"])

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            {
                "case": np.arange(1, self.n_cases + 1),
                "alpha": pd.array(self.alpha, dtype="Int64"),
                "t_inf": self.t_inf,
            }
        )

    @classmethod
    def from_frame(cls, frame: pd.DataFrame) -> "TreeState":
        """Build a state from a frame with ``case``, ``alpha`` and ``t_inf`` columns."""
        missing = [col for col in ("case", "alpha", "t_inf") if col not in frame.columns]
        if missing:
            raise ValidationError(f"Missing expected columns: {missing}")

        ordered = frame.sort_values("case")
        cases = ordered["case"].to_numpy()
        if not np.array_equal(cases, np.arange(1, len(ordered) + 1)):
            raise ValidationError("Case identifiers must be exactly 1..N")

        return cls(ordered["alpha"].tolist(), ordered["t_inf"].to_numpy())

    def fingerprint(self) -> str:
        """Deterministic short hash of ancestries and infection times."""
        payload = json.dumps(self.to_dict(), sort_keys=True)
        return hashlib.sha256(payload.encode()).hexdigest()[:16]
