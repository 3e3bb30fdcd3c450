"""Boundary validation for tree states and genetic datasets.

These checks are meant for the point where a caller hands data to the core
(loading, deserialising, after a custom move). The per-proposal primitives
only check case indices.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Sequence

import jsonschema
import numpy as np

from .exceptions import ValidationError

TREE_STATE_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "TreeState",
    "type": "object",
    "required": ["alpha", "t_inf"],
    "properties": {
        "alpha": {
            "type": "array",
            "items": {"anyOf": [{"type": "integer", "minimum": 1}, {"type": "null"}]},
        },
        "t_inf": {
            "type": "array",
            "items": {"type": "integer"},
        },
    },
}


def validate_tree_payload(payload: Mapping[str, Any]) -> None:
    """Check the ``{"alpha": [...], "t_inf": [...]}`` form of a tree state."""
    try:
        jsonschema.validate(dict(payload), TREE_STATE_SCHEMA)
    except jsonschema.ValidationError as exc:
        path = "/".join(str(part) for part in exc.absolute_path)
        raise ValidationError(
            f"Tree state payload is invalid at '{path}': {exc.message}",
            {"path": path},
        ) from exc

    n_alpha = len(payload["alpha"])
    n_t_inf = len(payload["t_inf"])
    if n_alpha != n_t_inf:
        raise ValidationError(
            f"alpha and t_inf must have equal length, got {n_alpha} and {n_t_inf}",
            {"n_alpha": n_alpha, "n_t_inf": n_t_inf},
        )


def check_ancestry(alpha: Sequence[Optional[int]]) -> None:
    """Ensure ``alpha`` describes a forest over cases 1..N.

    Raises:
        ValidationError: on out-of-range ancestors, self-infection or cycles
    """
    n = len(alpha)
    out_of_range = [
        k for k, a in enumerate(alpha, start=1)
        if a is not None and not 1 <= a <= n
    ]
    if out_of_range:
        raise ValidationError(
            f"Ancestors outside 1..{n} for cases {out_of_range}",
            {"cases": out_of_range},
        )

    self_infected = [k for k, a in enumerate(alpha, start=1) if a == k]
    if self_infected:
        raise ValidationError(
            f"Cases infected by themselves: {self_infected}",
            {"cases": self_infected},
        )

    # 0 = unvisited, 1 = on current chain, 2 = known to reach a root
    state = [0] * n
    for start in range(n):
        chain = []
        slot = start
        while slot is not None and state[slot] == 0:
            state[slot] = 1
            chain.append(slot)
            ancestor = alpha[slot]
            slot = None if ancestor is None else ancestor - 1
        if slot is not None and state[slot] == 1:
            cycle = chain[chain.index(slot):]
            cases = [s + 1 for s in cycle]
            raise ValidationError(
                f"Ancestry contains a cycle through cases {cases}",
                {"cases": cases},
            )
        for s in chain:
            state[s] = 2


def check_genetic_data(
    has_dna: Sequence[bool],
    id_in_dna: Sequence[Optional[int]],
    distances: np.ndarray,
) -> None:
    """Ensure the sequence flags, index mapping and mutation-count matrix agree."""
    if len(has_dna) != len(id_in_dna):
        raise ValidationError(
            f"has_dna and id_in_dna must have equal length, got {len(has_dna)} and {len(id_in_dna)}"
        )

    matrix = np.asarray(distances)
    if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
        raise ValidationError(f"Mutation-count matrix must be square, got shape {matrix.shape}")
    if (matrix < 0).any():
        raise ValidationError("Mutation-count matrix contains negative entries")
    if not np.array_equal(matrix, matrix.T):
        raise ValidationError("Mutation-count matrix is not symmetric")

    n_seq = matrix.shape[0]
    bad = [
        k for k, (present, row) in enumerate(zip(has_dna, id_in_dna), start=1)
        if present and (row is None or not 1 <= row <= n_seq)
    ]
    if bad:
        raise ValidationError(
            f"Sequenced cases {bad} do not map to a row of the {n_seq}x{n_seq} matrix",
            {"cases": bad},
        )
