"""Genetic data for transmission tree likelihoods.

Not every case has a sequence, so cases are mapped onto rows of a compact
mutation-count matrix through ``id_in_dna``. Both the case identifiers and the
row numbers are 1-based.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Mapping, Optional

import numpy as np
from scipy.spatial.distance import pdist, squareform

from .exceptions import PreconditionViolationError, ValidationError
from .logging_config import time_it
from .tree import check_case
from .validation import check_genetic_data

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class GeneticData:
    """Sequence presence flags, case-to-row mapping and pairwise mutation counts."""

    has_dna: np.ndarray
    id_in_dna: List[Optional[int]]
    D: np.ndarray

    def __post_init__(self):
        self.has_dna = np.asarray(self.has_dna, dtype=bool)
        self.id_in_dna = [None if row is None else int(row) for row in self.id_in_dna]
        self.D = np.asarray(self.D, dtype=np.int64)

    @property
    def n_cases(self) -> int:
        return len(self.has_dna)

    @property
    def n_sequences(self) -> int:
        return self.D.shape[0]

    def validate(self) -> "GeneticData":
        check_genetic_data(self.has_dna, self.id_in_dna, self.D)
        return self

    @classmethod
    @time_it("mutation-count matrix from alignment")
    def from_alignment(cls, sequences: Mapping[int, str], n_cases: int) -> "GeneticData":
        """Build the dataset from aligned sequences keyed by case identifier.

        Every differing position counts as one mutation.

        Args:
            sequences: Mapping of case identifier (1..n_cases) to aligned sequence
            n_cases: Number of cases in the outbreak, sequenced or not

        Raises:
            ValidationError: if sequences are empty, differ in length or are not ASCII
            InvalidArgumentError: if a key is not a case identifier
        """
        cases = sorted(sequences)
        for case in cases:
            check_case(case, n_cases)

        lengths = {len(sequences[case]) for case in cases}
        if len(lengths) > 1:
            raise ValidationError(
                f"Aligned sequences must share one length, got lengths {sorted(lengths)}",
                {"lengths": sorted(lengths)},
            )
        if lengths == {0}:
            raise ValidationError("Aligned sequences are empty", {"lengths": [0]})

        has_dna = np.zeros(n_cases, dtype=bool)
        id_in_dna: List[Optional[int]] = [None] * n_cases
        for row, case in enumerate(cases, start=1):
            has_dna[case - 1] = True
            id_in_dna[case - 1] = row

        n_seq = len(cases)
        if n_seq < 2:
            return cls(has_dna, id_in_dna, np.zeros((n_seq, n_seq), dtype=np.int64))

        length = lengths.pop()
        rows = []
        for case in cases:
            try:
                raw = sequences[case].upper().encode("ascii")
            except UnicodeEncodeError as exc:
                raise ValidationError(
                    f"Sequence of case {case} contains non-ASCII characters",
                    {"case": case},
                ) from exc
            rows.append(np.frombuffer(raw, dtype=np.uint8))
        encoded = np.vstack(rows)
        # hamming distance is the fraction of differing sites
        counts = np.rint(squareform(pdist(encoded, metric="hamming")) * length).astype(np.int64)
        logger.debug(f"Computed {n_seq}x{n_seq} mutation counts over {length} sites")

        return cls(has_dna, id_in_dna, counts)


def genetic_distance(data: GeneticData, i: int, j: int) -> int:
    """Number of mutations between the sequences of cases ``i`` and ``j``.

    Raises:
        PreconditionViolationError: if either case has no sequence
        InvalidArgumentError: if a case index is outside 1..N
    """
    slot_i = check_case(i, data.n_cases)
    slot_j = check_case(j, data.n_cases)

    if not (data.has_dna[slot_i] and data.has_dna[slot_j]):
        missing = [case for case, slot in ((i, slot_i), (j, slot_j)) if not data.has_dna[slot]]
        raise PreconditionViolationError(
            "Trying to get genetic distances between missing sequences.",
            {"cases_without_sequence": missing},
        )

    return int(data.D[data.id_in_dna[slot_i] - 1, data.id_in_dna[slot_j] - 1])
