"""Phonetically weighted Levenshtein distance between IPA sequences.

The edit cost of each cell is the phonetic distance between the two
phonemes meeting there rather than a flat 1, following "Using
Phonologically Weighted Levenshtein Distances for the Prediction of
Microscopic Intelligibility" (Fontan et al., 2016).

The boundary row and column are not zero-filled. Each holds the running
phonetic distance between consecutive symbols of its own sequence, seeded
with the distance between the two sequences' first symbols::

    "aek" -> [0, d(a, x), d(a, x) + d(a, e), d(a, x) + d(a, e) + d(e, k)]

There is no transposition term: a swapped pair of phonemes costs two
substitutions.
"""

import logging
from typing import Sequence

import numpy as np

from phonodist.errors import InvalidSymbol
from phonodist.inventory import PhoneticConfig
from phonodist.types import DELETE, INSERT, SAME, SUBSTITUTE, AlignmentStep

logger = logging.getLogger(__name__)


class WeightedAligner:
    """Weighted edit distance and alignment over a fixed phoneme inventory."""

    def __init__(self, config: PhoneticConfig):
        self.config = config

    def validate(self, seq: Sequence[str]) -> None:
        """Raise InvalidSymbol for the first symbol not in the inventory."""
        for symbol in seq:
            if not self.config.contains(symbol):
                raise InvalidSymbol(symbol, self.config.phonemes)

    def matrix(self, seq1: Sequence[str], seq2: Sequence[str]) -> np.ndarray:
        """Build the (len(seq2) + 1) x (len(seq1) + 1) cost matrix.

        Cell [i][j] is the cheapest way to turn the first j symbols of
        *seq1* into the first i symbols of *seq2*.
        """
        self.validate(seq1)
        self.validate(seq2)
        len1, len2 = len(seq1), len(seq2)
        cost = self.config.cost

        starting = cost(seq1[0], seq2[0]) if len1 and len2 else 0.0
        matrix = np.zeros((len2 + 1, len1 + 1), dtype=np.float64)
        matrix[0, :] = self._initial_distances(seq1, starting)[:len1 + 1]
        matrix[:, 0] = self._initial_distances(seq2, starting)[:len2 + 1]

        for i in range(1, len2 + 1):
            for j in range(1, len1 + 1):
                best = min(
                    matrix[i - 1, j],       # delete
                    matrix[i, j - 1],       # insert
                    matrix[i - 1, j - 1],   # substitute
                )
                matrix[i, j] = best + cost(seq1[j - 1], seq2[i - 1])

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Alignment matrix:\n" + format_matrix(matrix, seq1, seq2))
        return matrix

    def _initial_distances(self, seq: Sequence[str], starting: float) -> list[float]:
        """Boundary values for *seq*: 0, the first-pair distance, then chained neighbours."""
        distances = [0.0, starting]
        for k in range(1, len(seq)):
            distances.append(distances[-1] + self.config.cost(seq[k - 1], seq[k]))
        return distances

    def distance(self, seq1: Sequence[str], seq2: Sequence[str]) -> float:
        """Total weighted distance from *seq1* to *seq2*."""
        if len(seq1) == 0 and len(seq2) == 0:
            return 0.0
        matrix = self.matrix(seq1, seq2)
        return float(matrix[len(seq2), len(seq1)])

    def align(self, seq1: Sequence[str], seq2: Sequence[str]) -> list[AlignmentStep]:
        """Reconstruct the edit operations behind ``distance(seq1, seq2)``.

        Walks from the bottom-right cell back to (0, 0), each time moving to
        the cheapest in-bounds predecessor. Ties prefer substitute, then
        delete, then insert. A step is labelled "same" when its cell value
        equals the predecessor's, i.e. the move cost nothing.

        Returns the steps in forward order.
        """
        if len(seq1) == 0 and len(seq2) == 0:
            return []
        matrix = self.matrix(seq1, seq2)

        steps: list[AlignmentStep] = []
        i, j = len(seq2), len(seq1)
        while i > 0 or j > 0:
            candidates = [
                (SUBSTITUTE, i - 1, j - 1),
                (DELETE, i - 1, j),
                (INSERT, i, j - 1),
            ]
            operation, prev_i, prev_j = min(
                (c for c in candidates if c[1] >= 0 and c[2] >= 0),
                key=lambda c: matrix[c[1], c[2]],
            )
            current = float(matrix[i, j])
            previous = float(matrix[prev_i, prev_j])
            steps.append(AlignmentStep(
                operation=SAME if previous == current else operation,
                cost=current,
                row=i,
                column=j,
                source=seq1[j - 1] if prev_j < j else None,
                target=seq2[i - 1] if prev_i < i else None,
            ))
            i, j = prev_i, prev_j

        steps.reverse()
        return steps


def distance(config: PhoneticConfig, seq1: Sequence[str], seq2: Sequence[str]) -> float:
    """Weighted phonetic distance between two phoneme sequences."""
    return WeightedAligner(config).distance(seq1, seq2)


def align(config: PhoneticConfig, seq1: Sequence[str], seq2: Sequence[str]) -> list[AlignmentStep]:
    """Alignment steps for two phoneme sequences."""
    return WeightedAligner(config).align(seq1, seq2)


def format_matrix(matrix: np.ndarray, seq1: Sequence[str], seq2: Sequence[str]) -> str:
    """Render the matrix as text, for exploring the algorithm by hand."""
    lines = ["           " + "".join(str(s).ljust(9) for s in seq1)]
    for row_index, row in enumerate(matrix):
        label = "  " if row_index == 0 else f"{seq2[row_index - 1]} "
        cells = " ".join(f"{value:.6f}"[:8].ljust(8, "0") for value in row)
        lines.append(f"{label}{cells}")
    return "\n".join(lines)
