import logging
import math
import operator
from typing import List, NamedTuple, Optional, Sequence, Tuple

import numpy as np

from .errors import InvalidComparisonError, UnsupportedCriteriaCountError


logger = logging.getLogger(__name__)

PREFERENCE_SCALE = {
    1: "Equal importance",
    2: "Intermediate value between 1 and 3",
    3: "Moderate importance of one over another",
    4: "Intermediate value between 3 and 5",
    5: "Essential or strong importance",
    6: "Intermediate value between 5 and 7",
    7: "Very strong importance",
    8: "Intermediate value between 7 and 9",
    9: "Extreme importance",
}
RANDOM_INDEX = {1: 0.0, 2: 0.0, 3: 0.58, 4: 0.9, 5: 1.12, 6: 1.24, 7: 1.32, 8: 1.41, 9: 1.45}
CONSISTENCY_THRESHOLD = 0.10
RECIPROCAL_TOLERANCE = 1e-9


class Criterion(NamedTuple):
    name: str
    importance: float = 1.0
    key: Optional[str] = None

    @property
    def attribute_key(self) -> str:
        return (self.key or self.name).lower()


class ConsistencyReport(NamedTuple):
    consistency_index: float
    consistency_ratio: float
    is_consistent: bool


def scale_options() -> List[Tuple[float, str]]:
    """Values a UI may offer for one cell, reciprocals first, with labels."""
    options = []
    for value in sorted(PREFERENCE_SCALE, reverse=True):
        if value == 1:
            continue
        options.append((1.0 / value, f"1/{value} - {PREFERENCE_SCALE[value]} (reciprocal)"))
    for value in sorted(PREFERENCE_SCALE):
        options.append((float(value), f"{value} - {PREFERENCE_SCALE[value]}"))
    return options


def create_default_matrix(criteria: Sequence[Criterion]) -> np.ndarray:
    n = len(criteria)
    return np.ones((n, n), dtype=float)


def update_matrix(matrix: np.ndarray, row: int, col: int, value: float) -> np.ndarray:
    n = matrix.shape[0]
    if isinstance(row, bool) or isinstance(col, bool):
        raise InvalidComparisonError(f"Cell indices must be integers, got ({row!r}, {col!r})")
    try:
        row, col = operator.index(row), operator.index(col)
    except TypeError as exc:
        raise InvalidComparisonError(f"Cell indices must be integers, got ({row!r}, {col!r})") from exc
    if not (0 <= row < n and 0 <= col < n):
        raise InvalidComparisonError(f"Cell ({row}, {col}) is outside a {n}x{n} matrix")
    if row == col:
        raise InvalidComparisonError("Diagonal entries are fixed at 1")
    try:
        value = float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidComparisonError(f"Comparison value must be a number, got {value!r}") from exc
    if not math.isfinite(value) or value <= 0:
        raise InvalidComparisonError(f"Comparison value must be positive and finite, got {value}")

    updated = matrix.copy()
    updated[row, col] = value
    updated[col, row] = 1.0 / value
    return updated


def validate_matrix(matrix: np.ndarray) -> None:
    if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
        raise InvalidComparisonError("Pairwise matrix must be square")
    if matrix.size == 0:
        return
    if not np.all(np.isfinite(matrix)) or np.any(matrix <= 0):
        raise InvalidComparisonError("Pairwise matrix entries must be positive and finite")
    if not np.allclose(np.diag(matrix), 1.0, rtol=0, atol=RECIPROCAL_TOLERANCE):
        raise InvalidComparisonError("Pairwise matrix diagonal must be 1")
    if not np.allclose(matrix * matrix.T, 1.0, rtol=0, atol=RECIPROCAL_TOLERANCE):
        raise InvalidComparisonError("Pairwise matrix is not reciprocal")


def calculate_weights(matrix: np.ndarray) -> np.ndarray:
    """Approximate the principal eigenvector.

    Rows are normalized by their sums, then each column of the normalized
    matrix is averaged. The result always sums to 1 for N >= 1.
    """
    if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
        raise ValueError("Pairwise matrix must be square")
    n = matrix.shape[0]
    if n == 0:
        return np.zeros(0, dtype=float)

    row_sums = matrix.sum(axis=1)
    assert np.all(row_sums > 0), "corrupted pairwise matrix: zero row sum"
    normalized = matrix / row_sums[:, np.newaxis]
    weights = normalized.sum(axis=0) / n
    logger.debug("Calculated weights: %s", weights)
    return weights


def calculate_consistency(
    matrix: np.ndarray, weights: np.ndarray, random_index: Optional[float] = None
) -> ConsistencyReport:
    n = matrix.shape[0]
    if n <= 1:
        return ConsistencyReport(0.0, 0.0, True)

    if random_index is None:
        if n not in RANDOM_INDEX:
            raise UnsupportedCriteriaCountError(n)
        random_index = RANDOM_INDEX[n]
    elif not math.isfinite(random_index) or random_index <= 0:
        raise UnsupportedCriteriaCountError(n, f"Random index must be positive and finite, got {random_index}")

    # original column sums weighted by the derived weights
    lambda_max = float(np.dot(weights, matrix.sum(axis=0)))
    ci = (lambda_max - n) / (n - 1)
    # the table has RI = 0 for N = 2, where any reciprocal matrix is consistent
    cr = ci / random_index if random_index > 0 else 0.0
    report = ConsistencyReport(ci, cr, cr < CONSISTENCY_THRESHOLD)
    logger.debug("lambda_max=%.4f CI=%.4f RI=%.2f CR=%.4f", lambda_max, ci, random_index, cr)
    return report
