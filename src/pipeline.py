import logging
from typing import Dict, List, Mapping, NamedTuple, Optional, Sequence

import numpy as np

from .ahp import ConsistencyReport, Criterion, calculate_consistency, calculate_weights, validate_matrix
from .scoring import ScoredAlternative, best_alternative, rank_alternatives


logger = logging.getLogger(__name__)


class AHPResult(NamedTuple):
    weights: np.ndarray
    consistency: ConsistencyReport
    ranking: List[ScoredAlternative]
    best: Optional[str]
    ranked: bool


def evaluate(
    matrix: np.ndarray,
    criteria: Sequence[Criterion],
    alternatives: Mapping[str, Mapping[str, float]],
    previous: Optional[AHPResult] = None,
    random_index: Optional[float] = None,
) -> AHPResult:
    """Run weights, consistency and ranking for the current matrix.

    Meant to be called after every comparison update. An inconsistent matrix
    is not an error: ranking is skipped, a warning is logged and the ranking
    of ``previous`` (if any) is carried over with ``ranked=False``.
    """
    if matrix.shape[0] != len(criteria):
        raise ValueError(f"Matrix is {matrix.shape[0]}x{matrix.shape[0]} but there are {len(criteria)} criteria")
    validate_matrix(matrix)

    weights = calculate_weights(matrix)
    report = calculate_consistency(matrix, weights, random_index=random_index)

    if not report.is_consistent:
        logger.warning(
            "Pairwise comparison matrix is inconsistent (CR=%.2f). Please review your comparisons.",
            report.consistency_ratio,
        )
        ranking = list(previous.ranking) if previous is not None else []
        return AHPResult(weights, report, ranking, best_alternative(ranking), False)

    ranking = rank_alternatives(weights, criteria, alternatives)
    best = best_alternative(ranking)
    logger.info("Best alternative: %s (CR=%.2f)", best, report.consistency_ratio)
    return AHPResult(weights, report, ranking, best, True)


def format_weights(criteria: Sequence[Criterion], weights: Sequence[float]) -> Dict[str, str]:
    return {c.name: f"{float(w):.2f}" for c, w in zip(criteria, weights)}
