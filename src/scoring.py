import logging
import math
from typing import List, Mapping, NamedTuple, Optional, Sequence

import numpy as np
import pandas as pd

from .ahp import Criterion
from .errors import MissingAttributeError


logger = logging.getLogger(__name__)


class ScoredAlternative(NamedTuple):
    id: str
    score: float


def _lookup(attributes: Mapping[str, float], alternative: str, criterion: Criterion) -> float:
    lowered = {str(k).lower(): v for k, v in attributes.items()}
    value = lowered.get(criterion.attribute_key)
    if value is None or isinstance(value, bool):
        raise MissingAttributeError(alternative, criterion.name)
    try:
        value = float(value)
    except (TypeError, ValueError):
        raise MissingAttributeError(alternative, criterion.name) from None
    if math.isnan(value):
        raise MissingAttributeError(alternative, criterion.name)
    return value


def rank_alternatives(
    weights: Sequence[float],
    criteria: Sequence[Criterion],
    alternatives: Mapping[str, Mapping[str, float]],
) -> List[ScoredAlternative]:
    """Score each alternative by the weighted sum of its raw attribute values.

    Attribute units are not rescaled across criteria. The ranking is sorted by
    descending score; equal scores keep the input order of ``alternatives``.
    """
    weights = np.asarray(weights, dtype=float)
    if len(weights) != len(criteria):
        raise ValueError(f"Got {len(weights)} weights for {len(criteria)} criteria")

    scores = []
    for alternative, attributes in alternatives.items():
        values = np.array([_lookup(attributes, alternative, c) for c in criteria], dtype=float)
        scores.append(ScoredAlternative(alternative, float(np.dot(weights, values))))

    ranking = sorted(scores, key=lambda item: item.score, reverse=True)
    logger.debug("Ranked %d alternatives", len(ranking))
    return ranking


def best_alternative(ranking: Sequence[ScoredAlternative]) -> Optional[str]:
    if not ranking:
        return None
    return ranking[0].id


def ranking_to_frame(ranking: Sequence[ScoredAlternative]) -> pd.DataFrame:
    if not ranking:
        return pd.DataFrame(columns=["alternative", "score"])
    return pd.DataFrame([{"alternative": r.id, "score": r.score} for r in ranking])
