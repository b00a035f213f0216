import logging

import numpy as np
import pytest

from src.ahp import create_default_matrix, update_matrix
from src.data import CRITERIA, PHONE_DATA, PHONES
from src.errors import InvalidComparisonError
from src.pipeline import evaluate, format_weights


def _inconsistent(matrix):
    matrix = update_matrix(matrix, 0, 1, 9)
    matrix = update_matrix(matrix, 1, 2, 9)
    return update_matrix(matrix, 2, 0, 9)


def test_default_matrix_ranks_catalog():
    result = evaluate(create_default_matrix(CRITERIA), CRITERIA, PHONE_DATA)
    assert result.ranked
    assert result.consistency.is_consistent
    assert len(result.ranking) == len(PHONES)
    # raw sums are dominated by price
    assert result.best == "Motorola razr+"
    assert format_weights(CRITERIA, result.weights) == {c.name: "0.20" for c in CRITERIA}


def test_inconsistent_matrix_keeps_previous_ranking(caplog):
    matrix = create_default_matrix(CRITERIA)
    first = evaluate(matrix, CRITERIA, PHONE_DATA)

    with caplog.at_level(logging.WARNING, logger="src.pipeline"):
        second = evaluate(_inconsistent(matrix), CRITERIA, PHONE_DATA, previous=first)

    assert not second.ranked
    assert not second.consistency.is_consistent
    assert second.ranking == first.ranking
    assert second.best == first.best
    assert np.isclose(second.weights.sum(), 1.0)
    assert "inconsistent" in caplog.text


def test_inconsistent_without_previous_has_no_ranking():
    result = evaluate(_inconsistent(create_default_matrix(CRITERIA)), CRITERIA, PHONE_DATA)
    assert not result.ranked
    assert result.ranking == []
    assert result.best is None


def test_rejects_broken_matrix():
    matrix = create_default_matrix(CRITERIA)
    matrix[0, 1] = 4
    with pytest.raises(InvalidComparisonError):
        evaluate(matrix, CRITERIA, PHONE_DATA)


def test_matrix_size_must_match_criteria():
    with pytest.raises(ValueError):
        evaluate(create_default_matrix(CRITERIA[:3]), CRITERIA, PHONE_DATA)


def test_last_ranking_survives_repeated_inconsistent_edits():
    matrix = create_default_matrix(CRITERIA)
    result = evaluate(matrix, CRITERIA, PHONE_DATA)
    good = result.ranking

    matrix = _inconsistent(matrix)
    for value in (7, 8, 9):
        matrix = update_matrix(matrix, 3, 4, value)
        result = evaluate(matrix, CRITERIA, PHONE_DATA, previous=result)
        assert not result.ranked
        assert result.ranking == good
        assert result.best == "Motorola razr+"
