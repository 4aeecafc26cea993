"""
Tests for rank screening and Gram matrix inversion.
"""

import numpy as np
import pytest

from pylinreg.core.exceptions import SingularSystemError
from pylinreg.core.compute.linalg import (
    check_full_column_rank,
    column_rank,
    invert_gram,
)
from pylinreg.core.compute.tolerances import (
    CPU_FP64,
    CPU_FP64_ILL_CONDITIONED,
    select_tolerance,
)


class TestColumnRank:

    def test_full_rank(self, rng):
        X = rng.standard_normal((20, 4))
        assert column_rank(X) == 4
        assert check_full_column_rank(X) == 4

    def test_duplicate_column(self, rng):
        x = rng.standard_normal(20)
        X = np.column_stack([np.ones(20), x, x])
        assert column_rank(X) == 2

    def test_rank_deficient_raises(self, rng):
        x = rng.standard_normal(20)
        X = np.column_stack([np.ones(20), x, 3.0 * x])
        with pytest.raises(SingularSystemError, match="rank 2, expected 3") as exc_info:
            check_full_column_rank(X)
        assert exc_info.value.rank == 2
        assert exc_info.value.expected_rank == 3


class TestInvertGram:

    def test_known_inverse(self):
        G = np.array([[4.0, 14.0], [14.0, 54.0]])
        result = invert_gram(G)
        np.testing.assert_allclose(result.inverse, [[2.7, -0.7], [-0.7, 0.2]], rtol=1e-12)

    def test_inverse_is_symmetric(self, rng):
        X = rng.standard_normal((50, 5))
        result = invert_gram(X.T @ X)
        np.testing.assert_array_equal(result.inverse, result.inverse.T)

    def test_identity_product(self, rng):
        X = rng.standard_normal((50, 5))
        G = X.T @ X
        result = invert_gram(G)
        np.testing.assert_allclose(G @ result.inverse, np.eye(5), atol=1e-10)

    def test_condition_number_reported(self):
        result = invert_gram(np.diag([1.0, 100.0]))
        assert result.condition_number == pytest.approx(100.0)

    def test_exactly_singular_raises(self):
        G = np.array([[1.0, 2.0], [2.0, 4.0]])
        with pytest.raises(SingularSystemError, match="singular") as exc_info:
            invert_gram(G)
        assert exc_info.value.matrix_name == "X'X"

    def test_computationally_singular_raises(self):
        G = np.diag([1.0, 1e-20])
        with pytest.raises(SingularSystemError, match="computationally singular"):
            invert_gram(G)


class TestTolerances:

    def test_select_tolerance(self):
        assert select_tolerance() is CPU_FP64
        assert select_tolerance(is_ill_conditioned=True) is CPU_FP64_ILL_CONDITIONED
