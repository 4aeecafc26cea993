"""
Regression test fixtures.
"""

import numpy as np
import pytest

from pylinreg.regression import fit


@pytest.fixture
def small_model(small_data):
    """Fitted model for the hand-solvable four-point dataset."""
    X, y = small_data
    return fit(X, y, column_names=['(Intercept)', 'x'])


@pytest.fixture
def simple_model(simple_regression_data):
    X, y, _ = simple_regression_data
    return fit(X, y)


@pytest.fixture
def new_rows(rng):
    """Ten new rows for the three-column simple_regression_data design."""
    return np.column_stack([np.ones(10), rng.standard_normal((10, 2)) * 2.0])
