"""
Tests for ModelFrame encoding of data frames.
"""

import numpy as np
import pandas as pd
import pytest

from pylinreg.regression import ModelFrame, RegressionDesign, fit
from pylinreg.core.exceptions import (
    EmptyInputError,
    IncompatibleDesignError,
    MissingValueError,
    ValidationError,
)


@pytest.fixture
def mtcars_factor(mtcars):
    """mtcars with cyl as a string factor."""
    data = mtcars.copy()
    data['cyl'] = data['cyl'].astype(str)
    return data


class TestLearn:

    def test_numeric_predictors(self, mtcars):
        frame = ModelFrame.learn(mtcars, 'mpg', ['wt', 'cyl'])
        assert frame.column_names == ('(Intercept)', 'wt', 'cyl')
        assert frame.levels == {}

    def test_treatment_coding(self, mtcars_factor):
        frame = ModelFrame.learn(mtcars_factor, 'mpg', ['wt', 'cyl'])
        assert frame.column_names == ('(Intercept)', 'wt', 'cyl6', 'cyl8')
        assert frame.levels['cyl'] == ('4', '6', '8')
        assert frame.contrasts['cyl'] == ('6', '8')

    def test_predictors_default_to_other_columns(self, mtcars):
        frame = ModelFrame.learn(mtcars, 'mpg')
        assert frame.predictors == ('cyl', 'wt')

    def test_single_predictor_string(self, mtcars):
        frame = ModelFrame.learn(mtcars, 'mpg', 'wt')
        assert frame.column_names == ('(Intercept)', 'wt')

    def test_no_intercept_keeps_all_levels(self, mtcars_factor):
        frame = ModelFrame.learn(mtcars_factor, 'mpg', ['cyl', 'wt'], intercept=False)
        assert frame.column_names == ('cyl4', 'cyl6', 'cyl8', 'wt')

    def test_declared_category_order(self, mtcars):
        data = mtcars.copy()
        data['cyl'] = pd.Categorical(data['cyl'].astype(str), categories=['8', '6', '4'])
        frame = ModelFrame.learn(data, 'mpg', ['cyl'])
        assert frame.column_names == ('(Intercept)', 'cyl6', 'cyl4')

    def test_bool_predictor_is_categorical(self, mtcars):
        data = mtcars.copy()
        data['heavy'] = data['wt'] > 3.5
        frame = ModelFrame.learn(data, 'mpg', ['heavy'])
        assert frame.column_names == ('(Intercept)', 'heavyTRUE')

    def test_variable_not_found(self, mtcars):
        with pytest.raises(ValidationError, match="not found"):
            ModelFrame.learn(mtcars, 'mpg', ['hp'])

    def test_response_as_predictor(self, mtcars):
        with pytest.raises(ValidationError, match="also listed"):
            ModelFrame.learn(mtcars, 'mpg', ['mpg', 'wt'])

    def test_non_numeric_response(self, mtcars_factor):
        with pytest.raises(ValidationError, match="non-numeric"):
            ModelFrame.learn(mtcars_factor, 'cyl', ['wt'])

    def test_single_level_factor(self, mtcars):
        data = mtcars.copy()
        data['make'] = 'x'
        with pytest.raises(ValidationError, match="single level"):
            ModelFrame.learn(data, 'mpg', ['wt', 'make'])

    def test_missing_values(self, mtcars):
        data = mtcars.copy()
        data.loc[3, 'wt'] = np.nan
        with pytest.raises(MissingValueError) as exc_info:
            ModelFrame.learn(data, 'mpg', ['wt'])
        assert exc_info.value.n_missing == 1

    def test_empty_frame(self, mtcars):
        with pytest.raises(EmptyInputError):
            ModelFrame.learn(mtcars.iloc[:0], 'mpg', ['wt'])

    def test_no_terms(self, mtcars):
        with pytest.raises(ValidationError, match="no terms"):
            ModelFrame.learn(mtcars, 'mpg', [], intercept=False)

    def test_intercept_only(self, mtcars):
        frame = ModelFrame.learn(mtcars, 'mpg', [])
        assert frame.column_names == ('(Intercept)',)
        np.testing.assert_array_equal(frame.design_matrix(mtcars), np.ones((32, 1)))

    def test_levels_read_only(self, mtcars_factor):
        frame = ModelFrame.learn(mtcars_factor, 'mpg', ['wt', 'cyl'])
        with pytest.raises(TypeError):
            frame.levels['cyl'] = ('4',)
        with pytest.raises(TypeError):
            frame.contrasts['cyl'] = ()
        assert frame.levels['cyl'] == ('4', '6', '8')

    def test_bool_levels_encode_new_data(self, mtcars):
        data = mtcars.copy()
        data['heavy'] = data['wt'] > 3.5
        frame = ModelFrame.learn(data, 'mpg', ['heavy'])
        X = frame.design_matrix(pd.DataFrame({'heavy': [True, False]}))
        np.testing.assert_array_equal(X, [[1.0, 1.0], [1.0, 0.0]])

    def test_not_a_frame(self):
        with pytest.raises(ValidationError, match="DataFrame"):
            ModelFrame.learn({'y': [1.0]}, 'y')


class TestDesignMatrix:

    def test_indicator_columns(self, mtcars_factor):
        frame = ModelFrame.learn(mtcars_factor, 'mpg', ['wt', 'cyl'])
        X = frame.design_matrix(mtcars_factor)
        assert X.shape == (32, 4)
        np.testing.assert_array_equal(X[:, 0], np.ones(32))
        np.testing.assert_array_equal(X[:, 1], mtcars_factor['wt'].to_numpy())
        np.testing.assert_array_equal(X[:, 2], (mtcars_factor['cyl'] == '6').to_numpy())
        np.testing.assert_array_equal(X[:, 3], (mtcars_factor['cyl'] == '8').to_numpy())

    def test_new_data_subset_of_levels(self, mtcars_factor):
        frame = ModelFrame.learn(mtcars_factor, 'mpg', ['wt', 'cyl'])
        new = pd.DataFrame({'wt': [3.0], 'cyl': ['4']})
        X = frame.design_matrix(new)
        np.testing.assert_array_equal(X, [[1.0, 3.0, 0.0, 0.0]])

    def test_unseen_level(self, mtcars_factor):
        frame = ModelFrame.learn(mtcars_factor, 'mpg', ['wt', 'cyl'])
        new = pd.DataFrame({'wt': [3.0], 'cyl': ['12']})
        with pytest.raises(IncompatibleDesignError, match="new levels"):
            frame.design_matrix(new)

    def test_missing_predictor(self, mtcars_factor):
        frame = ModelFrame.learn(mtcars_factor, 'mpg', ['wt', 'cyl'])
        with pytest.raises(IncompatibleDesignError, match="missing"):
            frame.design_matrix(pd.DataFrame({'wt': [3.0]}))

    def test_numeric_became_text(self, mtcars):
        frame = ModelFrame.learn(mtcars, 'mpg', ['wt'])
        with pytest.raises(IncompatibleDesignError, match="numeric"):
            frame.design_matrix(pd.DataFrame({'wt': ['heavy']}))


class TestFromDataFrame:

    def test_design_carries_frame(self, mtcars_factor):
        design = RegressionDesign.from_dataframe(mtcars_factor, 'mpg', ['wt', 'cyl'])
        assert design.frame is not None
        assert design.column_names == ('(Intercept)', 'wt', 'cyl6', 'cyl8')
        assert design.n == 32
        assert design.p == 4

    def test_fit_keys_coefficients_by_encoded_names(self, mtcars_factor):
        result = fit(RegressionDesign.from_dataframe(mtcars_factor, 'mpg', ['wt', 'cyl']))
        assert list(result.coef.index) == ['(Intercept)', 'wt', 'cyl6', 'cyl8']
        assert list(result.coefficient_table().index) == list(result.coef.index)

    def test_no_intercept_full_dummies_span_intercept(self, mtcars_factor):
        with_int = fit(RegressionDesign.from_dataframe(mtcars_factor, 'mpg', ['cyl', 'wt']))
        without = fit(RegressionDesign.from_dataframe(
            mtcars_factor, 'mpg', ['cyl', 'wt'], intercept=False
        ))
        # Same column space, so identical fitted values
        np.testing.assert_allclose(without.fitted_values, with_int.fitted_values,
                                   rtol=1e-10)
        assert without.coef['cyl4'] == pytest.approx(with_int.coef['(Intercept)'], rel=1e-9)

    def test_predict_from_raw_frame(self, mtcars_factor):
        result = fit(RegressionDesign.from_dataframe(mtcars_factor, 'mpg', ['wt', 'cyl']))
        new = pd.DataFrame({'wt': [2.5, 3.5], 'cyl': ['8', '6']})
        coef = result.coef
        expected = [
            coef['(Intercept)'] + 2.5 * coef['wt'] + coef['cyl8'],
            coef['(Intercept)'] + 3.5 * coef['wt'] + coef['cyl6'],
        ]
        np.testing.assert_allclose(result.predict(new), expected, rtol=1e-12)
