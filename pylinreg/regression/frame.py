"""
Model frame: data frame -> numeric design matrix.

ModelFrame is the encoding layer that sits in front of the regression
engine. It knows about variable names and categorical levels; the engine
only ever sees the numeric matrix it produces.

Encoding rules (R's model.matrix with treatment contrasts):
    - '(Intercept)' column of ones when intercept=True
    - numeric predictors map to one column each, named after the variable
    - categorical predictors (object, string, bool, category dtypes) get one
      indicator column per level except the first, named '<var><level>'
    - without an intercept the first categorical predictor keeps all levels

The levels learned at fit time are stored so new data is encoded
identically at predict time.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any
import numpy as np
import pandas as pd
from numpy.typing import NDArray

from pylinreg.core.exceptions import (
    EmptyInputError,
    IncompatibleDesignError,
    MissingValueError,
    ValidationError,
)


INTERCEPT_NAME = '(Intercept)'


@dataclass(frozen=True)
class ModelFrame:
    """
    Learned encoding from a data frame to a design matrix.

    Construct via ModelFrame.learn(), not directly.

    Attributes:
        response: Name of the response column
        predictors: Predictor variable names, in design order
        intercept: Whether an intercept column is prepended
        levels: All levels of each categorical predictor, as seen at fit time
            (read-only mapping)
        contrasts: Levels of each categorical predictor that get a column
        column_names: Names of the resulting design matrix columns
    """
    response: str
    predictors: tuple[str, ...]
    intercept: bool
    levels: Mapping[str, tuple[Any, ...]]
    contrasts: Mapping[str, tuple[Any, ...]]
    column_names: tuple[str, ...]

    @classmethod
    def learn(
        cls,
        data: pd.DataFrame,
        response: str,
        predictors: str | Sequence[str] | None = None,
        *,
        intercept: bool = True,
    ) -> ModelFrame:
        """
        Learn the encoding of a data frame.

        Args:
            data: Training data
            response: Response column
            predictors: Predictor column(s). If None, all columns except
                the response, in frame order.
            intercept: Prepend an intercept column

        Raises:
            EmptyInputError: If data is None or has no rows
            ValidationError: If a variable is not in data, the response is
                not numeric, a categorical predictor has a single level, or
                there are no predictors and no intercept
            MissingValueError: If any used column contains NA
        """
        if data is None:
            raise EmptyInputError("data: no data supplied")
        if not isinstance(data, pd.DataFrame):
            raise ValidationError(
                f"data: expected a pandas DataFrame, got {type(data).__name__}"
            )
        if len(data) == 0:
            raise EmptyInputError("data: empty data frame")

        if predictors is None:
            predictor_names = tuple(c for c in data.columns if c != response)
        elif isinstance(predictors, str):
            predictor_names = (predictors,)
        else:
            predictor_names = tuple(predictors)

        for var in (response, *predictor_names):
            if var not in data.columns:
                raise ValidationError(f"variable {var!r} not found in data")
        if response in predictor_names:
            raise ValidationError(f"response {response!r} is also listed as a predictor")
        if not intercept and not predictor_names:
            raise ValidationError(
                "model has no terms: no predictors and intercept=False"
            )

        _check_no_missing(data, (response, *predictor_names), 'data')

        if not _is_numeric(data[response]):
            raise ValidationError(
                f"response {response!r}: non-numeric dtype {data[response].dtype}"
            )

        levels: dict[str, tuple[Any, ...]] = {}
        for var in predictor_names:
            if _is_categorical(data[var]):
                lv = _levels_of(data[var])
                if len(lv) < 2:
                    raise ValidationError(
                        f"predictor {var!r}: categorical with a single level {lv!r}; "
                        f"contrasts need 2 or more levels"
                    )
                levels[var] = lv

        contrasts: dict[str, tuple[Any, ...]] = {}
        column_names = [INTERCEPT_NAME] if intercept else []
        full_rank_used = intercept
        for var in predictor_names:
            if var in levels:
                if full_rank_used:
                    contrasts[var] = levels[var][1:]
                else:
                    contrasts[var] = levels[var]
                    full_rank_used = True
                column_names.extend(f"{var}{_level_label(level)}" for level in contrasts[var])
            else:
                column_names.append(str(var))

        return cls(
            response=response,
            predictors=predictor_names,
            intercept=intercept,
            levels=MappingProxyType(levels),
            contrasts=MappingProxyType(contrasts),
            column_names=tuple(column_names),
        )

    def design_matrix(self, data: pd.DataFrame) -> NDArray[np.floating[Any]]:
        """
        Encode a data frame with the learned levels.

        The response column is not required.

        Raises:
            IncompatibleDesignError: If a predictor is missing, a categorical
                predictor has a level not seen at fit time, or a numeric
                predictor is no longer numeric
            MissingValueError: If any predictor contains NA
        """
        if not isinstance(data, pd.DataFrame):
            raise ValidationError(
                f"newdata: expected a pandas DataFrame, got {type(data).__name__}"
            )

        missing = [var for var in self.predictors if var not in data.columns]
        if missing:
            raise IncompatibleDesignError(
                f"variables in newdata do not match the model: missing {missing}",
                expected=self.predictors,
                actual=tuple(data.columns),
            )

        _check_no_missing(data, self.predictors, 'newdata')

        n = len(data)
        blocks: list[NDArray[np.floating[Any]]] = []
        if self.intercept:
            blocks.append(np.ones((n, 1), dtype=np.float64))

        for var in self.predictors:
            column = data[var]
            if var in self.levels:
                values = column.to_numpy(dtype=object)
                known = set(self.levels[var])
                unseen = [v for v in pd.unique(values) if v not in known]
                if unseen:
                    raise IncompatibleDesignError(
                        f"factor {var!r} has new levels {unseen}; "
                        f"levels at fit time: {list(self.levels[var])}"
                    )
                indicators = [(values == level) for level in self.contrasts[var]]
                blocks.append(np.column_stack(indicators).astype(np.float64))
            else:
                if not _is_numeric(column):
                    raise IncompatibleDesignError(
                        f"variable {var!r} was numeric at fit time, got dtype {column.dtype}"
                    )
                blocks.append(column.to_numpy(dtype=np.float64).reshape(-1, 1))

        return np.hstack(blocks)

    def response_vector(self, data: pd.DataFrame) -> NDArray[np.floating[Any]]:
        """Extract the response column as float64."""
        if self.response not in data.columns:
            raise ValidationError(f"variable {self.response!r} not found in data")
        return data[self.response].to_numpy(dtype=np.float64)


def _is_categorical(series: pd.Series) -> bool:
    if isinstance(series.dtype, pd.CategoricalDtype):
        return True
    if pd.api.types.is_bool_dtype(series):
        return True
    return not pd.api.types.is_numeric_dtype(series)


def _is_numeric(series: pd.Series) -> bool:
    return (
        pd.api.types.is_numeric_dtype(series)
        and not pd.api.types.is_bool_dtype(series)
        and not isinstance(series.dtype, pd.CategoricalDtype)
    )


def _level_label(level: Any) -> str:
    """Level as it appears in a column name; booleans print as R does."""
    if isinstance(level, (bool, np.bool_)):
        return 'TRUE' if level else 'FALSE'
    return str(level)


def _levels_of(series: pd.Series) -> tuple[Any, ...]:
    """Declared categories, else sorted unique values."""
    if isinstance(series.dtype, pd.CategoricalDtype):
        return tuple(series.cat.categories)
    values = pd.unique(series.to_numpy(dtype=object))
    try:
        return tuple(sorted(values))
    except TypeError:
        # Mixed, unorderable types
        return tuple(sorted(values, key=str))


def _check_no_missing(data: pd.DataFrame, columns: Sequence[str], name: str) -> None:
    counts = data[list(columns)].isna().sum()
    n_missing = int(counts.sum())
    if n_missing:
        where = {str(k): int(v) for k, v in counts.items() if v}
        raise MissingValueError(
            f"missing values in {name}: {where}",
            n_missing=n_missing,
        )
