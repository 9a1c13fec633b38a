"""Classifier protocol and adapters for pre-trained m6A models.

The predictor only needs an object with a ``predict_probabilities(table)``
method returning, per class label, one probability per row. Models trained
with scikit-learn or XGBoost do not speak that protocol directly; the
adapters here turn the assembled feature table into a numeric design matrix,
check it against the feature names the model was fit with, and reshape the
model output into a class-label keyed table.
"""

from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional, Protocol, Sequence, runtime_checkable

import numpy as np
import pandas as pd

from .config import NEGATIVE_LABEL, POSITIVE_LABEL
from .errors import MissingColumnError, SchemaMismatchError
from .logging_config import get_logger
from .schema import M6A_SCHEMA, FeatureSchema

logger = get_logger(__name__)


@runtime_checkable
class Classifier(Protocol):
    """Anything that can score an assembled m6A feature table."""

    def predict_probabilities(self, table: pd.DataFrame) -> Mapping[Any, Sequence[float]]:
        """Return a mapping from class label to per-row probabilities."""
        ...


def _count_positions(table: pd.DataFrame, schema: FeatureSchema) -> int:
    columns = set(table.columns)
    n = 0
    while f"{schema.position_prefix}{n + 1}" in columns:
        n += 1
    return n


def build_design_matrix(table: pd.DataFrame, schema: FeatureSchema = M6A_SCHEMA) -> pd.DataFrame:
    """Expand an assembled feature table into a float design matrix.

    Numeric columns are copied as floats. Every categorical and positional
    column becomes one indicator column per level of its fixed domain
    (``RNA_type_mRNA``, ``nt_pos1_A``, ...), so the matrix has the same
    columns for every batch. Missing categories give all-zero indicators.

    Args:
        table: Feature table with the schema's columns and encoded positions
        schema: Feature schema describing the table

    Returns:
        DataFrame aligned to ``table.index``

    Raises:
        SchemaMismatchError: If the table has no encoded positional columns
        MissingColumnError: If a numeric or categorical column is absent
    """
    n = _count_positions(table, schema)
    if n == 0:
        raise SchemaMismatchError(
            f"No encoded '{schema.position_prefix}*' columns in feature table"
        )

    missing = [c for c in schema.model_columns(n) if c not in table.columns]
    if missing:
        raise MissingColumnError(missing, table.columns)

    levels = dict(schema.categorical_columns)
    for column in schema.positional_columns(n):
        levels[column] = schema.position_levels

    parts = [table[list(schema.numeric_columns)].astype(float)]
    for column, column_levels in levels.items():
        column_values = table[column].astype(object)
        values = pd.Categorical(
            column_values.where(column_values.isin(list(column_levels))),
            categories=list(column_levels),
        )
        indicators = pd.get_dummies(values, prefix=column, prefix_sep="_", dtype=float)
        indicators.index = table.index
        parts.append(indicators)

    return pd.concat(parts, axis=1)


def align_features(design: pd.DataFrame, expected: Sequence[str]) -> pd.DataFrame:
    """Reorder design matrix columns to the order a model was fit with.

    Raises:
        SchemaMismatchError: If the column sets differ
    """
    expected = [str(name) for name in expected]
    expected_set = set(expected)
    missing = [name for name in expected if name not in design.columns]
    unexpected = [name for name in design.columns if name not in expected_set]
    if missing or unexpected:
        raise SchemaMismatchError(
            f"Feature mismatch with model: missing {missing}, unexpected {unexpected}"
        )
    return design[expected]


class DesignMatrixClassifier(ABC):
    """Base class for adapters around models that consume a design matrix."""

    def __init__(self, schema: FeatureSchema = M6A_SCHEMA):
        self.schema = schema

    @abstractmethod
    def expected_features(self) -> Optional[Sequence[str]]:
        """Feature names the wrapped model was fit with, if it recorded them."""
        pass

    @abstractmethod
    def _predict(self, design: pd.DataFrame) -> pd.DataFrame:
        """Score a design matrix, returning one column per class label."""
        pass

    def predict_probabilities(self, table: pd.DataFrame) -> pd.DataFrame:
        """Score an assembled feature table.

        Args:
            table: Feature table with encoded positional columns

        Returns:
            DataFrame indexed like ``table`` with one column per class label
        """
        design = build_design_matrix(table, self.schema)
        expected = self.expected_features()
        if expected is not None:
            design = align_features(design, expected)

        logger.debug(
            f"{type(self).__name__} scoring design matrix of shape {design.shape}"
        )
        return self._predict(design)


class SklearnClassifier(DesignMatrixClassifier):
    """Adapter for scikit-learn style estimators.

    The estimator must implement ``predict_proba`` and expose ``classes_``;
    it is expected to have been fit on :func:`build_design_matrix` output
    with ``"Positive"``/``"Negative"`` labels.

    Example:
        >>> from sklearn.ensemble import RandomForestClassifier
        >>> forest = RandomForestClassifier().fit(design, labels)
        >>> predict_batch(SklearnClassifier(forest), rows)
    """

    def __init__(self, estimator: Any, schema: FeatureSchema = M6A_SCHEMA):
        if not hasattr(estimator, "predict_proba"):
            raise TypeError(
                f"{type(estimator).__name__} does not implement predict_proba"
            )
        super().__init__(schema)
        self.estimator = estimator

    def expected_features(self) -> Optional[Sequence[str]]:
        names = getattr(self.estimator, "feature_names_in_", None)
        return None if names is None else list(names)

    def _predict(self, design: pd.DataFrame) -> pd.DataFrame:
        n_features = getattr(self.estimator, "n_features_in_", None)
        if n_features is not None and n_features != design.shape[1]:
            raise SchemaMismatchError(
                f"Model expects {n_features} features, design matrix has {design.shape[1]}"
            )

        # Estimators fit on plain arrays warn when given named columns
        data = design if self.expected_features() is not None else design.to_numpy()
        proba = self.estimator.predict_proba(data)
        return pd.DataFrame(proba, columns=list(self.estimator.classes_), index=design.index)


class XGBoostClassifier(DesignMatrixClassifier):
    """Adapter for a binary-logistic ``xgboost.Booster``.

    The booster's output is the probability of the positive class.
    """

    def __init__(self, booster: Any, schema: FeatureSchema = M6A_SCHEMA):
        try:
            import xgboost as xgb
            self.xgb = xgb
        except ImportError:
            raise ImportError(
                "XGBoost not installed. Install with: pip install m6a_predict[xgboost]"
            )

        super().__init__(schema)
        self.booster = booster

    def expected_features(self) -> Optional[Sequence[str]]:
        return self.booster.feature_names

    def _predict(self, design: pd.DataFrame) -> pd.DataFrame:
        n_features = self.booster.num_features()
        if n_features != design.shape[1]:
            raise SchemaMismatchError(
                f"Model expects {n_features} features, design matrix has {design.shape[1]}"
            )

        data = design if self.expected_features() is not None else design.to_numpy()
        dmatrix = self.xgb.DMatrix(data)
        probs_pos = np.asarray(self.booster.predict(dmatrix), dtype=float)
        return pd.DataFrame(
            {NEGATIVE_LABEL: 1 - probs_pos, POSITIVE_LABEL: probs_pos},
            index=design.index,
        )


def _is_xgboost_booster(model: Any) -> bool:
    cls = type(model)
    return cls.__module__.startswith("xgboost") and cls.__name__ == "Booster"


def as_classifier(model: Any, schema: FeatureSchema = M6A_SCHEMA) -> Classifier:
    """Return ``model`` as an object implementing the Classifier protocol.

    Objects that already expose ``predict_probabilities`` are returned
    unchanged. scikit-learn style estimators and xgboost boosters are
    wrapped in their adapter.

    Raises:
        TypeError: If the model is of none of these kinds
    """
    if hasattr(model, "predict_probabilities"):
        return model
    if _is_xgboost_booster(model):
        return XGBoostClassifier(model, schema)
    if hasattr(model, "predict_proba") and hasattr(model, "classes_"):
        return SklearnClassifier(model, schema)
    raise TypeError(
        f"Cannot use {type(model).__name__} as an m6A classifier: it needs "
        "predict_probabilities(), or predict_proba() and classes_"
    )
