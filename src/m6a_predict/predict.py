"""m6A site prediction from tabular site features.

A feature table holds one candidate site per row with the columns of
:data:`~m6a_predict.schema.M6A_SCHEMA`. Prediction normalizes the
categorical columns to their fixed levels, appends the positional encoding
of the DNA 5-mer, scores the table with a pre-trained classifier and
thresholds the positive-class probability.
"""

import math
import numbers
from dataclasses import dataclass
from typing import Any, Mapping, Union

import numpy as np
import pandas as pd

from .categories import RNA_REGIONS, RNA_TYPES, RNARegion, RNAType, check_on_invalid, coerce_categorical
from .classifier import as_classifier
from .config import (
    DEFAULT_ON_INVALID,
    DEFAULT_THRESHOLD,
    NEGATIVE_LABEL,
    POSITIVE_LABEL,
    PROB_COLUMN,
    STATUS_COLUMN,
)
from .encoding import encode
from .errors import SchemaMismatchError
from .logging_config import get_logger
from .schema import M6A_SCHEMA, FeatureSchema

logger = get_logger(__name__)


@dataclass(frozen=True)
class M6APrediction:
    """Prediction for a single site.

    Attributes:
        prob: Predicted probability of m6A modification
        status: "Positive" if prob is above the threshold, else "Negative"
    """

    prob: float
    status: str


def _check_threshold(threshold: float) -> None:
    if isinstance(threshold, bool) or not isinstance(threshold, numbers.Real):
        raise ValueError(f"threshold must be a number, got {threshold!r}")
    if math.isnan(threshold):
        raise ValueError("threshold must not be NaN")


def _positive_probabilities(output: Mapping[Any, Any], n_rows: int) -> np.ndarray:
    """Pull the positive-class column out of a classifier result."""
    if POSITIVE_LABEL not in output:
        raise SchemaMismatchError(
            f"Classifier output has no '{POSITIVE_LABEL}' class; got {list(output.keys())}"
        )

    probs = np.asarray(output[POSITIVE_LABEL], dtype=float).reshape(-1)
    if probs.shape[0] != n_rows:
        raise SchemaMismatchError(
            f"Classifier returned {probs.shape[0]} probabilities for {n_rows} rows"
        )
    return probs


def predict_batch(
    classifier: Any,
    rows: Union[pd.DataFrame, Any],
    threshold: float = DEFAULT_THRESHOLD,
    on_invalid: str = DEFAULT_ON_INVALID,
    keep_encoded: bool = True,
    schema: FeatureSchema = M6A_SCHEMA,
) -> pd.DataFrame:
    """Predict m6A probability and status for every row of a feature table.

    Args:
        classifier: Model implementing ``predict_probabilities``, or a
            scikit-learn estimator / xgboost booster (see ``as_classifier``)
        rows: Feature table, or anything ``pandas.DataFrame`` accepts
            (e.g. a list of dicts). It is not modified.
        threshold: Probabilities strictly above it are "Positive". Values
            outside [0, 1] are allowed and label every row the same way
        on_invalid: "raise" to reject out-of-domain categorical values and
            bases, "missing" to turn them into missing categories
        keep_encoded: Keep the nt_pos* columns in the returned table
        schema: Feature schema the classifier was trained against

    Returns:
        Copy of the normalized input with predicted_m6A_prob and
        predicted_m6A_status appended, in input row order

    Raises:
        ValueError: If threshold is not a number, or is NaN
        MissingColumnError: If a required column is absent
        InvalidCategoryError: If a categorical value or base is out of domain
            and on_invalid is "raise"
        ShapeMismatchError: If the DNA k-mers differ in length
        SchemaMismatchError: If the classifier input or output does not fit
            the schema

    Example:
        >>> rows = [{"gc_content": 0.5, "RNA_type": "mRNA", "RNA_region": "CDS",
        ...          "exon_length": 1000, "distance_to_junction": 50,
        ...          "evolutionary_conservation": 0.7, "DNA_5mer": "ATCGA"}]
        >>> predict_batch(model, rows)[["predicted_m6A_prob", "predicted_m6A_status"]]
    """
    _check_threshold(threshold)
    check_on_invalid(on_invalid)

    table = rows.copy() if isinstance(rows, pd.DataFrame) else pd.DataFrame(rows)
    schema.validate_columns(table)
    model = as_classifier(classifier, schema)

    for column, levels in schema.categorical_columns.items():
        table[column] = coerce_categorical(table[column], levels, column, on_invalid)

    encoded = encode(
        table[schema.sequence_column], on_invalid=on_invalid, prefix=schema.position_prefix
    )
    encoded.index = table.index

    # Re-scoring an earlier result must not duplicate derived columns
    derived = [*encoded.columns, PROB_COLUMN, STATUS_COLUMN]
    table = table.drop(columns=[c for c in derived if c in table.columns])
    features = pd.concat([table, encoded], axis=1)

    logger.info(f"Predicting m6A status for {len(features)} site(s)")
    probs = _positive_probabilities(model.predict_probabilities(features), len(features))

    result = features if keep_encoded else table
    result[PROB_COLUMN] = probs
    result[STATUS_COLUMN] = np.where(probs > threshold, POSITIVE_LABEL, NEGATIVE_LABEL)

    n_positive = int((probs > threshold).sum())
    logger.debug(f"{n_positive}/{len(result)} site(s) above threshold {threshold}")
    return result


def predict_single(
    classifier: Any,
    gc_content: float,
    RNA_type: Union[str, RNAType],
    RNA_region: Union[str, RNARegion],
    exon_length: float,
    distance_to_junction: float,
    evolutionary_conservation: float,
    DNA_5mer: str,
    threshold: float = DEFAULT_THRESHOLD,
    on_invalid: str = DEFAULT_ON_INVALID,
) -> M6APrediction:
    """Predict m6A probability and status for one site.

    Builds a one-row table and runs it through :func:`predict_batch`.

    Example:
        >>> predict_single(model, 0.45, "mRNA", "CDS", 1500, 120, 0.8, "ATCGA")
        M6APrediction(prob=..., status=...)
    """
    row = pd.DataFrame(
        {
            "gc_content": [gc_content],
            "RNA_type": coerce_categorical([RNA_type], RNA_TYPES, "RNA_type", on_invalid),
            "RNA_region": coerce_categorical([RNA_region], RNA_REGIONS, "RNA_region", on_invalid),
            "exon_length": [exon_length],
            "distance_to_junction": [distance_to_junction],
            "evolutionary_conservation": [evolutionary_conservation],
            "DNA_5mer": [DNA_5mer],
        }
    )
    result = predict_batch(classifier, row, threshold=threshold, on_invalid=on_invalid)

    first = result.iloc[0]
    return M6APrediction(prob=float(first[PROB_COLUMN]), status=str(first[STATUS_COLUMN]))
