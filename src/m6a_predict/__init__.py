"""m6a_predict: Predict RNA m6A modification sites with a pre-trained classifier."""

from .config import __version__
from .categories import Nucleotide, RNARegion, RNAType
from .classifier import Classifier, SklearnClassifier, XGBoostClassifier, as_classifier
from .encoding import encode
from .errors import (
    InvalidCategoryError,
    M6APredictError,
    MissingColumnError,
    SchemaMismatchError,
    ShapeMismatchError,
)
from .predict import M6APrediction, predict_batch, predict_single
from .schema import M6A_SCHEMA, FeatureSchema

__all__ = [
    "__version__",
    "encode",
    "predict_batch",
    "predict_single",
    "M6APrediction",
    "FeatureSchema",
    "M6A_SCHEMA",
    "Classifier",
    "SklearnClassifier",
    "XGBoostClassifier",
    "as_classifier",
    "Nucleotide",
    "RNAType",
    "RNARegion",
    "M6APredictError",
    "MissingColumnError",
    "ShapeMismatchError",
    "InvalidCategoryError",
    "SchemaMismatchError",
]
