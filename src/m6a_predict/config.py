"""Configuration constants for m6a_predict."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("m6a_predict")
except PackageNotFoundError:
    # Package is not installed
    __version__ = "unknown"

# Prediction defaults
DEFAULT_THRESHOLD = 0.5
POSITIVE_LABEL = "Positive"
NEGATIVE_LABEL = "Negative"

# Output columns appended by the predictor
PROB_COLUMN = "predicted_m6A_prob"
STATUS_COLUMN = "predicted_m6A_status"

# Out-of-domain categorical policy
ON_INVALID_RAISE = "raise"
ON_INVALID_MISSING = "missing"
VALID_ON_INVALID = [ON_INVALID_RAISE, ON_INVALID_MISSING]
DEFAULT_ON_INVALID = ON_INVALID_RAISE

# Logging
DEFAULT_LOG_LEVEL = "INFO"
VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
