"""Exceptions raised by m6a_predict."""

from typing import Iterable, List, Sequence


class M6APredictError(Exception):
    """Base class for all m6a_predict errors."""


class MissingColumnError(M6APredictError, ValueError):
    """Raised when an input table lacks one or more required columns.

    Attributes:
        missing: Required columns absent from the table
        columns: Columns the table actually has
    """

    def __init__(self, missing: Iterable[str], columns: Iterable[str]):
        self.missing: List[str] = list(missing)
        self.columns: List[str] = [str(c) for c in columns]
        super().__init__(
            f"Missing required column(s): {', '.join(self.missing)}. "
            f"Table has columns: {', '.join(self.columns) or '(none)'}"
        )


class ShapeMismatchError(M6APredictError, ValueError):
    """Raised when DNA sequences in one batch do not share a single length."""


class InvalidCategoryError(M6APredictError, ValueError):
    """Raised when a categorical value falls outside its fixed domain.

    Attributes:
        column: Name of the offending column
        values: Distinct out-of-domain values found
        levels: The allowed levels
    """

    def __init__(self, column: str, values: Iterable[object], levels: Sequence[str]):
        self.column = column
        self.values = list(values)
        self.levels = list(levels)
        super().__init__(
            f"Invalid value(s) for {column}: {', '.join(repr(v) for v in self.values)}. "
            f"Allowed: {', '.join(self.levels)}"
        )


class SchemaMismatchError(M6APredictError, ValueError):
    """Raised when a classifier's input or output does not match the feature schema."""
