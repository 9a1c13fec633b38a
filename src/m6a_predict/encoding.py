"""Positional encoding of DNA k-mers into categorical features."""

from typing import Iterable, List

import numpy as np
import pandas as pd

from .categories import NUCLEOTIDES, check_on_invalid, coerce_categorical
from .config import DEFAULT_ON_INVALID
from .errors import ShapeMismatchError
from .logging_config import get_logger

logger = get_logger(__name__)

POSITION_PREFIX = "nt_pos"


def positional_columns(n: int, prefix: str = POSITION_PREFIX) -> List[str]:
    """Names of the per-position columns for k-mers of length n (1-based)."""
    return [f"{prefix}{i}" for i in range(1, n + 1)]


def encode(
    sequences: Iterable[str],
    on_invalid: str = DEFAULT_ON_INVALID,
    prefix: str = POSITION_PREFIX,
) -> pd.DataFrame:
    """Encode equal-length DNA sequences into per-position categorical columns.

    Each sequence becomes one row and each position one column. Every column
    has the categorical domain A, T, C, G whether or not a letter occurs in
    the batch. No case normalization is done.

    Args:
        sequences: Ordered DNA sequences, all of the same length
        on_invalid: "raise" to reject bases outside A/T/C/G, "missing" to
            encode them as missing values
        prefix: Column name prefix for the positional columns

    Returns:
        DataFrame of shape (len(sequences), N) with columns nt_pos1..nt_posN

    Raises:
        ShapeMismatchError: If no sequences are given, or they differ in length
        InvalidCategoryError: If a base is outside A/T/C/G and on_invalid is "raise"
        TypeError: If an element is not a string

    Example:
        >>> encode(["ATCGT", "TGCAT"])["nt_pos1"].tolist()
        ['A', 'T']
    """
    check_on_invalid(on_invalid)

    seqs = list(sequences)
    if not seqs:
        raise ShapeMismatchError("No DNA sequences to encode")

    for idx, seq in enumerate(seqs):
        if not isinstance(seq, str):
            raise TypeError(f"Sequence {idx} is {type(seq).__name__}, expected str")

    n = len(seqs[0])
    if n == 0:
        raise ShapeMismatchError("DNA sequences must not be empty strings")

    for idx, seq in enumerate(seqs):
        if len(seq) != n:
            raise ShapeMismatchError(
                f"Sequence {idx} ({seq!r}) has length {len(seq)}; "
                f"all sequences must have length {n}"
            )

    matrix = np.array([list(seq) for seq in seqs], dtype=object).reshape(len(seqs), n)
    columns = positional_columns(n, prefix)

    encoded = pd.DataFrame(
        {
            column: coerce_categorical(matrix[:, j], NUCLEOTIDES, column, on_invalid)
            for j, column in enumerate(columns)
        }
    )

    logger.debug(f"Encoded {len(seqs)} sequences of length {n}")
    return encoded
