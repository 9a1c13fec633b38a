"""Fixed categorical domains used by the m6A feature schema.

The level sets are closed enumerations declared once at import time. A
column is always coerced against the full domain, so a batch that only
contains ``"mRNA"`` still carries all four RNA type levels.
"""

from enum import Enum
from typing import Iterable, List, Sequence

import numpy as np
import pandas as pd

from .config import ON_INVALID_RAISE, VALID_ON_INVALID
from .errors import InvalidCategoryError
from .logging_config import get_logger

logger = get_logger(__name__)


class Nucleotide(str, Enum):
    """DNA bases accepted in a k-mer."""

    A = "A"
    T = "T"
    C = "C"
    G = "G"


class RNAType(str, Enum):
    """Transcript biotype of the site."""

    MRNA = "mRNA"
    LINCRNA = "lincRNA"
    LNCRNA = "lncRNA"
    PSEUDOGENE = "pseudogene"


class RNARegion(str, Enum):
    """Transcript region the site falls in."""

    CDS = "CDS"
    INTRON = "intron"
    UTR3 = "3'UTR"
    UTR5 = "5'UTR"


NUCLEOTIDES = tuple(member.value for member in Nucleotide)
RNA_TYPES = tuple(member.value for member in RNAType)
RNA_REGIONS = tuple(member.value for member in RNARegion)


def check_on_invalid(on_invalid: str) -> None:
    """Validate an out-of-domain policy name.

    Raises:
        ValueError: If the policy is not one of VALID_ON_INVALID
    """
    if on_invalid not in VALID_ON_INVALID:
        raise ValueError(
            f"Unknown on_invalid policy '{on_invalid}'. "
            f"Must be one of: {', '.join(VALID_ON_INVALID)}"
        )


def _plain(value: object) -> object:
    # str-valued enum members hash by name, not value
    return value.value if isinstance(value, Enum) else value


def coerce_categorical(
    values: Iterable[object],
    levels: Sequence[str],
    name: str,
    on_invalid: str = ON_INVALID_RAISE,
) -> pd.Categorical:
    """Restrict values to a fixed categorical domain.

    Missing inputs (None or NaN) stay missing. Values outside ``levels`` are
    either rejected or turned into missing values depending on ``on_invalid``.

    Args:
        values: Raw values (strings or enum members)
        levels: Allowed levels, in the order the categorical should carry them
        name: Column name, used in errors and log messages
        on_invalid: "raise" to reject out-of-domain values, "missing" to
            coerce them to a missing category

    Returns:
        Categorical with categories exactly equal to ``levels``

    Raises:
        InvalidCategoryError: If out-of-domain values are found and
            on_invalid is "raise"
        ValueError: If on_invalid is not a known policy
    """
    check_on_invalid(on_invalid)

    raw = np.asarray([_plain(v) for v in values], dtype=object)
    invalid_mask = ~pd.isna(raw) & ~pd.Series(raw, dtype=object).isin(list(levels)).to_numpy()
    if invalid_mask.any():
        invalid: List[object] = list(dict.fromkeys(raw[invalid_mask].tolist()))
        if on_invalid == ON_INVALID_RAISE:
            raise InvalidCategoryError(name, invalid, levels)
        logger.warning(
            f"{int(invalid_mask.sum())} value(s) of {name} outside "
            f"{list(levels)} set to missing: {invalid}"
        )

    # Out-of-domain values must not reach the Categorical constructor
    return pd.Categorical(np.where(invalid_mask, None, raw), categories=list(levels))
