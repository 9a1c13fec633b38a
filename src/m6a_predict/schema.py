"""Feature schema shared by the predictor and the classifier adapters.

The schema is the single declaration of what a pre-trained m6A model
consumes: which input columns are numeric, which are categorical and with
what levels, which column holds the DNA k-mer, and how the per-position
columns derived from it are named.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

import pandas as pd

from .categories import NUCLEOTIDES, RNA_REGIONS, RNA_TYPES
from .encoding import POSITION_PREFIX, positional_columns
from .errors import MissingColumnError


@dataclass(frozen=True)
class FeatureSchema:
    """Input contract of an m6A classifier.

    Attributes:
        numeric_columns: Columns passed to the model as numbers
        categorical_columns: Categorical columns mapped to their fixed levels
        sequence_column: Column holding the DNA k-mer
        position_prefix: Prefix of the encoded per-position columns
        position_levels: Levels of every per-position column
    """

    numeric_columns: Tuple[str, ...]
    categorical_columns: Dict[str, Tuple[str, ...]]
    sequence_column: str
    position_prefix: str = POSITION_PREFIX
    position_levels: Tuple[str, ...] = field(default=NUCLEOTIDES)

    @property
    def required_columns(self) -> List[str]:
        """Columns an input table must provide, in declaration order."""
        return [
            *self.numeric_columns,
            *self.categorical_columns,
            self.sequence_column,
        ]

    def validate_columns(self, table: pd.DataFrame) -> None:
        """Check that every required column is present.

        Raises:
            MissingColumnError: Naming the missing and the actual columns
        """
        present = set(table.columns)
        missing = [column for column in self.required_columns if column not in present]
        if missing:
            raise MissingColumnError(missing, table.columns)

    def positional_columns(self, n: int) -> List[str]:
        """Names of the encoded columns for k-mers of length n."""
        return positional_columns(n, self.position_prefix)

    def model_columns(self, n: int) -> List[str]:
        """Columns the model reads once k-mers of length n are encoded.

        The raw sequence column is not a model input.
        """
        return [
            *self.numeric_columns,
            *self.categorical_columns,
            *self.positional_columns(n),
        ]


M6A_SCHEMA = FeatureSchema(
    numeric_columns=(
        "gc_content",
        "exon_length",
        "distance_to_junction",
        "evolutionary_conservation",
    ),
    categorical_columns={
        "RNA_type": RNA_TYPES,
        "RNA_region": RNA_REGIONS,
    },
    sequence_column="DNA_5mer",
)
