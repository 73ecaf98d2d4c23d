"""
Column classification skill.

Splits a dataset's columns into numeric and categorical from a sample of
the first rows. The sample is deliberately short: a column that turns
non-numeric after the sample is still reported as numeric, and the
transforms downstream cope with that by zero-filling or dropping values.
"""

from __future__ import annotations

import logging
from typing import List

from core.models import ColumnTypes
from core.utils import SAMPLE_SIZE, Dataset, as_rows, dataset_columns, is_numeric_sample

logger = logging.getLogger("uvicorn.error")


def classify_columns(dataset: Dataset, sample_size: int = SAMPLE_SIZE) -> ColumnTypes:
    """
    Classify every column as numeric or categorical.

    A column is numeric iff each of its first ``sample_size`` values parses
    to a finite number. An empty dataset yields two empty lists.
    """
    rows = as_rows(dataset)
    numeric: List[str] = []
    categorical: List[str] = []

    for column in dataset_columns(rows):
        if is_numeric_sample(rows, column, sample_size):
            numeric.append(column)
        else:
            categorical.append(column)

    logger.debug(
        "Classified %d columns: %d numeric, %d categorical",
        len(numeric) + len(categorical), len(numeric), len(categorical),
    )
    return ColumnTypes(numeric=numeric, categorical=categorical)
