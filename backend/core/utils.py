"""
Shared utility helpers for the chart engine.

Pure functions with no I/O and no side effects. ``parse_number`` is the single
numeric coercion every component goes through.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Union

import numpy as np
import pandas as pd

from core.config import ConfigError, trace_level

Row = Mapping[str, Any]
Dataset = Union[Sequence[Row], pd.DataFrame, None]
TraceHook = Callable[[str, Dict[str, Any]], None]

SAMPLE_SIZE = 10

# Sentinel for a key a row does not carry
MISSING = object()


# ---------------------------------------------------------------------------
# DataFrame safety
# ---------------------------------------------------------------------------

def df_json_safe(df: pd.DataFrame) -> pd.DataFrame:
    """Replace +/-inf -> NaN, then NaN -> None so JSON serialization works."""
    if df.empty:
        return df
    tmp = df.replace([np.inf, -np.inf], np.nan)
    tmp = tmp.astype(object)
    return tmp.where(pd.notna(tmp), None)


def df_to_records_safe(df: pd.DataFrame) -> list[dict]:
    """Convert DataFrame to list of dicts with JSON-safe values."""
    return df_json_safe(df).to_dict(orient="records")


def as_rows(dataset: Dataset) -> List[Row]:
    """Normalize a dataset (records or DataFrame) into a list of rows."""
    if dataset is None:
        return []
    if isinstance(dataset, pd.DataFrame):
        return df_to_records_safe(dataset)
    return list(dataset)


def dataset_columns(rows: Sequence[Row]) -> List[str]:
    """Column names as exposed by the first row."""
    if not rows or not isinstance(rows[0], Mapping):
        return []
    return list(rows[0].keys())


def sample_values(rows: Sequence[Row], column: str, k: int = SAMPLE_SIZE) -> List[Any]:
    """Values of *column* in the first *k* rows (MISSING where absent)."""
    return [row.get(column, MISSING) for row in rows[:k]]


# ---------------------------------------------------------------------------
# Numeric coercion
# ---------------------------------------------------------------------------

def parse_number(val: Any) -> float:
    """Coerce a raw cell value to float; NaN when it is not a number."""
    if val is None or val is MISSING:
        return np.nan
    if isinstance(val, (bool, np.bool_)):
        return np.nan
    if isinstance(val, (int, float, np.number)):
        try:
            return float(val)
        except OverflowError:
            return np.inf if val > 0 else -np.inf
    text = str(val).strip()
    if not text:
        return np.nan
    try:
        return float(text)
    except ValueError:
        return np.nan


def is_raw_number(val: Any) -> bool:
    """True for numeric scalars (not bools), whatever their value."""
    return isinstance(val, (int, float, np.number)) and not isinstance(val, (bool, np.bool_))


def is_numeric_value(val: Any) -> bool:
    """True when *val* parses to a finite number."""
    return math.isfinite(parse_number(val))


def is_numeric_sample(rows: Sequence[Row], column: str, k: int = SAMPLE_SIZE) -> bool:
    """Every value in the first *k* rows of *column* is numeric."""
    return all(is_numeric_value(v) for v in sample_values(rows, column, k))


def number_or_zero(val: Any) -> float:
    """Zero-fill coercion used by per-row charts (non-finite becomes 0)."""
    num = parse_number(val)
    return num if math.isfinite(num) else 0.0


# ---------------------------------------------------------------------------
# Label formatting
# ---------------------------------------------------------------------------

def label_text(val: Any) -> str:
    """Stringify a cell value the way the browser renderer would."""
    if val is MISSING:
        return "undefined"
    if val is None:
        return "null"
    if isinstance(val, (bool, np.bool_)):
        return "true" if val else "false"
    if isinstance(val, (float, np.floating)):
        num = float(val)
        if math.isnan(num):
            return "NaN"
        if math.isinf(num):
            return "Infinity" if num > 0 else "-Infinity"
        if num.is_integer():
            return str(int(num))
        return repr(num)
    return str(val)


# ---------------------------------------------------------------------------
# Trace hook
# ---------------------------------------------------------------------------

def emit_trace(
    trace: Optional[TraceHook],
    logger: logging.Logger,
    event: str,
    fields: Dict[str, Any],
) -> None:
    """Send a trace event to the injected hook, or to the logger at debug."""
    if trace is not None:
        trace(event, fields)
        return
    try:
        level = trace_level()
    except ConfigError:
        level = logging.DEBUG
    if logger.isEnabledFor(level):
        logger.log(level, "%s: %s", event, fields)
