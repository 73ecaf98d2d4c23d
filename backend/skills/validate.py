"""
Validation skill for axis selections and chart input data.

Checks run in a fixed order and the first failure wins, so the message a
user sees always names the most basic problem.
"""

from __future__ import annotations

import math
from typing import List, Mapping, Optional, Union

from core.models import (
    PROPORTION_KINDS,
    ChartKind,
    ValidationResult,
    YAxisReport,
    kind_value,
)
from core.utils import (
    MISSING,
    Dataset,
    as_rows,
    dataset_columns,
    is_numeric_sample,
    parse_number,
)
from skills.classify import classify_columns

KindLike = Union[ChartKind, str]


# ---------------------------------------------------------------------------
# Axis validation
# ---------------------------------------------------------------------------

def validate_axes_2d(
    dataset: Dataset,
    x_axis: Optional[str],
    y_axis: Optional[str],
    chart_kind: KindLike,
) -> ValidationResult:
    """Check an X/Y selection against the rules for ``chart_kind``."""
    rows = as_rows(dataset)
    if not rows:
        return ValidationResult.fail("No data available")

    if not x_axis or not y_axis:
        return ValidationResult.fail("Please select both X and Y axes")

    if x_axis == y_axis:
        return ValidationResult.fail("X and Y axes must be different")

    columns = dataset_columns(rows)
    if x_axis not in columns or y_axis not in columns:
        return ValidationResult.fail("Selected axes not found in data")

    types = classify_columns(rows)
    x_numeric = x_axis in types.numeric
    y_numeric = y_axis in types.numeric
    kind = kind_value(chart_kind)

    if kind == ChartKind.scatter.value:
        if not x_numeric:
            return ValidationResult.fail("X-axis must be numeric for scatter plots")
        if not y_numeric:
            return ValidationResult.fail("Y-axis must be numeric for scatter plots")

    if kind in (ChartKind.line.value, ChartKind.area.value) and not y_numeric:
        return ValidationResult.fail("Y-axis must be numeric for line/area charts")

    if kind in PROPORTION_KINDS and not y_numeric:
        return ValidationResult.fail("Y axis must be numeric for pie/doughnut charts")

    if kind == ChartKind.bar.value and not (x_numeric or y_numeric):
        return ValidationResult.fail("For bar charts, at least one axis should be numeric")

    return ValidationResult.ok()


def validate_axes_3d(
    dataset: Dataset,
    x_axis: Optional[str],
    y_axis: Optional[str],
    z_axis: Optional[str],
) -> ValidationResult:
    """Check an X/Y/Z selection for a spatial chart."""
    rows = as_rows(dataset)
    if not rows:
        return ValidationResult.fail("No data available")

    if not x_axis or not y_axis or not z_axis:
        return ValidationResult.fail("Please select X, Y, and Z axes")

    if x_axis == y_axis or x_axis == z_axis or y_axis == z_axis:
        return ValidationResult.fail("All axes must be different")

    columns = dataset_columns(rows)
    if any(axis not in columns for axis in (x_axis, y_axis, z_axis)):
        return ValidationResult.fail("Selected axes not found in data")

    if not all(is_numeric_sample(rows, axis) for axis in (x_axis, y_axis, z_axis)):
        return ValidationResult.fail("All axes must be numeric for 3D charts")

    return ValidationResult.ok()


# ---------------------------------------------------------------------------
# Data validation
# ---------------------------------------------------------------------------

def validate_chart_data(dataset: Dataset, chart_kind: KindLike) -> ValidationResult:
    """Shape checks on the rows themselves, independent of axis choice."""
    rows = as_rows(dataset)
    if not rows:
        return ValidationResult.fail("No data available")

    if not isinstance(rows[0], Mapping):
        return ValidationResult.fail("Invalid data format")

    if kind_value(chart_kind) in PROPORTION_KINDS and len(rows) < 2:
        return ValidationResult.fail("Pie/doughnut charts require at least 2 data points")

    return ValidationResult.ok()


def validate_y_axis_data(
    dataset: Dataset,
    y_axis: Optional[str],
    chart_kind: KindLike = ChartKind.line,
) -> YAxisReport:
    """
    Count numeric values on the Y axis across all rows.

    Unlike the sample-based column classifier this scans the full dataset,
    so it can tell a mostly-numeric column from an entirely categorical one.
    """
    rows = as_rows(dataset)
    if not rows:
        return YAxisReport(valid=False, error="No data available")

    if not y_axis:
        return YAxisReport(valid=False, error="Y-axis not selected")

    numbers: List[float] = []
    for row in rows:
        num = parse_number(row.get(y_axis, MISSING))
        if math.isfinite(num):
            numbers.append(num)

    total = len(rows)
    if not numbers and kind_value(chart_kind) in (
        ChartKind.line.value, ChartKind.scatter.value, ChartKind.area.value,
    ):
        return YAxisReport(
            valid=False,
            error="Y-axis must contain numeric values for this chart type",
            total_values=total,
        )

    return YAxisReport(
        valid=True,
        numeric_values=len(numbers),
        total_values=total,
        min_value=min(numbers) if numbers else 0.0,
        max_value=max(numbers) if numbers else 0.0,
    )
