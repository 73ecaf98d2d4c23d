"""
View builder skill.

Takes rows + axis selection + chart kind → render-ready series.
The frontend simply renders what it receives; no computation is needed there.

Chart data contract:
- line / bar / scatter / area: one label and one value per row, in row
  order. Values that do not parse become 0.
- pie / doughnut: one label per distinct X value (first-seen order), value
  is the sum of the numeric Y values in that group. Values that do not
  parse are left out of the sum.
- bubble: routed to the 3D projection (points + bounds), see skills.project.
"""

from __future__ import annotations

import copy
import logging
import math
from typing import Any, Dict, List, Optional

from core.models import (
    PROPORTION_KINDS,
    SERIES_KINDS,
    ChartKind,
    ChartResult,
    ChartSeries,
    ChartSpec,
    ProcessedChartData,
    kind_value,
)
from core.utils import (
    MISSING,
    Dataset,
    TraceHook,
    as_rows,
    dataset_columns,
    emit_trace,
    label_text,
    number_or_zero,
    parse_number,
)
from skills.palette import LINE_FILL, LINE_STROKE, border_colors, colors_for, point_color
from skills.project import compute_bounds, point_size, project_3d
from skills.validate import validate_axes_2d, validate_axes_3d

logger = logging.getLogger("uvicorn.error")

LINE_TENSION = 0.4


# ---------------------------------------------------------------------------
# Per-branch builders
# ---------------------------------------------------------------------------

def _build_proportion(rows, x_axis: str, y_axis: str) -> ProcessedChartData:
    """Group by X label and sum numeric Y values."""
    sums: Dict[str, float] = {}
    for row in rows:
        value = parse_number(row.get(y_axis, MISSING))
        if not math.isfinite(value):
            continue
        label = label_text(row.get(x_axis, MISSING))
        sums[label] = sums.get(label, 0.0) + value

    labels = list(sums.keys())
    series = ChartSeries(
        name=y_axis,
        values=list(sums.values()),
        fill_color=colors_for(len(labels)),
        stroke_color=border_colors(len(labels)),
        border_width=1,
    )
    return ProcessedChartData(labels=labels, series=[series])


def _build_series(rows, x_axis: str, y_axis: str, kind: str) -> ProcessedChartData:
    """One point per row, zero-filled."""
    labels = [label_text(row.get(x_axis, MISSING)) for row in rows]
    values = [number_or_zero(row.get(y_axis, MISSING)) for row in rows]

    if kind == ChartKind.bar.value:
        fill_color = stroke_color = colors_for(1)[0]
    else:
        fill_color, stroke_color = LINE_FILL, LINE_STROKE

    series = ChartSeries(
        name=y_axis,
        values=values,
        fill_color=fill_color,
        stroke_color=stroke_color,
        border_width=2,
        fill=kind == ChartKind.area.value,
        tension=LINE_TENSION,
    )
    return ProcessedChartData(labels=labels, series=[series])


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def transform(
    dataset: Dataset,
    x_axis: Optional[str],
    y_axis: Optional[str],
    chart_kind: ChartKind | str = ChartKind.line,
    trace: Optional[TraceHook] = None,
) -> Optional[ProcessedChartData]:
    """
    Convert rows into labels + a single series for a 2D chart.

    Returns None when the dataset is empty, an axis is unset, or an axis is
    not one of the dataset's columns. Type rules are not re-checked here;
    run ``validate_axes_2d`` first for meaningful output.
    """
    rows = as_rows(dataset)
    if not rows:
        emit_trace(trace, logger, "transform.empty", {})
        return None

    if not x_axis or not y_axis:
        emit_trace(trace, logger, "transform.missing_axes", {})
        return None

    columns = dataset_columns(rows)
    if x_axis not in columns or y_axis not in columns:
        emit_trace(trace, logger, "transform.unknown_axes", {
            "x_axis": x_axis, "y_axis": y_axis, "columns": columns,
        })
        return None

    kind = kind_value(chart_kind)
    if kind in PROPORTION_KINDS:
        data = _build_proportion(rows, x_axis, y_axis)
    else:
        data = _build_series(rows, x_axis, y_axis, kind)

    emit_trace(trace, logger, "transform", {
        "chart_kind": kind,
        "x_axis": x_axis,
        "y_axis": y_axis,
        "rows": len(rows),
        "labels": len(data.labels),
        "sample_values": data.series[0].values[:5],
    })
    return data


# ---------------------------------------------------------------------------
# Render options
# ---------------------------------------------------------------------------

_BASE_OPTIONS: Dict[str, Any] = {
    "responsive": True,
    "maintainAspectRatio": False,
    "plugins": {
        "title": {"display": True, "text": "", "font": {"size": 16, "weight": "bold"}},
        "legend": {"display": True, "position": "top"},
        "tooltip": {"enabled": True, "mode": "index", "intersect": False},
    },
    "scales": {
        "x": {"display": True, "title": {"display": True, "text": ""}},
        "y": {"display": True, "title": {"display": True, "text": ""}},
    },
}


def chart_options(
    chart_kind: ChartKind | str,
    title: str = "Data Visualization",
    x_label: str = "X Axis",
    y_label: str = "Y Axis",
) -> Dict[str, Any]:
    """Render-agnostic option tree for a 2D chart."""
    options = copy.deepcopy(_BASE_OPTIONS)
    options["plugins"]["title"]["text"] = title
    options["scales"]["x"]["title"]["text"] = x_label
    options["scales"]["y"]["title"]["text"] = y_label

    kind = kind_value(chart_kind)
    if kind in PROPORTION_KINDS:
        options["scales"] = {"x": {"display": False}, "y": {"display": False}}
        options["plugins"]["legend"]["position"] = "bottom"
        options["plugins"]["tooltip"]["format"] = "percentage"
    elif kind in SERIES_KINDS:
        options["scales"]["y"]["beginAtZero"] = True
    return options


def proportion_label(label: str, value: float, total: float) -> str:
    """Tooltip text for a slice: ``"A: 15 (42.9%)"``."""
    percentage = f"{value / total * 100:.1f}" if total > 0 else "0.0"
    return f"{label}: {label_text(value)} ({percentage}%)"


def proportion_labels(data: ProcessedChartData) -> List[str]:
    if not data.series:
        return []
    values = data.series[0].values
    total = sum(values)
    return [proportion_label(lbl, v, total) for lbl, v in zip(data.labels, values)]


# ---------------------------------------------------------------------------
# One-call facade
# ---------------------------------------------------------------------------

def build_chart(
    dataset: Dataset,
    spec: ChartSpec,
    trace: Optional[TraceHook] = None,
) -> ChartResult:
    """
    Validate ``spec`` against the rows and build the matching output.

    Spatial kinds produce points + bounds; every other kind produces a
    ProcessedChartData plus render options. A failed validation returns the
    result with only ``validation`` filled in.
    """
    rows = as_rows(dataset)

    if spec.is_spatial:
        validation = validate_axes_3d(rows, spec.x_axis, spec.y_axis, spec.z_axis)
        if not validation.valid:
            logger.info("3D chart rejected: %s", validation.error)
            return ChartResult(spec=spec, validation=validation)
        points = project_3d(rows, spec.x_axis, spec.y_axis, spec.z_axis, trace=trace) or []
        bounds = compute_bounds(points)
        return ChartResult(
            spec=spec,
            validation=validation,
            points=points,
            bounds=bounds,
            point_sizes=[point_size(p, bounds) for p in points] if bounds else [],
            point_colors=[point_color(i) for i in range(len(points))],
        )

    validation = validate_axes_2d(rows, spec.x_axis, spec.y_axis, spec.chart_kind)
    if not validation.valid:
        logger.info("2D chart rejected: %s", validation.error)
        return ChartResult(spec=spec, validation=validation)

    return ChartResult(
        spec=spec,
        validation=validation,
        data=transform(rows, spec.x_axis, spec.y_axis, spec.chart_kind, trace=trace),
        options=chart_options(spec.chart_kind, spec.title, spec.x_axis, spec.y_axis),
    )
