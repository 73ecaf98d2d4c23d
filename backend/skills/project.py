"""
3D projection skill.

Turns three numeric axes into a point cloud plus the bounds a scene needs
to scale it. Coordinates are coerced with zero-fill, the same policy as
the per-row 2D charts.
"""

from __future__ import annotations

import logging
import math
from typing import List, Optional, Sequence

from core.models import Bounds3D, Point3D
from core.utils import (
    MISSING,
    Dataset,
    TraceHook,
    as_rows,
    dataset_columns,
    emit_trace,
    is_raw_number,
    label_text,
    parse_number,
)

logger = logging.getLogger("uvicorn.error")

# Longest scaled axis spans this many world units
SCENE_EXTENT = 10.0
MIN_POINT_SIZE = 0.1
MAX_POINT_SIZE = 0.5


def _coordinate(val) -> float:
    """Numbers pass through as-is (NaN included); unparsable cells become 0."""
    num = parse_number(val)
    if math.isfinite(num) or is_raw_number(val):
        return num
    return 0.0


def project_3d(
    dataset: Dataset,
    x_axis: Optional[str],
    y_axis: Optional[str],
    z_axis: Optional[str],
    trace: Optional[TraceHook] = None,
) -> Optional[List[Point3D]]:
    """
    Build one point per row from three axes.

    Returns None when the dataset is empty or an axis is unset or absent.
    Text, nulls and missing keys are zero-filled; a row holding a NaN or
    infinite number on any axis is dropped.
    """
    rows = as_rows(dataset)
    if not rows:
        emit_trace(trace, logger, "project_3d.empty", {})
        return None

    if not x_axis or not y_axis or not z_axis:
        emit_trace(trace, logger, "project_3d.missing_axes", {})
        return None

    columns = dataset_columns(rows)
    if any(axis not in columns for axis in (x_axis, y_axis, z_axis)):
        emit_trace(trace, logger, "project_3d.unknown_axes", {
            "x_axis": x_axis, "y_axis": y_axis, "z_axis": z_axis,
            "columns": columns,
        })
        return None

    points: List[Point3D] = []
    for index, row in enumerate(rows):
        x = _coordinate(row.get(x_axis, MISSING))
        y = _coordinate(row.get(y_axis, MISSING))
        z = _coordinate(row.get(z_axis, MISSING))
        if not (math.isfinite(x) and math.isfinite(y) and math.isfinite(z)):
            continue
        points.append(Point3D(
            x=x,
            y=y,
            z=z,
            label=(
                f"{x_axis}: {label_text(x)}, {y_axis}: {label_text(y)}, "
                f"{z_axis}: {label_text(z)}"
            ),
            source_index=index,
        ))

    emit_trace(trace, logger, "project_3d", {
        "x_axis": x_axis,
        "y_axis": y_axis,
        "z_axis": z_axis,
        "rows": len(rows),
        "points": len(points),
    })
    return points


def compute_bounds(points: Optional[Sequence[Point3D]]) -> Optional[Bounds3D]:
    """Uniform scale that fits the largest coordinate into the scene extent."""
    if not points:
        return None

    x_max = max(p.x for p in points)
    y_max = max(p.y for p in points)
    z_max = max(p.z for p in points)

    # floor of 1 keeps tiny or all-zero clouds from blowing up the scale
    raw_max = max(x_max, y_max, z_max, 1.0)
    scale = SCENE_EXTENT / raw_max

    return Bounds3D(
        x_max=x_max * scale,
        y_max=y_max * scale,
        z_max=z_max * scale,
        scale=scale,
        raw_max=raw_max,
    )


def point_size(point: Point3D, bounds: Bounds3D) -> float:
    """Sphere radius for a point, proportional to its z value."""
    return max(MIN_POINT_SIZE, (point.z / bounds.raw_max) * MAX_POINT_SIZE)
