"""
Core Pydantic models for the chart data engine.

All domain types live here so every module shares the same vocabulary.
Attributes are snake_case; JSON output uses camelCase aliases because the
renderer consumes these structures directly.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _Model(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Chart kinds & specification
# ---------------------------------------------------------------------------

class ChartKind(str, Enum):
    line = "line"
    bar = "bar"
    scatter = "scatter"
    pie = "pie"
    doughnut = "doughnut"
    area = "area"
    bubble = "bubble"


PROPORTION_KINDS = {ChartKind.pie.value, ChartKind.doughnut.value}
SERIES_KINDS = {
    ChartKind.line.value,
    ChartKind.bar.value,
    ChartKind.scatter.value,
    ChartKind.area.value,
}
SPATIAL_KINDS = {ChartKind.bubble.value}


def kind_value(chart_kind: Union[ChartKind, str, None]) -> str:
    """Plain string for a chart kind (enum member or raw string)."""
    if isinstance(chart_kind, ChartKind):
        return chart_kind.value
    return str(chart_kind or "")


class ChartSpec(_Model):
    chart_kind: ChartKind = ChartKind.line
    x_axis: Optional[str] = None
    y_axis: Optional[str] = None
    z_axis: Optional[str] = None          # bubble only
    title: str = "Data Visualization"

    @property
    def is_spatial(self) -> bool:
        return self.chart_kind.value in SPATIAL_KINDS


# ---------------------------------------------------------------------------
# Column classification & validation
# ---------------------------------------------------------------------------

class ColumnTypes(_Model):
    numeric: List[str] = Field(default_factory=list)
    categorical: List[str] = Field(default_factory=list)


class ValidationResult(_Model):
    valid: bool
    error: Optional[str] = None

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(valid=True, error=None)

    @classmethod
    def fail(cls, error: str) -> "ValidationResult":
        return cls(valid=False, error=error)


class YAxisReport(_Model):
    valid: bool
    error: Optional[str] = None
    numeric_values: int = 0
    total_values: int = 0
    min_value: float = 0.0
    max_value: float = 0.0


# ---------------------------------------------------------------------------
# 2D output
# ---------------------------------------------------------------------------

class ChartSeries(_Model):
    name: str
    values: List[float] = Field(default_factory=list)
    fill_color: Union[str, List[str]]
    stroke_color: Union[str, List[str]]
    border_width: int = 2
    fill: bool = False                    # area charts only
    tension: float = 0.0


class ProcessedChartData(_Model):
    labels: List[str] = Field(default_factory=list)
    series: List[ChartSeries] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# 3D output
# ---------------------------------------------------------------------------

class Point3D(_Model):
    x: float
    y: float
    z: float
    label: str
    source_index: int


class Bounds3D(_Model):
    x_max: float
    y_max: float
    z_max: float
    scale: float
    raw_max: float


# ---------------------------------------------------------------------------
# Facade result
# ---------------------------------------------------------------------------

class ChartResult(_Model):
    spec: ChartSpec
    validation: ValidationResult
    data: Optional[ProcessedChartData] = None
    points: Optional[List[Point3D]] = None
    bounds: Optional[Bounds3D] = None
    point_sizes: Optional[List[float]] = None   # aligned with points
    point_colors: Optional[List[str]] = None
    options: Optional[Dict[str, Any]] = None


# ---------------------------------------------------------------------------
# API requests
# ---------------------------------------------------------------------------

class RowsRequest(_Model):
    rows: List[Dict[str, Any]] = Field(default_factory=list)


class ChartRequest(_Model):
    rows: List[Dict[str, Any]] = Field(default_factory=list)
    spec: ChartSpec


class OptionsRequest(_Model):
    spec: ChartSpec
