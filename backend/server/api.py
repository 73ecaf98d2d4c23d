"""
Chart API routes, mounted as a sub-router on the main FastAPI app.

Stateless: every request carries its own rows and chart spec, so nothing
is stored between calls.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse

from core.models import ChartRequest, OptionsRequest, RowsRequest
from skills.build_view import build_chart, chart_options
from skills.classify import classify_columns
from skills.palette import colors_for
from skills.validate import validate_axes_2d, validate_axes_3d

logger = logging.getLogger("uvicorn.error")

router = APIRouter(prefix="/api/charts", tags=["charts"])

MAX_PALETTE_REQUEST = 1000


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.post("/columns")
async def column_types(body: RowsRequest):
    """Numeric / categorical split used to populate the axis pickers."""
    return classify_columns(body.rows).model_dump(by_alias=True)


@router.post("/validate")
async def validate_chart(body: ChartRequest):
    """Validate an axis selection; always 200, check ``valid`` in the body."""
    spec = body.spec
    if spec.is_spatial:
        result = validate_axes_3d(body.rows, spec.x_axis, spec.y_axis, spec.z_axis)
    else:
        result = validate_axes_2d(body.rows, spec.x_axis, spec.y_axis, spec.chart_kind)
    return result.model_dump(by_alias=True)


@router.post("/render")
async def render_chart(body: ChartRequest):
    """
    Validate and transform in one call.

    Returns 422 with the validation payload when the selection is rejected.
    """
    result = build_chart(body.rows, body.spec)
    # drop only the unused output slots; validation.error stays even when null
    payload = {
        key: value
        for key, value in result.model_dump(by_alias=True).items()
        if value is not None
    }
    if not result.validation.valid:
        logger.info(
            "Render rejected for %s chart: %s",
            body.spec.chart_kind.value, result.validation.error,
        )
        return JSONResponse(
            status_code=422,
            content={
                "ok": False,
                "error": result.validation.error,
                "validation": payload["validation"],
            },
        )
    logger.info(
        "Rendered %s chart from %d rows",
        body.spec.chart_kind.value, len(body.rows),
    )
    return payload


@router.post("/options")
async def render_options(body: OptionsRequest):
    spec = body.spec
    return chart_options(
        spec.chart_kind,
        spec.title,
        spec.x_axis or "X Axis",
        spec.y_axis or "Y Axis",
    )


@router.get("/palette")
async def palette(n: int = Query(10, ge=0, le=MAX_PALETTE_REQUEST)):
    return {"colors": colors_for(n)}
