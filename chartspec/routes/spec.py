from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from ..core.settings import Settings, get_settings
from ..schemas.axis import ColorScheme, Orientation
from ..schemas.spec import CompileAxesRequest, CompileAxesResponse
from ..services import BuildContext, MalformedSpecError, compile_axes

router = APIRouter(prefix="/spec", tags=["spec"])


def _build_context(payload: CompileAxesRequest, settings: Settings) -> BuildContext:
    usermeta = payload.spec.get("usermeta") or {}
    orientation = payload.chart_orientation or usermeta.get("chartOrientation") or settings.chart_orientation
    color_scheme = payload.color_scheme or usermeta.get("colorScheme") or settings.color_scheme
    try:
        return BuildContext(
            chart_orientation=Orientation(orientation),
            color_scheme=ColorScheme(color_scheme),
            metric_axis_count=usermeta.get("metricAxisCount"),
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.post("/axes", response_model=CompileAxesResponse)
def compile_spec_axes(
    payload: CompileAxesRequest, settings: Settings = Depends(get_settings)
) -> CompileAxesResponse:
    context = _build_context(payload, settings)
    try:
        document = compile_axes(payload.spec, payload.axes, context, validate=settings.validate_output)
    except MalformedSpecError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return CompileAxesResponse(
        spec=document.to_dict(),
        axis_count=len(document.axes),
        mark_count=len(document.marks),
    )
