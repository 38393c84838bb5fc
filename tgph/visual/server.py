"""FastAPI application exposing a Dashboard to a browser front end."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import FastAPI, HTTPException, Query
from fastapi.responses import JSONResponse

from tgph.charting.probe import ProbeMode
from tgph.visual.dashboard import frame_to_dict

if TYPE_CHECKING:
    from tgph.visual.dashboard import Dashboard, Panel

logger = logging.getLogger(__name__)


def create_app(dashboard: Dashboard) -> FastAPI:
    """Create the API application for ``dashboard``."""
    app = FastAPI(title="TGPH Telemetry Charts")

    def _panel(chart_id: str) -> Panel:
        try:
            return dashboard.get(chart_id)
        except KeyError:
            raise HTTPException(status_code=404, detail=f"unknown chart {chart_id!r}") from None

    @app.get("/api/containers")
    def get_containers() -> JSONResponse:
        return JSONResponse(dashboard.list_containers())

    @app.get("/api/charts")
    def get_charts() -> JSONResponse:
        return JSONResponse([p.to_config() for p in dashboard.panels()])

    @app.get("/api/charts/{chart_id}/frame")
    def get_frame(
        chart_id: str,
        width: float = Query(..., gt=0, allow_inf_nan=False),
        height: float = Query(..., gt=0, allow_inf_nan=False),
    ) -> JSONResponse:
        panel = _panel(chart_id)
        return JSONResponse(frame_to_dict(panel.frame(width, height)))

    @app.get("/api/charts/{chart_id}/probe")
    def get_probe(
        chart_id: str,
        x: float = Query(..., allow_inf_nan=False),
        width: float = Query(..., gt=0, allow_inf_nan=False),
        height: float = Query(..., gt=0, allow_inf_nan=False),
        mode: ProbeMode = ProbeMode.NEAREST,
    ) -> JSONResponse:
        panel = _panel(chart_id)
        result = panel.probe(x, width, height, mode)
        if result is None:
            logger.debug("Probe on empty chart %s", chart_id)
            return JSONResponse(None)
        return JSONResponse(result.to_dict())

    return app
