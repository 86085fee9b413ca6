"""Delivery record export endpoints."""

from __future__ import annotations

import logging
from datetime import date
from typing import Literal

from fastapi import APIRouter, HTTPException, Query, Response, status
from fastapi.responses import FileResponse

from ...models.domain import ALL
from ...persistence.filesystem import FileStorage
from ...persistence.store import LedgerStore
from ...services.dashboard import ViewScope, scope_snapshot
from ...services.export import (
    XLSX_MEDIA_TYPE,
    export_filename,
    project_for_export,
    render_csv,
    render_xlsx,
)
from ...services.filters import DateRange
from ...services.rates import default_rate_table
from .dashboard import area_param

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/exports", tags=["exports"])

CSV_MEDIA_TYPE = "text/csv"


@router.get("/deliveries", status_code=status.HTTP_200_OK)
def export_deliveries(
    start: date | None = Query(default=None),
    end: date | None = Query(default=None),
    courier: str = Query(default=ALL, description="Courier name or 'All'"),
    area: str = Query(default=ALL, description="Area code or 'All'"),
    format: Literal["xlsx", "csv"] = Query(default="xlsx"),
) -> Response:
    rates = default_rate_table()
    area = area_param(area)
    scope = ViewScope(date_range=DateRange(start=start, end=end), courier=courier, area=area)
    scoped = scope_snapshot(LedgerStore().snapshot(), scope, rates.rvp_area)
    projection = project_for_export(scoped.entries, courier, scoped.advances, rates)

    area_label = ALL if area == ALL else rates.display_name(area)
    filename = export_filename(area_label, courier, suffix=format)
    if format == "csv":
        payload: bytes | str = render_csv(projection)
        media_type = CSV_MEDIA_TYPE
    else:
        payload = render_xlsx(projection)
        media_type = XLSX_MEDIA_TYPE

    path = FileStorage().save_export(filename, payload)
    logger.info("Exported %s delivery rows to %s", len(projection.rows), path)
    return Response(
        content=payload,
        media_type=media_type,
        headers={
            "Content-Disposition": f'attachment; filename="{filename}"',
            "X-Export-Run": path.parent.name,
        },
    )


@router.get("/{run_id}/{file_name}", status_code=status.HTTP_200_OK)
def download_export(run_id: str, file_name: str) -> FileResponse:
    try:
        path = FileStorage().resolve_export(run_id, file_name)
    except FileNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Export '{file_name}' not found.") from exc
    media_type = CSV_MEDIA_TYPE if path.suffix == ".csv" else XLSX_MEDIA_TYPE
    return FileResponse(path, media_type=media_type, filename=path.name)
