"""Render export projections as xlsx workbooks or CSV text."""

from __future__ import annotations

import csv
import io
import re
from datetime import date
from typing import Optional

from openpyxl import Workbook

from .projection import ExportProjection

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
SUMMARY_HEADER = ("Summary Metric", "Value")


def render_xlsx(projection: ExportProjection, sheet_title: str = "Delivery Records") -> bytes:
    workbook = Workbook()
    worksheet = workbook.active
    worksheet.title = sheet_title[:31]

    worksheet.append(projection.columns)
    for row in projection.rows:
        worksheet.append([row.get(column) for column in projection.columns])

    if projection.summary:
        worksheet.append([])
        for label, value in projection.summary:
            worksheet.append([label, value])

    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


def render_csv(projection: ExportProjection) -> str:
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=projection.columns, extrasaction="ignore")
    writer.writeheader()
    writer.writerows(projection.rows)
    if projection.summary:
        plain = csv.writer(buffer)
        plain.writerow([])
        plain.writerow(SUMMARY_HEADER)
        for label, value in projection.summary:
            plain.writerow([label, value])
    return buffer.getvalue()


def export_filename(area_label: str, scope: str, today: Optional[date] = None, suffix: str = "xlsx") -> str:
    today = today or date.today()
    safe_area = re.sub(r"[^A-Za-z0-9-]+", "_", area_label).strip("_") or "All"
    safe_scope = re.sub(r"[^A-Za-z0-9-]+", "_", scope).strip("_") or "All"
    return f"delivery_records_{safe_area}_{safe_scope}_{today.isoformat()}.{suffix}"
