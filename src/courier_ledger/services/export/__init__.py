"""Export services."""

from .projection import ExportProjection, project_for_export
from .workbook import XLSX_MEDIA_TYPE, export_filename, render_csv, render_xlsx

__all__ = [
    "ExportProjection",
    "project_for_export",
    "render_xlsx",
    "render_csv",
    "export_filename",
    "XLSX_MEDIA_TYPE",
]
