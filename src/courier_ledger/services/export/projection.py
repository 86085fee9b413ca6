"""Flatten delivery entries into spreadsheet-ready rows."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence, Tuple

from ...models.domain import ALL, AdvancePayment, DeliveryEntry
from ..filters import as_datetime, filter_by_courier
from ..financials import as_count, as_number, compute_entry_financials
from ..rates import RateTable, default_rate_table

DATE_FORMAT = "%d/%m/%Y"


@dataclass(slots=True)
class ExportProjection:
    columns: List[str]
    rows: List[dict]
    summary: Optional[List[Tuple[str, Any]]] = None
    scope: str = ALL
    metadata: dict = field(default_factory=dict)


def export_columns(area_codes: Sequence[str], rates: RateTable) -> List[str]:
    columns = ["Date", "Delivery Boy"]
    for code in area_codes:
        name = rates.display_name(code)
        columns.extend([f"Delivered ({name})", f"Returned ({name})"])
    columns.extend(
        [
            "RVP",
            "Total Parcels",
            "Expected COD",
            "Actual COD",
            "COD Shortage",
            "Shortage Reason",
            "On-spot Advance",
            "Final Payout",
        ]
    )
    return columns


def _area_codes(entries: Sequence[DeliveryEntry], rates: RateTable) -> List[str]:
    codes = [area.code for area in rates.areas]
    extra = sorted({code for entry in entries for code in entry.areas} - set(codes))
    return codes + extra


def _entry_row(entry: DeliveryEntry, area_codes: Sequence[str], rates: RateTable) -> dict:
    result = compute_entry_financials(entry, rates)
    row: dict = {
        "Date": as_datetime(entry.date).strftime(DATE_FORMAT),
        "Delivery Boy": entry.courier_name,
    }
    for code in area_codes:
        name = rates.display_name(code)
        row[f"Delivered ({name})"] = as_count(entry.delivered.get(code))
        row[f"Returned ({name})"] = as_count(entry.returned.get(code))
    row.update(
        {
            "RVP": as_count(entry.rvp),
            "Total Parcels": result.total_work,
            "Expected COD": as_number(entry.expected_cod),
            "Actual COD": as_number(entry.actual_cod_collected),
            "COD Shortage": result.cod_shortage,
            "Shortage Reason": entry.cod_shortage_reason or "",
            "On-spot Advance": as_number(entry.on_spot_advance),
            "Final Payout": result.net_payout,
        }
    )
    return row


def _courier_summary_block(
    courier: str,
    entries: Sequence[DeliveryEntry],
    advances: Sequence[AdvancePayment],
    rates: RateTable,
) -> List[Tuple[str, Any]]:
    results = [compute_entry_financials(entry, rates) for entry in entries]
    total_delivered = sum(entry.total_delivered for entry in entries)
    total_rvp = sum(as_count(entry.rvp) for entry in entries)
    gross = math.fsum(item.gross_payout for item in results)
    shortage = math.fsum(item.cod_shortage for item in results)
    on_spot = math.fsum(as_number(entry.on_spot_advance) for entry in entries)
    separate = math.fsum(as_number(advance.amount) for advance in advances)
    total_advance = on_spot + separate
    return [
        (f"Summary for {courier}", ""),
        ("Total Delivered", total_delivered),
        ("Total RVP", total_rvp),
        ("Total Parcels (Delivered + RVP)", total_delivered + total_rvp),
        ("Total COD Shortage", shortage),
        ("Total Advance Paid", total_advance),
        ("Final Net Payout", gross - shortage - total_advance),
    ]


def project_for_export(
    entries: Sequence[DeliveryEntry],
    scope: str = ALL,
    advances: Sequence[AdvancePayment] = (),
    rates: Optional[RateTable] = None,
) -> ExportProjection:
    """Build export rows for ``entries`` within ``scope``.

    ``advances`` are the separate advances already limited to the export's
    date window. A summary block is appended only when ``scope`` names a
    single courier; operator-wide totals come from the aggregation summary.
    """
    rates = rates or default_rate_table()
    scoped = filter_by_courier(entries, scope)
    ordered = sorted(enumerate(scoped), key=lambda pair: (as_datetime(pair[1].date), pair[0]))
    scoped = [entry for _, entry in ordered]

    area_codes = _area_codes(scoped, rates)
    columns = export_columns(area_codes, rates)
    rows = [_entry_row(entry, area_codes, rates) for entry in scoped]

    summary = None
    if scope not in (None, ALL):
        summary = _courier_summary_block(scope, scoped, filter_by_courier(advances, scope), rates)

    return ExportProjection(
        columns=columns,
        rows=rows,
        summary=summary,
        scope=scope or ALL,
        metadata={"row_count": len(rows), "areas": list(area_codes)},
    )
