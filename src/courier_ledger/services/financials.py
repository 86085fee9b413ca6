"""Per-entry payout and profit arithmetic."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ..models.domain import DeliveryEntry
from .rates import RateTable, default_rate_table


@dataclass(frozen=True, slots=True)
class AreaWork:
    delivered: int
    returned: int
    courier_pay: float
    company_earning: float


@dataclass(frozen=True, slots=True)
class EntryFinancials:
    total_work: int
    cod_shortage: float
    gross_payout: float
    net_payout: float
    company_earning: float
    profit_contribution: float
    by_area: Dict[str, AreaWork] = field(default_factory=dict)


def as_number(value: Any) -> float:
    """Read a possibly missing numeric field as a float, treating ``None`` as zero."""
    if value is None:
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def as_count(value: Any) -> int:
    if value is None:
        return 0
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def cod_shortage(entry: DeliveryEntry) -> float:
    """Uncollected COD charged to the courier; over-collection counts as no shortage."""
    return max(0.0, as_number(entry.expected_cod) - as_number(entry.actual_cod_collected))


def compute_entry_financials(entry: DeliveryEntry, rates: Optional[RateTable] = None) -> EntryFinancials:
    """Compute work, payout and profit for a single delivery entry.

    Reverse pickups carry no area, so they are paid and billed at the rates
    of the table's ``rvp_area``. The shortage reason is informational only.
    """
    rates = rates or default_rate_table()

    by_area: Dict[str, AreaWork] = {}
    delivered_total = 0
    gross_payout = 0.0
    company_earning = 0.0
    for area in entry.areas:
        delivered = as_count(entry.delivered.get(area))
        returned = as_count(entry.returned.get(area))
        area_rates = rates.rates_for(area)
        courier_pay = delivered * area_rates.courier_rate
        earning = delivered * area_rates.company_rate
        by_area[area] = AreaWork(
            delivered=delivered,
            returned=returned,
            courier_pay=courier_pay,
            company_earning=earning,
        )
        delivered_total += delivered
        gross_payout += courier_pay
        company_earning += earning

    rvp = as_count(entry.rvp)
    rvp_rates = rates.rvp_rates()
    gross_payout += rvp * rvp_rates.courier_rate
    company_earning += rvp * rvp_rates.company_rate

    shortage = cod_shortage(entry)
    net_payout = gross_payout - as_number(entry.on_spot_advance) - shortage

    return EntryFinancials(
        total_work=delivered_total + rvp,
        cod_shortage=shortage,
        gross_payout=gross_payout,
        net_payout=net_payout,
        company_earning=company_earning,
        profit_contribution=company_earning - gross_payout,
        by_area=by_area,
    )
