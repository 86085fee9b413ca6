"""Compose filters and engine calls for the dashboard views."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from ..models.domain import ALL
from ..persistence.store import LedgerSnapshot
from .aggregation import Summary, aggregate, earnings_by_courier
from .filters import DateRange, apply_filters, filter_by_area, filter_by_date_range, restrict_to_area
from .ledger import Transaction, build_ledger
from .rates import RateTable


@dataclass(frozen=True, slots=True)
class ViewScope:
    date_range: DateRange = field(default_factory=DateRange)
    courier: str = ALL
    area: str = ALL

    @property
    def operator_wide(self) -> bool:
        return self.courier == ALL and self.area == ALL


def scope_snapshot(snapshot: LedgerSnapshot, scope: ViewScope, rvp_area: Optional[str] = None) -> LedgerSnapshot:
    """Restrict a snapshot to a view.

    In an area view each entry only keeps that area's counters, plus its
    reverse pickups when ``rvp_area`` is the viewed area.

    Remittances and owner expenses belong to the operator rather than to a
    courier or area, so they are only kept in the operator-wide view.
    """
    entries = apply_filters(snapshot.entries, scope.date_range, scope.courier)
    entries = restrict_to_area(filter_by_area(entries, scope.area, rvp_area), scope.area, rvp_area)
    advances = apply_filters(snapshot.advances, scope.date_range, scope.courier)
    if scope.operator_wide:
        remittances = filter_by_date_range(snapshot.remittances, scope.date_range)
        expenses = filter_by_date_range(snapshot.expenses, scope.date_range)
    else:
        remittances, expenses = [], []
    return LedgerSnapshot(
        entries=entries,
        advances=advances,
        remittances=remittances,
        expenses=expenses,
        couriers=list(snapshot.couriers),
    )


def summarize(snapshot: LedgerSnapshot, scope: ViewScope, rates: RateTable) -> Summary:
    scoped = scope_snapshot(snapshot, scope, rates.rvp_area)
    return aggregate(scoped.entries, scoped.advances, scoped.remittances, scoped.expenses, rates)


def chart_series(snapshot: LedgerSnapshot, scope: ViewScope, rates: RateTable) -> List[dict]:
    return earnings_by_courier(summarize(snapshot, scope, rates))


def ledger_for(snapshot: LedgerSnapshot, date_range: Optional[DateRange], courier: str, rates: RateTable) -> List[Transaction]:
    entries = filter_by_date_range(snapshot.entries, date_range)
    advances = filter_by_date_range(snapshot.advances, date_range)
    expenses = filter_by_date_range(snapshot.expenses, date_range)
    return build_ledger(entries, advances, expenses, courier=courier, rates=rates)
