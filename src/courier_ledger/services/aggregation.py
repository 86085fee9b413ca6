"""Fold filtered events into per-courier and operator-wide totals."""

from __future__ import annotations

import math
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from ..models.domain import AdvancePayment, CompanyCodPayment, DeliveryEntry, OwnerExpense
from .financials import EntryFinancials, as_count, as_number, compute_entry_financials
from .rates import RateTable, default_rate_table


@dataclass(slots=True)
class AreaTotals:
    area: str
    name: str
    delivered: int
    returned: int
    courier_pay: float
    company_earning: float


@dataclass(slots=True)
class CourierSummary:
    courier_name: str
    entry_count: int
    total_delivered: int
    total_returned: int
    total_rvp: int
    total_work: int
    total_expected_cod: float
    total_actual_cod: float
    total_cod_shortage: float
    on_spot_advance: float
    separate_advance: float
    total_advance: float
    gross_payout: float
    net_payout: float
    company_earning: float
    profit_before_expense: float
    allocated_expense: float = 0.0
    profit_after_expense: float = 0.0


@dataclass(slots=True)
class Summary:
    total_delivered: int
    total_returned: int
    total_rvp: int
    total_work: int
    total_expected_cod: float
    total_actual_cod: float
    total_remitted: float
    total_owner_expense: float
    cod_in_hand: float
    on_spot_advance: float
    separate_advance: float
    total_advance: float
    total_cod_shortage: float
    gross_payout: float
    total_net_payout: float
    company_earning: float
    profit_before_expense: float
    total_profit: float
    areas: List[AreaTotals] = field(default_factory=list)
    couriers: List[CourierSummary] = field(default_factory=list)


def _fsum(values: Iterable[float]) -> float:
    # fsum is exactly rounded, so totals do not depend on input order
    return math.fsum(values)


def _area_totals(
    financials: Sequence[EntryFinancials],
    rates: RateTable,
) -> List[AreaTotals]:
    grouped: Dict[str, List] = defaultdict(list)
    for item in financials:
        for area, work in item.by_area.items():
            grouped[area].append(work)

    codes = sorted(set(grouped) | {area.code for area in rates.areas})
    return [
        AreaTotals(
            area=code,
            name=rates.display_name(code),
            delivered=sum(work.delivered for work in grouped.get(code, [])),
            returned=sum(work.returned for work in grouped.get(code, [])),
            courier_pay=_fsum(work.courier_pay for work in grouped.get(code, [])),
            company_earning=_fsum(work.company_earning for work in grouped.get(code, [])),
        )
        for code in codes
    ]


def _courier_summary(
    courier_name: str,
    pairs: Sequence[Tuple[DeliveryEntry, EntryFinancials]],
    advances: Sequence[AdvancePayment],
) -> CourierSummary:
    on_spot = _fsum(as_number(entry.on_spot_advance) for entry, _ in pairs)
    separate = _fsum(as_number(advance.amount) for advance in advances)
    gross = _fsum(item.gross_payout for _, item in pairs)
    shortage = _fsum(item.cod_shortage for _, item in pairs)
    earning = _fsum(item.company_earning for _, item in pairs)
    profit = _fsum(item.profit_contribution for _, item in pairs)
    return CourierSummary(
        courier_name=courier_name,
        entry_count=len(pairs),
        total_delivered=sum(entry.total_delivered for entry, _ in pairs),
        total_returned=sum(entry.total_returned for entry, _ in pairs),
        total_rvp=sum(as_count(entry.rvp) for entry, _ in pairs),
        total_work=sum(item.total_work for _, item in pairs),
        total_expected_cod=_fsum(as_number(entry.expected_cod) for entry, _ in pairs),
        total_actual_cod=_fsum(as_number(entry.actual_cod_collected) for entry, _ in pairs),
        total_cod_shortage=shortage,
        on_spot_advance=on_spot,
        separate_advance=separate,
        total_advance=on_spot + separate,
        gross_payout=gross,
        net_payout=gross - shortage - on_spot - separate,
        company_earning=earning,
        profit_before_expense=profit,
        profit_after_expense=profit,
    )


def allocate_owner_expense(
    couriers: Sequence[CourierSummary],
    total_owner_expense: float,
    profit_before_expense: float,
) -> None:
    """Spread owner expenses across couriers in proportion to their share of profit.

    This is a reporting convention, not an accounting rule: a courier who
    generated 60% of pre-expense profit carries 60% of the expenses in their
    row. With no pre-expense profit there is no share to divide by and
    courier profits are left as they are.
    """
    if profit_before_expense == 0:
        for courier in couriers:
            courier.allocated_expense = 0.0
            courier.profit_after_expense = courier.profit_before_expense
        return

    for courier in couriers:
        share = courier.profit_before_expense / profit_before_expense
        courier.allocated_expense = total_owner_expense * share
        courier.profit_after_expense = courier.profit_before_expense - courier.allocated_expense


def aggregate(
    entries: Sequence[DeliveryEntry],
    advances: Sequence[AdvancePayment] = (),
    remittances: Sequence[CompanyCodPayment] = (),
    expenses: Sequence[OwnerExpense] = (),
    rates: Optional[RateTable] = None,
) -> Summary:
    """Summarise already-filtered events for the dashboard, charts and exports."""
    rates = rates or default_rate_table()

    pairs = [(entry, compute_entry_financials(entry, rates)) for entry in entries]
    financials = [item for _, item in pairs]

    entries_by_courier: Dict[str, List[Tuple[DeliveryEntry, EntryFinancials]]] = defaultdict(list)
    for entry, item in pairs:
        entries_by_courier[entry.courier_name].append((entry, item))
    advances_by_courier: Dict[str, List[AdvancePayment]] = defaultdict(list)
    for advance in advances:
        advances_by_courier[advance.courier_name].append(advance)

    couriers = [
        _courier_summary(name, entries_by_courier.get(name, []), advances_by_courier.get(name, []))
        for name in sorted(set(entries_by_courier) | set(advances_by_courier))
    ]

    total_actual_cod = _fsum(as_number(entry.actual_cod_collected) for entry in entries)
    total_remitted = _fsum(as_number(payment.amount) for payment in remittances)
    total_owner_expense = _fsum(as_number(expense.amount) for expense in expenses)
    on_spot = _fsum(as_number(entry.on_spot_advance) for entry in entries)
    separate = _fsum(as_number(advance.amount) for advance in advances)
    gross = _fsum(item.gross_payout for item in financials)
    shortage = _fsum(item.cod_shortage for item in financials)
    profit_before_expense = _fsum(item.profit_contribution for item in financials)

    allocate_owner_expense(couriers, total_owner_expense, profit_before_expense)

    return Summary(
        total_delivered=sum(entry.total_delivered for entry in entries),
        total_returned=sum(entry.total_returned for entry in entries),
        total_rvp=sum(as_count(entry.rvp) for entry in entries),
        total_work=sum(item.total_work for item in financials),
        total_expected_cod=_fsum(as_number(entry.expected_cod) for entry in entries),
        total_actual_cod=total_actual_cod,
        total_remitted=total_remitted,
        total_owner_expense=total_owner_expense,
        cod_in_hand=total_actual_cod - total_remitted - total_owner_expense,
        on_spot_advance=on_spot,
        separate_advance=separate,
        total_advance=on_spot + separate,
        total_cod_shortage=shortage,
        gross_payout=gross,
        total_net_payout=gross - shortage - on_spot - separate,
        company_earning=_fsum(item.company_earning for item in financials),
        profit_before_expense=profit_before_expense,
        total_profit=profit_before_expense - total_owner_expense,
        areas=_area_totals(financials, rates),
        couriers=couriers,
    )


def earnings_by_courier(summary: Summary) -> List[dict]:
    """Chart series of gross payout and profit per courier, largest first."""
    series = [
        {
            "name": courier.courier_name,
            "payout": courier.gross_payout,
            "profit": courier.profit_before_expense,
        }
        for courier in summary.couriers
        if courier.entry_count
    ]
    return sorted(series, key=lambda item: (-(item["payout"] + item["profit"]), item["name"]))
