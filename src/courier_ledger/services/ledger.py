"""Chronological transaction stream with a running courier balance."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Sequence

from ..models.domain import ALL, AdvancePayment, DeliveryEntry, OwnerExpense
from .filters import as_datetime, filter_by_courier
from .financials import as_number, compute_entry_financials
from .rates import RateTable, default_rate_table

logger = logging.getLogger(__name__)

DELIVERY = "delivery"
ADVANCE = "advance"
OWNER_EXPENSE = "owner_expense"


@dataclass(frozen=True, slots=True)
class Transaction:
    type: str
    id: str
    date: datetime
    courier_name: Optional[str]
    delta: float
    balance: float
    amount: float = 0.0
    description: str = ""


@dataclass(frozen=True, slots=True)
class _Tagged:
    type: str
    sequence: int
    record: object


def _tag(
    entries: Sequence[DeliveryEntry],
    advances: Sequence[AdvancePayment],
    expenses: Sequence[OwnerExpense],
) -> List[_Tagged]:
    tagged: List[_Tagged] = []
    for kind, records in ((DELIVERY, entries), (ADVANCE, advances), (OWNER_EXPENSE, expenses)):
        for record in records:
            tagged.append(_Tagged(type=kind, sequence=len(tagged), record=record))
    return tagged


def build_ledger(
    entries: Sequence[DeliveryEntry],
    advances: Sequence[AdvancePayment] = (),
    expenses: Sequence[OwnerExpense] = (),
    courier: Optional[str] = ALL,
    rates: Optional[RateTable] = None,
) -> List[Transaction]:
    """Interleave deliveries, advances and owner expenses into a running ledger.

    The courier filter is applied before any balance is computed, so a
    courier's balances never include another courier's deltas. Balances are
    accumulated oldest first, with ties kept in input order (deliveries,
    then advances, then expenses), and the rows are returned newest first
    carrying those snapshots. Owner expenses appear only in the unfiltered
    view and leave the balance unchanged.
    """
    rates = rates or default_rate_table()
    scoped_entries = filter_by_courier(entries, courier)
    scoped_advances = filter_by_courier(advances, courier)
    scoped_expenses = list(expenses) if courier in (None, ALL) else []

    tagged = _tag(scoped_entries, scoped_advances, scoped_expenses)
    ordered = sorted(tagged, key=lambda item: (as_datetime(item.record.date), item.sequence))

    balance = 0.0
    rows: List[Transaction] = []
    for item in ordered:
        record = item.record
        if item.type == DELIVERY:
            delta = compute_entry_financials(record, rates).net_payout
            balance += delta
            rows.append(
                Transaction(
                    type=DELIVERY,
                    id=record.id,
                    date=record.date,
                    courier_name=record.courier_name,
                    delta=delta,
                    balance=balance,
                    amount=delta,
                    description=record.cod_shortage_reason or "",
                )
            )
        elif item.type == ADVANCE:
            amount = as_number(record.amount)
            balance -= amount
            rows.append(
                Transaction(
                    type=ADVANCE,
                    id=record.id,
                    date=record.date,
                    courier_name=record.courier_name,
                    delta=-amount,
                    balance=balance,
                    amount=amount,
                )
            )
        else:
            rows.append(
                Transaction(
                    type=OWNER_EXPENSE,
                    id=record.id,
                    date=record.date,
                    courier_name=None,
                    delta=0.0,
                    balance=balance,
                    amount=as_number(record.amount),
                    description=record.description,
                )
            )

    logger.debug("Built ledger of %d transactions for courier=%s", len(rows), courier)
    # reversing the ascending pass keeps later-recorded ties first within a date
    return list(reversed(rows))


def closing_balance(transactions: Sequence[Transaction]) -> float:
    """Balance after the most recent transaction of a newest-first ledger."""
    return transactions[0].balance if transactions else 0.0
