"""Document-store access for ledger events and the courier directory."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Callable, List, Mapping, Optional, Sequence, TypeVar

from ..config import settings
from ..data.records import (
    decode_advance,
    decode_courier,
    decode_delivery_entry,
    decode_expense,
    decode_remittance,
    encode_advance,
    encode_delivery_entry,
    encode_expense,
    encode_remittance,
)
from ..db import get_supabase_client
from ..models.domain import (
    AdvancePayment,
    CompanyCodPayment,
    Courier,
    DeliveryEntry,
    OwnerExpense,
)

logger = logging.getLogger(__name__)

DELIVERY_RECORDS_TABLE = "delivery_records"
ADVANCE_PAYMENTS_TABLE = "advance_payments"
COMPANY_PAYMENTS_TABLE = "company_cod_payments"
OWNER_EXPENSES_TABLE = "owner_expenses"
COURIERS_TABLE = "delivery_boys"

R = TypeVar("R")


class DuplicateCourierError(ValueError):
    """Raised when a courier name already exists (case-insensitive)."""


@dataclass(slots=True)
class LedgerSnapshot:
    entries: List[DeliveryEntry] = field(default_factory=list)
    advances: List[AdvancePayment] = field(default_factory=list)
    remittances: List[CompanyCodPayment] = field(default_factory=list)
    expenses: List[OwnerExpense] = field(default_factory=list)
    couriers: List[Courier] = field(default_factory=list)

    def courier_names(self) -> List[str]:
        """Directory names plus any names only found on recorded events."""
        names = {courier.name for courier in self.couriers}
        names.update(entry.courier_name for entry in self.entries)
        names.update(advance.courier_name for advance in self.advances)
        return sorted((name for name in names if name), key=str.lower)


def resolve_courier_names(records: Sequence[R], couriers: Sequence[Courier]) -> List[R]:
    """Replace stored courier names with the directory name when a courier id is known."""
    directory = {courier.id: courier.name for courier in couriers}
    resolved: List[R] = []
    for record in records:
        courier_id = getattr(record, "courier_id", None)
        name = directory.get(courier_id) if courier_id else None
        if name and name != record.courier_name:
            record = replace(record, courier_name=name)
        resolved.append(record)
    return resolved


class LedgerStore:
    """Thin wrapper around the Supabase tables backing the dashboard.

    Reads degrade to empty collections when the store is not configured or
    unreachable. Writes are fire-and-forget: failures are logged and the
    caller continues with its current snapshot.
    """

    def __init__(self, client: Any | None = None, *, rvp_area: str | None = None) -> None:
        self._explicit_client = client
        self.rvp_area = rvp_area or settings.rvp_area

    def _client(self) -> Any | None:
        if self._explicit_client is not None:
            return self._explicit_client
        return get_supabase_client()

    def _list(self, table: str, decoder: Callable[[Mapping[str, Any]], R]) -> List[R]:
        supabase = self._client()
        if not supabase:
            logger.info("Supabase not configured - %s treated as empty", table)
            return []

        try:
            response = supabase.table(table).select("*").execute()
        except Exception as exc:
            logger.warning("Failed to list %s: %s", table, exc)
            return []

        records: List[R] = []
        for document in response.data or []:
            try:
                records.append(decoder(document))
            except (KeyError, TypeError, ValueError) as exc:
                logger.warning("Skipping undecodable %s document %s: %s", table, document.get("id"), exc)
        return records

    def _insert(self, table: str, payload: dict) -> None:
        supabase = self._client()
        if not supabase:
            logger.info("Supabase not configured - %s write skipped", table)
            return
        try:
            supabase.table(table).insert(payload).execute()
            logger.info("Saved %s record %s", table, payload.get("id"))
        except Exception as exc:
            logger.error("Failed to save %s record %s: %s", table, payload.get("id"), exc)

    def _delete(self, table: str, record_id: str) -> None:
        supabase = self._client()
        if not supabase:
            logger.info("Supabase not configured - %s delete skipped", table)
            return
        try:
            supabase.table(table).delete().eq("id", record_id).execute()
            logger.info("Deleted %s record %s", table, record_id)
        except Exception as exc:
            logger.error("Failed to delete %s record %s: %s", table, record_id, exc)

    # Listings

    def list_delivery_entries(self) -> List[DeliveryEntry]:
        return self._list(
            DELIVERY_RECORDS_TABLE,
            lambda document: decode_delivery_entry(document, self.rvp_area),
        )

    def list_advances(self) -> List[AdvancePayment]:
        return self._list(ADVANCE_PAYMENTS_TABLE, decode_advance)

    def list_company_remittances(self) -> List[CompanyCodPayment]:
        return self._list(COMPANY_PAYMENTS_TABLE, decode_remittance)

    def list_owner_expenses(self) -> List[OwnerExpense]:
        return self._list(OWNER_EXPENSES_TABLE, decode_expense)

    def list_couriers(self) -> List[Courier]:
        couriers = self._list(COURIERS_TABLE, decode_courier)
        return sorted(couriers, key=lambda courier: courier.name.lower())

    def snapshot(self) -> LedgerSnapshot:
        couriers = self.list_couriers()
        return LedgerSnapshot(
            entries=resolve_courier_names(self.list_delivery_entries(), couriers),
            advances=resolve_courier_names(self.list_advances(), couriers),
            remittances=self.list_company_remittances(),
            expenses=self.list_owner_expenses(),
            couriers=couriers,
        )

    # Commands

    def create_delivery_entry(self, entry: DeliveryEntry) -> DeliveryEntry:
        entry = entry if entry.id else replace(entry, id=str(uuid.uuid4()))
        self._insert(DELIVERY_RECORDS_TABLE, {"id": entry.id, **encode_delivery_entry(entry)})
        return entry

    def create_advance(self, advance: AdvancePayment) -> AdvancePayment:
        advance = advance if advance.id else replace(advance, id=str(uuid.uuid4()))
        self._insert(ADVANCE_PAYMENTS_TABLE, {"id": advance.id, **encode_advance(advance)})
        return advance

    def create_remittance(self, payment: CompanyCodPayment) -> CompanyCodPayment:
        payment = payment if payment.id else replace(payment, id=str(uuid.uuid4()))
        self._insert(COMPANY_PAYMENTS_TABLE, {"id": payment.id, **encode_remittance(payment)})
        return payment

    def create_expense(self, expense: OwnerExpense) -> OwnerExpense:
        expense = expense if expense.id else replace(expense, id=str(uuid.uuid4()))
        self._insert(OWNER_EXPENSES_TABLE, {"id": expense.id, **encode_expense(expense)})
        return expense

    def create_courier(self, name: str) -> Courier:
        cleaned = name.strip()
        if any(courier.name.lower() == cleaned.lower() for courier in self.list_couriers()):
            raise DuplicateCourierError(f"A delivery boy named '{cleaned}' already exists.")

        courier = Courier(id=str(uuid.uuid4()), name=cleaned, created_at=datetime.now())
        self._insert(
            COURIERS_TABLE,
            {"id": courier.id, "name": courier.name, "created_at": courier.created_at.isoformat()},
        )
        return courier

    def delete_delivery_entry(self, entry_id: str) -> None:
        self._delete(DELIVERY_RECORDS_TABLE, entry_id)

    def delete_courier(self, courier_id: str) -> None:
        # events keep the courier's name, only the directory entry goes
        self._delete(COURIERS_TABLE, courier_id)
