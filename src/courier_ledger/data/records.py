"""Decode store documents into domain records and encode records for writing.

Documents written by earlier versions of the dashboard use camelCase keys
and a single ``delivered``/``returned`` pair, optionally tagged with a
``pincode``. They are normalised here into per-area counters so the engine
only ever sees one representation.
"""

from __future__ import annotations

import re
from datetime import date, datetime, time
from typing import Any, Dict, Mapping, Optional

from ..models.domain import (
    AdvancePayment,
    CompanyCodPayment,
    Courier,
    DeliveryEntry,
    OwnerExpense,
)
from ..services.financials import as_count, as_number


def normalise_area_code(value: Any) -> str:
    return re.sub(r"[\s\-]+", "_", str(value).strip()).upper()


def parse_datetime(value: Any) -> datetime:
    """Coerce a stored timestamp into a naive local datetime."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        return datetime.combine(value, time.min)
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        parsed = datetime.fromisoformat(text)
    else:
        raise ValueError(f"Unable to parse date from value '{value}'")

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def _pick(document: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in document and document[key] is not None:
            return document[key]
    return None


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _area_counts(value: Any, area: str) -> Dict[str, int]:
    if isinstance(value, Mapping):
        return {normalise_area_code(code): as_count(count) for code, count in value.items()}
    count = as_count(value)
    return {area: count} if count else {}


def decode_delivery_entry(document: Mapping[str, Any], default_area: str) -> DeliveryEntry:
    pincode = _pick(document, "pincode", "area")
    area = normalise_area_code(pincode) if pincode else default_area

    legacy_cod = _pick(document, "codCollected", "cod_collected")
    expected = _pick(document, "expected_cod", "expectedCod")
    actual = _pick(document, "actual_cod_collected", "actualCodCollected")
    if expected is None and actual is None and legacy_cod is not None:
        expected = actual = legacy_cod

    return DeliveryEntry(
        id=str(document["id"]),
        date=parse_datetime(document.get("date")),
        courier_name=str(_pick(document, "courier_name", "deliveryBoyName") or "").strip(),
        courier_id=_optional_text(_pick(document, "courier_id", "deliveryBoyId")),
        delivered=_area_counts(document.get("delivered"), area),
        returned=_area_counts(document.get("returned"), area),
        rvp=as_count(document.get("rvp")),
        expected_cod=as_number(expected),
        actual_cod_collected=as_number(actual),
        cod_shortage_reason=_optional_text(_pick(document, "cod_shortage_reason", "codShortageReason")),
        on_spot_advance=as_number(_pick(document, "on_spot_advance", "onSpotAdvance", "advance")),
    )


def decode_advance(document: Mapping[str, Any]) -> AdvancePayment:
    return AdvancePayment(
        id=str(document["id"]),
        date=parse_datetime(document.get("date")),
        courier_name=str(_pick(document, "courier_name", "deliveryBoyName") or "").strip(),
        courier_id=_optional_text(_pick(document, "courier_id", "deliveryBoyId")),
        amount=as_number(document.get("amount")),
    )


def decode_remittance(document: Mapping[str, Any]) -> CompanyCodPayment:
    return CompanyCodPayment(
        id=str(document["id"]),
        date=parse_datetime(document.get("date")),
        amount=as_number(document.get("amount")),
        notes=_optional_text(document.get("notes")),
    )


def decode_expense(document: Mapping[str, Any]) -> OwnerExpense:
    return OwnerExpense(
        id=str(document["id"]),
        date=parse_datetime(document.get("date")),
        amount=as_number(document.get("amount")),
        description=str(document.get("description") or ""),
    )


def decode_courier(document: Mapping[str, Any]) -> Courier:
    created = _pick(document, "created_at", "createdAt")
    return Courier(
        id=str(document["id"]),
        name=str(document.get("name") or "").strip(),
        created_at=parse_datetime(created) if created else None,
    )


def encode_delivery_entry(entry: DeliveryEntry) -> dict:
    return {
        "date": entry.date.isoformat(),
        "courier_name": entry.courier_name,
        "courier_id": entry.courier_id,
        "delivered": dict(entry.delivered),
        "returned": dict(entry.returned),
        "rvp": entry.rvp,
        "expected_cod": entry.expected_cod,
        "actual_cod_collected": entry.actual_cod_collected,
        "cod_shortage_reason": entry.cod_shortage_reason,
        "on_spot_advance": entry.on_spot_advance,
    }


def encode_advance(advance: AdvancePayment) -> dict:
    return {
        "date": advance.date.isoformat(),
        "courier_name": advance.courier_name,
        "courier_id": advance.courier_id,
        "amount": advance.amount,
    }


def encode_remittance(payment: CompanyCodPayment) -> dict:
    return {"date": payment.date.isoformat(), "amount": payment.amount, "notes": payment.notes}


def encode_expense(expense: OwnerExpense) -> dict:
    return {"date": expense.date.isoformat(), "amount": expense.amount, "description": expense.description}
