"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...db import get_supabase_client
from ...persistence.store import (
    ADVANCE_PAYMENTS_TABLE,
    COMPANY_PAYMENTS_TABLE,
    COURIERS_TABLE,
    DELIVERY_RECORDS_TABLE,
    OWNER_EXPENSES_TABLE,
)

router = APIRouter(tags=["health"])

LEDGER_TABLES = (
    DELIVERY_RECORDS_TABLE,
    ADVANCE_PAYMENTS_TABLE,
    COMPANY_PAYMENTS_TABLE,
    OWNER_EXPENSES_TABLE,
    COURIERS_TABLE,
)


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/database", status_code=status.HTTP_200_OK)
def check_database() -> dict:
    """Report whether the document store is configured and which tables answer."""
    supabase = get_supabase_client()
    if not supabase:
        return {
            "configured": False,
            "message": "Supabase not configured. Set LEDGER_SUPABASE_URL and LEDGER_SUPABASE_KEY environment variables.",
            "tables": {},
        }

    tables: dict[str, bool] = {}
    for table in LEDGER_TABLES:
        try:
            supabase.table(table).select("id", count="exact").limit(1).execute()
            tables[table] = True
        except Exception:
            tables[table] = False

    connected = any(tables.values())
    return {
        "configured": True,
        "connected": connected,
        "tables": tables,
        "message": "Database connected." if connected else "Database configured but no ledger table answered.",
    }
