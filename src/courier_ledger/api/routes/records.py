"""Endpoints for recording deliveries, advances, remittances and expenses."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Response, status

from ...models.domain import AdvancePayment, CompanyCodPayment, DeliveryEntry, OwnerExpense
from ...persistence.store import LedgerStore
from ...schemas.records import (
    AdvanceCreate,
    CreatedResponse,
    DeliveryEntryCreate,
    EntryFinancialsModel,
    ExpenseCreate,
    RemittanceCreate,
)
from ...services.financials import compute_entry_financials
from ...services.rates import default_rate_table

router = APIRouter(tags=["records"])


@router.post("/entries", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
def create_entry(payload: DeliveryEntryCreate) -> CreatedResponse:
    entry = DeliveryEntry(id="", **payload.model_dump())
    created = LedgerStore().create_delivery_entry(entry)
    return CreatedResponse(id=created.id)


@router.delete("/entries/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_entry(entry_id: str) -> Response:
    LedgerStore().delete_delivery_entry(entry_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/entries/{entry_id}/financials", response_model=EntryFinancialsModel, status_code=status.HTTP_200_OK)
def get_entry_financials(entry_id: str) -> EntryFinancialsModel:
    entry = next((item for item in LedgerStore().list_delivery_entries() if item.id == entry_id), None)
    if entry is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Delivery entry '{entry_id}' not found.")
    result = compute_entry_financials(entry, default_rate_table())
    return EntryFinancialsModel(
        total_work=result.total_work,
        cod_shortage=result.cod_shortage,
        gross_payout=result.gross_payout,
        net_payout=result.net_payout,
        company_earning=result.company_earning,
        profit_contribution=result.profit_contribution,
    )


@router.post("/advances", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
def create_advance(payload: AdvanceCreate) -> CreatedResponse:
    created = LedgerStore().create_advance(AdvancePayment(id="", **payload.model_dump()))
    return CreatedResponse(id=created.id)


@router.post("/remittances", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
def create_remittance(payload: RemittanceCreate) -> CreatedResponse:
    created = LedgerStore().create_remittance(CompanyCodPayment(id="", **payload.model_dump()))
    return CreatedResponse(id=created.id)


@router.post("/expenses", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
def create_expense(payload: ExpenseCreate) -> CreatedResponse:
    created = LedgerStore().create_expense(OwnerExpense(id="", **payload.model_dump()))
    return CreatedResponse(id=created.id)
