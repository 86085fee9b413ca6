"""Request and response schemas for recording events and managing couriers."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from ..data.records import normalise_area_code, parse_datetime


class _DatedPayload(BaseModel):
    date: datetime

    @field_validator("date")
    @classmethod
    def _naive_local(cls, value: datetime) -> datetime:
        return parse_datetime(value)


class DeliveryEntryCreate(_DatedPayload):
    courier_name: str = Field(..., min_length=2)
    courier_id: Optional[str] = None
    delivered: dict[str, int] = Field(default_factory=dict, description="Delivered parcels per area code.")
    returned: dict[str, int] = Field(default_factory=dict, description="Returned parcels per area code.")
    rvp: int = Field(default=0, ge=0)
    expected_cod: float = Field(default=0.0, ge=0.0)
    actual_cod_collected: float = Field(default=0.0, ge=0.0)
    cod_shortage_reason: Optional[str] = None
    on_spot_advance: float = Field(default=0.0, ge=0.0)

    @field_validator("delivered", "returned")
    @classmethod
    def _non_negative_counts(cls, value: dict[str, int]) -> dict[str, int]:
        for area, count in value.items():
            if count < 0:
                raise ValueError(f"Count for area '{area}' cannot be negative.")
        return {normalise_area_code(area): count for area, count in value.items() if count}

    @model_validator(mode="after")
    def _actual_within_expected(self) -> "DeliveryEntryCreate":
        if self.actual_cod_collected > self.expected_cod:
            raise ValueError("Actual COD cannot be greater than Expected COD.")
        return self


class AdvanceCreate(_DatedPayload):
    courier_name: str = Field(..., min_length=2)
    courier_id: Optional[str] = None
    amount: float = Field(..., gt=0.0)


class RemittanceCreate(_DatedPayload):
    amount: float = Field(..., gt=0.0)
    notes: Optional[str] = None


class ExpenseCreate(_DatedPayload):
    amount: float = Field(..., gt=0.0)
    description: str = Field(..., min_length=3)


class CourierCreate(BaseModel):
    name: str = Field(..., min_length=2)


class CourierModel(BaseModel):
    id: str
    name: str
    created_at: Optional[datetime] = None


class CreatedResponse(BaseModel):
    id: str


class EntryFinancialsModel(BaseModel):
    total_work: int
    cod_shortage: float
    gross_payout: float
    net_payout: float
    company_earning: float
    profit_contribution: float
