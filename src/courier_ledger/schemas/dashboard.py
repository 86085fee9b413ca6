"""Dashboard, ledger and rate API schemas."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel


class AreaTotalsModel(BaseModel):
    area: str
    name: str
    delivered: int
    returned: int
    courier_pay: float
    company_earning: float


class CourierSummaryModel(BaseModel):
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
    allocated_expense: float
    profit_after_expense: float


class SummaryResponse(BaseModel):
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
    areas: List[AreaTotalsModel]
    couriers: List[CourierSummaryModel]


class ChartPointModel(BaseModel):
    name: str
    payout: float
    profit: float


class TransactionModel(BaseModel):
    type: str
    id: str
    date: datetime
    courier_name: Optional[str] = None
    delta: float
    balance: float
    amount: float
    description: str


class LedgerResponse(BaseModel):
    courier: str
    closing_balance: float
    transactions: List[TransactionModel]


class AreaRateModel(BaseModel):
    code: str
    name: str
    courier_rate: float
    company_rate: float


class RatesResponse(BaseModel):
    courier_rate: float
    rvp_area: str
    areas: List[AreaRateModel]
