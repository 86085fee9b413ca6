"""Dashboard, chart, ledger and rate endpoints."""

from __future__ import annotations

from dataclasses import asdict
from datetime import date
from typing import List

from fastapi import APIRouter, Query, status

from ...data.records import normalise_area_code
from ...models.domain import ALL
from ...persistence.store import LedgerStore
from ...schemas.dashboard import (
    AreaRateModel,
    ChartPointModel,
    LedgerResponse,
    RatesResponse,
    SummaryResponse,
    TransactionModel,
)
from ...services.dashboard import ViewScope, chart_series, ledger_for, summarize
from ...services.filters import DateRange
from ...services.ledger import closing_balance
from ...services.rates import default_rate_table

router = APIRouter(tags=["dashboard"])


def area_param(area: str) -> str:
    return area if area == ALL else normalise_area_code(area)


def _scope(start: date | None, end: date | None, courier: str, area: str) -> ViewScope:
    return ViewScope(date_range=DateRange(start=start, end=end), courier=courier, area=area_param(area))


@router.get("/dashboard/summary", response_model=SummaryResponse, status_code=status.HTTP_200_OK)
def get_summary(
    start: date | None = Query(default=None, description="First day of the window"),
    end: date | None = Query(default=None, description="Last day of the window (inclusive)"),
    courier: str = Query(default=ALL, description="Courier name or 'All'"),
    area: str = Query(default=ALL, description="Area code or 'All'"),
) -> SummaryResponse:
    snapshot = LedgerStore().snapshot()
    summary = summarize(snapshot, _scope(start, end, courier, area), default_rate_table())
    return SummaryResponse.model_validate(asdict(summary))


@router.get("/dashboard/chart", response_model=List[ChartPointModel], status_code=status.HTTP_200_OK)
def get_chart(
    start: date | None = Query(default=None),
    end: date | None = Query(default=None),
    courier: str = Query(default=ALL),
    area: str = Query(default=ALL),
) -> List[ChartPointModel]:
    snapshot = LedgerStore().snapshot()
    series = chart_series(snapshot, _scope(start, end, courier, area), default_rate_table())
    return [ChartPointModel(**point) for point in series]


@router.get("/ledger", response_model=LedgerResponse, status_code=status.HTTP_200_OK)
def get_ledger(
    start: date | None = Query(default=None),
    end: date | None = Query(default=None),
    courier: str = Query(default=ALL, description="Courier name or 'All'"),
) -> LedgerResponse:
    snapshot = LedgerStore().snapshot()
    transactions = ledger_for(snapshot, DateRange(start=start, end=end), courier, default_rate_table())
    return LedgerResponse(
        courier=courier,
        closing_balance=closing_balance(transactions),
        transactions=[TransactionModel.model_validate(asdict(item)) for item in transactions],
    )


@router.get("/rates", response_model=RatesResponse, status_code=status.HTTP_200_OK)
def get_rates() -> RatesResponse:
    rates = default_rate_table()
    return RatesResponse(
        courier_rate=rates.courier_rate,
        rvp_area=rates.rvp_area,
        areas=[AreaRateModel(code=code, **values) for code, values in rates.as_dict().items()],
    )
