import itertools
import math
from datetime import datetime

import pytest

from courier_ledger.models.domain import AdvancePayment, Area, CompanyCodPayment, DeliveryEntry, OwnerExpense
from courier_ledger.services.aggregation import aggregate, allocate_owner_expense, earnings_by_courier
from courier_ledger.services.rates import RateTable

RATES = RateTable(
    [Area(code="BHILAI_3", name="Bhilai-3", company_rate=19.0), Area(code="CHARODA", name="Charoda", company_rate=35.0)],
    courier_rate=14.0,
    rvp_area="BHILAI_3",
)


def _entry(eid: str, courier: str, day: int, **fields) -> DeliveryEntry:
    return DeliveryEntry(id=eid, date=datetime(2024, 7, day), courier_name=courier, **fields)


def _sample_entries() -> list[DeliveryEntry]:
    return [
        _entry("E1", "Ramesh", 20, delivered={"BHILAI_3": 50}, rvp=3, expected_cod=15000.0, actual_cod_collected=15000.0, on_spot_advance=500.0),
        _entry("E2", "Suresh", 21, delivered={"CHARODA": 10}, returned={"CHARODA": 2}, expected_cod=2000.0, actual_cod_collected=1500.0),
        _entry("E3", "Ramesh", 22, delivered={"BHILAI_3": 7, "CHARODA": 3}, expected_cod=0.1, actual_cod_collected=0.0),
    ]


def test_operator_wide_totals():
    summary = aggregate(
        _sample_entries()[:2],
        advances=[AdvancePayment(id="A1", date=datetime(2024, 7, 20, 18), courier_name="Ramesh", amount=1000.0)],
        remittances=[CompanyCodPayment(id="R1", date=datetime(2024, 7, 21), amount=10000.0)],
        expenses=[OwnerExpense(id="X1", date=datetime(2024, 7, 21, 9), amount=95.0, description="Fuel")],
        rates=RATES,
    )

    assert summary.total_delivered == 60
    assert summary.total_returned == 2
    assert summary.total_work == 63
    assert summary.total_actual_cod == 16500
    assert summary.cod_in_hand == 16500 - 10000 - 95
    assert summary.total_advance == 1500
    assert summary.total_cod_shortage == 500
    assert summary.gross_payout == 882
    assert summary.total_net_payout == 882 - 500 - 500 - 1000
    assert summary.profit_before_expense == 475
    assert summary.total_profit == 380


def test_area_breakdown_lists_configured_and_observed_areas():
    entries = _sample_entries() + [_entry("E4", "Suresh", 23, delivered={"DURG": 5})]

    summary = aggregate(entries, rates=RATES)
    areas = {area.area: area for area in summary.areas}

    assert list(areas) == ["BHILAI_3", "CHARODA", "DURG"]
    assert areas["BHILAI_3"].delivered == 57
    assert areas["CHARODA"].delivered == 13
    assert areas["CHARODA"].returned == 2
    assert areas["CHARODA"].name == "Charoda"
    assert areas["DURG"].company_earning == 0


def test_per_courier_breakdown_includes_separate_advances():
    advances = [
        AdvancePayment(id="A1", date=datetime(2024, 7, 20), courier_name="Ramesh", amount=1000.0),
        AdvancePayment(id="A2", date=datetime(2024, 7, 20), courier_name="Mahesh", amount=200.0),
    ]

    summary = aggregate(_sample_entries(), advances=advances, rates=RATES)
    couriers = {courier.courier_name: courier for courier in summary.couriers}

    assert list(couriers) == ["Mahesh", "Ramesh", "Suresh"]
    assert couriers["Mahesh"].entry_count == 0
    assert couriers["Mahesh"].net_payout == -200
    assert couriers["Ramesh"].total_advance == 1500
    assert couriers["Ramesh"].total_work == 63


def test_totals_do_not_depend_on_input_order():
    entries = _sample_entries()
    expenses = [
        OwnerExpense(id="X1", date=datetime(2024, 7, 20), amount=0.1),
        OwnerExpense(id="X2", date=datetime(2024, 7, 21), amount=0.2),
        OwnerExpense(id="X3", date=datetime(2024, 7, 22), amount=0.3),
    ]

    baseline = aggregate(entries, expenses=expenses, rates=RATES)
    for ordering in itertools.permutations(entries):
        summary = aggregate(list(ordering), expenses=list(reversed(expenses)), rates=RATES)
        assert summary.total_profit == baseline.total_profit
        assert summary.total_cod_shortage == baseline.total_cod_shortage
        assert summary.total_net_payout == baseline.total_net_payout


def test_owner_expense_is_prorated_by_profit_share():
    summary = aggregate(
        _sample_entries()[:2],
        expenses=[OwnerExpense(id="X1", date=datetime(2024, 7, 21), amount=95.0)],
        rates=RATES,
    )
    couriers = {courier.courier_name: courier for courier in summary.couriers}

    assert couriers["Ramesh"].allocated_expense == pytest.approx(53.0)
    assert couriers["Suresh"].allocated_expense == pytest.approx(42.0)
    assert couriers["Ramesh"].profit_after_expense + couriers["Suresh"].profit_after_expense == pytest.approx(summary.total_profit)


def test_zero_profit_skips_expense_allocation():
    entries = [_entry("E1", "Ramesh", 20, returned={"BHILAI_3": 4})]

    summary = aggregate(entries, expenses=[OwnerExpense(id="X1", date=datetime(2024, 7, 20), amount=300.0)], rates=RATES)
    courier = summary.couriers[0]

    assert summary.profit_before_expense == 0
    assert summary.total_profit == -300
    assert courier.allocated_expense == 0
    assert courier.profit_after_expense == courier.profit_before_expense
    assert math.isfinite(courier.profit_after_expense)


def test_allocation_with_zero_total_leaves_rows_untouched():
    couriers = aggregate(_sample_entries(), rates=RATES).couriers
    before = [courier.profit_before_expense for courier in couriers]

    allocate_owner_expense(couriers, 500.0, 0.0)

    assert [courier.profit_after_expense for courier in couriers] == before


def test_empty_input_gives_zero_summary():
    summary = aggregate([], rates=RATES)

    assert summary.total_work == 0
    assert summary.total_profit == 0
    assert summary.couriers == []
    assert [area.area for area in summary.areas] == ["BHILAI_3", "CHARODA"]


def test_chart_series_orders_couriers_by_earnings():
    advances = [AdvancePayment(id="A1", date=datetime(2024, 7, 20), courier_name="Mahesh", amount=200.0)]

    series = earnings_by_courier(aggregate(_sample_entries(), advances=advances, rates=RATES))

    assert [point["name"] for point in series] == ["Ramesh", "Suresh"]
    assert series[1] == {"name": "Suresh", "payout": 140.0, "profit": 210.0}
