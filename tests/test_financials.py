from datetime import datetime

import pytest

from courier_ledger.models.domain import Area, DeliveryEntry
from courier_ledger.services.financials import compute_entry_financials
from courier_ledger.services.rates import RateTable

RATES = RateTable(
    [Area(code="BHILAI_3", name="Bhilai-3", company_rate=19.0), Area(code="CHARODA", name="Charoda", company_rate=35.0)],
    courier_rate=14.0,
    rvp_area="BHILAI_3",
)


def _entry(**fields) -> DeliveryEntry:
    fields.setdefault("id", "E1")
    fields.setdefault("date", datetime(2024, 7, 20))
    fields.setdefault("courier_name", "Ramesh")
    return DeliveryEntry(**fields)


def test_single_area_entry_with_reverse_pickups():
    entry = _entry(
        delivered={"BHILAI_3": 50},
        rvp=3,
        expected_cod=15000.0,
        actual_cod_collected=15000.0,
        on_spot_advance=500.0,
    )

    result = compute_entry_financials(entry, RATES)

    assert result.total_work == 53
    assert result.gross_payout == 742
    assert result.cod_shortage == 0
    assert result.net_payout == 242
    assert result.company_earning == 1007
    assert result.profit_contribution == 265


def test_shortage_is_deducted_even_with_a_reason():
    entry = _entry(
        delivered={"BHILAI_3": 10},
        expected_cod=18000.0,
        actual_cod_collected=17500.0,
        cod_shortage_reason="Customer paid part online",
    )

    result = compute_entry_financials(entry, RATES)

    assert result.cod_shortage == 500
    assert result.net_payout == 140 - 500


def test_over_collection_never_yields_negative_shortage():
    entry = _entry(delivered={"BHILAI_3": 1}, expected_cod=100.0, actual_cod_collected=250.0)

    result = compute_entry_financials(entry, RATES)

    assert result.cod_shortage == 0
    assert result.net_payout == 14


def test_areas_are_billed_at_their_own_rates():
    entry = _entry(delivered={"BHILAI_3": 10, "CHARODA": 4}, returned={"CHARODA": 2})

    result = compute_entry_financials(entry, RATES)

    assert result.total_work == 14
    assert result.gross_payout == 14 * 14
    assert result.company_earning == 10 * 19 + 4 * 35
    assert result.by_area["CHARODA"].returned == 2
    assert result.by_area["CHARODA"].company_earning == 140


def test_returned_parcels_earn_nothing():
    entry = _entry(returned={"BHILAI_3": 6})

    result = compute_entry_financials(entry, RATES)

    assert result.total_work == 0
    assert result.gross_payout == 0
    assert result.profit_contribution == 0


def test_unknown_area_resolves_to_zero_rates():
    entry = _entry(delivered={"DURG": 12, "CHARODA": 1})

    result = compute_entry_financials(entry, RATES)

    assert result.total_work == 13
    assert result.by_area["DURG"].courier_pay == 0
    assert result.by_area["DURG"].company_earning == 0
    assert result.profit_contribution == pytest.approx(35 - 14)


def test_reverse_pickups_follow_the_configured_area():
    charoda_rvp = RateTable(RATES.areas, courier_rate=14.0, rvp_area="CHARODA")
    entry = _entry(rvp=2)

    assert compute_entry_financials(entry, RATES).company_earning == 38
    assert compute_entry_financials(entry, charoda_rvp).company_earning == 70


def test_courier_rate_override_applies_to_one_area():
    rates = RateTable(
        [Area(code="BHILAI_3", name="Bhilai-3", company_rate=19.0), Area(code="CHARODA", name="Charoda", company_rate=35.0, courier_rate=16.0)],
        courier_rate=14.0,
        rvp_area="BHILAI_3",
    )
    entry = _entry(delivered={"BHILAI_3": 1, "CHARODA": 1})

    assert compute_entry_financials(entry, rates).gross_payout == 30


def test_missing_numbers_are_treated_as_zero():
    entry = _entry(delivered={"BHILAI_3": None}, rvp=None, expected_cod=None, actual_cod_collected=None, on_spot_advance=None)

    result = compute_entry_financials(entry, RATES)

    assert result.total_work == 0
    assert result.net_payout == 0
