from datetime import datetime

import pytest

from courier_ledger.models.domain import AdvancePayment, DeliveryEntry
from courier_ledger.persistence import store as store_module
from courier_ledger.persistence.store import (
    ADVANCE_PAYMENTS_TABLE,
    COURIERS_TABLE,
    DELIVERY_RECORDS_TABLE,
    DuplicateCourierError,
    LedgerStore,
)


def test_unconfigured_store_reads_empty_and_skips_writes(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(store_module, "get_supabase_client", lambda: None)
    store = LedgerStore()

    snapshot = store.snapshot()
    created = store.create_advance(AdvancePayment(id="", date=datetime(2024, 7, 20), courier_name="Ramesh", amount=10.0))

    assert snapshot.entries == [] and snapshot.couriers == []
    assert created.id


def test_listing_skips_undecodable_documents(fake_supabase):
    fake_supabase.tables[DELIVERY_RECORDS_TABLE] = [
        {"id": "E1", "date": "2024-07-20", "courier_name": "Ramesh", "delivered": {"BHILAI_3": 3}},
        {"id": "E2", "courier_name": "Broken"},
    ]

    entries = LedgerStore(fake_supabase).list_delivery_entries()

    assert [entry.id for entry in entries] == ["E1"]


def test_failing_table_is_treated_as_empty(fake_supabase):
    fake_supabase.tables[ADVANCE_PAYMENTS_TABLE] = [{"id": "A1", "date": "2024-07-20", "courier_name": "Ramesh", "amount": 5}]
    fake_supabase.failing.add(ADVANCE_PAYMENTS_TABLE)

    assert LedgerStore(fake_supabase).list_advances() == []


def test_created_entry_round_trips_through_the_store(fake_supabase):
    store = LedgerStore(fake_supabase)
    entry = DeliveryEntry(id="", date=datetime(2024, 7, 20), courier_name="Ramesh", delivered={"CHARODA": 4}, rvp=1)

    created = store.create_delivery_entry(entry)
    listed = store.list_delivery_entries()

    assert created.id
    assert listed == [created]


def test_delete_entry_removes_document(fake_supabase):
    fake_supabase.tables[DELIVERY_RECORDS_TABLE] = [{"id": "E1", "date": "2024-07-20", "courier_name": "Ramesh"}]
    store = LedgerStore(fake_supabase)

    store.delete_delivery_entry("E1")
    store.delete_delivery_entry("missing")

    assert fake_supabase.tables[DELIVERY_RECORDS_TABLE] == []


def test_duplicate_courier_names_are_rejected_case_insensitively(fake_supabase):
    store = LedgerStore(fake_supabase)
    store.create_courier("Ramesh")

    with pytest.raises(DuplicateCourierError):
        store.create_courier("  ramesh ")

    assert [courier.name for courier in store.list_couriers()] == ["Ramesh"]


def test_snapshot_resolves_names_from_courier_ids(fake_supabase):
    fake_supabase.tables[COURIERS_TABLE] = [{"id": "c1", "name": "Ramesh Kumar"}]
    fake_supabase.tables[DELIVERY_RECORDS_TABLE] = [
        {"id": "E1", "date": "2024-07-20", "courier_name": "Ramesh", "courier_id": "c1"},
        {"id": "E2", "date": "2024-07-20", "courier_name": "Suresh", "courier_id": "gone"},
    ]

    snapshot = LedgerStore(fake_supabase).snapshot()

    assert [entry.courier_name for entry in snapshot.entries] == ["Ramesh Kumar", "Suresh"]
    assert snapshot.courier_names() == ["Ramesh Kumar", "Suresh"]


def test_legacy_entries_without_pincode_use_the_store_rvp_area(fake_supabase):
    fake_supabase.tables[DELIVERY_RECORDS_TABLE] = [{"id": "E1", "date": "2024-07-20", "deliveryBoyName": "Ramesh", "delivered": 8}]

    entries = LedgerStore(fake_supabase, rvp_area="CHARODA").list_delivery_entries()

    assert entries[0].delivered == {"CHARODA": 8}
