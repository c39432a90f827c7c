import os
import sys

import pytest

# Add src to path for internal imports
src_path = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'src')
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from discount_tool.engine import CalculatorMode, PricingInput, compute
from discount_tool.services.history_service import CSV_COLUMNS, HistoryStore


def record(store: HistoryStore, original_price: float, mode=CalculatorMode.PRICE, **kwargs):
    p = PricingInput.defaults().replace(original_price=original_price, **kwargs)
    return store.add(p, compute(p, mode))


def test_entries_are_newest_first():
    store = HistoryStore()
    first = record(store, 10)
    second = record(store, 20)

    assert [e.id for e in store.list_entries()] == [second.id, first.id]


def test_oldest_entries_are_evicted_past_the_limit():
    store = HistoryStore(limit=3)
    for price in range(1, 6):
        record(store, price)

    prices = [e.original_price for e in store.list_entries()]
    assert prices == [5, 4, 3]
    assert len(store) == 3


def test_default_limit_is_fifty():
    store = HistoryStore()
    for price in range(60):
        record(store, price)
    assert len(store) == 50


def test_entry_holds_input_and_result():
    store = HistoryStore()
    entry = record(store, 100, additional_coupon=10, item_name="Headphones", currency="EUR")

    assert entry.calculation_mode == "PRICE"
    assert entry.item_name == "Headphones"
    assert entry.currency == "EUR"
    assert entry.final_price == pytest.approx(72)
    assert entry.total_saving == pytest.approx(28)
    assert entry.ai_advice is None
    assert entry.timestamp > 0


def test_ids_are_unique():
    store = HistoryStore()
    ids = {record(store, price).id for price in range(20)}
    assert len(ids) == 20


def test_non_finite_results_are_stored_as_none():
    store = HistoryStore()
    entry = record(store, 100, quantity=0, shipping_cost=5)
    assert entry.price_per_unit is None


def test_set_advice():
    store = HistoryStore()
    entry = record(store, 100)

    store.set_advice(entry.id, "Grab it.")
    assert store.get(entry.id).ai_advice == "Grab it."


def test_set_advice_unknown_id_raises():
    store = HistoryStore()
    with pytest.raises(ValueError, match="not found"):
        store.set_advice("missing", "text")


def test_clear():
    store = HistoryStore()
    record(store, 1)
    record(store, 2)

    store.clear()
    assert store.list_entries() == []


def test_to_input_reruns_the_same_calculation():
    store = HistoryStore()
    p = PricingInput.defaults().replace(original_price=64, deal_type="b2g1", quantity=5)
    result = compute(p, CalculatorMode.PRICE)
    entry = store.add(p, result)

    assert entry.to_input() == p
    assert compute(entry.to_input(), entry.calculation_mode) == result


def test_csv_mirror_round_trip(tmp_path):
    csv_path = tmp_path / "history" / "history.csv"
    store = HistoryStore(limit=5, csv_path=csv_path)
    entry = record(store, 100, item_name="Desk lamp")
    store.set_advice(entry.id, "Solid deal.")
    record(store, 40, mode=CalculatorMode.DISCOUNT, target_price=30)

    reloaded = HistoryStore(limit=5, csv_path=csv_path)
    entries = reloaded.list_entries()

    assert len(entries) == 2
    assert entries[0].calculation_mode == "DISCOUNT"
    assert entries[0].effective_discount_rate == pytest.approx(25)
    assert entries[1].id == entry.id
    assert entries[1].item_name == "Desk lamp"
    assert entries[1].ai_advice == "Solid deal."


def test_csv_mirror_respects_limit_on_load(tmp_path):
    csv_path = tmp_path / "history.csv"
    store = HistoryStore(limit=10, csv_path=csv_path)
    for price in range(8):
        record(store, price)

    reloaded = HistoryStore(limit=3, csv_path=csv_path)
    assert len(reloaded) == 3


def test_to_dataframe():
    store = HistoryStore()
    record(store, 10)
    record(store, 20)

    df = store.to_dataframe()
    assert list(df.columns) == CSV_COLUMNS
    assert df['original_price'].tolist() == [20, 10]


def test_to_csv_empty_history_has_header():
    csv_text = HistoryStore().to_csv()
    assert csv_text.splitlines()[0].split(',') == CSV_COLUMNS
