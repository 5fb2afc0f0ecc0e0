import json
from datetime import timedelta

import pytest

from conftest import FIXED_NOW
from nzloans.analytics.click_tracker import ClickTracker
from nzloans.database.storage import InMemoryKeyValueStore
from nzloans.error_handler import StorageError
from nzloans.integrations.clients.mocks.analytics import RecordingAnalytics
from nzloans.integrations.contracts.clicks import to_iso_timestamp
from nzloans.integrations.contracts.interfaces import BrowserContext, KeyValueStore
from nzloans.integrations.contracts.product_catalogues import Product


class BrokenStore(KeyValueStore):
    def __init__(self):
        self.writes = 0

    def get_item(self, key):
        raise StorageError("storage disabled")

    def set_item(self, key, value):
        self.writes += 1
        raise StorageError("quota exceeded")

    def remove_item(self, key):
        raise StorageError("storage disabled")


class ExplodingAnalytics(RecordingAnalytics):
    def __call__(self, event_name, params):
        raise RuntimeError("network down")


def _click(product_id, commission, moment):
    return {
        "id": int(moment.timestamp() * 1000),
        "productId": product_id,
        "productName": f"Product {product_id}",
        "commission": commission,
        "timestamp": to_iso_timestamp(moment),
        "userAgent": "pytest",
        "referrer": "",
    }


def _tracker_with(clicks, fixed_clock, **kwargs):
    store = InMemoryKeyValueStore({"nz_product_clicks": json.dumps(clicks)})
    return ClickTracker(store, clock=fixed_clock, **kwargs)


def test_record_click_builds_event_and_persists(storage, fixed_clock):
    context = BrowserContext(origin="https://loans.example.co.nz", user_agent="Mozilla/5.0", referrer="https://google.co.nz")
    tracker = ClickTracker(storage, context=context, clock=fixed_clock)

    click = tracker.record_click(3, "Payday Advance", 12.5, {"position": 2})

    assert click.id == int(FIXED_NOW.timestamp() * 1000)
    assert click.timestamp == "2024-05-10T12:00:00.000Z"
    assert click.user_agent == "Mozilla/5.0"
    assert click.referrer == "https://google.co.nz"
    assert click.extra == {"position": 2}

    stored = json.loads(storage.get_item("nz_product_clicks"))
    assert stored == [
        {
            "id": click.id,
            "productId": 3,
            "productName": "Payday Advance",
            "commission": 12.5,
            "timestamp": "2024-05-10T12:00:00.000Z",
            "userAgent": "Mozilla/5.0",
            "referrer": "https://google.co.nz",
            "position": 2,
        }
    ]


def test_additional_data_overrides_standard_fields(storage, fixed_clock):
    tracker = ClickTracker(storage, clock=fixed_clock)

    click = tracker.record_click(1, "Flexi Personal Loan", 10, {"commission": 99, "referrer": "newsletter"})

    assert click.commission == 99
    assert click.referrer == "newsletter"
    assert json.loads(storage.get_item("nz_product_clicks"))[0]["commission"] == 99


def test_log_is_reloaded_on_construction(storage, fixed_clock):
    ClickTracker(storage, clock=fixed_clock).record_click(1, "A", 5)

    reloaded = ClickTracker(storage, clock=fixed_clock)

    assert len(reloaded.clicks) == 1
    assert reloaded.clicks[0].product_id == 1


@pytest.mark.parametrize("raw", ["{not json", '{"a": 1}', "[1, 2]"])
def test_malformed_storage_gives_empty_log(raw, fixed_clock, caplog):
    store = InMemoryKeyValueStore({"nz_product_clicks": raw})

    tracker = ClickTracker(store, clock=fixed_clock)

    assert tracker.clicks == []
    assert "Failed to load clicks" in caplog.text


def test_storage_failures_are_absorbed(fixed_clock, caplog):
    store = BrokenStore()
    tracker = ClickTracker(store, clock=fixed_clock)

    click = tracker.record_click(1, "A", 5)

    assert store.writes == 1
    assert tracker.clicks == [click]
    assert "Failed to save clicks" in caplog.text


def test_overflow_keeps_most_recent_half(storage, fixed_clock):
    tracker = ClickTracker(storage, clock=fixed_clock)

    for i in range(1000):
        tracker.record_click(i, f"Product {i}", 1)
    assert len(tracker.clicks) == 1000

    tracker.record_click(1000, "Product 1000", 1)

    clicks = tracker.clicks
    assert len(clicks) == 500
    assert [c.product_id for c in clicks] == list(range(501, 1001))
    assert len(json.loads(storage.get_item("nz_product_clicks"))) == 500


def test_custom_limits(storage, fixed_clock):
    tracker = ClickTracker(storage, clock=fixed_clock, max_entries=3, truncate_to=2)

    for i in range(4):
        tracker.record_click(i, "x", 1)

    assert [c.product_id for c in tracker.clicks] == [2, 3]


def test_truncate_to_cannot_exceed_max_entries(storage):
    with pytest.raises(ValueError):
        ClickTracker(storage, max_entries=10, truncate_to=20)


@pytest.mark.parametrize("truncate_to", [0, -5])
def test_truncate_to_must_keep_at_least_one_click(storage, truncate_to):
    with pytest.raises(ValueError):
        ClickTracker(storage, max_entries=10, truncate_to=truncate_to)


def test_analytics_hook_receives_fixed_field_set(storage, fixed_clock):
    analytics = RecordingAnalytics()
    tracker = ClickTracker(storage, analytics=analytics, clock=fixed_clock)

    tracker.record_click(2, "Drive Away Car Loan", 30, {"position": 1})

    assert analytics.events == [
        (
            "product_click",
            {
                "product_id": 2,
                "product_name": "Drive Away Car Loan",
                "commission": 30,
                "event_category": "nz_loan_products",
                "currency": "NZD",
            },
        )
    ]


def test_analytics_failure_does_not_break_recording(storage, fixed_clock, caplog):
    tracker = ClickTracker(storage, analytics=ExplodingAnalytics(), clock=fixed_clock)

    click = tracker.record_click(2, "Drive Away Car Loan", 30)

    assert tracker.clicks == [click]
    assert "Analytics reporting failed" in caplog.text


def test_click_stats_split_today_and_total(fixed_clock):
    yesterday = FIXED_NOW - timedelta(days=1)
    tracker = _tracker_with(
        [_click(1, 10, FIXED_NOW), _click(2, 20, FIXED_NOW), _click(1, 5, yesterday)],
        fixed_clock,
    )

    assert tracker.get_click_stats() == {
        "totalClicks": 3,
        "todayClicks": 2,
        "totalRevenue": 35,
        "todayRevenue": 30,
    }


def test_click_stats_treat_missing_commission_as_zero(fixed_clock):
    no_commission = _click(1, None, FIXED_NOW)
    tracker = _tracker_with([no_commission, _click(1, 7, FIXED_NOW)], fixed_clock)

    stats = tracker.get_click_stats()

    assert stats["totalRevenue"] == 7
    assert stats["todayClicks"] == 2


def test_click_stats_on_empty_log(storage, fixed_clock):
    assert ClickTracker(storage, clock=fixed_clock).get_click_stats() == {
        "totalClicks": 0,
        "todayClicks": 0,
        "totalRevenue": 0,
        "todayRevenue": 0,
    }


def test_product_stats_per_product(fixed_clock):
    yesterday = FIXED_NOW - timedelta(days=1)
    tracker = _tracker_with(
        [_click(1, 10, FIXED_NOW), _click(1, 5, yesterday), _click(2, 20, FIXED_NOW)],
        fixed_clock,
    )
    products = [
        Product(id=1, company="A", product="One", category="C"),
        Product(id=2, company="B", product="Two", category="C"),
        Product(id=3, company="C", product="Three", category="C"),
    ]

    stats = tracker.get_product_stats(products)

    assert stats == {
        1: {"totalClicks": 2, "todayClicks": 1, "totalRevenue": 15},
        2: {"totalClicks": 1, "todayClicks": 1, "totalRevenue": 20},
        3: {"totalClicks": 0, "todayClicks": 0, "totalRevenue": 0},
    }
