"""
Click tracking for outbound product links.

Every click is appended to a bounded log that is persisted as one JSON array
in the key-value store and optionally reported to an analytics hook.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List, Optional

from nzloans.error_handler import StorageError
from nzloans.integrations.contracts.clicks import ClickEvent, to_iso_timestamp
from nzloans.integrations.contracts.interfaces import AnalyticsHook, BrowserContext, KeyValueStore
from nzloans.integrations.contracts.product_catalogues import Product

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "nz_product_clicks"


def _local_now() -> datetime:
    return datetime.now().astimezone()


class ClickTracker:
    def __init__(
        self,
        storage: KeyValueStore,
        analytics: Optional[AnalyticsHook] = None,
        context: Optional[BrowserContext] = None,
        clock: Callable[[], datetime] = _local_now,
        storage_key: str = DEFAULT_STORAGE_KEY,
        max_entries: int = 1000,
        truncate_to: int = 500,
        event_category: str = "nz_loan_products",
        currency: str = "NZD",
    ):
        if not 1 <= truncate_to <= max_entries:
            raise ValueError("truncate_to must be between 1 and max_entries")
        self.storage = storage
        self.analytics = analytics
        self.context = context or BrowserContext()
        self.clock = clock
        self.storage_key = storage_key
        self.max_entries = max_entries
        self.truncate_to = truncate_to
        self.event_category = event_category
        self.currency = currency
        self._clicks: List[ClickEvent] = self.load_clicks()

    @property
    def clicks(self) -> List[ClickEvent]:
        return list(self._clicks)

    # --- Persistence --------------------------------------------------------

    def load_clicks(self) -> List[ClickEvent]:
        try:
            raw = self.storage.get_item(self.storage_key)
            if not raw:
                return []
            data = json.loads(raw)
            if not isinstance(data, list):
                raise ValueError(f"expected a JSON array, got {type(data).__name__}")
            return [ClickEvent.from_dict(item) for item in data]
        except (StorageError, ValueError, TypeError, AttributeError) as exc:
            logger.warning("Failed to load clicks: %s", exc)
            return []

    def save_clicks(self) -> None:
        try:
            payload = json.dumps([c.to_dict() for c in self._clicks], default=str)
            self.storage.set_item(self.storage_key, payload)
        except (StorageError, TypeError, ValueError) as exc:
            logger.error("Failed to save clicks: %s", exc)

    # --- Recording ----------------------------------------------------------

    def record_click(
        self,
        product_id: Any,
        product_name: Optional[str],
        commission: Any,
        additional_data: Optional[Dict[str, Any]] = None,
    ) -> ClickEvent:
        now = self.clock()
        data: Dict[str, Any] = {
            "id": int(now.timestamp() * 1000),
            "productId": product_id,
            "productName": product_name,
            "commission": commission,
            "timestamp": to_iso_timestamp(now),
            "userAgent": self.context.user_agent,
            "referrer": self.context.referrer,
        }
        data.update(additional_data or {})
        click = ClickEvent.from_dict(data)

        self._clicks.append(click)
        if len(self._clicks) > self.max_entries:
            self._clicks = self._clicks[-self.truncate_to:]

        self.save_clicks()
        self._report(product_id, product_name, commission)

        return click

    def _report(self, product_id: Any, product_name: Optional[str], commission: Any) -> None:
        if self.analytics is None:
            return
        try:
            self.analytics(
                "product_click",
                {
                    "product_id": product_id,
                    "product_name": product_name,
                    "commission": commission,
                    "event_category": self.event_category,
                    "currency": self.currency,
                },
            )
        except Exception as exc:
            logger.warning("Analytics reporting failed for product %s: %s", product_id, exc)

    # --- Statistics ---------------------------------------------------------

    def get_click_stats(self) -> Dict[str, Any]:
        today = self.clock().astimezone().date()
        today_clicks = [c for c in self._clicks if c.local_date() == today]

        return {
            "totalClicks": len(self._clicks),
            "todayClicks": len(today_clicks),
            "totalRevenue": sum(c.revenue for c in self._clicks),
            "todayRevenue": sum(c.revenue for c in today_clicks),
        }

    def get_product_stats(self, products: Iterable[Product]) -> Dict[Any, Dict[str, Any]]:
        today = self.clock().astimezone().date()
        stats: Dict[Any, Dict[str, Any]] = {}
        for product in products:
            product_clicks = [c for c in self._clicks if c.product_id == product.id]
            stats[product.id] = {
                "totalClicks": len(product_clicks),
                "todayClicks": sum(1 for c in product_clicks if c.local_date() == today),
                "totalRevenue": sum(c.revenue for c in product_clicks),
            }
        return stats
