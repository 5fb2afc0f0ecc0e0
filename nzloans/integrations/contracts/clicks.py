"""
Click event contract.

A click is stored with camelCase keys so the persisted log stays readable by
the site's front end::

    {"id": 1715342400000, "productId": 3, "productName": "...",
     "commission": 25, "timestamp": "2024-05-10T12:00:00.000Z",
     "userAgent": "...", "referrer": "...", ...extra fields}
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any, Dict, Mapping, Optional

_STANDARD_KEYS = (
    "id",
    "productId",
    "productName",
    "commission",
    "timestamp",
    "userAgent",
    "referrer",
)


def to_iso_timestamp(moment: datetime) -> str:
    """UTC ISO-8601 with millisecond precision and a trailing Z."""
    if moment.tzinfo is None:
        moment = moment.astimezone()
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def parse_iso_timestamp(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    text = str(value)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


@dataclass
class ClickEvent:
    id: int
    product_id: Any
    product_name: Optional[str]
    commission: Any
    timestamp: str
    user_agent: str = ""
    referrer: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "ClickEvent":
        return cls(
            id=raw.get("id"),
            product_id=raw.get("productId"),
            product_name=raw.get("productName"),
            commission=raw.get("commission"),
            timestamp=raw.get("timestamp"),
            user_agent=raw.get("userAgent", ""),
            referrer=raw.get("referrer", ""),
            extra={k: v for k, v in raw.items() if k not in _STANDARD_KEYS},
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "productId": self.product_id,
            "productName": self.product_name,
            "commission": self.commission,
            "timestamp": self.timestamp,
            "userAgent": self.user_agent,
            "referrer": self.referrer,
        }
        data.update(self.extra)
        return data

    @property
    def revenue(self) -> float:
        """Commission as a number; missing or non-numeric counts as 0."""
        if isinstance(self.commission, bool) or not isinstance(self.commission, (int, float)):
            return 0
        return self.commission

    def local_date(self) -> Optional[date]:
        moment = parse_iso_timestamp(self.timestamp)
        if moment is None:
            return None
        return moment.astimezone().date()
