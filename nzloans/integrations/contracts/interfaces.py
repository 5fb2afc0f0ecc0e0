from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class Rating(str, Enum):
    """Ordinal scale shared by approval rate and popularity."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    VERY_HIGH = "Very High"

    @property
    def rank(self) -> int:
        return RATING_ORDER[self]

    @classmethod
    def parse(cls, value: Any) -> Optional["Rating"]:
        """Return the matching Rating, or None for missing/unknown values."""
        if isinstance(value, Rating):
            return value
        if not value:
            return None
        try:
            return cls(str(value).strip())
        except ValueError:
            return None


RATING_ORDER: Dict[Rating, int] = {
    Rating.LOW: 1,
    Rating.MEDIUM: 2,
    Rating.HIGH: 3,
    Rating.VERY_HIGH: 4,
}


# ---------------------------------------------------------------------------
# Shared data models
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class BrowserContext:
    origin: str = ""
    user_agent: str = ""
    referrer: str = ""


# ---------------------------------------------------------------------------
# Abstract collaborator interfaces
# ---------------------------------------------------------------------------

class CatalogueSource(ABC):
    """Every catalogue client (local file or HTTP) must implement this interface."""

    @property
    @abstractmethod
    def origin(self) -> str:
        """Base location the catalogue is read from."""

    @abstractmethod
    async def fetch_catalogue(self) -> Dict[str, Any]:
        """Return the decoded catalogue document.

        Raises CatalogueNetworkError when the resource cannot be fetched and
        CatalogueParseError when the body is not valid JSON.
        """


class KeyValueStore(ABC):
    """String key -> string value store used to persist the click log."""

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """Return the stored value, or None when the key is absent."""

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Delete key if present."""


class AnalyticsHook(ABC):
    """External reporting function, called as hook(event_name, params)."""

    @abstractmethod
    def __call__(self, event_name: str, params: Dict[str, Any]) -> None:
        """Report a single named event."""
