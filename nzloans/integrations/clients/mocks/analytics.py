"""
Mock analytics hook.

Does NOT make any network calls; keeps every reported event in memory so
tests and local runs can inspect what would have been sent.
"""

from __future__ import annotations

from typing import Any, Dict, List, Tuple

from nzloans.integrations.contracts.interfaces import AnalyticsHook


class RecordingAnalytics(AnalyticsHook):
    def __init__(self) -> None:
        self.events: List[Tuple[str, Dict[str, Any]]] = []

    def __call__(self, event_name: str, params: Dict[str, Any]) -> None:
        self.events.append((event_name, dict(params)))
