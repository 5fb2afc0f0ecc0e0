"""
Google Analytics reporting client.

Sends click events to the GA4 Measurement Protocol. Used when GA_MEASUREMENT_ID
and GA_API_SECRET are configured; otherwise no analytics hook is wired and the
click tracker simply skips reporting.
"""

from __future__ import annotations

import logging
import os
import uuid
from typing import Any, Dict, Optional

import httpx

from nzloans.integrations.contracts.interfaces import AnalyticsHook

logger = logging.getLogger(__name__)

GA_COLLECT_URL = "https://www.google-analytics.com/mp/collect"


class GoogleAnalyticsReporter(AnalyticsHook):
    def __init__(
        self,
        measurement_id: Optional[str] = None,
        api_secret: Optional[str] = None,
        client_id: Optional[str] = None,
        endpoint: str = GA_COLLECT_URL,
        timeout_seconds: float = 5.0,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.measurement_id = measurement_id or os.getenv("GA_MEASUREMENT_ID", "")
        self.api_secret = api_secret or os.getenv("GA_API_SECRET", "")
        self.client_id = client_id or str(uuid.uuid4())
        self.endpoint = endpoint
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    def __call__(self, event_name: str, params: Dict[str, Any]) -> None:
        if not self.measurement_id or not self.api_secret:
            raise ValueError("GA_MEASUREMENT_ID and GA_API_SECRET must be configured.")

        payload = {
            "client_id": self.client_id,
            "events": [{"name": event_name, "params": params}],
        }
        query = {"measurement_id": self.measurement_id, "api_secret": self.api_secret}

        with httpx.Client(timeout=self.timeout_seconds, transport=self._transport) as client:
            response = client.post(self.endpoint, params=query, json=payload)
            response.raise_for_status()
        logger.debug("Reported %s to Google Analytics", event_name)
