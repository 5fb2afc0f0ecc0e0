"""
HTTP Product Catalogue Client.

Fetches the static catalogue document (``data/products.json``) from the site
origin. This client should be the ONLY place that talks HTTP for product
catalogue data.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

import httpx

from nzloans.error_handler import CatalogueNetworkError, CatalogueParseError
from nzloans.integrations.contracts.interfaces import CatalogueSource

logger = logging.getLogger(__name__)


class HttpCatalogueSource(CatalogueSource):
    def __init__(
        self,
        base_url: Optional[str] = None,
        products_path: str = "data/products.json",
        timeout_seconds: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = (base_url or os.getenv("CATALOGUE_BASE_URL", "")).rstrip("/")
        self.products_path = products_path.removeprefix("./").lstrip("/")
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    @property
    def origin(self) -> str:
        return self.base_url

    @property
    def url(self) -> str:
        return f"{self.base_url}/{self.products_path}"

    async def fetch_catalogue(self) -> Dict[str, Any]:
        if not self.base_url:
            raise CatalogueNetworkError("CATALOGUE_BASE_URL is not configured.")

        logger.debug("GET %s", self.url)
        try:
            async with httpx.AsyncClient(timeout=self.timeout_seconds, transport=self._transport) as client:
                response = await client.get(self.url, headers={"Accept": "application/json"})
        except httpx.HTTPError as exc:
            raise CatalogueNetworkError(f"Request to {self.url} failed: {exc}") from exc

        if not response.is_success:
            raise CatalogueNetworkError(
                f"HTTP error! status: {response.status_code}",
                status_code=response.status_code,
                payload={"url": self.url},
            )

        try:
            return response.json()
        except ValueError as exc:
            raise CatalogueParseError(
                f"Catalogue at {self.url} is not valid JSON: {exc}",
                payload={"url": self.url},
            ) from exc
