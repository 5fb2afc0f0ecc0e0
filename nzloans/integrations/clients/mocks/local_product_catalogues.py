"""
Local Product Catalogue Client (Mock/Local).

Purpose:
- Development-time catalogue source when the site is not being served.
- Reads the same products.json document the HTTP client would fetch.

Swap:
Replace with clients/real_http/product_catalogues.py by setting
CATALOGUE_MODE=http and CATALOGUE_BASE_URL.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from nzloans.error_handler import CatalogueNetworkError, CatalogueParseError
from nzloans.integrations.contracts.interfaces import CatalogueSource

logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR = Path(__file__).resolve().parents[4] / "data"


class LocalCatalogueSource(CatalogueSource):
    def __init__(
        self,
        data_dir: Optional[Union[str, Path]] = None,
        products_path: str = "data/products.json",
    ) -> None:
        self.data_dir = Path(data_dir) if data_dir else DEFAULT_DATA_DIR
        # products_path is relative to the site root; data_dir already points at data/
        self.file_path = self.data_dir / Path(products_path).name

    @property
    def origin(self) -> str:
        return self.data_dir.resolve().as_uri()

    async def fetch_catalogue(self) -> Dict[str, Any]:
        logger.debug("Reading catalogue from %s", self.file_path)
        try:
            raw = self.file_path.read_text(encoding="utf-8")
        except OSError as exc:
            raise CatalogueNetworkError(
                f"Catalogue file {self.file_path} could not be read: {exc}",
                payload={"path": str(self.file_path)},
            ) from exc

        try:
            return json.loads(raw)
        except json.JSONDecodeError as exc:
            raise CatalogueParseError(
                f"Catalogue file {self.file_path} is not valid JSON: {exc}",
                payload={"path": str(self.file_path)},
            ) from exc
