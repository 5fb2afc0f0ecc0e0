"""
Loan product catalogue accessor.

Loads the catalogue document once per page session, keeps it in memory and
serves filtered views of the active products.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Optional

from nzloans.error_handler import CatalogueParseError
from nzloans.integrations.contracts.interfaces import CatalogueSource, Rating
from nzloans.integrations.contracts.product_catalogues import (
    FiltersLike,
    LoanAmountRange,
    Product,
    ProductFilters,
    filter_products,
    matches_search,
    meets_threshold,
    parse_loan_amount,
)

logger = logging.getLogger(__name__)


class LoanCatalog:
    def __init__(self, source: CatalogueSource):
        self.source = source
        self.base_url = source.origin
        self.products: List[Product] = []
        self.categories: List[str] = []
        self.is_loaded = False
        self._inflight: Optional[asyncio.Task] = None

    # --- Loading ------------------------------------------------------------

    async def load_products(self) -> List[Product]:
        """Fetch the catalogue and replace the in-memory lists.

        Concurrent callers share one in-flight fetch. On failure the catalogue
        is left empty and not loaded, and the error propagates.
        """
        if self._inflight is None:
            self._inflight = asyncio.ensure_future(self._load())
            self._inflight.add_done_callback(self._clear_inflight)
        return await asyncio.shield(self._inflight)

    def _clear_inflight(self, task: asyncio.Task) -> None:
        if self._inflight is task:
            self._inflight = None

    async def _load(self) -> List[Product]:
        logger.info("Loading products from %s", self.source.origin)
        try:
            data = await self.source.fetch_catalogue()
            products, categories = self._parse_catalogue(data)
        except Exception as exc:
            logger.error("Failed to load products: %s", exc)
            self.products = []
            self.categories = []
            self.is_loaded = False
            raise

        self.products = products
        self.categories = categories
        self.is_loaded = True
        logger.info(
            "Successfully loaded %d products and %d categories",
            len(self.products),
            len(self.categories),
        )
        return self.products

    @staticmethod
    def _parse_catalogue(data: Any):
        if not isinstance(data, dict):
            raise CatalogueParseError("Catalogue body must be a JSON object", payload={"body": data})

        raw_products = data.get("products") or []
        raw_categories = data.get("categories") or []
        if not isinstance(raw_products, list) or not isinstance(raw_categories, list):
            raise CatalogueParseError("'products' and 'categories' must be arrays")

        if not all(isinstance(item, dict) for item in raw_products):
            raise CatalogueParseError("Every product entry must be a JSON object")

        try:
            products = [Product.from_dict(item) for item in raw_products]
        except (KeyError, TypeError, ValueError) as exc:
            raise CatalogueParseError(f"Malformed product entry: {exc}") from exc

        return products, list(raw_categories)

    async def _ensure_loaded(self) -> None:
        if not self.is_loaded:
            await self.load_products()

    # --- Queries ------------------------------------------------------------

    async def get_all_products(self) -> List[Product]:
        await self._ensure_loaded()
        return [p for p in self.products if p.is_active]

    async def get_featured_products(self, limit: int = 6) -> List[Product]:
        products = await self.get_all_products()
        featured = [p for p in products if p.popularity in (Rating.VERY_HIGH, Rating.HIGH)]
        return featured[:limit]

    async def get_product_by_id(self, product_id: Any) -> Optional[Product]:
        products = await self.get_all_products()
        try:
            wanted = int(product_id)
        except (TypeError, ValueError):
            return None
        return next((p for p in products if p.id == wanted), None)

    async def get_products_by_category(self, category: Optional[str]) -> List[Product]:
        products = await self.get_all_products()
        if not category:
            return products
        return [p for p in products if p.category == category]

    async def get_filtered_products(self, filters: FiltersLike = None) -> List[Product]:
        if not isinstance(filters, ProductFilters):
            filters = ProductFilters.from_mapping(filters)
        products = await self.get_all_products()
        return filter_products(products, filters)

    @staticmethod
    def parse_loan_amount(amount_str: Optional[str]) -> LoanAmountRange:
        return parse_loan_amount(amount_str)

    async def get_categories(self) -> List[str]:
        await self._ensure_loaded()
        return self.categories

    async def search_products(self, query: Optional[str]) -> List[Product]:
        products = await self.get_all_products()
        if not query:
            return products
        return [p for p in products if matches_search(p, query)]

    async def get_products_by_popularity(self, min_popularity: Any = "High") -> List[Product]:
        threshold = Rating.parse(min_popularity)
        if threshold is None:
            raise ValueError(f"Unknown popularity '{min_popularity}'.")
        products = await self.get_all_products()
        return [p for p in products if meets_threshold(p.popularity, threshold)]

    async def get_product_stats(self) -> Dict[str, Any]:
        products = await self.get_all_products()

        stats: Dict[str, Any] = {
            "total": len(products),
            "byCategory": {},
            "byApprovalRate": {},
            "byPopularity": {},
        }
        for product in products:
            _bump(stats["byCategory"], product.category)
            _bump(stats["byApprovalRate"], product.approval_rate_label)
            _bump(stats["byPopularity"], product.popularity_label)

        return stats


def _bump(counts: Dict[Any, int], key: Any) -> None:
    counts[key] = counts.get(key, 0) + 1
