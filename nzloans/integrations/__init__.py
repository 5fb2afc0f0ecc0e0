"""
Integrations layer.
This package contains all code used to communicate with external systems such as:
- The static product catalogue (local file or HTTP)
- Analytics reporting (Google Analytics or an in-memory recorder)

Key rule:
- LoanCatalog and ClickTracker MUST NOT talk to the network directly.
- They receive integration clients (under nzloans/integrations/clients) at construction.

Switching implementations:
- The selection of mock vs real clients happens in ONE place (nzloans/app.py).
"""

from .contracts.interfaces import (
    RATING_ORDER,
    AnalyticsHook,
    BrowserContext,
    CatalogueSource,
    KeyValueStore,
    Rating,
)
from .contracts.product_catalogues import (
    LoanAmountRange,
    Product,
    ProductFilters,
    filter_products,
    matches_search,
    parse_loan_amount,
)
from .contracts.clicks import ClickEvent

__all__ = [
    # interfaces
    "RATING_ORDER", "AnalyticsHook", "BrowserContext", "CatalogueSource",
    "KeyValueStore", "Rating",
    # products
    "LoanAmountRange", "Product", "ProductFilters", "filter_products",
    "matches_search", "parse_loan_amount",
    # clicks
    "ClickEvent",
]
