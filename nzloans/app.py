"""
Composition root.

The hosting application calls ``build_services()`` once per page session and
passes the returned catalogue and click tracker to whatever needs them. The
choice between mock and real integration clients happens here only.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from nzloans.analytics.click_tracker import ClickTracker
from nzloans.catalog.api import LoanCatalog
from nzloans.integrations.contracts.interfaces import (
    AnalyticsHook,
    BrowserContext,
    CatalogueSource,
    KeyValueStore,
)
from nzloans.utils.config_loader import AppConfig, load_app_config

logger = logging.getLogger(__name__)


@dataclass
class Services:
    config: AppConfig
    catalog: LoanCatalog
    click_tracker: ClickTracker


def build_catalogue_source(cfg: AppConfig) -> CatalogueSource:
    if cfg.catalogue.mode == "http":
        from nzloans.integrations.clients.real_http.product_catalogues import HttpCatalogueSource

        return HttpCatalogueSource(
            base_url=cfg.catalogue.base_url,
            products_path=cfg.catalogue.products_path,
            timeout_seconds=cfg.catalogue.timeout_seconds,
        )

    from nzloans.integrations.clients.mocks.local_product_catalogues import LocalCatalogueSource

    return LocalCatalogueSource(data_dir=cfg.catalogue.data_dir, products_path=cfg.catalogue.products_path)


def build_storage() -> KeyValueStore:
    # Use real Redis when REDIS_URL is set, else the in-memory stub
    if os.getenv("REDIS_URL"):
        from nzloans.database.redis_real import RedisKeyValueStore

        return RedisKeyValueStore(url=os.environ["REDIS_URL"])

    from nzloans.database.storage import InMemoryKeyValueStore

    return InMemoryKeyValueStore()


def build_analytics(cfg: AppConfig) -> Optional[AnalyticsHook]:
    measurement_id = os.getenv(cfg.analytics.measurement_id_env, "")
    api_secret = os.getenv(cfg.analytics.api_secret_env, "")
    if not cfg.analytics.enabled or not (measurement_id and api_secret):
        logger.info("Analytics reporting disabled")
        return None

    from nzloans.integrations.clients.real_http.analytics import GoogleAnalyticsReporter

    return GoogleAnalyticsReporter(measurement_id=measurement_id, api_secret=api_secret)


def build_services(
    config: Optional[AppConfig] = None,
    context: Optional[BrowserContext] = None,
    storage: Optional[KeyValueStore] = None,
    analytics: Optional[AnalyticsHook] = None,
) -> Services:
    load_dotenv()
    cfg = config or load_app_config()

    catalog = LoanCatalog(build_catalogue_source(cfg))
    tracker = ClickTracker(
        storage=storage if storage is not None else build_storage(),
        analytics=analytics if analytics is not None else build_analytics(cfg),
        context=context or BrowserContext(origin=catalog.base_url),
        storage_key=cfg.clicks.storage_key,
        max_entries=cfg.clicks.max_entries,
        truncate_to=cfg.clicks.truncate_to,
        event_category=cfg.clicks.event_category,
        currency=cfg.clicks.currency,
    )
    return Services(config=cfg, catalog=catalog, click_tracker=tracker)
