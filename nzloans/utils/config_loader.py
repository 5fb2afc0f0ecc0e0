"""
Configuration loader for the catalogue and click tracking helpers
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Literal, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, model_validator

logger = logging.getLogger(__name__)


class CatalogueConfig(BaseModel):
    """Where the product catalogue is read from"""

    mode: Literal["local", "http"] = "local"
    base_url: str = ""
    products_path: str = "data/products.json"
    data_dir: Optional[str] = None
    timeout_seconds: float = Field(default=10.0, gt=0.0, le=120.0)


class ClicksConfig(BaseModel):
    """Click log persistence and reporting fields"""

    storage_key: str = "nz_product_clicks"
    max_entries: int = Field(default=1000, ge=1)
    truncate_to: int = Field(default=500, ge=1)
    event_category: str = "nz_loan_products"
    currency: str = "NZD"

    @model_validator(mode="after")
    def _check_truncation(self) -> "ClicksConfig":
        if self.truncate_to > self.max_entries:
            raise ValueError("truncate_to must not exceed max_entries")
        return self


class AnalyticsConfig(BaseModel):
    enabled: bool = False
    measurement_id_env: str = "GA_MEASUREMENT_ID"
    api_secret_env: str = "GA_API_SECRET"


class AppConfig(BaseModel):
    catalogue: CatalogueConfig = Field(default_factory=CatalogueConfig)
    clicks: ClicksConfig = Field(default_factory=ClicksConfig)
    analytics: AnalyticsConfig = Field(default_factory=AnalyticsConfig)


def load_app_config(config_path: Optional[Path] = None) -> AppConfig:
    """
    Load and validate the application configuration from a YAML file

    Args:
        config_path: Path to config file. Defaults to config/app_config.yml

    Returns:
        Validated AppConfig object, with environment overrides applied

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValidationError: If config doesn't match schema
    """
    if config_path is None:
        config_path = Path(__file__).parent.parent.parent / "config" / "app_config.yml"

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    try:
        cfg = AppConfig(**data)
        logger.info("Successfully loaded config from %s", config_path)
    except ValidationError as e:
        logger.error("Config validation failed: %s", e)
        raise

    return apply_env_overrides(cfg)


def apply_env_overrides(cfg: AppConfig) -> AppConfig:
    """CATALOGUE_MODE / CATALOGUE_BASE_URL in the environment win over the YAML file."""
    mode = os.getenv("CATALOGUE_MODE", "").strip().lower()
    if mode:
        if mode not in ("local", "http"):
            raise ValueError(f"CATALOGUE_MODE must be 'local' or 'http', got '{mode}'")
        cfg.catalogue.mode = mode
    base_url = os.getenv("CATALOGUE_BASE_URL", "").strip()
    if base_url:
        cfg.catalogue.base_url = base_url
    return cfg
