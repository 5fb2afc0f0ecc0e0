"""Catalogue access and click analytics helpers for the NZ loan comparison site."""

from nzloans.analytics.click_tracker import ClickTracker
from nzloans.catalog.api import LoanCatalog

__all__ = ["ClickTracker", "LoanCatalog"]
