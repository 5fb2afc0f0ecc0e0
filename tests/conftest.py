"""Pytest fixtures for catalogue and click tracking tests."""

import copy
from datetime import datetime, timezone

import pytest

from nzloans.database.storage import InMemoryKeyValueStore
from nzloans.integrations.contracts.interfaces import CatalogueSource

CATALOGUE = {
    "categories": ["Personal Loans", "Car Loans", "Short-Term Loans", "Business Loans"],
    "products": [
        {
            "id": 1,
            "company": "Kiwi Lending Co",
            "product": "Flexi Personal Loan",
            "category": "Personal Loans",
            "amount": "$2,000 - $50,000",
            "approvalRate": "High",
            "popularity": "Very High",
            "description": "Unsecured loan with no early repayment fees.",
        },
        {
            "id": 2,
            "company": "Southern Cross Finance",
            "product": "Drive Away Car Loan",
            "category": "Car Loans",
            "amount": "$5,000 - $100,000",
            "approvalRate": "Medium",
            "popularity": "High",
        },
        {
            "id": 3,
            "company": "QuickCash NZ",
            "product": "Payday Advance",
            "category": "Short-Term Loans",
            "amount": "Up to $2,000",
            "approvalRate": "Very High",
            "popularity": "Medium",
        },
        {
            "id": 4,
            "company": "Tasman Business Bank",
            "product": "Merchant Line of Credit",
            "category": "Business Loans",
            "amount": "N/A",
            "approvalRate": "Low",
            "popularity": "Low",
            "description": "Revolving credit sized to card turnover.",
        },
        {
            "id": 5,
            "company": "Southern Cross Finance",
            "product": "Classic Car Loan",
            "category": "Car Loans",
            "amount": "$10,000 - $80,000",
            "approvalRate": "High",
            "popularity": "Very High",
            "isActive": False,
        },
        {
            "id": 6,
            "company": "Aotearoa Credit Union",
            "product": "Member Personal Loan",
            "category": "Personal Loans",
            "amount": "$1,000 - $30,000",
        },
    ],
}

FIXED_NOW = datetime(2024, 5, 10, 12, 0, tzinfo=timezone.utc)


class FakeCatalogueSource(CatalogueSource):
    """Returns a canned document, or raises the queued errors first."""

    def __init__(self, document=None, errors=None):
        self.document = copy.deepcopy(CATALOGUE) if document is None else document
        self.errors = list(errors or [])
        self.calls = 0

    @property
    def origin(self) -> str:
        return "https://loans.example.co.nz"

    async def fetch_catalogue(self):
        self.calls += 1
        if self.errors:
            raise self.errors.pop(0)
        return copy.deepcopy(self.document)


@pytest.fixture
def catalogue_document():
    return copy.deepcopy(CATALOGUE)


@pytest.fixture
def source():
    return FakeCatalogueSource()


@pytest.fixture
def storage():
    return InMemoryKeyValueStore()


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW
