"""
Product catalogue contract: schemas and helpers for loan product listings.

The catalogue document is JSON shaped ``{"products": [...], "categories": [...]}``
with camelCase product keys (``approvalRate``, ``isActive``). Both the local
and the HTTP catalogue clients hand that document to ``LoanCatalog``, which
turns each entry into a ``Product`` through ``Product.from_dict``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from .interfaces import Rating

_DOLLAR_FIGURE = re.compile(r"\$([0-9,]+)")

_PRODUCT_KEYS = {
    "id",
    "company",
    "product",
    "category",
    "amount",
    "approvalRate",
    "popularity",
    "description",
    "isActive",
}


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class LoanAmountRange:
    min: int = 0
    max: int = 0


@dataclass(frozen=True)
class Product:
    id: int
    company: str
    product: str
    category: str
    amount: str = ""
    approval_rate: Optional[Rating] = None
    popularity: Optional[Rating] = None
    description: Optional[str] = None
    is_active: bool = True
    approval_rate_label: Optional[str] = None
    popularity_label: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict, compare=False)

    def __post_init__(self) -> None:
        # labels keep the catalogue's own spelling, including values off the scale
        if self.approval_rate_label is None and self.approval_rate is not None:
            object.__setattr__(self, "approval_rate_label", self.approval_rate.value)
        if self.popularity_label is None and self.popularity is not None:
            object.__setattr__(self, "popularity_label", self.popularity.value)

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "Product":
        is_active = raw.get("isActive")
        description = raw.get("description")
        return cls(
            id=int(raw["id"]),
            company=str(raw.get("company") or ""),
            product=str(raw.get("product") or ""),
            category=str(raw.get("category") or ""),
            amount=str(raw.get("amount") or ""),
            approval_rate=Rating.parse(raw.get("approvalRate")),
            popularity=Rating.parse(raw.get("popularity")),
            description=str(description) if description is not None else None,
            is_active=is_active is not False,
            approval_rate_label=_label(raw.get("approvalRate")),
            popularity_label=_label(raw.get("popularity")),
            metadata={k: v for k, v in raw.items() if k not in _PRODUCT_KEYS},
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "company": self.company,
            "product": self.product,
            "category": self.category,
            "amount": self.amount,
            "approvalRate": self.approval_rate_label,
            "popularity": self.popularity_label,
            "isActive": self.is_active,
        }
        if self.description is not None:
            data["description"] = self.description
        data.update(self.metadata)
        return data


@dataclass
class ProductFilters:
    """Optional filters when querying the product catalogue."""
    category: Optional[str] = None
    amount_range: Optional[LoanAmountRange] = None
    min_approval_rate: Optional[Rating] = None
    min_popularity: Optional[Rating] = None
    search: Optional[str] = None

    def __post_init__(self) -> None:
        self.min_approval_rate = _threshold(self.min_approval_rate)
        self.min_popularity = _threshold(self.min_popularity)

    @classmethod
    def from_mapping(cls, raw: Optional[Mapping[str, Any]]) -> "ProductFilters":
        """Build filters from a camelCase or snake_case dict, as sent by a page."""
        if not raw:
            return cls()

        def pick(*keys: str) -> Any:
            for key in keys:
                if raw.get(key):
                    return raw[key]
            return None

        amount = pick("amountRange", "amount_range")
        if isinstance(amount, Mapping):
            amount = LoanAmountRange(min=int(amount.get("min", 0)), max=int(amount.get("max", 0)))

        return cls(
            category=pick("category"),
            amount_range=amount,
            min_approval_rate=pick("minApprovalRate", "min_approval_rate"),
            min_popularity=pick("minPopularity", "min_popularity"),
            search=pick("search"),
        )


FiltersLike = Union[ProductFilters, Mapping[str, Any], None]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _label(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)


def _threshold(value: Any) -> Optional[Rating]:
    if not value:
        return None
    rating = Rating.parse(value)
    if rating is None:
        raise ValueError(f"Unknown rating threshold '{value}'.")
    return rating


def _to_int(figure: str) -> int:
    return int(figure.replace("$", "").replace(",", ""))


def parse_loan_amount(amount_str: Optional[str]) -> LoanAmountRange:
    """Parse strings such as "$5,000 - $10,000" or "Up to $2,000" into a range.

    Anything that is neither an "Up to" amount nor exactly two dollar figures
    parses to (0, 0).
    """
    if not amount_str or amount_str == "N/A":
        return LoanAmountRange()

    if "Up to" in amount_str:
        match = _DOLLAR_FIGURE.search(amount_str)
        return LoanAmountRange(min=0, max=_to_int(match.group(1)) if match else 0)

    figures = _DOLLAR_FIGURE.findall(amount_str)
    if len(figures) == 2:
        return LoanAmountRange(min=_to_int(figures[0]), max=_to_int(figures[1]))

    return LoanAmountRange()


def meets_threshold(value: Optional[Rating], minimum: Rating) -> bool:
    return value is not None and value.rank >= minimum.rank


def matches_search(product: Product, term: str) -> bool:
    """Case-insensitive substring match on company, name, category and description."""
    term = term.lower()
    fields = [product.company, product.product, product.category]
    if product.description:
        fields.append(product.description)
    return any(term in f.lower() for f in fields)


def amount_overlaps(product: Product, wanted: LoanAmountRange) -> bool:
    if product.amount == "N/A":
        return False
    parsed = parse_loan_amount(product.amount)
    return parsed.max >= wanted.min and parsed.min <= wanted.max


def filter_products(products: Iterable[Product], f: ProductFilters) -> List[Product]:
    """Apply ProductFilters in order: category, amount, approval, popularity, search."""
    result = list(products)

    if f.category:
        result = [p for p in result if p.category == f.category]
    if f.amount_range is not None:
        result = [p for p in result if amount_overlaps(p, f.amount_range)]
    if f.min_approval_rate is not None:
        result = [p for p in result if meets_threshold(p.approval_rate, f.min_approval_rate)]
    if f.min_popularity is not None:
        result = [p for p in result if meets_threshold(p.popularity, f.min_popularity)]
    if f.search:
        result = [p for p in result if matches_search(p, f.search)]

    return result
