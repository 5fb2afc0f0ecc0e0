#!/usr/bin/env python3
"""
Print a report on the loan catalogue:
- product counts by category, approval rate and popularity
- optionally a filtered product listing
- click statistics from the configured click store

Uses config/app_config.yml; CATALOGUE_MODE / CATALOGUE_BASE_URL / REDIS_URL
from the environment or .env override it.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

load_dotenv()

from nzloans.app import build_services
from nzloans.error_handler import CatalogueLoadError, ErrorHandler
from nzloans.integrations.contracts.product_catalogues import LoanAmountRange, ProductFilters
from nzloans.utils.config_loader import load_app_config


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")


def build_filters(args: argparse.Namespace) -> ProductFilters:
    amount = None
    if args.amount_min is not None or args.amount_max is not None:
        amount = LoanAmountRange(
            min=args.amount_min or 0,
            max=args.amount_max if args.amount_max is not None else sys.maxsize,
        )
    return ProductFilters(
        category=args.category,
        amount_range=amount,
        min_approval_rate=args.min_approval,
        min_popularity=args.min_popularity,
        search=args.search,
    )


def wants_listing(args: argparse.Namespace) -> bool:
    return any(
        v is not None
        for v in (args.category, args.search, args.min_popularity, args.min_approval, args.amount_min, args.amount_max)
    )


async def run(args: argparse.Namespace) -> int:
    cfg = load_app_config(Path(args.config) if args.config else None)
    services = build_services(config=cfg)
    catalog = services.catalog

    try:
        stats = await catalog.get_product_stats()
    except CatalogueLoadError as exc:
        payload = ErrorHandler().handle_exception(exc, context={"origin": catalog.base_url})
        print(payload["message"], file=sys.stderr)
        return 1

    print("\n### Catalogue\n")
    print(json.dumps(stats, indent=2))

    if wants_listing(args):
        products = await catalog.get_filtered_products(build_filters(args))
        print(f"\n### Matching products ({len(products)})\n")
        for p in products:
            rate = p.approval_rate.value if p.approval_rate else "-"
            pop = p.popularity.value if p.popularity else "-"
            print(f"[{p.id}] {p.company} - {p.product} | {p.category} | {p.amount} | approval={rate} popularity={pop}")

    print("\n### Clicks\n")
    print(json.dumps(services.click_tracker.get_click_stats(), indent=2))
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Loan catalogue and click report")
    parser.add_argument("--config", help="Path to app_config.yml")
    parser.add_argument("--category")
    parser.add_argument("--search")
    parser.add_argument("--min-popularity", choices=["Low", "Medium", "High", "Very High"])
    parser.add_argument("--min-approval", choices=["Low", "Medium", "High", "Very High"])
    parser.add_argument("--amount-min", type=int)
    parser.add_argument("--amount-max", type=int)
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    setup_logging(args.verbose)
    sys.exit(asyncio.run(run(args)))


if __name__ == "__main__":
    main()
