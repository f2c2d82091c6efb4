#!/usr/bin/env python3
"""Populate the product catalog with randomised sample rental equipment.

Products are written either to the rental backend configured through
``RENTDESK_BACKEND_BASE_URL`` or, with ``--api-url``, to a running RentDesk
service through its ``/tools/products/create`` endpoint. The mock store only
lives inside the serving process, so seeding without one of those targets is
refused.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import random
import sys
from typing import Dict, List, Sequence

import httpx

from rentdesk.config import get_settings
from rentdesk.dependencies.services import get_backend_client_cached
from rentdesk.schemas.product import ProductCreateRequest
from rentdesk.services.catalog_seed import SeedSummary, batched, generate_products, summarize
from rentdesk.services.products import ProductService

logger = logging.getLogger("seed_products")

MOCK_MODE_MESSAGE = (
    "RENTDESK_USE_MOCK_DATA is enabled, so there is no backend to seed: the in-memory "
    "store belongs to the running service. Pass --api-url http://localhost:8000 to seed "
    "a running RentDesk instance, or configure RENTDESK_BACKEND_BASE_URL."
)


def positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return number


def _print_summary(summary: SeedSummary, currency: str) -> None:
    print("\nSeeding summary:")
    print(f"  Created {summary.created} products in {summary.batches} batch(es)")
    print("\nProducts by category:")
    for category, count in summary.by_category.items():
        print(f"  {category}: {count} products")
    print("\nPrice statistics:")
    print(f"  Average: {currency} {summary.average_price:,.2f}/day")
    print(f"  Range: {currency} {summary.min_price:,.2f} - {currency} {summary.max_price:,.2f}/day")
    print("\nStock statistics:")
    print(f"  Total units: {summary.total_units}")


async def _seed_backend(batches: Sequence[Sequence[Dict[str, object]]]) -> None:
    client = get_backend_client_cached()
    service = ProductService(client)
    try:
        for number, batch in enumerate(batches, start=1):
            await asyncio.gather(
                *(service.create(ProductCreateRequest(**product)) for product in batch)
            )
            logger.info("Inserted batch %d/%d", number, len(batches))
    finally:
        await client.close()


async def _seed_service(
    api_url: str,
    batches: Sequence[Sequence[Dict[str, object]]],
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> None:
    async with httpx.AsyncClient(base_url=api_url.rstrip("/"), timeout=30.0, transport=transport) as client:
        for number, batch in enumerate(batches, start=1):
            responses: List[httpx.Response] = await asyncio.gather(
                *(
                    client.post("/tools/products/create", json=ProductCreateRequest(**product).model_dump(mode="json"))
                    for product in batch
                )
            )
            for response in responses:
                response.raise_for_status()
            logger.info("Inserted batch %d/%d via %s", number, len(batches), api_url)


def main(argv: list[str] | None = None) -> int:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Generate a sample rental catalog.")
    parser.add_argument(
        "--count",
        type=positive_int,
        default=settings.seed_product_count,
        help="Number of products to generate.",
    )
    parser.add_argument(
        "--batch-size",
        type=positive_int,
        default=10,
        help="Products inserted per batch.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducible catalogs.",
    )
    parser.add_argument(
        "--api-url",
        default=None,
        help="Base URL of a running RentDesk service to seed through its HTTP API.",
    )

    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")

    if args.api_url is None and settings.use_mock_data:
        print(MOCK_MODE_MESSAGE, file=sys.stderr)
        return 2

    products = generate_products(args.count, random.Random(args.seed))
    batches = batched(products, args.batch_size)
    try:
        if args.api_url:
            asyncio.run(_seed_service(args.api_url, batches))
            target = args.api_url
        else:
            asyncio.run(_seed_backend(batches))
            target = str(settings.backend_base_url)
    except Exception as exc:  # pragma: no cover - manual utility
        print(f"Seeding failed: {exc}", file=sys.stderr)
        return 1

    _print_summary(summarize(products, len(batches)), settings.currency)
    print(f"\nProduct seeding of {target} completed successfully.")
    return 0


if __name__ == "__main__":  # pragma: no cover - manual utility
    raise SystemExit(main())
