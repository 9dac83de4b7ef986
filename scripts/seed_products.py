#!/usr/bin/env python3
"""
Seed the vector index with the demo product catalog.

Each product is stored with vector [color_code, size_code, price] and the
full product record as metadata.

Usage:
    # From project root, with venv active:
    PYTHONPATH=src python scripts/seed_products.py

    # Dry run - just print what would be written:
    PYTHONPATH=src python scripts/seed_products.py --dry-run

    # Clear the index before seeding:
    PYTHONPATH=src python scripts/seed_products.py --reset
"""

import argparse
import sys
import time
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from dotenv import load_dotenv
load_dotenv()

from config.constants import DEFAULT_CATALOG_CONFIG
from config.settings import get_settings
from core.logging import configure_logging_from_settings, get_logger
from search.catalog import batched, generate_catalog, product_to_vector_record
from search.vector_client import VectorIndexClient

logger = get_logger("seed_products")


def main():
    parser = argparse.ArgumentParser(description="Seed the vector index with demo products")
    parser.add_argument("--dry-run", action="store_true", help="Build records without writing them")
    parser.add_argument("--reset", action="store_true", help="Delete all vectors before seeding")
    parser.add_argument(
        "--batch-size",
        type=int,
        default=DEFAULT_CATALOG_CONFIG.UPSERT_BATCH_SIZE,
        help="Records per upsert request",
    )
    args = parser.parse_args()

    configure_logging_from_settings(get_settings(), json_logs=False)

    records = [product_to_vector_record(p) for p in generate_catalog()]
    logger.info("Built catalog records", count=len(records))

    if args.dry_run:
        for record in records[:5]:
            print(f"  {record['id']:<16} vector={record['vector']}")
        print(f"  ... {len(records)} records total (dry run, nothing written)")
        return

    client = VectorIndexClient()

    if args.reset:
        client.reset()
        logger.info("Cleared vector index")

    start = time.time()
    for i, batch in enumerate(batched(records, args.batch_size)):
        client.upsert(batch)
        logger.info("Upserted batch", batch=i, size=len(batch))

    logger.info("Seeding complete", count=len(records), seconds=round(time.time() - start, 2))


if __name__ == "__main__":
    main()
