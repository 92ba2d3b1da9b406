#!/usr/bin/env python3
"""
Senetic -> Shopify Import

Runs one import non-interactively: checks configuration and upstream
health, imports every in-stock product of the configured categories, and
writes a JSON report plus a dated log under logs/.

Requires SENETIC_AUTH, SHOPIFY_STORE_URL and SHOPIFY_ACCESS_TOKEN in the
environment or in a .env file. CLOUDINARY_* variables enable image relay.

Usage:
    python3 import_products.py
    python3 import_products.py --dry-run
    python3 import_products.py --categories "Reti,Sistemi di sorveglianza" --brands "Hikvision,Ubiquiti"
    python3 import_products.py --max-products 10 --verbose
"""

import argparse
import logging
import sys
from pathlib import Path

from src.common.config_loader import split_csv_setting
from src.common.log_config import setup_logging
from src.common.settings import Settings
from src.sync.runner import ImportRunner, log_file_path

logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(
        description="Import Senetic products into Shopify"
    )
    parser.add_argument(
        "--categories",
        help="Comma-separated Senetic categories (overrides config/filters.yaml)",
    )
    parser.add_argument(
        "--brands",
        help="Comma-separated brands to import (default: all brands)",
    )
    parser.add_argument(
        "--max-products",
        type=int,
        help="Process at most N matching products",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Look products up but do not create, update or upload anything",
    )
    parser.add_argument(
        "--skip-health-check",
        action="store_true",
        help="Do not probe Shopify and Senetic before importing",
    )
    parser.add_argument(
        "--log-dir",
        default="logs",
        help="Directory for the run log and JSON report (default: logs)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress info messages, show only warnings and errors"
    )

    args = parser.parse_args()
    log_dir = Path(args.log_dir)
    setup_logging(verbose=args.verbose, quiet=args.quiet, log_file=log_file_path(log_dir))

    settings = Settings.from_env()
    if args.categories:
        settings.categories = split_csv_setting(args.categories)
    if args.brands:
        settings.brands = split_csv_setting(args.brands)
    if args.max_products:
        settings.max_products = args.max_products

    print("=" * 60)
    print("Senetic -> Shopify Import")
    print("=" * 60)
    print(f"  Categories:       {', '.join(settings.categories)}")
    print(f"  Brands:           {', '.join(settings.brands) if settings.brands else 'all'}")
    print(f"  Max products:     {settings.max_products or 'all'}")
    print(f"  Dry run:          {args.dry_run}")
    print(f"  Log directory:    {log_dir}")

    runner = ImportRunner(
        settings,
        log_dir=log_dir,
        dry_run=args.dry_run,
        skip_health_check=args.skip_health_check,
    )
    sys.exit(runner.run())


if __name__ == "__main__":
    main()
