#!/usr/bin/env python3
"""
Senetic -> Shopify Import server

Serves the import HTTP API (see src/web/app.py) with Flask's built-in
server.

Usage:
    python3 server.py
    python3 server.py --port 8080 --verbose
"""

import argparse
import logging

from src.common.log_config import setup_logging
from src.common.settings import Settings
from src.web import create_app

logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(description="Run the Senetic -> Shopify import server")
    parser.add_argument("--host", default="0.0.0.0", help="Bind address (default: 0.0.0.0)")
    parser.add_argument("--port", type=int, help="Port (default: PORT env or 3000)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    setup_logging(verbose=args.verbose)
    settings = Settings.from_env()
    missing = settings.missing_required()
    if missing:
        logger.warning("Missing environment variables: %s", ", ".join(missing))

    port = args.port or settings.port
    app = create_app(settings)
    print(f"Senetic-Shopify Import App running on port {port}")
    print(f"  Health check:  http://localhost:{port}/health")
    print(f"  Inventory:     http://localhost:{port}/senetic-inventory")
    print(f"  Catalogue:     http://localhost:{port}/senetic-catalogue")
    print(f"  Import:        http://localhost:{port}/import-shopify")
    app.run(host=args.host, port=port)


if __name__ == "__main__":
    main()
