"""
HTTP surface.

Small Flask app exposing the raw Senetic feeds, the import trigger, the
health check and a per-vendor product count. Every route delegates to the
sync package; responses are JSON with 'success' and 'timestamp'.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from flask import Flask, jsonify, request
from flask_cors import CORS

from ..common.errors import FeedFetchError, ImportRunError, ShopifyAPIError
from ..common.settings import Settings
from ..senetic.api_client import CATALOGUE_FEED, INVENTORY_FEED, SeneticAPIClient
from ..shopify.api_client import ShopifyAPIClient
from ..shopify.products import ShopifyProductStore
from ..sync.health import check_health
from ..sync.importer import ImportOrchestrator

logger = logging.getLogger(__name__)

VERSION = "1.0.0"

OrchestratorFactory = Callable[..., ImportOrchestrator]


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _truthy(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in ("1", "true", "yes", "on")


def create_app(
    settings: Optional[Settings] = None,
    senetic: Optional[SeneticAPIClient] = None,
    shopify: Optional[ShopifyAPIClient] = None,
    orchestrator_factory: Optional[OrchestratorFactory] = None,
) -> Flask:
    """
    Build the Flask app.

    Args:
        settings: Runtime settings (loaded from the environment when omitted)
        senetic: Feed client (built from settings when omitted)
        shopify: Shopify client (built from settings when omitted)
        orchestrator_factory: Callable(dry_run=..., source=...) returning an
            ImportOrchestrator; defaults to ImportOrchestrator.from_settings
    """
    if settings is None:
        settings = Settings.from_env()
    if senetic is None:
        senetic = SeneticAPIClient(settings.senetic_auth, settings.senetic_base_url, settings.senetic_lang)
    if shopify is None:
        shopify = ShopifyAPIClient(settings.shopify_store_url, settings.shopify_access_token)
    if orchestrator_factory is None:
        def orchestrator_factory(dry_run: bool = False, source: str = "http") -> ImportOrchestrator:
            return ImportOrchestrator.from_settings(settings, dry_run=dry_run, source=source)

    store = ShopifyProductStore(shopify)

    app = Flask(__name__)
    CORS(app)

    @app.get("/")
    def index():
        return jsonify({
            "success": True,
            "message": "Senetic-Shopify Import App",
            "version": VERSION,
            "endpoints": {
                "inventory": "/senetic-inventory",
                "catalogue": "/senetic-catalogue",
                "import": "/import-shopify",
                "health": "/api/health",
                "products_count": "/api/products/count",
            },
            "timestamp": _now(),
        })

    @app.get("/health")
    def liveness():
        return jsonify({"success": True, "status": "healthy", "version": VERSION, "timestamp": _now()})

    def _show_feed(feed: str):
        try:
            payload = senetic.fetch_report(feed)
        except FeedFetchError as e:
            logger.error("Error fetching Senetic %s: %s", feed, e)
            return jsonify({"success": False, "error": str(e), "timestamp": _now()}), 500
        return jsonify({
            "success": True,
            "data": payload,
            "count": len(payload.get("lines") or []),
            "timestamp": _now(),
        })

    @app.get("/senetic-inventory")
    def show_inventory():
        return _show_feed(INVENTORY_FEED)

    @app.get("/senetic-catalogue")
    def show_catalogue():
        return _show_feed(CATALOGUE_FEED)

    @app.route("/import-shopify", methods=["GET"])
    @app.route("/api/import/trigger", methods=["POST"])
    def import_to_shopify():
        body = request.get_json(silent=True) or {}
        source = request.args.get("source") or body.get("source") or "manual"
        dry_run = _truthy(request.args.get("dry_run")) or bool(body.get("dry_run"))

        orchestrator = orchestrator_factory(dry_run=dry_run, source=source)
        try:
            summary = orchestrator.run()
        except ImportRunError as e:
            partial = e.summary.to_dict() if e.summary is not None else {}
            return jsonify({"success": False, "error": str(e), "summary": partial, "timestamp": _now()}), 500

        return jsonify({
            "success": True,
            "message": "Import completed",
            "summary": summary.to_dict(),
            "duration": summary.duration,
            "results": [result.to_dict() for result in summary.results],
            "dry_run": dry_run,
            "timestamp": _now(),
        })

    @app.get("/api/health")
    @app.get("/api/status")
    def health():
        report = check_health(shopify, senetic)
        return jsonify({"success": True, **report, "version": VERSION, "timestamp": _now()})

    @app.get("/api/products/count")
    def count_products():
        try:
            counts = store.count_products_by_vendor()
        except ShopifyAPIError as e:
            logger.error("Error counting products: %s", e)
            return jsonify({"success": False, "error": str(e), "timestamp": _now()}), 500
        return jsonify({"success": True, **counts, "timestamp": _now()})

    @app.errorhandler(404)
    def not_found(_error):
        return jsonify({"success": False, "error": "Endpoint not found", "timestamp": _now()}), 404

    @app.errorhandler(500)
    def server_error(error):
        logger.error("Unhandled error: %s", error)
        return jsonify({"success": False, "error": str(error), "timestamp": _now()}), 500

    return app
