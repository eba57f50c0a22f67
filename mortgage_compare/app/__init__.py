"""Application factory and app-wide configuration."""

from __future__ import annotations

import atexit
import logging
from typing import Optional

from flask import Flask
from flask_cors import CORS

from mortgage_compare.app.api.routes import api_bp
from mortgage_compare.app.surfaces import SnapshotSurface
from mortgage_compare.clients.downstream import ServiceClient
from mortgage_compare.config import Settings, load_settings
from mortgage_compare.core.charts import SURFACE_IDS
from mortgage_compare.core.orchestrator import Downstream, Orchestrator

EXTENSION_KEY = "mortgage_compare"


def create_app(settings: Optional[Settings] = None, client: Optional[Downstream] = None) -> Flask:
    """Build the Flask app instance, wiring one orchestrator to the remote services."""
    settings = settings or load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = Flask(__name__)
    CORS(
        app,
        resources={r"/api/*": {"origins": settings.cors_origins}},
        supports_credentials=True,
    )

    if client is None:
        client = ServiceClient(
            settings.downstream_base_url,
            timeout=settings.downstream_timeout,
            max_workers=settings.downstream_workers,
        )
    surfaces = {surface_id: SnapshotSurface(surface_id) for surface_id in SURFACE_IDS}
    orchestrator = Orchestrator(client, surfaces=surfaces, currency=settings.chart_currency)

    app.extensions[EXTENSION_KEY] = {
        "settings": settings,
        "client": client,
        "orchestrator": orchestrator,
        "surfaces": surfaces,
    }
    app.register_blueprint(api_bp, url_prefix="/api")
    atexit.register(shutdown, app)
    return app


def shutdown(app: Flask) -> None:
    """Destroy chart renderers, then stop the downstream worker pool."""
    services = app.extensions[EXTENSION_KEY]
    services["orchestrator"].close()
    services["client"].close()
