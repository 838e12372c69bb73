"""
Production entry point for the Equipment Inventory UI, served by Waitress.

Usage::

    FLASK_ENV=production SECRET_KEY=... INVENTORY_API_BASE_URL=... python wsgi.py

``WAITRESS_HOST`` and ``WAITRESS_PORT`` choose the listen address.
"""

import logging
import os

from waitress import serve

from inventory import create_app

logger = logging.getLogger(__name__)

# Production settings unless FLASK_ENV says otherwise.
app = create_app(os.environ.get("FLASK_ENV", "production"))

if __name__ == "__main__":
    host = os.environ.get("WAITRESS_HOST", "127.0.0.1")
    port = int(os.environ.get("WAITRESS_PORT", "8080"))
    logger.info(
        "Serving inventory UI on %s:%s (API: %s)",
        host,
        port,
        app.config["INVENTORY_API_BASE_URL"],
    )
    serve(app, host=host, port=port)
