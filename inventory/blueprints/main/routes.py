"""
Routes for the main blueprint — landing page and health check.
"""

from flask import redirect, url_for
from flask_login import login_required

from inventory.blueprints.main import bp
from inventory.services import api_client
from inventory.services.api_client import ApiError


@bp.route("/")
@login_required
def index():
    """Send signed-in users straight to the equipment inventory."""
    return redirect(url_for("equipment.equipment_list"))


@bp.route("/health")
def health_check():
    """
    Health check endpoint for monitoring and load balancers.

    Returns 200 if the app is running and can reach the inventory API.
    """
    try:
        api_client.get_client().check_health()
        return {"status": "healthy", "api": "reachable"}, 200
    except ApiError as exc:
        return {"status": "unhealthy", "api": str(exc)}, 503
