"""
Auth blueprint — session login/logout against the inventory API.
"""

from flask import Blueprint

bp = Blueprint(
    "auth",
    __name__,
    template_folder="templates",
)

# Import routes after blueprint creation to avoid circular imports.
from inventory.blueprints.auth import routes  # noqa: E402, F401
