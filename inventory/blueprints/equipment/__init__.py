"""
Equipment blueprint — inventory list, form, export, terms and history.
"""

from flask import Blueprint

bp = Blueprint(
    "equipment",
    __name__,
    template_folder="templates",
)

from inventory.blueprints.equipment import routes  # noqa: E402, F401
