"""
Authorization decorators for route-level access control.

Used in combination with Flask-Login's ``@login_required``::

    @bp.route('/equipment/<int:equipment_id>/delete', methods=['POST'])
    @login_required
    @role_required('Admin')
    def equipment_delete(equipment_id):
        ...
"""

import logging
from functools import wraps

from flask import abort, flash, request
from flask_login import current_user

logger = logging.getLogger(__name__)


def role_required(*role_names: str):
    """
    Decorator that restricts access to users with one of the specified roles.

    Args:
        role_names: One or more role name strings (e.g., 'Admin').
    """

    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            if not current_user.is_authenticated:
                abort(401)
            if not current_user.has_role(*role_names):
                logger.warning(
                    "Access denied: user %s with role '%s' "
                    "attempted %s %s (requires one of: %s)",
                    current_user.username,
                    current_user.role,
                    request.method,
                    request.path,
                    ", ".join(role_names),
                )
                flash("Você não tem permissão para realizar esta ação.", "danger")
                abort(403)
            return func(*args, **kwargs)

        return wrapper

    return decorator
