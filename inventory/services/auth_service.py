"""
Auth service — session login against the inventory API.

Credentials are checked by the remote API; on success the returned
user object is stored in the Flask session and rebuilt by the
Flask-Login user loader on every request.
"""

import logging

from flask import session

from inventory.models.user import SessionUser, UserRole
from inventory.services import api_client
from inventory.services.api_client import ApiConnectionError, ApiError

logger = logging.getLogger(__name__)

# Session key holding the serialized SessionUser.
SESSION_USER_KEY = "inventory_user"


def authenticate(username: str, password: str) -> SessionUser:
    """
    Verify credentials with the inventory API.

    Returns:
        The authenticated user, already stored in the session.

    Raises:
        ValueError: With a user-facing message if login fails.
    """
    if not username or not password:
        raise ValueError("Informe usuário e senha.")

    try:
        payload = api_client.get_client().login(username, password)
    except ApiConnectionError as exc:
        raise ValueError(
            "Erro de conexão com o servidor. Tente novamente mais tarde."
        ) from exc
    except ApiError as exc:
        logger.warning("Login failed for %s: %s", username, exc)
        raise ValueError("Usuário ou senha inválidos.") from exc

    if not isinstance(payload, dict) or "id" not in payload:
        logger.error("Login response for %s had no user id", username)
        raise ValueError("Resposta inválida do servidor de autenticação.")

    user = SessionUser.from_api(payload)
    store_session_user(user)
    logger.info("User %s signed in (role=%s)", user.username, user.role)
    return user


def build_dev_user(role: str) -> SessionUser:
    """Build an offline user for the development login bypass."""
    role = UserRole.ADMIN.value if role.lower() == "admin" else UserRole.USER.value
    username = f"dev.{role.lower()}"
    user = SessionUser(
        id=0,
        username=username,
        display_name=f"Dev {role}",
        email=f"{username}@localhost",
        role=role,
    )
    store_session_user(user)
    return user


def store_session_user(user: SessionUser) -> None:
    """Persist ``user`` in the Flask session."""
    session[SESSION_USER_KEY] = user.to_session()


def load_session_user(user_id: str) -> SessionUser | None:
    """
    Flask-Login user loader: rebuild the user stored in the session.

    Returns None (anonymous) if the session holds no user or a user
    with a different id.
    """
    data = session.get(SESSION_USER_KEY)
    if not data:
        return None
    try:
        user = SessionUser.from_session(data)
    except (TypeError, KeyError):
        logger.warning("Discarding malformed session user")
        return None
    if user.get_id() != str(user_id):
        return None
    return user


def clear_session() -> None:
    """Remove all application data from the Flask session."""
    session.clear()
