"""
Inventory API client — handles all communication with the remote
inventory API.

Every equipment record, user and history entry is owned by that API;
this client only builds requests, decodes JSON responses and turns
failures into ``ApiError`` / ``ApiConnectionError`` so the service
layer can decide what the user sees.

Configuration is read from Flask ``current_app.config``:
    - ``INVENTORY_API_BASE_URL``: e.g. ``http://localhost:3001/api``
    - ``INVENTORY_API_KEY``:      Optional bearer token.
    - ``INVENTORY_API_TIMEOUT``:  Seconds before a request is abandoned.
"""

import json
import logging
from typing import Any

import urllib3
from flask import current_app

from inventory.models.user import SessionUser

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """The API answered with an error status or an unreadable body."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status


class ApiConnectionError(ApiError):
    """The API could not be reached at all (refused, DNS, timeout)."""


class InventoryApiClient:
    """
    Client for the remote inventory REST API.

    Usage inside a Flask request or app context::

        client = InventoryApiClient()
        records = client.list_equipment(current_user)
    """

    def __init__(self) -> None:
        """
        Initialize the client by reading config from Flask app context.

        Raises:
            RuntimeError: If called outside a Flask application context.
        """
        self.base_url: str = current_app.config["INVENTORY_API_BASE_URL"].rstrip("/")
        self.api_key: str = current_app.config.get("INVENTORY_API_KEY", "")
        self.timeout: float = current_app.config.get("INVENTORY_API_TIMEOUT", 10)

        self.headers: dict[str, str] = {"Accept": "application/json"}
        if self.api_key:
            self.headers["Authorization"] = f"Bearer {self.api_key}"

        logger.debug("InventoryApiClient initialized — base_url=%s", self.base_url)

    # =================================================================
    # Public API
    # =================================================================

    def login(self, username: str, password: str) -> dict[str, Any]:
        """Verify credentials and return the API's user object."""
        return self._request(
            "POST", "login", payload={"username": username, "password": password}
        )

    def list_equipment(self, user: SessionUser) -> list[dict[str, Any]]:
        """
        Return the equipment records visible to ``user``.

        The API scopes the list by the requesting user and role.
        """
        data = self._request(
            "GET",
            "equipment",
            params={
                "userId": str(user.id),
                "username": user.username,
                "role": user.role,
            },
        )
        return data or []

    def create_equipment(
        self, payload: dict[str, Any], user: SessionUser
    ) -> dict[str, Any]:
        """
        Create a record on behalf of ``user``.

        Records added by non-administrators are queued by the API for
        admin approval.
        """
        body = dict(payload)
        body.pop("id", None)
        body.update(
            {"userId": user.id, "username": user.username, "role": user.role}
        )
        return self._request("POST", "equipment", payload=body)

    def update_equipment(
        self, payload: dict[str, Any], username: str
    ) -> dict[str, Any]:
        """Replace an existing record.  ``payload`` must carry its ``id``."""
        body = dict(payload)
        body["username"] = username
        return self._request("PUT", f"equipment/{payload['id']}", payload=body)

    def delete_equipment(self, equipment_id: int, username: str) -> None:
        """Delete a record.  The API records ``username`` in the history."""
        self._request(
            "DELETE", f"equipment/{equipment_id}", params={"username": username}
        )

    def get_equipment_history(self, equipment_id: int) -> list[dict[str, Any]]:
        """Return the change history of a record, newest first."""
        data = self._request("GET", f"equipment/{equipment_id}/history")
        return data or []

    def check_health(self) -> dict[str, Any]:
        """Call the API health endpoint; raises if it is unreachable."""
        return self._request("GET", "health") or {}

    # =================================================================
    # HTTP transport
    # =================================================================

    def _request(
        self,
        method: str,
        endpoint: str,
        params: dict[str, str] | None = None,
        payload: dict[str, Any] | None = None,
    ) -> Any:
        """
        Send an HTTP request to an inventory API endpoint.

        Args:
            method:   HTTP verb.
            endpoint: Relative path appended to ``base_url``.
            params:   Query-string parameters.
            payload:  JSON body.

        Returns:
            Parsed JSON response, or None for an empty body.

        Raises:
            ApiConnectionError: If the API could not be reached.
            ApiError:           For non-2xx responses or invalid JSON.
        """
        url = f"{self.base_url}/{endpoint}"
        headers = dict(self.headers)
        request_kw: dict[str, Any] = {"headers": headers}
        if params:
            request_kw["fields"] = params
        if payload is not None:
            headers["Content-Type"] = "application/json"
            request_kw["body"] = json.dumps(payload).encode("utf-8")

        logger.debug("Inventory API %s %s", method, url)

        try:
            with urllib3.PoolManager(
                timeout=urllib3.Timeout(total=self.timeout),
                retries=False,
            ) as http:
                response = http.request(method, url, **request_kw)
        except urllib3.exceptions.HTTPError as exc:
            logger.error("Could not reach inventory API %s %s: %s", method, url, exc)
            raise ApiConnectionError(
                f"Could not connect to {self.base_url}"
            ) from exc

        if 200 <= response.status < 300:
            if not response.data:
                return None
            try:
                return json.loads(response.data)
            except json.JSONDecodeError as exc:
                logger.error("Invalid JSON from inventory API %s: %s", endpoint, exc)
                raise ApiError(
                    "Invalid response from the inventory API.", response.status
                ) from exc

        message = _extract_error_message(response.data, response.status)
        logger.error(
            "Inventory API %s %s returned status %d: %s",
            method,
            endpoint,
            response.status,
            message,
        )
        raise ApiError(message, response.status)


def _extract_error_message(data: bytes, status: int) -> str:
    """
    Pull a human-readable message out of an error response body.

    The API answers errors with ``{"error": "..."}`` or
    ``{"message": "..."}``; plain-text bodies are used as-is.
    """
    text = data.decode("utf-8", errors="replace").strip() if data else ""
    try:
        body = json.loads(text) if text else None
    except json.JSONDecodeError:
        body = None

    if isinstance(body, dict):
        message = body.get("error") or body.get("message")
        if message:
            return str(message)
    if text and body is None:
        return text
    return f"HTTP {status}"


def get_client() -> InventoryApiClient:
    """Return a client bound to the current application's config."""
    return InventoryApiClient()
