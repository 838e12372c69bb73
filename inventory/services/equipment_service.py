"""
Equipment service — list, search, save and delete equipment records.

Routes never talk to the inventory API directly; they call this
module, which wraps ``api_client`` calls, maps JSON into
``Equipment`` records and turns API failures into the messages the
user sees.

Failure policy: loading failures are logged and produce an empty
list; save failures are raised as ``SaveError`` carrying a friendly
message for the form; delete and history failures propagate as
``ApiError`` for the route to flash.
"""

import logging
from dataclasses import dataclass

from flask import current_app

from inventory.models.equipment import Equipment, default_draft
from inventory.models.history import HistoryEntry
from inventory.models.user import SessionUser
from inventory.services import api_client
from inventory.services.api_client import ApiConnectionError, ApiError

logger = logging.getLogger(__name__)

REQUIRED_FIELDS_MESSAGE = "Equipamento e Serial são campos obrigatórios."
APPROVAL_PENDING_MESSAGE = (
    "Equipamento adicionado com sucesso! Sua solicitação foi enviada "
    "para aprovação do administrador."
)
UNKNOWN_SAVE_ERROR = "Falha desconhecida ao salvar."
_DATABASE_ERROR_PREFIX = "Database error: "


class SaveError(Exception):
    """Saving failed; ``message`` is ready to show inline in the form."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


@dataclass
class SaveResult:
    """Outcome of a successful save."""

    created: bool
    # Extra notice for the user, e.g. pending admin approval.
    notice: str | None = None


# =========================================================================
# Listing and search
# =========================================================================


def load_equipment(user: SessionUser) -> list[Equipment]:
    """
    Fetch every record visible to ``user``.

    A failed fetch is logged and yields an empty list so the page
    still renders.
    """
    try:
        rows = api_client.get_client().list_equipment(user)
    except ApiError as exc:
        logger.error("Failed to load equipment for %s: %s", user.username, exc)
        return []
    return [Equipment.from_api(row) for row in rows]


def filter_equipment(records: list[Equipment], search: str) -> list[Equipment]:
    """
    Return the records whose name, asset tag, serial or current user
    contains ``search``, ignoring case.

    An empty search returns every record, in the original order.
    """
    needle = (search or "").lower()
    return [
        item
        for item in records
        if needle in (item.name or "").lower()
        or needle in (item.asset_tag or "").lower()
        or needle in (item.serial or "").lower()
        or needle in (item.current_user or "").lower()
    ]


def find_equipment(user: SessionUser, equipment_id: int) -> Equipment | None:
    """
    Return a single record visible to ``user``, or None.

    The API exposes no single-record endpoint, so the user's list is
    fetched and searched.
    """
    for item in load_equipment(user):
        if item.id == equipment_id:
            return item
    return None


# =========================================================================
# Form draft and save
# =========================================================================


def build_draft(equipment: Equipment | None) -> dict[str, str]:
    """Seed the form from an existing record, or defaults for a new one."""
    if equipment is None:
        return default_draft()
    return equipment.to_draft()


def validate_draft(draft: dict[str, str]) -> str | None:
    """
    Return the inline error for a draft, or None when it can be saved.

    Only the name and serial are required.
    """
    if not (draft.get("name") or "").strip() or not (draft.get("serial") or "").strip():
        return REQUIRED_FIELDS_MESSAGE
    return None


def save_equipment(
    draft: dict[str, str],
    user: SessionUser,
    existing: Equipment | None = None,
) -> SaveResult:
    """
    Validate and submit a form draft.

    Updates ``existing`` when given, otherwise creates a new record.

    Args:
        draft:    Submitted form values keyed by field name.
        user:     The acting user.
        existing: Record being edited, or None to create.

    Returns:
        A ``SaveResult``; creates by non-admins carry the approval notice.

    Raises:
        SaveError: On validation failure (before any API call) or when
                   the API rejects the request.
    """
    error = validate_draft(draft)
    if error:
        raise SaveError(error)

    record = Equipment.from_draft(draft, base=existing)
    client = api_client.get_client()

    try:
        if existing is not None:
            client.update_equipment(record.to_api(), user.username)
            logger.info(
                "Equipment %s updated by %s", existing.id, user.username
            )
            return SaveResult(created=False)

        client.create_equipment(record.to_api(), user)
        logger.info("Equipment '%s' created by %s", record.name, user.username)
    except ApiError as exc:
        logger.error("Failed to save equipment: %s", exc)
        raise SaveError(friendly_error_message(exc)) from exc

    notice = None if user.is_admin else APPROVAL_PENDING_MESSAGE
    return SaveResult(created=True, notice=notice)


def friendly_error_message(exc: Exception) -> str:
    """
    Translate an API failure into copy the user can act on.

    Matches on the message text the API sends back, so it degrades to
    the raw message when the API changes its wording.
    """
    message = str(exc) or UNKNOWN_SAVE_ERROR

    if isinstance(exc, ApiConnectionError):
        return (
            "Erro de conexão com o servidor. Verifique se a API (backend) "
            f"está rodando em {current_app.config['INVENTORY_API_BASE_URL']}."
        )
    if "Database error" in message:
        return f"Erro no Banco de Dados: {message.replace(_DATABASE_ERROR_PREFIX, '')}"
    return message


# =========================================================================
# Delete and history
# =========================================================================


def delete_equipment(user: SessionUser, equipment_id: int) -> bool:
    """
    Delete a record if ``user`` holds the elevated role.

    Returns:
        False without calling the API when the user is not an admin,
        True once the API confirms the delete.

    Raises:
        ApiError: If the API rejects the delete.
    """
    if not user.is_admin:
        logger.warning(
            "Delete of equipment %s refused for non-admin %s",
            equipment_id,
            user.username,
        )
        return False

    api_client.get_client().delete_equipment(equipment_id, user.username)
    logger.info("Equipment %s deleted by %s", equipment_id, user.username)
    return True


def get_history(equipment_id: int) -> list[HistoryEntry]:
    """
    Return the change history of a record.

    Raises:
        ApiError: If the history could not be fetched.
    """
    rows = api_client.get_client().get_equipment_history(equipment_id)
    return [HistoryEntry.from_api(row) for row in rows]
