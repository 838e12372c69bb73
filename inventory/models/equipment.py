"""
Equipment record — the single entity managed by the inventory UI.

Records are owned by the remote inventory API; this module only maps
between the API's JSON shape (Portuguese camelCase keys) and a Python
dataclass, and between the dataclass and the flat string "draft" that
backs the equipment form.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any


class EquipmentStatus(str, Enum):
    """Lifecycle status of a piece of equipment."""

    IN_STOCK = "Estoque"
    IN_USE = "Em Uso"
    MAINTENANCE = "Manutenção"
    DISPOSED = "Descartado"


class TermCondition(str, Enum):
    """Signature state of the responsibility term for a record."""

    NOT_APPLICABLE = "N/A"
    PENDING = "Pendente"
    SIGNED_DELIVERY = "Assinado - Entrega"
    SIGNED_RETURN = "Assinado - Devolução"


STATUS_CHOICES: list[str] = [status.value for status in EquipmentStatus]
TERM_CONDITION_CHOICES: list[str] = [cond.value for cond in TermCondition]

# Attribute name -> API key.  Attribute names double as form field names.
WIRE_FIELDS: dict[str, str] = {
    "name": "equipamento",
    "brand": "brand",
    "model": "model",
    "equipment_type": "tipo",
    "asset_tag": "patrimonio",
    "serial": "serial",
    "current_user": "usuarioAtual",
    "employee_email": "emailColaborador",
    "sector": "setor",
    "location": "local",
    "status": "status",
    "delivery_date": "dataEntregaUsuario",
    "return_date": "dataDevolucao",
    "purchase_invoice": "notaCompra",
    "logistics_note": "notaPlKm",
    "warranty": "garantia",
    "notes": "observacoes",
    "term_condition": "condicaoTermo",
    "specs": "identificador",
    "os_name": "nomeSO",
    "total_memory": "memoriaFisicaTotal",
}

# Fields the form edits.  The hardware inventory fields (specs, OS,
# memory) are collected by the API and never edited by hand.
FORM_FIELDS: tuple[str, ...] = (
    "name",
    "serial",
    "asset_tag",
    "brand",
    "model",
    "equipment_type",
    "current_user",
    "employee_email",
    "sector",
    "location",
    "status",
    "term_condition",
    "delivery_date",
    "return_date",
    "purchase_invoice",
    "logistics_note",
    "warranty",
    "notes",
)

_DATE_FIELDS = ("delivery_date", "return_date")

# Badge colours for the status column of the list view.
_STATUS_BADGES: dict[str, str] = {
    EquipmentStatus.IN_USE.value: "bg-success",
    EquipmentStatus.IN_STOCK.value: "bg-warning text-dark",
    EquipmentStatus.MAINTENANCE.value: "bg-orange",
}


def parse_api_date(value: Any) -> date | None:
    """
    Parse a date sent by the API.

    The API returns either ``YYYY-MM-DD`` or a full ISO timestamp
    (``2024-03-01T00:00:00.000Z``); only the date part is kept.
    Empty or malformed values become ``None``.
    """
    if not value:
        return None
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).split("T")[0])
    except ValueError:
        return None


@dataclass
class Equipment:
    """A single tracked asset and its metadata."""

    id: int | None = None
    name: str = ""
    brand: str = ""
    model: str = ""
    equipment_type: str = ""
    asset_tag: str = ""
    serial: str = ""
    current_user: str = ""
    employee_email: str = ""
    sector: str = ""
    location: str = ""
    status: str = EquipmentStatus.IN_STOCK.value
    delivery_date: date | None = None
    return_date: date | None = None
    purchase_invoice: str = ""
    logistics_note: str = ""
    warranty: str = ""
    notes: str = ""
    term_condition: str = TermCondition.NOT_APPLICABLE.value
    specs: str = ""
    os_name: str = ""
    total_memory: str = ""
    # Keys returned by the API that this UI does not know about.  They
    # are sent back untouched on update.
    extra: dict[str, Any] = field(default_factory=dict)

    # ---- API mapping -----------------------------------------------------

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> "Equipment":
        """Build a record from an API JSON object."""
        known_keys = set(WIRE_FIELDS.values()) | {"id"}
        values: dict[str, Any] = {}

        for attr, key in WIRE_FIELDS.items():
            raw = payload.get(key)
            if attr in _DATE_FIELDS:
                values[attr] = parse_api_date(raw)
            elif raw is None:
                # Keep the dataclass default (status, term condition, "").
                continue
            else:
                values[attr] = str(raw)

        raw_id = payload.get("id")
        return cls(
            id=int(raw_id) if raw_id not in (None, "") else None,
            extra={k: v for k, v in payload.items() if k not in known_keys},
            **values,
        )

    def to_api(self) -> dict[str, Any]:
        """Serialize the record into the API's JSON shape."""
        payload: dict[str, Any] = dict(self.extra)
        for attr, key in WIRE_FIELDS.items():
            value = getattr(self, attr)
            if attr in _DATE_FIELDS:
                value = value.isoformat() if value else None
            payload[key] = value
        if self.id is not None:
            payload["id"] = self.id
        return payload

    # ---- Form draft mapping ----------------------------------------------

    def to_draft(self) -> dict[str, str]:
        """
        Return the flat string dict that seeds the edit form.

        Dates are rendered as ``YYYY-MM-DD`` for ``<input type="date">``.
        """
        draft: dict[str, str] = {}
        for attr in FORM_FIELDS:
            value = getattr(self, attr)
            if attr in _DATE_FIELDS:
                draft[attr] = value.isoformat() if value else ""
            else:
                draft[attr] = value or ""
        return draft

    @classmethod
    def from_draft(
        cls,
        draft: dict[str, str],
        base: "Equipment | None" = None,
    ) -> "Equipment":
        """
        Build a record from form draft values.

        Args:
            draft: Field name -> submitted string.
            base:  Existing record being edited.  Its id, read-only
                   inventory fields and unknown API keys are carried over.
        """
        if base is None:
            record = cls()
        else:
            record = cls(
                id=base.id,
                specs=base.specs,
                os_name=base.os_name,
                total_memory=base.total_memory,
                extra=dict(base.extra),
            )

        for attr in FORM_FIELDS:
            raw = (draft.get(attr) or "").strip()
            if attr in _DATE_FIELDS:
                setattr(record, attr, parse_api_date(raw))
            else:
                setattr(record, attr, raw)

        # Empty selects fall back to the record defaults.
        record.status = record.status or EquipmentStatus.IN_STOCK.value
        record.term_condition = (
            record.term_condition or TermCondition.NOT_APPLICABLE.value
        )
        return record

    # ---- Display helpers -------------------------------------------------

    @property
    def status_badge(self) -> str:
        """CSS classes for the status badge in the list view."""
        return _STATUS_BADGES.get(self.status, "bg-secondary")

    @property
    def description(self) -> str:
        """Name followed by brand and model, for term documents."""
        parts = [self.name, self.brand, self.model]
        return " ".join(part for part in parts if part)


def default_draft() -> dict[str, str]:
    """Draft used by the form when creating a new record."""
    return Equipment().to_draft()
