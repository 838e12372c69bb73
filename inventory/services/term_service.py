"""
Term service — builds the responsibility term (Termo de
Responsabilidade) printed when equipment is handed over to or
returned by a collaborator.

The service only assembles the document content; the
``equipment/term.html`` template lays it out for printing.
"""

from dataclasses import dataclass, field
from datetime import date

from inventory.models.equipment import Equipment
from inventory.models.user import SessionUser

TERM_DELIVERY = "entrega"
TERM_RETURN = "devolucao"
TERM_TYPES = (TERM_DELIVERY, TERM_RETURN)

_TITLES = {
    TERM_DELIVERY: "Termo de Responsabilidade — Entrega de Equipamento",
    TERM_RETURN: "Termo de Responsabilidade — Devolução de Equipamento",
}


@dataclass
class TermDocument:
    """Everything printed on a responsibility term."""

    term_type: str
    title: str
    company_name: str
    collaborator_name: str
    collaborator_email: str
    collaborator_sector: str
    issued_by: str
    issue_date: str
    statement: str
    # (label, value) pairs describing the equipment.
    equipment_lines: list[tuple[str, str]] = field(default_factory=list)

    @property
    def is_return(self) -> bool:
        """True for a return (devolução) term."""
        return self.term_type == TERM_RETURN


def build_term(
    equipment: Equipment,
    term_type: str,
    issuer: SessionUser,
    company_name: str,
    today: date | None = None,
) -> TermDocument:
    """
    Assemble a handover or return term for ``equipment``.

    Args:
        equipment:    The record the term refers to.
        term_type:    ``entrega`` or ``devolucao``.
        issuer:       User printing the term.
        company_name: Company named as the equipment owner.
        today:        Issue date; defaults to today.

    Raises:
        ValueError: If ``term_type`` is not a known term type.
    """
    if term_type not in TERM_TYPES:
        raise ValueError(f"Unknown term type '{term_type}'")

    today = today or date.today()
    collaborator = equipment.current_user or "_______________________"

    if term_type == TERM_DELIVERY:
        statement = (
            f"Declaro ter recebido da empresa {company_name} o equipamento "
            "descrito abaixo, em perfeito estado de conservação e "
            "funcionamento, comprometendo-me a zelar por sua guarda e "
            "conservação e a devolvê-lo quando solicitado."
        )
    else:
        statement = (
            f"Declaro ter devolvido à empresa {company_name} o equipamento "
            "descrito abaixo, que estava sob minha responsabilidade."
        )

    lines = [
        ("Equipamento", equipment.description),
        ("Tipo", equipment.equipment_type),
        ("Patrimônio", equipment.asset_tag),
        ("Número de Série", equipment.serial),
        ("Localização", equipment.location),
    ]
    if equipment.delivery_date:
        lines.append(("Data de Entrega", equipment.delivery_date.strftime("%d/%m/%Y")))
    if term_type == TERM_RETURN and equipment.return_date:
        lines.append(("Data de Devolução", equipment.return_date.strftime("%d/%m/%Y")))
    if equipment.notes:
        lines.append(("Observações", equipment.notes))

    return TermDocument(
        term_type=term_type,
        title=_TITLES[term_type],
        company_name=company_name,
        collaborator_name=collaborator,
        collaborator_email=equipment.employee_email,
        collaborator_sector=equipment.sector,
        issued_by=issuer.display_name or issuer.username,
        issue_date=today.strftime("%d/%m/%Y"),
        statement=statement,
        equipment_lines=[(label, value) for label, value in lines if value],
    )
