"""
Export service — generate the inventory spreadsheet.

The export functions return a BytesIO buffer ready to be sent as a
Flask response with the appropriate content type.
"""

import io
import logging
from collections.abc import Callable
from datetime import date

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

from inventory.models.equipment import Equipment, TermCondition

logger = logging.getLogger(__name__)

XLSX_CONTENT_TYPE = (
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
)
SHEET_TITLE = "Inventário"

# Excel header styling constants.
_HEADER_FONT = Font(bold=True, color="FFFFFF")
_HEADER_FILL = PatternFill(start_color="2B579A", end_color="2B579A", fill_type="solid")
_HEADER_ALIGN = Alignment(horizontal="center", wrap_text=True)


def _format_date(value: date | None) -> str:
    """Format a date the Brazilian way (dd/mm/yyyy)."""
    return value.strftime("%d/%m/%Y") if value else ""


# Fixed column mapping: header -> value getter.
EXPORT_COLUMNS: list[tuple[str, Callable[[Equipment], str]]] = [
    ("Equipamento", lambda item: item.name),
    ("Marca", lambda item: item.brand or ""),
    ("Modelo", lambda item: item.model or ""),
    ("Patrimônio", lambda item: item.asset_tag or ""),
    ("Serial", lambda item: item.serial or ""),
    ("Usuário Atual", lambda item: item.current_user or ""),
    ("Setor", lambda item: item.sector or ""),
    ("Local", lambda item: item.location or ""),
    ("Status", lambda item: item.status or ""),
    ("Tipo", lambda item: item.equipment_type or ""),
    ("Processador/Specs", lambda item: item.specs or ""),
    ("SO", lambda item: item.os_name or ""),
    ("Memória", lambda item: item.total_memory or ""),
    ("Nota Fiscal", lambda item: item.purchase_invoice or ""),
    ("Data Entrega", lambda item: _format_date(item.delivery_date)),
    ("Termo", lambda item: item.term_condition or TermCondition.NOT_APPLICABLE.value),
    ("Observações", lambda item: item.notes or ""),
]


class NothingToExport(Exception):
    """Raised when an export is requested for an empty record set."""


def export_filename(today: date | None = None) -> str:
    """Return the download name, stamped with the current date."""
    today = today or date.today()
    return f"inventario_equipamentos_{today.isoformat()}.xlsx"


def build_rows(records: list[Equipment]) -> list[list[str]]:
    """Apply the column mapping to every record."""
    return [[getter(item) for _, getter in EXPORT_COLUMNS] for item in records]


def export_equipment_excel(records: list[Equipment]) -> io.BytesIO:
    """
    Export equipment records to an Excel workbook.

    Args:
        records: The (already filtered) records to export.

    Returns:
        BytesIO buffer containing the .xlsx data.

    Raises:
        NothingToExport: If ``records`` is empty.  No workbook is
                         created in that case.
    """
    if not records:
        raise NothingToExport("Não há dados para exportar.")

    wb = Workbook()
    ws = wb.active
    ws.title = SHEET_TITLE

    _write_header_row(ws, [header for header, _ in EXPORT_COLUMNS])
    _write_data_rows(ws, build_rows(records))

    _auto_fit_columns(ws)

    buffer = io.BytesIO()
    wb.save(buffer)
    buffer.seek(0)

    logger.info("Exported %d equipment records to Excel", len(records))
    return buffer


# =========================================================================
# Internal helpers
# =========================================================================

def _write_header_row(ws, headers: list[str]) -> None:
    """Write a styled header row to an Excel worksheet."""
    for col_idx, header in enumerate(headers, start=1):
        cell = ws.cell(row=1, column=col_idx, value=header)
        cell.font = _HEADER_FONT
        cell.fill = _HEADER_FILL
        cell.alignment = _HEADER_ALIGN


def _write_data_rows(ws, rows: list[list[str]]) -> None:
    """
    Write record rows below the header as literal values.

    openpyxl stores any string starting with ``=`` as a formula; such
    cells are forced back to plain text.
    """
    for row_idx, row in enumerate(rows, start=2):
        for col_idx, value in enumerate(row, start=1):
            cell = ws.cell(row=row_idx, column=col_idx, value=value)
            if isinstance(value, str) and value.startswith("="):
                cell.data_type = "s"


def _auto_fit_columns(ws) -> None:
    """Auto-fit column widths based on content (approximate)."""
    for col in ws.columns:
        max_length = 0
        col_letter = get_column_letter(col[0].column)
        for cell in col:
            if cell.value:
                max_length = max(max_length, len(str(cell.value)))
        ws.column_dimensions[col_letter].width = min(max_length + 4, 40)
