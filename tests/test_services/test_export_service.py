"""
Tests for export_service: column mapping, empty exports and the
generated workbook.
"""

from datetime import date

import pytest
from openpyxl import load_workbook

from inventory.models.equipment import Equipment
from inventory.services import export_service


def _record(**overrides):
    values = {
        "id": 1,
        "name": "Notebook",
        "brand": "Dell",
        "model": "Latitude 5420",
        "asset_tag": "PAT-001",
        "serial": "SN-1",
        "current_user": "Maria",
        "sector": "TI",
        "location": "Matriz",
        "status": "Em Uso",
        "equipment_type": "Notebook",
        "specs": "Intel i5",
        "os_name": "Windows 11",
        "total_memory": "16 GB",
        "purchase_invoice": "NF-123",
        "delivery_date": date(2024, 3, 1),
        "notes": "Carregador incluso",
    }
    values.update(overrides)
    return Equipment(**values)


class TestColumnMapping:
    """Fixed header order and value formatting."""

    def test_headers(self):
        headers = [header for header, _ in export_service.EXPORT_COLUMNS]
        assert headers == [
            "Equipamento",
            "Marca",
            "Modelo",
            "Patrimônio",
            "Serial",
            "Usuário Atual",
            "Setor",
            "Local",
            "Status",
            "Tipo",
            "Processador/Specs",
            "SO",
            "Memória",
            "Nota Fiscal",
            "Data Entrega",
            "Termo",
            "Observações",
        ]

    def test_row_values(self):
        row = export_service.build_rows([_record()])[0]
        assert row[0] == "Notebook"
        assert row[10] == "Intel i5"
        assert row[14] == "01/03/2024"
        assert row[15] == "N/A"

    def test_missing_values_are_blank(self):
        row = export_service.build_rows(
            [Equipment(name="Mouse", serial="M1", term_condition="")]
        )[0]
        assert row[1] == ""
        assert row[14] == ""
        assert row[15] == "N/A"


class TestExportEquipmentExcel:
    """Workbook generation."""

    def test_empty_export_never_builds_a_workbook(self, monkeypatch):
        def _fail():
            raise AssertionError("Workbook must not be created")

        monkeypatch.setattr(export_service, "Workbook", _fail)
        with pytest.raises(export_service.NothingToExport):
            export_service.export_equipment_excel([])

    def test_workbook_contents(self):
        buffer = export_service.export_equipment_excel(
            [_record(), _record(id=2, name="Monitor", serial="SN-2")]
        )
        wb = load_workbook(buffer)
        ws = wb.active

        assert ws.title == "Inventário"
        assert ws.max_row == 3
        assert ws.cell(row=1, column=1).value == "Equipamento"
        assert ws.cell(row=2, column=5).value == "SN-1"
        assert ws.cell(row=3, column=1).value == "Monitor"

    def test_formula_like_text_is_written_as_text(self):
        buffer = export_service.export_equipment_excel(
            [_record(name="=1+1", notes='=HYPERLINK("http://x","y")')]
        )
        ws = load_workbook(buffer).active

        name_cell = ws.cell(row=2, column=1)
        assert name_cell.data_type == "s"
        assert name_cell.value == "=1+1"
        notes_cell = ws.cell(row=2, column=len(export_service.EXPORT_COLUMNS))
        assert notes_cell.data_type == "s"
        assert notes_cell.value.startswith("=HYPERLINK")

    def test_filename_contains_date(self):
        assert (
            export_service.export_filename(date(2024, 7, 9))
            == "inventario_equipamentos_2024-07-09.xlsx"
        )
