"""
Tests for equipment_service: search filtering, draft validation,
save, delete and error-message mapping.
"""

import pytest

from inventory.models.equipment import Equipment
from inventory.models.user import SessionUser, UserRole
from inventory.services import equipment_service
from inventory.services.api_client import ApiConnectionError, ApiError

ADMIN = SessionUser(id=1, username="admin", role=UserRole.ADMIN.value)
REGULAR = SessionUser(id=2, username="ana", role=UserRole.USER.value)


def _records(sample_records):
    return [Equipment.from_api(row) for row in sample_records]


class TestFilterEquipment:
    """Case-insensitive substring search over four fields."""

    def test_empty_search_returns_everything(self, sample_records):
        records = _records(sample_records)
        assert equipment_service.filter_equipment(records, "") == records

    def test_matches_name_ignoring_case(self, sample_records):
        result = equipment_service.filter_equipment(_records(sample_records), "NOTEBOOK")
        assert [item.id for item in result] == [1]

    def test_matches_asset_tag(self, sample_records):
        result = equipment_service.filter_equipment(_records(sample_records), "pat-00")
        assert [item.id for item in result] == [1, 2]

    def test_matches_serial(self, sample_records):
        result = equipment_service.filter_equipment(_records(sample_records), "xyz")
        assert [item.id for item in result] == [2]

    def test_matches_current_user(self, sample_records):
        result = equipment_service.filter_equipment(_records(sample_records), "joão")
        assert [item.id for item in result] == [3]

    def test_other_fields_are_not_searched(self, sample_records):
        # "Financeiro" is the sector of record 1, which is not searchable.
        result = equipment_service.filter_equipment(_records(sample_records), "financeiro")
        assert result == []

    def test_no_match_returns_empty_list(self, sample_records):
        result = equipment_service.filter_equipment(_records(sample_records), "zzz")
        assert result == []


class TestLoadEquipment:
    """Loading records through the API."""

    def test_maps_api_rows_to_records(self, fake_api, sample_records):
        fake_api.records = sample_records
        records = equipment_service.load_equipment(ADMIN)
        assert [item.name for item in records] == [
            "Notebook Dell Latitude",
            "Monitor LG 24",
            "Impressora HP",
        ]
        assert fake_api.called("list_equipment") == [("list_equipment", "admin")]

    def test_failure_yields_empty_list(self, fake_api):
        fake_api.errors["list_equipment"] = ApiError("boom", 500)
        assert equipment_service.load_equipment(ADMIN) == []

    def test_find_equipment_by_id(self, fake_api, sample_records):
        fake_api.records = sample_records
        assert equipment_service.find_equipment(ADMIN, 2).serial == "LG-24-XYZ"
        assert equipment_service.find_equipment(ADMIN, 99) is None

    def test_find_equipment_with_string_ids(self, fake_api, sample_records):
        fake_api.records = [dict(row, id=str(row["id"])) for row in sample_records]
        assert equipment_service.find_equipment(ADMIN, 3).name == "Impressora HP"


class TestDraft:
    """Form draft seeding and validation."""

    def test_new_draft_uses_defaults(self):
        draft = equipment_service.build_draft(None)
        assert draft["status"] == "Estoque"
        assert draft["term_condition"] == "N/A"
        assert draft["name"] == ""
        assert draft["delivery_date"] == ""

    def test_edit_draft_truncates_dates(self, sample_records):
        draft = equipment_service.build_draft(Equipment.from_api(sample_records[0]))
        assert draft["delivery_date"] == "2024-03-01"
        assert draft["name"] == "Notebook Dell Latitude"

    @pytest.mark.parametrize(
        "draft",
        [
            {"name": "", "serial": "SN1"},
            {"name": "Notebook", "serial": ""},
            {"name": "   ", "serial": "SN1"},
            {},
        ],
    )
    def test_missing_name_or_serial_is_rejected(self, draft):
        assert (
            equipment_service.validate_draft(draft)
            == equipment_service.REQUIRED_FIELDS_MESSAGE
        )

    def test_name_and_serial_are_enough(self):
        assert equipment_service.validate_draft({"name": "Mouse", "serial": "M1"}) is None


class TestSaveEquipment:
    """Create and update through the API."""

    def test_invalid_draft_never_calls_api(self, app_ctx, fake_api):
        with pytest.raises(equipment_service.SaveError) as excinfo:
            equipment_service.save_equipment({"name": "Mouse", "serial": ""}, ADMIN)
        assert excinfo.value.message == equipment_service.REQUIRED_FIELDS_MESSAGE
        assert fake_api.calls == []

    def test_admin_create_has_no_notice(self, app_ctx, fake_api):
        result = equipment_service.save_equipment(
            {"name": "Mouse", "serial": "M1"}, ADMIN
        )
        assert result.created is True
        assert result.notice is None

        payload = fake_api.called("create_equipment")[0][1]
        assert payload["equipamento"] == "Mouse"
        assert payload["serial"] == "M1"
        assert payload["status"] == "Estoque"
        assert payload["condicaoTermo"] == "N/A"

    def test_non_admin_create_awaits_approval(self, app_ctx, fake_api):
        result = equipment_service.save_equipment(
            {"name": "Mouse", "serial": "M1"}, REGULAR
        )
        assert result.notice == equipment_service.APPROVAL_PENDING_MESSAGE

    def test_update_keeps_id_and_passes_username(self, app_ctx, fake_api, sample_records):
        existing = Equipment.from_api(dict(sample_records[0], memoriaFisicaTotal="16 GB"))
        draft = existing.to_draft()
        draft["sector"] = "Comercial"

        result = equipment_service.save_equipment(draft, REGULAR, existing=existing)

        assert result.created is False
        assert result.notice is None
        _, payload, username = fake_api.called("update_equipment")[0]
        assert username == "ana"
        assert payload["id"] == 1
        assert payload["setor"] == "Comercial"
        assert payload["memoriaFisicaTotal"] == "16 GB"
        assert fake_api.called("create_equipment") == []

    def test_api_error_becomes_save_error(self, app_ctx, fake_api):
        fake_api.errors["create_equipment"] = ApiError("Serial already exists", 409)
        with pytest.raises(equipment_service.SaveError) as excinfo:
            equipment_service.save_equipment({"name": "Mouse", "serial": "M1"}, ADMIN)
        assert excinfo.value.message == "Serial already exists"


class TestFriendlyErrorMessage:
    """Mapping API failures to user-facing copy."""

    def test_connection_error(self, app_ctx):
        message = equipment_service.friendly_error_message(
            ApiConnectionError("refused")
        )
        assert message.startswith("Erro de conexão com o servidor.")
        assert app_ctx.config["INVENTORY_API_BASE_URL"] in message

    def test_database_error_prefix_is_replaced(self, app_ctx):
        message = equipment_service.friendly_error_message(
            ApiError("Database error: duplicate key", 500)
        )
        assert message == "Erro no Banco de Dados: duplicate key"

    def test_other_messages_pass_through(self, app_ctx):
        assert equipment_service.friendly_error_message(ApiError("Nope", 400)) == "Nope"

    def test_empty_message_falls_back(self, app_ctx):
        assert (
            equipment_service.friendly_error_message(ApiError("", 500))
            == equipment_service.UNKNOWN_SAVE_ERROR
        )


class TestDeleteEquipment:
    """Only admins may trigger a delete."""

    def test_non_admin_never_calls_api(self, fake_api):
        assert equipment_service.delete_equipment(REGULAR, 1) is False
        assert fake_api.calls == []

    def test_admin_deletes(self, fake_api, sample_records):
        fake_api.records = sample_records
        assert equipment_service.delete_equipment(ADMIN, 1) is True
        assert fake_api.called("delete_equipment") == [("delete_equipment", 1, "admin")]

    def test_api_failure_propagates(self, fake_api):
        fake_api.errors["delete_equipment"] = ApiError("locked", 409)
        with pytest.raises(ApiError):
            equipment_service.delete_equipment(ADMIN, 1)


class TestHistory:
    """History entries mapped from the API."""

    def test_entries_are_mapped(self, fake_api):
        fake_api.history = [
            {
                "id": 7,
                "equipmentId": 1,
                "timestamp": "2024-05-02T13:45:00Z",
                "changedBy": "admin",
                "changeType": "UPDATE",
                "details": "status: Estoque -> Em Uso",
            }
        ]
        entries = equipment_service.get_history(1)
        assert len(entries) == 1
        assert entries[0].changed_by == "admin"
        assert entries[0].timestamp.year == 2024
        assert entries[0].timestamp.hour == 13
