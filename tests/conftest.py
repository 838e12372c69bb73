"""
Pytest configuration and shared fixtures.

Provides a test application, a test client, and a fake inventory API
client that replaces the HTTP layer.  Uses the ``testing``
configuration, whose API base URL is never contacted.
"""

import pytest

from inventory import create_app
from inventory.services import api_client


class FakeApiClient:
    """
    In-memory stand-in for ``InventoryApiClient``.

    ``records`` holds raw API dicts.  Every call is appended to
    ``calls`` as ``(method_name, args...)``.  Put an exception in
    ``errors[method_name]`` to make that call fail.
    """

    def __init__(self):
        self.records = []
        self.history = []
        self.calls = []
        self.errors = {}
        self.login_response = None
        self._next_id = 1000

    def _record(self, name, *args):
        self.calls.append((name, *args))
        exc = self.errors.get(name)
        if exc is not None:
            raise exc

    def called(self, name):
        """Return the calls made to ``name``."""
        return [call for call in self.calls if call[0] == name]

    def login(self, username, password):
        self._record("login", username, password)
        return self.login_response

    def list_equipment(self, user):
        self._record("list_equipment", user.username)
        return [dict(row) for row in self.records]

    def create_equipment(self, payload, user):
        self._record("create_equipment", payload, user.username)
        self._next_id += 1
        created = dict(payload, id=self._next_id)
        self.records.append(created)
        return created

    def update_equipment(self, payload, username):
        self._record("update_equipment", payload, username)
        return payload

    def delete_equipment(self, equipment_id, username):
        self._record("delete_equipment", equipment_id, username)
        self.records = [r for r in self.records if r.get("id") != equipment_id]

    def get_equipment_history(self, equipment_id):
        self._record("get_equipment_history", equipment_id)
        return list(self.history)

    def check_health(self):
        self._record("check_health")
        return {"status": "ok"}


@pytest.fixture(scope="session")
def app():
    """
    Create a Flask application configured for testing.

    The app is created once per test session.  No context is pushed
    here: each test-client request gets its own app context, so
    Flask-Login's per-request user cache never leaks between requests.
    """
    return create_app("testing")


@pytest.fixture
def app_ctx(app):  # pylint: disable=redefined-outer-name
    """Push an application context for tests that call services directly."""
    with app.app_context():
        yield app


@pytest.fixture
def fake_api(monkeypatch):
    """Replace the inventory API client with an in-memory fake."""
    fake = FakeApiClient()
    monkeypatch.setattr(api_client, "get_client", lambda: fake)
    return fake


@pytest.fixture
def client(app):  # pylint: disable=redefined-outer-name
    """
    Provide a Flask test client for making HTTP requests.

    Usage in tests::

        def test_list(admin_client):
            response = admin_client.get("/equipment/")
            assert response.status_code == 200
    """
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture
def admin_client(client, fake_api):  # pylint: disable=redefined-outer-name
    """Test client signed in as an Admin through the dev login."""
    client.get("/auth/dev-login?role=admin")
    return client


@pytest.fixture
def user_client(client, fake_api):  # pylint: disable=redefined-outer-name
    """Test client signed in as a regular (non-admin) user."""
    client.get("/auth/dev-login?role=user")
    return client


@pytest.fixture
def sample_records():
    """Raw API records used across tests."""
    return [
        {
            "id": 1,
            "equipamento": "Notebook Dell Latitude",
            "patrimonio": "PAT-001",
            "serial": "SN-AAA-111",
            "usuarioAtual": "Maria Souza",
            "setor": "Financeiro",
            "status": "Em Uso",
            "dataEntregaUsuario": "2024-03-01T00:00:00.000Z",
            "condicaoTermo": "Assinado - Entrega",
        },
        {
            "id": 2,
            "equipamento": "Monitor LG 24",
            "patrimonio": "PAT-002",
            "serial": "LG-24-XYZ",
            "usuarioAtual": None,
            "setor": "TI",
            "status": "Estoque",
        },
        {
            "id": 3,
            "equipamento": "Impressora HP",
            "patrimonio": None,
            "serial": "HP-999",
            "usuarioAtual": "João Lima",
            "status": "Manutenção",
        },
    ]
