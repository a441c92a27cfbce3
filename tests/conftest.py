"""
Shared fixtures: an in-memory ownership repository, engines wired to it and a
TestClient whose Supabase and engine dependencies are overridden.
"""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from salon_backend.config.permissions_config import DOMAINS, GENERIC_OWNER_FIELDS, PERMISSION_TABLE
from salon_backend.core.dependencies import get_authorization_engine, get_current_principal
from salon_backend.database.supabase_client import get_supabase
from salon_backend.main import app
from salon_backend.modules.authorization.classifier import RoleClassifier
from salon_backend.modules.authorization.domain import Principal, Role
from salon_backend.modules.authorization.engine import AuthorizationEngine
from salon_backend.modules.authorization.exceptions import DataAccessError
from salon_backend.modules.authorization.matrix import PermissionMatrix
from salon_backend.modules.authorization.resolvers import build_resolver_registry


class FakeOwnershipRepository:
    """
    Same read surface as SupabaseOwnershipRepository, backed by dicts.

    Rows are stored per table and returned as-is, so tests seed exactly the
    fields each read would return.
    """

    def __init__(self):
        self.rows = {}
        self.calls = []
        self.fail = False

    def add(self, table, instance_id, **fields):
        self.rows.setdefault(table, {})[instance_id] = fields

    def _get(self, table, instance_id):
        self.calls.append((table, instance_id))
        if self.fail:
            raise DataAccessError(table, instance_id, "connection reset")
        return self.rows.get(table, {}).get(instance_id)

    def get_appointment_parties(self, appointment_id):
        return self._get("appointments", appointment_id)

    def get_appointment_service_parties(self, line_id):
        return self._get("appointment_services", line_id)

    def get_payment_parties(self, payment_id):
        return self._get("payments", payment_id)

    def get_sale_seller(self, sale_id):
        return self._get("product_sales", sale_id)

    def get_sale_detail_seller(self, detail_id):
        return self._get("product_sale_details", detail_id)

    def get_record_user(self, table, record_id, user_field="user_id"):
        row = self._get(table, record_id)
        return None if row is None else {"user_id": row.get(user_field)}

    def get_sent_push_notification_user(self, sent_id):
        return self._get("sent_push_notifications", sent_id)

    def get_review_parties(self, review_id):
        return self._get("reviews", review_id)

    def get_employee_record_user(self, table, record_id):
        return self._get(table, record_id)

    def get_client_file_client(self, file_id):
        return self._get("client_files", file_id)

    def get_service_history_parties(self, entry_id):
        return self._get("client_service_history", entry_id)

    def get_calendar_event_user(self, event_id):
        return self._get("google_calendar_events", event_id)

    def owns_record(self, table, record_id, owner_field, user_id):
        row = self._get(table, record_id)
        return row is not None and row.get(owner_field) == user_id


def supabase_result(data):
    return SimpleNamespace(data=data)


@pytest.fixture()
def repository():
    return FakeOwnershipRepository()


@pytest.fixture()
def matrix():
    return PermissionMatrix(PERMISSION_TABLE, DOMAINS)


@pytest.fixture()
def registry(repository):
    return build_resolver_registry(repository, "user_id", GENERIC_OWNER_FIELDS)


@pytest.fixture()
def engine(matrix, registry):
    return AuthorizationEngine(matrix, RoleClassifier(), registry)


@pytest.fixture()
def admin():
    return Principal(id=1, role=Role.ADMINISTRATOR)


@pytest.fixture()
def owner():
    return Principal(id=2, role=Role.OWNER)


@pytest.fixture()
def employee():
    return Principal(id=7, role=Role.EMPLOYEE)


@pytest.fixture()
def client_user():
    return Principal(id=42, role=Role.CLIENT)


@pytest.fixture()
def supabase():
    return MagicMock()


@pytest.fixture()
def api(engine, supabase):
    """TestClient with Supabase and the engine replaced; call api.login_as(principal) to authenticate."""
    current = {"principal": None}
    app.dependency_overrides[get_supabase] = lambda: supabase
    app.dependency_overrides[get_authorization_engine] = lambda: engine
    app.dependency_overrides[get_current_principal] = lambda: current["principal"]

    client = TestClient(app)

    def login_as(principal):
        current["principal"] = principal

    client.login_as = login_as
    yield client
    app.dependency_overrides.clear()
