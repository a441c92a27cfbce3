"""Tests for SupabaseOwnershipRepository against a mocked Supabase client."""

import pytest

from salon_backend.modules.authorization.exceptions import DataAccessError
from salon_backend.modules.authorization.repository import SupabaseOwnershipRepository

from conftest import supabase_result


def _single_read(supabase, data):
    """Wire table().select().eq().limit().execute() to return data."""
    query = supabase.table.return_value.select.return_value.eq.return_value.limit.return_value
    query.execute.return_value = supabase_result(data)
    return query


class TestSupabaseOwnershipRepository:
    def test_appointment_parties_from_embedded_rows(self, supabase):
        _single_read(supabase, [{
            "id": 10,
            "clients": {"user_id": "client-user"},
            "employees": {"user_id": "employee-user"},
        }])

        parties = SupabaseOwnershipRepository(supabase).get_appointment_parties(10)

        assert parties == {"client_user_id": "client-user", "employee_user_id": "employee-user"}
        supabase.table.assert_called_once_with("appointments")
        columns = supabase.table.return_value.select.call_args[0][0]
        assert "clients!inner(user_id)" in columns
        assert "employees!inner(user_id)" in columns
        supabase.table.return_value.select.return_value.eq.assert_called_once_with("id", 10)

    def test_payment_parties_walk_through_appointment(self, supabase):
        _single_read(supabase, [{
            "id": 3,
            "appointments": {"clients": {"user_id": "c"}, "employees": {"user_id": "e"}},
        }])

        parties = SupabaseOwnershipRepository(supabase).get_payment_parties(3)

        assert parties == {"client_user_id": "c", "employee_user_id": "e"}
        supabase.table.assert_called_once_with("payments")

    def test_appointment_service_line_walks_through_appointment(self, supabase):
        _single_read(supabase, [{
            "id": 13,
            "appointments": {"clients": {"user_id": "c"}, "employees": [{"user_id": "e"}]},
        }])

        parties = SupabaseOwnershipRepository(supabase).get_appointment_service_parties(13)

        assert parties == {"client_user_id": "c", "employee_user_id": "e"}
        supabase.table.assert_called_once_with("appointment_services")
        supabase.table.return_value.select.assert_called_once_with(
            "id, appointments!inner(clients!inner(user_id), employees!inner(user_id))"
        )

    def test_sent_push_notification_reads_subscription_user(self, supabase):
        _single_read(supabase, [{"id": 14, "push_notifications": [{"user_id": "subscriber"}]}])

        record = SupabaseOwnershipRepository(supabase).get_sent_push_notification_user(14)

        assert record == {"user_id": "subscriber"}
        supabase.table.assert_called_once_with("sent_push_notifications")
        supabase.table.return_value.select.assert_called_once_with("id, push_notifications!inner(user_id)")

    def test_service_history_parties(self, supabase):
        _single_read(supabase, [{
            "id": 15,
            "clients": {"user_id": "c"},
            "employees": {"user_id": "e"},
        }])

        parties = SupabaseOwnershipRepository(supabase).get_service_history_parties(15)

        assert parties == {"client_user_id": "c", "employee_user_id": "e"}
        supabase.table.assert_called_once_with("client_service_history")
        supabase.table.return_value.select.assert_called_once_with(
            "id, clients!inner(user_id), employees!inner(user_id)"
        )

    def test_empty_embedded_list_reads_as_no_owner(self, supabase):
        _single_read(supabase, [{"id": 14, "push_notifications": []}])

        assert SupabaseOwnershipRepository(supabase).get_sent_push_notification_user(14) == {"user_id": None}

    def test_embedded_list_is_unwrapped(self, supabase):
        _single_read(supabase, [{"id": 5, "employees": [{"user_id": "seller"}]}])

        assert SupabaseOwnershipRepository(supabase).get_sale_seller(5) == {"employee_user_id": "seller"}

    def test_record_user_reads_direct_column(self, supabase):
        _single_read(supabase, [{"id": 1, "user_id": "recipient"}])

        record = SupabaseOwnershipRepository(supabase).get_record_user("notifications", 1)

        assert record == {"user_id": "recipient"}
        supabase.table.return_value.select.assert_called_once_with("id, user_id")

    def test_employee_record_uses_given_table(self, supabase):
        _single_read(supabase, [{"id": 2, "employees": {"user_id": "e"}}])

        SupabaseOwnershipRepository(supabase).get_employee_record_user("employee_absences", 2)

        supabase.table.assert_called_once_with("employee_absences")

    def test_missing_row_returns_none(self, supabase):
        _single_read(supabase, [])

        assert SupabaseOwnershipRepository(supabase).get_review_parties(404) is None

    def test_client_failure_raises_data_access_error(self, supabase):
        query = _single_read(supabase, [])
        query.execute.side_effect = TimeoutError("read timed out")

        with pytest.raises(DataAccessError) as exc_info:
            SupabaseOwnershipRepository(supabase).get_client_file_client(6)

        assert exc_info.value.table == "client_files"
        assert exc_info.value.instance_id == 6

    def test_owns_record_filters_on_id_and_owner(self, supabase):
        first_eq = supabase.table.return_value.select.return_value.eq
        query = first_eq.return_value.eq.return_value.limit.return_value
        query.execute.return_value = supabase_result([{"id": 30}])

        owned = SupabaseOwnershipRepository(supabase).owns_record("clients", 30, "user_id", "me")

        assert owned is True
        first_eq.assert_called_once_with("id", 30)
        first_eq.return_value.eq.assert_called_once_with("user_id", "me")

    def test_owns_record_no_match(self, supabase):
        query = supabase.table.return_value.select.return_value.eq.return_value.eq.return_value.limit.return_value
        query.execute.return_value = supabase_result([])

        assert SupabaseOwnershipRepository(supabase).owns_record("clients", 30, "user_id", "me") is False

    def test_owns_record_failure(self, supabase):
        supabase.table.side_effect = ConnectionError("refused")

        with pytest.raises(DataAccessError):
            SupabaseOwnershipRepository(supabase).owns_record("clients", 30, "user_id", "me")
