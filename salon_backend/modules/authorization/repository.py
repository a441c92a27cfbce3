"""
Read-only ownership queries against Supabase.

Each method performs a single PostgREST read that embeds the related rows
needed to identify owners (inner joins, so a broken relation reads as missing)
and returns only those fields, or None when the instance does not exist.
Any client failure is raised as DataAccessError.
"""

from supabase import Client
from typing import Any, Dict, Optional
import logging

from salon_backend.modules.authorization.exceptions import DataAccessError

logger = logging.getLogger(__name__)

CLIENT_AND_EMPLOYEE = "clients!inner(user_id), employees!inner(user_id)"


def _embedded(row: Dict[str, Any], *path: str) -> Any:
    """Walk nested embedded resources, e.g. _embedded(row, "appointments", "clients", "user_id")."""
    value: Any = row
    for key in path:
        if isinstance(value, list):
            value = value[0] if value else None
        if not isinstance(value, dict):
            return None
        value = value.get(key)
    return value


class SupabaseOwnershipRepository:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _fetch_one(self, table: str, columns: str, instance_id: Any) -> Optional[Dict[str, Any]]:
        try:
            result = self.supabase.table(table)\
                .select(columns)\
                .eq("id", instance_id)\
                .limit(1)\
                .execute()
        except Exception as e:
            logger.error(f"Error reading ownership of {table} {instance_id}: {e}")
            raise DataAccessError(table, instance_id, str(e)) from e
        if not result.data:
            return None
        return result.data[0]

    def get_appointment_parties(self, appointment_id: Any) -> Optional[Dict[str, Any]]:
        row = self._fetch_one("appointments", f"id, {CLIENT_AND_EMPLOYEE}", appointment_id)
        if row is None:
            return None
        return {
            "client_user_id": _embedded(row, "clients", "user_id"),
            "employee_user_id": _embedded(row, "employees", "user_id"),
        }

    def get_appointment_service_parties(self, line_id: Any) -> Optional[Dict[str, Any]]:
        row = self._fetch_one(
            "appointment_services",
            f"id, appointments!inner({CLIENT_AND_EMPLOYEE})",
            line_id,
        )
        if row is None:
            return None
        return {
            "client_user_id": _embedded(row, "appointments", "clients", "user_id"),
            "employee_user_id": _embedded(row, "appointments", "employees", "user_id"),
        }

    def get_payment_parties(self, payment_id: Any) -> Optional[Dict[str, Any]]:
        row = self._fetch_one(
            "payments",
            f"id, appointments!inner({CLIENT_AND_EMPLOYEE})",
            payment_id,
        )
        if row is None:
            return None
        return {
            "client_user_id": _embedded(row, "appointments", "clients", "user_id"),
            "employee_user_id": _embedded(row, "appointments", "employees", "user_id"),
        }

    def get_sale_seller(self, sale_id: Any) -> Optional[Dict[str, Any]]:
        row = self._fetch_one("product_sales", "id, employees!inner(user_id)", sale_id)
        if row is None:
            return None
        return {"employee_user_id": _embedded(row, "employees", "user_id")}

    def get_sale_detail_seller(self, detail_id: Any) -> Optional[Dict[str, Any]]:
        row = self._fetch_one(
            "product_sale_details",
            "id, product_sales!inner(employees!inner(user_id))",
            detail_id,
        )
        if row is None:
            return None
        return {"employee_user_id": _embedded(row, "product_sales", "employees", "user_id")}

    def get_record_user(self, table: str, record_id: Any, user_field: str = "user_id") -> Optional[Dict[str, Any]]:
        """Owner stored directly on the record; no joins."""
        row = self._fetch_one(table, f"id, {user_field}", record_id)
        if row is None:
            return None
        return {"user_id": row.get(user_field)}

    def get_sent_push_notification_user(self, sent_id: Any) -> Optional[Dict[str, Any]]:
        row = self._fetch_one(
            "sent_push_notifications",
            "id, push_notifications!inner(user_id)",
            sent_id,
        )
        if row is None:
            return None
        return {"user_id": _embedded(row, "push_notifications", "user_id")}

    def get_review_parties(self, review_id: Any) -> Optional[Dict[str, Any]]:
        row = self._fetch_one("reviews", f"id, {CLIENT_AND_EMPLOYEE}", review_id)
        if row is None:
            return None
        return {
            "client_user_id": _embedded(row, "clients", "user_id"),
            "employee_user_id": _embedded(row, "employees", "user_id"),
        }

    def get_employee_record_user(self, table: str, record_id: Any) -> Optional[Dict[str, Any]]:
        """Schedules, absences and other rows keyed by employee_id."""
        row = self._fetch_one(table, "id, employees!inner(user_id)", record_id)
        if row is None:
            return None
        return {"employee_user_id": _embedded(row, "employees", "user_id")}

    def get_client_file_client(self, file_id: Any) -> Optional[Dict[str, Any]]:
        row = self._fetch_one("client_files", "id, clients!inner(user_id)", file_id)
        if row is None:
            return None
        return {"client_user_id": _embedded(row, "clients", "user_id")}

    def get_service_history_parties(self, entry_id: Any) -> Optional[Dict[str, Any]]:
        row = self._fetch_one("client_service_history", f"id, {CLIENT_AND_EMPLOYEE}", entry_id)
        if row is None:
            return None
        return {
            "client_user_id": _embedded(row, "clients", "user_id"),
            "employee_user_id": _embedded(row, "employees", "user_id"),
        }

    def get_calendar_event_user(self, event_id: Any) -> Optional[Dict[str, Any]]:
        row = self._fetch_one(
            "google_calendar_events",
            "id, google_calendars!inner(user_id)",
            event_id,
        )
        if row is None:
            return None
        return {"user_id": _embedded(row, "google_calendars", "user_id")}

    def owns_record(self, table: str, record_id: Any, owner_field: str, user_id: Any) -> bool:
        """True if a row matches both id and owner; missing and foreign rows look the same."""
        try:
            result = self.supabase.table(table)\
                .select("id")\
                .eq("id", record_id)\
                .eq(owner_field, user_id)\
                .limit(1)\
                .execute()
        except Exception as e:
            logger.error(f"Error reading ownership of {table} {record_id}: {e}")
            raise DataAccessError(table, record_id, str(e)) from e
        return bool(result.data)
