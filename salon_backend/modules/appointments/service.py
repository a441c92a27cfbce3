from supabase import Client
from salon_backend.modules.appointments.schemas import AppointmentUpdate, AppointmentResponse
from typing import List, Optional
from fastapi import HTTPException
from datetime import datetime, timezone
import logging

logger = logging.getLogger(__name__)


class AppointmentService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _linked_id(self, table: str, user_id: str) -> Optional[int]:
        """Return the clients/employees row id linked to a user, if any"""
        result = self.supabase.table(table)\
            .select("id")\
            .eq("user_id", user_id)\
            .limit(1)\
            .execute()
        return result.data[0]["id"] if result.data else None

    def get_appointment_by_id(self, appointment_id: int) -> AppointmentResponse:
        """Get appointment by ID"""
        try:
            result = self.supabase.table("appointments")\
                .select("*")\
                .eq("id", appointment_id)\
                .limit(1)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Appointment not found")

            return AppointmentResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_appointments(
        self,
        current_user_id: str,
        limit: int = 10,
        offset: int = 0,
        allow_all: bool = False
    ) -> List[AppointmentResponse]:
        """List appointments. Clients and employees only see the ones they take part in; allow_all returns every appointment."""
        try:
            query = self.supabase.table("appointments").select("*")
            if not allow_all:
                filters = []
                client_id = self._linked_id("clients", current_user_id)
                if client_id is not None:
                    filters.append(f"client_id.eq.{client_id}")
                employee_id = self._linked_id("employees", current_user_id)
                if employee_id is not None:
                    filters.append(f"employee_id.eq.{employee_id}")
                if not filters:
                    return []
                query = query.or_(",".join(filters))
            result = query.order("starts_at", desc=True)\
                .limit(limit)\
                .offset(offset)\
                .execute()
            return [AppointmentResponse(**appointment) for appointment in result.data]
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_appointment(self, appointment_id: int, appointment_data: AppointmentUpdate) -> AppointmentResponse:
        """Update appointment"""
        try:
            update_data = {"updated_at": datetime.now(timezone.utc).isoformat()}
            if appointment_data.status_id is not None:
                update_data["status_id"] = appointment_data.status_id
            if appointment_data.starts_at is not None:
                update_data["starts_at"] = appointment_data.starts_at.isoformat()
            if appointment_data.notes is not None:
                update_data["notes"] = appointment_data.notes

            result = self.supabase.table("appointments")\
                .update(update_data)\
                .eq("id", appointment_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Appointment not found")

            logger.info(f"Appointment {appointment_id} updated: {sorted(update_data)}")
            return AppointmentResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
