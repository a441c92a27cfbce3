from fastapi import APIRouter, Depends
from salon_backend.database.supabase_client import get_supabase
from salon_backend.modules.appointments.schemas import AppointmentUpdate, AppointmentResponse
from salon_backend.modules.appointments.service import AppointmentService
from salon_backend.modules.authorization.domain import Action, Principal, ResourceType
from salon_backend.modules.authorization.engine import AuthorizationEngine
from salon_backend.core.dependencies import get_authorization_engine, require_access
from supabase import Client
from typing import List

router = APIRouter(prefix="/appointments", tags=["appointments"])


def get_appointment_service(supabase: Client = Depends(get_supabase)) -> AppointmentService:
    return AppointmentService(supabase)


@router.get("", response_model=List[AppointmentResponse])
async def list_appointments(
    limit: int = 10,
    offset: int = 0,
    principal: Principal = Depends(require_access(ResourceType.APPOINTMENTS, Action.READ)),
    engine: AuthorizationEngine = Depends(get_authorization_engine),
    service: AppointmentService = Depends(get_appointment_service)
):
    """List appointments: clients and employees get their own, administrators and owners get all."""
    allow_all = engine.classifier.is_elevated(principal.role)
    return service.list_appointments(current_user_id=principal.id, limit=limit, offset=offset, allow_all=allow_all)


@router.get("/{appointment_id}", response_model=AppointmentResponse)
async def get_appointment(
    appointment_id: int,
    principal: Principal = Depends(require_access(ResourceType.APPOINTMENTS, Action.READ, "appointment_id", int)),
    service: AppointmentService = Depends(get_appointment_service)
):
    """Get appointment by ID (client or assigned employee only, unless elevated)"""
    return service.get_appointment_by_id(appointment_id)


@router.put("/{appointment_id}", response_model=AppointmentResponse)
async def update_appointment(
    appointment_id: int,
    appointment_data: AppointmentUpdate,
    principal: Principal = Depends(require_access(ResourceType.APPOINTMENTS, Action.UPDATE, "appointment_id", int)),
    service: AppointmentService = Depends(get_appointment_service)
):
    """Update appointment (client or assigned employee only, unless elevated)"""
    return service.update_appointment(appointment_id, appointment_data)
