from fastapi import APIRouter, Depends
from salon_backend.database.supabase_client import get_supabase
from salon_backend.modules.notifications.schemas import NotificationResponse
from salon_backend.modules.notifications.service import NotificationService
from salon_backend.modules.authorization.domain import Action, Principal, ResourceType
from salon_backend.modules.authorization.engine import AuthorizationEngine
from salon_backend.core.dependencies import get_authorization_engine, require_access
from supabase import Client
from typing import List

router = APIRouter(prefix="/notifications", tags=["notifications"])


def get_notification_service(supabase: Client = Depends(get_supabase)) -> NotificationService:
    return NotificationService(supabase)


@router.get("", response_model=List[NotificationResponse])
async def list_notifications(
    unread_only: bool = False,
    limit: int = 20,
    offset: int = 0,
    principal: Principal = Depends(require_access(ResourceType.NOTIFICATIONS, Action.READ)),
    engine: AuthorizationEngine = Depends(get_authorization_engine),
    service: NotificationService = Depends(get_notification_service)
):
    """List notifications: own ones, or all for administrators and owners"""
    allow_all = engine.classifier.is_elevated(principal.role)
    return service.list_notifications(
        current_user_id=principal.id,
        unread_only=unread_only,
        limit=limit,
        offset=offset,
        allow_all=allow_all,
    )


@router.get("/{notification_id}", response_model=NotificationResponse)
async def get_notification(
    notification_id: int,
    principal: Principal = Depends(require_access(ResourceType.NOTIFICATIONS, Action.READ, "notification_id", int)),
    service: NotificationService = Depends(get_notification_service)
):
    """Get notification by ID (recipient only, unless elevated)"""
    return service.get_notification_by_id(notification_id)


@router.patch("/{notification_id}/read", response_model=NotificationResponse)
async def mark_notification_read(
    notification_id: int,
    principal: Principal = Depends(require_access(ResourceType.NOTIFICATIONS, Action.UPDATE, "notification_id", int)),
    service: NotificationService = Depends(get_notification_service)
):
    """Mark notification as read (recipient only, unless elevated)"""
    return service.mark_as_read(notification_id)
