from supabase import Client
from salon_backend.modules.notifications.schemas import NotificationResponse
from typing import List
from fastapi import HTTPException


class NotificationService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_notification_by_id(self, notification_id: int) -> NotificationResponse:
        """Get notification by ID"""
        try:
            result = self.supabase.table("notifications")\
                .select("*")\
                .eq("id", notification_id)\
                .limit(1)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Notification not found")

            return NotificationResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_notifications(
        self,
        current_user_id: str,
        unread_only: bool = False,
        limit: int = 20,
        offset: int = 0,
        allow_all: bool = False
    ) -> List[NotificationResponse]:
        """List the current user's notifications; allow_all returns everyone's"""
        try:
            query = self.supabase.table("notifications").select("*")
            if not allow_all:
                query = query.eq("user_id", current_user_id)
            if unread_only:
                query = query.eq("read", False)
            result = query.order("created_at", desc=True)\
                .limit(limit)\
                .offset(offset)\
                .execute()
            return [NotificationResponse(**notification) for notification in result.data]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def mark_as_read(self, notification_id: int) -> NotificationResponse:
        """Mark notification as read"""
        try:
            result = self.supabase.table("notifications")\
                .update({"read": True})\
                .eq("id", notification_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Notification not found")

            return NotificationResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
