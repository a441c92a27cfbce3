from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class NotificationResponse(BaseModel):
    id: int
    user_id: str
    title: str
    message: str
    type: Optional[str] = None
    read: bool = False
    created_at: datetime

    class Config:
        from_attributes = True
