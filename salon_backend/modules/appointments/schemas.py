from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class AppointmentUpdate(BaseModel):
    status_id: Optional[int] = None
    starts_at: Optional[datetime] = None
    notes: Optional[str] = None


class AppointmentResponse(BaseModel):
    id: int
    client_id: int
    employee_id: int
    status_id: Optional[int] = None
    starts_at: datetime
    notes: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
