from pydantic import BaseModel, EmailStr
from typing import Dict, Optional

from salon_backend.modules.authorization.domain import Role


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: str
    email: str


class SetRoleRequest(BaseModel):
    user_id: str
    role: Role


class PrincipalResponse(BaseModel):
    id: str
    role: Role
    permissions: Dict[str, Dict[str, Dict[str, bool]]]
    email: Optional[str] = None
