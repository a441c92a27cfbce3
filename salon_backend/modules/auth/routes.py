from fastapi import APIRouter, Depends, Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from salon_backend.modules.auth.schemas import (
    LoginRequest, TokenResponse, SetRoleRequest, PrincipalResponse
)
from salon_backend.modules.auth.service import AuthService
from salon_backend.modules.authorization.domain import Action, Principal, ResourceType
from salon_backend.modules.authorization.engine import AuthorizationEngine
from salon_backend.core.dependencies import (
    get_auth_service,
    get_authorization_engine,
    get_current_user_id,
    require_access,
    require_principal,
)
from typing import Dict, Optional

router = APIRouter(prefix="/auth", tags=["auth"])

# Security scheme for JWT Bearer token
security = HTTPBearer()


def get_current_token(
    credentials: HTTPAuthorizationCredentials = Security(security)
) -> str:
    """Extract JWT token from Authorization header"""
    return credentials.credentials


@router.post("/login", response_model=TokenResponse)
async def login(
    login_data: LoginRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Login and get access token"""
    return service.login(login_data)


@router.post("/logout", status_code=200)
async def logout(
    token: str = Depends(get_current_token),
    service: AuthService = Depends(get_auth_service)
):
    """Logout and invalidate token"""
    service.logout(token)
    return {"message": "Logged out successfully"}


@router.get("/me", response_model=PrincipalResponse)
async def get_current_user(
    principal: Principal = Depends(require_principal),
    user_data: Optional[Dict] = Depends(get_current_user_id),
    engine: AuthorizationEngine = Depends(get_authorization_engine)
):
    """Get current authenticated user, their role and capabilities (for frontend UI)."""
    return PrincipalResponse(
        id=str(principal.id),
        role=principal.role,
        email=(user_data or {}).get("email"),
        permissions=engine.matrix.permissions_by_domain(principal.role),
    )


@router.post("/set-role", status_code=200)
async def set_role(
    request: SetRoleRequest,
    principal: Principal = Depends(require_access(ResourceType.ROLES, Action.UPDATE)),
    service: AuthService = Depends(get_auth_service)
):
    """Assign an application role to a user (requires roles:update)"""
    service.set_role(request.user_id, request.role)
    return {
        "message": f"User {request.user_id} role set to {request.role.value}",
        "user_id": request.user_id,
        "role": request.role.value
    }
