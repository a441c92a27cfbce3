from fastapi import APIRouter, Depends
from salon_backend.modules.authorization.schemas import (
    AccessCheckRequest, AccessCheckResponse, RolePermissionsResponse
)
from salon_backend.modules.authorization.domain import Action, Principal, ResourceType, Role
from salon_backend.modules.authorization.engine import AuthorizationEngine
from salon_backend.core.dependencies import (
    get_authorization_engine,
    get_current_principal,
    require_access,
    require_principal,
)
from typing import Optional

router = APIRouter(prefix="/authorization", tags=["authorization"])


def _role_permissions(role: Role, engine: AuthorizationEngine) -> RolePermissionsResponse:
    return RolePermissionsResponse(
        role=role,
        elevated=engine.classifier.is_elevated(role),
        permissions=engine.matrix.permissions_by_domain(role),
    )


@router.get("/me/permissions", response_model=RolePermissionsResponse)
async def get_my_permissions(
    principal: Principal = Depends(require_principal),
    engine: AuthorizationEngine = Depends(get_authorization_engine)
):
    """Capabilities of the current user's role, grouped by domain (for frontend UI)"""
    return _role_permissions(principal.role, engine)


@router.get("/roles/{role}/permissions", response_model=RolePermissionsResponse)
async def get_role_permissions(
    role: Role,
    principal: Principal = Depends(require_access(ResourceType.ROLES, Action.READ)),
    engine: AuthorizationEngine = Depends(get_authorization_engine)
):
    """Capabilities of any role (requires roles:read)"""
    return _role_permissions(role, engine)


@router.post("/check", response_model=AccessCheckResponse)
def check_access(
    check: AccessCheckRequest,
    principal: Optional[Principal] = Depends(get_current_principal),
    engine: AuthorizationEngine = Depends(get_authorization_engine)
):
    """Report the decision for the caller without performing the action"""
    if check.instance_id is None:
        result = engine.check_permission(principal, check.resource_type, check.action)
    else:
        result = engine.authorize(principal, check.resource_type, check.action, check.instance_id)
    return AccessCheckResponse(allowed=result.allowed, reason=result.reason)
