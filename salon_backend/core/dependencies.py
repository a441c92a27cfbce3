"""
Core dependencies for route protection and permission checking
"""

from fastapi import Depends, HTTPException, Request, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from salon_backend.database.supabase_client import get_supabase
from salon_backend.modules.auth.service import AuthService, principal_from_user
from salon_backend.modules.authorization.domain import (
    Action,
    AuthorizationResult,
    DenialReason,
    Principal,
    ResourceType,
)
from salon_backend.modules.authorization.engine import AuthorizationEngine, build_authorization_engine
from supabase import Client
from typing import Any, Callable, Optional
import logging

logger = logging.getLogger(__name__)

# Missing credentials become an Unauthenticated decision instead of FastAPI's own error
security = HTTPBearer(auto_error=False)

DENIAL_STATUS_CODES = {
    DenialReason.UNAUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
    DenialReason.NO_PERMISSION: status.HTTP_403_FORBIDDEN,
    DenialReason.NOT_OWNER: status.HTTP_403_FORBIDDEN,
    DenialReason.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    DenialReason.DATA_ACCESS_FAILURE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

DENIAL_DETAILS = {
    DenialReason.UNAUTHENTICATED: "Authentication required",
    DenialReason.NO_PERMISSION: "Insufficient permissions",
    DenialReason.NOT_OWNER: "You can only access your own records",
    DenialReason.NOT_FOUND: "Resource not found",
    DenialReason.DATA_ACCESS_FAILURE: "Internal server error",
}


def get_auth_service(supabase: Client = Depends(get_supabase)) -> AuthService:
    return AuthService(supabase)


def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security),
    auth_service: AuthService = Depends(get_auth_service)
) -> Optional[dict]:
    """Extract current user info from JWT token; None when no bearer token was sent"""
    if credentials is None:
        return None
    return auth_service.get_current_user(credentials.credentials)


def get_current_principal(
    user_data: Optional[dict] = Depends(get_current_user_id)
) -> Optional[Principal]:
    """Principal for this request, or None when unauthenticated or without a recognised role"""
    return principal_from_user(user_data)


def require_principal(
    principal: Optional[Principal] = Depends(get_current_principal)
) -> Principal:
    if principal is None:
        raise_for_result(AuthorizationResult.deny(DenialReason.UNAUTHENTICATED))
    return principal


def get_authorization_engine(request: Request) -> AuthorizationEngine:
    """Return the process-wide engine, building it on first use."""
    engine = getattr(request.app.state, "authorization_engine", None)
    if engine is None:
        engine = build_authorization_engine(get_supabase())
        request.app.state.authorization_engine = engine
    return engine


def raise_for_result(result: AuthorizationResult) -> None:
    """Map a denial onto its HTTP status"""
    if result.allowed:
        return
    headers = {"WWW-Authenticate": "Bearer"} if result.reason == DenialReason.UNAUTHENTICATED else None
    raise HTTPException(
        status_code=DENIAL_STATUS_CODES[result.reason],
        detail=DENIAL_DETAILS[result.reason],
        headers=headers,
    )


def _coerce_instance_id(raw_id: Optional[str], id_param: str, id_type: Optional[Callable[[str], Any]]) -> Any:
    """Convert the raw path value before it reaches an ownership read; malformed ids are 422."""
    if id_type is None or raw_id is None:
        return raw_id
    try:
        return id_type(raw_id)
    except (TypeError, ValueError):
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Invalid {id_param}: {raw_id!r}",
        )


def require_access(
    resource_type: ResourceType,
    action: Action,
    id_param: Optional[str] = None,
    id_type: Optional[Callable[[str], Any]] = None,
):
    """
    Factory function to create an authorization dependency.

    With id_param the named path parameter identifies the instance and the
    full ownership check runs; without it only the matrix is consulted.
    id_type converts the path value (e.g. int) so malformed ids are rejected
    for every role before any ownership read.
    """
    def check_access(
        request: Request,
        principal: Optional[Principal] = Depends(get_current_principal),
        engine: AuthorizationEngine = Depends(get_authorization_engine)
    ) -> Principal:
        """Dependency to check if the principal may perform the action"""
        if id_param is None or principal is None:
            result = engine.check_permission(principal, resource_type, action)
        else:
            instance_id = _coerce_instance_id(request.path_params.get(id_param), id_param, id_type)
            result = engine.authorize(principal, resource_type, action, instance_id)
        raise_for_result(result)
        return principal
    return check_access
