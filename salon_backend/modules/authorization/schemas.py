from pydantic import BaseModel
from typing import Dict, Optional, Union

from salon_backend.modules.authorization.domain import Action, DenialReason, ResourceType, Role


class AccessCheckRequest(BaseModel):
    resource_type: ResourceType
    action: Action
    instance_id: Optional[Union[int, str]] = None


class AccessCheckResponse(BaseModel):
    allowed: bool
    reason: Optional[DenialReason] = None


class RolePermissionsResponse(BaseModel):
    role: Role
    elevated: bool
    permissions: Dict[str, Dict[str, Dict[str, bool]]]
