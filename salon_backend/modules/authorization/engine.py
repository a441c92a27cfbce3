"""
Authorization engine.

One pass per request:

    Start -> AuthenticatedCheck -> PermissionCheck -> ElevationCheck
          -> OwnershipCheck -> Decision

The engine keeps no state between calls and never writes. Ownership is read
fresh on every decision; a failed read denies with DATA_ACCESS_FAILURE.
"""

from supabase import Client
from typing import Any, Optional
import logging

from salon_backend.config.permissions_config import (
    DOMAINS,
    GENERIC_OWNER_FIELDS,
    PERMISSION_TABLE,
)
from salon_backend.config.settings import Settings, settings as default_settings
from salon_backend.modules.authorization.classifier import RoleClassifier
from salon_backend.modules.authorization.domain import (
    ALLOWED,
    Action,
    AuthorizationResult,
    DenialReason,
    Principal,
    ResourceType,
)
from salon_backend.modules.authorization.exceptions import DataAccessError
from salon_backend.modules.authorization.matrix import PermissionMatrix
from salon_backend.modules.authorization.repository import SupabaseOwnershipRepository
from salon_backend.modules.authorization.resolvers import ResolverRegistry, build_resolver_registry

logger = logging.getLogger(__name__)

# Process-wide matrix, loaded once at import
PERMISSION_MATRIX = PermissionMatrix(PERMISSION_TABLE, DOMAINS)


class AuthorizationEngine:
    def __init__(
        self,
        matrix: PermissionMatrix,
        classifier: RoleClassifier,
        registry: ResolverRegistry,
    ):
        self.matrix = matrix
        self.classifier = classifier
        self.registry = registry

    def check_permission(
        self,
        principal: Optional[Principal],
        resource_type: ResourceType,
        action: Action,
    ) -> AuthorizationResult:
        """Matrix-only decision for collection operations that have no instance (create, list)."""
        if principal is None:
            return AuthorizationResult.deny(DenialReason.UNAUTHENTICATED)
        if not self.matrix.has_permission(resource_type, principal.role, action):
            logger.info(
                f"Denied {action.value} on {resource_type.value}: "
                f"role {principal.role.value} has no permission"
            )
            return AuthorizationResult.deny(DenialReason.NO_PERMISSION)
        return ALLOWED

    def authorize(
        self,
        principal: Optional[Principal],
        resource_type: ResourceType,
        action: Action,
        instance_id: Any,
    ) -> AuthorizationResult:
        """Decide whether principal may perform action on one resource instance."""
        result = self.check_permission(principal, resource_type, action)
        if not result.allowed:
            return result

        if self.classifier.is_elevated(principal.role):
            return ALLOWED

        try:
            record = self.registry.resolve(resource_type, instance_id, principal)
        except DataAccessError as e:
            logger.error(f"Ownership check failed for {resource_type.value} {instance_id}: {e}")
            return AuthorizationResult.deny(DenialReason.DATA_ACCESS_FAILURE)

        if record is None:
            logger.info(f"Denied {action.value} on {resource_type.value} {instance_id}: not found")
            return AuthorizationResult.deny(DenialReason.NOT_FOUND)

        if not record.admits(principal):
            logger.info(
                f"Denied {action.value} on {resource_type.value} {instance_id}: "
                f"user {principal.id} is not an owner"
            )
            return AuthorizationResult.deny(DenialReason.NOT_OWNER)

        logger.debug(f"Allowed {action.value} on {resource_type.value} {instance_id} for user {principal.id}")
        return ALLOWED


def build_authorization_engine(supabase: Client, app_settings: Settings = None) -> AuthorizationEngine:
    """Wire the process-wide matrix and a resolver registry over Supabase."""
    app_settings = app_settings or default_settings
    registry = build_resolver_registry(
        SupabaseOwnershipRepository(supabase),
        default_owner_field=app_settings.generic_owner_field,
        owner_field_overrides=GENERIC_OWNER_FIELDS,
    )
    return AuthorizationEngine(PERMISSION_MATRIX, RoleClassifier(), registry)
