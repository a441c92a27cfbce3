"""
Ownership resolvers, one per resource type with bespoke ownership semantics,
plus a generic owner-column fallback for everything else.

A resolver maps an instance id to an OwnershipRecord, or None when the
instance does not exist. Resolvers only read; DataAccessError from the
repository propagates to the engine.
"""

from abc import ABC, abstractmethod
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional
import logging

from salon_backend.modules.authorization.domain import (
    OwnershipRecord,
    Principal,
    ResourceType,
    Role,
)

logger = logging.getLogger(__name__)


class OwnershipResolver(ABC):
    @abstractmethod
    def resolve(
        self,
        resource_type: ResourceType,
        instance_id: Any,
        principal: Principal,
    ) -> Optional[OwnershipRecord]:
        ...


class RepositoryResolver(OwnershipResolver):
    """Base for resolvers backed by the ownership repository."""

    def __init__(self, repository):
        self.repository = repository


class AppointmentResolver(RepositoryResolver):
    """Client and assigned employee both own an appointment."""

    def resolve(self, resource_type, instance_id, principal):
        parties = self.repository.get_appointment_parties(instance_id)
        if parties is None:
            return None
        return OwnershipRecord.of(parties["client_user_id"], parties["employee_user_id"])


class AppointmentServiceResolver(RepositoryResolver):
    """Service lines inherit the owners of their appointment."""

    def resolve(self, resource_type, instance_id, principal):
        parties = self.repository.get_appointment_service_parties(instance_id)
        if parties is None:
            return None
        return OwnershipRecord.of(parties["client_user_id"], parties["employee_user_id"])


class PaymentResolver(RepositoryResolver):
    """Payments resolve through their appointment to the same client/employee pair."""

    def resolve(self, resource_type, instance_id, principal):
        parties = self.repository.get_payment_parties(instance_id)
        if parties is None:
            return None
        return OwnershipRecord.of(parties["client_user_id"], parties["employee_user_id"])


class SaleResolver(RepositoryResolver):
    """Only the selling employee owns a product sale; the client is never an owner."""

    def resolve(self, resource_type, instance_id, principal):
        seller = self.repository.get_sale_seller(instance_id)
        if seller is None:
            return None
        return OwnershipRecord.of(seller["employee_user_id"])


class SaleDetailResolver(RepositoryResolver):
    def resolve(self, resource_type, instance_id, principal):
        seller = self.repository.get_sale_detail_seller(instance_id)
        if seller is None:
            return None
        return OwnershipRecord.of(seller["employee_user_id"])


class DirectUserResolver(RepositoryResolver):
    """Owner is the user id stored on the record itself (notifications, push subscriptions)."""

    def __init__(self, repository, user_field: str = "user_id"):
        super().__init__(repository)
        self.user_field = user_field

    def resolve(self, resource_type, instance_id, principal):
        record = self.repository.get_record_user(resource_type.value, instance_id, self.user_field)
        if record is None:
            return None
        return OwnershipRecord.of(record["user_id"])


class SentPushNotificationResolver(RepositoryResolver):
    def resolve(self, resource_type, instance_id, principal):
        record = self.repository.get_sent_push_notification_user(instance_id)
        if record is None:
            return None
        return OwnershipRecord.of(record["user_id"])


class ReviewResolver(RepositoryResolver):
    """Reviewing client and reviewed employee both own a review."""

    def resolve(self, resource_type, instance_id, principal):
        parties = self.repository.get_review_parties(instance_id)
        if parties is None:
            return None
        return OwnershipRecord.of(parties["client_user_id"], parties["employee_user_id"])


class EmployeeRecordResolver(RepositoryResolver):
    """Rows keyed by employee_id (schedules, absences, specialties, services)."""

    def resolve(self, resource_type, instance_id, principal):
        record = self.repository.get_employee_record_user(resource_type.value, instance_id)
        if record is None:
            return None
        return OwnershipRecord.of(record["employee_user_id"])


class ClientFileResolver(RepositoryResolver):
    """
    The client owns their file. Every employee may also work with it, whether
    or not they have served that client.
    """

    def resolve(self, resource_type, instance_id, principal):
        record = self.repository.get_client_file_client(instance_id)
        if record is None:
            return None
        return OwnershipRecord.of(record["client_user_id"], open_to_roles=(Role.EMPLOYEE,))


class ServiceHistoryResolver(RepositoryResolver):
    def resolve(self, resource_type, instance_id, principal):
        parties = self.repository.get_service_history_parties(instance_id)
        if parties is None:
            return None
        return OwnershipRecord.of(parties["client_user_id"], parties["employee_user_id"])


class CalendarEventResolver(RepositoryResolver):
    """Events belong to the owner of the calendar they were synced to."""

    def resolve(self, resource_type, instance_id, principal):
        record = self.repository.get_calendar_event_user(instance_id)
        if record is None:
            return None
        return OwnershipRecord.of(record["user_id"])


class GenericOwnerFieldResolver(RepositoryResolver):
    """
    Fallback for resource types without richer semantics.

    Looks the instance up by id AND owner column = principal id. A match
    means the principal owns it; anything else reads as not found, so the
    caller cannot tell a foreign record from a missing one.
    """

    def __init__(self, repository, default_owner_field: str = "user_id", owner_fields: Mapping[ResourceType, str] = None):
        super().__init__(repository)
        self.default_owner_field = default_owner_field
        self.owner_fields = MappingProxyType(dict(owner_fields or {}))

    def owner_field_for(self, resource_type: ResourceType) -> str:
        return self.owner_fields.get(resource_type, self.default_owner_field)

    def resolve(self, resource_type, instance_id, principal):
        owner_field = self.owner_field_for(resource_type)
        if not self.repository.owns_record(resource_type.value, instance_id, owner_field, principal.id):
            return None
        return OwnershipRecord.of(principal.id)


class ResolverRegistry:
    """Immutable resource type -> resolver dispatch with a generic fallback."""

    def __init__(self, resolvers: Mapping[ResourceType, OwnershipResolver], fallback: OwnershipResolver):
        self._resolvers = MappingProxyType(dict(resolvers))
        self._fallback = fallback

    def resolver_for(self, resource_type: ResourceType) -> OwnershipResolver:
        return self._resolvers.get(resource_type, self._fallback)

    def has_bespoke_resolver(self, resource_type: ResourceType) -> bool:
        return resource_type in self._resolvers

    def resolve(self, resource_type: ResourceType, instance_id: Any, principal: Principal) -> Optional[OwnershipRecord]:
        resolver = self.resolver_for(resource_type)
        logger.debug(f"Resolving owners of {resource_type.value} {instance_id} with {type(resolver).__name__}")
        return resolver.resolve(resource_type, instance_id, principal)


def build_resolver_registry(
    repository,
    default_owner_field: str = "user_id",
    owner_field_overrides: Mapping[ResourceType, str] = None,
) -> ResolverRegistry:
    """Wire every bespoke resolver to the given repository. Called once at startup."""
    employee_records = EmployeeRecordResolver(repository)
    direct_user = DirectUserResolver(repository)

    resolvers: Dict[ResourceType, OwnershipResolver] = {
        ResourceType.APPOINTMENTS: AppointmentResolver(repository),
        ResourceType.APPOINTMENT_SERVICES: AppointmentServiceResolver(repository),
        ResourceType.PAYMENTS: PaymentResolver(repository),
        ResourceType.PRODUCT_SALES: SaleResolver(repository),
        ResourceType.PRODUCT_SALE_DETAILS: SaleDetailResolver(repository),
        ResourceType.NOTIFICATIONS: direct_user,
        ResourceType.PUSH_NOTIFICATIONS: direct_user,
        ResourceType.SENT_PUSH_NOTIFICATIONS: SentPushNotificationResolver(repository),
        ResourceType.REVIEWS: ReviewResolver(repository),
        ResourceType.EMPLOYEE_SCHEDULES: employee_records,
        ResourceType.EMPLOYEE_ABSENCES: employee_records,
        ResourceType.EMPLOYEE_SPECIALTIES: employee_records,
        ResourceType.EMPLOYEE_SERVICES: employee_records,
        ResourceType.CLIENT_FILES: ClientFileResolver(repository),
        ResourceType.CLIENT_SERVICE_HISTORY: ServiceHistoryResolver(repository),
        ResourceType.GOOGLE_CALENDAR_EVENTS: CalendarEventResolver(repository),
    }
    fallback = GenericOwnerFieldResolver(repository, default_owner_field, owner_field_overrides)
    return ResolverRegistry(resolvers, fallback)
