"""
Core authorization types: roles, actions, governed resource types, the acting
principal, ownership records and the decision returned by the engine.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, FrozenSet, Iterable, Optional


class Role(str, Enum):
    ADMINISTRATOR = "administrator"
    OWNER = "owner"
    EMPLOYEE = "employee"
    CLIENT = "client"


class Action(str, Enum):
    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"


class ResourceType(str, Enum):
    """Governed entity categories. Each value is the backing table name."""

    # Identity
    USERS = "users"
    ROLES = "roles"
    LOGS = "logs"

    # Personnel
    CLIENTS = "clients"
    EMPLOYEES = "employees"
    EMPLOYEE_ABSENCES = "employee_absences"
    EMPLOYEE_SCHEDULES = "employee_schedules"

    # Scheduling
    APPOINTMENTS = "appointments"
    APPOINTMENT_SERVICES = "appointment_services"
    APPOINTMENT_STATUSES = "appointment_statuses"
    GOOGLE_CALENDARS = "google_calendars"
    GOOGLE_CALENDAR_EVENTS = "google_calendar_events"

    # Catalog
    SERVICES = "services"
    SERVICE_CATEGORIES = "service_categories"
    PRODUCTS = "products"
    PRODUCT_CATEGORIES = "product_categories"
    PRODUCT_SALE_DETAILS = "product_sale_details"
    PRODUCT_SALES = "product_sales"
    PROMOTIONS = "promotions"
    PROMOTION_PRODUCTS = "promotion_products"
    PROMOTION_SERVICES = "promotion_services"

    # Payments
    PAYMENTS = "payments"
    PAYMENT_METHODS = "payment_methods"
    PAYMENT_STATUSES = "payment_statuses"

    # Communications
    EMAIL_TEMPLATES = "email_templates"
    SCHEDULED_EMAILS = "scheduled_emails"
    SENT_EMAILS = "sent_emails"
    NOTIFICATIONS = "notifications"
    PUSH_NOTIFICATIONS = "push_notifications"
    SENT_PUSH_NOTIFICATIONS = "sent_push_notifications"

    # Media
    MEDIA = "media"
    MEDIA_TYPES = "media_types"
    GALLERIES = "galleries"
    GALLERY_MEDIA = "gallery_media"
    GALLERY_CATEGORIES = "gallery_categories"
    GALLERY_CATEGORY_LINKS = "gallery_category_links"
    CAROUSELS = "carousels"
    CAROUSEL_MEDIA = "carousel_media"

    # Settings
    SETTINGS = "settings"
    GOOGLE_SETTINGS = "google_settings"
    SPECIALTIES = "specialties"
    EMPLOYEE_SPECIALTIES = "employee_specialties"
    EMPLOYEE_SERVICES = "employee_services"
    CLIENT_FILES = "client_files"
    CLIENT_SERVICE_HISTORY = "client_service_history"
    REVIEWS = "reviews"


class DenialReason(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    NO_PERMISSION = "no_permission"
    NOT_FOUND = "not_found"
    NOT_OWNER = "not_owner"
    DATA_ACCESS_FAILURE = "data_access_failure"


@dataclass(frozen=True)
class Principal:
    """Authenticated actor for the current request."""
    id: Any
    role: Role


@dataclass(frozen=True)
class OwnershipRecord:
    """
    Identities that count as owners of one resource instance.

    open_to_roles lists roles granted access to the instance regardless of
    identity (client files are open to every employee).
    """
    owners: FrozenSet[Any]
    open_to_roles: FrozenSet[Role] = field(default_factory=frozenset)

    @classmethod
    def of(cls, *owners: Any, open_to_roles: Iterable[Role] = ()) -> "OwnershipRecord":
        # Optional relations (e.g. a walk-in client) come back as None
        return cls(
            owners=frozenset(o for o in owners if o is not None),
            open_to_roles=frozenset(open_to_roles),
        )

    def admits(self, principal: Principal) -> bool:
        return principal.id in self.owners or principal.role in self.open_to_roles


@dataclass(frozen=True)
class AuthorizationResult:
    allowed: bool
    reason: Optional[DenialReason] = None

    @classmethod
    def allow(cls) -> "AuthorizationResult":
        return cls(allowed=True)

    @classmethod
    def deny(cls, reason: DenialReason) -> "AuthorizationResult":
        return cls(allowed=False, reason=reason)


ALLOWED = AuthorizationResult.allow()
