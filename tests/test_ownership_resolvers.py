"""Tests for the ownership resolvers and their registry."""

import pytest

from salon_backend.modules.authorization.domain import OwnershipRecord, Principal, ResourceType, Role
from salon_backend.modules.authorization.exceptions import DataAccessError
from salon_backend.modules.authorization.resolvers import (
    AppointmentServiceResolver,
    ClientFileResolver,
    EmployeeRecordResolver,
    GenericOwnerFieldResolver,
    SentPushNotificationResolver,
    ServiceHistoryResolver,
)


def _resolve(registry, resource_type, instance_id, principal):
    return registry.resolve(resource_type, instance_id, principal)


class TestBespokeResolvers:
    def test_appointment_has_client_and_employee_owners(self, registry, repository, client_user):
        repository.add("appointments", 10, client_user_id=42, employee_user_id=7)

        record = _resolve(registry, ResourceType.APPOINTMENTS, 10, client_user)

        assert record.owners == frozenset({42, 7})

    def test_payment_resolves_through_appointment(self, registry, repository, employee):
        repository.add("payments", 3, client_user_id=42, employee_user_id=7)

        record = _resolve(registry, ResourceType.PAYMENTS, 3, employee)

        assert record.owners == frozenset({42, 7})
        assert repository.calls == [("payments", 3)]

    def test_sale_is_owned_by_seller_only(self, registry, repository, employee):
        repository.add("product_sales", 5, employee_user_id=9)

        record = _resolve(registry, ResourceType.PRODUCT_SALES, 5, employee)

        assert record.owners == frozenset({9})

    def test_sale_detail_inherits_seller(self, registry, repository, employee):
        repository.add("product_sale_details", 8, employee_user_id=7)

        assert _resolve(registry, ResourceType.PRODUCT_SALE_DETAILS, 8, employee).owners == frozenset({7})

    @pytest.mark.parametrize("resource_type", [ResourceType.NOTIFICATIONS, ResourceType.PUSH_NOTIFICATIONS])
    def test_notifications_use_stored_user_id(self, registry, repository, client_user, resource_type):
        repository.add(resource_type.value, 1, user_id=42)

        assert _resolve(registry, resource_type, 1, client_user).owners == frozenset({42})

    def test_review_has_both_parties(self, registry, repository, client_user):
        repository.add("reviews", 4, client_user_id=42, employee_user_id=7)

        assert _resolve(registry, ResourceType.REVIEWS, 4, client_user).owners == frozenset({42, 7})

    @pytest.mark.parametrize("resource_type", [
        ResourceType.EMPLOYEE_SCHEDULES,
        ResourceType.EMPLOYEE_ABSENCES,
        ResourceType.EMPLOYEE_SPECIALTIES,
        ResourceType.EMPLOYEE_SERVICES,
    ])
    def test_employee_records_owned_by_employee(self, registry, repository, employee, resource_type):
        repository.add(resource_type.value, 2, employee_user_id=7)

        resolver = registry.resolver_for(resource_type)

        assert isinstance(resolver, EmployeeRecordResolver)
        assert resolver.resolve(resource_type, 2, employee).owners == frozenset({7})

    def test_client_file_is_open_to_employees(self, registry, repository, employee):
        repository.add("client_files", 6, client_user_id=42)

        record = _resolve(registry, ResourceType.CLIENT_FILES, 6, employee)

        assert isinstance(registry.resolver_for(ResourceType.CLIENT_FILES), ClientFileResolver)
        assert record.owners == frozenset({42})
        assert record.open_to_roles == frozenset({Role.EMPLOYEE})

    def test_calendar_event_owned_by_calendar_user(self, registry, repository, employee):
        repository.add("google_calendar_events", 11, user_id=7)

        assert _resolve(registry, ResourceType.GOOGLE_CALENDAR_EVENTS, 11, employee).owners == frozenset({7})

    def test_appointment_service_line_inherits_appointment_pair(self, registry, repository, employee):
        repository.add("appointment_services", 13, client_user_id=42, employee_user_id=7)

        record = _resolve(registry, ResourceType.APPOINTMENT_SERVICES, 13, employee)

        assert isinstance(registry.resolver_for(ResourceType.APPOINTMENT_SERVICES), AppointmentServiceResolver)
        assert record.owners == frozenset({42, 7})
        assert repository.calls == [("appointment_services", 13)]

    def test_sent_push_notification_owned_by_subscription_user(self, registry, repository, client_user):
        repository.add("sent_push_notifications", 14, user_id=42)

        record = _resolve(registry, ResourceType.SENT_PUSH_NOTIFICATIONS, 14, client_user)

        assert isinstance(registry.resolver_for(ResourceType.SENT_PUSH_NOTIFICATIONS), SentPushNotificationResolver)
        assert record.owners == frozenset({42})
        assert repository.calls == [("sent_push_notifications", 14)]

    def test_service_history_has_client_and_employee(self, registry, repository, client_user):
        repository.add("client_service_history", 15, client_user_id=42, employee_user_id=7)

        record = _resolve(registry, ResourceType.CLIENT_SERVICE_HISTORY, 15, client_user)

        assert isinstance(registry.resolver_for(ResourceType.CLIENT_SERVICE_HISTORY), ServiceHistoryResolver)
        assert record.owners == frozenset({42, 7})
        assert repository.calls == [("client_service_history", 15)]

    @pytest.mark.parametrize("resource_type", [
        ResourceType.APPOINTMENT_SERVICES,
        ResourceType.SENT_PUSH_NOTIFICATIONS,
        ResourceType.CLIENT_SERVICE_HISTORY,
    ])
    def test_supplemental_paths_missing_instance(self, registry, client_user, resource_type):
        assert registry.has_bespoke_resolver(resource_type) is True
        assert _resolve(registry, resource_type, 404, client_user) is None

    def test_missing_instance_is_none(self, registry, client_user):
        assert _resolve(registry, ResourceType.APPOINTMENTS, 404, client_user) is None

    def test_optional_party_is_dropped(self, registry, repository, client_user):
        repository.add("appointments", 12, client_user_id=42, employee_user_id=None)

        assert _resolve(registry, ResourceType.APPOINTMENTS, 12, client_user).owners == frozenset({42})

    def test_repository_failure_propagates(self, registry, repository, client_user):
        repository.fail = True

        with pytest.raises(DataAccessError):
            _resolve(registry, ResourceType.APPOINTMENTS, 10, client_user)


class TestGenericFallback:
    def test_unregistered_type_uses_generic_resolver(self, registry):
        assert registry.has_bespoke_resolver(ResourceType.CLIENTS) is False
        assert isinstance(registry.resolver_for(ResourceType.CLIENTS), GenericOwnerFieldResolver)

    def test_match_on_owner_field_means_owned(self, registry, repository, client_user):
        repository.add("clients", 30, user_id=42)

        assert _resolve(registry, ResourceType.CLIENTS, 30, client_user) == OwnershipRecord.of(42)

    def test_foreign_record_reads_as_not_found(self, registry, repository, client_user):
        repository.add("clients", 31, user_id=99)

        assert _resolve(registry, ResourceType.CLIENTS, 31, client_user) is None
        assert _resolve(registry, ResourceType.CLIENTS, 32, client_user) is None

    def test_owner_field_override(self, registry, repository):
        principal = Principal(id="u-1", role=Role.CLIENT)
        repository.add("users", "u-1", id="u-1")

        assert registry.resolver_for(ResourceType.USERS).owner_field_for(ResourceType.USERS) == "id"
        assert _resolve(registry, ResourceType.USERS, "u-1", principal).owners == frozenset({"u-1"})

    def test_default_owner_field(self, repository):
        resolver = GenericOwnerFieldResolver(repository, "owner_user_id")
        repository.add("google_calendars", 1, owner_user_id=7, user_id=99)

        assert resolver.resolve(ResourceType.GOOGLE_CALENDARS, 1, Principal(7, Role.EMPLOYEE)) is not None
        assert resolver.resolve(ResourceType.GOOGLE_CALENDARS, 1, Principal(99, Role.EMPLOYEE)) is None

    def test_registry_is_immutable(self, registry):
        with pytest.raises(TypeError):
            registry._resolvers[ResourceType.CLIENTS] = None
