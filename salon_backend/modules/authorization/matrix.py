"""
Static role x resource permission matrix.

Built once from PERMISSION_TABLE and never mutated afterwards. Any
(resource type, role) pair that is not declared resolves to no actions.
"""

from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Iterable, Mapping, Tuple

from salon_backend.modules.authorization.domain import Action, ResourceType, Role

EMPTY_GRANT: FrozenSet[Action] = frozenset()


class PermissionMatrix:
    def __init__(
        self,
        table: Mapping[ResourceType, Mapping[Role, Iterable[Action]]],
        domains: Mapping[str, Tuple[ResourceType, ...]] = None,
    ):
        self._grants = MappingProxyType({
            (resource_type, role): frozenset(actions)
            for resource_type, by_role in table.items()
            for role, actions in by_role.items()
        })
        self._resource_types = tuple(table.keys())
        self._domains = MappingProxyType({
            name: tuple(members) for name, members in (domains or {}).items()
        })

    def resource_types(self) -> Tuple[ResourceType, ...]:
        return self._resource_types

    def allowed_actions(self, resource_type: ResourceType, role: Role) -> FrozenSet[Action]:
        # Exact key match: a raw string that is not an enum member never hits
        return self._grants.get((resource_type, role), EMPTY_GRANT)

    def has_permission(self, resource_type: ResourceType, role: Role, action: Action) -> bool:
        """True iff action is declared for (resource_type, role)."""
        return action in self.allowed_actions(resource_type, role)

    def permissions_for_role(self, role: Role) -> Dict[ResourceType, Dict[str, bool]]:
        """CRUD flags for every known resource type, for presentation layers."""
        return {
            resource_type: {
                action.value: self.has_permission(resource_type, role, action)
                for action in Action
            }
            for resource_type in self._resource_types
        }

    def permissions_by_domain(self, role: Role) -> Dict[str, Dict[str, Dict[str, bool]]]:
        """Same projection as permissions_for_role, grouped into display domains."""
        flags = self.permissions_for_role(role)
        grouped: Dict[str, Dict[str, Any]] = {}
        for domain, members in self._domains.items():
            grouped[domain] = {
                resource_type.value: flags[resource_type]
                for resource_type in members
                if resource_type in flags
            }
        return grouped
