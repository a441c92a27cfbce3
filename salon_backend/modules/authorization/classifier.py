from salon_backend.modules.authorization.domain import Role

ELEVATED_ROLES = frozenset({Role.ADMINISTRATOR, Role.OWNER})


class RoleClassifier:
    """Decides whether a role bypasses ownership checks."""

    def __init__(self, elevated_roles=ELEVATED_ROLES):
        self._elevated = frozenset(elevated_roles)

    def is_elevated(self, role: Role) -> bool:
        return role in self._elevated
