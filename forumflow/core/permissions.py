# Role-based authorization policy.
# Maps stored user roles to the capabilities they grant; the Access Guard
# dependency in forumflow.deps asks the policy before a handler runs.

from enum import Enum
from typing import Any, Dict, FrozenSet, Mapping, Optional


class Role(str, Enum):
    USER = "user"
    ADMIN = "admin"


class Capability(str, Enum):
    AUTHENTICATED = "authenticated"
    MANAGE_USERS = "manage_users"
    MANAGE_REPORTS = "manage_reports"
    MANAGE_ANNOUNCEMENTS = "manage_announcements"


DEFAULT_ROLE = Role.USER
PRIVILEGED_ROLE = Role.ADMIN

ROLE_CAPABILITIES: Dict[Role, FrozenSet[Capability]] = {
    Role.USER: frozenset({Capability.AUTHENTICATED}),
    Role.ADMIN: frozenset(Capability),
}


class RolePolicy:
    """Decides whether a stored user record holds a capability."""

    def __init__(self, grants: Mapping[Role, FrozenSet[Capability]] = ROLE_CAPABILITIES) -> None:
        self.grants = grants

    def allows(self, user: Optional[Dict[str, Any]], capability: Capability) -> bool:
        if not user:
            return False
        try:
            role = Role(user.get("role"))
        except ValueError:
            return False
        return capability in self.grants.get(role, frozenset())


policy = RolePolicy()
