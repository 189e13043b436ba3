"""
Role to permission mapping
"""

from types import MappingProxyType
from typing import FrozenSet, Mapping, Union

from event_api.models.user import Role

ALL_ROLES: Mapping[Role, FrozenSet[str]] = MappingProxyType({
    Role.USER: frozenset({"getEvents"}),
    Role.ADMIN: frozenset({"getUsers", "manageUsers", "getEvents", "manageEvents"}),
})

def role_rights(role: Union[Role, str]) -> FrozenSet[str]:
    """Return the permission set granted to a role; unknown roles get none"""
    try:
        return ALL_ROLES[Role(role)]
    except ValueError:
        return frozenset()

def has_rights(role: Union[Role, str], *required: str) -> bool:
    """True when every required permission is in the role's right set"""
    rights = role_rights(role)
    return all(permission in rights for permission in required)
