"""Role permission table

Loaded once at import and read-only afterwards. Anonymous callers are
customers and never appear here; customer rights are checked by the
reservation service itself (phone match and cancellation window).
"""

from types import MappingProxyType
from typing import FrozenSet, Mapping, Optional, Tuple

from app.models.user import UserRole

_ALL_STAFF = frozenset({UserRole.ADMIN, UserRole.MANAGER, UserRole.STAFF})
_MANAGEMENT = frozenset({UserRole.ADMIN, UserRole.MANAGER})

PERMISSIONS: Mapping[Tuple[str, str], FrozenSet[UserRole]] = MappingProxyType({
    ("reservation", "list"): _ALL_STAFF,
    ("reservation", "confirm"): _ALL_STAFF,
    ("reservation", "arrive"): _ALL_STAFF,
    ("reservation", "cancel_any"): _ALL_STAFF,
    ("reservation", "dashboard"): _ALL_STAFF,
    ("table", "view"): _ALL_STAFF,
    ("table", "create"): _MANAGEMENT,
    ("table", "update"): _MANAGEMENT,
})


def has_permission(role: Optional[UserRole], entity: str, action: str) -> bool:
    """Return True if the role may perform action on entity"""
    if role is None:
        return False
    return UserRole(role) in PERMISSIONS.get((entity, action), frozenset())
