"""
Role-based permission checking.
The checker is built once at startup from a read-only policy table and injected into handlers.
"""

import enum
from typing import Dict, FrozenSet, Iterable, Mapping, Optional

from geomonitor.core.logging import get_logger
from geomonitor.schemas.principal import Principal

logger = get_logger(__name__)

WILDCARD = "*"


class PermissionCategory(str, enum.Enum):
    """Resource categories permissions are granted on."""
    WEREDA = "WEREDA"
    USER = "USER"


class PermissionAction(str, enum.Enum):
    """Actions a principal can perform on a category."""
    CREATE = "CREATE"
    VIEW = "VIEW"
    VIEW_ALL = "VIEW_ALL"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


_ALL_ACTIONS = [action.value for action in PermissionAction]

# role -> category -> allowed actions
DEFAULT_POLICY: Dict[str, Dict[str, Iterable[str]]] = {
    "super_admin": {WILDCARD: [WILDCARD]},
    "admin": {
        PermissionCategory.WEREDA.value: _ALL_ACTIONS,
        PermissionCategory.USER.value: _ALL_ACTIONS,
    },
    "branch_manager": {
        PermissionCategory.WEREDA.value: ["VIEW"],
        PermissionCategory.USER.value: ["CREATE", "VIEW", "UPDATE", "DELETE"],
    },
    "field_officer": {
        PermissionCategory.WEREDA.value: ["VIEW"],
        PermissionCategory.USER.value: ["CREATE", "VIEW"],
    },
}


class PermissionChecker:
    """Answers whether a principal may perform an action on a resource category."""

    def __init__(self, policy: Optional[Mapping[str, Mapping[str, Iterable[str]]]] = None):
        source = DEFAULT_POLICY if policy is None else policy
        self._policy: Dict[str, Dict[str, FrozenSet[str]]] = {
            role: {category: frozenset(actions) for category, actions in grants.items()}
            for role, grants in source.items()
        }

    async def is_permitted(
        self,
        principal: Principal,
        category: PermissionCategory,
        action: PermissionAction,
    ) -> bool:
        """Check a single action against the principal's role grants."""
        grants = self._policy.get(principal.role, {})
        category_key = PermissionCategory(category).value
        action_key = PermissionAction(action).value

        for key in (category_key, WILDCARD):
            allowed = grants.get(key)
            if allowed and (action_key in allowed or WILDCARD in allowed):
                return True

        logger.info(
            "Permission denied",
            extra={
                "principal_id": str(principal.id),
                "role": principal.role,
                "category": category_key,
                "action": action_key,
            },
        )
        return False
