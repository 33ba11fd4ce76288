import logging
from collections.abc import Mapping, Sequence

from contentflow.domain.entities import WILDCARD, User, normalize_capability
from contentflow.domain.errors import AccessDenied

logger = logging.getLogger(__name__)


class PermissionChecker:
    def __init__(self, role_grants: Mapping[str, Sequence[str]] | None = None):
        self.role_grants = {
            role: frozenset(normalize_capability(c) for c in caps)
            for role, caps in (role_grants or {}).items()
        }

    def effective_capabilities(self, user: User) -> frozenset[str]:
        """Capabilities granted directly plus those granted through roles."""
        granted = set(user.capabilities)
        for role in user.roles:
            granted.update(self.role_grants.get(role, ()))
        return frozenset(granted)

    def has(self, capability: str, user: User | None) -> bool:
        if user is None:
            return False
        granted = self.effective_capabilities(user)
        if WILDCARD in granted:
            return True
        return normalize_capability(capability) in granted

    def require(self, capability: str, user: User | None) -> None:
        """
        Raise AccessDenied unless the user holds the capability.
        Every operation that needs authorization goes through here.
        """
        if not self.has(capability, user):
            user_id = user.id if user else None
            logger.info("Denied %s for user %s", normalize_capability(capability), user_id)
            raise AccessDenied(normalize_capability(capability), user_id)
