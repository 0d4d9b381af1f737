"""
Role-exclusive actor session.

At most one actor is logged in at a time, acting as exactly one of
administrator, staff or patron. Logging in under any role replaces
whatever role was active before.

Credential checks are not done here; callers log an actor in once they
have authenticated them.
"""

import logging
from enum import Enum

from ..errors import InvalidArgumentError, PolicyViolationError

logger = logging.getLogger(__name__)


class Role(str, Enum):
    """Roles an actor can hold."""

    ADMINISTRATOR = "administrator"
    STAFF = "staff"
    PATRON = "patron"


class ActorSession:
    """Tracks the currently logged-in actor and their role."""

    def __init__(self) -> None:
        self._role: Role | None = None
        self._actor_id: str | None = None

    @property
    def current_role(self) -> Role | None:
        return self._role

    @property
    def actor_id(self) -> str | None:
        return self._actor_id

    def login(self, role: Role | str, actor_id: str) -> None:
        """Log an actor in, clearing any other active role."""
        role = _parse_role(role)
        if self._role is not None:
            logger.info("Ending %s session for %s", self._role.value, self._actor_id)
        self._role = role
        self._actor_id = actor_id
        logger.info("%s %s logged in", role.value.capitalize(), actor_id)

    def logout(self) -> None:
        self._role = None
        self._actor_id = None

    def is_logged_in(self, role: Role | str | None = None) -> bool:
        """Check whether anyone (or anyone holding ``role``) is logged in."""
        if role is None:
            return self._role is not None
        return self._role == _parse_role(role)

    def require(self, role: Role | str) -> str:
        """
        Return the active actor id if they hold ``role``.

        Raises:
            PolicyViolationError: If no actor holds the role
        """
        role = _parse_role(role)
        if self._role != role or self._actor_id is None:
            raise PolicyViolationError(f"You must be logged in as {role.value} to do this")
        return self._actor_id

    def active_patron_id(self) -> str | None:
        """Identity of the logged-in patron, or None if no patron is active."""
        return self._actor_id if self._role == Role.PATRON else None


def _parse_role(role: Role | str) -> Role:
    try:
        return Role(role)
    except ValueError:
        raise InvalidArgumentError(f"Unknown role: {role!r}") from None

