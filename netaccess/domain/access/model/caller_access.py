"""CallerAccess: a caller together with its resolved level, fixed per request."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from netaccess.domain.access.model.identity import CallerIdentity
from netaccess.domain.access.model.level import AccessLevel

if TYPE_CHECKING:
    from netaccess.domain.access.service.predicate import AccessPredicate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CallerAccess:
    """The resolved access of the current requester.

    Resolved once at request entry and immutable afterwards: the level cannot
    be upgraded or downgraded mid-request. Discard it when the request ends.
    """

    identity: CallerIdentity
    level: AccessLevel
    predicate: AccessPredicate = field(repr=False, compare=False)

    @property
    def uid(self) -> int:
        return self.identity.uid

    def has_level(self, level: AccessLevel) -> bool:
        """Check if the resolved level is at least the given one."""
        return self.level >= level

    def can_access(self, target_uid: int) -> bool:
        return self.predicate.is_accessible(target_uid, self.identity.uid, self.level)

    def filter_uids(self, uids: Iterable[int]) -> list[int]:
        """Sorted unique uids from ``uids`` this caller may see."""
        return self.predicate.accessible_uids(uids, self.identity.uid, self.level)

    def guard(self, target_uid: int) -> None:
        """Raise AuthorizationError unless this caller may see ``target_uid``."""
        from netaccess.domain.shared.error import AuthorizationError

        if self.can_access(target_uid):
            logger.debug(
                "Usage access allowed: caller=%s level=%s target=%s",
                self.identity.uid,
                self.level.name,
                target_uid,
            )
            return

        logger.warning(
            "Usage access denied: caller=%s level=%s target=%s",
            self.identity.uid,
            self.level.name,
            target_uid,
        )
        raise AuthorizationError(
            f"Access denied: uid {self.identity.uid} may not read usage of uid {target_uid}",
            code="access_denied",
        )
