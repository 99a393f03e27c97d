"""NetworkUsageAccessPolicy: the public entry point of the access core."""

import logging
from typing import Any

from netaccess.domain.access.model.caller_access import CallerAccess
from netaccess.domain.access.model.identity import CallerIdentity
from netaccess.domain.access.model.level import AccessLevel
from netaccess.domain.access.model.uid import UidScheme
from netaccess.domain.access.port.identity_provider import IdentityProvider
from netaccess.domain.access.service.predicate import AccessPredicate
from netaccess.domain.access.service.resolver import AccessLevelResolver

logger = logging.getLogger(__name__)


class NetworkUsageAccessPolicy:
    """Resolves caller levels and checks uid visibility against one provider.

    Stateless apart from its collaborators; safe to share across threads.
    User handles come from the provider. If it cannot answer, the target is
    treated as belonging to no user, which only ever narrows visibility.
    """

    def __init__(self, provider: IdentityProvider, uids: UidScheme | None = None) -> None:
        self._provider = provider
        self._uids = uids or UidScheme()
        self._resolver = AccessLevelResolver(_provider=provider, _uids=self._uids)
        self._predicate = AccessPredicate(user_of=self._user_of)

    @property
    def resolver(self) -> AccessLevelResolver:
        return self._resolver

    @property
    def predicate(self) -> AccessPredicate:
        return self._predicate

    def resolve_access_level(self, identity: CallerIdentity) -> AccessLevel:
        return self._resolver.resolve(identity)

    def is_accessible_to_user(self, target_uid: int, caller_uid: int, level: Any) -> bool:
        return self._predicate.is_accessible(target_uid, caller_uid, level)

    def caller_access(self, identity: CallerIdentity) -> CallerAccess:
        """Resolve the caller once and bind the result for the rest of the request."""
        return CallerAccess(
            identity=identity,
            level=self._resolver.resolve(identity),
            predicate=self._predicate,
        )

    def _user_of(self, uid: int) -> int | None:
        try:
            return self._provider.user_of(uid)
        except Exception as e:
            logger.warning("user_of(%s) unavailable, failing closed: %s", uid, e)
            return None
