"""AccessLevelResolver: the caller's identity in, an AccessLevel out."""

import logging
from collections.abc import Callable
from typing import TypeVar

import logfire

from netaccess.domain.access.model.facts import AppOpMode, IdentityFacts
from netaccess.domain.access.model.identity import CallerIdentity
from netaccess.domain.access.model.level import AccessLevel
from netaccess.domain.access.model.uid import UidScheme
from netaccess.domain.access.port.identity_provider import IdentityProvider
from netaccess.domain.shared.service import Service

logger = logging.getLogger(__name__)

T = TypeVar("T")


class AccessLevelResolver(Service):
    """Resolves the access level of a caller.

    Rules are checked from the most to the least privileged tier and the first
    match wins. The order is part of the contract: reordering or parallelizing
    the provider calls changes which services get consulted for whom.

    1. System uid (any user)                                    -> DEVICE
    2. Carrier privileges, device owner, network-stack perm      -> DEVICE
    3. Usage-stats app-op ALLOWED, or DEFAULT + static permission,
       or read-history permission                                -> DEVICESUMMARY
    4. Profile owner                                             -> USER
    5. Otherwise                                                 -> DEFAULT

    Step 1 never touches the provider: the system server must resolve even
    while the services behind the provider are still starting up.
    """

    _provider: IdentityProvider
    _uids: UidScheme = UidScheme()

    def resolve(self, identity: CallerIdentity) -> AccessLevel:
        with logfire.span("ResolveAccessLevel", uid=identity.uid, package=identity.package):
            level = self._resolve(identity)
        logger.debug(
            "Resolved access level: uid=%s package=%s level=%s",
            identity.uid,
            identity.package,
            level.name,
        )
        return level

    def _resolve(self, identity: CallerIdentity) -> AccessLevel:
        if self._uids.is_system(identity.uid):
            return AccessLevel.DEVICE

        if (
            self._carrier_privileges(identity)
            or self._device_owner(identity)
            or self._network_stack(identity)
        ):
            return AccessLevel.DEVICE

        if self._device_summary(identity):
            return AccessLevel.DEVICESUMMARY

        if self._profile_owner(identity):
            return AccessLevel.USER

        return AccessLevel.DEFAULT

    def gather_facts(self, identity: CallerIdentity) -> IdentityFacts:
        """Evaluate every fact eagerly, without short-circuiting.

        Meant for diagnostics: it consults the provider even for callers that
        ``resolve`` would settle early. ``gather_facts(i).level()`` always
        equals ``resolve(i)``.
        """
        return IdentityFacts(
            is_system_uid=self._uids.is_system(identity.uid),
            has_carrier_privileges=self._carrier_privileges(identity),
            is_device_owner=self._device_owner(identity),
            has_network_stack_permission=self._network_stack(identity),
            usage_stats_app_op=self._app_op(identity),
            has_usage_stats_permission=self._ask(
                "has_usage_stats_permission",
                lambda: self._provider.has_usage_stats_permission(identity.uid),
                False,
            ),
            has_read_history_permission=self._read_history(identity),
            is_profile_owner=self._profile_owner(identity),
        )

    # -------------------------------------------------------------------------
    # Individual facts
    # -------------------------------------------------------------------------

    def _carrier_privileges(self, identity: CallerIdentity) -> bool:
        if identity.package is None:
            return False
        package = identity.package
        return self._ask(
            "has_carrier_privileges",
            lambda: self._provider.has_carrier_privileges(package),
            False,
        )

    def _device_owner(self, identity: CallerIdentity) -> bool:
        if identity.package is None:
            return False
        package = identity.package
        return self._ask(
            "is_device_owner",
            lambda: self._provider.is_device_owner(package),
            False,
        )

    def _network_stack(self, identity: CallerIdentity) -> bool:
        return self._ask(
            "has_network_stack_permission",
            lambda: self._provider.has_network_stack_permission(identity.pid, identity.uid),
            False,
        )

    def _app_op(self, identity: CallerIdentity) -> AppOpMode:
        if identity.package is None:
            return AppOpMode.DENIED
        package = identity.package
        mode = self._ask(
            "usage_stats_app_op",
            lambda: self._provider.usage_stats_app_op(identity.uid, package),
            AppOpMode.DENIED,
        )
        if not isinstance(mode, AppOpMode):
            try:
                mode = AppOpMode(mode)
            except ValueError:
                logger.warning(
                    "Unknown usage-stats app-op mode %r for uid=%s, treating as denied",
                    mode,
                    identity.uid,
                )
                return AppOpMode.DENIED
        return mode

    def _device_summary(self, identity: CallerIdentity) -> bool:
        mode = self._app_op(identity)
        if mode == AppOpMode.ALLOWED:
            return True
        if mode == AppOpMode.DEFAULT and self._ask(
            "has_usage_stats_permission",
            lambda: self._provider.has_usage_stats_permission(identity.uid),
            False,
        ):
            return True
        return self._read_history(identity)

    def _read_history(self, identity: CallerIdentity) -> bool:
        return self._ask(
            "has_read_history_permission",
            lambda: self._provider.has_read_history_permission(identity.uid),
            False,
        )

    def _profile_owner(self, identity: CallerIdentity) -> bool:
        if identity.package is None:
            return False
        package = identity.package
        return self._ask(
            "is_profile_owner",
            lambda: self._provider.is_profile_owner(package),
            False,
        )

    def _ask(self, fact: str, query: Callable[[], T], denied: T) -> T:
        """Run one provider query, answering ``denied`` if it fails."""
        try:
            answer = query()
        except Exception as e:
            logger.warning("Identity fact %s unavailable, failing closed: %s", fact, e)
            return denied
        if isinstance(denied, bool):
            # Anything but a literal True is not a grant
            return answer is True  # type: ignore[return-value]
        return answer


def resolve_access_level(
    identity: CallerIdentity,
    provider: IdentityProvider,
    uids: UidScheme | None = None,
) -> AccessLevel:
    """One-off resolution without keeping a resolver around."""
    return AccessLevelResolver(_provider=provider, _uids=uids or UidScheme()).resolve(identity)
