"""In-memory identity provider backed by explicit grant sets."""

import logging

from netaccess.domain.access.model.facts import AppOpMode
from netaccess.domain.access.model.uid import UidScheme
from netaccess.domain.access.port.identity_provider import IdentityProvider
from netaccess.infrastructure.identity.config import StaticIdentityConfig

logger = logging.getLogger(__name__)


class StaticIdentityProvider(IdentityProvider):
    """IdentityProvider answering from sets held in memory.

    Useful for local runs, tests and deployments where grants are managed
    in configuration rather than queried from platform services. Grants can
    be added at runtime via the ``grant_*`` methods; answers reflect the
    grants present at the time of each call.
    """

    def __init__(self, uids: UidScheme | None = None) -> None:
        self._uids = uids or UidScheme()
        self._carrier_privileged: set[str] = set()
        self._device_owners: set[str] = set()
        self._profile_owners: set[str] = set()
        self._network_stack: set[int] = set()
        self._usage_stats: set[int] = set()
        self._read_history: set[int] = set()
        self._app_ops: dict[tuple[int, str | None], AppOpMode] = {}

    @classmethod
    def from_config(
        cls, config: StaticIdentityConfig, uids: UidScheme | None = None
    ) -> "StaticIdentityProvider":
        provider = cls(uids)
        for package in config.carrier_privileged_packages:
            provider.grant_carrier_privileges(package)
        for package in config.device_owner_packages:
            provider.grant_device_owner(package)
        for package in config.profile_owner_packages:
            provider.grant_profile_owner(package)
        for uid in config.network_stack_uids:
            provider.grant_network_stack(uid)
        for uid in config.usage_stats_uids:
            provider.grant_usage_stats(uid)
        for uid in config.read_history_uids:
            provider.grant_read_history(uid)
        for op in config.app_ops:
            provider.set_app_op(op.uid, op.mode, package=op.package)
        logger.info(
            "Static identity provider loaded: %d carrier, %d device-owner, "
            "%d profile-owner packages, %d app-op entries",
            len(provider._carrier_privileged),
            len(provider._device_owners),
            len(provider._profile_owners),
            len(provider._app_ops),
        )
        return provider

    # -------------------------------------------------------------------------
    # Grants
    # -------------------------------------------------------------------------

    def grant_carrier_privileges(self, package: str) -> None:
        self._carrier_privileged.add(package)

    def grant_device_owner(self, package: str) -> None:
        self._device_owners.add(package)

    def grant_profile_owner(self, package: str) -> None:
        self._profile_owners.add(package)

    def grant_network_stack(self, uid: int) -> None:
        self._network_stack.add(uid)

    def grant_usage_stats(self, uid: int) -> None:
        self._usage_stats.add(uid)

    def grant_read_history(self, uid: int) -> None:
        self._read_history.add(uid)

    def set_app_op(self, uid: int, mode: AppOpMode, package: str | None = None) -> None:
        """Set the usage-stats app-op mode for a uid, or for one of its packages."""
        self._app_ops[(uid, package)] = mode

    # -------------------------------------------------------------------------
    # IdentityProvider
    # -------------------------------------------------------------------------

    def is_system_uid(self, uid: int) -> bool:
        return self._uids.is_system(uid)

    def has_carrier_privileges(self, package: str) -> bool:
        return package in self._carrier_privileged

    def is_device_owner(self, package: str) -> bool:
        return package in self._device_owners

    def is_profile_owner(self, package: str) -> bool:
        return package in self._profile_owners

    def has_network_stack_permission(self, pid: int, uid: int) -> bool:
        return uid in self._network_stack

    def usage_stats_app_op(self, uid: int, package: str) -> AppOpMode:
        # Package-specific modes override the uid-wide one
        mode = self._app_ops.get((uid, package))
        if mode is None:
            mode = self._app_ops.get((uid, None), AppOpMode.DEFAULT)
        return mode

    def has_usage_stats_permission(self, uid: int) -> bool:
        return uid in self._usage_stats

    def has_read_history_permission(self, uid: int) -> bool:
        return uid in self._read_history

    def user_of(self, uid: int) -> int:
        return self._uids.user_of(uid)
