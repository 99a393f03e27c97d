"""Identity provider port: raw identity facts from the platform."""

from abc import abstractmethod
from typing import Protocol

from netaccess.domain.access.model.facts import AppOpMode
from netaccess.domain.shared.port import Port


class IdentityProvider(Port, Protocol):
    """Port for the platform services that know who a caller is.

    Implementations are adapters in infrastructure/ (e.g. StaticIdentityProvider).
    Calls are synchronous and expected to be bounded. Any of them may raise
    (typically ExternalServiceError); the resolver treats a failed call as
    "not granted". Clearing the caller's identity around nested permission
    checks is the adapter's job.
    """

    @abstractmethod
    def is_system_uid(self, uid: int) -> bool:
        """Whether the uid belongs to the system server."""
        ...

    @abstractmethod
    def has_carrier_privileges(self, package: str) -> bool:
        """Whether the package holds carrier privileges on any subscription."""
        ...

    @abstractmethod
    def is_device_owner(self, package: str) -> bool:
        """Whether the package is the active device owner."""
        ...

    @abstractmethod
    def is_profile_owner(self, package: str) -> bool:
        """Whether the package is the profile owner of its user."""
        ...

    @abstractmethod
    def has_network_stack_permission(self, pid: int, uid: int) -> bool:
        """Whether the process holds the network-stack permission."""
        ...

    @abstractmethod
    def usage_stats_app_op(self, uid: int, package: str) -> AppOpMode:
        """Current mode of the usage-stats app-op for the uid/package pair."""
        ...

    @abstractmethod
    def has_usage_stats_permission(self, uid: int) -> bool:
        """Static usage-stats permission, consulted when the app-op is DEFAULT."""
        ...

    @abstractmethod
    def has_read_history_permission(self, uid: int) -> bool:
        """Whether the uid may read network usage history."""
        ...

    @abstractmethod
    def user_of(self, uid: int) -> int:
        """User handle the uid runs under."""
        ...
