"""Identity facts gathered for one access-level resolution."""

from dataclasses import dataclass
from enum import StrEnum

from netaccess.domain.access.model.level import AccessLevel


class AppOpMode(StrEnum):
    """State of the usage-stats app-op for a uid/package pair."""

    ALLOWED = "allowed"
    DEFAULT = "default"  # No explicit grant or deny; fall back to the static permission
    DENIED = "denied"


@dataclass(frozen=True)
class IdentityFacts:
    """Every fact the resolver may consult, already evaluated.

    Defaults are the "not granted" values, so a partially populated value
    never carries more trust than was confirmed.
    """

    is_system_uid: bool = False
    has_carrier_privileges: bool = False
    is_device_owner: bool = False
    has_network_stack_permission: bool = False
    usage_stats_app_op: AppOpMode = AppOpMode.DENIED
    has_usage_stats_permission: bool = False
    has_read_history_permission: bool = False
    is_profile_owner: bool = False

    @classmethod
    def denied(cls) -> "IdentityFacts":
        return cls()

    @property
    def grants_device(self) -> bool:
        return (
            self.is_system_uid
            or self.has_carrier_privileges
            or self.is_device_owner
            or self.has_network_stack_permission
        )

    @property
    def grants_device_summary(self) -> bool:
        if self.usage_stats_app_op == AppOpMode.ALLOWED:
            return True
        if self.usage_stats_app_op == AppOpMode.DEFAULT and self.has_usage_stats_permission:
            return True
        return self.has_read_history_permission

    @property
    def grants_user(self) -> bool:
        return self.is_profile_owner

    def level(self) -> AccessLevel:
        """Apply the ordered rule list: first matching tier wins."""
        if self.grants_device:
            return AccessLevel.DEVICE
        if self.grants_device_summary:
            return AccessLevel.DEVICESUMMARY
        if self.grants_user:
            return AccessLevel.USER
        return AccessLevel.DEFAULT
