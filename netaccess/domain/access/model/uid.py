"""Uid layout and the special pseudo-uids usage data can be attributed to."""

from dataclasses import dataclass
from enum import IntEnum, unique

# Multi-user uid encoding: uid = user * PER_USER_RANGE + app_id
PER_USER_RANGE = 100000
SYSTEM_APP_ID = 1000


@unique
class SpecialUid(IntEnum):
    """Sentinel uids not owned by any single installed app.

    The set is closed. Adding a member means revisiting DEVICESUMMARY_VISIBLE
    and USER_VISIBLE below, and every caller of AccessPredicate.
    """

    SYSTEM = SYSTEM_APP_ID  # The system server
    ALL = -1  # Aggregate of every uid on the device
    REMOVED = -4  # Traffic of apps that have since been uninstalled
    TETHERING = -5  # Traffic of tethered clients

    @classmethod
    def of(cls, uid: int) -> "SpecialUid | None":
        """Return the matching sentinel, or None for an ordinary uid."""
        try:
            return cls(uid)
        except ValueError:
            return None


DEVICESUMMARY_VISIBLE: frozenset[SpecialUid] = frozenset(
    {SpecialUid.SYSTEM, SpecialUid.REMOVED, SpecialUid.TETHERING, SpecialUid.ALL}
)
"""Special uids a DEVICESUMMARY caller may see regardless of user."""

USER_VISIBLE: frozenset[SpecialUid] = frozenset(
    {SpecialUid.SYSTEM, SpecialUid.REMOVED, SpecialUid.TETHERING}
)
"""Special uids a USER caller may see. ALL is deliberately absent."""


@dataclass(frozen=True)
class UidScheme:
    """How a uid splits into a user handle and a per-user app id."""

    per_user_range: int = PER_USER_RANGE
    system_app_id: int = SYSTEM_APP_ID

    def __post_init__(self) -> None:
        from netaccess.domain.shared.error import ValidationError

        if self.per_user_range <= 0:
            raise ValidationError(
                f"per_user_range must be positive, got {self.per_user_range}",
                field="per_user_range",
            )
        if not 0 <= self.system_app_id < self.per_user_range:
            raise ValidationError(
                f"system_app_id {self.system_app_id} outside [0, {self.per_user_range})",
                field="system_app_id",
            )

    def user_of(self, uid: int) -> int:
        """Extract the user handle from a uid."""
        return uid // self.per_user_range

    def app_id(self, uid: int) -> int:
        """Extract the per-user app id from a uid."""
        return uid % self.per_user_range

    def uid_for(self, user: int, app_id: int) -> int:
        """Build the uid of ``app_id`` running as ``user``."""
        return user * self.per_user_range + app_id

    def is_system(self, uid: int) -> bool:
        """Check if the uid is the system app id under any user."""
        # Negative sentinels would otherwise wrap around under floor modulo
        return uid >= 0 and self.app_id(uid) == self.system_app_id
