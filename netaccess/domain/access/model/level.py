"""Access levels for reading network-usage data."""

from enum import IntEnum
from typing import Any


class AccessLevel(IntEnum):
    """Ordered trust tiers with explicit numeric ranks.

    Higher values see everything lower values see, with one exception:
    USER callers do not see the ALL aggregate (see AccessPredicate).
    Compare with ``>=`` for "at least" checks.
    """

    DEFAULT = 0  # Own uid only
    USER = 1  # Everything belonging to the caller's user
    DEVICESUMMARY = 2  # Every user, plus the device-wide aggregate
    DEVICE = 3  # Everything

    def is_at_least(self, other: "AccessLevel") -> bool:
        """Check if this level is at or above the given level."""
        return self >= other

    @classmethod
    def coerce(cls, value: Any) -> "AccessLevel":
        """Map an arbitrary value onto a level, failing closed to DEFAULT.

        Accepts members, their integer ranks and their names. Anything else,
        including out-of-range integers and booleans, becomes DEFAULT.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            return cls.DEFAULT
        if isinstance(value, int):
            try:
                return cls(value)
            except ValueError:
                return cls.DEFAULT
        if isinstance(value, str):
            return cls.__members__.get(value.strip().upper(), cls.DEFAULT)
        return cls.DEFAULT
