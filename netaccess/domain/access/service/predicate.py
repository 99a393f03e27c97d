"""AccessPredicate: may a caller at a given level see a given uid's usage?"""

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from operator import attrgetter
from typing import Any, TypeVar

from netaccess.domain.access.model.level import AccessLevel
from netaccess.domain.access.model.uid import (
    DEVICESUMMARY_VISIBLE,
    USER_VISIBLE,
    SpecialUid,
    UidScheme,
)

E = TypeVar("E")

_DEFAULT_SCHEME = UidScheme()


def _default_user_of(uid: int) -> int:
    return _DEFAULT_SCHEME.user_of(uid)


@dataclass(frozen=True)
class AccessPredicate:
    """Pure visibility check over (target uid, caller uid, level).

    | level          | visible                                              |
    |----------------|------------------------------------------------------|
    | DEVICE         | everything                                           |
    | DEVICESUMMARY  | SYSTEM, REMOVED, TETHERING, ALL, or the same user    |
    | USER           | SYSTEM, REMOVED, TETHERING, or the same user         |
    | DEFAULT, other | the caller's own uid                                 |

    USER excludes the ALL aggregate on purpose: a profile owner may see
    per-user totals but not the device-wide one.
    """

    user_of: Callable[[int], int | None] = field(default=_default_user_of)

    def is_accessible(self, target_uid: int, caller_uid: int, level: Any) -> bool:
        level = AccessLevel.coerce(level)
        special = SpecialUid.of(target_uid)

        if level == AccessLevel.DEVICE:
            return True
        if level == AccessLevel.DEVICESUMMARY:
            return special in DEVICESUMMARY_VISIBLE or self._same_user(target_uid, caller_uid)
        if level == AccessLevel.USER:
            return special in USER_VISIBLE or self._same_user(target_uid, caller_uid)
        return target_uid == caller_uid

    def accessible_uids(self, uids: Iterable[int], caller_uid: int, level: Any) -> list[int]:
        """Sorted unique uids from ``uids`` the caller may see."""
        return sorted({u for u in uids if self.is_accessible(u, caller_uid, level)})

    def filter_accessible(
        self,
        entries: Iterable[E],
        caller_uid: int,
        level: Any,
        uid_of: Callable[[E], int] = attrgetter("uid"),
    ) -> Iterator[E]:
        """Yield the entries whose uid the caller may see, preserving order."""
        for entry in entries:
            if self.is_accessible(uid_of(entry), caller_uid, level):
                yield entry

    def _same_user(self, target_uid: int, caller_uid: int) -> bool:
        # Negative sentinels have no owning user; only the tables above expose them
        if target_uid < 0 and SpecialUid.of(target_uid) is not None:
            return False
        target_user = self.user_of(target_uid)
        # An unknown user handle never matches
        return target_user is not None and target_user == self.user_of(caller_uid)


_DEFAULT_PREDICATE = AccessPredicate()


def is_accessible_to_user(target_uid: int, caller_uid: int, level: Any) -> bool:
    """Visibility check with the default uid layout."""
    return _DEFAULT_PREDICATE.is_accessible(target_uid, caller_uid, level)
