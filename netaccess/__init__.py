"""Access control for network-usage data: who may see whose traffic."""

from netaccess.domain.access.model.caller_access import CallerAccess
from netaccess.domain.access.model.facts import AppOpMode, IdentityFacts
from netaccess.domain.access.model.identity import CallerIdentity
from netaccess.domain.access.model.level import AccessLevel
from netaccess.domain.access.model.uid import SpecialUid, UidScheme
from netaccess.domain.access.port.identity_provider import IdentityProvider
from netaccess.domain.access.service.policy import NetworkUsageAccessPolicy
from netaccess.domain.access.service.predicate import AccessPredicate, is_accessible_to_user
from netaccess.domain.access.service.resolver import AccessLevelResolver, resolve_access_level

__all__ = [
    "AccessLevel",
    "AccessLevelResolver",
    "AccessPredicate",
    "AppOpMode",
    "CallerAccess",
    "CallerIdentity",
    "IdentityFacts",
    "IdentityProvider",
    "NetworkUsageAccessPolicy",
    "SpecialUid",
    "UidScheme",
    "is_accessible_to_user",
    "resolve_access_level",
]
