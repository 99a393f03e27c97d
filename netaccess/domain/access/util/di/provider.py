"""DI provider for the access domain."""

from dishka import from_context, provide

from netaccess.config import Config
from netaccess.domain.access.model.caller_access import CallerAccess
from netaccess.domain.access.model.identity import CallerIdentity
from netaccess.domain.access.model.uid import UidScheme
from netaccess.domain.access.port.identity_provider import IdentityProvider
from netaccess.domain.access.service.policy import NetworkUsageAccessPolicy
from netaccess.domain.access.service.predicate import AccessPredicate
from netaccess.domain.access.service.resolver import AccessLevelResolver
from netaccess.util.di.base import Provider
from netaccess.util.di.scope import Scope


class AccessProvider(Provider):
    """DI provider for access-level resolution and uid visibility."""

    config = from_context(provides=Config, scope=Scope.APP)
    identity = from_context(provides=CallerIdentity, scope=Scope.REQUEST)

    @provide(scope=Scope.APP)
    def get_uid_scheme(self, config: Config) -> UidScheme:
        return config.uids.scheme()

    @provide(scope=Scope.APP)
    def get_policy(self, provider: IdentityProvider, uids: UidScheme) -> NetworkUsageAccessPolicy:
        return NetworkUsageAccessPolicy(provider, uids)

    @provide(scope=Scope.APP)
    def get_resolver(self, policy: NetworkUsageAccessPolicy) -> AccessLevelResolver:
        return policy.resolver

    @provide(scope=Scope.APP)
    def get_predicate(self, policy: NetworkUsageAccessPolicy) -> AccessPredicate:
        return policy.predicate

    @provide(scope=Scope.REQUEST)
    def get_caller_access(
        self,
        identity: CallerIdentity,
        policy: NetworkUsageAccessPolicy,
    ) -> CallerAccess:
        """Resolve the current caller once per request."""
        return policy.caller_access(identity)
