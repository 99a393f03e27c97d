"""DI provider for identity infrastructure."""

from dishka import provide

from netaccess.config import Config
from netaccess.domain.access.model.uid import UidScheme
from netaccess.domain.access.port.identity_provider import IdentityProvider
from netaccess.infrastructure.identity.static import StaticIdentityProvider
from netaccess.util.di.base import Provider
from netaccess.util.di.scope import Scope


class IdentityInfraProvider(Provider):
    """DI provider binding the IdentityProvider port to its adapter."""

    @provide(scope=Scope.APP)
    def get_identity_provider(self, config: Config, uids: UidScheme) -> IdentityProvider:
        """Provide a StaticIdentityProvider loaded from config."""
        return StaticIdentityProvider.from_config(config.identity, uids)
