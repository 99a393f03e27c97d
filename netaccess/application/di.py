from dishka import Container, make_container

from netaccess.config import Config
from netaccess.domain.access.util.di import AccessProvider
from netaccess.infrastructure.identity.di import IdentityInfraProvider
from netaccess.util.di.scope import Scope


def create_container(config: Config | None = None) -> Container:
    # Pydantic Settings populates from env vars at runtime
    config = config or Config()

    return make_container(
        AccessProvider(),
        IdentityInfraProvider(),
        context={Config: config},
        scopes=Scope,  # type: ignore[arg-type]  # Custom scope class
    )
