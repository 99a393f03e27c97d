from dishka import Provider as DishkaProvider

from netaccess.util.di.scope import Scope


class Provider(DishkaProvider):
    """Base for all netaccess DI providers. Defaults to application scope."""

    scope = Scope.APP
