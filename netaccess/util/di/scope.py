"""Custom Dishka scopes for netaccess."""

from dishka import BaseScope, new_scope


class Scope(BaseScope):  # type: ignore[misc]  # BaseScope is designed to be subclassed
    """netaccess dependency injection scopes.

    Hierarchy: APP -> REQUEST

    - APP: Application lifetime (config, provider adapter, resolver, predicate)
    - REQUEST: One caller request (CallerIdentity in, CallerAccess out)
    """

    APP = new_scope("APP")
    REQUEST = new_scope("REQUEST")
