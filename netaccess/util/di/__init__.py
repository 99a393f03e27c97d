from netaccess.util.di.base import Provider
from netaccess.util.di.scope import Scope

__all__ = ["Provider", "Scope"]
