from netaccess.domain.access.util.di.provider import AccessProvider

__all__ = ["AccessProvider"]
