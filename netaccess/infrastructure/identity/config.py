"""Configuration for the static (in-memory) identity provider."""

from pydantic import BaseModel

from netaccess.domain.access.model.facts import AppOpMode


class AppOpGrant(BaseModel):
    """A usage-stats app-op mode for a uid, optionally scoped to one package."""

    uid: int
    package: str | None = None  # None = applies to every package of the uid
    mode: AppOpMode


class StaticIdentityConfig(BaseModel):
    """Grants answered by StaticIdentityProvider.

    Everything not listed here is "not granted"; unlisted app-ops are DEFAULT.
    """

    carrier_privileged_packages: list[str] = []
    device_owner_packages: list[str] = []
    profile_owner_packages: list[str] = []
    network_stack_uids: list[int] = []
    usage_stats_uids: list[int] = []  # Static usage-stats permission holders
    read_history_uids: list[int] = []
    app_ops: list[AppOpGrant] = []
