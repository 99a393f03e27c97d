"""CallerIdentity: who is asking, captured once at request entry."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CallerIdentity:
    """The calling process as seen by the request boundary.

    Immutable. An empty package name is stored as None, so package-scoped
    grants only ever see a real name or nothing.
    """

    pid: int
    uid: int
    package: str | None = None

    def __post_init__(self) -> None:
        if self.package is not None and not self.package.strip():
            object.__setattr__(self, "package", None)

    @property
    def has_package(self) -> bool:
        return self.package is not None
