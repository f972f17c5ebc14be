"""Validated input bundle for the retention engine.

All validation happens here, at construction. Once a ``RetentionOptions``
exists the engine can rely on its shape and never fails.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, replace

from retainer.core.result import Err, Ok, Result
from retainer.retention.model import Deployment, Environment, Project, Release, as_utc

__all__ = [
    "RetentionOptions",
    "RetentionOptionsError",
    "MissingCollectionError",
    "InvalidRetentionCountError",
]


class RetentionOptionsError(ValueError):
    """Raised when a RetentionOptions cannot be built."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.message = message


class MissingCollectionError(RetentionOptionsError):
    def __init__(self, field: str) -> None:
        super().__init__(field, f"{field} list cannot be None.")


class InvalidRetentionCountError(RetentionOptionsError):
    def __init__(self, field: str = "num_of_releases_to_keep") -> None:
        super().__init__(field, f"{field} must be greater than zero.")


_COLLECTIONS = ("releases", "deployments", "environments", "projects")


def _aware_release(release: Release) -> Release:
    if release.created.tzinfo is not None:
        return release
    return replace(release, created=as_utc(release.created))


def _aware_deployment(deployment: Deployment) -> Deployment:
    if deployment.deployed_at.tzinfo is not None:
        return deployment
    return replace(deployment, deployed_at=as_utc(deployment.deployed_at))


@dataclass(frozen=True, slots=True)
class RetentionOptions:
    """Releases, deployments, environments and projects plus the keep count.

    Collections may be any iterable and are frozen to tuples in their given
    order. Empty collections are valid; ``None`` is not.
    Naive ``created``/``deployed_at`` timestamps are taken as UTC.

    Raises:
        MissingCollectionError: A collection is None.
        InvalidRetentionCountError: ``num_of_releases_to_keep`` is not a
            positive int.
    """

    releases: tuple[Release, ...]
    deployments: tuple[Deployment, ...]
    environments: tuple[Environment, ...]
    projects: tuple[Project, ...]
    num_of_releases_to_keep: int

    def __post_init__(self) -> None:
        for name in _COLLECTIONS:
            value: Iterable[object] | None = getattr(self, name)
            if value is None:
                raise MissingCollectionError(name)
            if not isinstance(value, tuple):
                object.__setattr__(self, name, tuple(value))

        # Naive timestamps are taken as UTC so every comparison is between aware values.
        object.__setattr__(self, "releases", tuple(_aware_release(r) for r in self.releases))
        object.__setattr__(
            self, "deployments", tuple(_aware_deployment(d) for d in self.deployments)
        )

        keep = self.num_of_releases_to_keep
        if isinstance(keep, bool) or not isinstance(keep, int) or keep <= 0:
            raise InvalidRetentionCountError()

    @classmethod
    def build(
        cls,
        *,
        releases: Iterable[Release] | None,
        deployments: Iterable[Deployment] | None,
        environments: Iterable[Environment] | None,
        projects: Iterable[Project] | None,
        num_of_releases_to_keep: int,
    ) -> Result[RetentionOptions, RetentionOptionsError]:
        """Like the constructor, but returns the validation error as Err."""
        try:
            options = cls(
                releases=releases,  # type: ignore[arg-type]
                deployments=deployments,  # type: ignore[arg-type]
                environments=environments,  # type: ignore[arg-type]
                projects=projects,  # type: ignore[arg-type]
                num_of_releases_to_keep=num_of_releases_to_keep,
            )
        except RetentionOptionsError as e:
            return Err(e)
        return Ok(options)
