from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime

RETAINED_MESSAGE = "'{release_id}' kept because it was most recently deployed to '{environment_id}'"


def as_utc(moment: datetime) -> datetime:
    """Attach UTC to a naive datetime; aware values are returned unchanged."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment


@dataclass(frozen=True, slots=True)
class Project:
    id: str
    name: str | None = None


@dataclass(frozen=True, slots=True)
class Environment:
    id: str
    name: str | None = None


@dataclass(frozen=True, slots=True)
class Release:
    """A release of a project.

    ``project_id`` is None for orphaned releases; it may also name a project
    that is not part of the input.
    """

    id: str
    project_id: str | None
    version: str | None
    created: datetime


@dataclass(frozen=True, slots=True)
class Deployment:
    """A release deployed to an environment.

    Either reference may dangle. ``environment_id`` is None when the target
    environment is unknown.
    """

    id: str
    release_id: str
    environment_id: str | None
    deployed_at: datetime


@dataclass(frozen=True, slots=True)
class RetentionEvent:
    """Why a release was kept: it was selected for this environment."""

    release_id: str
    environment_id: str

    def describe(self) -> str:
        return RETAINED_MESSAGE.format(
            release_id=self.release_id,
            environment_id=self.environment_id,
        )


@dataclass(frozen=True, slots=True)
class RetentionResult:
    """Retained releases in project-then-environment order, with one event each.

    A release appears once per pair it was retained for, so duplicates across
    environments are expected.
    """

    releases: tuple[Release, ...] = ()
    events: tuple[RetentionEvent, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.releases

    def environment_ids(self) -> tuple[str, ...]:
        """Distinct environment ids with at least one retained release, in order."""
        return tuple(dict.fromkeys(e.environment_id for e in self.events))
