"""Retention selection.

For every (project, environment) pair, keep the releases most recently
deployed to that environment:

1. candidates are the project's releases
2. drop candidates never deployed to the environment
3. rank by latest deployment there, newest first, then by creation time
4. drop repeated release ids, keeping the best ranked one
5. keep the first ``num_of_releases_to_keep``

Orphaned releases and deployments without a known environment never match
a pair and are excluded silently. The same release may be retained for
several pairs; each occurrence has its own event.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import datetime

from retainer.retention.model import (
    Deployment,
    Environment,
    Project,
    Release,
    RetentionEvent,
    RetentionResult,
)
from retainer.retention.options import RetentionOptions

__all__ = [
    "RetentionLookups",
    "build_lookups",
    "retain_for_pair",
    "retain_releases",
]


@dataclass(frozen=True, slots=True)
class RetentionLookups:
    """Indexes built once per call and shared by every pair."""

    releases_by_project: dict[str, list[Release]]
    # (release_id, environment_id) -> deployments, newest first
    deployments_by_target: dict[tuple[str, str], list[Deployment]]

    def latest_deployment(self, release_id: str, environment_id: str) -> Deployment | None:
        deployments = self.deployments_by_target.get((release_id, environment_id))
        if not deployments:
            return None
        return deployments[0]


def build_lookups(
    releases: tuple[Release, ...],
    deployments: tuple[Deployment, ...],
) -> RetentionLookups:
    releases_by_project: dict[str, list[Release]] = defaultdict(list)
    for release in releases:
        if release.project_id is None:
            continue
        releases_by_project[release.project_id].append(release)

    deployments_by_target: dict[tuple[str, str], list[Deployment]] = defaultdict(list)
    for deployment in deployments:
        if deployment.environment_id is None:
            continue
        deployments_by_target[(deployment.release_id, deployment.environment_id)].append(
            deployment
        )
    for targeted in deployments_by_target.values():
        targeted.sort(key=lambda d: d.deployed_at, reverse=True)

    return RetentionLookups(
        releases_by_project=dict(releases_by_project),
        deployments_by_target=dict(deployments_by_target),
    )


def retain_for_pair(
    project: Project,
    environment: Environment,
    lookups: RetentionLookups,
    keep: int,
) -> list[Release]:
    """Select up to ``keep`` releases of ``project`` for ``environment``."""
    ranked: list[tuple[datetime, datetime, Release]] = []
    for release in lookups.releases_by_project.get(project.id, ()):
        latest = lookups.latest_deployment(release.id, environment.id)
        if latest is None:
            continue
        ranked.append((latest.deployed_at, release.created, release))

    # Stable: fully tied candidates keep their input order.
    ranked.sort(key=lambda item: (item[0], item[1]), reverse=True)

    selected: list[Release] = []
    seen: set[str] = set()
    for _, _, release in ranked:
        if release.id in seen:
            continue
        seen.add(release.id)
        selected.append(release)
        if len(selected) == keep:
            break
    return selected


def retain_releases(options: RetentionOptions) -> RetentionResult:
    """Compute the retained releases and one event per retained occurrence.

    Pure and deterministic: the same options always give the same result.
    """
    lookups = build_lookups(options.releases, options.deployments)
    keep = options.num_of_releases_to_keep

    releases: list[Release] = []
    events: list[RetentionEvent] = []
    for project in options.projects:
        for environment in options.environments:
            for release in retain_for_pair(project, environment, lookups, keep):
                releases.append(release)
                events.append(RetentionEvent(release.id, environment.id))

    return RetentionResult(releases=tuple(releases), events=tuple(events))
