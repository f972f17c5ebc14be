"""Load projects, environments, releases and deployments from JSON files.

Each file is a JSON array of objects with PascalCase keys, e.g.
``{"Id": "Release-1", "ProjectId": "Project-1", "Version": "1.0.0",
"Created": "2000-01-01T08:00:00"}``.

Only structural problems are errors here (unreadable file, bad JSON, a
record missing its id or timestamp, a field of the wrong type). References
between records are not checked; the engine excludes whatever does not
resolve.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Literal

from retainer.core.result import Err, Ok, Result
from retainer.core.structured import StrDict, as_obj_list, as_str_dict
from retainer.retention.model import Deployment, Environment, Project, Release, as_utc

__all__ = [
    "DataSet",
    "LoadError",
    "LoadErrorKind",
    "PROJECTS_FILE",
    "ENVIRONMENTS_FILE",
    "RELEASES_FILE",
    "DEPLOYMENTS_FILE",
    "load_data",
    "load_deployments",
    "load_environments",
    "load_projects",
    "load_releases",
    "parse_timestamp",
]

PROJECTS_FILE = "Projects.json"
ENVIRONMENTS_FILE = "Environments.json"
RELEASES_FILE = "Releases.json"
DEPLOYMENTS_FILE = "Deployments.json"

LoadErrorKind = Literal["not_found", "io", "invalid_json", "invalid_record"]


@dataclass(frozen=True, slots=True)
class LoadError:
    kind: LoadErrorKind
    message: str
    path: Path | None = None

    def pretty(self) -> str:
        if self.path is not None:
            return f"{self.message} ({self.path})"
        return self.message


@dataclass(frozen=True, slots=True)
class DataSet:
    projects: tuple[Project, ...]
    environments: tuple[Environment, ...]
    releases: tuple[Release, ...]
    deployments: tuple[Deployment, ...]


class _RecordError(Exception):
    """A single record could not be converted."""


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO 8601 timestamp. Naive values are taken as UTC.

    Raises:
        ValueError: The value is not ISO 8601.
    """
    return as_utc(datetime.fromisoformat(value))


def _optional_str(record: StrDict, key: str, index: int) -> str | None:
    """Read a string field as written. Absent and null both mean None."""
    value = record.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise _RecordError(f"record {index}: {key} must be a string, got {value!r}")
    return value


def _required_str(record: StrDict, key: str, index: int) -> str:
    value = _optional_str(record, key, index)
    if value is None:
        raise _RecordError(f"record {index}: missing {key}")
    return value


def _required_timestamp(record: StrDict, key: str, index: int) -> datetime:
    raw = _required_str(record, key, index)
    try:
        return parse_timestamp(raw)
    except ValueError as e:
        raise _RecordError(f"record {index}: invalid {key} {raw!r}: {e}") from e


def _project(record: StrDict, index: int) -> Project:
    return Project(
        id=_required_str(record, "Id", index),
        name=_optional_str(record, "Name", index),
    )


def _environment(record: StrDict, index: int) -> Environment:
    return Environment(
        id=_required_str(record, "Id", index),
        name=_optional_str(record, "Name", index),
    )


def _release(record: StrDict, index: int) -> Release:
    return Release(
        id=_required_str(record, "Id", index),
        project_id=_optional_str(record, "ProjectId", index),
        version=_optional_str(record, "Version", index),
        created=_required_timestamp(record, "Created", index),
    )


def _deployment(record: StrDict, index: int) -> Deployment:
    return Deployment(
        id=_required_str(record, "Id", index),
        release_id=_required_str(record, "ReleaseId", index),
        environment_id=_optional_str(record, "EnvironmentId", index),
        deployed_at=_required_timestamp(record, "DeployedAt", index),
    )


def _read_records(path: Path) -> Result[list[StrDict], LoadError]:
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return Err(LoadError(kind="not_found", message="data file not found", path=path))
    except (OSError, UnicodeDecodeError) as e:
        return Err(LoadError(kind="io", message=f"failed to read data file: {e}", path=path))

    try:
        obj: object = json.loads(text)
    except json.JSONDecodeError as e:
        return Err(LoadError(kind="invalid_json", message=f"invalid JSON: {e}", path=path))

    items = as_obj_list(obj)
    if items is None:
        return Err(
            LoadError(kind="invalid_json", message="root must be a JSON array", path=path)
        )

    records: list[StrDict] = []
    for index, item in enumerate(items):
        record = as_str_dict(item)
        if record is None:
            return Err(
                LoadError(
                    kind="invalid_record",
                    message=f"record {index}: expected a JSON object",
                    path=path,
                )
            )
        records.append(record)
    return Ok(records)


def _load[T](path: Path, convert: Callable[[StrDict, int], T]) -> Result[tuple[T, ...], LoadError]:
    read = _read_records(path)
    if isinstance(read, Err):
        return read

    try:
        return Ok(tuple(convert(record, i) for i, record in enumerate(read.value)))
    except _RecordError as e:
        return Err(LoadError(kind="invalid_record", message=str(e), path=path))


def load_projects(path: Path) -> Result[tuple[Project, ...], LoadError]:
    return _load(path, _project)


def load_environments(path: Path) -> Result[tuple[Environment, ...], LoadError]:
    return _load(path, _environment)


def load_releases(path: Path) -> Result[tuple[Release, ...], LoadError]:
    return _load(path, _release)


def load_deployments(path: Path) -> Result[tuple[Deployment, ...], LoadError]:
    return _load(path, _deployment)


def load_data(data_dir: Path) -> Result[DataSet, LoadError]:
    """Load all four files from ``data_dir``. Stops at the first error."""
    projects = load_projects(data_dir / PROJECTS_FILE)
    if isinstance(projects, Err):
        return projects
    environments = load_environments(data_dir / ENVIRONMENTS_FILE)
    if isinstance(environments, Err):
        return environments
    releases = load_releases(data_dir / RELEASES_FILE)
    if isinstance(releases, Err):
        return releases
    deployments = load_deployments(data_dir / DEPLOYMENTS_FILE)
    if isinstance(deployments, Err):
        return deployments

    return Ok(
        DataSet(
            projects=projects.value,
            environments=environments.value,
            releases=releases.value,
            deployments=deployments.value,
        )
    )
