"""Tests for retainer.retention.loader module."""

from __future__ import annotations

import json
from datetime import UTC, datetime, timedelta, timezone
from pathlib import Path

from retainer.core.result import Err, Ok
from retainer.retention.loader import (
    DEPLOYMENTS_FILE,
    ENVIRONMENTS_FILE,
    PROJECTS_FILE,
    RELEASES_FILE,
    load_data,
    load_deployments,
    load_releases,
    parse_timestamp,
)


def _write(path: Path, payload: object) -> Path:
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def write_data_dir(root: Path) -> Path:
    _write(root / PROJECTS_FILE, [{"Id": "Project-1", "Name": "Random Quotes"}])
    _write(
        root / ENVIRONMENTS_FILE,
        [{"Id": "Environment-1", "Name": "Staging"}, {"Id": "Environment-2"}],
    )
    _write(
        root / RELEASES_FILE,
        [
            {"Id": "Release-1", "ProjectId": "Project-1", "Version": "1.0.0", "Created": "2000-01-01T08:00:00"},
            {"Id": "Release-2", "ProjectId": None, "Version": None, "Created": "2000-01-01T09:00:00"},
        ],
    )
    _write(
        root / DEPLOYMENTS_FILE,
        [
            {"Id": "Deployment-1", "ReleaseId": "Release-1", "EnvironmentId": "Environment-1", "DeployedAt": "2000-01-01T10:00:00"},
            {"Id": "Deployment-2", "ReleaseId": "Release-2", "EnvironmentId": None, "DeployedAt": "2000-01-01T11:00:00Z"},
        ],
    )
    return root


class TestParseTimestamp:
    def test_naive_is_utc(self) -> None:
        assert parse_timestamp("2000-01-01T08:00:00") == datetime(2000, 1, 1, 8, tzinfo=UTC)

    def test_zulu_suffix(self) -> None:
        assert parse_timestamp("2000-01-01T08:00:00Z") == datetime(2000, 1, 1, 8, tzinfo=UTC)

    def test_offset_preserved(self) -> None:
        parsed = parse_timestamp("2000-01-01T10:00:00+02:00")
        assert parsed.tzinfo == timezone(timedelta(hours=2))
        assert parsed == datetime(2000, 1, 1, 8, tzinfo=UTC)


class TestLoadData:
    def test_loads_all_files(self, tmp_path: Path) -> None:
        result = load_data(write_data_dir(tmp_path))

        assert isinstance(result, Ok)
        data = result.value
        assert [p.id for p in data.projects] == ["Project-1"]
        assert data.projects[0].name == "Random Quotes"
        assert [e.id for e in data.environments] == ["Environment-1", "Environment-2"]
        assert data.environments[1].name is None
        assert data.releases[1].project_id is None
        assert data.releases[0].version == "1.0.0"
        assert data.deployments[1].environment_id is None
        assert data.deployments[0].deployed_at == datetime(2000, 1, 1, 10, tzinfo=UTC)

    def test_missing_file(self, tmp_path: Path) -> None:
        write_data_dir(tmp_path)
        (tmp_path / DEPLOYMENTS_FILE).unlink()

        result = load_data(tmp_path)

        assert isinstance(result, Err)
        assert result.error.kind == "not_found"
        assert result.error.path == tmp_path / DEPLOYMENTS_FILE


class TestLoadRecords:
    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / RELEASES_FILE
        path.write_text("[{", encoding="utf-8")

        result = load_releases(path)

        assert isinstance(result, Err)
        assert result.error.kind == "invalid_json"

    def test_root_must_be_array(self, tmp_path: Path) -> None:
        result = load_releases(_write(tmp_path / RELEASES_FILE, {"Id": "Release-1"}))

        assert isinstance(result, Err)
        assert result.error.kind == "invalid_json"
        assert "array" in result.error.message

    def test_record_must_be_object(self, tmp_path: Path) -> None:
        result = load_releases(_write(tmp_path / RELEASES_FILE, ["Release-1"]))

        assert isinstance(result, Err)
        assert result.error.kind == "invalid_record"

    def test_missing_created(self, tmp_path: Path) -> None:
        result = load_releases(_write(tmp_path / RELEASES_FILE, [{"Id": "Release-1"}]))

        assert isinstance(result, Err)
        assert result.error.kind == "invalid_record"
        assert "missing Created" in result.error.message

    def test_invalid_timestamp(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path / DEPLOYMENTS_FILE,
            [{"Id": "D-1", "ReleaseId": "R-1", "EnvironmentId": "E-1", "DeployedAt": "yesterday"}],
        )

        result = load_deployments(path)

        assert isinstance(result, Err)
        assert result.error.kind == "invalid_record"
        assert "DeployedAt" in result.error.pretty()

    def test_empty_array(self, tmp_path: Path) -> None:
        result = load_deployments(_write(tmp_path / DEPLOYMENTS_FILE, []))

        assert result == Ok(())

    def test_numeric_reference_rejected(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path / RELEASES_FILE,
            [{"Id": "Release-1", "ProjectId": 42, "Created": "2000-01-01T08:00:00"}],
        )

        result = load_releases(path)

        assert isinstance(result, Err)
        assert result.error.kind == "invalid_record"
        assert "ProjectId must be a string" in result.error.message

    def test_numeric_environment_rejected(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path / DEPLOYMENTS_FILE,
            [{"Id": "D-1", "ReleaseId": "R-1", "EnvironmentId": 7, "DeployedAt": "2000-01-01T10:00:00"}],
        )

        result = load_deployments(path)

        assert isinstance(result, Err)
        assert "EnvironmentId must be a string" in result.error.message

    def test_numeric_id_is_not_reported_missing(self, tmp_path: Path) -> None:
        result = load_releases(
            _write(tmp_path / RELEASES_FILE, [{"Id": 1, "Created": "2000-01-01T08:00:00"}])
        )

        assert isinstance(result, Err)
        assert "Id must be a string, got 1" in result.error.message
        assert "missing" not in result.error.message

    def test_ids_read_verbatim(self, tmp_path: Path) -> None:
        result = load_releases(
            _write(
                tmp_path / RELEASES_FILE,
                [{"Id": " Release-1 ", "ProjectId": "Project-1 ", "Created": "2000-01-01T08:00:00"}],
            )
        )

        assert isinstance(result, Ok)
        assert result.value[0].id == " Release-1 "
        assert result.value[0].project_id == "Project-1 "
