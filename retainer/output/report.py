"""Presentation of retention results.

Renders the events as the textual retention log and as a JSON document.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from retainer.output.console import Style

if TYPE_CHECKING:
    from retainer.output.console import ConsoleProtocol
    from retainer.retention.model import RetentionResult

__all__ = ["print_retention", "result_to_json", "summary_line"]


def summary_line(result: RetentionResult) -> str:
    return (
        f"{len(result.releases)} release(s) retained across "
        f"{len(result.environment_ids())} environment(s)"
    )


def print_retention(result: RetentionResult, console: ConsoleProtocol) -> None:
    """Print one line per retention event, then a summary."""
    for event in result.events:
        console.print(event.describe(), Style.INFO)
    if result.is_empty:
        console.warning("no releases retained")
        return
    console.success(summary_line(result))


def result_to_json(result: RetentionResult) -> str:
    # releases and events are parallel: one event per retained occurrence
    payload: dict[str, object] = {
        "retained": [
            {
                "release_id": release.id,
                "project_id": release.project_id,
                "version": release.version,
                "environment_id": event.environment_id,
            }
            for release, event in zip(result.releases, result.events, strict=True)
        ],
        "events": [
            {
                "release_id": event.release_id,
                "environment_id": event.environment_id,
                "message": event.describe(),
            }
            for event in result.events
        ],
    }
    return json.dumps(payload, indent=2)
