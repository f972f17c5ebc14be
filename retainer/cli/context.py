from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from retainer.core.config import CONFIG_FILE_NAME, Config, load_config
from retainer.core.errors import ErrorCode
from retainer.core.result import Err
from retainer.output.console import ConsoleProtocol, RichConsole


@dataclass(frozen=True, slots=True)
class CLIContext:
    config: Config
    console: ConsoleProtocol


def resolve_config(config_path: Path | None) -> Config:
    """Load an explicit config file, else ./retainer.toml when present."""
    if config_path is None:
        default_path = Path.cwd() / CONFIG_FILE_NAME
        if not default_path.is_file():
            return Config()
        config_path = default_path

    result = load_config(config_path)
    if isinstance(result, Err):
        typer.echo(f"error: {result.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.CONFIG_ERROR))
    return result.value


def build_context(config_path: Path | None = None) -> CLIContext:
    return CLIContext(config=resolve_config(config_path), console=RichConsole())
