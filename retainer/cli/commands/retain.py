from __future__ import annotations

from pathlib import Path

import typer

from retainer.cli.context import build_context
from retainer.core.errors import ErrorCode
from retainer.core.result import Err
from retainer.output.console import Style
from retainer.output.report import print_retention, result_to_json
from retainer.retention.engine import retain_releases
from retainer.retention.loader import load_data
from retainer.retention.options import RetentionOptions


def retain(
    data_dir: Path | None = typer.Argument(
        None,
        help="Directory holding Projects/Environments/Releases/Deployments.json",
    ),
    keep: int | None = typer.Option(
        None,
        "--keep",
        "-k",
        help="Releases to keep per project/environment (overrides config)",
    ),
    config_path: Path | None = typer.Option(None, "--config", help="Path to retainer.toml"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
) -> None:
    """Report which releases to keep for every project and environment."""
    ctx = build_context(config_path)
    directory = data_dir if data_dir is not None else Path(ctx.config.data.dir)

    loaded = load_data(directory)
    if isinstance(loaded, Err):
        typer.echo(f"error: {loaded.error.pretty()}", err=True)
        raise typer.Exit(code=int(ErrorCode.IO_ERROR))
    data = loaded.value

    built = RetentionOptions.build(
        releases=data.releases,
        deployments=data.deployments,
        environments=data.environments,
        projects=data.projects,
        num_of_releases_to_keep=keep if keep is not None else ctx.config.retention.keep,
    )
    if isinstance(built, Err):
        typer.echo(f"error: {built.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    result = retain_releases(built.value)

    if as_json:
        typer.echo(result_to_json(result))
        return

    ctx.console.print(f"data: {directory}", Style.DIM)
    ctx.console.print(f"keep: {built.value.num_of_releases_to_keep}", Style.DIM)
    print_retention(result, ctx.console)
