"""Command line entry point."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console

from nextver import __version__
from nextver.core.version import ReleaseType
from nextver.log import setup_logging

app = typer.Typer(
    help="Resolve the next semantic version from conventional commits.",
    add_completion=False,
    no_args_is_help=False,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"nextver {__version__}")
        raise typer.Exit()


@app.command()
def main(
    path: Annotated[
        str | None,
        typer.Argument(help="Project directory (defaults to the current directory)."),
    ] = None,
    current: Annotated[
        str | None,
        typer.Option("--current", "-c", help="Current version, instead of reading pyproject.toml."),
    ] = None,
    release_type: Annotated[
        ReleaseType | None,
        typer.Option(
            "--release-type",
            "-r",
            case_sensitive=False,
            help="Bump by this release type instead of analyzing commits.",
        ),
    ] = None,
    interactive: Annotated[
        bool,
        typer.Option("--interactive", "-i", help="Pick the version bump from a prompt."),
    ] = False,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Print the result as JSON."),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug output."),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show the nextver version and exit.",
        ),
    ] = False,
) -> None:
    """Print the next version of the project."""
    from nextver.cli.commands.next import run_next

    err_console = Console(stderr=True)
    setup_logging(verbose, console=err_console)

    run_next(
        path=path,
        current=current,
        release_type=release_type,
        interactive=interactive,
        json_output=json_output,
        console=Console(),
        err_console=err_console,
    )


if __name__ == "__main__":
    app()
