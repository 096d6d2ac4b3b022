"""Implementation of the 'nextver' command.

Resolves and prints the next version. Nothing in the repository is
modified.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from rich.markup import escape

from nextver.config import load_config
from nextver.core.resolve import SelectionCancelled, VersionContext, resolve
from nextver.exceptions import NextverError
from nextver.project import get_current_version

if TYPE_CHECKING:
    from rich.console import Console

    from nextver.core.version import ReleaseType

EXIT_CANCELLED = 130


def run_next(
    path: str | None,
    current: str | None,
    release_type: ReleaseType | None,
    interactive: bool,
    json_output: bool,
    console: Console,
    err_console: Console,
) -> None:
    """Run the nextver command.

    Args:
        path: Optional path to project directory
        current: Current version override (e.g., "1.4.2")
        release_type: Explicit release type, skipping commit analysis
        interactive: Let the operator pick the version
        json_output: Print a JSON object instead of the bare version
        console: Console for standard output
        err_console: Console for error output
    """
    project_path = Path(path) if path else Path.cwd()

    # Load configuration
    try:
        config = load_config(project_path)
    except NextverError as e:
        _print_error(err_console, "Error loading config", e)
        raise SystemExit(1) from e

    # Get current version
    if current is None:
        try:
            current = get_current_version(project_path, config)
        except NextverError as e:
            _print_error(err_console, "Error getting version", e)
            raise SystemExit(1) from e

    selector = None
    if interactive and release_type is None:
        from nextver.prompt import RichSelector

        selector = RichSelector(err_console)

    context = VersionContext(current=current, release_type=release_type)

    try:
        outcome = resolve(
            context,
            path=project_path,
            selector=selector,
            config=config,
            interactive=interactive,
        )
    except NextverError as e:
        _print_error(err_console, "Error", e)
        raise SystemExit(1) from e

    if isinstance(outcome, SelectionCancelled):
        err_console.print("[yellow]Cancelled.[/] No version selected.")
        raise SystemExit(EXIT_CANCELLED)

    if json_output:
        console.print_json(
            data={"current": current, "version": outcome.value, "reason": outcome.reason}
        )
    else:
        console.print(outcome.value, markup=False, highlight=False)


def _print_error(err_console: Console, title: str, error: NextverError) -> None:
    err_console.print(f"[red]{title}:[/] {escape(error.message)}", highlight=False)
    if error.hint:
        err_console.print(f"[dim]{escape(error.hint)}[/]", highlight=False)
