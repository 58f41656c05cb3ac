"""CLI entrypoints."""

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table
from rich.text import Text

from liveren import __version__
from liveren.models.events import KeyCode, KeyEvent
from liveren.models.session import DEFAULT_MATCH_TEXT, DEFAULT_REPLACE_TEXT, PatternState, SessionResult
from liveren.processors.listing_loader import DirectoryReadError, load_listing
from liveren.processors.state_machine import StateMachine
from liveren.tui import RenameApp


console = Console()
# Status output and the preview table go to stderr so stdout only carries rename lines.
err_console = Console(stderr=True)


def _resolve_directory(directory: str | None) -> Path:
    """Canonicalize the target directory, defaulting to the current one.

    Raises:
        OSError: If the path does not exist or cannot be resolved.
    """
    if directory is None:
        return Path.cwd()
    return Path(directory).resolve(strict=True)


def _print_plan(machine: StateMachine) -> int:
    """Show the renames confirming would perform and return how many there are."""
    plan = machine.executor.plan(machine.listing, machine.engine, machine.state.patterns)
    if not plan:
        err_console.print("[yellow]No entries would be renamed.[/yellow]")
        return 0

    table = Table(show_header=True, header_style="bold")
    table.add_column("Original", style="cyan")
    table.add_column("New Name", style="green")
    for entry, new_name in plan:
        table.add_row(Text(entry.label()), Text(entry.label(new_name)))

    err_console.print(table)
    return len(plan)


def _report(result: SessionResult) -> None:
    """Flush the accumulated session output, once, at the end."""
    for line in result.info_lines:
        console.out(line, highlight=False)
    for line in result.error_lines:
        err_console.out(line, highlight=False)


@click.command(context_settings=dict(show_default=True))
@click.argument("directory", type=str, required=False)
@click.option("-m", "--match", "match_text", type=str, default=DEFAULT_MATCH_TEXT, help="Initial match pattern.")
@click.option(
    "-r",
    "--replace",
    "replace_text",
    type=str,
    default=DEFAULT_REPLACE_TEXT,
    help="Initial replacement template ($1, ${name}, $0 for the whole match).",
)
@click.option(
    "-y",
    "--yes",
    is_flag=True,
    default=False,
    help="Skip the interactive preview and apply the renames immediately.",
)
@click.option(
    "--dry-run",
    is_flag=True,
    default=False,
    help="Print the planned renames without touching any file.",
)
@click.version_option(version=__version__, prog_name="liveren")
def cli(
    directory: str | None,
    match_text: str,
    replace_text: str,
    yes: bool,
    dry_run: bool,
) -> None:
    """liveren - Rename the entries of DIRECTORY with a live regex preview.

    Type a pattern in the Match field and a template in the Rename field,
    watch the preview, then press Enter to rename. Tab switches fields,
    Up/Down scrolls, Escape quits without renaming.

    Examples:

        liveren ~/photos

        liveren --match '(.*)\\.jpeg' --replace '$1.jpg' --yes .
    """
    try:
        root = _resolve_directory(directory)
    except OSError as e:
        err_console.out(f"ERROR: {e}", highlight=False)
        raise SystemExit(1) from e

    try:
        loaded = load_listing(root)
    except DirectoryReadError as e:
        err_console.out(str(e), highlight=False)
        raise SystemExit(1) from e

    result = SessionResult()
    for line in loaded.error_lines:
        result.add_error(line)

    machine = StateMachine(
        loaded.entries,
        root,
        result=result,
        patterns=PatternState(match_text=match_text, replace_text=replace_text),
    )

    if dry_run:
        _print_plan(machine)
        machine.cancel()
    elif yes:
        if _print_plan(machine):
            err_console.print("[cyan]Applying renames...[/cyan]")
        machine.dispatch(KeyEvent(code=KeyCode.ENTER))
    else:
        RenameApp(machine).run()
        # The app can also be closed by textual itself (e.g. ctrl+q).
        machine.cancel()

    _report(machine.result)
    if machine.result.failed:
        raise SystemExit(machine.result.exit_code)
