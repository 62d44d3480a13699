"""CLI interface for rechristen."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from rechristen.config import Config
from rechristen.core.errors import RenameError, UserDeclinedError
from rechristen.core.models import NameVerdict, RenameReport, RenameRequest
from rechristen.core.orchestrator import rename_package
from rechristen.integrations.cran import CranNameValidator
from rechristen.integrations.git import GitCliClient
from rechristen.integrations.roxygen import RoxygenDocGenerator

__version__ = "0.1.0"

app = typer.Typer(
    name="rechristen",
    help="Rename an existing R package in place.",
    no_args_is_help=True,
)
console = Console()


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"rechristen {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option("--version", callback=_version_callback, is_eager=True, help="Show the version and exit"),
    ] = False,
) -> None:
    """Rename an existing R package in place."""


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _confirm(message: str) -> bool | None:
    """Ask on the terminal; an aborted prompt counts as no answer."""
    try:
        return typer.confirm(message, default=False)
    except typer.Abort:
        return None


def _display_verdict(verdict: NameVerdict) -> None:
    style = "green" if verdict.usable else "yellow"
    console.print(f"[bold]Name check:[/bold] [{style}]{verdict.name}[/{style}]")
    for detail in verdict.details:
        console.print(f"  • {detail}")
    console.print()


def _display_report(report: RenameReport) -> None:
    """Display a summary of a finished rename."""
    console.print(f"[bold green]Renamed '{report.old_name}' to '{report.new_name}'[/bold green]")
    console.print(f"  [bold]Location:[/bold] {report.new_path}")
    console.print(f"  [bold]Files rewritten:[/bold] {len(report.rewritten)}")
    console.print(f"  [bold]Artifacts deleted:[/bold] {len(report.pruned)}")

    if report.renamed:
        console.print()
        table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
        table.add_column("Renamed from", style="dim")
        table.add_column("To", style="cyan")
        for source, target in report.renamed:
            table.add_row(str(source.relative_to(report.old_path)), str(target.relative_to(report.old_path)))
        console.print(table)

    if report.remote:
        console.print()
        console.print(f"[bold]Remote '{report.remote.remote}':[/bold] {report.remote.old_url} -> {report.remote.new_url}")
        console.print("[dim]Rename the hosted repository too (e.g. GitHub Settings > Repository name).[/dim]")


@app.command()
def rename(
    path: Annotated[
        Path,
        typer.Argument(help="Path of the package directory", file_okay=False),
    ],
    new_name: Annotated[
        str,
        typer.Argument(help="Desired name of the package"),
    ],
    check: Annotated[
        bool | None,
        typer.Option("--check/--no-check", help="Check name validity and CRAN availability first"),
    ] = None,
    remote: Annotated[
        bool | None,
        typer.Option("--remote/--no-remote", help="Repoint the git remote URL"),
    ] = None,
    docs: Annotated[
        bool | None,
        typer.Option("--docs/--no-docs", help="Delete man/*.Rd and rebuild docs with roxygen"),
    ] = None,
    remote_name: Annotated[
        str | None,
        typer.Option("--remote-name", help="Remote to update (default: first configured)"),
    ] = None,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Do not ask for confirmation"),
    ] = False,
    substring: Annotated[
        bool,
        typer.Option("--substring", help="Replace the old name anywhere, not only as a whole word"),
    ] = False,
    config_file: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Config file (default: .rechristen/config.yaml)"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug logging"),
    ] = False,
) -> None:
    """Rename the package at PATH to NEW_NAME.

    Rewrites the old name in R, C/C++, Fortran, Stan, markdown and config
    files, renames files named after the package, deletes stale compiled
    artifacts, renames the directory and repoints the git remote.
    Back up the package first: nothing is rolled back on failure.
    """
    _setup_logging(verbose)
    config = Config.load(config_file)

    # CLI flags override config file values only when given
    if check is not None:
        config.check_validity = check
    if remote is not None:
        config.change_remote = remote
    if docs is not None:
        config.regenerate_docs = docs
    if remote_name is not None:
        config.remote_name = remote_name
    if yes:
        config.confirm = False
    if substring:
        config.whole_word_only = False

    request = RenameRequest(path=path, new_name=new_name, options=config.rename_options())

    try:
        report = rename_package(
            request,
            validator=CranNameValidator(base_url=config.registry_url, timeout=config.http_timeout),
            vcs=GitCliClient(timeout=config.git_timeout),
            docs=RoxygenDocGenerator(rscript=config.rscript, timeout=config.roxygen_timeout),
            confirm=_confirm,
            on_verdict=_display_verdict,
        )
    except UserDeclinedError:
        console.print("[yellow]Aborted. Nothing was changed.[/yellow]")
        raise typer.Exit(0) from None
    except RenameError as e:
        console.print(f"[bold red]Rename failed: {e}[/bold red]")
        raise typer.Exit(1) from e

    _display_report(report)


@app.command()
def check(
    name: Annotated[str, typer.Argument(help="Candidate package name")],
    config_file: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Config file (default: .rechristen/config.yaml)"),
    ] = None,
) -> None:
    """Check whether NAME is a valid R package name and free on CRAN."""
    config = Config.load(config_file)
    validator = CranNameValidator(base_url=config.registry_url, timeout=config.http_timeout)
    verdict = validator.check(name)
    _display_verdict(verdict)
    if not verdict.usable:
        raise typer.Exit(1)


@app.command()
def version() -> None:
    """Show the rechristen version."""
    console.print(f"rechristen {__version__}")


if __name__ == "__main__":
    app()
