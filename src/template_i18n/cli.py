"""CLI for the template i18n toolkit.

Usage:
    i18n extract --dir templates --out messages.json --stub app/i18n_stub.py --pkg app
"""

import logging

import typer
from rich.console import Console
from rich.table import Table

from template_i18n import __version__
from template_i18n.config import settings
from template_i18n.errors import I18nError
from template_i18n.extract import Extractor

# Shared color palette
ELECTRIC_PURPLE = "#e135ff"
NEON_CYAN = "#80ffea"
SUCCESS_GREEN = "#50fa7b"
ERROR_RED = "#ff6363"

console = Console()
app = typer.Typer(
    name="i18n",
    help="i18n tool",
    add_completion=False,
    no_args_is_help=True,
)


def success(message: str) -> None:
    """Print a success message."""
    console.print(f"[{SUCCESS_GREEN}]✓[/{SUCCESS_GREEN}] {message}")


def error(message: str) -> None:
    """Print an error message."""
    console.print(f"[{ERROR_RED}]✗[/{ERROR_RED}] {message}")


def info(message: str) -> None:
    """Print an info message."""
    console.print(f"[{NEON_CYAN}]→[/{NEON_CYAN}] {message}")


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"i18n version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
) -> None:
    """i18n tool"""
    logging.basicConfig(level=settings.log_level, format="%(message)s")


@app.command()
def extract(
    dir: str = typer.Option(settings.dir, "--dir", help="Directory to scan for templates"),
    out: str = typer.Option(settings.out, "--out", help="Output JSON of found i18n messages"),
    stub: str = typer.Option(
        settings.stub_file,
        "--stub",
        help="Synthetic Python module generated for pybabel extract",
    ),
    pkg: str = typer.Option(
        settings.package, "--pkg", help="Package name to use in the generated module"
    ),
    ext: list[str] = typer.Option(
        settings.extensions, "--ext", help="Template extensions to consider (repeatable)"
    ),
) -> None:
    """Extract i18n messages from templates.

    Examples:
        i18n extract                                  # Scan ., write i18n_stub.py
        i18n extract --dir templates --out msgs.json  # Also write the JSON catalog
        i18n extract --ext .html --ext .jinja         # Only these extensions
    """
    extractor = Extractor(dir, out, pkg, stub, *ext)
    try:
        result = extractor.run()
    except I18nError as e:
        error(e.message)
        for failure in e.details.get("failures", []) or []:
            console.print(f"  [dim]{failure['path']}: {failure['reason']}[/dim]")
        raise typer.Exit(1) from e

    table = Table(title="Extraction Summary", border_style=NEON_CYAN)
    table.add_column("Metric", style=ELECTRIC_PURPLE)
    table.add_column("Value", style=NEON_CYAN, justify="right")
    table.add_row("Templates scanned", str(result.files_scanned))
    table.add_row("Call-sites", str(result.call_sites))
    table.add_row("Messages", str(len(result.messages)))
    console.print(table)

    for path in result.written:
        success(f"Wrote {path}")
    if not out:
        info("JSON output disabled (use --out to enable)")


if __name__ == "__main__":
    app()
