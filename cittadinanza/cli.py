"""
Command-Line Interface for Cittadinanza Check.

This module provides the CLI commands using Click:
- serve: Launch the local pre-screening form
- check: Pre-screen files on disk against a YAML profile
- rules: Show how file names are classified

Usage:
    python run.py <command> [options]
"""

import logging
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from .analysis.classifier import FILENAME_RULES
from .analysis.scorer import score_breakdown
from .config import Config, load_config_yaml
from .models.document import DocumentCategory
from .session import Session

# Rich console for pretty output
console = Console()

TIER_STYLES = {
    "excellent": "bold green",
    "good": "green",
    "fair": "yellow",
    "low": "bold red",
}


def setup_logging(verbose: bool = False):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _load_config(config_path: Path | None) -> Config:
    if not config_path:
        return Config()
    try:
        return load_config_yaml(config_path)
    except (FileNotFoundError, ValueError) as e:
        raise click.ClickException(str(e))


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Verbose logging")
def main(verbose: bool):
    """
    Cittadinanza Check - pre-screen an Italian citizenship dossier.

    Scores how complete a jure sanguinis application looks from the lineage
    facts you know and the names of the documents you have. Advisory only.
    """
    setup_logging(verbose)


@main.command()
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help="YAML profile with viewer settings and form pre-fill")
@click.option("--host", "-h", default=None, help="Host to bind to (default: 127.0.0.1)")
@click.option("--port", "-p", default=None, type=int, help="Port to bind to (default: 5000)")
@click.option("--debug/--no-debug", default=None, help="Enable debug mode")
def serve(config_path: Path | None, host: str, port: int, debug: bool | None):
    """
    Launch the local pre-screening form.

    Example:
        python run.py serve
        python run.py serve --port 8080 --config profiles/rossi.yaml
    """
    from .viewer.app import create_app

    config = _load_config(config_path)
    app = create_app(config)

    # Use provided values or fall back to config
    host = host or config.viewer.host
    port = port or config.viewer.port
    debug = config.viewer.debug if debug is None else debug

    console.print(f"[bold green]Starting viewer at http://{host}:{port}[/]")
    console.print("[dim]Press Ctrl+C to stop[/]")

    app.run(host=host, port=port, debug=debug)


@main.command()
@click.argument("files", nargs=-1, required=True,
                type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help="YAML profile with applicant and lineage details")
@click.option("--export-dir", "-o", type=click.Path(file_okay=False, path_type=Path),
              help="Write the JSON summary into this directory")
@click.option("--all-flags", is_flag=True, help="Show every flag instead of the first few")
@click.option("--breakdown", is_flag=True, help="Show which scoring rules fired")
def check(files: tuple[Path, ...], config_path: Path | None, export_dir: Path | None,
          all_flags: bool, breakdown: bool):
    """
    Pre-screen documents on disk.

    FILES are classified by name only; their content is never read.

    Example:
        python run.py check docs/*.pdf --config profiles/rossi.yaml
        python run.py check docs/* --config profiles/rossi.yaml -o summaries/
    """
    config = _load_config(config_path)
    session = Session.from_config(config)
    session.add_paths(files)

    table = Table(title="Documents")
    table.add_column("File", style="cyan")
    table.add_column("Type")
    table.add_column("Size", justify="right")
    table.add_column("PDF/Image", justify="center")

    for doc in session.documents:
        type_name = doc.inferred_category.display_name
        if doc.inferred_category is DocumentCategory.UNKNOWN:
            type_name = f"[dim]{type_name}[/]"
        table.add_row(
            escape(doc.filename),
            type_name,
            f"{doc.size_kb:.1f} KB",
            "✓" if doc.is_pdf_or_image else "[red]✗[/]",
        )
    console.print(table)

    result = session.evaluation
    style = TIER_STYLES.get(result.tier, "")
    console.print(f"\n[{style}]{result.label}[/] ({result.score}/100)")

    if breakdown:
        rules = score_breakdown(session.applicant, session.lineage, session.documents)
        for name, delta in rules:
            colour = "green" if delta > 0 else "red"
            console.print(f"  [{colour}]{delta:+d}[/] {name}")

    limit = None if all_flags else config.display.max_flags_shown
    if result.has_flags:
        for flag in result.visible_flags(limit):
            console.print(f"  [yellow]⚠[/] {flag}")
        hidden = result.hidden_flag_count(limit)
        if hidden:
            console.print(f"  [dim]…and {hidden} more (use --all-flags)[/]")
    else:
        console.print("  [green]No critical warnings.[/]")

    if export_dir:
        path = session.export(export_dir)
        console.print(f"\n[bold blue]Summary saved to:[/] {path}")


@main.command()
def rules():
    """Show the file name rules, in the order they are tried."""
    table = Table(title="Classification Rules (first match wins)")
    table.add_column("#", justify="right")
    table.add_column("File name contains", style="cyan")
    table.add_column("Document type")

    for i, rule in enumerate(FILENAME_RULES, 1):
        table.add_row(str(i), rule.description, rule.category.display_name)
    table.add_row("", "[dim]anything else[/]", "Unrecognized Document")

    console.print(table)


if __name__ == "__main__":
    main()
