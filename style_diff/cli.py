"""CLI entry point for the style diff tool."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from click.core import ParameterSource
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from style_diff.models.config import (
    DEFAULT_CONFIG_PATH,
    DiffConfig,
    load_selectors,
    parse_csv_list,
)
from style_diff.pipeline import DiffPipeline
from style_diff.reporter.css_patch import PatchOptions, PatchStyle

console = Console()
logger = logging.getLogger(__name__)

LOG_FILENAME = "log.txt"


def setup_logging(verbose: bool = False, log_file: Optional[Path] = None) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    handlers: list[logging.Handler] = [RichHandler(console=console, rich_tracebacks=True)]
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(
            "[%(asctime)s] %(levelname)s: %(message)s", datefmt="%Y-%m-%d %H:%M:%S",
        ))
        handlers.append(file_handler)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=handlers,
        force=True,
    )


def _resolve_patch_style(detailed: bool, grouped: bool) -> PatchStyle:
    if detailed and grouped:
        raise click.UsageError("--detailed and --grouped are mutually exclusive")
    if detailed:
        return PatchStyle.DETAILED
    if grouped:
        return PatchStyle.GROUPED
    return PatchStyle.PLAIN


@click.group()
def cli() -> None:
    """DOM and computed-style diff between an old and a new site."""


@cli.command()
@click.option("--old", "old_source", required=True, help="Old site URL or HTML file path")
@click.option("--new", "new_source", required=True, help="New site URL or HTML file path")
@click.option("--output", "-o", default="./output", show_default=True, help="Output directory")
@click.option("--selectors", "-s", default=None, help="Comma-separated list of CSS selectors")
@click.option("--config", "selectors_file", default=None,
              help="Selector list file (JSON or YAML)")
@click.option("--properties", "-p", default=None,
              help="Comma-separated list of CSS properties to compare")
@click.option("--important/--no-important", default=False,
              help="Add !important to generated CSS [default: from settings file]")
@click.option("--matching", type=click.Choice(["selector", "similarity"]), default=None,
              help="Element matching strategy [default: selector]")
@click.option("--detailed", is_flag=True, help="Generate detailed CSS patch with annotations")
@click.option("--grouped", is_flag=True, help="Generate CSS patch grouped by component")
@click.option("--timeout", type=int, default=None, help="Page load timeout in milliseconds")
@click.option("--defaults", "defaults_file", default=str(DEFAULT_CONFIG_PATH), show_default=True,
              help="Default settings file (JSON or YAML)")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def compare(
    old_source: str,
    new_source: str,
    output: str,
    selectors: Optional[str],
    selectors_file: Optional[str],
    properties: Optional[str],
    important: bool,
    matching: Optional[str],
    detailed: bool,
    grouped: bool,
    timeout: Optional[int],
    defaults_file: str,
    verbose: bool,
) -> None:
    """Compare computed styles of two sites and write diff.json and patch.css."""
    output_dir = Path(output)
    setup_logging(verbose, output_dir / LOG_FILENAME)
    patch_style = _resolve_patch_style(detailed, grouped)

    try:
        logger.info("Old site: %s", old_source)
        logger.info("New site: %s", new_source)

        cfg = DiffConfig.load_default(defaults_file)
        overrides = {}
        if matching:
            overrides["matching_strategy"] = matching
        if timeout is not None:
            overrides["timeout_ms"] = timeout
        if overrides:
            cfg = cfg.model_copy(update=overrides)

        if selectors_file:
            selector_list = load_selectors(selectors_file)
            logger.info("Loaded %d selectors from %s", len(selector_list), selectors_file)
        elif selectors:
            selector_list = parse_csv_list(selectors)
            logger.info("Using %d selectors from command line", len(selector_list))
        else:
            selector_list = []
            logger.info("No selectors specified - comparing all elements with class or id")

        property_list = parse_csv_list(properties) or list(cfg.default_properties)
        if property_list:
            logger.info("Comparing %d specific properties", len(property_list))
        else:
            logger.info("No properties specified - comparing all computed properties")

        use_important = important
        if click.get_current_context().get_parameter_source("important") is ParameterSource.DEFAULT:
            use_important = cfg.css.use_important
        pipeline = DiffPipeline(
            cfg, output_dir,
            patch_options=PatchOptions(use_important=use_important),
        )
        result = pipeline.run(
            old_source, new_source,
            selectors=selector_list,
            properties=property_list,
            patch_style=patch_style,
        )
    except Exception as e:
        logger.error("Fatal error occurred: %s", e, exc_info=verbose)
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        sys.exit(1)

    summary = result.report.summary
    console.print("\n[bold green]Comparison Complete[/bold green]")
    table = Table(title="Diff Summary")
    table.add_column("Metric", style="bold")
    table.add_column("Value")
    table.add_row("Duration", f"{result.duration}s")
    table.add_row("Total Elements", str(summary.total_elements))
    table.add_row("Matched", f"[green]{summary.matched_elements}[/green]")
    table.add_row("Unmatched", f"[yellow]{summary.unmatched_elements}[/yellow]")
    table.add_row("Elements with Differences", f"[red]{summary.diff_elements}[/red]")
    table.add_row("Property Differences", f"[red]{summary.diff_property_count}[/red]")
    console.print(table)

    for fmt, path in result.outputs.items():
        console.print(f"  {fmt.upper()} output: [blue]{path}[/blue]")


@cli.command()
@click.option("--path", "config_path", default=str(DEFAULT_CONFIG_PATH), show_default=True,
              help="Where to write the default settings file")
@click.option("--properties", "-p", default=None,
              help="Comma-separated default properties to compare")
def init(config_path: str, properties: Optional[str]) -> None:
    """Create a default settings file."""
    path = Path(config_path)
    if path.exists():
        if not click.confirm(f"{path} already exists. Overwrite?"):
            return

    cfg = DiffConfig(default_properties=parse_csv_list(properties))
    cfg.save(path)
    console.print(f"[green]Created {path}[/green]")
    console.print("\nYou can now compare two sites:")
    console.print("  [blue]style-diff compare --old <url|path> --new <url|path>[/blue]")


if __name__ == "__main__":
    cli()
