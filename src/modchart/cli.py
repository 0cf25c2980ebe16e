"""CLI interface for modchart using Typer framework."""

import json as jsonlib
import logging
from pathlib import Path
from typing import Annotated, List, Optional

import typer
from rich.console import Console

from modchart import __description__, __version__
from modchart.config import FlowchartConfig, LogLevel, load_config
from modchart.errors import ModchartError
from modchart.flowchart import FlowchartService
from modchart.graph import GraphSource, MappingGraphSource, PackageGraphSource

app = typer.Typer(
    name="modchart",
    help=__description__,
    add_completion=False,
    rich_markup_mode="rich"
)

console = Console()

_LOG_LEVELS = {
    LogLevel.ERROR.value: logging.ERROR,
    LogLevel.WARN.value: logging.WARNING,
    LogLevel.INFO.value: logging.INFO,
    LogLevel.DEBUG.value: logging.DEBUG,
}


def version_callback(value: bool) -> None:
    """Show version information and exit."""
    if value:
        console.print(f"modchart version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", callback=version_callback, help="Show version and exit")
    ] = False,
) -> None:
    """modchart - Render module import graphs as Mermaid flowcharts."""


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=_LOG_LEVELS.get(level, logging.INFO),
        format="%(levelname)s %(name)s: %(message)s",
    )


def _build_source(graph_file: Path | None, package_dir: Path | None) -> GraphSource:
    if graph_file and package_dir:
        raise ValueError("Use either --graph or --package, not both")
    if graph_file:
        return MappingGraphSource.from_json(graph_file)
    if package_dir:
        return PackageGraphSource(package_dir)
    raise ValueError("One of --graph or --package is required")


def _apply_overrides(
    config: FlowchartConfig,
    source: GraphSource,
    root: str | None,
    out: Path | None,
    ignore: list[str] | None,
    hide_root: bool,
    no_fence: bool,
) -> FlowchartConfig:
    updates = {}
    if root:
        updates["root_module"] = root
    elif isinstance(source, PackageGraphSource) and "root_module" not in config.model_fields_set:
        updates["root_module"] = source.package_name
    if out:
        updates["output_path"] = out.resolve()
    if ignore:
        updates["modules_to_ignore"] = [*config.modules_to_ignore, *ignore]
    if hide_root:
        updates["display_app_module"] = False
    if no_fence:
        updates["fenced"] = False
    return config.model_copy(update=updates)


@app.command()
def generate(
    graph_file: Annotated[
        Optional[Path],
        typer.Option("--graph", "-g", help="JSON file mapping each module to its imports")
    ] = None,
    package_dir: Annotated[
        Optional[Path],
        typer.Option("--package", "-p", help="Python package directory to scan for imports")
    ] = None,
    root: Annotated[
        Optional[str],
        typer.Option("--root", "-r", help="Root module name (default: AppModule, or the package name)")
    ] = None,
    out: Annotated[
        Optional[Path],
        typer.Option("--out", "-o", help="Output file path (default: ./modules-flowchart.md)")
    ] = None,
    ignore: Annotated[
        Optional[List[str]],
        typer.Option("--ignore", "-i", help="Module to leave out of the diagram (repeatable)")
    ] = None,
    hide_root: Annotated[
        bool,
        typer.Option("--hide-root", help="Do not draw edges leaving the root module")
    ] = False,
    no_fence: Annotated[
        bool,
        typer.Option("--no-fence", help="Emit bare Mermaid without the ```mermaid code block")
    ] = False,
    stdout: Annotated[
        bool,
        typer.Option("--stdout", help="Print the diagram instead of writing a file")
    ] = False,
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Configuration file path (default: search for .modchart.json)")
    ] = None,
    log_level: Annotated[
        Optional[str],
        typer.Option("--log-level", help="Log level: error, warn, info, debug")
    ] = None,
) -> None:
    """Generate a module import flowchart."""
    try:
        flowchart_config = load_config(config)
        _setup_logging(log_level or flowchart_config.logging.level)

        source = _build_source(graph_file, package_dir)
        flowchart_config = _apply_overrides(
            flowchart_config, source, root, out, ignore, hide_root, no_fence
        )

        service = FlowchartService(source, flowchart_config)
        edges = service.collect_edges()
        flowchart = service.render(edges, persist=not stdout)
    except (ModchartError, ValueError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if stdout:
        typer.echo(flowchart)
        return

    console.print(f"[green]OK[/green] Flowchart with {len(edges)} edges from {flowchart_config.root_module}")
    console.print(f"[green]Flowchart generated:[/green] {flowchart_config.output_path}")


@app.command("show-config")
def show_config(
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Configuration file path (default: search for .modchart.json)")
    ] = None,
) -> None:
    """Show the effective configuration as JSON."""
    try:
        flowchart_config = load_config(config)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    typer.echo(jsonlib.dumps(flowchart_config.model_dump(mode="json", by_alias=True), indent=2))


if __name__ == "__main__":
    app()
