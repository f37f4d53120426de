"""CLI interface for cdcc.

Typer-based command-line interface with Rich output formatting.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from cdcc import __version__
from cdcc.compile import CompileRunner, check_unique_formats
from cdcc.config import CONFIG_FILE, CdccConfig, default_config, load_config, save_config
from cdcc.exceptions import CdccError, LoadError
from cdcc.manifest import save_results
from cdcc.registry import default_registry
from cdcc.resources import DirectoryResourceProvider, NullResourceProvider
from cdcc.types import OutputRequest, PreviewOptions

if TYPE_CHECKING:
    from cdcc.ingest.base import BaseDescriptionLoader
    from cdcc.types import CompileResult

__all__ = ["app"]

app = typer.Typer(
    name="cdcc",
    help="Circuit Diagram component compiler — turns component XML into previews and packages.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)
console = Console()

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool, quiet: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING if quiet else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False, show_time=False)],
        force=True,
    )


def _load_config(config_path: Path | None) -> CdccConfig:
    """Load the explicit config file, else ./cdcc.toml, else defaults."""
    if config_path is not None:
        return load_config(config_path)
    local = Path.cwd() / CONFIG_FILE
    if local.is_file():
        return load_config(local)
    return default_config()


def _split_pair(value: str, option: str) -> tuple[str, str | None]:
    name, sep, rest = value.partition("=")
    name = name.strip()
    if not name:
        console.print(f"[red]Invalid {option} value:[/red] {value!r}")
        raise typer.Exit(code=1)
    return name, (rest if sep else None)


def _discover_inputs(
    paths: list[Path],
    pattern: str,
    recursive: bool,
    loader: BaseDescriptionLoader,
) -> list[Path]:
    """Expand directories into the description files the loader accepts.

    Files named explicitly are passed through unfiltered.
    """
    found: list[Path] = []
    for path in paths:
        if path.is_dir():
            matches = path.rglob(pattern) if recursive else path.glob(pattern)
            found.extend(sorted(p for p in matches if p.is_file() and loader.can_load(p)))
        elif path.is_file():
            found.append(path)
        else:
            console.print(f"[red]Input not found:[/red] {path}")
            raise typer.Exit(code=1)
    return found


def _build_requests(
    formats: list[str],
    default_destination: str | None,
    config: CdccConfig,
) -> list[OutputRequest]:
    requests: list[OutputRequest] = []
    for value in formats:
        name, destination = _split_pair(value, "--format")
        try:
            generator = default_registry.create(name, config)
        except CdccError as e:
            console.print(f"[red]{escape(str(e))}[/red]")
            raise typer.Exit(code=1) from e
        requests.append(OutputRequest(generator, destination or default_destination))
    try:
        check_unique_formats(requests)
    except CdccError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e
    return requests


def _print_summary(results: list[CompileResult]) -> None:
    table = Table(show_header=True, box=None, padding=(0, 2))
    table.add_column("Component", style="bold")
    table.add_column("Format", style="dim")
    table.add_column("Output")
    for result in results:
        for fmt, path in result.outputs.items():
            table.add_row(result.component_name, fmt, path)
    console.print(table)


@app.command()
def version() -> None:
    """Show cdcc version."""
    console.print(f"cdcc {__version__}")


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing config file"),
    ] = False,
) -> None:
    """Write a default cdcc.toml in the current directory."""
    path = Path.cwd() / CONFIG_FILE
    if path.exists() and not force:
        console.print(f"[yellow]{CONFIG_FILE} already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(code=1)
    try:
        save_config(default_config(), path)
    except CdccError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e
    console.print(f"[green]Wrote default config[/green] to {path}")


@app.command()
def formats() -> None:
    """List the available output formats."""
    config = default_config()
    table = Table(show_header=True, box=None, padding=(0, 2))
    table.add_column("Format", style="bold")
    table.add_column("Extension")
    table.add_column("Generator", style="dim")
    for name in default_registry.list_generators():
        generator = default_registry.create(name, config)
        table.add_row(name, generator.file_extension, type(generator).__name__)
    console.print(table)


@app.command(name="compile")
def compile_cmd(
    inputs: Annotated[
        list[Path],
        typer.Argument(help="Component description file(s) or directories"),
    ],
    output_formats: Annotated[
        list[str] | None,
        typer.Option(
            "--format",
            "-f",
            help="Output format, optionally with a destination: svg, svg=out/, cdcom=r.cdcom",
        ),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Default output directory"),
    ] = None,
    manifest: Annotated[
        Path | None,
        typer.Option("--manifest", "-m", help="Write a JSON results manifest"),
    ] = None,
    recursive: Annotated[
        bool,
        typer.Option("--recursive", "-r", help="Search input directories recursively"),
    ] = False,
    size: Annotated[float | None, typer.Option("--size", help="Preview symbol size")] = None,
    width: Annotated[int | None, typer.Option("--width", help="Preview width")] = None,
    height: Annotated[int | None, typer.Option("--height", help="Preview height")] = None,
    crop: Annotated[
        bool | None,
        typer.Option("--crop/--no-crop", help="Crop preview to content"),
    ] = None,
    center: Annotated[
        bool | None,
        typer.Option("--center/--no-center", help="Center the symbol in the preview"),
    ] = None,
    horizontal: Annotated[
        bool | None,
        typer.Option("--horizontal/--vertical", help="Preview orientation"),
    ] = None,
    grid: Annotated[
        bool | None,
        typer.Option("--grid/--no-grid", help="Draw a background grid"),
    ] = None,
    configuration: Annotated[
        str | None,
        typer.Option("--configuration", "-c", help="Configuration to highlight in previews"),
    ] = None,
    properties: Annotated[
        list[str] | None,
        typer.Option("--property", "-p", help="Preview property KEY=VALUE"),
    ] = None,
    resources: Annotated[
        Path | None,
        typer.Option("--resources", help="Resource directory for generators"),
    ] = None,
    keep_going: Annotated[
        bool,
        typer.Option("--keep-going", "-k", help="Continue after a component fails"),
    ] = False,
    config_path: Annotated[
        Path | None,
        typer.Option("--config", help="Path to cdcc.toml"),
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")] = False,
    quiet: Annotated[bool, typer.Option("--quiet", "-q", help="Warnings only")] = False,
) -> None:
    """Compile component descriptions into the requested output formats."""
    _configure_logging(verbose, quiet)

    try:
        config = _load_config(config_path)
    except CdccError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    base = config.preview.to_options()
    property_pairs = [_split_pair(p, "--property") for p in properties or []]
    preview_options = PreviewOptions(
        size=size if size is not None else base.size,
        width=width if width is not None else base.width,
        height=height if height is not None else base.height,
        center=base.center if center is None else center,
        crop=base.crop if crop is None else crop,
        horizontal=base.horizontal if horizontal is None else horizontal,
        scale=base.scale,
        grid=base.grid if grid is None else grid,
        configuration=configuration,
        properties=tuple((key, value or "") for key, value in property_pairs),
    )

    default_destination: str | None = None
    output_dir = output or (Path(config.output.directory) if config.output.directory else None)
    if output_dir is not None:
        output_dir.mkdir(parents=True, exist_ok=True)
        default_destination = str(output_dir)

    requests = _build_requests(output_formats or config.output.formats, default_destination, config)

    resource_dir = resources or (
        Path(config.resources.directory) if config.resources.directory else None
    )
    provider = (
        DirectoryResourceProvider(resource_dir)
        if resource_dir is not None
        else NullResourceProvider()
    )
    runner = CompileRunner(resources=provider)

    files = _discover_inputs(
        inputs, config.input.pattern, recursive or config.input.recursive, runner.loader
    )
    if not files:
        console.print("[yellow]No component descriptions found.[/yellow]")
        raise typer.Exit(code=1)

    results: list[CompileResult] = []
    failures = 0
    for path in files:
        try:
            results.append(runner.compile_one(str(path), preview_options, requests))
        except LoadError as e:
            console.print(f"[red]Invalid component description:[/red] {escape(str(e))}")
            if not keep_going:
                raise typer.Exit(code=1) from e
            failures += 1
        except (CdccError, OSError) as e:
            console.print(f"[red]Error compiling {path}:[/red] {escape(str(e))}")
            logger.debug("Compile failure for %s", path, exc_info=True)
            if not keep_going:
                raise typer.Exit(code=1) from e
            failures += 1

    _print_summary(results)

    manifest_path = manifest or (Path(config.output.manifest) if config.output.manifest else None)
    if manifest_path is not None:
        try:
            save_results(results, manifest_path)
        except CdccError as e:
            console.print(f"[red]{escape(str(e))}[/red]")
            raise typer.Exit(code=1) from e
        console.print(f"Wrote results manifest to {manifest_path}")

    console.print(f"\n[green]Compiled {len(results)} component(s)[/green]")
    if failures:
        console.print(f"[red]{failures} component(s) failed[/red]")
        raise typer.Exit(code=1)
