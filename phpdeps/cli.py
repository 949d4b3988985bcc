"""phpdeps CLI - Map PHP classes, interfaces and traits to files and dependencies."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from phpdeps.errors import PhpDepsError
from phpdeps.output import build_result, write_output
from phpdeps.resolver import Resolver


@click.group()
def cli() -> None:
    """phpdeps - Find where PHP types live and what each file depends on."""
    pass


def _configure_logging(verbose: bool, quiet: bool) -> None:
    from rich.logging import RichHandler

    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(show_path=False)],
        force=True,
    )


def _make_resolver(roots: tuple[str, ...], exclude: tuple[str, ...] = (), php_version: str | None = None) -> Resolver:
    try:
        return Resolver(list(roots), php_version=php_version, exclude_paths=list(exclude))
    except PhpDepsError as e:
        raise click.ClickException(str(e)) from e


def _build_with_progress(resolver: Resolver, verbose: bool) -> None:
    """Build the indices with Rich progress display and print a summary."""
    from rich.console import Console
    from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
    from rich.table import Table

    console = Console()

    with Progress(
        SpinnerColumn(),
        TextColumn("[bold blue]{task.description}"),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task("Initialising...", total=None)

        def on_phase(name, label):
            progress.update(task, description=label)

        resolver.build(progress_callback=on_phase)

    title = ", ".join(Path(root).name or root for root in resolver.config.roots)
    table = Table(title=f"phpdeps index: {title}", show_edge=False)
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")

    table.add_row("Files", str(len(resolver.all_file_dependencies())))
    table.add_row("Symbols", str(len(resolver.all_mapped_names())))
    table.add_row("Dependency edges", str(resolver.graph.dependency_edge_count()))
    table.add_row("Unresolved names", str(len(resolver.unresolved_names())))
    table.add_row("Skipped files", str(len(resolver.skipped_files())))
    table.add_row("Duration", f"{resolver.total_ms:.1f}ms")

    console.print(table)

    if verbose and resolver.timings:
        timing_table = Table(title="Phase Timings", show_edge=False)
        timing_table.add_column("Phase", style="bold")
        timing_table.add_column("Time (ms)", justify="right")
        for phase, seconds in resolver.timings.items():
            timing_table.add_row(phase, f"{seconds * 1000:.1f}")
        console.print(timing_table)

    skipped = resolver.skipped_files()
    if verbose and skipped:
        skipped_table = Table(title="Skipped Files", show_edge=False)
        skipped_table.add_column("File", style="bold")
        skipped_table.add_column("Reason")
        for file_path, reason in skipped.items():
            skipped_table.add_row(file_path, reason)
        console.print(skipped_table)


def _build(resolver: Resolver) -> None:
    try:
        resolver.build()
    except PhpDepsError as e:
        raise click.ClickException(str(e)) from e


@cli.command("index")
@click.argument("roots", nargs=-1, required=True, type=click.Path(file_okay=False))
@click.option("-o", "--output", "output_path", default=None, help="Output JSON file path")
@click.option("--exclude", multiple=True, help="Path to leave out of the scan (repeatable)")
@click.option("--php-version", default=None, help="Target PHP version hint, MAJOR.MINOR")
@click.option("--verbose", is_flag=True, help="Show per-phase timing and skipped files")
@click.option("--quiet", is_flag=True, help="Suppress all output except errors")
def index_cmd(
    roots: tuple[str, ...],
    output_path: str | None,
    exclude: tuple[str, ...],
    php_version: str | None,
    verbose: bool,
    quiet: bool,
) -> None:
    """Index one or more PHP source directories and write a JSON report."""
    _configure_logging(verbose, quiet)
    resolver = _make_resolver(roots, exclude, php_version)

    if output_path is None:
        output_path = f"{Path(roots[0]).resolve().name}.phpdeps.json"

    try:
        if quiet:
            resolver.build()
        else:
            _build_with_progress(resolver, verbose)
    except PhpDepsError as e:
        raise click.ClickException(str(e)) from e

    write_output(build_result(resolver), output_path)

    if not quiet:
        from rich.console import Console
        Console().print(f"[green]Output written to:[/green] {output_path}")


def _require_one(name: str | None, file_path: str | None) -> None:
    if (name is None) == (file_path is None):
        raise click.UsageError("Pass exactly one of --name or --file.")


@cli.command("lookup")
@click.argument("roots", nargs=-1, required=True, type=click.Path(file_okay=False))
@click.option("--name", default=None, help="Fully qualified class, interface or trait name")
@click.option("--file", "file_path", default=None, help="Path of a PHP source file")
@click.option("--exclude", multiple=True, help="Path to leave out of the scan (repeatable)")
def lookup_cmd(roots: tuple[str, ...], name: str | None, file_path: str | None, exclude: tuple[str, ...]) -> None:
    """Print the file declaring --name, or the name declared in --file."""
    _require_one(name, file_path)
    _configure_logging(False, True)
    resolver = _make_resolver(roots, exclude)
    _build(resolver)

    if name is not None:
        found = resolver.file_path_by_name(name.lstrip("\\"))
    else:
        try:
            found = resolver.name_by_file_path(file_path)
        except PhpDepsError as e:
            raise click.ClickException(str(e)) from e

    if found is None:
        raise click.ClickException(f"Not found: {name or file_path}")
    click.echo(found)


@cli.command("deps")
@click.argument("roots", nargs=-1, required=True, type=click.Path(file_okay=False))
@click.option("--name", default=None, help="Fully qualified class, interface or trait name")
@click.option("--file", "file_path", default=None, help="Path of a PHP source file")
@click.option("--reverse", is_flag=True, help="List files depending on --name instead")
@click.option("--exclude", multiple=True, help="Path to leave out of the scan (repeatable)")
def deps_cmd(
    roots: tuple[str, ...],
    name: str | None,
    file_path: str | None,
    reverse: bool,
    exclude: tuple[str, ...],
) -> None:
    """Print the direct dependencies of --name or --file, one per line."""
    _require_one(name, file_path)
    if reverse and name is None:
        raise click.UsageError("--reverse requires --name.")
    _configure_logging(False, True)
    resolver = _make_resolver(roots, exclude)
    _build(resolver)

    if reverse:
        results = resolver.dependents_by_name(name.lstrip("\\"))
    elif name is not None:
        results = resolver.dependencies_by_name(name.lstrip("\\"))
    else:
        try:
            results = resolver.dependencies_by_file(file_path)
        except PhpDepsError as e:
            raise click.ClickException(str(e)) from e

    for item in results:
        click.echo(item)


if __name__ == "__main__":
    cli()
