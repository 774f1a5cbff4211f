"""Command-line interface for the AQDEF reader and writer."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Annotated, TypeVar

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from aqdef import __version__
from aqdef.cli.exception_handler import handle_exceptions
from aqdef.kkey import KKeyLevel
from aqdef.model.object_model import AqdefObjectModel
from aqdef.parser import AqdefParser, ParserOptions, ParseReport, load_parser_options
from aqdef.registry import KKeyRepository, YamlKKeyProvider
from aqdef.writer import AqdefWriter

T = TypeVar("T")

# Create Typer app
app = typer.Typer(
    name="aqdef",
    help="Read, check and rewrite AQDEF (DFQ) quality data files.",
    add_completion=True,
    no_args_is_help=True,
)

# Rich consoles for output
console = Console()
error_console = Console(stderr=True, style="bold red")

OptionsFileOption = Annotated[
    Path | None,
    typer.Option(
        "--options",
        help="YAML file with parser options.",
        exists=True,
        dir_okay=False,
        readable=True,
        resolve_path=True,
    ),
]
KeysFileOption = Annotated[
    Path | None,
    typer.Option(
        "--keys",
        help="YAML file declaring additional K-keys.",
        exists=True,
        dir_okay=False,
        readable=True,
        resolve_path=True,
    ),
]
EncodingOption = Annotated[
    str,
    typer.Option("--encoding", "-e", help="Text encoding of the DFQ file."),
]
VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", help="Show debug logging and full tracebacks."),
]
InputFileArgument = Annotated[
    Path,
    typer.Argument(
        help="Input DFQ file.",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        resolve_path=True,
    ),
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"aqdef version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Read, check and rewrite AQDEF (DFQ) quality data files.

    DFQ files hold parts, their characteristics and measured values as
    K-key records. This tool reports their content, lists the fields a
    parse has to drop and writes normalized copies.
    """


def configure_logging(verbose: bool) -> None:
    """Route library logging through rich on stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=verbose)],
        force=True,
    )


def _run(verbose: bool, func: Callable[[], T]) -> T:
    configure_logging(verbose)
    return handle_exceptions(verbose)(func)()


def _create_repository(keys_file: Path | None) -> KKeyRepository | None:
    if keys_file is None:
        return None
    return KKeyRepository.with_additional_providers(YamlKKeyProvider(keys_file))


def _create_parser(
    options_file: Path | None, repository: KKeyRepository | None
) -> AqdefParser:
    options = load_parser_options(options_file) if options_file else ParserOptions()
    return AqdefParser(options=options, repository=repository)


@app.command()
def info(
    input_file: InputFileArgument,
    encoding: EncodingOption = "utf-8",
    options_file: OptionsFileOption = None,
    keys_file: KeysFileOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Display a summary of a DFQ file.

    Examples
    --------
        aqdef info measurements.dfq
        aqdef info measurements.dfq --encoding cp1252

    """

    def run() -> None:
        parser = _create_parser(options_file, _create_repository(keys_file))
        model = parser.parse_file(input_file, encoding)

        console.print(
            Panel.fit(
                f"[bold]AQDEF File[/bold]\nFile: {input_file}",
                title="File Info",
            )
        )
        _print_summary(model)
        _print_parts(model)

    _run(verbose, run)


def _print_summary(model: AqdefObjectModel) -> None:
    """Print counts of the model content."""
    table = Table(title="Content Summary", show_header=False, box=None)
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="white")

    hierarchy = model.hierarchy
    table.add_row("Parts", str(len(model.get_part_indexes())))
    table.add_row("Characteristics", str(model.get_characteristic_count()))
    table.add_row("Values", str(model.get_value_count()))
    table.add_row("Groups", str(len(model.get_groups())))
    table.add_row("Hierarchy nodes", str(len(hierarchy.node_definitions())))
    table.add_row("Hierarchy bindings", str(len(hierarchy.node_bindings())))

    console.print(table)


def _print_parts(model: AqdefObjectModel) -> None:
    """Print one row per part."""
    if not model.get_part_indexes():
        return

    table = Table(title="Parts")
    table.add_column("#", style="dim")
    table.add_column("Number (K1001)", style="cyan")
    table.add_column("Title (K1002)")
    table.add_column("Characteristics", justify="right")
    table.add_column("Values", justify="right")

    for part in model.get_parts():
        characteristics = model.get_characteristics(part.index)
        value_count = sum(len(model.get_values(c.index)) for c in characteristics)
        table.add_row(
            str(part.index),
            str(part.get_value("K1001", "-")),
            str(part.get_value("K1002", "-")),
            str(len(characteristics)),
            str(value_count),
        )

    console.print(table)


@app.command()
def check(
    input_file: InputFileArgument,
    encoding: EncodingOption = "utf-8",
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Only output problems, no success messages."),
    ] = False,
    options_file: OptionsFileOption = None,
    keys_file: KeysFileOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Parse a DFQ file and list every field or line that was dropped.

    Exits with code 1 if the file is structurally invalid.

    Examples
    --------
        aqdef check measurements.dfq
        aqdef check measurements.dfq --options parser-options.yaml

    """

    def run() -> ParseReport:
        parser = _create_parser(options_file, _create_repository(keys_file))
        return parser.parse_file_with_report(input_file, encoding)[1]

    report = _run(verbose, run)

    if report.is_clean:
        if not quiet:
            console.print(f"\n[bold green]✓ {input_file.name} is valid[/bold green]\n")
        return

    table = Table(title="Dropped Fields and Lines", show_header=True)
    table.add_column("#", style="dim", width=4)
    table.add_column("Line", style="cyan", justify="right")
    table.add_column("Code")
    table.add_column("K-key", style="cyan")
    table.add_column("Message", style="yellow")

    for i, issue in enumerate(report.issues, 1):
        table.add_row(
            str(i),
            str(issue.line) if issue.line is not None else "-",
            issue.code,
            issue.kkey or "-",
            issue.message,
        )

    console.print(table)
    if not quiet:
        console.print(
            f"\n[bold yellow]⚠ {input_file.name} is valid with "
            f"{len(report)} dropped item(s)[/bold yellow]\n"
        )


@app.command()
def normalize(
    input_file: InputFileArgument,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output DFQ file. Defaults to <input>.normalized.dfq.",
            dir_okay=False,
            writable=True,
            resolve_path=True,
        ),
    ] = None,
    encoding: EncodingOption = "utf-8",
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite output file if it exists."),
    ] = False,
    options_file: OptionsFileOption = None,
    keys_file: KeysFileOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Parse a DFQ file and write it back in normalized form.

    Records addressing all parts or all characteristics are expanded, a
    simple hierarchy is converted to nodes and bindings, and fields that
    can't be read are dropped.

    Examples
    --------
        aqdef normalize measurements.dfq
        aqdef normalize measurements.dfq -o clean.dfq --force

    """
    from rich.progress import Progress, SpinnerColumn, TextColumn

    if output is None:
        output = input_file.with_suffix(".normalized.dfq")

    if output.exists() and not force:
        error_console.print(
            f"\n[bold red]✗ Output file already exists: {output}[/bold red]\n"
            "Use --force to overwrite."
        )
        raise typer.Exit(code=1)

    def run() -> None:
        repository = _create_repository(keys_file)
        parser = _create_parser(options_file, repository)
        writer = AqdefWriter(repository)

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
            transient=not verbose,
        ) as progress:
            task = progress.add_task("Parsing...", total=None)
            model, report = parser.parse_file_with_report(input_file, encoding)
            progress.update(task, description="[green]✓ Parsed[/green]")

            task = progress.add_task(f"Writing {output.name}...", total=None)
            writer.write(model, output, encoding)
            progress.update(task, description="[green]✓ Written[/green]")

        console.print(
            f"\n[bold green]✓ Wrote {model.get_characteristic_count()} characteristic(s) "
            f"and {model.get_value_count()} value(s) to {output}[/bold green]\n"
        )
        if not report.is_clean:
            console.print(
                f"[yellow]⚠ {len(report)} item(s) were dropped, "
                f"run 'aqdef check {input_file.name}' for details[/yellow]\n"
            )

    _run(verbose, run)


@app.command()
def keys(
    level: Annotated[
        str | None,
        typer.Option(
            "--level",
            "-l",
            help="Only list K-keys of this level (part, characteristic, value, ...).",
        ),
    ] = None,
    keys_file: KeysFileOption = None,
    verbose: VerboseOption = False,
) -> None:
    """List the K-keys known to the registry.

    Examples
    --------
        aqdef keys
        aqdef keys --level part
        aqdef keys --keys company-keys.yaml

    """
    selected_level: KKeyLevel | None = None
    if level is not None:
        try:
            selected_level = KKeyLevel(level.lower())
        except ValueError:
            valid_levels = ", ".join(lvl.value for lvl in KKeyLevel)
            error_console.print(
                f"\n[bold red]✗ Invalid level: {level}[/bold red]\nSupported: {valid_levels}"
            )
            raise typer.Exit(code=1) from None

    def run() -> None:
        repository = _create_repository(keys_file) or KKeyRepository.get_instance()

        table = Table(title="K-keys")
        table.add_column("K-key", style="cyan")
        table.add_column("Level")
        table.add_column("Column")
        table.add_column("Data type")
        table.add_column("Length", justify="right")
        table.add_column("Saved", justify="center")

        count = 0
        for kkey in repository.all_kkeys:
            if selected_level is not None and kkey.level is not selected_level:
                continue
            metadata = repository.metadata_for(kkey)
            if metadata is None:
                continue
            table.add_row(
                kkey.key,
                kkey.level.value,
                metadata.column_name,
                metadata.data_type.value,
                str(metadata.length) if metadata.length is not None else "-",
                "✓" if metadata.save_to_db else "-",
            )
            count += 1

        console.print(table)
        console.print(f"[dim]{count} K-key(s)[/dim]")

    _run(verbose, run)


if __name__ == "__main__":
    app()
