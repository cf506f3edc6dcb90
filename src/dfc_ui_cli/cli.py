"""
Data Formatter CLI Application

Typer-based command-line interface converting Excel sheets to delimited text.
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from dfc_engine.engine import ConversionEngine
from dfc_engine.errors import ConversionError, InputNotFoundError, InvalidConfigError, WriteError
from dfc_engine.models import ConversionConfig, ConversionRequest
from dfc_io.readers import list_sheet_names, load_config, read_workbook
from dfc_io.writers import default_config_name, export_csv, save_config
from dfc_ui_cli.display import display_columns, display_config_summary, display_result
from dfc_ui_cli.interactive import (
    build_value_mappings,
    choose_columns_to_remove,
    prompt_delimiter,
    prompt_input_file,
    prompt_output_file,
)
from dfc_ui_cli.logging_config import configure_logging


app = typer.Typer(
    name="data-formatter",
    help="Convert Excel files to CSV with options for columns and value mapping",
    add_completion=False,
)

console = Console()


def _load_saved_config(config_path: Path) -> Optional[ConversionConfig]:
    """Load a saved configuration, or warn and return None to go interactive."""
    try:
        config = load_config(config_path)
    except (InputNotFoundError, InvalidConfigError) as e:
        console.print(f"[yellow]{e}[/yellow]")
        console.print("[yellow]Proceeding with interactive mode.[/yellow]")
        return None
    console.print(f"[dim]Loading configuration from: {config_path}[/dim]")
    return config


def _run_saved(config: ConversionConfig, overwrite: bool) -> None:
    """Run a conversion entirely from a saved configuration."""
    console.print("[dim]Processing with saved configuration...[/dim]")
    request = config.to_request()

    grid = read_workbook(config.input_file, config.sheet)
    if request.columns_to_remove:
        console.print("[dim]Applying column removals...[/dim]")
    if request.value_mappings:
        console.print("[dim]Applying value mappings...[/dim]")

    output = ConversionEngine(request).run(grid)
    result = export_csv(output, config.output_file, overwrite=overwrite)
    display_result(result)


def _run_interactive(
    input_file: Optional[Path],
    sheet: Optional[str],
    encoding: str,
    skip_rows: int,
    include_headers: bool,
    overwrite: bool,
) -> None:
    """Prompt for every choice, convert, then offer to save the configuration."""
    input_file = prompt_input_file(input_file)
    output_file = prompt_output_file(input_file)
    delimiter = prompt_delimiter()

    console.print("[dim]Loading Excel file...[/dim]")
    grid = read_workbook(input_file, sheet)

    columns_to_remove: list[int] = []
    if typer.confirm("Do you want to modify columns before exporting?", default=False):
        columns_to_remove = choose_columns_to_remove(grid)

    value_mappings = []
    if typer.confirm("Do you want to map values for any columns?", default=False):
        value_mappings = build_value_mappings(grid)

    config = ConversionConfig(
        input_file=str(input_file),
        output_file=str(output_file),
        delimiter=delimiter,
        sheet=sheet,
        skip_rows=skip_rows,
        include_headers=include_headers,
        encoding=encoding,
        columns_to_remove=columns_to_remove,
        value_mappings=value_mappings,
    )

    if output_file.exists() and not overwrite:
        overwrite = typer.confirm(f"{output_file} already exists. Overwrite it?", default=False)
        if not overwrite:
            console.print("[yellow]Export cancelled.[/yellow]")
            return

    # grid already carries the removals and mappings; only serialize here
    engine = ConversionEngine(ConversionRequest(serialization=config.serialization_config()))
    result = export_csv(engine.run(grid), output_file, overwrite=overwrite)
    display_result(result)

    if typer.confirm("Would you like to save this configuration for future use?", default=True):
        name = typer.prompt("Enter a name for this configuration", default=default_config_name())
        try:
            saved = save_config(config, name)
        except WriteError as e:
            console.print(f"[red]Failed to save configuration: {e}[/red]")
            raise typer.Exit(code=1)
        console.print(f"[green]✓ Configuration saved to: {saved}[/green]")
        console.print(f"You can use it with: data-formatter exceltocsv --config={saved}")


@app.command()
def exceltocsv(
    input_file: Optional[Path] = typer.Argument(
        None,
        help="Path to the Excel file (prompted when omitted)",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        help="Path to a saved configuration file",
    ),
    sheet: Optional[str] = typer.Option(
        None,
        "--sheet",
        help="Specific sheet name to convert (default: first sheet)",
    ),
    encoding: str = typer.Option(
        "UTF-8",
        "--encoding",
        help="Output file encoding (non UTF-8 values add a byte-order mark)",
    ),
    skip_rows: int = typer.Option(
        0,
        "--skip-rows",
        min=0,
        help="Number of data rows to skip after the header",
    ),
    no_headers: bool = typer.Option(
        False,
        "--no-headers",
        help="Don't include headers in output",
    ),
    overwrite: bool = typer.Option(
        False,
        "--overwrite",
        help="Replace an existing output file without asking",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose", "-v",
        help="Show debug logging and tracebacks",
    ),
) -> None:
    """
    Convert an Excel sheet to CSV.

    With --config the saved choices are replayed without prompting.
    Otherwise every missing choice is asked for interactively, and the
    resulting configuration can be saved for reuse.
    """
    configure_logging(verbose)
    try:
        if config is not None:
            saved = _load_saved_config(config)
            if saved is not None:
                _run_saved(saved, overwrite)
                return

        _run_interactive(
            input_file,
            sheet=sheet,
            encoding=encoding,
            skip_rows=skip_rows,
            include_headers=not no_headers,
            overwrite=overwrite,
        )

    except ConversionError as e:
        console.print(f"[red]Error: {e}[/red]")
        if verbose:
            console.print_exception()
        raise typer.Exit(code=1)


@app.command()
def inspect(
    input_file: Path = typer.Argument(
        ...,
        help="Path to the Excel file",
    ),
    sheet: Optional[str] = typer.Option(
        None,
        "--sheet",
        help="Sheet name (default: first sheet)",
    ),
) -> None:
    """
    Show the sheets of a workbook and the columns of one sheet.

    Column letters and positions are the ones accepted by saved configurations.
    """
    try:
        names = list_sheet_names(input_file)
        console.print(f"[dim]Sheets: {', '.join(names)}[/dim]")
        grid = read_workbook(input_file, sheet)
        display_columns(grid, sheet or names[0])
    except ConversionError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)


@app.command("validate-config")
def validate_config(
    config: Path = typer.Argument(
        ...,
        help="Path to a saved configuration file",
    ),
) -> None:
    """
    Validate a saved configuration without converting anything.
    """
    try:
        loaded = load_config(config)
    except ConversionError as e:
        console.print(f"[red]Validation failed: {e}[/red]")
        raise typer.Exit(code=1)

    console.print("[green]✓ Configuration is valid[/green]")
    display_config_summary(loaded)
    if not Path(loaded.input_file).is_file():
        console.print(f"[yellow]Input file does not exist yet: {loaded.input_file}[/yellow]")


if __name__ == "__main__":
    app()
