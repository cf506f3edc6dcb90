"""
Interactive Prompts

Question-and-answer flow that builds a ConversionConfig while applying
column removals and value mappings to the loaded grid.
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from dfc_engine.errors import InputNotFoundError
from dfc_engine.grid import Grid
from dfc_engine.models import DEFAULT_DELIMITER, ValueMapping, normalize_delimiter
from dfc_engine.pruning import remove_columns
from dfc_engine.remapping import remap_values, unique_column_values
from dfc_io.readers import default_output_path, discover_workbooks
from dfc_ui_cli.display import column_caption, display_mapping


console = Console()


def prompt_input_file(input_file: Optional[Path], search_dir: Path = Path(".")) -> Path:
    """
    Ask for the workbook to convert, suggesting the .xlsx files of search_dir.

    A number picks the matching suggestion.
    """
    if input_file is None:
        candidates = discover_workbooks(search_dir)
        if not candidates:
            console.print("[yellow]No Excel files found in the current directory.[/yellow]")
        for number, candidate in enumerate(candidates, start=1):
            console.print(f"  [cyan]{number}[/cyan]  {candidate}")

        answer = typer.prompt(
            "Please provide the input Excel file path",
            default=str(candidates[0]) if candidates else None,
        ).strip()
        if answer.isdigit() and 1 <= int(answer) <= len(candidates):
            input_file = candidates[int(answer) - 1]
        else:
            input_file = Path(answer)

    if not input_file.is_file():
        raise InputNotFoundError(input_file)
    return input_file


def prompt_output_file(input_file: Path) -> Path:
    answer = typer.prompt(
        "Please provide the output CSV file path or keep empty to use the default",
        default=str(default_output_path(input_file)),
    )
    return Path(answer.strip())


def prompt_delimiter() -> str:
    """Ask for the delimiter; anything but one character falls back to the default."""
    answer = typer.prompt("CSV delimiter character", default=DEFAULT_DELIMITER)
    return normalize_delimiter(answer)


def choose_columns_to_remove(grid: Grid) -> list[int]:
    """Ask column by column which ones to drop, then drop them."""
    console.print("[dim]Starting column modifications...[/dim]")

    to_remove = [
        position
        for position in range(grid.width)
        if typer.confirm(f"Do you want to remove column {column_caption(grid, position)}?", default=False)
    ]
    console.print(f"{len(to_remove)} column(s) will be removed")

    remove_columns(grid, to_remove)
    return to_remove


def build_value_mappings(grid: Grid) -> list[ValueMapping]:
    """
    Ask column by column for replacement values and apply accepted mappings.

    Positions refer to the grid as it is now (after any removal).
    """
    console.print("[dim]Starting column value mapping...[/dim]")
    accepted: list[ValueMapping] = []

    for position in range(grid.width):
        caption = column_caption(grid, position)
        if not typer.confirm(f"Do you want to map values for column {caption}?", default=False):
            continue

        values = unique_column_values(grid, position)
        count = len(values)
        console.print(f"Column {caption} has {count} unique value(s)")

        new_values: dict[str, str] = {}
        for step, value in enumerate(values, start=1):
            new_values[value] = typer.prompt(
                f"Please provide the new value for {value!r} [{step}/{count}]",
                default=value,
            )

        display_mapping(new_values)
        if not typer.confirm("Do you want to apply this mapping?", default=True):
            continue

        mapping = ValueMapping(
            column_index=position,
            column_name=grid.header_name(position),
            mappings=new_values,
        )
        remap_values(grid, position, mapping.mappings)
        accepted.append(mapping)

    return accepted
