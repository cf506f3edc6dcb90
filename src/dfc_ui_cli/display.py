"""
CLI Display

Rich table formatting for terminal output.
"""
from __future__ import annotations

from typing import Mapping, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from dfc_engine.columns import label_from_index
from dfc_engine.engine import ConversionResult
from dfc_engine.grid import Grid, cell_text
from dfc_engine.models import ConversionConfig
from dfc_engine.remapping import unique_column_values


console = Console()


def display_header(title: str) -> None:
    """Display a section header."""
    console.print()
    console.print(Panel(Text(title, style="bold white"), style="blue"))


def column_caption(grid: Grid, position: int) -> str:
    """'B (Status)' style caption for prompts."""
    name = grid.header_name(position)
    label = label_from_index(position)
    return f"{label} ({name})" if name else label


def display_columns(grid: Grid, sheet_name: Optional[str] = None) -> None:
    """Display header cells with their position and letter label."""
    title = f"Columns of {sheet_name}" if sheet_name else "Columns"
    display_header(title)

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Column", justify="center")
    table.add_column("Header")
    table.add_column("Unique values", justify="right")

    for position, label in enumerate(grid.column_labels()):
        table.add_row(
            str(position),
            label,
            cell_text(grid.cell(0, position)) if grid.height else "",
            str(len(unique_column_values(grid, position))),
        )

    console.print(table)
    console.print(f"[dim]{max(grid.height - 1, 0)} data row(s)[/dim]")


def display_mapping(mappings: Mapping[str, str], title: Optional[str] = None) -> None:
    """Display an old -> new value table."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Old Value")
    table.add_column("New Value", style="green")

    for old, new in mappings.items():
        table.add_row(old, new)

    console.print(table)


def display_config_summary(config: ConversionConfig) -> None:
    """Display a saved configuration."""
    display_header("Saved Configuration")

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Setting", style="dim")
    table.add_column("Value")

    table.add_row("Input file", config.input_file)
    table.add_row("Output file", config.output_file)
    table.add_row("Delimiter", repr(config.delimiter))
    table.add_row("Sheet", config.sheet or "(first sheet)")
    table.add_row("Skip rows", str(config.skip_rows))
    table.add_row("Include headers", "yes" if config.include_headers else "no")
    table.add_row("Encoding", config.encoding)
    table.add_row(
        "Columns to remove",
        ", ".join(label_from_index(i) for i in sorted(set(config.columns_to_remove))) or "-",
    )
    table.add_row("Value mappings", str(len(config.value_mappings)))

    console.print(table)

    for mapping in config.value_mappings:
        name = f" ({mapping.column_name})" if mapping.column_name else ""
        display_mapping(
            mapping.mappings,
            title=f"Column {label_from_index(mapping.column_index)}{name}",
        )


def display_result(result: ConversionResult) -> None:
    console.print(
        f"[green]✓ Exported {result.rows_written} row(s) x {result.columns} column(s) "
        f"to {result.output_path}[/green]"
    )
