"""
Value Remapper

Per-column substitution of cell values through an old -> new lookup table.
Row 0 is the header and is never rewritten.
"""
from __future__ import annotations

import logging
from typing import Iterable, Mapping

from dfc_engine.columns import label_from_index
from dfc_engine.errors import InvalidColumnIndexError
from dfc_engine.grid import CellValue, Grid, cell_text
from dfc_engine.models import ValueMapping


logger = logging.getLogger(__name__)


def comparison_key(value: CellValue) -> str:
    """Lookup key of a cell: booleans as TRUE/FALSE, everything else as text."""
    return cell_text(value)


def remap_values(grid: Grid, column: int, mappings: Mapping[str, str]) -> Grid:
    """
    Replace matching values of one column in every data row, in place.

    Matched cells become string cells holding the replacement. Cells whose
    key is not in the mapping keep their value and type. Applying a mapping
    whose new values are also old keys twice is not idempotent.

    Raises:
        InvalidColumnIndexError: If column is outside the grid width
    """
    if not grid.has_column(column):
        raise InvalidColumnIndexError(column, grid.width)

    replaced = 0
    for row_index in range(1, grid.height):
        key = comparison_key(grid.cell(row_index, column))
        if key in mappings:
            row = grid.rows[row_index]
            if column >= len(row):
                row.extend([None] * (column + 1 - len(row)))
            row[column] = mappings[key]
            replaced += 1

    logger.info(
        "Column %s: replaced %d value(s) using %d mapping(s)",
        label_from_index(column),
        replaced,
        len(mappings),
    )
    return grid


def apply_value_mappings(grid: Grid, value_mappings: Iterable[ValueMapping]) -> Grid:
    """
    Apply several column mappings in order.

    Every column position is checked before the first mapping is applied.
    """
    value_mappings = list(value_mappings)
    for mapping in value_mappings:
        if not grid.has_column(mapping.column_index):
            raise InvalidColumnIndexError(mapping.column_index, grid.width)

    for mapping in value_mappings:
        remap_values(grid, mapping.column_index, mapping.mappings)
    return grid


def unique_column_values(grid: Grid, column: int) -> list[str]:
    """Distinct comparison keys of a column's data rows, in first-seen order."""
    if not grid.has_column(column):
        raise InvalidColumnIndexError(column, grid.width)

    seen: dict[str, None] = {}
    for row_index in range(1, grid.height):
        seen.setdefault(comparison_key(grid.cell(row_index, column)), None)
    return list(seen)
