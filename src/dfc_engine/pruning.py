"""
Column Pruner

Removes a set of column positions from every row of a Grid.
"""
from __future__ import annotations

import logging
from typing import Iterable

from dfc_engine.columns import label_from_index
from dfc_engine.errors import InvalidColumnIndexError
from dfc_engine.grid import Grid


logger = logging.getLogger(__name__)


def validate_positions(grid: Grid, positions: Iterable[int]) -> list[int]:
    """
    Deduplicate positions and check that each one lies inside the grid.

    Returns the unique positions in the order first supplied.

    Raises:
        InvalidColumnIndexError: For the first position outside [0, width).
    """
    unique: list[int] = []
    seen: set[int] = set()
    for position in positions:
        if not grid.has_column(position):
            raise InvalidColumnIndexError(position, grid.width)
        if position not in seen:
            seen.add(position)
            unique.append(position)
    return unique


def remove_columns(grid: Grid, positions: Iterable[int]) -> Grid:
    """
    Remove columns from every row of the grid, in place.

    Positions may repeat and come in any order. All positions are validated
    before any row is touched, so a failure leaves the grid unchanged.
    Deletion runs from the highest position down so that earlier deletions
    never shift the positions still to be removed.

    Args:
        grid: Grid to mutate
        positions: 0-based column positions to remove

    Returns:
        The same grid, narrower by the number of unique positions

    Raises:
        InvalidColumnIndexError: If any position is outside the grid width
    """
    unique = validate_positions(grid, list(positions))
    if not unique:
        return grid

    ordered = sorted(unique, reverse=True)
    for row in grid.rows:
        for position in ordered:
            if position < len(row):
                del row[position]

    logger.info(
        "Removed %d column(s): %s",
        len(ordered),
        ", ".join(label_from_index(p) for p in sorted(ordered)),
    )
    return grid
