"""
Conversion Engine

Runs the transform pipeline on a loaded grid:
prune columns -> remap values -> serialize.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from dfc_engine.grid import Grid
from dfc_engine.models import ConversionRequest
from dfc_engine.pruning import remove_columns
from dfc_engine.remapping import apply_value_mappings
from dfc_engine.serialization import select_rows, serialize_delimited


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConversionOutput:
    """Serialized export, not yet written anywhere."""
    data: bytes
    rows: int
    columns: int


@dataclass(frozen=True)
class ConversionResult:
    """Summary of one written export."""
    output_path: Path
    rows_written: int
    columns: int
    bytes_written: int


class ConversionEngine:
    """
    Applies a ConversionRequest to grids.

    The request is immutable; the grid passed to transform() is mutated in
    place and owned by the caller for the duration of one run.
    """

    def __init__(self, request: ConversionRequest | None = None):
        """
        Initialize engine with a request.

        Args:
            request: Columns to remove, value mappings and formatting options
        """
        self.request = request or ConversionRequest()

    def transform(self, grid: Grid) -> Grid:
        """
        Prune, then remap.

        Value mapping positions refer to the grid after pruning. Each step
        validates before mutating, so a failing step leaves the grid as the
        previous step produced it.
        """
        if self.request.columns_to_remove:
            logger.debug("Removing columns %s", list(self.request.columns_to_remove))
            remove_columns(grid, self.request.columns_to_remove)

        if self.request.value_mappings:
            logger.debug("Applying %d value mapping(s)", len(self.request.value_mappings))
            apply_value_mappings(grid, self.request.value_mappings)

        return grid

    def render(self, grid: Grid) -> bytes:
        """Transform and serialize the grid."""
        self.transform(grid)
        return serialize_delimited(grid, self.request.serialization)

    def run(self, grid: Grid) -> ConversionOutput:
        """
        Transform and serialize the grid.

        Returns:
            ConversionOutput with the encoded bytes and emitted row/column counts
        """
        data = self.render(grid)
        return ConversionOutput(
            data=data,
            rows=len(select_rows(grid, self.request.serialization)),
            columns=grid.width,
        )
