"""
Grid Data Model

In-memory rectangular table of cell values produced by the workbook loader
and consumed by the transform and serialize stages.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional, Union

from dfc_engine.columns import label_from_index


CellValue = Union[str, int, float, bool, None]


class CellKind(str, Enum):
    """Kind of value held by a cell."""
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    EMPTY = "empty"


def cell_kind(value: CellValue) -> CellKind:
    """Classify a cell value. Booleans are checked before numbers."""
    if value is None:
        return CellKind.EMPTY
    if isinstance(value, bool):
        return CellKind.BOOLEAN
    if isinstance(value, (int, float)):
        return CellKind.NUMBER
    return CellKind.STRING


def cell_text(value: CellValue) -> str:
    """
    Canonical text form of a cell.

    Booleans render as TRUE/FALSE, empty cells as "", integral floats
    without a trailing ".0".
    """
    kind = cell_kind(value)
    if kind is CellKind.EMPTY:
        return ""
    if kind is CellKind.BOOLEAN:
        return "TRUE" if value else "FALSE"
    if kind is CellKind.NUMBER:
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        return str(value)
    return str(value)


@dataclass
class Grid:
    """
    Ordered rows of ordered cell values.

    Row 0 is the header row by convention. All rows share one width;
    use from_rows() to pad ragged input.
    """
    rows: list[list[CellValue]] = field(default_factory=list)

    @classmethod
    def from_rows(cls, rows: Iterable[Iterable[CellValue]]) -> "Grid":
        """Build a grid, padding short rows with empty cells."""
        copied = [list(row) for row in rows]
        width = max((len(row) for row in copied), default=0)
        for row in copied:
            if len(row) < width:
                row.extend([None] * (width - len(row)))
        return cls(rows=copied)

    @property
    def width(self) -> int:
        return max((len(row) for row in self.rows), default=0)

    @property
    def height(self) -> int:
        return len(self.rows)

    @property
    def header(self) -> list[CellValue]:
        return list(self.rows[0]) if self.rows else []

    @property
    def data_rows(self) -> list[list[CellValue]]:
        return self.rows[1:]

    def has_column(self, position: object) -> bool:
        if isinstance(position, bool) or not isinstance(position, int):
            return False
        return 0 <= position < self.width

    def cell(self, row: int, column: int) -> CellValue:
        """Value at (row, column); missing trailing cells read as empty."""
        values = self.rows[row]
        if column < len(values):
            return values[column]
        return None

    def column(self, position: int) -> list[CellValue]:
        """All values of one column, header included."""
        return [self.cell(r, position) for r in range(self.height)]

    def column_labels(self) -> list[str]:
        return [label_from_index(i) for i in range(self.width)]

    def header_name(self, position: int) -> Optional[str]:
        """Display name of a column: its header text, or None when blank."""
        if not self.rows:
            return None
        text = cell_text(self.cell(0, position))
        return text or None

    def to_text_rows(self) -> list[list[str]]:
        """Every cell rendered with cell_text(), padded to the grid width."""
        width = self.width
        return [
            [cell_text(self.cell(r, c)) for c in range(width)]
            for r in range(self.height)
        ]
