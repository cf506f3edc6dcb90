"""
Shared fixtures: small workbooks written with openpyxl.
"""
from datetime import datetime
from pathlib import Path

import pytest
from openpyxl import Workbook


PEOPLE_ROWS = [
    ["Name", "Active", "City", "Score"],
    ["Ada", True, "London", 91],
    ["Linus", False, "Helsinki", 78.5],
    ["Grace", True, "New York", None],
]


def _write_workbook(path: Path, sheets: dict[str, list[list]]) -> Path:
    wb = Workbook()
    wb.remove(wb.active)
    for title, rows in sheets.items():
        ws = wb.create_sheet(title)
        for row in rows:
            ws.append(row)
    wb.save(path)
    return path


@pytest.fixture
def make_workbook():
    """Factory writing {sheet title: rows} to an .xlsx path."""
    return _write_workbook


@pytest.fixture
def people_rows() -> list[list]:
    return [list(row) for row in PEOPLE_ROWS]


@pytest.fixture
def people_xlsx(tmp_path: Path) -> Path:
    return _write_workbook(
        tmp_path / "people.xlsx",
        {
            "People": PEOPLE_ROWS,
            "Meta": [["Key", "Value"], ["created", datetime(2024, 1, 31, 12, 0)]],
        },
    )
