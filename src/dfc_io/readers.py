"""
Input Readers

Workbook loading (openpyxl), candidate file discovery and saved
configuration parsing (JSON or YAML).
"""
from __future__ import annotations

import json
import logging
from datetime import date, datetime, time, timedelta
from pathlib import Path
from typing import Any, Optional
from zipfile import BadZipFile

import yaml
from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException
from pydantic import ValidationError

from dfc_engine.errors import InputNotFoundError, InvalidConfigError, ReaderError
from dfc_engine.grid import CellValue, Grid
from dfc_engine.models import ConversionConfig


logger = logging.getLogger(__name__)

WORKBOOK_PATTERN = "*.xlsx"
OUTPUT_PREFIX = "formatted_"

# Errors openpyxl surfaces for files it cannot parse
_WORKBOOK_ERRORS = (InvalidFileException, BadZipFile, KeyError, ValueError, TypeError)


# ============================================================================
# WORKBOOKS
# ============================================================================

def _normalize_cell(value: Any) -> CellValue:
    """Map an openpyxl cell value onto the grid's cell kinds."""
    if value is None or isinstance(value, (str, bool, int, float)):
        return value
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, timedelta):
        return str(value)
    return str(value)


def _trim_trailing_empty_rows(rows: list[list[CellValue]]) -> list[list[CellValue]]:
    end = len(rows)
    while end > 0 and all(v is None for v in rows[end - 1]):
        end -= 1
    return rows[:end]


def _open_workbook(path: Path):
    if not path.exists():
        raise InputNotFoundError(path)
    if not path.is_file():
        raise ReaderError("Input path is not a file", path)
    try:
        return load_workbook(path, read_only=True, data_only=True)
    except _WORKBOOK_ERRORS as e:
        raise ReaderError(f"Unsupported or corrupt workbook: {e}", path) from e
    except OSError as e:
        raise ReaderError(f"Cannot open workbook: {e}", path) from e


def list_sheet_names(path: str | Path) -> list[str]:
    """Sheet names of a workbook, in workbook order."""
    path = Path(path)
    wb = _open_workbook(path)
    try:
        return list(wb.sheetnames)
    finally:
        wb.close()


def read_workbook(path: str | Path, sheet: Optional[str] = None) -> Grid:
    """
    Read one sheet of an .xlsx workbook into a Grid.

    Args:
        path: Path to the workbook
        sheet: Sheet name (default: first sheet)

    Returns:
        Grid holding cached cell values; dates become ISO strings

    Raises:
        InputNotFoundError: If path does not exist
        ReaderError: If the file cannot be parsed or the sheet is missing
    """
    path = Path(path)
    wb = _open_workbook(path)
    try:
        if sheet:
            if sheet not in wb.sheetnames:
                raise ReaderError(
                    f"Sheet {sheet!r} not found; available: {', '.join(wb.sheetnames)}",
                    path,
                )
            ws = wb[sheet]
        else:
            ws = wb.worksheets[0]

        try:
            rows = [
                [_normalize_cell(v) for v in row]
                for row in ws.iter_rows(values_only=True)
            ]
        except _WORKBOOK_ERRORS as e:
            raise ReaderError(f"Cannot read sheet {ws.title!r}: {e}", path) from e
    finally:
        wb.close()

    grid = Grid.from_rows(_trim_trailing_empty_rows(rows))
    logger.info("Loaded sheet %r: %d row(s) x %d column(s)", ws.title, grid.height, grid.width)
    return grid


def discover_workbooks(directory: str | Path = ".") -> list[Path]:
    """Workbooks in a directory, sorted by name. Excel lock files are skipped."""
    directory = Path(directory)
    if not directory.is_dir():
        return []
    return sorted(
        p for p in directory.glob(WORKBOOK_PATTERN)
        if p.is_file() and not p.name.startswith("~$")
    )


def default_output_path(input_file: str | Path) -> Path:
    """formatted_<stem>.csv in the current directory."""
    return Path(f"{OUTPUT_PREFIX}{Path(input_file).stem}.csv")


# ============================================================================
# SAVED CONFIGURATION
# ============================================================================

def _parse_config_text(text: str, suffix: str) -> Any:
    if suffix in (".yaml", ".yml"):
        return yaml.safe_load(text)
    return json.loads(text)


def parse_config_dict(data: Any, path: Optional[Path] = None) -> ConversionConfig:
    """
    Validate a raw configuration object.

    Raises:
        InvalidConfigError: If data is not an object or misses required fields
    """
    if not isinstance(data, dict):
        raise InvalidConfigError("Configuration must be an object", path)
    try:
        return ConversionConfig.model_validate(data)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}"
            for err in e.errors()
        )
        raise InvalidConfigError(f"Invalid configuration: {problems}", path) from e


def load_config(path: str | Path) -> ConversionConfig:
    """
    Read a saved configuration (auto-detects JSON or YAML by suffix).

    Raises:
        InputNotFoundError: If the file does not exist
        InvalidConfigError: If it cannot be parsed or fails validation
    """
    path = Path(path)
    if not path.is_file():
        raise InputNotFoundError(path)

    try:
        text = path.read_text(encoding="utf-8")
        data = _parse_config_text(text, path.suffix.lower())
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise InvalidConfigError(f"Cannot parse configuration: {e}", path) from e

    config = parse_config_dict(data, path)
    logger.debug("Loaded configuration from %s", path)
    return config
