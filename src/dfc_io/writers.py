"""
Delimited Text Writers

Write serialized conversions and saved configurations to disk atomically.
"""
from __future__ import annotations

import json
import logging
import os
import stat
import tempfile
from datetime import datetime
from pathlib import Path

import yaml

from dfc_engine.engine import ConversionOutput, ConversionResult
from dfc_engine.errors import WriteError
from dfc_engine.grid import Grid
from dfc_engine.models import ConversionConfig, SerializationConfig
from dfc_engine.serialization import serialize_delimited


logger = logging.getLogger(__name__)


def _target_mode(path: Path) -> int:
    """Permissions for the written file: the existing file's, else 0666 minus the umask."""
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def write_bytes_atomic(data: bytes, path: str | Path, overwrite: bool = False) -> Path:
    """
    Write bytes to a temporary file next to path, then rename it into place.

    A failed or interrupted write never leaves a truncated file at path nor
    a stray temporary file. The result gets the permissions a plain write
    would have produced.

    Raises:
        WriteError: If path exists and overwrite is False, or on any OS error
    """
    path = Path(path)
    if path.is_dir():
        raise WriteError(f"Output path is a directory: {path}", path)
    if path.exists() and not overwrite:
        raise WriteError(f"Output file already exists: {path}", path)

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
        )
    except OSError as e:
        raise WriteError(f"Cannot write to {path}: {e}", path) from e

    replaced = False
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(data)
            handle.flush()
            os.fsync(handle.fileno())
        os.chmod(tmp_name, _target_mode(path))
        os.replace(tmp_name, path)
        replaced = True
    except OSError as e:
        raise WriteError(f"Cannot write to {path}: {e}", path) from e
    finally:
        if not replaced and os.path.exists(tmp_name):
            os.unlink(tmp_name)

    return path


def write_delimited(
    grid: Grid,
    path: str | Path,
    config: SerializationConfig | None = None,
    overwrite: bool = False,
) -> Path:
    """
    Serialize a grid and write it to path.

    Returns:
        The written path
    """
    data = serialize_delimited(grid, config)
    written = write_bytes_atomic(data, path, overwrite=overwrite)
    logger.info("Wrote %d bytes to %s", len(data), written)
    return written


def export_csv(output: ConversionOutput, path: str | Path, overwrite: bool = False) -> ConversionResult:
    """
    Write a serialized conversion to path.

    Returns:
        ConversionResult describing the written file
    """
    written = write_bytes_atomic(output.data, path, overwrite=overwrite)
    logger.info("Exported %d row(s) to %s", output.rows, written)
    return ConversionResult(
        output_path=written,
        rows_written=output.rows,
        columns=output.columns,
        bytes_written=len(output.data),
    )


# ============================================================================
# SAVED CONFIGURATION
# ============================================================================

CONFIG_SUFFIXES = (".json", ".yaml", ".yml")


def default_config_name(now: datetime | None = None) -> str:
    """excel_config_<YYYYmmddHHMMSS>"""
    now = now or datetime.now()
    return f"excel_config_{now.strftime('%Y%m%d%H%M%S')}"


def config_path_for(name: str | Path) -> Path:
    """Append .json unless the name already carries a config suffix."""
    path = Path(name)
    if path.suffix.lower() in CONFIG_SUFFIXES:
        return path
    return path.with_name(f"{path.name}.json")


def save_config(config: ConversionConfig, name: str | Path) -> Path:
    """
    Save a configuration for reuse with --config.

    JSON is pretty-printed with 4-space indentation; .yaml/.yml names are
    written as YAML. Existing files are replaced.

    Returns:
        The written path
    """
    path = config_path_for(name)
    data = config.model_dump(mode="json")
    if path.suffix.lower() in (".yaml", ".yml"):
        text = yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
    else:
        text = json.dumps(data, indent=4, ensure_ascii=False) + "\n"

    written = write_bytes_atomic(text.encode("utf-8"), path, overwrite=True)
    logger.info("Configuration saved to %s", written)
    return written
