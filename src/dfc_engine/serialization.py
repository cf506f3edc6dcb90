"""
Delimited Serializer

Render a Grid as delimited text: every field enclosed, enclosure characters
doubled, one line per emitted row.
"""
from __future__ import annotations

import csv
import io
import logging

import pandas as pd

from dfc_engine.grid import Grid
from dfc_engine.models import SerializationConfig


logger = logging.getLogger(__name__)

BOM_ENCODING = "utf-8-sig"
PLAIN_ENCODING = "utf-8"


def select_rows(grid: Grid, config: SerializationConfig) -> list[list[str]]:
    """
    Rows that will be emitted, as text.

    The header row is kept only when include_headers is set; skip_rows
    then drops that many leading data rows.
    """
    text_rows = grid.to_text_rows()
    if not text_rows:
        return []

    header, data = text_rows[0], text_rows[1:]
    selected = [header] if config.include_headers else []
    selected.extend(data[config.skip_rows:])
    return selected


def _create_table(rows: list[list[str]]) -> pd.DataFrame:
    """Create an all-text frame so pandas writes every value verbatim."""
    return pd.DataFrame(rows, dtype=object)


def serialize_delimited(grid: Grid, config: SerializationConfig | None = None) -> bytes:
    """
    Render a grid as delimited text.

    Every field is wrapped in the enclosure, enclosure characters inside a
    field are doubled and each line ends with the configured line ending.

    Args:
        grid: Grid to render (not modified)
        config: Formatting options (defaults: ';', '"', CRLF, headers on)

    Returns:
        Encoded output, with a UTF-8 byte-order mark when the encoding hint
        is not UTF-8
    """
    config = config or SerializationConfig()
    rows = select_rows(grid, config)

    if config.emit_bom:
        logger.warning(
            "Encoding %r requested: output stays UTF-8 with a byte-order mark",
            config.encoding_hint,
        )

    if not rows or grid.width == 0:
        text = ""
    else:
        buffer = io.StringIO()
        _create_table(rows).to_csv(
            buffer,
            sep=config.delimiter,
            quotechar=config.enclosure,
            quoting=csv.QUOTE_ALL,
            doublequote=True,
            lineterminator=config.line_ending,
            header=False,
            index=False,
        )
        text = buffer.getvalue()

    encoding = BOM_ENCODING if config.emit_bom else PLAIN_ENCODING
    return text.encode(encoding)
