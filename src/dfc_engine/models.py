"""
Conversion Data Models

Pydantic models for value mappings, serialization options, conversion
requests and the persisted configuration record.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from dfc_engine.columns import resolve_column
from dfc_engine.errors import InvalidDelimiterError
from dfc_engine.grid import cell_text


logger = logging.getLogger(__name__)


# ============================================================================
# CONSTANTS
# ============================================================================

DEFAULT_DELIMITER = ";"
DEFAULT_ENCLOSURE = '"'
DEFAULT_LINE_ENDING = "\r\n"
DEFAULT_ENCODING = "UTF-8"


def check_delimiter(delimiter: object) -> str:
    """
    Return the delimiter if it is exactly one character.

    Raises:
        InvalidDelimiterError: Otherwise.
    """
    if not isinstance(delimiter, str) or len(delimiter) != 1:
        raise InvalidDelimiterError(delimiter)
    return delimiter


def normalize_delimiter(
    delimiter: object,
    default: str = DEFAULT_DELIMITER,
    enclosure: str = DEFAULT_ENCLOSURE,
) -> str:
    """Return a valid delimiter, substituting the default with a warning."""
    try:
        delimiter = check_delimiter(delimiter)
    except InvalidDelimiterError as e:
        logger.warning("%s. Using %r as default.", e, default)
        return default
    if delimiter == enclosure:
        logger.warning("Delimiter %r is the enclosure character. Using %r as default.", delimiter, default)
        return default
    return delimiter


def is_utf8(encoding: str) -> bool:
    normalized = encoding.strip().lower().replace("-", "").replace("_", "")
    return normalized == "utf8"


# ============================================================================
# VALUE MAPPING
# ============================================================================

class ValueMapping(BaseModel):
    """Old -> new value lookup table for one column."""
    column_index: int = Field(..., ge=0, description="0-based column position")
    column_name: Optional[str] = Field(None, description="Header text, informational only")
    mappings: dict[str, str] = Field(default_factory=dict, description="Old value -> new value")

    @field_validator("column_index", mode="before")
    @classmethod
    def resolve_column_label(cls, v: Any) -> Any:
        # "C" and 2 name the same column
        return resolve_column(v) if isinstance(v, str) else v

    @field_validator("column_name", mode="before")
    @classmethod
    def coerce_column_name(cls, v: Any) -> Any:
        if v is None or isinstance(v, str):
            return v
        return cell_text(v)

    @field_validator("mappings", mode="before")
    @classmethod
    def coerce_mappings(cls, v: Any) -> Any:
        # YAML turns "yes"/"1" into bool/int keys; compare them as cell text
        if isinstance(v, dict):
            return {cell_text(key): cell_text(value) for key, value in v.items()}
        return v


# ============================================================================
# SERIALIZATION
# ============================================================================

class SerializationConfig(BaseModel):
    """Formatting options for one delimited-text export."""
    delimiter: str = Field(DEFAULT_DELIMITER, description="Field separator (one character)")
    enclosure: str = Field(DEFAULT_ENCLOSURE, description="Quote character wrapped around every field")
    line_ending: str = Field(DEFAULT_LINE_ENDING, min_length=1, description="Line terminator")
    include_headers: bool = Field(True, description="Emit row 0")
    skip_rows: int = Field(0, ge=0, description="Leading data rows to drop")
    encoding_hint: str = Field(DEFAULT_ENCODING, description="Non UTF-8 hints add a byte-order mark")

    model_config = ConfigDict(frozen=True)

    @field_validator("delimiter")
    @classmethod
    def validate_delimiter(cls, v: str) -> str:
        return check_delimiter(v)

    @field_validator("enclosure")
    @classmethod
    def validate_enclosure(cls, v: str) -> str:
        if len(v) != 1:
            raise ValueError(f"Enclosure must be a single character, got {v!r}")
        return v

    @model_validator(mode="after")
    def validate_distinct(self) -> "SerializationConfig":
        if self.delimiter == self.enclosure:
            raise ValueError("Delimiter and enclosure must differ")
        return self

    @property
    def emit_bom(self) -> bool:
        return not is_utf8(self.encoding_hint)


# ============================================================================
# REQUEST
# ============================================================================

class ConversionRequest(BaseModel):
    """
    Everything one conversion needs besides the grid itself.

    columns_to_remove refer to the loaded grid; value_mappings refer to
    the grid after pruning.
    """
    columns_to_remove: tuple[int, ...] = Field(default_factory=tuple)
    value_mappings: tuple[ValueMapping, ...] = Field(default_factory=tuple)
    serialization: SerializationConfig = Field(default_factory=SerializationConfig)

    model_config = ConfigDict(frozen=True)


# ============================================================================
# PERSISTED CONFIGURATION
# ============================================================================

class ConversionConfig(BaseModel):
    """Saved configuration record, reusable with --config."""
    input_file: str = Field(..., description="Source workbook path")
    output_file: str = Field(..., description="Destination delimited file path")
    delimiter: str = Field(..., description="Field separator")
    sheet: Optional[str] = Field(None, description="Sheet name (default: first sheet)")
    skip_rows: int = Field(0, ge=0, description="Leading data rows to drop")
    include_headers: bool = Field(True, description="Emit the header row")
    encoding: str = Field(DEFAULT_ENCODING, description="Output encoding hint")
    columns_to_remove: list[int] = Field(default_factory=list)
    value_mappings: list[ValueMapping] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore")

    @field_validator("columns_to_remove", mode="before")
    @classmethod
    def resolve_column_labels(cls, v: Any) -> Any:
        if isinstance(v, list):
            return [resolve_column(ref) if isinstance(ref, str) else ref for ref in v]
        return v

    @field_validator("encoding", mode="before")
    @classmethod
    def default_encoding(cls, v: Any) -> Any:
        return DEFAULT_ENCODING if v is None else v

    @field_validator("skip_rows", mode="before")
    @classmethod
    def default_skip_rows(cls, v: Any) -> Any:
        return 0 if v is None else v

    @field_validator("include_headers", mode="before")
    @classmethod
    def default_include_headers(cls, v: Any) -> Any:
        return True if v is None else v

    def serialization_config(self) -> SerializationConfig:
        return SerializationConfig(
            delimiter=normalize_delimiter(self.delimiter),
            include_headers=self.include_headers,
            skip_rows=self.skip_rows,
            encoding_hint=self.encoding,
        )

    def to_request(self) -> ConversionRequest:
        return ConversionRequest(
            columns_to_remove=tuple(self.columns_to_remove),
            value_mappings=tuple(self.value_mappings),
            serialization=self.serialization_config(),
        )
