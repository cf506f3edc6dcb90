"""
Unit Tests for conversion models
"""
import logging

import pytest
from pydantic import ValidationError

from dfc_engine.errors import InvalidDelimiterError
from dfc_engine.models import (
    ConversionConfig,
    ConversionRequest,
    SerializationConfig,
    ValueMapping,
    check_delimiter,
    normalize_delimiter,
)


class TestDelimiter:

    def test_check_accepts_single_char(self):
        assert check_delimiter("\t") == "\t"

    @pytest.mark.parametrize("value", ["", ";;", None, 5])
    def test_check_rejects(self, value):
        with pytest.raises(InvalidDelimiterError):
            check_delimiter(value)

    def test_normalize_falls_back_with_warning(self, caplog):
        with caplog.at_level(logging.WARNING):
            assert normalize_delimiter("||") == ";"
        assert "single character" in caplog.text

    def test_normalize_rejects_enclosure(self):
        assert normalize_delimiter('"') == ";"

    def test_normalize_keeps_valid(self):
        assert normalize_delimiter(",") == ","


class TestValueMapping:

    def test_basic(self):
        m = ValueMapping(column_index=2, column_name="Status", mappings={"yes": "Y"})
        assert m.mappings == {"yes": "Y"}

    def test_non_string_keys_and_values_coerced(self):
        m = ValueMapping(column_index=0, mappings={True: 1, 2.0: None, "x": False})
        assert m.mappings == {"TRUE": "1", "2": "", "x": "FALSE"}

    def test_negative_column_rejected(self):
        with pytest.raises(ValidationError):
            ValueMapping(column_index=-1, mappings={})

    def test_numeric_column_name(self):
        assert ValueMapping(column_index=0, column_name=2024).column_name == "2024"


class TestConversionConfig:

    def _data(self, **overrides):
        data = {"input_file": "in.xlsx", "output_file": "out.csv", "delimiter": ";"}
        data.update(overrides)
        return data

    def test_defaults(self):
        config = ConversionConfig.model_validate(self._data())
        assert config.sheet is None
        assert config.skip_rows == 0
        assert config.include_headers is True
        assert config.encoding == "UTF-8"
        assert config.columns_to_remove == []
        assert config.value_mappings == []

    @pytest.mark.parametrize("missing", ["input_file", "output_file", "delimiter"])
    def test_required_fields(self, missing):
        data = self._data()
        del data[missing]
        with pytest.raises(ValidationError):
            ConversionConfig.model_validate(data)

    def test_nulls_fall_back_to_defaults(self):
        config = ConversionConfig.model_validate(
            self._data(sheet=None, skip_rows=None, include_headers=None, encoding=None)
        )
        assert config.skip_rows == 0
        assert config.include_headers is True
        assert config.encoding == "UTF-8"

    def test_unknown_keys_ignored(self):
        config = ConversionConfig.model_validate(self._data(extra="ignored"))
        assert not hasattr(config, "extra")

    def test_to_request(self):
        config = ConversionConfig.model_validate(self._data(
            delimiter=",",
            skip_rows=2,
            include_headers=False,
            encoding="Windows-1252",
            columns_to_remove=[3, 1],
            value_mappings=[{"column_index": 0, "column_name": "A", "mappings": {"a": "b"}}],
        ))
        request = config.to_request()
        assert isinstance(request, ConversionRequest)
        assert request.columns_to_remove == (3, 1)
        assert request.value_mappings[0].mappings == {"a": "b"}
        assert request.serialization == SerializationConfig(
            delimiter=",", skip_rows=2, include_headers=False, encoding_hint="Windows-1252"
        )

    def test_invalid_delimiter_recovered_in_request(self):
        config = ConversionConfig.model_validate(self._data(delimiter="::"))
        assert config.to_request().serialization.delimiter == ";"


class TestConversionRequest:

    def test_defaults(self):
        request = ConversionRequest()
        assert request.columns_to_remove == ()
        assert request.value_mappings == ()
        assert request.serialization == SerializationConfig()

    def test_frozen(self):
        request = ConversionRequest()
        with pytest.raises(ValidationError):
            request.columns_to_remove = (1,)
