"""
Unit Tests for the Column Index Codec
"""
import pytest
from openpyxl.utils import get_column_letter

from dfc_engine.columns import (
    index_from_label,
    label_from_index,
    label_from_index_one_based,
    resolve_column,
)
from dfc_engine.errors import InvalidArgumentError


class TestLabelFromIndex:
    """0-based conversion."""

    @pytest.mark.parametrize(
        "n, label",
        [(0, "A"), (1, "B"), (25, "Z"), (26, "AA"), (27, "AB"), (51, "AZ"), (52, "BA"), (701, "ZZ"), (702, "AAA")],
    )
    def test_known_labels(self, n, label):
        assert label_from_index(n) == label

    def test_negative_rejected(self):
        with pytest.raises(InvalidArgumentError):
            label_from_index(-1)

    def test_non_integer_rejected(self):
        with pytest.raises(InvalidArgumentError):
            label_from_index(1.5)
        with pytest.raises(InvalidArgumentError):
            label_from_index(True)


class TestLabelFromIndexOneBased:
    """1-based conversion."""

    @pytest.mark.parametrize(
        "n, label",
        [(1, "A"), (26, "Z"), (27, "AA"), (28, "AB"), (702, "ZZ"), (703, "AAA"), (16384, "XFD")],
    )
    def test_known_labels(self, n, label):
        assert label_from_index_one_based(n) == label

    def test_zero_rejected(self):
        with pytest.raises(InvalidArgumentError):
            label_from_index_one_based(0)

    def test_invalid_argument_is_value_error(self):
        with pytest.raises(ValueError):
            label_from_index_one_based(-3)


class TestShiftEquivalence:

    def test_both_forms_agree(self):
        for n in range(0, 1001):
            assert label_from_index(n) == label_from_index_one_based(n + 1)

    def test_matches_openpyxl(self):
        for n in range(0, 1001):
            assert label_from_index(n) == get_column_letter(n + 1)


class TestIndexFromLabel:

    def test_inverse_of_label_from_index(self):
        for n in range(0, 1001):
            assert index_from_label(label_from_index(n)) == n

    def test_lowercase_and_whitespace(self):
        assert index_from_label(" ab ") == 27

    def test_last_supported_label(self):
        assert index_from_label("ZZZ") == 18277

    @pytest.mark.parametrize("label", ["", "A1", "-", "Ä", "AAAA"])
    def test_invalid_labels(self, label):
        with pytest.raises(InvalidArgumentError):
            index_from_label(label)


class TestResolveColumn:

    def test_position_passes_through(self):
        assert resolve_column(3) == 3

    def test_label(self):
        assert resolve_column("C") == 2

    def test_digit_string(self):
        assert resolve_column("4") == 4

    def test_negative_position(self):
        with pytest.raises(InvalidArgumentError):
            resolve_column(-2)
