"""
Unit Tests for the Grid model
"""
from dfc_engine.grid import CellKind, Grid, cell_kind, cell_text


class TestCellKind:

    def test_kinds(self):
        assert cell_kind(None) is CellKind.EMPTY
        assert cell_kind(True) is CellKind.BOOLEAN
        assert cell_kind(0) is CellKind.NUMBER
        assert cell_kind(2.5) is CellKind.NUMBER
        assert cell_kind("x") is CellKind.STRING


class TestCellText:

    def test_booleans_are_canonical(self):
        assert cell_text(True) == "TRUE"
        assert cell_text(False) == "FALSE"

    def test_empty(self):
        assert cell_text(None) == ""

    def test_numbers(self):
        assert cell_text(3) == "3"
        assert cell_text(3.0) == "3"
        assert cell_text(2.5) == "2.5"

    def test_strings_unchanged(self):
        assert cell_text(" padded ") == " padded "


class TestGrid:

    def test_from_rows_pads_short_rows(self):
        grid = Grid.from_rows([["a", "b", "c"], ["1"], []])
        assert grid.width == 3
        assert grid.rows[1] == ["1", None, None]
        assert grid.rows[2] == [None, None, None]

    def test_from_rows_copies_input(self):
        source = [["a", "b"]]
        grid = Grid.from_rows(source)
        grid.rows[0][0] = "z"
        assert source[0][0] == "a"

    def test_empty_grid(self):
        grid = Grid.from_rows([])
        assert grid.width == 0
        assert grid.height == 0
        assert grid.header == []
        assert grid.data_rows == []

    def test_header_and_data_rows(self):
        grid = Grid.from_rows([["h1", "h2"], ["r1", "x"]])
        assert grid.header == ["h1", "h2"]
        assert grid.data_rows == [["r1", "x"]]

    def test_column_and_labels(self):
        grid = Grid.from_rows([["h1", "h2"], ["r1", True]])
        assert grid.column(1) == ["h2", True]
        assert grid.column_labels() == ["A", "B"]

    def test_cell_reads_missing_trailing_as_empty(self):
        grid = Grid(rows=[["a", "b"], ["c"]])
        assert grid.cell(1, 1) is None

    def test_has_column(self):
        grid = Grid.from_rows([["a", "b"]])
        assert grid.has_column(0)
        assert grid.has_column(1)
        assert not grid.has_column(2)
        assert not grid.has_column(-1)
        assert not grid.has_column(True)

    def test_header_name(self):
        grid = Grid.from_rows([["Name", None]])
        assert grid.header_name(0) == "Name"
        assert grid.header_name(1) is None

    def test_to_text_rows(self):
        grid = Grid.from_rows([["n", "flag"], [1.0, False], [None]])
        assert grid.to_text_rows() == [["n", "flag"], ["1", "FALSE"], ["", ""]]
