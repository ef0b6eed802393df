"""Tests for table construction, part replacement and conversion."""

import pandas as pd
import pytest

from tabledust import as_data_frame, dust, redust
from tabledust.errors import (
    DimensionMismatch,
    InvalidArgumentType,
    InvalidAttributeValue,
    InvalidPart,
)
from tabledust.sprinkles import sprinkle_bg, sprinkle_font
from tabledust.table import Table, TableCollection, assert_dust


class TestDust:
    """Building tables from data frames."""

    def test_parts_from_frame(self, tbl):
        assert isinstance(tbl, Table)
        assert (tbl.body.n_rows, tbl.body.n_cols) == (6, 11)
        assert tbl.head.n_rows == 1
        assert tbl.head.get(1, 1) == 'mpg'
        assert tbl.foot.is_empty
        assert tbl.interfoot.is_empty
        assert tbl.print_method == 'console'
        assert tbl.longtable is False

    def test_cell_records(self, tbl):
        """One record per cell with structural columns and unset attributes."""
        cells = tbl.body.cells
        assert len(cells) == 66
        assert list(cells.columns[:5]) == ['row', 'col', 'col_name', 'col_class', 'value']
        assert cells.iloc[12]['col_name'] == 'cyl'
        assert cells['bg'].isna().all()

    def test_keep_rownames(self, mtcars):
        out = dust(mtcars, keep_rownames=True)
        assert out.n_cols == 12
        assert out.body.get(3, 1) == 'Datsun 710'

    def test_options(self, mtcars):
        out = dust(mtcars, longtable=True, print_method='markdown', caption='Cars')
        assert out.longtable == 25
        assert out.print_method == 'markdown'
        assert out.caption == 'Cars'
        with pytest.raises(InvalidAttributeValue):
            dust(mtcars, print_method='pdf')

    def test_list_gives_collection(self, mtcars):
        out = dust([mtcars, mtcars.head(2)])
        assert isinstance(out, TableCollection)
        assert [t.body.n_rows for t in out] == [6, 2]

    def test_rejects_other_objects(self):
        with pytest.raises(InvalidArgumentType):
            dust('not a table')

    def test_assert_dust(self, tbl, mtcars):
        assert_dust(tbl)
        with pytest.raises(InvalidArgumentType):
            assert_dust(mtcars)
        with pytest.raises(InvalidArgumentType):
            assert_dust(TableCollection([tbl, mtcars]))


class TestTableOptions:
    """Options given to the Table constructor directly."""

    def test_longtable_true_uses_default_division_size(self, tbl):
        table = Table(tbl.head, tbl.body, longtable=True)
        assert table.longtable == 25

    def test_invalid_options(self, tbl):
        with pytest.raises(InvalidAttributeValue):
            Table(tbl.head, tbl.body, longtable=0)
        with pytest.raises(InvalidAttributeValue):
            Table(tbl.head, tbl.body, print_method='latex')


class TestCopy:
    """Tables own their parts."""

    def test_copy_is_independent(self, tbl):
        other = tbl.copy()
        other.body.write([(1, 1)], 'bg', ['red'])
        assert tbl.body.get(1, 1, 'bg') is None

    def test_pipe_chains_sprinkles(self, tbl):
        out = tbl.pipe(sprinkle_bg, rows=1, bg='red').pipe(sprinkle_font, rows=1, bold=True)
        assert out.body.get(1, 2, 'bg') == 'red'
        assert out.body.get(1, 2, 'bold') is True


class TestRedust:
    """Replacing whole parts."""

    def test_replace_head(self, tbl):
        styled = sprinkle_font(tbl, part='head', bold=True)
        labels = [[f'c{i}' for i in range(11)], ['' for _ in range(11)]]
        out = redust(styled, labels, part='head')
        assert out.head.n_rows == 2
        assert out.head.get(1, 1) == 'c0'
        assert out.head.cells['bold'].isna().all()

    def test_column_count_must_match(self, tbl):
        with pytest.raises(DimensionMismatch):
            redust(tbl, [['a', 'b']], part='head')

    def test_foot_and_interfoot(self, tbl):
        out = redust(tbl, pd.DataFrame([list(range(11))]), part='foot')
        assert out.foot.n_rows == 1
        out = redust(out, list(range(11)), part='interfoot')
        assert out.interfoot.n_rows == 1
        assert redust(out, None, part='foot').foot.is_empty

    def test_head_and_body_cannot_be_removed(self, tbl):
        with pytest.raises(InvalidPart):
            redust(tbl, None, part='head')
        with pytest.raises(InvalidPart):
            redust(tbl, None, part='body')

    def test_replace_body_renames_columns(self, tbl, mtcars):
        new_body = mtcars.rename(columns={'mpg': 'miles'}).head(3)
        out = redust(tbl, new_body, part='body')
        assert out.body.n_rows == 3
        assert out.col_names[0] == 'miles'
        assert out.head.col_names[0] == 'miles'
        assert out.head.get(1, 1) == 'mpg'

    def test_invalid_part(self, tbl):
        with pytest.raises(InvalidPart):
            redust(tbl, [list(range(11))], part='sidebar')


class TestAsDataFrame:
    """Converting the body back to a DataFrame."""

    def test_formatted(self, tbl):
        frame = as_data_frame(tbl)
        assert list(frame.columns)[:2] == ['mpg', 'cyl']
        assert frame.iloc[0, 0] == '21.0'
        assert frame.iloc[0, 1] == '6'

    def test_raw(self, tbl):
        frame = as_data_frame(tbl, formatted=False)
        assert frame['mpg'].tolist() == [21.0, 21.0, 22.8, 21.4, 18.7, 18.1]

    def test_uses_head_labels(self, tbl):
        out = redust(tbl, [[f'c{i}' for i in range(11)]], part='head')
        assert list(as_data_frame(out).columns)[:2] == ['c0', 'c1']

    def test_collection_rejected(self, tbl):
        with pytest.raises(InvalidArgumentType):
            as_data_frame(TableCollection([tbl]))
