"""Tests for the sprinkle setters."""

import pytest

from tabledust import as_data_frame, dust
from tabledust.errors import (
    DimensionMismatch,
    InvalidArgumentType,
    InvalidAttributeValue,
    InvalidPart,
    InvalidSelector,
    MergeConflict,
    UnknownAttribute,
)
from tabledust.sprinkles import (
    sprinkle,
    sprinkle_align,
    sprinkle_bg,
    sprinkle_border,
    sprinkle_caption,
    sprinkle_colnames,
    sprinkle_fn,
    sprinkle_font,
    sprinkle_longtable,
    sprinkle_merge,
    sprinkle_na_string,
    sprinkle_print_method,
    sprinkle_replace,
    sprinkle_round,
    sprinkle_table,
)
from tabledust.table import TableCollection


def _expected(tbl, value, predicate):
    cells = tbl.body.cells
    return [value if predicate(r, c) else None for r, c in zip(cells['row'], cells['col'])]


class TestSprinkleBg:
    """Background colors land on exactly the selected cells."""

    def test_whole_row(self, tbl):
        out = sprinkle_bg(tbl, rows=1, bg='red')
        assert list(out.body.cells['bg']) == _expected(tbl, 'red', lambda r, c: r == 1)

    def test_row_and_columns(self, tbl):
        out = sprinkle_bg(tbl, rows=2, cols=[4, 5], bg='blue')
        assert list(out.body.cells['bg']) == _expected(
            tbl, 'blue', lambda r, c: r == 2 and c in (4, 5)
        )

    def test_fixed_pairs(self, tbl):
        out = sprinkle_bg(tbl, rows=[2, 2], cols=[4, 5], bg='transparent', fixed=True)
        assert list(out.body.cells['bg']) == _expected(
            tbl, 'transparent', lambda r, c: r == 2 and c in (4, 5)
        )

    def test_rejects_plain_data_frame(self, mtcars):
        """Only tables can be sprinkled."""
        with pytest.raises(InvalidArgumentType):
            sprinkle_bg(mtcars, bg='red')

    def test_vector_without_recycling(self, tbl):
        """Two colors for 66 cells need a recycle policy."""
        with pytest.raises(DimensionMismatch):
            sprinkle_bg(tbl, bg=['red', 'blue'])

    @pytest.mark.parametrize('bg', ['rgb(256, 256, 256)', '#ZZFFAA0A'])
    def test_invalid_color(self, tbl, bg):
        with pytest.raises(InvalidAttributeValue):
            sprinkle_bg(tbl, bg=bg)

    def test_invalid_part(self, tbl):
        with pytest.raises(InvalidPart):
            sprinkle_bg(tbl, bg='red', part='not_a_part')

    @pytest.mark.parametrize('fixed', ['yes', [True, False]])
    def test_invalid_fixed(self, tbl, fixed):
        with pytest.raises(InvalidArgumentType):
            sprinkle_bg(tbl, bg='red', fixed=fixed)

    def test_invalid_recycle(self, tbl):
        with pytest.raises(InvalidArgumentType):
            sprinkle_bg(tbl, bg='red', recycle='not_an_option')


class TestSprinkleSemantics:
    """Copy-on-write, last-write-wins, validation order and recycling."""

    def test_input_table_is_not_modified(self, tbl):
        sprinkle_bg(tbl, rows=1, bg='red')
        assert tbl.body.cells['bg'].isna().all()

    def test_table_defaults_not_shared_with_copies(self, tbl):
        """Later table defaults leave the earlier table's defaults alone."""
        first = sprinkle_table(tbl, round=1)
        second = sprinkle_table(first, round=3)
        assert as_data_frame(first)['mpg'].tolist()[0] == '21.0'
        assert as_data_frame(second)['mpg'].tolist()[0] == '21.000'
        assert tbl.defaults == {}

    def test_last_write_wins(self, tbl):
        out = sprinkle_bg(sprinkle_bg(tbl, rows=1, bg='red'), rows=1, bg='blue')
        assert out.body.get(1, 1, 'bg') == 'blue'
        assert out.body.get(1, 11, 'bg') == 'blue'

    def test_values_checked_before_indices(self, tbl):
        """A bad value is reported even when the index is also bad."""
        with pytest.raises(InvalidAttributeValue):
            sprinkle_bg(tbl, rows=99, bg='not_a_color')

    def test_part_checked_before_indices(self, tbl):
        with pytest.raises(InvalidPart):
            sprinkle_bg(tbl, rows=99, bg='red', part='nope')

    def test_recycle_rows(self, tbl):
        """Values cycle left to right, then top to bottom."""
        out = sprinkle_bg(tbl, rows=[1, 2], cols=[1, 2, 3], bg=['red', 'blue'], recycle='rows')
        got = [out.body.get(r, c, 'bg') for r in (1, 2) for c in (1, 2, 3)]
        assert got == ['red', 'blue', 'red', 'blue', 'red', 'blue']

    @pytest.mark.parametrize('recycle', ['cols', 'columns'])
    def test_recycle_cols(self, tbl, recycle):
        """Values cycle down each column in turn."""
        out = sprinkle_bg(tbl, rows=[1, 2], cols=[1, 2, 3], bg=['red', 'blue'], recycle=recycle)
        assert [out.body.get(1, c, 'bg') for c in (1, 2, 3)] == ['red'] * 3
        assert [out.body.get(2, c, 'bg') for c in (1, 2, 3)] == ['blue'] * 3

    def test_generic_dispatcher_sets_several_attributes(self, tbl):
        out = sprinkle(tbl, rows=1, cols='mpg', bold=True, halign='center', font_color='#333333')
        assert out.body.get(1, 1, 'bold') is True
        assert out.body.get(1, 1, 'halign') == 'center'
        assert out.body.get(1, 1, 'font_color') == '#333333'

    def test_unknown_attribute(self, tbl):
        with pytest.raises(UnknownAttribute):
            sprinkle(tbl, rows=1, sparkle=True)

    def test_collection_members_are_sprinkled(self, tbl):
        out = sprinkle_bg(TableCollection([tbl, tbl]), rows=1, bg='red')
        assert isinstance(out, TableCollection)
        assert [t.body.get(1, 1, 'bg') for t in out] == ['red', 'red']

    def test_head_part(self, tbl):
        out = sprinkle_font(tbl, part='head', bold=True)
        assert out.head.get(1, 5, 'bold') is True
        assert out.body.get(1, 5, 'bold') is None


class TestValueSprinkles:
    """round, replace, fn and na_string."""

    def test_round(self, tbl):
        out = sprinkle_round(tbl, cols='wt', round=1)
        frame = as_data_frame(out)
        assert frame['wt'].tolist()[:3] == ['2.6', '2.9', '2.3']

    @pytest.mark.parametrize('digits', [[1, 2], -1, 1.5])
    def test_round_must_be_single_non_negative_integer(self, tbl, digits):
        with pytest.raises(InvalidAttributeValue):
            sprinkle_round(tbl, round=digits)

    def test_replace_sets_value_and_flag(self, tbl):
        out = sprinkle_replace(tbl, rows=1, cols='mpg', replace='twenty-one')
        assert out.body.get(1, 1) == 'twenty-one'
        assert out.body.get(1, 1, 'replaced') is True

    def test_replace_skips_rounding(self, tbl):
        out = sprinkle_round(sprinkle_replace(tbl, rows=1, cols='mpg', replace='n/a'), round=2)
        assert as_data_frame(out)['mpg'].tolist()[:2] == ['n/a', '21.00']

    def test_replace_vector(self, tbl):
        out = sprinkle_replace(tbl, cols='cyl', replace=list('abcdef'))
        assert as_data_frame(out)['cyl'].tolist() == list('abcdef')

    def test_fn_then_round(self, tbl):
        out = sprinkle_round(sprinkle_fn(tbl, cols='mpg', fn=lambda v: v * 2), cols='mpg', round=0)
        assert as_data_frame(out)['mpg'].tolist()[0] == '42'

    def test_fn_must_be_callable(self, tbl):
        with pytest.raises(InvalidAttributeValue):
            sprinkle_fn(tbl, fn='upper')

    def test_na_string(self, mtcars):
        df = mtcars.copy()
        df['mpg'] = df['mpg'].astype(object)
        df.iloc[0, 0] = None
        out = sprinkle_na_string(dust(df), cols='mpg', na_string='--')
        assert as_data_frame(out)['mpg'].tolist()[:2] == ['--', '21.0']


class TestStyleSprinkles:
    """Borders, alignment and fonts."""

    def test_border_side_and_color(self, tbl):
        out = sprinkle_border(tbl, rows=1, cols=1, border='top', border_color='red')
        assert out.body.get(1, 1, 'top_border') == '1px solid red'
        assert out.body.get(1, 1, 'bottom_border') is None

    def test_border_all_sides(self, tbl):
        out = sprinkle_border(tbl, rows=1, cols=1, border_thickness=2, border_style='dashed')
        for side in ('top', 'bottom', 'left', 'right'):
            assert out.body.get(1, 1, f'{side}_border') == '2px dashed black'

    def test_border_unknown_side(self, tbl):
        with pytest.raises(InvalidAttributeValue):
            sprinkle_border(tbl, border='middle')

    def test_alignment_domain(self, tbl):
        with pytest.raises(InvalidAttributeValue):
            sprinkle_align(tbl, halign='middle')
        out = sprinkle_align(tbl, valign='middle')
        assert out.body.get(3, 3, 'valign') == 'middle'

    def test_font_checks(self, tbl):
        with pytest.raises(InvalidAttributeValue):
            sprinkle_font(tbl, bold='yes')
        with pytest.raises(InvalidAttributeValue):
            sprinkle_font(tbl, font_size=0)
        out = sprinkle_font(tbl, rows=1, font_size=12, font_size_units='pt')
        assert out.body.get(1, 1, 'font_size') == 12
        assert out.body.get(1, 1, 'font_size_units') == 'pt'


class TestSprinkleMerge:
    """Merge declarations on rectangular blocks."""

    def test_merge_records_group(self, tbl):
        out = sprinkle_merge(tbl, rows=[1, 2], cols=[1, 2], merge_rowval=2)
        groups = {out.body.get(r, c, 'merge_group') for r in (1, 2) for c in (1, 2)}
        assert groups == {1}
        assert out.body.get(1, 1, 'merge_rowval') == 2
        assert out.body.get(3, 3, 'merge_group') is None

    def test_non_contiguous_block(self, tbl):
        with pytest.raises(InvalidSelector):
            sprinkle_merge(tbl, rows=[1, 3], cols=[1, 2])

    def test_overlapping_merge(self, tbl):
        out = sprinkle_merge(tbl, rows=[1, 2], cols=[1, 2])
        with pytest.raises(MergeConflict):
            sprinkle_merge(out, rows=[2, 3], cols=[2, 3])

    def test_same_block_is_replaced(self, tbl):
        out = sprinkle_merge(tbl, rows=[1, 2], cols=[1, 2])
        out = sprinkle_merge(out, rows=[1, 2], cols=[1, 2], merge_colval=2)
        assert out.body.get(2, 2, 'merge_colval') == 2

    def test_merge_false_dissolves(self, tbl):
        out = sprinkle_merge(tbl, rows=[1, 2], cols=[1, 2])
        out = sprinkle_merge(out, rows=1, cols=1, merge=False)
        assert out.body.cells['merge_group'].isna().all()

    def test_anchor_requires_merge(self, tbl):
        with pytest.raises(InvalidAttributeValue):
            sprinkle(tbl, rows=[1, 2], cols=[1, 2], merge_rowval=2)

    def test_anchor_outside_block(self, tbl):
        with pytest.raises(InvalidAttributeValue):
            sprinkle_merge(tbl, rows=[1, 2], cols=[1, 2], merge_colval=3)


class TestTableOptions:
    """Table-wide defaults and options."""

    def test_defaults_yield_to_cell_values(self, tbl):
        out = sprinkle_round(sprinkle_table(tbl, round=1), cols='mpg', round=2)
        frame = as_data_frame(out)
        assert frame['mpg'].tolist()[0] == '21.00'
        assert frame['wt'].tolist()[0] == '2.6'

    def test_defaults_limited_to_columns(self, tbl):
        out = sprinkle_table(tbl, cols=['mpg', 'wt'], bold=True)
        assert out.defaults['bold'] == {1: True, 6: True}

    def test_cell_only_attributes_rejected(self, tbl):
        with pytest.raises(UnknownAttribute):
            sprinkle_table(tbl, replace='x')

    def test_longtable(self, tbl):
        assert sprinkle_longtable(tbl).longtable == 25
        assert sprinkle_longtable(tbl, 4).longtable == 4
        assert sprinkle_longtable(tbl, False).longtable is False
        with pytest.raises(InvalidAttributeValue):
            sprinkle_longtable(tbl, 0)
        with pytest.raises(InvalidAttributeValue):
            sprinkle_table(tbl, longtable='yes')

    def test_print_method(self, tbl):
        assert sprinkle_print_method(tbl, 'html').print_method == 'html'
        with pytest.raises(InvalidAttributeValue):
            sprinkle_print_method(tbl, 'latex')

    def test_caption(self, tbl):
        assert sprinkle_caption(tbl, 'Motor Trend cars').caption == 'Motor Trend cars'
        assert sprinkle_table(tbl, caption='Cars').caption == 'Cars'

    def test_colnames(self, tbl):
        out = sprinkle_colnames(tbl, mpg='Miles/gallon')
        assert out.head.get(1, 1) == 'Miles/gallon'
        assert out.head.get(1, 2) == 'cyl'
        with pytest.raises(InvalidArgumentType):
            sprinkle_colnames(tbl, 'a', 'b')
