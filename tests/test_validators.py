"""Tests for value predicates and argument assertions."""

import pytest

from tabledust.errors import DustError, InvalidArgumentType, InvalidAttributeValue, InvalidPart
from tabledust.validators import (
    as_vector,
    assert_fixed,
    assert_integerish,
    assert_number,
    assert_part,
    assert_recycle,
    is_integerish,
    is_scalar,
    is_valid_color,
)


class TestColorValidation:
    """Color strings a renderer can emit."""

    @pytest.mark.parametrize('color', [
        'red', 'LightBlue', 'transparent', '#FF0000', '#f00', '#ff000080',
        'rgb(0, 0, 0)', 'rgb(255,255,255)', 'rgba(10, 20, 30, 0.5)', 'rgba(0,0,0,1)',
    ])
    def test_accepts_valid_colors(self, color):
        """Names, hex, rgb() and rgba() are accepted."""
        assert is_valid_color(color)

    @pytest.mark.parametrize('color', [
        'rgb(256, 256, 256)', '#ZZFFAA0A', 'not_a_color', 'rgba(0, 0, 0, 1.5)',
        '#12345', 'C1', '0.5', 5, None,
    ])
    def test_rejects_invalid_colors(self, color):
        """Out-of-range channels, bad hex and non-CSS forms are rejected."""
        assert not is_valid_color(color)


class TestPredicates:
    """Scalar/vector and integer predicates."""

    def test_integerish(self):
        """Whole floats count as integers, bools do not."""
        assert is_integerish(3)
        assert is_integerish(2.0)
        assert not is_integerish(2.5)
        assert not is_integerish(True)
        assert not is_integerish('2')

    def test_scalar_and_vector(self):
        """Strings are scalars; lists and tuples are vectors."""
        assert is_scalar('red')
        assert is_scalar(3)
        assert not is_scalar(['red'])
        assert as_vector('red') == ['red']
        assert as_vector((1, 2)) == [1, 2]


class TestAssertions:
    """Assertion helpers raise the matching error type."""

    def test_part(self):
        """Unknown parts raise InvalidPart, which is also a ValueError."""
        assert assert_part('interfoot') == 'interfoot'
        with pytest.raises(InvalidPart):
            assert_part('not_a_part')
        with pytest.raises(ValueError):
            assert_part('footer')

    def test_fixed_must_be_single_logical(self):
        """fixed accepts only True or False."""
        assert assert_fixed(True) is True
        with pytest.raises(InvalidArgumentType):
            assert_fixed('yes')
        with pytest.raises(InvalidArgumentType):
            assert_fixed([True, False])

    def test_recycle_aliases(self):
        """'columns' is accepted as a spelling of 'cols'."""
        assert assert_recycle('rows') == 'rows'
        assert assert_recycle('columns') == 'cols'
        with pytest.raises(InvalidArgumentType):
            assert_recycle('not_an_option')

    def test_numeric_bounds(self):
        """Lower bounds are enforced, optionally strictly."""
        assert assert_integerish(0, 'round') == 0
        with pytest.raises(InvalidAttributeValue):
            assert_integerish(-1, 'round')
        with pytest.raises(InvalidAttributeValue):
            assert_number(0, 'width', 0, strict=True)
        assert assert_number(0, 'pad', 0) == 0

    def test_errors_share_base_class(self):
        """Every error can be caught as DustError."""
        with pytest.raises(DustError):
            assert_recycle('diagonal')
