"""
Index resolution: turn row/column selectors into ordered cell coordinates.

Selectors
---------
rows
    None (all rows), an int or sequence of 1-based ints, a boolean mask with
    one entry per row, a callable receiving the part's values as a frame
    (columns named after the body) and returning such a mask, or a string
    expression evaluated with ``DataFrame.eval`` on that frame.
cols
    None (all columns), an int, a column name, a sequence mixing both, a
    boolean mask with one entry per column, or a callable receiving the
    body's column metadata frame (col, col_name, col_class) and returning a
    mask. Names and metadata always come from the body, whichever part is
    targeted.

Selection
---------
fixed=False selects every combination of resolved rows and columns;
fixed=True pairs them element-wise and requires equal lengths.

Ordering follows the recycling policy: 'rows' is row-major, 'cols' is
column-major, 'none' is row-major (or the given pair order when fixed).
"""

from __future__ import annotations

import logging
from typing import Any, List, Sequence, Tuple

import numpy as np

from .errors import DimensionMismatch, InvalidArgumentType, InvalidIndex, InvalidSelector
from .parts import TablePart
from .validators import (
    as_vector,
    assert_fixed,
    assert_part,
    assert_recycle,
    is_integerish,
    is_logical_scalar,
    is_scalar,
)

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]


def _unique(values: Sequence[int]) -> List[int]:
    seen = set()
    out = []
    for v in values:
        if v not in seen:
            seen.add(v)
            out.append(v)
    return out


def _mask_to_index(mask: Any, n: int, what: str) -> List[int]:
    """1-based positions where a boolean mask of length ``n`` is True."""
    arr = np.asarray(mask)
    if arr.dtype == object and all(is_logical_scalar(v) for v in arr.reshape(-1)):
        arr = arr.astype(bool)
    if arr.dtype != bool or arr.shape != (n,):
        raise InvalidSelector(
            f"{what} selector must give a boolean mask of length {n}; "
            f"got dtype {arr.dtype} with shape {arr.shape}"
        )
    return [int(i) + 1 for i in np.flatnonzero(arr)]


def _is_mask(values: list) -> bool:
    return len(values) > 0 and all(is_logical_scalar(v) for v in values)


def _check_position(value: Any, n: int, what: str) -> int:
    if not is_integerish(value):
        raise InvalidArgumentType(f"{what} indices must be positive integers, got {value!r}")
    pos = int(value)
    if not 1 <= pos <= n:
        raise InvalidIndex(f"{what} index {pos} is out of bounds (1..{n})")
    return pos


def resolve_rows(part: TablePart, rows: Any) -> List[int]:
    """Resolve a row selector to 1-based row numbers (duplicates kept)."""
    n = part.n_rows
    if rows is None:
        return list(range(1, n + 1))

    if callable(rows):
        return _mask_to_index(rows(part.wide('value')), n, 'rows')

    if isinstance(rows, str):
        try:
            mask = part.wide('value').eval(rows)
        except (NameError, SyntaxError, KeyError, TypeError, ValueError) as e:
            raise InvalidSelector(f"Could not evaluate rows expression {rows!r}: {e}") from e
        return _mask_to_index(mask, n, 'rows')

    values = as_vector(rows)
    if _is_mask(values):
        return _mask_to_index(values, n, 'rows')
    return [_check_position(v, n, 'Row') for v in values]


def resolve_cols(body: TablePart, part: TablePart, cols: Any) -> List[int]:
    """Resolve a column selector to 1-based column numbers (duplicates kept)."""
    n = part.n_cols
    if cols is None:
        return list(range(1, n + 1))

    if callable(cols):
        return _mask_to_index(cols(body.column_frame()), n, 'cols')

    values = as_vector(cols)
    if _is_mask(values):
        return _mask_to_index(values, n, 'cols')

    out = []
    for v in values:
        if isinstance(v, str):
            if v not in body.col_names:
                raise InvalidIndex(f"Unknown column name {v!r}; columns are {body.col_names}")
            out.append(body.col_names.index(v) + 1)
        else:
            out.append(_check_position(v, n, 'Column'))
    return out


def resolve(
    table,
    part: str = 'body',
    rows: Any = None,
    cols: Any = None,
    fixed: bool = False,
    recycle: str = 'none',
) -> List[Coord]:
    """
    Resolve selectors to an ordered list of (row, col) coordinates.

    Parameters
    ----------
    table : Table
        Table whose part is targeted.
    part : str, default='body'
        One of head, body, foot, interfoot.
    rows, cols : selector, optional
        See module docstring.
    fixed : bool, default=False
        Pair rows and cols element-wise instead of crossing them.
    recycle : str, default='none'
        Ordering policy: 'none', 'rows' or 'cols' ('columns' accepted).

    Returns
    -------
    list of tuple
        Cell coordinates, 1-based.

    Raises
    ------
    InvalidPart, InvalidArgumentType, InvalidIndex, InvalidSelector, DimensionMismatch
    """
    assert_part(part)
    fixed = assert_fixed(fixed)
    recycle = assert_recycle(recycle)

    target = table.part(part)
    row_idx = resolve_rows(target, rows)
    col_idx = resolve_cols(table.body, target, cols)

    if fixed:
        if len(row_idx) != len(col_idx):
            raise DimensionMismatch(
                f"fixed=True needs rows and cols of equal length; got {len(row_idx)} and {len(col_idx)}"
            )
        coords = list(zip(row_idx, col_idx))
        if recycle == 'rows':
            coords.sort()
        elif recycle == 'cols':
            coords.sort(key=lambda rc: (rc[1], rc[0]))
    else:
        row_idx = sorted(_unique(row_idx))
        col_idx = sorted(_unique(col_idx))
        if recycle == 'cols':
            coords = [(r, c) for c in col_idx for r in row_idx]
        else:
            coords = [(r, c) for r in row_idx for c in col_idx]

    logger.debug(f"Resolved {len(coords)} cell(s) in {part} (fixed={fixed}, recycle={recycle})")
    return coords


# Name kept for readers coming from the sprinkle API
index_to_sprinkle = resolve


def recycle_values(values: Any, n: int, recycle: str = 'none') -> list:
    """
    Stretch attribute values over ``n`` ordered cells.

    A single value is broadcast. With recycle='none' the length must equal
    ``n``; with 'rows'/'cols' a shorter vector is repeated in the order the
    coordinates were resolved.
    """
    recycle = assert_recycle(recycle)
    values = [values] if is_scalar(values) else list(values)
    if n == 0:
        return []
    if len(values) == 1:
        return values * n
    if recycle == 'none':
        if len(values) != n:
            raise DimensionMismatch(
                f"Got {len(values)} values for {n} cells; use recycle='rows' or 'cols' "
                "to repeat a shorter vector"
            )
        return values
    if not values or len(values) > n:
        raise DimensionMismatch(f"Cannot recycle {len(values)} values over {n} cells")
    return [values[i % len(values)] for i in range(n)]


__all__ = [
    'resolve',
    'resolve_rows',
    'resolve_cols',
    'index_to_sprinkle',
    'recycle_values',
]
