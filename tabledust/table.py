"""
Table objects: construction, copy-on-write ownership and part replacement.

A ``Table`` owns exactly one ``TablePart`` per part name plus table-wide
options. Every sprinkle returns a new ``Table`` built from ``Table.copy()``;
the input table is never modified, so an error part-way through a chain
leaves the last successful table untouched.

A ``TableCollection`` groups several tables (e.g. one per data subset).
Sprinkle functions iterate over its members explicitly.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional, Sequence, Union

import pandas as pd

from .constants import CONFIG
from .errors import DimensionMismatch, InvalidArgumentType, InvalidPart
from .parts import TablePart
from .tidy_utils import glance_foot as build_glance_foot
from .tidy_utils import is_model_fit, tidy
from .validators import assert_part, check_longtable, check_print_method, is_scalar

logger = logging.getLogger(__name__)


class Table:
    """
    A styled table: head, body, foot and interfoot parts plus options.

    Parameters
    ----------
    head, body : TablePart
        Column labels and data cells.
    foot, interfoot : TablePart, optional
        Trailing rows; empty parts when omitted.
    defaults : dict, optional
        Lower-priority body attributes consulted when a cell has no value.
    longtable : bool or int, default=False
        Body rows per division when paginating; True uses
        ``CONFIG['DEFAULT_LONGTABLE_ROWS']``.
    print_method : str, optional
        Renderer used by ``render()``/``str()``.
    caption : str, optional
        Caption emitted by renderers that support one.

    Notes
    -----
    A Table is not safe for concurrent mutation from multiple threads
    without external synchronisation. Sprinkles never mutate their input.
    """

    def __init__(
        self,
        head: TablePart,
        body: TablePart,
        foot: Optional[TablePart] = None,
        interfoot: Optional[TablePart] = None,
        defaults: Optional[Dict[str, Any]] = None,
        longtable: Union[bool, int] = False,
        print_method: Optional[str] = None,
        caption: Optional[str] = None,
    ):
        self.head = head
        self.body = body
        self.foot = foot if foot is not None else TablePart.empty(body.col_names)
        self.interfoot = interfoot if interfoot is not None else TablePart.empty(body.col_names)
        self.defaults: Dict[str, Any] = dict(defaults or {})
        self.longtable = check_longtable(longtable)
        self.print_method = check_print_method(print_method or CONFIG['DEFAULT_PRINT_METHOD'])
        self.caption = caption

    # ------------------------------------------------------------------
    # Parts
    # ------------------------------------------------------------------

    def part(self, name: str) -> TablePart:
        return getattr(self, assert_part(name))

    @property
    def n_cols(self) -> int:
        return self.body.n_cols

    @property
    def col_names(self):
        return self.body.col_names

    def copy(self) -> 'Table':
        """Deep copy of every part and option."""
        return Table(
            head=self.head.copy(),
            body=self.body.copy(),
            foot=self.foot.copy(),
            interfoot=self.interfoot.copy(),
            defaults={name: dict(by_col) for name, by_col in self.defaults.items()},
            longtable=self.longtable,
            print_method=self.print_method,
            caption=self.caption,
        )

    # ------------------------------------------------------------------
    # Chaining
    # ------------------------------------------------------------------

    def pipe(self, func: Callable, *args, **kwargs):
        """Apply ``func(self, *args, **kwargs)``, as in ``DataFrame.pipe``."""
        return func(self, *args, **kwargs)

    def sprinkle(self, rows=None, cols=None, **kwargs) -> 'Table':
        from .sprinkles import sprinkle
        return sprinkle(self, rows=rows, cols=cols, **kwargs)

    def sprinkle_table(self, cols=None, **kwargs) -> 'Table':
        from .sprinkles import sprinkle_table
        return sprinkle_table(self, cols=cols, **kwargs)

    def redust(self, new_data, part: str = 'head') -> 'Table':
        return redust(self, new_data, part=part)

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def render(self, print_method: Optional[str] = None) -> str:
        from .renderers import render
        return render(self, print_method=print_method)

    def __str__(self) -> str:
        return self.render('console')

    def _repr_html_(self) -> str:
        return self.render('html')

    def __repr__(self) -> str:
        return (
            f"Table(body={self.body.n_rows}x{self.body.n_cols}, head={self.head.n_rows}, "
            f"foot={self.foot.n_rows}, interfoot={self.interfoot.n_rows}, "
            f"print_method={self.print_method!r})"
        )


class TableCollection(list):
    """A list of ``Table`` objects sprinkled together."""

    def render(self, print_method: Optional[str] = None) -> str:
        return '\n\n'.join(t.render(print_method) for t in self)

    def pipe(self, func: Callable, *args, **kwargs):
        return func(self, *args, **kwargs)

    def sprinkle(self, rows=None, cols=None, **kwargs) -> 'TableCollection':
        from .sprinkles import sprinkle
        return sprinkle(self, rows=rows, cols=cols, **kwargs)

    def __str__(self) -> str:
        return self.render('console')


def assert_dust(x: Any) -> None:
    """Raise unless ``x`` is a Table or TableCollection."""
    if isinstance(x, TableCollection):
        bad = [type(t).__name__ for t in x if not isinstance(t, Table)]
        if bad:
            raise InvalidArgumentType(f"TableCollection holds non-Table members: {bad}")
        return
    if not isinstance(x, Table):
        raise InvalidArgumentType(
            f"Expected a Table or TableCollection, got {type(x).__name__}. Use dust() first."
        )


# ============================================================================
# Construction
# ============================================================================

def _head_frame(col_names: Sequence[str]) -> pd.DataFrame:
    return pd.DataFrame([list(col_names)])


def _as_frame(data: Any) -> pd.DataFrame:
    if isinstance(data, pd.DataFrame):
        return data
    if isinstance(data, pd.Series):
        return data.to_frame().T
    try:
        rows = list(data)
        if rows and all(is_scalar(v) for v in rows):
            # A flat sequence is a single row
            rows = [rows]
        return pd.DataFrame(rows)
    except TypeError as e:
        raise InvalidArgumentType(
            f"Cannot build table rows from {type(data).__name__}"
        ) from e


def dust(
    obj: Any,
    *,
    descriptors: Optional[Sequence[str]] = None,
    glance_foot: bool = False,
    glance_stats: Optional[Sequence[str]] = None,
    col_pairs: int = 2,
    conf_int: bool = False,
    keep_rownames: bool = False,
    longtable: Union[bool, int] = False,
    print_method: Optional[str] = None,
    caption: Optional[str] = None,
) -> Union[Table, TableCollection]:
    """
    Build a Table from a data frame or a fitted model.

    Parameters
    ----------
    obj : pd.DataFrame, statsmodels results, or list/tuple of either
        Source data. A list/tuple yields a TableCollection.
    descriptors : sequence of str, optional
        Term descriptors for model fits (see ``tidy_utils.tidy``).
    glance_foot : bool, default=False
        Put fit statistics into the foot (model fits only).
    glance_stats : sequence of str, optional
        Fit statistics to include, in display order.
    col_pairs : int, default=2
        Name/value pairs per foot row.
    conf_int : bool, default=False
        Add confidence limits to model-fit tables.
    keep_rownames : bool, default=False
        Move the frame index into a leading column.
    longtable, print_method, caption
        Table options (see ``Table``).

    Returns
    -------
    Table or TableCollection
    """
    options = dict(
        descriptors=descriptors, glance_foot=glance_foot, glance_stats=glance_stats,
        col_pairs=col_pairs, conf_int=conf_int, keep_rownames=keep_rownames,
        longtable=longtable, print_method=print_method, caption=caption,
    )
    if isinstance(obj, (list, tuple)):
        return TableCollection(dust(member, **options) for member in obj)

    foot = None
    if is_model_fit(obj):
        df = tidy(obj, descriptors or CONFIG['DEFAULT_DESCRIPTORS'], conf_int=conf_int)
        if glance_foot:
            foot_frame = build_glance_foot(obj, df.shape[1], col_pairs, glance_stats)
            foot = TablePart.from_frame(foot_frame, [str(c) for c in df.columns])
    elif isinstance(obj, pd.DataFrame):
        df = obj.reset_index() if keep_rownames else obj
    else:
        raise InvalidArgumentType(
            f"dust() needs a DataFrame or a fitted model, got {type(obj).__name__}"
        )

    col_names = [str(c) for c in df.columns]
    table = Table(
        head=TablePart.from_frame(_head_frame(col_names), col_names),
        body=TablePart.from_frame(df, col_names),
        foot=foot,
        longtable=longtable,
        print_method=print_method,
        caption=caption,
    )
    logger.debug(f"Created {table!r}")
    return table


# ============================================================================
# Part replacement
# ============================================================================

def redust(x, new_data: Any, part: str = 'head'):
    """
    Replace one part wholesale.

    Parameters
    ----------
    x : Table or TableCollection
    new_data : pd.DataFrame, sequence of rows, or None
        New content. Its column count must match the body. ``None`` clears
        the foot or interfoot.
    part : str, default='head'
        Part to replace.

    Returns
    -------
    Table or TableCollection
        A new table; previous sprinkles on the replaced part are discarded.
    """
    assert_dust(x)
    assert_part(part)
    if isinstance(x, TableCollection):
        return TableCollection(redust(t, new_data, part) for t in x)

    out = x.copy()
    if new_data is None:
        if part in ('head', 'body'):
            raise InvalidPart(f"The {part} cannot be removed; only foot or interfoot")
        setattr(out, part, TablePart.empty(out.col_names))
        logger.debug(f"Cleared {part}")
        return out

    frame = _as_frame(new_data)
    if frame.shape[1] != x.n_cols:
        raise DimensionMismatch(
            f"New {part} has {frame.shape[1]} columns; the table has {x.n_cols}"
        )

    if part == 'body':
        col_names = [str(c) for c in frame.columns]
        out.body = TablePart.from_frame(frame, col_names)
        # Other parts keep their cells but take the new positional names
        for other in ('head', 'foot', 'interfoot'):
            p = getattr(out, other)
            p.col_names = list(col_names)
            p.cells['col_name'] = [col_names[c - 1] for c in p.cells['col']]
    else:
        setattr(out, part, TablePart.from_frame(frame, out.col_names))

    logger.debug(f"Replaced {part} with {frame.shape[0]} row(s)")
    return out


# ============================================================================
# Conversion
# ============================================================================

def as_data_frame(x: Table, formatted: bool = True) -> pd.DataFrame:
    """
    The body as a DataFrame, labelled by the first head row.

    With ``formatted=True`` cells hold their display strings (rounding,
    fn, replace and na_string applied); otherwise the raw values.
    """
    assert_dust(x)
    if isinstance(x, TableCollection):
        raise InvalidArgumentType("as_data_frame() takes a single Table")

    if formatted:
        from .layout import finalize_part
        cells = finalize_part(x, 'body')
        grid = cells['display'].to_numpy(dtype=object).reshape(x.body.n_rows, x.n_cols)
        frame = pd.DataFrame(grid)
    else:
        frame = x.body.wide('value').reset_index(drop=True)

    if x.head.n_rows:
        frame.columns = [str(v) for v in x.head.wide('value').iloc[0]]
    else:
        frame.columns = x.col_names
    return frame


__all__ = [
    'Table',
    'TableCollection',
    'assert_dust',
    'dust',
    'redust',
    'as_data_frame',
]
