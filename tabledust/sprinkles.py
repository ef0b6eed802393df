"""
Sprinkles: declarative styling directives applied to resolved cells.

Every setter follows the same order of work:
1. validate the attribute values against their domain
2. validate ``part``, ``fixed`` and ``recycle``
3. resolve the target cells once (``indices.resolve``)
4. write into a copy of the table (last write wins per cell/attribute)

Setters accept a ``Table`` or a ``TableCollection``; collections are
sprinkled member by member and returned as a new collection. A value of
``None`` means "not given" and leaves the attribute untouched.

Example
-------
>>> tbl = dust(df)
>>> tbl = sprinkle(tbl, rows=[1, 2], cols='mpg', bg='lightblue', bold=True)
>>> tbl = sprinkle_round(tbl, cols=['wt', 'qsec'], round=2)
>>> tbl = sprinkle_merge(tbl, rows=[1, 2], cols=[1, 2], merge_rowval=2)
"""

from __future__ import annotations

import functools
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List

from .constants import CONFIG
from .errors import (
    InvalidArgumentType,
    InvalidAttributeValue,
    InvalidSelector,
    MergeConflict,
    UnknownAttribute,
)
from .indices import recycle_values, resolve, resolve_cols
from .parts import TablePart, is_unset
from .table import Table, TableCollection, assert_dust, redust
from .validators import (
    as_vector,
    assert_choice,
    assert_color,
    assert_fixed,
    assert_integerish,
    assert_logical,
    assert_number,
    assert_part,
    assert_recycle,
    assert_string,
    check_longtable,
    check_print_method,
    is_scalar,
)

logger = logging.getLogger(__name__)


# ============================================================================
# Argument registry
# ============================================================================

@dataclass(frozen=True)
class _Argument:
    check: Callable[[Any], Any]
    vector: bool = True     # one value per cell allowed (recycled over the selection)
    raw: bool = False       # check receives the whole value, not element-wise


def _color(name):
    return lambda v: assert_color(v, name)


def _choice(key, name):
    return lambda v: assert_choice(v, CONFIG[key], name)


def _check_sides(value) -> tuple:
    sides = as_vector(value)
    allowed = ('all',) + CONFIG['BORDER_SIDES']
    if not sides or any(s not in allowed for s in sides):
        raise InvalidAttributeValue(f"border must be a subset of {list(allowed)}, got {value!r}")
    if 'all' in sides:
        return CONFIG['BORDER_SIDES']
    return tuple(s for s in CONFIG['BORDER_SIDES'] if s in sides)


def _check_fn(value):
    if not callable(value):
        raise InvalidAttributeValue(f"fn must be callable, got {type(value).__name__}")
    return value


ARGUMENTS: Dict[str, _Argument] = {
    'bg': _Argument(_color('bg')),
    'round': _Argument(lambda v: assert_integerish(v, 'round', 0), vector=False),
    'border': _Argument(_check_sides, vector=False, raw=True),
    'border_color': _Argument(_color('border_color')),
    'border_style': _Argument(_choice('BORDER_STYLES', 'border_style')),
    'border_thickness': _Argument(lambda v: assert_number(v, 'border_thickness', 0)),
    'border_units': _Argument(_choice('BORDER_UNITS', 'border_units'), vector=False),
    'halign': _Argument(_choice('HALIGN_OPTIONS', 'halign')),
    'valign': _Argument(_choice('VALIGN_OPTIONS', 'valign')),
    'bold': _Argument(lambda v: assert_logical(v, 'bold')),
    'italic': _Argument(lambda v: assert_logical(v, 'italic')),
    'font_size': _Argument(lambda v: assert_number(v, 'font_size', 0, strict=True)),
    'font_size_units': _Argument(_choice('FONT_SIZE_UNITS', 'font_size_units'), vector=False),
    'font_color': _Argument(_color('font_color')),
    'font_family': _Argument(lambda v: assert_string(v, 'font_family')),
    'replace': _Argument(lambda v: v),
    'fn': _Argument(_check_fn, vector=False),
    'merge': _Argument(lambda v: assert_logical(v, 'merge'), vector=False),
    'merge_rowval': _Argument(lambda v: assert_integerish(v, 'merge_rowval', 1), vector=False),
    'merge_colval': _Argument(lambda v: assert_integerish(v, 'merge_colval', 1), vector=False),
    'pad': _Argument(lambda v: assert_number(v, 'pad', 0)),
    'width': _Argument(lambda v: assert_number(v, 'width', 0, strict=True)),
    'width_units': _Argument(_choice('SIZE_UNITS', 'width_units'), vector=False),
    'height': _Argument(lambda v: assert_number(v, 'height', 0, strict=True)),
    'height_units': _Argument(_choice('SIZE_UNITS', 'height_units'), vector=False),
    'na_string': _Argument(lambda v: assert_string(v, 'na_string')),
    'rotate_degree': _Argument(lambda v: assert_number(v, 'rotate_degree')),
}

_BORDER_ARGS = ('border', 'border_color', 'border_style', 'border_thickness', 'border_units')
_MERGE_ARGS = ('merge', 'merge_rowval', 'merge_colval')
# Arguments that only make sense on explicit cells, never as table defaults
_CELL_ONLY_ARGS = ('replace',) + _MERGE_ARGS


def check_attributes(attributes: Dict[str, Any], cell_only_ok: bool = True) -> Dict[str, Any]:
    """
    Validate attribute arguments; drop the ones given as None.

    Returns a dict of normalised values (lists for vector arguments).
    """
    unknown = [k for k in attributes if k not in ARGUMENTS]
    if unknown:
        raise UnknownAttribute(
            f"Unknown sprinkle(s) {unknown}; recognised: {sorted(ARGUMENTS)}"
        )
    if not cell_only_ok:
        misplaced = [k for k in attributes if k in _CELL_ONLY_ARGS and attributes[k] is not None]
        if misplaced:
            raise UnknownAttribute(f"{misplaced} cannot be set as table-wide defaults")

    checked: Dict[str, Any] = {}
    for name, value in attributes.items():
        if value is None:
            continue
        arg = ARGUMENTS[name]
        if arg.raw:
            checked[name] = arg.check(value)
        elif arg.vector:
            values = as_vector(value)
            if not values:
                raise InvalidAttributeValue(f"{name} must not be empty")
            checked[name] = [arg.check(v) for v in values]
        else:
            if not is_scalar(value):
                raise InvalidAttributeValue(f"{name} must be a single value, got {value!r}")
            checked[name] = arg.check(value)
    return checked


# ============================================================================
# Writers
# ============================================================================

def _format_border(thickness, units, style, color) -> str:
    return f"{thickness:g}{units} {style} {color}"


def attribute_columns(checked: Dict[str, Any], n: int, recycle: str) -> Dict[str, list]:
    """
    Cell columns and per-cell values produced by the checked arguments.

    Border arguments compose into the four side columns; merge and replace
    are handled separately.
    """
    columns: Dict[str, list] = {}
    for name, value in checked.items():
        if name in _BORDER_ARGS or name in _CELL_ONLY_ARGS:
            continue
        values = recycle_values(value, n, recycle) if ARGUMENTS[name].vector else [value] * n
        columns[name] = values

    if any(name in checked for name in _BORDER_ARGS):
        defaults = CONFIG['BORDER_DEFAULTS']
        sides = checked.get('border', CONFIG['BORDER_SIDES'])
        units = checked.get('border_units', defaults['border_units'])
        colors = recycle_values(checked.get('border_color', [defaults['border_color']]), n, recycle)
        styles = recycle_values(checked.get('border_style', [defaults['border_style']]), n, recycle)
        widths = recycle_values(checked.get('border_thickness', [defaults['border_thickness']]), n, recycle)
        specs = [_format_border(w, units, s, c) for w, s, c in zip(widths, styles, colors)]
        for side in sides:
            columns[f'{side}_border'] = specs
    return columns


def _next_merge_group(part: TablePart) -> int:
    groups = [int(g) for g in part.cells['merge_group'] if not is_unset(g)]
    return max(groups) + 1 if groups else 1


def _clear_merge_groups(part: TablePart, groups) -> None:
    mask = part.cells['merge_group'].isin(list(groups))
    for column in ('merge', 'merge_group', 'merge_rowval', 'merge_colval'):
        idx = part.cells.columns.get_loc(column)
        for pos in mask.to_numpy().nonzero()[0]:
            part.cells.iat[pos, idx] = None


def _apply_merge(part: TablePart, coords: List[tuple], checked: Dict[str, Any]) -> None:
    merge = checked.get('merge')
    if merge is None:
        raise InvalidAttributeValue("merge_rowval and merge_colval require merge=True")
    if not coords:
        return

    touched = {part.get(r, c, 'merge_group') for r, c in coords}
    touched = {int(g) for g in touched if not is_unset(g)}

    if not merge:
        _clear_merge_groups(part, touched)
        logger.debug(f"Dissolved merge group(s) {sorted(touched)}")
        return

    rows = sorted({r for r, _ in coords})
    cols = sorted({c for _, c in coords})
    block = {(r, c) for r in rows for c in cols}
    contiguous = (
        rows == list(range(rows[0], rows[-1] + 1))
        and cols == list(range(cols[0], cols[-1] + 1))
    )
    if not contiguous or set(coords) != block:
        raise InvalidSelector(
            f"Merged cells must form a contiguous rectangle; got rows {rows} and cols {cols}"
        )

    rowval = checked.get('merge_rowval', 1)
    colval = checked.get('merge_colval', 1)
    if rowval > len(rows) or colval > len(cols):
        raise InvalidAttributeValue(
            f"merge_rowval/merge_colval ({rowval}, {colval}) fall outside the "
            f"{len(rows)} x {len(cols)} block"
        )

    if touched:
        members = part.cells[part.cells['merge_group'].isin(list(touched))]
        existing = set(zip(members['row'], members['col']))
        if existing != block:
            raise MergeConflict(
                f"Cells in rows {rows}, cols {cols} overlap merge group(s) {sorted(touched)}"
            )
        # Same rectangle sprinkled again: the new anchor wins
        _clear_merge_groups(part, touched)

    group = _next_merge_group(part)
    ordered = sorted(block)
    n = len(ordered)
    part.write(ordered, 'merge', [True] * n)
    part.write(ordered, 'merge_group', [group] * n)
    part.write(ordered, 'merge_rowval', [rowval] * n)
    part.write(ordered, 'merge_colval', [colval] * n)
    logger.debug(f"Merge group {group}: rows {rows[0]}-{rows[-1]}, cols {cols[0]}-{cols[-1]}")


def _over_collection(func):
    """Validate ``x`` and sprinkle each member of a TableCollection in turn."""
    @functools.wraps(func)
    def wrapper(x, *args, **kwargs):
        assert_dust(x)
        if isinstance(x, TableCollection):
            return TableCollection(func(member, *args, **kwargs) for member in x)
        return func(x, *args, **kwargs)
    return wrapper


def _sprinkle(x: Table, rows, cols, part, fixed, recycle, attributes: Dict[str, Any]) -> Table:
    checked = check_attributes(attributes)
    assert_part(part)
    fixed = assert_fixed(fixed)
    recycle = assert_recycle(recycle)

    coords = resolve(x, part=part, rows=rows, cols=cols, fixed=fixed, recycle=recycle)

    out = x.copy()
    target = out.part(part)
    n = len(coords)
    for column, values in attribute_columns(checked, n, recycle).items():
        target.write(coords, column, values)

    if 'replace' in checked:
        target.write(coords, 'value', recycle_values(checked['replace'], n, recycle))
        target.write(coords, 'replaced', [True] * n)

    if any(name in checked for name in _MERGE_ARGS):
        _apply_merge(target, coords, checked)

    logger.debug(f"Sprinkled {sorted(checked)} on {n} cell(s) of {part}")
    return out


# ============================================================================
# Generic dispatcher
# ============================================================================

@_over_collection
def sprinkle(x, rows=None, cols=None, part: str = 'body', fixed: bool = False,
             recycle: str = 'none', **attributes):
    """
    Apply any number of sprinkles to one selection.

    Parameters
    ----------
    x : Table or TableCollection
    rows, cols : selector, optional
        See ``tabledust.indices``.
    part : str, default='body'
        head, body, foot or interfoot.
    fixed : bool, default=False
        Read rows/cols as coordinate pairs.
    recycle : str, default='none'
        How a vector of values is stretched over the cells: 'none', 'rows'
        (left to right, top to bottom) or 'cols' (top to bottom, left to right).
    **attributes
        Any of ``ARGUMENTS``. Unknown names raise ``UnknownAttribute``.

    Returns
    -------
    Table or TableCollection
        A new table; ``x`` is not modified.
    """
    return _sprinkle(x, rows, cols, part, fixed, recycle, attributes)


# ============================================================================
# Attribute setters
# ============================================================================

@_over_collection
def sprinkle_bg(x, rows=None, cols=None, bg=None, part='body', fixed=False, recycle='none'):
    """Background color (name, hex, rgb() or rgba())."""
    return _sprinkle(x, rows, cols, part, fixed, recycle, {'bg': bg})


@_over_collection
def sprinkle_round(x, rows=None, cols=None, round=None, part='body', fixed=False, recycle='none'):
    """Decimal places for numeric cells; a single integer >= 0."""
    return _sprinkle(x, rows, cols, part, fixed, recycle, {'round': round})


@_over_collection
def sprinkle_border(x, rows=None, cols=None, border='all', border_color=None, border_style=None,
                    border_thickness=None, border_units=None, part='body', fixed=False,
                    recycle='none'):
    """
    Cell borders.

    ``border`` picks the sides ('all', 'top', 'bottom', 'left', 'right' or a
    list of them). Missing color/style/thickness/units use
    ``CONFIG['BORDER_DEFAULTS']``.
    """
    return _sprinkle(x, rows, cols, part, fixed, recycle, {
        'border': border,
        'border_color': border_color,
        'border_style': border_style,
        'border_thickness': border_thickness,
        'border_units': border_units,
    })


@_over_collection
def sprinkle_align(x, rows=None, cols=None, halign=None, valign=None, part='body',
                   fixed=False, recycle='none'):
    """Horizontal (left/center/right) and vertical (top/middle/bottom) alignment."""
    return _sprinkle(x, rows, cols, part, fixed, recycle, {'halign': halign, 'valign': valign})


@_over_collection
def sprinkle_font(x, rows=None, cols=None, bold=None, italic=None, font_size=None,
                  font_size_units=None, font_color=None, font_family=None, part='body',
                  fixed=False, recycle='none'):
    """Font weight, style, size, color and family."""
    return _sprinkle(x, rows, cols, part, fixed, recycle, {
        'bold': bold,
        'italic': italic,
        'font_size': font_size,
        'font_size_units': font_size_units,
        'font_color': font_color,
        'font_family': font_family,
    })


@_over_collection
def sprinkle_replace(x, rows=None, cols=None, replace=None, part='body', fixed=False,
                     recycle='none'):
    """
    Overwrite cell values.

    Replaced cells skip rounding and ``fn`` when displayed. Useful for
    labels a model fit could not carry over.
    """
    return _sprinkle(x, rows, cols, part, fixed, recycle, {'replace': replace})


@_over_collection
def sprinkle_fn(x, rows=None, cols=None, fn=None, part='body', fixed=False, recycle='none'):
    """
    Format cells with ``fn(value)`` at render time.

    ``fn`` receives the raw value. A numeric result is still rounded by the
    cell's ``round`` sprinkle; a replaced cell ignores ``fn``.
    """
    return _sprinkle(x, rows, cols, part, fixed, recycle, {'fn': fn})


@_over_collection
def sprinkle_merge(x, rows=None, cols=None, merge=True, merge_rowval=None, merge_colval=None,
                   part='body', fixed=False, recycle='none'):
    """
    Merge a rectangular block of cells into one.

    ``merge_rowval``/``merge_colval`` give the position, relative to the
    block (1-based), of the cell whose value is displayed; the top-left cell
    is used by default. ``merge=False`` dissolves every merge touching the
    selection.
    """
    return _sprinkle(x, rows, cols, part, fixed, recycle, {
        'merge': merge,
        'merge_rowval': merge_rowval,
        'merge_colval': merge_colval,
    })


@_over_collection
def sprinkle_pad(x, rows=None, cols=None, pad=None, part='body', fixed=False, recycle='none'):
    """Cell padding in pixels."""
    return _sprinkle(x, rows, cols, part, fixed, recycle, {'pad': pad})


@_over_collection
def sprinkle_width(x, rows=None, cols=None, width=None, width_units=None, part='body',
                   fixed=False, recycle='none'):
    """Cell width."""
    return _sprinkle(x, rows, cols, part, fixed, recycle,
                     {'width': width, 'width_units': width_units})


@_over_collection
def sprinkle_height(x, rows=None, cols=None, height=None, height_units=None, part='body',
                    fixed=False, recycle='none'):
    """Cell height."""
    return _sprinkle(x, rows, cols, part, fixed, recycle,
                     {'height': height, 'height_units': height_units})


@_over_collection
def sprinkle_na_string(x, rows=None, cols=None, na_string=None, part='body', fixed=False,
                       recycle='none'):
    """Text displayed for missing values."""
    return _sprinkle(x, rows, cols, part, fixed, recycle, {'na_string': na_string})


@_over_collection
def sprinkle_rotate_degree(x, rows=None, cols=None, rotate_degree=None, part='body',
                           fixed=False, recycle='none'):
    """Rotate cell text (HTML only)."""
    return _sprinkle(x, rows, cols, part, fixed, recycle, {'rotate_degree': rotate_degree})


# ============================================================================
# Table-wide options
# ============================================================================

@_over_collection
def sprinkle_table(x, cols=None, round=None, longtable=None, caption=None, **attributes):
    """
    Table-wide defaults for body cells.

    Attributes set here form a lower-priority layer: a body cell uses them
    only when it has no explicit value of its own. ``cols`` limits the
    defaults to some columns; a vector of values is spread across them.

    Parameters
    ----------
    x : Table or TableCollection
    cols : selector, optional
        Body columns the defaults apply to (all when None).
    round : int, optional
        Default decimal places.
    longtable : bool or int, optional
        Paginate the body into divisions of this many rows.
    caption : str, optional
        Table caption.
    **attributes
        Any cell attribute except replace and merge.
    """
    checked = check_attributes({'round': round, **attributes}, cell_only_ok=False)
    if longtable is not None:
        longtable = check_longtable(longtable)
    if caption is not None:
        assert_string(caption, 'caption')

    col_idx = sorted(set(resolve_cols(x.body, x.body, cols)))

    out = x.copy()
    for column, values in attribute_columns(checked, len(col_idx), 'cols').items():
        out.defaults.setdefault(column, {}).update(zip(col_idx, values))
    if longtable is not None:
        out.longtable = longtable
    if caption is not None:
        out.caption = caption

    logger.debug(f"Table defaults {sorted(checked)} on {len(col_idx)} column(s)")
    return out


@_over_collection
def sprinkle_longtable(x, longtable=True):
    """Paginate the body (``True`` uses ``CONFIG['DEFAULT_LONGTABLE_ROWS']``)."""
    out = x.copy()
    out.longtable = check_longtable(longtable)
    return out


@_over_collection
def sprinkle_print_method(x, print_method='console'):
    """Renderer used by ``render()``: console, markdown or html."""
    out = x.copy()
    out.print_method = check_print_method(print_method)
    return out


@_over_collection
def sprinkle_caption(x, caption):
    out = x.copy()
    out.caption = assert_string(caption, 'caption')
    return out


@_over_collection
def sprinkle_colnames(x, *labels, **named):
    """
    Relabel columns in the first head row.

    Positional labels cover every column in order; keyword labels map body
    column names to new labels.

    Example
    -------
    >>> sprinkle_colnames(tbl, 'Term', 'Estimate', 'SE', 'T', 'P')
    >>> sprinkle_colnames(tbl, p_value='P-value')
    """
    if labels and len(labels) != x.n_cols:
        raise InvalidArgumentType(
            f"Got {len(labels)} positional labels for {x.n_cols} columns"
        )
    unknown = [k for k in named if k not in x.col_names]
    if unknown:
        raise InvalidArgumentType(f"Unknown column names {unknown}")

    current = list(x.head.wide('value').iloc[0]) if x.head.n_rows else list(x.col_names)
    new = [str(v) for v in labels] if labels else current
    for name, label in named.items():
        new[x.col_names.index(name)] = str(label)

    if not x.head.n_rows:
        return redust(x, [new], part='head')

    out = x.copy()
    coords = [(1, c) for c in range(1, x.n_cols + 1)]
    out.head.write(coords, 'value', new)
    return out


__all__ = [
    'ARGUMENTS',
    'check_attributes',
    'attribute_columns',
    'check_longtable',
    'check_print_method',
    'sprinkle',
    'sprinkle_bg',
    'sprinkle_round',
    'sprinkle_border',
    'sprinkle_align',
    'sprinkle_font',
    'sprinkle_replace',
    'sprinkle_fn',
    'sprinkle_merge',
    'sprinkle_pad',
    'sprinkle_width',
    'sprinkle_height',
    'sprinkle_na_string',
    'sprinkle_rotate_degree',
    'sprinkle_table',
    'sprinkle_longtable',
    'sprinkle_print_method',
    'sprinkle_caption',
    'sprinkle_colnames',
]
