"""
Layout resolution: display strings, merged-cell geometry and pagination.

Renderers never read a ``TablePart`` directly; they consume the frames built
here. Each finalized frame holds the cell records with
- effective attributes (explicit cell values, then table defaults for body)
- ``display``: the string shown for the cell
- ``rowspan`` / ``colspan``: span of a merge's top-left cell (1 otherwise)
- ``hidden``: True for merged cells covered by another cell

Display pipeline for one cell
-----------------------------
1. replaced cells show their value as-is
2. missing values show ``na_string``
3. ``fn(value)`` when a formatter is set
4. numbers are rounded to ``round`` decimal places when set
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from numbers import Real
from typing import Any, Dict, List, Optional, Tuple

import numpy as np
import pandas as pd

from .constants import CONFIG
from .errors import MergeConflict
from .parts import TablePart, is_unset
from .validators import assert_part, is_logical_scalar

logger = logging.getLogger(__name__)

# Attributes carried from a merge's value cell to the cell that renders it
_STYLE_ATTRIBUTES = tuple(
    a for a in CONFIG['CELL_ATTRIBUTES']
    if a not in ('merge', 'merge_group', 'merge_rowval', 'merge_colval')
)


@dataclass(frozen=True)
class MergeRegion:
    """A rectangle of merged cells within one part (1-based, inclusive)."""

    part: str
    first_row: int
    last_row: int
    first_col: int
    last_col: int
    anchor_row: int
    anchor_col: int

    @property
    def rowspan(self) -> int:
        return self.last_row - self.first_row + 1

    @property
    def colspan(self) -> int:
        return self.last_col - self.first_col + 1

    def contains(self, row: int, col: int) -> bool:
        return self.first_row <= row <= self.last_row and self.first_col <= col <= self.last_col

    def members(self) -> List[Tuple[int, int]]:
        return [
            (r, c)
            for r in range(self.first_row, self.last_row + 1)
            for c in range(self.first_col, self.last_col + 1)
        ]

    def overlaps(self, other: 'MergeRegion') -> bool:
        return not (
            self.last_row < other.first_row or other.last_row < self.first_row
            or self.last_col < other.first_col or other.last_col < self.first_col
        )


@dataclass
class Division:
    """One page of a paginated table: head, a slice of body rows and a footer."""

    number: int
    head: pd.DataFrame
    body: pd.DataFrame
    footer: Optional[pd.DataFrame]
    footer_kind: Optional[str]
    is_last: bool

    @property
    def body_rows(self) -> int:
        return int(self.body['row'].nunique()) if len(self.body) else 0


# ============================================================================
# Merge regions
# ============================================================================

def merge_regions(part: TablePart, part_name: str = 'body') -> List[MergeRegion]:
    """
    Merge regions declared on a part, one per merge sprinkle.

    Raises
    ------
    MergeConflict
        If a group is not a full rectangle or two regions overlap.
    """
    cells = part.cells
    grouped = cells[cells['merge_group'].map(lambda g: not is_unset(g)).astype(bool)]
    regions: List[MergeRegion] = []
    for group, members in grouped.groupby(grouped['merge_group'].astype(int), sort=True):
        rows = sorted(members['row'].unique())
        cols = sorted(members['col'].unique())
        if len(members) != len(rows) * len(cols):
            raise MergeConflict(f"Merge group {group} in {part_name} is not a rectangle")
        first = members.iloc[0]
        rowval = int(first['merge_rowval']) if not is_unset(first['merge_rowval']) else 1
        colval = int(first['merge_colval']) if not is_unset(first['merge_colval']) else 1
        regions.append(MergeRegion(
            part=part_name,
            first_row=int(rows[0]),
            last_row=int(rows[-1]),
            first_col=int(cols[0]),
            last_col=int(cols[-1]),
            anchor_row=int(rows[0]) + rowval - 1,
            anchor_col=int(cols[0]) + colval - 1,
        ))

    for i, a in enumerate(regions):
        for b in regions[i + 1:]:
            if a.overlaps(b):
                raise MergeConflict(f"Merge regions overlap in {part_name}: {a} and {b}")
    return regions


# ============================================================================
# Display values
# ============================================================================

def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not is_logical_scalar(value)


def format_value(
    value: Any,
    round_digits: Optional[int] = None,
    fn=None,
    na_string: str = CONFIG['DEFAULT_NA_STRING'],
    replaced: bool = False,
) -> str:
    """Display string for one cell (see module docstring for the order)."""
    if replaced:
        return na_string if is_unset(value) else str(value)
    if is_unset(value):
        return na_string
    if fn is not None:
        value = fn(value)
        if is_unset(value):
            return na_string
    if round_digits is not None and _is_number(value):
        if isinstance(value, float) and not np.isfinite(value):
            return str(value)
        return f"{float(value):.{int(round_digits)}f}"
    return str(value)


def _apply_defaults(cells: pd.DataFrame, defaults: Dict[str, Dict[int, Any]]) -> None:
    """Fill unset attributes from the table-wide layer, in place."""
    for attribute, by_col in defaults.items():
        if attribute not in cells.columns or not by_col:
            continue
        idx = cells.columns.get_loc(attribute)
        for pos, (current, col) in enumerate(zip(cells[attribute], cells['col'])):
            if is_unset(current) and col in by_col:
                cells.iat[pos, idx] = by_col[col]


def _attr(record: Dict[str, Any], name: str, default=None):
    value = record.get(name)
    return default if is_unset(value) else value


def display_value(cell: Dict[str, Any], defaults: Optional[Dict[str, Dict[int, Any]]] = None) -> str:
    """
    Display string for one cell record.

    ``round``, ``fn`` and ``na_string`` come from the cell first, then from
    the table defaults for the cell's column.
    """
    defaults = defaults or {}

    def lookup(name, default=None):
        value = _attr(cell, name)
        if value is None:
            value = defaults.get(name, {}).get(cell.get('col'))
        return default if is_unset(value) else value

    return format_value(
        cell['value'],
        round_digits=lookup('round'),
        fn=lookup('fn'),
        na_string=lookup('na_string', CONFIG['DEFAULT_NA_STRING']),
        replaced=bool(_attr(cell, 'replaced', False)),
    )


def finalize_part(table, part: str) -> pd.DataFrame:
    """
    Cell records of ``part`` ready for a renderer.

    Adds ``display``, ``rowspan``, ``colspan`` and ``hidden``; body cells
    without explicit attributes take the table defaults.
    """
    assert_part(part)
    source = table.part(part)
    cells = source.cells.copy()
    if part == 'body' and table.defaults:
        _apply_defaults(cells, table.defaults)

    displays = [display_value(record) for record in cells.to_dict('records')]
    cells['display'] = pd.Series(displays, index=cells.index, dtype=object)
    cells['rowspan'] = 1
    cells['colspan'] = 1
    cells['hidden'] = False

    for region in merge_regions(source, part):
        _collapse_region(cells, source.n_cols, region)

    return cells


def _collapse_region(cells: pd.DataFrame, n_cols: int, region: MergeRegion) -> None:
    """Hide a region's members and move the value cell onto its top-left cell."""
    def pos(row, col):
        return (row - 1) * n_cols + (col - 1)

    top_left = pos(region.first_row, region.first_col)
    anchor = pos(region.anchor_row, region.anchor_col)

    for name in _STYLE_ATTRIBUTES + ('display',):
        idx = cells.columns.get_loc(name)
        cells.iat[top_left, idx] = cells.iat[anchor, idx]

    hidden_idx = cells.columns.get_loc('hidden')
    display_idx = cells.columns.get_loc('display')
    for row, col in region.members():
        if (row, col) != (region.first_row, region.first_col):
            cells.iat[pos(row, col), hidden_idx] = True
            cells.iat[pos(row, col), display_idx] = ''

    cells.iat[top_left, cells.columns.get_loc('rowspan')] = region.rowspan
    cells.iat[top_left, cells.columns.get_loc('colspan')] = region.colspan


# ============================================================================
# Pagination
# ============================================================================

def _division_slice(body: pd.DataFrame, regions: List[MergeRegion], first: int, last: int) -> pd.DataFrame:
    """Body rows first..last with merge regions clipped to the slice."""
    chunk = body[(body['row'] >= first) & (body['row'] <= last)].copy()
    if not len(chunk):
        return chunk

    row_of = {(r, c): i for i, (r, c) in enumerate(zip(chunk['row'], chunk['col']))}
    cols = {name: chunk.columns.get_loc(name) for name in ('rowspan', 'hidden')}
    for region in regions:
        if region.last_row < first or region.first_row > last:
            continue
        if region.first_row >= first and region.last_row <= last:
            continue
        top = max(region.first_row, first)
        span = min(region.last_row, last) - top + 1
        pos = row_of[(top, region.first_col)]
        if region.first_row < first:
            # Region continues from the previous division: repeat its top-left cell
            original = body[(body['row'] == region.first_row) & (body['col'] == region.first_col)].iloc[0]
            for name in _STYLE_ATTRIBUTES + ('display', 'colspan'):
                chunk.iat[pos, chunk.columns.get_loc(name)] = original[name]
            chunk.iat[pos, cols['hidden']] = False
        chunk.iat[pos, cols['rowspan']] = span
    return chunk


def paginate(table) -> List[Division]:
    """
    Split the table into divisions of body rows.

    Without longtable there is one division followed by the foot. With a
    division size ``n`` the body is cut into chunks of ``n`` rows (the last
    may be shorter); the interfoot follows every division but the last and
    the foot follows the last. An empty interfoot lets the foot follow every
    division; with neither, no footer is emitted.
    """
    head = finalize_part(table, 'head')
    body = finalize_part(table, 'body')
    foot = finalize_part(table, 'foot') if not table.foot.is_empty else None
    interfoot = finalize_part(table, 'interfoot') if not table.interfoot.is_empty else None

    n_rows = table.body.n_rows
    size = table.longtable or 0
    if size and n_rows:
        chunks = [(start, min(start + size - 1, n_rows)) for start in range(1, n_rows + 1, size)]
    else:
        chunks = [(1, n_rows)]

    regions = merge_regions(table.body, 'body') if len(chunks) > 1 else []
    divisions = []
    for number, (first, last) in enumerate(chunks, start=1):
        is_last = number == len(chunks)
        if is_last:
            footer, kind = foot, 'foot'
        elif interfoot is not None:
            footer, kind = interfoot, 'interfoot'
        else:
            footer, kind = foot, 'foot'
        divisions.append(Division(
            number=number,
            head=head,
            body=_division_slice(body, regions, first, last) if regions else
            body[(body['row'] >= first) & (body['row'] <= last)],
            footer=footer,
            footer_kind=kind if footer is not None else None,
            is_last=is_last,
        ))

    logger.debug(f"Paginated {n_rows} body rows into {len(divisions)} division(s)")
    return divisions


def grid(cells: pd.DataFrame) -> List[List[Dict[str, Any]]]:
    """Group finalized cell records into rows of dicts, in row order."""
    rows: List[List[Dict[str, Any]]] = []
    for _, members in cells.groupby('row', sort=True):
        rows.append(members.sort_values('col').to_dict('records'))
    return rows


__all__ = [
    'MergeRegion',
    'Division',
    'merge_regions',
    'format_value',
    'display_value',
    'finalize_part',
    'paginate',
    'grid',
]
