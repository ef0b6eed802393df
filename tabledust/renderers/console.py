"""
Console renderer: plain fixed-width text via ``pandas.DataFrame.to_string``.

The first head row labels the columns; further head rows, body rows and the
division footer follow as data rows. Divisions are separated by a blank line.
"""

from typing import List

import pandas as pd

from ..layout import Division, grid, paginate


def _rows(cells: pd.DataFrame) -> List[List[str]]:
    return [[cell['display'] for cell in row] for row in grid(cells)]


def _render_division(division: Division, n_cols: int) -> str:
    head = _rows(division.head)
    labels = head[0] if head else [''] * n_cols
    rows = head[1:] + _rows(division.body)
    if division.footer is not None:
        rows += _rows(division.footer)

    if not rows:
        return '  '.join(labels)
    frame = pd.DataFrame(rows, columns=labels)
    return frame.to_string(index=False)


def render_console(table) -> str:
    blocks = [table.caption] if table.caption else []
    for division in paginate(table):
        blocks.append(_render_division(division, table.n_cols))
    return '\n\n'.join(blocks)


__all__ = [
    'render_console',
]
