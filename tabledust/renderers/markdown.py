"""
Markdown renderer: one pipe table per division.

Column alignment comes from the first head row's ``halign``; bold and italic
cells are wrapped in ``**``/``_``. Merged cells cannot span in Markdown, so
covered cells render as empty strings.
"""

from typing import Any, Dict, List

from ..layout import Division, grid, paginate
from ..parts import is_unset

_SEPARATORS = {
    'left': ':---',
    'center': ':---:',
    'right': '---:',
}


def _text(cell: Dict[str, Any]) -> str:
    text = str(cell['display']).replace('|', '\\|').replace('\n', ' ')
    if not text:
        return text
    if cell.get('bold') is True:
        text = f'**{text}**'
    if cell.get('italic') is True:
        text = f'_{text}_'
    return text


def _line(cells: List[Dict[str, Any]]) -> str:
    return '| ' + ' | '.join(_text(c) for c in cells) + ' |'


def _separator(cells: List[Dict[str, Any]], n_cols: int) -> str:
    marks = []
    for j in range(n_cols):
        halign = cells[j].get('halign') if j < len(cells) else None
        marks.append(_SEPARATORS.get(None if is_unset(halign) else halign, '---'))
    return '|' + '|'.join(marks) + '|'


def _render_division(division: Division, n_cols: int) -> str:
    head = grid(division.head)
    first = head[0] if head else [{'display': ''} for _ in range(n_cols)]
    lines = [_line(first), _separator(first, n_cols)]
    for row in head[1:] + grid(division.body):
        lines.append(_line(row))
    if division.footer is not None:
        for row in grid(division.footer):
            lines.append(_line(row))
    return '\n'.join(lines)


def render_markdown(table) -> str:
    blocks = [f'Table: {table.caption}'] if table.caption else []
    for division in paginate(table):
        blocks.append(_render_division(division, table.n_cols))
    return '\n\n'.join(blocks)


__all__ = [
    'render_markdown',
]
