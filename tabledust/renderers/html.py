"""
HTML renderer: one ``<table>`` per division with inline CSS per cell.

Head rows go into ``<thead>``, body rows into ``<tbody>`` and the division
footer (foot or interfoot) into ``<tfoot>``. Merged regions use
``rowspan``/``colspan`` on their top-left cell; covered cells are omitted.
All text content is escaped.
"""

from __future__ import annotations

from html import escape as html_escape
from typing import Any, Dict, List, Optional

from ..layout import Division, grid, paginate
from ..parts import is_unset

def _get(cell: Dict[str, Any], name: str, default=None):
    value = cell.get(name)
    return default if is_unset(value) else value


def _number(value) -> str:
    return f"{float(value):g}"


def cell_style(cell: Dict[str, Any]) -> str:
    """
    Inline CSS declarations for one finalized cell record.

    Examples
    --------
    >>> cell_style({'bg': 'red', 'bold': True})
    'background-color:red; font-weight:bold;'
    """
    rules: List[str] = []

    bg = _get(cell, 'bg')
    if bg is not None:
        rules.append(f"background-color:{bg}")
    halign = _get(cell, 'halign')
    if halign is not None:
        rules.append(f"text-align:{halign}")
    valign = _get(cell, 'valign')
    if valign is not None:
        rules.append(f"vertical-align:{valign}")

    for side in ('top', 'bottom', 'left', 'right'):
        spec = _get(cell, f'{side}_border')
        if spec is not None:
            rules.append(f"border-{side}:{spec}")

    if _get(cell, 'bold') is True:
        rules.append("font-weight:bold")
    if _get(cell, 'italic') is True:
        rules.append("font-style:italic")
    font_size = _get(cell, 'font_size')
    if font_size is not None:
        rules.append(f"font-size:{_number(font_size)}{_get(cell, 'font_size_units', 'pt')}")
    font_color = _get(cell, 'font_color')
    if font_color is not None:
        rules.append(f"color:{font_color}")
    font_family = _get(cell, 'font_family')
    if font_family is not None:
        rules.append(f"font-family:{font_family}")

    pad = _get(cell, 'pad')
    if pad is not None:
        rules.append(f"padding:{_number(pad)}px")
    width = _get(cell, 'width')
    if width is not None:
        rules.append(f"width:{_number(width)}{_get(cell, 'width_units', 'px')}")
    height = _get(cell, 'height')
    if height is not None:
        rules.append(f"height:{_number(height)}{_get(cell, 'height_units', 'px')}")

    return ''.join(f"{rule}; " for rule in rules).rstrip()


def _cell(cell: Dict[str, Any], tag: str) -> Optional[str]:
    if cell['hidden']:
        return None
    attrs = []
    if int(cell['rowspan']) > 1:
        attrs.append(f' rowspan="{int(cell["rowspan"])}"')
    if int(cell['colspan']) > 1:
        attrs.append(f' colspan="{int(cell["colspan"])}"')
    style = cell_style(cell)
    if style:
        attrs.append(f' style="{html_escape(style)}"')

    text = html_escape(str(cell['display']))
    degree = _get(cell, 'rotate_degree')
    if degree is not None:
        text = f'<div style="transform:rotate({_number(degree)}deg);">{text}</div>'
    return f"<{tag}{''.join(attrs)}>{text}</{tag}>"


def _section(rows: List[List[Dict[str, Any]]], section: str, tag: str) -> List[str]:
    if not rows:
        return []
    lines = [f"  <{section}>"]
    for row in rows:
        cells = [c for c in (_cell(cell, tag) for cell in row) if c is not None]
        lines.append("    <tr>" + ''.join(cells) + "</tr>")
    lines.append(f"  </{section}>")
    return lines


def _render_division(division: Division, caption: Optional[str]) -> str:
    lines = ["<table>"]
    if caption:
        lines.append(f"  <caption>{html_escape(caption)}</caption>")
    lines += _section(grid(division.head), 'thead', 'th')
    lines += _section(grid(division.body), 'tbody', 'td')
    if division.footer is not None:
        lines += _section(grid(division.footer), 'tfoot', 'td')
    lines.append("</table>")
    return "\n".join(lines)


def render_html(table) -> str:
    divisions = paginate(table)
    # Caption on the first division only
    parts = [
        _render_division(division, table.caption if division.number == 1 else None)
        for division in divisions
    ]
    return "\n".join(parts)


__all__ = [
    'render_html',
    'cell_style',
]
