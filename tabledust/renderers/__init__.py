"""
Renderers: turn a paginated table into console, Markdown or HTML text.

Organization:
- console.py: fixed-width text (colors and borders ignored)
- markdown.py: pipe tables (alignment, bold and italic kept)
- html.py: <table> markup with inline CSS and true row/column spans

Renderers only consume ``layout.paginate`` output. Attributes a format
cannot express are silently ignored.
"""

from typing import Optional

from ..constants import CONFIG
from ..validators import assert_choice
from .console import render_console
from .html import cell_style, render_html
from .markdown import render_markdown

RENDERERS = {
    'console': render_console,
    'markdown': render_markdown,
    'html': render_html,
}


def render(table, print_method: Optional[str] = None) -> str:
    """Render ``table`` with ``print_method`` (defaults to the table's own)."""
    method = print_method or table.print_method
    assert_choice(method, CONFIG['PRINT_METHODS'], 'print_method')
    return RENDERERS[method](table)


__all__ = [
    'RENDERERS',
    'render',
    'render_console',
    'render_markdown',
    'render_html',
    'cell_style',
]
