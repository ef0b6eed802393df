"""
Reporting utilities: write rendered tables to disk.

The file suffix follows ``CONFIG['FILE_EXTENSIONS']`` when ``output_path``
has none, so the same call can emit .txt, .md or .html output.
"""

import logging
from pathlib import Path
from typing import Optional

from .constants import CONFIG
from .table import TableCollection, assert_dust


def save_table(
    x,
    output_path: Path,
    print_method: Optional[str] = None,
    logger: Optional[logging.Logger] = None,
) -> Path:
    """
    Render a table and save it to a file.

    Parameters
    ----------
    x : Table or TableCollection
        Table(s) to render. Collection members are separated by a blank line.
    output_path : Path
        Destination. A missing suffix is filled in from the print method.
    print_method : str, optional
        Renderer to use; defaults to the table's own print method.
    logger : logging.Logger, optional
        Logger for progress messages (module logger when omitted).

    Returns
    -------
    Path
        Path to the written file.

    Example
    -------
    >>> tbl = sprinkle_print_method(dust(df), 'html')
    >>> save_table(tbl, Path("results/tables/mtcars"))
    PosixPath('results/tables/mtcars.html')
    """
    log = logger or logging.getLogger(__name__)
    assert_dust(x)

    if print_method is None:
        first = x[0] if isinstance(x, TableCollection) and len(x) else x
        print_method = getattr(first, 'print_method', CONFIG['DEFAULT_PRINT_METHOD'])
    text = x.render(print_method)

    output_path = Path(output_path)
    if not output_path.suffix:
        output_path = output_path.with_suffix(CONFIG['FILE_EXTENSIONS'][print_method])
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, 'w') as f:
        f.write(text)
        if not text.endswith('\n'):
            f.write('\n')

    log.info(f"Table saved to: {output_path}")
    return output_path


__all__ = [
    'save_table',
]
