"""
Per-part cell store.

A ``TablePart`` keeps one record per cell in a pandas DataFrame, sorted
row-major, with the structural columns (row, col, col_name, col_class, value)
followed by one column per recognised cell attribute. Unset attributes are
``None``.

Strict behavior: attribute names outside ``CONFIG['CELL_ATTRIBUTES']`` are
rejected; coordinates outside the part raise ``InvalidIndex``.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from .constants import CONFIG
from .errors import DimensionMismatch, InvalidIndex, UnknownAttribute

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]


def is_unset(value: Any) -> bool:
    """True for None and for missing markers pandas may store (NaN, pd.NA)."""
    if value is None or value is pd.NA:
        return True
    return isinstance(value, float) and np.isnan(value)


def _column_class(series: pd.Series) -> str:
    """Short class label for a source column (used by column predicates)."""
    if pd.api.types.is_bool_dtype(series):
        return 'logical'
    if pd.api.types.is_integer_dtype(series):
        return 'integer'
    if pd.api.types.is_numeric_dtype(series):
        return 'numeric'
    if isinstance(series.dtype, pd.CategoricalDtype):
        return 'factor'
    return 'character'


class TablePart:
    """
    Cell records for one table region (head, body, foot or interfoot).

    Parameters
    ----------
    cells : pd.DataFrame
        Cell records, row-major, one per (row, col).
    col_names : list of str
        Positional column names (always the body's names).
    """

    def __init__(self, cells: pd.DataFrame, col_names: Sequence[str]):
        self.cells = cells
        self.col_names = [str(c) for c in col_names]

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_frame(cls, df: pd.DataFrame, col_names: Optional[Sequence[str]] = None) -> 'TablePart':
        """
        Build a part from a rectangular frame of values.

        Parameters
        ----------
        df : pd.DataFrame
            Source values; one table row per frame row.
        col_names : list of str, optional
            Positional names to carry. Defaults to the frame's own columns.
        """
        if col_names is None:
            col_names = [str(c) for c in df.columns]
        if len(col_names) != df.shape[1]:
            raise DimensionMismatch(
                f"Expected {len(col_names)} columns, got {df.shape[1]}"
            )

        n_rows, n_cols = df.shape
        classes = [_column_class(df.iloc[:, j]) for j in range(n_cols)]
        values = df.to_numpy(dtype=object).reshape(-1)

        cells = pd.DataFrame({
            'row': np.repeat(np.arange(1, n_rows + 1), n_cols),
            'col': np.tile(np.arange(1, n_cols + 1), n_rows),
            'col_name': np.tile(np.array(col_names, dtype=object), n_rows),
            'col_class': np.tile(np.array(classes, dtype=object), n_rows),
            'value': values,
        })
        for attribute in CONFIG['CELL_ATTRIBUTES']:
            cells[attribute] = pd.Series([None] * len(cells), dtype=object)
        return cls(cells, col_names)

    @classmethod
    def empty(cls, col_names: Sequence[str]) -> 'TablePart':
        """A part with zero rows and the given column names."""
        frame = pd.DataFrame({name: pd.Series([], dtype=object) for name in col_names})
        return cls.from_frame(frame, col_names)

    def copy(self) -> 'TablePart':
        return TablePart(self.cells.copy(deep=True), list(self.col_names))

    # ------------------------------------------------------------------
    # Shape
    # ------------------------------------------------------------------

    @property
    def n_cols(self) -> int:
        return len(self.col_names)

    @property
    def n_rows(self) -> int:
        if self.n_cols == 0:
            return 0
        return len(self.cells) // self.n_cols

    @property
    def is_empty(self) -> bool:
        return self.n_rows == 0

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------

    def positions(self, coords: Iterable[Coord]) -> List[int]:
        """Integer positions of the cell records for (row, col) pairs."""
        out = []
        for row, col in coords:
            if not (1 <= row <= self.n_rows and 1 <= col <= self.n_cols):
                raise InvalidIndex(
                    f"Cell ({row}, {col}) is outside a {self.n_rows} x {self.n_cols} part"
                )
            out.append((row - 1) * self.n_cols + (col - 1))
        return out

    def write(self, coords: Sequence[Coord], attribute: str, values: Sequence[Any]) -> None:
        """
        Write one value per coordinate into ``attribute``; last write wins.

        ``attribute`` may be any recognised cell attribute or ``'value'``.
        """
        if attribute != 'value' and attribute not in CONFIG['CELL_ATTRIBUTES']:
            raise UnknownAttribute(f"Unknown cell attribute: {attribute!r}")
        if len(values) != len(coords):
            raise DimensionMismatch(
                f"Got {len(values)} values for {len(coords)} cells"
            )
        col_idx = self.cells.columns.get_loc(attribute)
        for pos, val in zip(self.positions(coords), values):
            self.cells.iat[pos, col_idx] = val

    def get(self, row: int, col: int, attribute: str = 'value') -> Any:
        pos = self.positions([(row, col)])[0]
        return self.cells.iat[pos, self.cells.columns.get_loc(attribute)]

    def wide(self, field: str = 'value') -> pd.DataFrame:
        """Rows x columns frame of one field, named after the body's columns."""
        grid = self.cells[field].to_numpy(dtype=object).reshape(self.n_rows, self.n_cols)
        frame = pd.DataFrame(grid, columns=self.col_names, index=range(1, self.n_rows + 1))
        return frame.infer_objects()

    def column_frame(self) -> pd.DataFrame:
        """Column metadata (col, col_name, col_class), one row per column."""
        if self.is_empty:
            classes = ['character'] * self.n_cols
        else:
            classes = list(self.cells['col_class'].iloc[:self.n_cols])
        return pd.DataFrame({
            'col': range(1, self.n_cols + 1),
            'col_name': self.col_names,
            'col_class': classes,
        })

    def __repr__(self) -> str:
        return f"TablePart(n_rows={self.n_rows}, n_cols={self.n_cols})"


__all__ = [
    'TablePart',
    'is_unset',
]
