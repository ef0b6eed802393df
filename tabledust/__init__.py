"""
tabledust: cell-level styling for data frames and model summaries.

This package provides:
- constants: CONFIG dictionary with parts, options and attribute domains
- errors: exception taxonomy (all derive from DustError)
- table: Table / TableCollection construction (dust, redust)
- indices: row/column selector resolution
- sprinkles: attribute setters (bg, round, border, merge, ...)
- layout: display strings, merged-cell geometry and pagination
- renderers: console, Markdown and HTML output
- tidy_utils: statsmodels fits as term tables and fit statistics
- formatters / report_utils: cell formatters and saving rendered tables

Example Usage
-------------
>>> from tabledust import dust, sprinkle, sprinkle_round
>>> tbl = dust(df)
>>> tbl = sprinkle(tbl, rows=[1, 2], cols='mpg', bg='lightblue', bold=True)
>>> tbl = sprinkle_round(tbl, cols=['wt', 'qsec'], round=2)
>>> print(tbl.render('markdown'))
"""

__version__ = "0.1.0"

# Configuration
from .constants import CONFIG

# Errors
from .errors import (
    DustError,
    InvalidArgumentType,
    InvalidPart,
    InvalidIndex,
    OutOfBounds,
    InvalidSelector,
    DimensionMismatch,
    InvalidAttributeValue,
    UnknownAttribute,
    MergeConflict,
)

# Tables
from .table import Table, TableCollection, dust, redust, as_data_frame
from .indices import index_to_sprinkle, resolve

# Sprinkles
from .sprinkles import (
    sprinkle,
    sprinkle_bg,
    sprinkle_round,
    sprinkle_border,
    sprinkle_align,
    sprinkle_font,
    sprinkle_replace,
    sprinkle_fn,
    sprinkle_merge,
    sprinkle_pad,
    sprinkle_width,
    sprinkle_height,
    sprinkle_na_string,
    sprinkle_rotate_degree,
    sprinkle_table,
    sprinkle_longtable,
    sprinkle_print_method,
    sprinkle_caption,
    sprinkle_colnames,
)

# Layout and output
from .layout import paginate
from .renderers import render
from .report_utils import save_table
from .formatters import pval_string, significance_stars
from .logging_utils import setup_logging

__all__ = [
    # Configuration
    'CONFIG',
    # Errors
    'DustError',
    'InvalidArgumentType',
    'InvalidPart',
    'InvalidIndex',
    'OutOfBounds',
    'InvalidSelector',
    'DimensionMismatch',
    'InvalidAttributeValue',
    'UnknownAttribute',
    'MergeConflict',
    # Tables
    'Table',
    'TableCollection',
    'dust',
    'redust',
    'as_data_frame',
    'index_to_sprinkle',
    'resolve',
    # Sprinkles
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
    # Layout and output
    'paginate',
    'render',
    'save_table',
    'pval_string',
    'significance_stars',
    'setup_logging',
]
