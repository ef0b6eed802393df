"""
Central repository for all shared constants: parts, options and attribute domains.

All constants are exported via the CONFIG dictionary, which is the single source
of truth for all default values used by the sprinkle engine and renderers.

Usage
-----
>>> from tabledust import CONFIG
>>> print(CONFIG['PARTS'])
('head', 'body', 'foot', 'interfoot')
>>> print(CONFIG['DEFAULT_LONGTABLE_ROWS'])
25

Note: Table-wide options are set per table through ``dust(...)`` and the
table-level sprinkles. Environment overrides are only used for log verbosity.
"""

# ============================================================================
# Cell Attribute Columns (private - build CONFIG entries from these)
# ============================================================================
# Every cell record carries exactly these attribute columns. Anything else is
# rejected when written.
_CELL_ATTRIBUTES = (
    'bg',
    'round',
    'top_border',
    'bottom_border',
    'left_border',
    'right_border',
    'halign',
    'valign',
    'bold',
    'italic',
    'font_size',
    'font_size_units',
    'font_color',
    'font_family',
    'fn',
    'replaced',
    'merge',
    'merge_group',
    'merge_rowval',
    'merge_colval',
    'pad',
    'width',
    'width_units',
    'height',
    'height_units',
    'na_string',
    'rotate_degree',
)

_BORDER_SIDES = ('top', 'bottom', 'left', 'right')

# ============================================================================
# CONFIG Dictionary - All Constants in One Place
# ============================================================================

CONFIG = {
    # ========================================================================
    # Table Structure
    # ========================================================================
    'PARTS': ('head', 'body', 'foot', 'interfoot'),             # Recognised table parts
    'RECYCLE_OPTIONS': ('none', 'rows', 'cols'),                # Recycling policies
    'RECYCLE_ALIASES': {'columns': 'cols'},                     # Accepted spellings
    'CELL_FIELDS': ('row', 'col', 'col_name', 'col_class', 'value'),  # Structural columns
    'CELL_ATTRIBUTES': _CELL_ATTRIBUTES,                        # Attribute columns

    # ========================================================================
    # Output Configuration
    # ========================================================================
    'PRINT_METHODS': ('console', 'markdown', 'html'),           # Available renderers
    'DEFAULT_PRINT_METHOD': 'console',                          # Used when none is given
    'DEFAULT_LONGTABLE_ROWS': 25,                               # Division size for longtable=True
    'DEFAULT_NA_STRING': '',                                    # Display of missing values
    'FILE_EXTENSIONS': {                                        # save_table suffix per method
        'console': '.txt',
        'markdown': '.md',
        'html': '.html',
    },

    # ========================================================================
    # Attribute Domains
    # ========================================================================
    'HALIGN_OPTIONS': ('left', 'center', 'right'),
    'VALIGN_OPTIONS': ('top', 'middle', 'bottom'),
    'BORDER_SIDES': _BORDER_SIDES,
    'BORDER_STYLES': (
        'solid', 'dashed', 'dotted', 'double', 'groove',
        'ridge', 'inset', 'outset', 'hidden', 'none',
    ),
    'BORDER_UNITS': ('px', 'pt'),
    'FONT_SIZE_UNITS': ('px', 'pt', 'em', '%'),
    'SIZE_UNITS': ('px', 'pt', 'in', 'cm', '%'),                # width/height units

    # Defaults written alongside a partial sprinkle (e.g. border without color)
    'BORDER_DEFAULTS': {
        'border_color': 'black',
        'border_style': 'solid',
        'border_thickness': 1,
        'border_units': 'px',
    },

    # ========================================================================
    # Model-Fit Tables
    # ========================================================================
    'DESCRIPTORS': ('term', 'term_plain', 'level'),             # Allowed term descriptors
    'DEFAULT_DESCRIPTORS': ('term',),
    'GLANCE_STATS': (                                           # Fit statistics, display order
        'r_squared',
        'adj_r_squared',
        'sigma',
        'statistic',
        'p_value',
        'df',
        'log_lik',
        'aic',
        'bic',
        'nobs',
    ),
}

__all__ = [
    'CONFIG',
]
