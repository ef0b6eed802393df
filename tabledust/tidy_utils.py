"""
Model-fit adapters: turn statsmodels results into plain coefficient tables.

This module provides the input adapter used by ``dust()`` for fitted models:
a coefficient table (one row per term) and an ordered set of fit statistics
that can be laid out as a table foot.
"""

import logging
import math
import re
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from .constants import CONFIG
from .errors import DimensionMismatch, InvalidArgumentType, InvalidAttributeValue

logger = logging.getLogger(__name__)

# patsy names factor levels as "C(cyl)[T.6]" or "cyl[T.6]"
_LEVEL_RE = re.compile(r'^(?P<term>.+?)\[(?:T\.)?(?P<level>[^\]]*)\]$')
_CALL_RE = re.compile(r'^C\(\s*(?P<var>[^,\)]+)')

# Fit statistic -> statsmodels results attribute
_GLANCE_ATTRS = {
    'r_squared': 'rsquared',
    'adj_r_squared': 'rsquared_adj',
    'statistic': 'fvalue',
    'p_value': 'f_pvalue',
    'df': 'df_model',
    'log_lik': 'llf',
    'aic': 'aic',
    'bic': 'bic',
    'nobs': 'nobs',
}


def is_model_fit(obj) -> bool:
    """True for statsmodels-like results (params, bse and a model)."""
    return all(hasattr(obj, attr) for attr in ('params', 'bse', 'model'))


def split_term(term: str) -> Tuple[str, str]:
    """
    Split a patsy term name into its variable name and factor level.

    Examples
    --------
    >>> split_term('C(cyl)[T.6]')
    ('cyl', '6')
    >>> split_term('wt:C(am)[T.1]')
    ('wt:am', '1')
    >>> split_term('Intercept')
    ('Intercept', '')
    """
    plains: List[str] = []
    levels: List[str] = []
    for piece in term.split(':'):
        base, level = piece, ''
        match = _LEVEL_RE.match(piece)
        if match:
            base, level = match.group('term'), match.group('level')
        call = _CALL_RE.match(base)
        if call:
            base = call.group('var').strip()
        plains.append(base)
        if level:
            levels.append(level)
    return ':'.join(plains), ':'.join(levels)


def _as_array(values) -> np.ndarray:
    return np.asarray(values, dtype=float).reshape(-1)


def tidy(
    fit,
    descriptors: Sequence[str] = CONFIG['DEFAULT_DESCRIPTORS'],
    conf_int: bool = False,
    conf_level: float = 0.95,
) -> pd.DataFrame:
    """
    Build a coefficient table from a fitted statsmodels model.

    Parameters
    ----------
    fit : statsmodels results
        Any results object exposing params, bse, tvalues and pvalues.
    descriptors : sequence of str, default=('term',)
        Leading label columns, any of 'term', 'term_plain', 'level'.
    conf_int : bool, default=False
        If True, add conf_low / conf_high columns.
    conf_level : float, default=0.95
        Confidence level for the interval.

    Returns
    -------
    pd.DataFrame
        Columns: <descriptors>, estimate, std_error, statistic, p_value
        [, conf_low, conf_high]
    """
    if not is_model_fit(fit):
        raise InvalidArgumentType(f"Not a fitted model: {type(fit).__name__}")

    unknown = [d for d in descriptors if d not in CONFIG['DESCRIPTORS']]
    if unknown or not descriptors:
        raise InvalidAttributeValue(
            f"descriptors must be a non-empty subset of {list(CONFIG['DESCRIPTORS'])}, got {list(descriptors)}"
        )

    terms = [str(t) for t in fit.model.exog_names]
    split = [split_term(t) for t in terms]
    label_cols = {
        'term': terms,
        'term_plain': [plain for plain, _ in split],
        'level': [level for _, level in split],
    }

    df = pd.DataFrame({d: label_cols[d] for d in descriptors})
    df['estimate'] = _as_array(fit.params)
    df['std_error'] = _as_array(fit.bse)
    df['statistic'] = _as_array(fit.tvalues)
    df['p_value'] = _as_array(fit.pvalues)

    if conf_int:
        bounds = np.asarray(fit.conf_int(alpha=1 - conf_level), dtype=float)
        df['conf_low'] = bounds[:, 0]
        df['conf_high'] = bounds[:, 1]

    logger.debug(f"Tidied {type(fit).__name__}: {len(df)} terms")
    return df


def glance(fit, stats: Optional[Sequence[str]] = None) -> Dict[str, float]:
    """
    Ordered fit statistics available on ``fit``.

    Statistics the model does not provide are skipped when ``stats`` is None
    and raise when requested explicitly.
    """
    requested = list(stats) if stats is not None else list(CONFIG['GLANCE_STATS'])
    unknown = [s for s in requested if s not in CONFIG['GLANCE_STATS']]
    if unknown:
        raise InvalidAttributeValue(
            f"Unknown fit statistics {unknown}; choose from {list(CONFIG['GLANCE_STATS'])}"
        )

    out: Dict[str, float] = {}
    for name in requested:
        try:
            if name == 'sigma':
                value = math.sqrt(float(fit.scale))
            else:
                value = float(getattr(fit, _GLANCE_ATTRS[name]))
        except (AttributeError, NotImplementedError, TypeError, ValueError) as e:
            if stats is not None:
                raise InvalidAttributeValue(
                    f"Fit statistic {name!r} is not available for {type(fit).__name__}"
                ) from e
            continue
        out[name] = value
    return out


def glance_foot(
    fit,
    n_cols: int,
    col_pairs: int = 2,
    stats: Optional[Sequence[str]] = None,
) -> pd.DataFrame:
    """
    Lay out fit statistics as name/value pairs for a table foot.

    Statistics fill the first pair of columns top to bottom, then the next
    pair. Remaining columns are padded with empty strings.
    """
    if int(col_pairs) < 1:
        raise InvalidAttributeValue(f"col_pairs must be >= 1, got {col_pairs}")
    if 2 * col_pairs > n_cols:
        raise DimensionMismatch(
            f"{col_pairs} statistic pairs need {2 * col_pairs} columns; table has {n_cols}"
        )

    items = list(glance(fit, stats).items())
    n_rows = max(1, math.ceil(len(items) / col_pairs))
    grid = [[''] * n_cols for _ in range(n_rows)]
    for i, (name, value) in enumerate(items):
        row, pair = i % n_rows, i // n_rows
        grid[row][2 * pair] = name
        grid[row][2 * pair + 1] = value

    return pd.DataFrame(grid)


__all__ = [
    'is_model_fit',
    'split_term',
    'tidy',
    'glance',
    'glance_foot',
]
