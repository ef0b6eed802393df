"""
Cell formatters for use with ``sprinkle_fn``.

Each helper takes one raw cell value and returns the display string, so it
can be passed straight to ``sprinkle_fn(tbl, cols='p_value', fn=pval_string)``.
Missing values never reach ``fn`` (they display the cell's ``na_string``).
"""

import functools

from .errors import InvalidAttributeValue

PVAL_FORMATS = ('default', 'exact', 'scientific')


def pval_string(p: float, format: str = 'default', digits: int = 3) -> str:
    """
    Format a p-value for display.

    Parameters
    ----------
    p : float
        p-value in [0, 1].
    format : str, default='default'
        'default': "< 0.001" below 10**-digits, else rounded to ``digits``.
        'exact': ``digits`` significant figures.
        'scientific': scientific notation with ``digits`` significant figures.
    digits : int, default=3

    Raises
    ------
    InvalidAttributeValue
        If ``p`` is outside [0, 1] or ``format`` is unknown.
    """
    if format not in PVAL_FORMATS:
        raise InvalidAttributeValue(f"format must be one of {list(PVAL_FORMATS)}, got {format!r}")
    p = float(p)
    if not 0.0 <= p <= 1.0:
        raise InvalidAttributeValue(f"p-values must be within [0, 1], got {p}")

    if format == 'exact':
        return f'{p:.{digits}g}'
    if format == 'scientific':
        return f'{p:.{max(digits - 1, 0)}e}'

    threshold = 10.0 ** -digits
    if p < threshold:
        return f'< {threshold:.{digits}f}'
    return f'{p:.{digits}f}'


def pval_formatter(format: str = 'default', digits: int = 3):
    """``pval_string`` with fixed options, ready for ``sprinkle_fn``."""
    if format not in PVAL_FORMATS:
        raise InvalidAttributeValue(f"format must be one of {list(PVAL_FORMATS)}, got {format!r}")
    return functools.partial(pval_string, format=format, digits=digits)


def significance_stars(p_value: float) -> str:
    """Map p-value to significance stars."""
    if p_value is None:
        return ''
    if p_value < 0.001:
        return '***'
    if p_value < 0.01:
        return '**'
    if p_value < 0.05:
        return '*'
    return ''


def format_ci(ci_lower: float, ci_upper: float, precision: int = 3) -> str:
    """Format a confidence interval as "[low, high]"."""
    fmt = f"{{:.{precision}f}}"
    return f"[{fmt.format(ci_lower)}, {fmt.format(ci_upper)}]"


__all__ = [
    'PVAL_FORMATS',
    'pval_string',
    'pval_formatter',
    'significance_stars',
    'format_ci',
]
