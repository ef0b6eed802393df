"""
Value validators shared by the index resolver and the sprinkle engine.

Contains pure predicates (``is_*``) and assertion helpers (``assert_*``) that
raise the matching ``tabledust.errors`` type with an informative message.

Color validation accepts:
- CSS color names (as known to matplotlib) and ``"transparent"``
- ``#RGB``, ``#RRGGBB`` and ``#RRGGBBAA`` hex strings
- ``rgb(r, g, b)`` with integer channels in 0-255
- ``rgba(r, g, b, a)`` with alpha in [0, 1]
"""

from __future__ import annotations

import re
from numbers import Integral, Real
from typing import Any, Sequence

import numpy as np
from pandas.api.types import is_list_like
from matplotlib.colors import CSS4_COLORS, is_color_like

from .constants import CONFIG
from .errors import InvalidArgumentType, InvalidAttributeValue, InvalidPart

_HEX_RE = re.compile(r'^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$')
_RGB_RE = re.compile(
    r'^rgb\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*\)$'
)
_RGBA_RE = re.compile(
    r'^rgba\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*([0-9]*\.?[0-9]+)\s*\)$'
)


# ============================================================================
# Predicates
# ============================================================================

def is_valid_color(color: Any) -> bool:
    """Return True when ``color`` is a color string a renderer can emit."""
    if not isinstance(color, str):
        return False
    text = color.strip()
    lowered = text.lower()

    if lowered == 'transparent':
        return True

    if lowered.startswith('rgba'):
        match = _RGBA_RE.match(lowered)
        if match is None:
            return False
        channels = [int(v) for v in match.groups()[:3]]
        alpha = float(match.group(4))
        return all(0 <= c <= 255 for c in channels) and 0.0 <= alpha <= 1.0

    if lowered.startswith('rgb'):
        match = _RGB_RE.match(lowered)
        if match is None:
            return False
        return all(0 <= int(v) <= 255 for v in match.groups())

    if text.startswith('#'):
        return bool(_HEX_RE.match(text)) and is_color_like(text)

    # Named colors only; matplotlib also accepts '0.5' and 'C1' which are not CSS
    return lowered in CSS4_COLORS


def is_logical_scalar(value: Any) -> bool:
    """True for a single bool (numpy bools included)."""
    return isinstance(value, (bool, np.bool_))


def is_number(value: Any) -> bool:
    """True for a finite real number that is not a bool."""
    if is_logical_scalar(value) or not isinstance(value, Real):
        return False
    return bool(np.isfinite(float(value)))


def is_integerish(value: Any) -> bool:
    """True for ints and for floats with no fractional part (e.g. 2.0)."""
    if is_logical_scalar(value):
        return False
    if isinstance(value, Integral):
        return True
    return is_number(value) and float(value).is_integer()


def is_string(value: Any) -> bool:
    return isinstance(value, str)


def is_scalar(value: Any) -> bool:
    """True when ``value`` should be treated as one element rather than a vector."""
    return not is_list_like(value)


def as_vector(value: Any) -> list:
    """Wrap a scalar into a one-element list; lists/tuples/arrays become lists."""
    if is_scalar(value):
        return [value]
    return list(value)


# ============================================================================
# Assertions on sprinkle arguments
# ============================================================================

def assert_part(part: Any) -> str:
    """Validate a part name and return it."""
    if not isinstance(part, str) or part not in CONFIG['PARTS']:
        raise InvalidPart(
            f"part must be one of {list(CONFIG['PARTS'])}, got {part!r}"
        )
    return part


def assert_fixed(fixed: Any) -> bool:
    """``fixed`` must be a single logical value."""
    if not is_logical_scalar(fixed):
        raise InvalidArgumentType(
            f"fixed must be a single logical value (True/False), got {fixed!r}"
        )
    return bool(fixed)


def assert_recycle(recycle: Any) -> str:
    """Validate a recycling policy and return its canonical spelling."""
    if isinstance(recycle, str):
        canonical = CONFIG['RECYCLE_ALIASES'].get(recycle, recycle)
        if canonical in CONFIG['RECYCLE_OPTIONS']:
            return canonical
    raise InvalidArgumentType(
        f"recycle must be one of {list(CONFIG['RECYCLE_OPTIONS'])}, got {recycle!r}"
    )


def assert_choice(value: Any, options: Sequence[str], name: str) -> str:
    if not isinstance(value, str) or value not in options:
        raise InvalidAttributeValue(
            f"{name} must be one of {list(options)}, got {value!r}"
        )
    return value


def assert_color(value: Any, name: str) -> str:
    if not is_valid_color(value):
        raise InvalidAttributeValue(f"{name} is not a valid color: {value!r}")
    return value.strip()


def assert_logical(value: Any, name: str) -> bool:
    if not is_logical_scalar(value):
        raise InvalidAttributeValue(f"{name} must be True or False, got {value!r}")
    return bool(value)


def assert_integerish(value: Any, name: str, lower: int = 0) -> int:
    if not is_integerish(value) or int(value) < lower:
        raise InvalidAttributeValue(
            f"{name} must be an integer >= {lower}, got {value!r}"
        )
    return int(value)


def assert_number(value: Any, name: str, lower: float = None, strict: bool = False) -> float:
    if not is_number(value):
        raise InvalidAttributeValue(f"{name} must be a number, got {value!r}")
    if lower is not None and (value < lower or (strict and value == lower)):
        bound = '>' if strict else '>='
        raise InvalidAttributeValue(f"{name} must be {bound} {lower}, got {value!r}")
    return value


def assert_string(value: Any, name: str) -> str:
    if not is_string(value):
        raise InvalidAttributeValue(f"{name} must be a string, got {value!r}")
    return value


# ============================================================================
# Table options
# ============================================================================

def check_longtable(longtable: Any):
    """Normalise a longtable option to False or a positive division size."""
    if is_logical_scalar(longtable):
        return CONFIG['DEFAULT_LONGTABLE_ROWS'] if longtable else False
    if is_integerish(longtable) and int(longtable) >= 1:
        return int(longtable)
    raise InvalidAttributeValue(
        f"longtable must be True/False or a positive integer, got {longtable!r}"
    )


def check_print_method(print_method: Any) -> str:
    return assert_choice(print_method, CONFIG['PRINT_METHODS'], 'print_method')


__all__ = [
    'is_valid_color',
    'is_logical_scalar',
    'is_number',
    'is_integerish',
    'is_string',
    'is_scalar',
    'as_vector',
    'assert_part',
    'assert_fixed',
    'assert_recycle',
    'assert_choice',
    'assert_color',
    'assert_logical',
    'assert_integerish',
    'assert_number',
    'assert_string',
    'check_longtable',
    'check_print_method',
]
