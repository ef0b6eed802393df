"""
Exception taxonomy for table construction and sprinkling.

Every error derives from ``DustError`` and from the builtin that best matches
it, so callers may catch either ``DustError`` or e.g. ``ValueError``.

Strict behavior: errors are raised at the call that introduced the bad
input. No silent coercion beyond the documented broadcasting/recycling rules.
"""


class DustError(Exception):
    """Base class for all tabledust errors."""


class InvalidArgumentType(DustError, TypeError):
    """A parameter has the wrong type or shape."""


class InvalidPart(DustError, ValueError):
    """The part name is not one of head, body, foot, interfoot."""


class InvalidIndex(DustError, IndexError):
    """A row/column index or column name falls outside the part."""


# Same failure, named after the bound that was crossed
OutOfBounds = InvalidIndex


class InvalidSelector(DustError, ValueError):
    """A selector did not evaluate to a usable selection."""


class DimensionMismatch(DustError, ValueError):
    """Two inputs that must agree in length or width do not."""


class InvalidAttributeValue(DustError, ValueError):
    """An attribute value failed its domain check."""


class UnknownAttribute(DustError, ValueError):
    """An attribute name is not in the recognised set."""


class MergeConflict(DustError, ValueError):
    """Two merge regions overlap."""


__all__ = [
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
]
