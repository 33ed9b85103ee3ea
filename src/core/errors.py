"""
Error types shared by the indicator core.

The core never raises for expected numeric edge conditions (short history,
zero denominators). Only caller defects surface as exceptions, and all of
them use :class:`IndicatorConfigError`.
"""
import logging
import numbers

logger = logging.getLogger(__name__)


class IndicatorConfigError(ValueError):
    """Raised when an indicator primitive is configured incorrectly."""


def validate_length(length, name: str = "length") -> int:
    """
    Check that a window length is a positive integer.

    Args:
        length: Value supplied by the caller
        name: Parameter name used in the error message

    Returns:
        The length as a plain ``int``

    Raises:
        IndicatorConfigError: If the length is not a positive integer
    """
    if isinstance(length, bool) or not isinstance(length, numbers.Integral):
        logger.warning("Rejected non-integer %s: %r", name, length)
        raise IndicatorConfigError(f"{name} must be an integer, got {length!r}")
    if length <= 0:
        logger.warning("Rejected non-positive %s: %r", name, length)
        raise IndicatorConfigError(f"{name} must be positive, got {length}")
    return int(length)


def check_aligned(*series) -> None:
    """Raise if the given series do not all have the same length."""
    lengths = {len(s) for s in series}
    if len(lengths) > 1:
        raise IndicatorConfigError(f"Input series must have the same length, got {sorted(lengths)}")
