"""
Configuration dataclasses for indicator calls.

Indicator functions accept an optional ``IndicatorOptions`` controlling the
shape of their output, and threshold-based indicators accept a
``SignalThresholds`` pair. Both round-trip through plain dictionaries so they
can be stored alongside other run parameters.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import pandas as pd

from .errors import IndicatorConfigError

logger = logging.getLogger(__name__)


@dataclass
class IndicatorOptions:
    include_signals: bool = True
    rounding_digits: Optional[int] = None

    def __post_init__(self) -> None:
        if self.rounding_digits is not None and self.rounding_digits < 0:
            raise IndicatorConfigError(
                f"rounding_digits must be non-negative, got {self.rounding_digits}"
            )

    @classmethod
    def from_dict(cls, payload: Optional[Dict[str, Any]]) -> "IndicatorOptions":
        payload = payload or {}
        unknown = set(payload) - {"include_signals", "rounding_digits"}
        if unknown:
            logger.debug("Ignoring unknown indicator options: %s", sorted(unknown))
        digits = payload.get("rounding_digits", cls.rounding_digits)
        return cls(
            include_signals=bool(payload.get("include_signals", cls.include_signals)),
            rounding_digits=int(digits) if digits is not None else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "include_signals": self.include_signals,
            "rounding_digits": self.rounding_digits,
        }

    def finalize(self, frame: pd.DataFrame, signals: Optional[pd.Series] = None) -> pd.DataFrame:
        """
        Shape an indicator result according to these options.

        Rounds the numeric columns when ``rounding_digits`` is set and
        attaches ``signals`` as a ``Signal`` column when ``include_signals``
        is true.
        """
        result = frame.copy()
        if self.rounding_digits is not None:
            numeric = result.select_dtypes(include="number").columns
            result[numeric] = result[numeric].round(self.rounding_digits)
        if self.include_signals and signals is not None:
            result["Signal"] = signals
        return result


@dataclass
class SignalThresholds:
    """Upper/lower threshold pair for overbought/oversold classification."""

    upper: float = 70.0
    lower: float = 30.0

    def __post_init__(self) -> None:
        if not self.upper > self.lower:
            raise IndicatorConfigError(
                f"upper threshold must exceed lower threshold, got upper={self.upper} lower={self.lower}"
            )

    @classmethod
    def from_dict(cls, payload: Optional[Dict[str, Any]]) -> "SignalThresholds":
        payload = payload or {}
        return cls(
            upper=float(payload.get("upper", cls.upper)),
            lower=float(payload.get("lower", cls.lower)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"upper": self.upper, "lower": self.lower}


DEFAULT_OPTIONS = IndicatorOptions()


__all__ = ["IndicatorOptions", "SignalThresholds", "DEFAULT_OPTIONS"]
