"""
Computational core shared by every technical indicator.

This package contains the three primitives indicators are built from:
- window: append-only O(1) trailing-window sums and averages
- signals: crossover and threshold classifiers producing categorical signals
- config / errors: option dataclasses and the configuration-error type

Moving averages live in ``indicators.ma`` and build on ``core.window``.
These modules have no dependency on the indicator layer.
"""

__version__ = "1.0.0"

from .errors import IndicatorConfigError, check_aligned, validate_length

from .window import (
    WindowedAggregator,
    rolling_sum,
    rolling_mean,
)

from .signals import (
    Signal,
    ThresholdRegime,
    get_compare_signal,
    get_bullish_bearish_signal,
    get_volatility_signal,
    get_condition_signal,
    compare_signals,
    threshold_signals,
    bullish_bearish_signals,
    volatility_signals,
    condition_signals,
)

from .config import (
    IndicatorOptions,
    SignalThresholds,
    DEFAULT_OPTIONS,
)

__all__ = [
    # errors
    "IndicatorConfigError",
    "validate_length",
    "check_aligned",

    # window
    "WindowedAggregator",
    "rolling_sum",
    "rolling_mean",

    # signals
    "Signal",
    "ThresholdRegime",
    "get_compare_signal",
    "get_bullish_bearish_signal",
    "get_volatility_signal",
    "get_condition_signal",
    "compare_signals",
    "threshold_signals",
    "bullish_bearish_signals",
    "volatility_signals",
    "condition_signals",

    # config
    "IndicatorOptions",
    "SignalThresholds",
    "DEFAULT_OPTIONS",
]
