"""
Trend indicators.

Moving-average crossover and Elder Ray bull/bear power.
"""
from typing import Optional

import pandas as pd

from core.config import DEFAULT_OPTIONS, IndicatorOptions
from core.errors import check_aligned
from core.signals import bullish_bearish_signals, compare_signals
from indicators.ma import MovingAverageKind, get_ma


def ma_crossover(
    close: pd.Series,
    fast_length: int = 10,
    slow_length: int = 30,
    ma_type: MovingAverageKind = MovingAverageKind.EXPONENTIAL,
    options: Optional[IndicatorOptions] = None,
) -> pd.DataFrame:
    """
    Fast/slow moving average crossover.

    Bullish when the fast average crosses above the slow one, bearish on
    the opposite crossing.
    """
    options = options or DEFAULT_OPTIONS
    fast = get_ma(close, ma_type, fast_length)
    slow = get_ma(close, ma_type, slow_length)

    frame = pd.DataFrame({"FastMA": fast, "SlowMA": slow}, index=close.index)
    return options.finalize(frame, compare_signals(fast - slow))


def elder_ray(
    high: pd.Series,
    low: pd.Series,
    close: pd.Series,
    length: int = 13,
    ma_type: MovingAverageKind = MovingAverageKind.EXPONENTIAL,
    options: Optional[IndicatorOptions] = None,
) -> pd.DataFrame:
    """
    Elder Ray Index.

    Bull power is high minus the average of close, bear power is low minus
    it. Bull power turning positive is bullish and bear power turning
    negative is bearish; each is tracked independently.

    Args:
        high: High price series
        low: Low price series
        close: Close price series
        length: Moving average period (default 13)
        ma_type: Moving average applied to close
        options: Output options

    Returns:
        DataFrame with ``BullPower`` and ``BearPower`` columns
    """
    options = options or DEFAULT_OPTIONS
    check_aligned(high, low, close)
    average = get_ma(close, ma_type, length)
    bull_power = high.astype(float) - average
    bear_power = low.astype(float) - average

    frame = pd.DataFrame({"BullPower": bull_power, "BearPower": bear_power}, index=close.index)
    return options.finalize(frame, bullish_bearish_signals(bull_power, bear_power))


__all__ = ["ma_crossover", "elder_ray"]
