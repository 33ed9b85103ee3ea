"""
Oscillator indicators.

RSI, Stochastic RSI and MACD built from the moving average engine and the
shared signal classifiers. Each returns a ``pd.DataFrame`` on the input
index with its named outputs and, unless disabled in ``IndicatorOptions``,
a ``Signal`` column.
"""
from typing import Optional

import numpy as np
import pandas as pd

from core.config import DEFAULT_OPTIONS, IndicatorOptions, SignalThresholds
from core.errors import validate_length
from core.signals import compare_signals, threshold_signals
from indicators.ma import MovingAverageKind, get_ma


def rsi(
    close: pd.Series,
    length: int = 14,
    ma_type: MovingAverageKind = MovingAverageKind.WILDERS,
    thresholds: Optional[SignalThresholds] = None,
    options: Optional[IndicatorOptions] = None,
) -> pd.DataFrame:
    """
    Relative Strength Index (RSI).

    Gains and losses are smoothed with ``ma_type`` (Wilder's smoothing by
    default, matching TradingView's ``ta.rsi``). A window without losses
    reads 100, and a window without any movement reads 50.

    Args:
        close: Input price series (typically Close).
        length: RSI period.
        ma_type: Moving average used to smooth gains and losses.
        thresholds: Overbought/oversold levels for the signal (70/30).
        options: Output options.

    Returns:
        DataFrame with an ``RSI`` column in ``[0, 100]``.
    """
    thresholds = thresholds or SignalThresholds()
    options = options or DEFAULT_OPTIONS

    delta = close.astype(float).diff().fillna(0.0)
    gain = delta.clip(lower=0.0)
    loss = (-delta).clip(lower=0.0)

    avg_gain = get_ma(gain, ma_type, length)
    avg_loss = get_ma(loss, ma_type, length)

    rs = avg_gain / avg_loss.replace(0.0, np.nan)
    rsi_values = 100.0 - (100.0 / (1.0 + rs))
    rsi_values = rsi_values.where(avg_loss != 0, np.where(avg_gain > 0, 100.0, 50.0))

    frame = pd.DataFrame({"RSI": rsi_values}, index=close.index)
    signals = threshold_signals(rsi_values, thresholds.upper, thresholds.lower)
    return options.finalize(frame, signals)


def stoch_rsi(
    close: pd.Series,
    rsi_length: int = 14,
    stoch_length: int = 14,
    k_length: int = 3,
    d_length: int = 3,
    ma_type: MovingAverageKind = MovingAverageKind.SIMPLE,
    options: Optional[IndicatorOptions] = None,
) -> pd.DataFrame:
    """
    Stochastic RSI.

    Applies the stochastic oscillator to RSI values; ``K`` smooths the raw
    value and ``D`` smooths ``K``. A flat RSI range reads 0.

    Args:
        close: Close price series.
        rsi_length: RSI lookback period.
        stoch_length: Stochastic lookback period.
        k_length: Smoothing length for K.
        d_length: Smoothing length for D.
        ma_type: Moving average used for K and D.
        options: Output options.

    Returns:
        DataFrame with ``StochRSI``, ``K`` and ``D`` columns scaled to ``[0, 100]``.
    """
    options = options or DEFAULT_OPTIONS
    stoch_length = validate_length(stoch_length, "stoch_length")

    rsi_values = rsi(close, rsi_length, options=IndicatorOptions(include_signals=False))["RSI"]
    rsi_min = rsi_values.rolling(window=stoch_length, min_periods=1).min()
    rsi_max = rsi_values.rolling(window=stoch_length, min_periods=1).max()

    denominator = rsi_max - rsi_min
    stoch_rsi_values = pd.Series(0.0, index=close.index)

    valid_mask = denominator != 0
    stoch_rsi_values.loc[valid_mask] = (
        (rsi_values.loc[valid_mask] - rsi_min.loc[valid_mask])
        / denominator.loc[valid_mask]
        * 100.0
    )

    k = get_ma(stoch_rsi_values, ma_type, k_length)
    d = get_ma(k, ma_type, d_length)

    frame = pd.DataFrame({"StochRSI": stoch_rsi_values, "K": k, "D": d}, index=close.index)
    return options.finalize(frame, compare_signals(k - d))


def macd(
    close: pd.Series,
    fast_length: int = 12,
    slow_length: int = 26,
    signal_length: int = 9,
    ma_type: MovingAverageKind = MovingAverageKind.EXPONENTIAL,
    options: Optional[IndicatorOptions] = None,
) -> pd.DataFrame:
    """
    Moving Average Convergence Divergence.

    The signal line is the same moving average applied to the MACD line;
    the histogram's zero-crossings drive the signal.
    """
    options = options or DEFAULT_OPTIONS

    macd_line = get_ma(close, ma_type, fast_length) - get_ma(close, ma_type, slow_length)
    signal_line = get_ma(macd_line, ma_type, signal_length)
    histogram = macd_line - signal_line

    frame = pd.DataFrame(
        {"MACD": macd_line, "MACDSignal": signal_line, "Histogram": histogram},
        index=close.index,
    )
    return options.finalize(frame, compare_signals(histogram))


__all__ = ["rsi", "stoch_rsi", "macd"]
