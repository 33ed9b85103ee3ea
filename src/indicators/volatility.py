"""
Volatility indicators.

Contains Average True Range, Bollinger Bands and historical volatility.
Signals use the volatility classifier: a price crossing of its average is
reported as a strong signal while the volatility measure is elevated.
"""
import math
from typing import Optional

import numpy as np
import pandas as pd

from core.config import DEFAULT_OPTIONS, IndicatorOptions
from core.errors import check_aligned, validate_length
from core.signals import volatility_signals
from indicators.ma import MovingAverageKind, ema, get_ma, sma

TRADING_DAYS_PER_YEAR = 252


def true_range(high: pd.Series, low: pd.Series, close: pd.Series) -> pd.Series:
    """
    True Range.

    TR = max(H-L, |H-prevC|, |L-prevC|), with the first bar's previous close
    taken as its own close.
    """
    check_aligned(high, low, close)
    close = close.astype(float)
    if close.empty:
        return close.copy()
    prev_close = close.shift(1).fillna(close.iat[0])
    return pd.concat(
        [
            (high - low).abs(),
            (high - prev_close).abs(),
            (low - prev_close).abs(),
        ],
        axis=1,
    ).max(axis=1)


def atr(
    high: pd.Series,
    low: pd.Series,
    close: pd.Series,
    length: int = 14,
    ma_type: MovingAverageKind = MovingAverageKind.WILDERS,
    options: Optional[IndicatorOptions] = None,
) -> pd.DataFrame:
    """
    Average True Range (ATR).

    Measures market volatility as the true range smoothed by ``ma_type``
    (Wilder's smoothing by default).

    Args:
        high: High price series
        low: Low price series
        close: Close price series
        length: ATR period (default 14)
        ma_type: Moving average used to smooth the true range
        options: Output options

    Returns:
        DataFrame with ``TrueRange`` and ``ATR`` columns
    """
    options = options or DEFAULT_OPTIONS
    tr = true_range(high, low, close)
    atr_values = get_ma(tr, ma_type, length)

    frame = pd.DataFrame({"TrueRange": tr, "ATR": atr_values}, index=close.index)
    if not options.include_signals:
        return options.finalize(frame)
    delta = close - ema(close, length)
    prev_atr = atr_values.shift(1).fillna(atr_values)
    return options.finalize(frame, volatility_signals(delta, atr_values, prev_atr))


def bollinger_bands(
    close: pd.Series,
    length: int = 20,
    std_mult: float = 2.0,
    ma_type: MovingAverageKind = MovingAverageKind.SIMPLE,
    options: Optional[IndicatorOptions] = None,
) -> pd.DataFrame:
    """
    Bollinger Bands.

    Middle band is ``ma_type`` of close; the bands sit ``std_mult``
    population standard deviations away. Bandwidth is the band spread
    relative to the middle band (0 when the middle band is 0).
    """
    options = options or DEFAULT_OPTIONS
    length = validate_length(length)
    close = close.astype(float)

    middle = get_ma(close, ma_type, length)
    std = close.rolling(length, min_periods=1).std(ddof=0)
    upper = middle + std_mult * std
    lower = middle - std_mult * std
    bandwidth = ((upper - lower) / middle.replace(0.0, np.nan)).fillna(0.0)

    frame = pd.DataFrame(
        {
            "UpperBand": upper,
            "MiddleBand": middle,
            "LowerBand": lower,
            "Bandwidth": bandwidth,
        },
        index=close.index,
    )
    if not options.include_signals:
        return options.finalize(frame)
    signals = volatility_signals(close - middle, bandwidth, sma(bandwidth, length))
    return options.finalize(frame, signals)


def historical_volatility(
    close: pd.Series,
    length: int = 20,
    periods_per_year: int = TRADING_DAYS_PER_YEAR,
    options: Optional[IndicatorOptions] = None,
) -> pd.DataFrame:
    """
    Annualised historical volatility in percent.

    Population standard deviation of log returns over ``length`` bars.
    Returns involving a non-positive price count as 0.
    """
    options = options or DEFAULT_OPTIONS
    length = validate_length(length)
    close = close.astype(float)

    prev_close = close.shift(1)
    valid = (close > 0) & (prev_close > 0)
    log_returns = pd.Series(0.0, index=close.index)
    log_returns.loc[valid] = np.log(close.loc[valid] / prev_close.loc[valid])

    hv = log_returns.rolling(length, min_periods=1).std(ddof=0) * math.sqrt(periods_per_year) * 100.0

    frame = pd.DataFrame({"HV": hv}, index=close.index)
    if not options.include_signals:
        return options.finalize(frame)
    delta = close - ema(close, length)
    prev_hv = hv.shift(1).fillna(hv)
    return options.finalize(frame, volatility_signals(delta, hv, prev_hv))


__all__ = ["true_range", "atr", "bollinger_bands", "historical_volatility"]
