"""
Indicators package.

This package provides the moving average engine and the reference
indicators built on the core primitives:
- Moving Averages (10 kinds, batch and incremental)
- Oscillators (RSI, Stochastic RSI, MACD)
- Volatility indicators (ATR, Bollinger Bands, historical volatility)
- Trend indicators (MA crossover, Elder Ray)

All batch functions operate on pandas Series and return results on the
input index.
"""

# Moving Averages
from .ma import (
    sma,
    ema,
    wma,
    wilders,
    dema,
    tma,
    hma,
    t3,
    alma,
    kama,
    get_ma,
    MovingAverageKind,
    MovingAverageStream,
    VALID_MA_TYPES,
)

# Oscillators
from .oscillators import rsi, stoch_rsi, macd

# Volatility
from .volatility import true_range, atr, bollinger_bands, historical_volatility

# Trend
from .trend import ma_crossover, elder_ray

__all__ = [
    # Moving Averages
    "sma",
    "ema",
    "wma",
    "wilders",
    "dema",
    "tma",
    "hma",
    "t3",
    "alma",
    "kama",
    "get_ma",
    "MovingAverageKind",
    "MovingAverageStream",
    "VALID_MA_TYPES",
    # Oscillators
    "rsi",
    "stoch_rsi",
    "macd",
    # Volatility
    "true_range",
    "atr",
    "bollinger_bands",
    "historical_volatility",
    # Trend
    "ma_crossover",
    "elder_ray",
]
