"""
Moving Average engine.

This module implements the moving average families every indicator uses:
- Base recurrences: SMA, EMA, WMA, Wilder's smoothing
- Chained composites: DEMA, TMA, HMA, T3
- Window-weighted / adaptive: ALMA, KAMA

All batch functions take a ``pd.Series`` and return a new series on the same
index where ``out[i]`` depends only on ``in[0..i]``. There is no warm-up gap:
windows longer than the available history average over the prefix, and the
exponential recurrences seed with the first input sample. Composites are
built purely by feeding one average's output into another, so any of these
functions can be chained to arbitrary depth.

``MovingAverageStream`` is the incremental form of the four base kinds for
callers that receive one sample at a time.
"""
import logging
import math
from collections import deque
from enum import Enum
from typing import Callable, Dict, Union

import numpy as np
import pandas as pd

from core.errors import IndicatorConfigError, validate_length
from core.window import WindowedAggregator, rolling_sum

logger = logging.getLogger(__name__)

# Constants
FACTOR_T3 = 0.7
FAST_KAMA = 2
SLOW_KAMA = 30
ALMA_OFFSET = 0.85
ALMA_SIGMA = 6.0


class MovingAverageKind(str, Enum):
    SIMPLE = "SMA"
    EXPONENTIAL = "EMA"
    WEIGHTED = "WMA"
    WILDERS = "WILDERS"
    DOUBLE_EXPONENTIAL = "DEMA"
    TRIANGULAR = "TMA"
    HULL = "HMA"
    T3 = "T3"
    ARNAUD_LEGOUX = "ALMA"
    KAUFMAN_ADAPTIVE = "KAMA"

    @classmethod
    def parse(cls, value: Union["MovingAverageKind", str]) -> "MovingAverageKind":
        """
        Resolve a kind from an enum member, short code or member name.

        Matching is case-insensitive. ``RMA`` and ``SMMA`` are accepted as
        aliases for Wilder's smoothing.

        Raises:
            IndicatorConfigError: If the value names no supported kind
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().upper()
            key = _KIND_ALIASES.get(key, key)
            for kind in cls:
                if key in (kind.value, kind.name):
                    return kind
        logger.warning("Rejected unsupported moving average type: %r", value)
        raise IndicatorConfigError(f"Unsupported MA type: {value!r}")


_KIND_ALIASES = {"RMA": "WILDERS", "SMMA": "WILDERS", "WILDERSSMOOTHING": "WILDERS"}

VALID_MA_TYPES = {kind.value for kind in MovingAverageKind}


def _as_float(series: pd.Series) -> pd.Series:
    return series.astype(float)


# ============================================================================
# Base Moving Averages
# ============================================================================

def sma(series: pd.Series, length: int) -> pd.Series:
    """
    Simple Moving Average.

    Mean of the last ``length`` samples, computed through a
    ``WindowedAggregator``. Before ``length`` samples exist the mean covers
    the available prefix.

    Args:
        series: Input series
        length: Period length

    Returns:
        SMA values as pd.Series
    """
    length = validate_length(length)
    aggregator = WindowedAggregator()
    values = np.empty(len(series))
    for i, value in enumerate(series.to_numpy(dtype=float)):
        aggregator.add(value)
        values[i] = aggregator.average(length)
    return pd.Series(values, index=series.index)


def ema(series: pd.Series, length: int) -> pd.Series:
    """
    Exponential Moving Average.

    ``out[i] = a*in[i] + (1-a)*out[i-1]`` with ``a = 2/(length+1)`` and
    ``out[0] = in[0]``; pandas ``ewm(span=length, adjust=False)`` produces
    exactly this recurrence.

    Args:
        series: Input series
        length: Period length (span)

    Returns:
        EMA values as pd.Series
    """
    length = validate_length(length)
    return _as_float(series).ewm(span=length, adjust=False).mean()


def wilders(series: pd.Series, length: int) -> pd.Series:
    """
    Wilder's smoothing (RMA).

    Same recurrence as :func:`ema` with ``a = 1/length``, seeded with the
    first sample.
    """
    length = validate_length(length)
    return _as_float(series).ewm(alpha=1.0 / length, adjust=False).mean()


def wma(series: pd.Series, length: int) -> pd.Series:
    """
    Weighted Moving Average.

    Linear weights ``[1, 2, ..., length]`` with the most recent sample
    weighted ``length``. Over a shorter prefix each available sample keeps
    the weight it has in a full window and the mean is normalised by the
    weights actually used.

    Args:
        series: Input series
        length: Period length

    Returns:
        WMA values as pd.Series
    """
    length = validate_length(length)
    weights = np.arange(1, length + 1, dtype=float)

    def _weighted(window: np.ndarray) -> float:
        used = weights[-len(window):]
        return np.dot(window, used) / used.sum()

    return _as_float(series).rolling(length, min_periods=1).apply(_weighted, raw=True)


# ============================================================================
# Chained Moving Averages
# ============================================================================

def dema(series: pd.Series, length: int) -> pd.Series:
    """
    Double Exponential Moving Average.

    Formula: 2*EMA - EMA(EMA)
    """
    e1 = ema(series, length)
    e2 = ema(e1, length)
    return 2 * e1 - e2


def tma(series: pd.Series, length: int) -> pd.Series:
    """
    Triangular Moving Average.

    Double-smoothed SMA.
    Formula: SMA(SMA(ceil(n/2)), floor(n/2)+1)
    """
    length = validate_length(length)
    first = sma(series, math.ceil(length / 2))
    return sma(first, math.floor(length / 2) + 1)


def hma(series: pd.Series, length: int) -> pd.Series:
    """
    Hull Moving Average.

    Low-lag MA built from three WMAs.
    Formula: WMA(2*WMA(n/2) - WMA(n), sqrt(n))
    """
    length = validate_length(length)
    half_length = max(1, length // 2)
    sqrt_length = max(1, int(math.sqrt(length)))
    return wma(2 * wma(series, half_length) - wma(series, length), sqrt_length)


def _gd(series: pd.Series, length: int) -> pd.Series:
    """Generalized DEMA step used by T3."""
    ema1 = ema(series, length)
    ema2 = ema(ema1, length)
    return ema1 * (1 + FACTOR_T3) - ema2 * FACTOR_T3


def t3(series: pd.Series, length: int) -> pd.Series:
    """
    Tillson T3 Moving Average.

    Applies the generalized DEMA three times.
    """
    length = validate_length(length)
    return _gd(_gd(_gd(series, length), length), length)


# ============================================================================
# Window-weighted and Adaptive Moving Averages
# ============================================================================

def alma(
    series: pd.Series,
    length: int,
    offset: float = ALMA_OFFSET,
    sigma: float = ALMA_SIGMA,
) -> pd.Series:
    """
    Arnaud Legoux Moving Average.

    Gaussian weights centred at ``offset * (length - 1)``. Over a shorter
    prefix the trailing part of the weight vector is renormalised.

    Args:
        series: Input series
        length: Period length
        offset: Gaussian offset (default 0.85)
        sigma: Gaussian sigma (default 6)
    """
    length = validate_length(length)
    m = offset * (length - 1)
    s = length / sigma
    weights = np.exp(-((np.arange(length) - m) ** 2) / (2 * s * s))

    def _alma(window: np.ndarray) -> float:
        used = weights[-len(window):]
        return np.dot(window, used) / used.sum()

    return _as_float(series).rolling(length, min_periods=1).apply(_alma, raw=True)


def kama(series: pd.Series, length: int) -> pd.Series:
    """
    Kaufman Adaptive Moving Average.

    The smoothing constant follows the efficiency ratio: net change over the
    window divided by the summed absolute bar-to-bar changes. A window with
    no movement has an efficiency ratio of 0. Seeded with the first sample.

    Args:
        series: Input series
        length: Period length
    """
    length = validate_length(length)
    values = _as_float(series)
    if values.empty:
        return values.copy()

    change = values.diff().abs().fillna(0.0)
    volatility = rolling_sum(change, length)
    anchor = values.shift(length).fillna(values.iat[0])
    momentum = (values - anchor).abs()
    er = (momentum / volatility.replace(0.0, np.nan)).fillna(0.0)

    fast_alpha = 2 / (FAST_KAMA + 1)
    slow_alpha = 2 / (SLOW_KAMA + 1)
    alpha = ((er * (fast_alpha - slow_alpha) + slow_alpha) ** 2).to_numpy()

    prices = values.to_numpy()
    kama_values = np.empty(len(prices))
    kama_values[0] = prices[0]
    for i in range(1, len(prices)):
        a = alpha[i]
        kama_values[i] = a * prices[i] + (1 - a) * kama_values[i - 1]
    return pd.Series(kama_values, index=series.index)


# ============================================================================
# Unified MA Interface
# ============================================================================

_DISPATCH: Dict[MovingAverageKind, Callable[[pd.Series, int], pd.Series]] = {
    MovingAverageKind.SIMPLE: sma,
    MovingAverageKind.EXPONENTIAL: ema,
    MovingAverageKind.WEIGHTED: wma,
    MovingAverageKind.WILDERS: wilders,
    MovingAverageKind.DOUBLE_EXPONENTIAL: dema,
    MovingAverageKind.TRIANGULAR: tma,
    MovingAverageKind.HULL: hma,
    MovingAverageKind.T3: t3,
    MovingAverageKind.ARNAUD_LEGOUX: alma,
    MovingAverageKind.KAUFMAN_ADAPTIVE: kama,
}


def get_ma(
    series: pd.Series,
    ma_type: Union[MovingAverageKind, str],
    length: int,
) -> pd.Series:
    """
    Unified interface for all MA types.

    Each call only sees the series it is given, so the output of one call
    can be passed straight back in as the input of the next.

    Args:
        series: Input series
        ma_type: ``MovingAverageKind`` or its name/short code (case-insensitive)
        length: Period length

    Returns:
        MA values as pd.Series on the input index

    Raises:
        IndicatorConfigError: If ma_type is not supported or length is not positive
    """
    kind = MovingAverageKind.parse(ma_type)
    length = validate_length(length)
    logger.debug("Computing %s(length=%d) over %d samples", kind.value, length, len(series))
    return _DISPATCH[kind](series, length)


# ============================================================================
# Incremental Moving Averages
# ============================================================================

class MovingAverageStream:
    """
    One-sample-at-a-time moving average for the base kinds.

    Holds only what the recurrence needs: the aggregator history for SMA,
    the trailing window for WMA, and the last output for EMA / Wilder's.
    Outputs match the batch functions for the same input.
    """

    STREAMABLE = frozenset(
        {
            MovingAverageKind.SIMPLE,
            MovingAverageKind.EXPONENTIAL,
            MovingAverageKind.WEIGHTED,
            MovingAverageKind.WILDERS,
        }
    )

    def __init__(self, kind: Union[MovingAverageKind, str], length: int) -> None:
        self.kind = MovingAverageKind.parse(kind)
        if self.kind not in self.STREAMABLE:
            logger.warning("Rejected incremental %s stream", self.kind.value)
            raise IndicatorConfigError(f"{self.kind.value} cannot be computed incrementally")
        self.length = validate_length(length)
        if self.kind is MovingAverageKind.EXPONENTIAL:
            self._alpha = 2.0 / (self.length + 1)
        elif self.kind is MovingAverageKind.WILDERS:
            self._alpha = 1.0 / self.length
        else:
            self._alpha = None
        logger.debug("Created %s stream with length %d", self.kind.value, self.length)
        self._weights = np.arange(1, self.length + 1, dtype=float)
        self.reset()

    def reset(self) -> None:
        self._aggregator = WindowedAggregator()
        self._window: deque = deque(maxlen=self.length)
        self._value = 0.0
        self._count = 0

    @property
    def value(self) -> float:
        return self._value

    @property
    def count(self) -> int:
        return self._count

    def update(self, value: float) -> float:
        value = float(value)
        if self.kind is MovingAverageKind.SIMPLE:
            self._aggregator.add(value)
            self._value = self._aggregator.average(self.length)
        elif self.kind is MovingAverageKind.WEIGHTED:
            self._window.append(value)
            used = self._weights[-len(self._window):]
            self._value = float(np.dot(np.fromiter(self._window, dtype=float), used) / used.sum())
        elif self._count == 0:
            self._value = value
        else:
            self._value = self._alpha * value + (1 - self._alpha) * self._value
        self._count += 1
        return self._value

    def __repr__(self) -> str:
        return f"MovingAverageStream(kind={self.kind.value}, length={self.length}, count={self._count})"
