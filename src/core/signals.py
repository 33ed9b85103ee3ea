"""
Signal classification for indicator trajectories.

Every indicator ends by turning a numeric trajectory into a categorical
``Signal`` once per sample. The classifiers here are shared by all of them:

- Compare: zero-crossing of a current/previous delta pair
- Threshold regime: overbought/oversold crossings with a persistent regime
- Bullish/bearish: two independent crossing tracks combined into one signal
- Volatility: compare crossing upgraded to a strong signal in high volatility
- Condition: precomputed boolean bullish/bearish conditions

Per-step functions are pure. ``ThresholdRegime`` is the only classifier that
carries state across steps. The ``*_signals`` helpers walk a whole series and
return a ``pd.Series`` of ``Signal`` on the same index. Delta-based helpers
treat the delta before index 0 as 0.0; ``threshold_signals`` treats the first
level as its own predecessor, so no crossing is reported at index 0.
"""
from enum import Enum
from typing import Optional, Union

import pandas as pd

from .errors import IndicatorConfigError


class Signal(str, Enum):
    NONE = "none"
    NEUTRAL = "neutral"
    BULLISH = "bullish"
    BEARISH = "bearish"
    STRONG_BULLISH = "strong_bullish"
    STRONG_BEARISH = "strong_bearish"
    BUY = "buy"
    SELL = "sell"

    @property
    def direction(self) -> int:
        """+1 for bullish/buy signals, -1 for bearish/sell signals, else 0."""
        if self in (Signal.BULLISH, Signal.STRONG_BULLISH, Signal.BUY):
            return 1
        if self in (Signal.BEARISH, Signal.STRONG_BEARISH, Signal.SELL):
            return -1
        return 0


_REVERSED = {
    Signal.BULLISH: Signal.BEARISH,
    Signal.BEARISH: Signal.BULLISH,
    Signal.STRONG_BULLISH: Signal.STRONG_BEARISH,
    Signal.STRONG_BEARISH: Signal.STRONG_BULLISH,
}


def _crosses_up(current: float, previous: float) -> bool:
    return current > 0 and previous <= 0


def _crosses_down(current: float, previous: float) -> bool:
    return current < 0 and previous >= 0


# ============================================================================
# Per-step classifiers
# ============================================================================

def get_compare_signal(current: float, previous: float, reverse: bool = False) -> Signal:
    """
    Classify a zero-crossing between two consecutive deltas.

    Args:
        current: Delta at the current step (e.g. fast - slow)
        previous: Delta at the previous step
        reverse: Swap the bullish/bearish polarity, for indicators where a
            rising raw value is bearish

    Returns:
        BULLISH on an upward crossing, BEARISH on a downward crossing,
        NEUTRAL otherwise
    """
    if _crosses_up(current, previous):
        signal = Signal.BULLISH
    elif _crosses_down(current, previous):
        signal = Signal.BEARISH
    else:
        return Signal.NEUTRAL
    return _REVERSED[signal] if reverse else signal


def get_bullish_bearish_signal(
    bull: float,
    prev_bull: float,
    bear: float,
    prev_bear: float,
) -> Signal:
    """
    Combine two independent crossing tracks.

    The bull track fires when ``bull`` crosses above zero and the bear track
    fires when ``bear`` crosses below zero.

    Returns:
        BULLISH or BEARISH when exactly one track fires, NEUTRAL when both
        fire on the same step, NONE when neither does
    """
    bull_fired = _crosses_up(bull, prev_bull)
    bear_fired = _crosses_down(bear, prev_bear)
    if bull_fired and bear_fired:
        return Signal.NEUTRAL
    if bull_fired:
        return Signal.BULLISH
    if bear_fired:
        return Signal.BEARISH
    return Signal.NONE


def get_volatility_signal(
    current: float,
    previous: float,
    volatility: float,
    threshold: float,
) -> Signal:
    """Compare crossing, upgraded to STRONG_* when volatility >= threshold."""
    signal = get_compare_signal(current, previous)
    if signal is Signal.NEUTRAL or volatility < threshold:
        return signal
    return Signal.STRONG_BULLISH if signal is Signal.BULLISH else Signal.STRONG_BEARISH


def get_condition_signal(bullish: bool, bearish: bool) -> Signal:
    if bullish and bearish:
        return Signal.NEUTRAL
    if bullish:
        return Signal.BULLISH
    if bearish:
        return Signal.BEARISH
    return Signal.NEUTRAL


class ThresholdRegime:
    """
    Overbought/oversold classifier with a persistent regime.

    A fall through ``upper`` from above switches the regime to sold and a
    rise through ``lower`` from below switches it to bought. Between
    crossings the last regime is repeated; before the first crossing the
    signal is NEUTRAL.
    """

    BOUGHT = "bought"
    SOLD = "sold"

    def __init__(self, upper: float, lower: float) -> None:
        if not upper > lower:
            raise IndicatorConfigError(
                f"upper threshold must exceed lower threshold, got upper={upper} lower={lower}"
            )
        self.upper = float(upper)
        self.lower = float(lower)
        self._regime: Optional[str] = None

    @property
    def regime(self) -> Optional[str]:
        return self._regime

    def reset(self) -> None:
        self._regime = None

    def update(self, value: float, previous: float) -> Signal:
        if previous >= self.upper and value < self.upper:
            self._regime = self.SOLD
        elif previous <= self.lower and value > self.lower:
            self._regime = self.BOUGHT

        if self._regime == self.SOLD:
            return Signal.SELL
        if self._regime == self.BOUGHT:
            return Signal.BUY
        return Signal.NEUTRAL

    def __repr__(self) -> str:
        return f"ThresholdRegime(upper={self.upper}, lower={self.lower}, regime={self._regime!r})"


# ============================================================================
# Series helpers
# ============================================================================

def _previous(series: pd.Series, fill_value: float = 0.0) -> pd.Series:
    return series.shift(1, fill_value=fill_value)


def _to_signal_series(signals, index: pd.Index) -> pd.Series:
    return pd.Series(signals, index=index, dtype=object)


def compare_signals(delta: pd.Series, reverse: bool = False) -> pd.Series:
    """Apply :func:`get_compare_signal` to each consecutive pair of ``delta``."""
    prev = _previous(delta)
    signals = [
        get_compare_signal(cur, prv, reverse)
        for cur, prv in zip(delta.to_numpy(dtype=float), prev.to_numpy(dtype=float))
    ]
    return _to_signal_series(signals, delta.index)


def threshold_signals(values: pd.Series, upper: float, lower: float) -> pd.Series:
    """Run a fresh :class:`ThresholdRegime` over ``values``."""
    regime = ThresholdRegime(upper, lower)
    prev = _previous(values, values.iat[0] if len(values) else 0.0)
    signals = [
        regime.update(cur, prv)
        for cur, prv in zip(values.to_numpy(dtype=float), prev.to_numpy(dtype=float))
    ]
    return _to_signal_series(signals, values.index)


def bullish_bearish_signals(bull: pd.Series, bear: pd.Series) -> pd.Series:
    if len(bull) != len(bear):
        raise IndicatorConfigError("bull and bear series must have the same length")
    bull_values = bull.to_numpy(dtype=float)
    bear_values = bear.to_numpy(dtype=float)
    prev_bull = _previous(bull).to_numpy(dtype=float)
    prev_bear = _previous(bear).to_numpy(dtype=float)
    signals = [
        get_bullish_bearish_signal(bull_values[i], prev_bull[i], bear_values[i], prev_bear[i])
        for i in range(len(bull_values))
    ]
    return _to_signal_series(signals, bull.index)


def volatility_signals(
    delta: pd.Series,
    volatility: pd.Series,
    threshold: Union[float, pd.Series],
) -> pd.Series:
    """
    Apply :func:`get_volatility_signal` per step.

    ``threshold`` may be a constant or a series aligned with ``delta``
    (e.g. a moving average of the volatility measure itself).
    """
    if len(delta) != len(volatility):
        raise IndicatorConfigError("delta and volatility series must have the same length")
    if isinstance(threshold, pd.Series):
        if len(threshold) != len(delta):
            raise IndicatorConfigError("threshold series must have the same length as delta")
        thresholds = threshold.to_numpy(dtype=float)
    else:
        thresholds = [float(threshold)] * len(delta)
    current = delta.to_numpy(dtype=float)
    prev = _previous(delta).to_numpy(dtype=float)
    vol = volatility.to_numpy(dtype=float)
    signals = [
        get_volatility_signal(current[i], prev[i], vol[i], thresholds[i])
        for i in range(len(current))
    ]
    return _to_signal_series(signals, delta.index)


def condition_signals(bullish: pd.Series, bearish: pd.Series) -> pd.Series:
    if len(bullish) != len(bearish):
        raise IndicatorConfigError("bullish and bearish series must have the same length")
    signals = [
        get_condition_signal(bool(bull), bool(bear))
        for bull, bear in zip(bullish.to_numpy(), bearish.to_numpy())
    ]
    return _to_signal_series(signals, bullish.index)


__all__ = [
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
]
