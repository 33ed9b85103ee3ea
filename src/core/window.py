"""
Append-only windowed aggregation.

``WindowedAggregator`` keeps the full history of a stream together with a
running prefix-sum, so the sum or mean of the trailing ``k`` samples is an
O(1) lookup for any ``k``. Several unrelated window lengths can be queried
against the same step without any extra state.

``rolling_sum`` / ``rolling_mean`` apply the same prefix-sum contract to a
whole ``pd.Series`` at once.
"""
from typing import List, Tuple

import numpy as np
import pandas as pd

from .errors import validate_length


class WindowedAggregator:
    """
    O(1) trailing-window sum and average over an append-only stream.

    Windows longer than the history are treated as zero-padded before the
    first sample: ``sum`` covers the available prefix and ``average`` divides
    by the number of samples actually present.
    """

    def __init__(self) -> None:
        self._values: List[float] = []
        # _prefix[i] is the sum of the first i samples
        self._prefix: List[float] = [0.0]

    def __len__(self) -> int:
        return len(self._values)

    @property
    def count(self) -> int:
        return len(self._values)

    @property
    def values(self) -> Tuple[float, ...]:
        return tuple(self._values)

    def add(self, value: float) -> None:
        value = float(value)
        self._values.append(value)
        self._prefix.append(self._prefix[-1] + value)

    def sum(self, k: int) -> float:
        """Sum of the last ``k`` samples (or all of them if fewer exist)."""
        return self.sum_at(k, len(self._values) - 1)

    def average(self, k: int) -> float:
        """Mean of the last ``k`` samples, divided by the available count."""
        return self.average_at(k, len(self._values) - 1)

    def sum_at(self, k: int, end_index: int) -> float:
        """
        Sum of the ``k`` samples ending at ``end_index`` (inclusive).

        Returns 0.0 when ``end_index`` is outside the recorded history.
        """
        k = validate_length(k, "k")
        if end_index < 0 or end_index >= len(self._values):
            return 0.0
        end = end_index + 1
        start = max(end - k, 0)
        return self._prefix[end] - self._prefix[start]

    def average_at(self, k: int, end_index: int) -> float:
        k = validate_length(k, "k")
        if end_index < 0 or end_index >= len(self._values):
            return 0.0
        available = min(k, end_index + 1)
        return self.sum_at(k, end_index) / available

    def __repr__(self) -> str:
        return f"WindowedAggregator(count={len(self._values)})"


def rolling_sum(series: pd.Series, k: int) -> pd.Series:
    """
    Trailing ``k``-sample sum of a whole series via prefix sums.

    Args:
        series: Input series
        k: Window length

    Returns:
        Series aligned with ``series``; early values cover the available prefix
    """
    k = validate_length(k, "k")
    values = series.to_numpy(dtype=float)
    prefix = np.concatenate(([0.0], np.cumsum(values)))
    end = np.arange(1, len(values) + 1)
    start = np.maximum(end - k, 0)
    return pd.Series(prefix[end] - prefix[start], index=series.index)


def rolling_mean(series: pd.Series, k: int) -> pd.Series:
    """Trailing ``k``-sample mean, dividing by the available count."""
    k = validate_length(k, "k")
    counts = np.minimum(np.arange(1, len(series) + 1), k)
    return rolling_sum(series, k) / counts


__all__ = ["WindowedAggregator", "rolling_sum", "rolling_mean"]
