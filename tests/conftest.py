import sys
from pathlib import Path

import numpy as np
import pandas as pd
import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

N_BARS = 500


def _random_walk(seed: int, n_bars: int = N_BARS) -> pd.DataFrame:
    rng = np.random.default_rng(seed)
    close = 100 * np.exp(np.cumsum(rng.normal(0, 0.01, n_bars)))
    spread = np.abs(rng.normal(0, 1.0, n_bars))
    index = pd.date_range("2025-01-01", periods=n_bars, freq="15min", tz="UTC")
    return pd.DataFrame(
        {
            "Open": close + rng.normal(0, 0.5, n_bars),
            "High": close + spread,
            "Low": close - spread,
            "Close": close,
            "Volume": rng.integers(1000, 10000, n_bars),
        },
        index=index,
    )


@pytest.fixture(scope="module")
def ohlcv():
    """
    Seeded synthetic OHLCV frame.

    Prices follow a geometric random walk from 100, so every indicator sees both
    trends and reversals without depending on external market data.
    """
    return _random_walk(seed=42)


@pytest.fixture(scope="module")
def close_series(ohlcv):
    return ohlcv["Close"]


@pytest.fixture
def scenario_series():
    return pd.Series([10.0, 11.0, 9.0, 12.0, 12.0, 8.0])
