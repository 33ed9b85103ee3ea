"""Simple benchmark for moving averages and reference indicators."""

import time

import numpy as np
import pandas as pd

# Add src to path
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from core.window import WindowedAggregator
from indicators.ma import MovingAverageKind, MovingAverageStream, get_ma
from indicators.oscillators import rsi
from indicators.volatility import atr


def _timed(label: str, func, repeats: int = 100) -> None:
    start = time.time()
    for _ in range(repeats):
        func()
    duration = time.time() - start
    print(f"{label:10} - {repeats} calls in {duration:.3f}s ({duration * 1000 / repeats:.1f}ms per call)")


def main() -> None:
    np.random.seed(42)
    n_bars = 10000
    close = 100 * np.exp(np.cumsum(np.random.randn(n_bars) * 0.01))
    spread = np.abs(np.random.randn(n_bars)) * 0.5
    df = pd.DataFrame({"Close": close, "High": close + spread, "Low": close - spread})

    print("Benchmarking moving averages...")
    for kind in MovingAverageKind:
        _timed(kind.value, lambda: get_ma(df["Close"], kind, 50), repeats=20)

    print("\nBenchmarking indicators...")
    _timed("RSI", lambda: rsi(df["Close"], 14), repeats=20)
    _timed("ATR", lambda: atr(df["High"], df["Low"], df["Close"], 14), repeats=20)

    print("\nBenchmarking streaming updates...")
    values = df["Close"].tolist()

    def _aggregate() -> None:
        agg = WindowedAggregator()
        for value in values:
            agg.add(value)
            agg.average(50)

    def _stream() -> None:
        stream = MovingAverageStream(MovingAverageKind.WEIGHTED, 50)
        for value in values:
            stream.update(value)

    _timed("Aggregator", _aggregate, repeats=5)
    _timed("WMA stream", _stream, repeats=5)


if __name__ == "__main__":
    main()
