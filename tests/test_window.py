"""Tests for the append-only windowed aggregator."""

import numpy as np
import pandas as pd
import pytest

from core.errors import IndicatorConfigError
from core.window import WindowedAggregator, rolling_mean, rolling_sum


class TestWindowCorrectness:
    """Sums must match brute-force recomputation after every add."""

    @pytest.mark.parametrize("n_samples", [0, 1, 2, 7, 64, 200])
    def test_sum_matches_brute_force_for_every_k(self, n_samples):
        rng = np.random.default_rng(n_samples)
        values = rng.normal(0, 10, n_samples)
        aggregator = WindowedAggregator()

        for n, value in enumerate(values, start=1):
            aggregator.add(value)
            for k in range(1, n + 1):
                expected = values[n - k:n].sum()
                assert aggregator.sum(k) == pytest.approx(expected, abs=1e-9)
                assert aggregator.average(k) == pytest.approx(expected / k, abs=1e-9)

    def test_long_history_spot_checks(self):
        rng = np.random.default_rng(1000)
        values = rng.normal(100, 5, 1000)
        aggregator = WindowedAggregator()

        for n, value in enumerate(values, start=1):
            aggregator.add(value)
            for k in (1, 7, 14, 28, n):
                if k > n:
                    continue
                assert aggregator.sum(k) == pytest.approx(values[n - k:n].sum(), rel=1e-12, abs=1e-9)

    def test_several_window_lengths_at_same_step(self):
        aggregator = WindowedAggregator()
        for value in range(1, 31):
            aggregator.add(value)

        assert aggregator.sum(7) == sum(range(24, 31))
        assert aggregator.sum(14) == sum(range(17, 31))
        assert aggregator.sum(28) == sum(range(3, 31))
        # Earlier queries are not disturbed by later ones
        assert aggregator.sum(7) == sum(range(24, 31))

    def test_scenario_window_sum(self, scenario_series):
        aggregator = WindowedAggregator()
        for value in scenario_series:
            aggregator.add(value)

        assert aggregator.sum(3) == 32.0
        assert aggregator.average(3) == pytest.approx(32.0 / 3)


class TestShortHistory:
    """Windows longer than the history cover the available prefix."""

    def test_empty_aggregator_returns_zero(self):
        aggregator = WindowedAggregator()
        assert aggregator.sum(5) == 0.0
        assert aggregator.average(5) == 0.0
        assert len(aggregator) == 0

    def test_average_divides_by_available_count(self):
        aggregator = WindowedAggregator()
        aggregator.add(4.0)
        aggregator.add(8.0)

        assert aggregator.sum(10) == 12.0
        assert aggregator.average(10) == 6.0

    @pytest.mark.parametrize("k", [0, -1])
    def test_non_positive_window_rejected(self, k):
        aggregator = WindowedAggregator()
        aggregator.add(1.0)
        with pytest.raises(IndicatorConfigError):
            aggregator.sum(k)
        with pytest.raises(IndicatorConfigError):
            aggregator.average(k)

    def test_non_integer_window_rejected(self):
        aggregator = WindowedAggregator()
        aggregator.add(1.0)
        with pytest.raises(IndicatorConfigError):
            aggregator.sum(2.5)


class TestHistoricalQueries:
    def test_sum_at_earlier_step(self):
        aggregator = WindowedAggregator()
        for value in [1.0, 2.0, 3.0, 4.0, 5.0]:
            aggregator.add(value)

        assert aggregator.sum_at(2, 2) == 5.0
        assert aggregator.sum_at(10, 1) == 3.0
        assert aggregator.average_at(3, 3) == 3.0
        assert aggregator.average_at(10, 1) == 1.5

    def test_out_of_range_end_index_returns_zero(self):
        aggregator = WindowedAggregator()
        aggregator.add(1.0)

        assert aggregator.sum_at(1, -1) == 0.0
        assert aggregator.sum_at(1, 5) == 0.0
        assert aggregator.average_at(1, 5) == 0.0

    def test_history_is_append_only(self):
        aggregator = WindowedAggregator()
        for value in [3, 1, 2]:
            aggregator.add(value)

        snapshot = aggregator.values
        aggregator.add(9)

        assert aggregator.values[:3] == snapshot
        assert aggregator.count == 4


class TestVectorisedWindows:
    def test_rolling_sum_matches_aggregator(self, close_series):
        aggregator = WindowedAggregator()
        expected = []
        for value in close_series:
            aggregator.add(value)
            expected.append(aggregator.sum(14))

        result = rolling_sum(close_series, 14)

        assert result.index.equals(close_series.index)
        np.testing.assert_allclose(result.to_numpy(), expected, rtol=1e-12, atol=1e-9)

    def test_rolling_mean_uses_available_prefix(self, scenario_series):
        result = rolling_mean(scenario_series, 3)
        expected = [10.0, 10.5, 10.0, 32.0 / 3, 11.0, 32.0 / 3]

        np.testing.assert_allclose(result.to_numpy(), expected)

    def test_rolling_on_empty_series(self):
        result = rolling_sum(pd.Series([], dtype=float), 3)
        assert result.empty
