"""Tests for option dataclasses and configuration errors."""

import logging

import pandas as pd
import pytest

from core.config import IndicatorOptions, SignalThresholds
from core.errors import IndicatorConfigError, check_aligned, validate_length
from core.signals import Signal


class TestIndicatorOptions:
    def test_defaults(self):
        options = IndicatorOptions()
        assert options.include_signals is True
        assert options.rounding_digits is None

    def test_from_dict_round_trip(self):
        payload = {"include_signals": False, "rounding_digits": 3}
        options = IndicatorOptions.from_dict(payload)

        assert options.include_signals is False
        assert options.rounding_digits == 3
        assert options.to_dict() == payload

    def test_from_dict_ignores_unknown_keys(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="core.config"):
            options = IndicatorOptions.from_dict({"rounding_digits": "2", "colour": "red"})

        assert options.rounding_digits == 2
        assert "colour" in caplog.text

    def test_from_empty_payload(self):
        assert IndicatorOptions.from_dict(None) == IndicatorOptions()

    def test_negative_rounding_rejected(self):
        with pytest.raises(IndicatorConfigError):
            IndicatorOptions(rounding_digits=-1)

    def test_finalize_attaches_signals_and_rounds(self):
        frame = pd.DataFrame({"Value": [1.23456, 2.34567]})
        signals = pd.Series([Signal.BULLISH, Signal.NEUTRAL], dtype=object)

        result = IndicatorOptions(rounding_digits=2).finalize(frame, signals)

        assert list(result["Value"]) == [1.23, 2.35]
        assert list(result["Signal"]) == [Signal.BULLISH, Signal.NEUTRAL]
        # Input frame is left untouched
        assert "Signal" not in frame.columns
        assert frame["Value"].iloc[0] == 1.23456

    def test_finalize_without_signals(self):
        frame = pd.DataFrame({"Value": [1.0]})
        result = IndicatorOptions(include_signals=False).finalize(frame, pd.Series([Signal.BUY]))
        assert list(result.columns) == ["Value"]


class TestSignalThresholds:
    def test_defaults(self):
        thresholds = SignalThresholds()
        assert (thresholds.upper, thresholds.lower) == (70.0, 30.0)

    def test_from_dict(self):
        thresholds = SignalThresholds.from_dict({"upper": 80, "lower": "20"})
        assert thresholds.to_dict() == {"upper": 80.0, "lower": 20.0}

    def test_inverted_rejected(self):
        with pytest.raises(IndicatorConfigError):
            SignalThresholds(upper=20.0, lower=80.0)


class TestValidation:
    @pytest.mark.parametrize("length", [1, 14, 500])
    def test_valid_lengths(self, length):
        assert validate_length(length) == length

    @pytest.mark.parametrize("length", [0, -5, 2.0, "3", True, None])
    def test_invalid_lengths(self, length):
        with pytest.raises(IndicatorConfigError):
            validate_length(length)

    def test_rejection_is_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="core.errors"):
            with pytest.raises(IndicatorConfigError):
                validate_length(0, "k")
        assert "non-positive k" in caplog.text

    def test_check_aligned(self):
        check_aligned(pd.Series([1.0, 2.0]), pd.Series([3.0, 4.0]))
        with pytest.raises(IndicatorConfigError, match="same length"):
            check_aligned(pd.Series([1.0]), pd.Series([1.0, 2.0]))
