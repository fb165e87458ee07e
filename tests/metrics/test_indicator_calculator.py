"""Tests for the indicator calculator"""

from unittest.mock import patch

import pytest

from quant_signals.config.defaults import IndicatorParams
from quant_signals.data.models import Timeframe, WindowKey
from quant_signals.data.window import RollingWindowStore
from quant_signals.errors import IndicatorCalculationError
from quant_signals.metrics.calculator import IndicatorCalculator
from quant_signals.metrics.rsi import calculate_rsi
from quant_signals.models.indicators import IndicatorSnapshot
from conftest import make_bars

KEY = WindowKey("ETH", Timeframe.MINUTE_1)


def _fill(store, closes):
    for bar in make_bars(closes):
        store.append(bar)


class TestIndicatorCalculator:
    """Test snapshot computation over the window store"""

    def setup_method(self):
        self.store = RollingWindowStore()
        self.calculator = IndicatorCalculator()

    def test_empty_key_yields_empty_snapshot(self):
        snapshot = self.calculator.calculate(self.store, KEY)
        assert snapshot == IndicatorSnapshot()
        assert snapshot.defined_values() == {}

    def test_partial_history_reports_none_not_zero(self):
        _fill(self.store, [100.0 + i * 0.5 for i in range(15)])
        snapshot = self.calculator.calculate(self.store, KEY)

        assert snapshot.rsi is not None
        assert snapshot.sma is None
        assert snapshot.bollinger.middle is None
        assert snapshot.macd.macd is None
        assert snapshot.stochastic.k is not None
        # %D needs period + signal - 1 = 16 bars
        assert snapshot.stochastic.d is None

    def test_complete_after_warmup(self):
        warmup = self.calculator.get_warmup_period()
        assert warmup == 35

        _fill(self.store, [100.0 + (i % 7) for i in range(warmup - 1)])
        assert not self.calculator.is_warmed_up(self.store, KEY)
        assert not self.calculator.calculate(self.store, KEY).is_complete()

        next_ts = self.store.last_bar(KEY).timestamp + 60_000
        self.store.append(make_bars([101.0], start_ts=next_ts)[0])
        assert self.calculator.is_warmed_up(self.store, KEY)
        assert self.calculator.calculate(self.store, KEY).is_complete()

    def test_matches_pure_functions(self):
        closes = [50.0, 51.0, 50.5, 52.0, 53.5, 53.0, 54.0, 55.5, 55.0, 56.0,
                  57.0, 56.5, 58.0, 59.0, 58.5, 60.0]
        _fill(self.store, closes)
        snapshot = self.calculator.calculate(self.store, KEY)
        assert snapshot.rsi == calculate_rsi(closes, 14)

    def test_idempotent_without_new_bar(self):
        _fill(self.store, [100.0 + i for i in range(40)])
        first = self.calculator.calculate(self.store, KEY)

        with patch.object(self.calculator, "calculate_from_series") as recompute:
            second = self.calculator.calculate(self.store, KEY)
            recompute.assert_not_called()

        assert second is first

    def test_new_bar_recomputes(self):
        _fill(self.store, [100.0 + i for i in range(40)])
        first = self.calculator.calculate(self.store, KEY)

        next_ts = self.store.last_bar(KEY).timestamp + 60_000
        self.store.append(make_bars([90.0], start_ts=next_ts)[0])
        second = self.calculator.calculate(self.store, KEY)

        assert second.rsi < first.rsi

    def test_invalidate_forces_recompute(self):
        _fill(self.store, [100.0 + i for i in range(20)])
        self.calculator.calculate(self.store, KEY)
        self.calculator.invalidate(KEY)

        with patch.object(self.calculator, "calculate_from_series",
                          return_value=IndicatorSnapshot()) as recompute:
            self.calculator.calculate(self.store, KEY)
            recompute.assert_called_once()

    def test_custom_periods(self):
        calculator = IndicatorCalculator(IndicatorParams(
            sma_period=3, rsi_period=2, macd_fast=2, macd_slow=3, macd_signal=2,
            bollinger_period=3, stochastic_period=2, stochastic_signal_period=2,
        ))
        _fill(self.store, [10.0, 11.0, 12.0, 11.5, 12.5])
        snapshot = calculator.calculate(self.store, KEY)
        assert snapshot.is_complete()
        assert snapshot.sma == pytest.approx((12.0 + 11.5 + 12.5) / 3)

    def test_non_finite_output_is_rejected(self):
        _fill(self.store, [100.0 + i for i in range(20)])
        bad = IndicatorSnapshot(rsi=float("nan"))

        with patch.object(self.calculator, "calculate_from_series", return_value=bad):
            with pytest.raises(IndicatorCalculationError) as exc_info:
                self.calculator.calculate(self.store, KEY)

        assert exc_info.value.indicator == "rsi"
        assert exc_info.value.recoverable is False

    def test_out_of_range_oscillator_is_rejected(self):
        _fill(self.store, [100.0 + i for i in range(20)])
        bad = IndicatorSnapshot(rsi=101.0)

        with patch.object(self.calculator, "calculate_from_series", return_value=bad):
            with pytest.raises(IndicatorCalculationError):
                self.calculator.calculate(self.store, KEY)

    def test_snapshot_to_dict_shape(self):
        _fill(self.store, [100.0 + (i % 5) for i in range(40)])
        data = self.calculator.calculate(self.store, KEY).to_dict()
        assert set(data) == {"rsi", "sma", "bollinger_bands", "macd", "stochastic"}
        assert data["macd"]["histogram"] == data["macd"]["macd"] - data["macd"]["signal"]

    def test_refilled_window_is_not_served_from_cache(self):
        _fill(self.store, [100.0] * 20)
        assert self.calculator.calculate(self.store, KEY).sma == 100.0

        self.store.clear(KEY)
        _fill(self.store, [200.0] * 20)
        assert self.calculator.calculate(self.store, KEY).sma == 200.0
