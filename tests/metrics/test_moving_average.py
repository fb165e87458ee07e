"""Tests for SMA and EMA calculations"""

import pytest

from quant_signals.metrics.moving_average import calculate_ema, calculate_sma, ema_series


class TestSMA:
    """Test simple moving average"""

    def test_sma_insufficient_data(self):
        assert calculate_sma([1.0, 2.0], 3) is None

    def test_sma_exact_period(self):
        assert calculate_sma([1.0, 2.0, 3.0], 3) == 2.0

    def test_sma_uses_trailing_window(self):
        assert calculate_sma([1.0, 2.0, 3.0, 4.0, 5.0], 3) == 4.0

    def test_sma_non_positive_period(self):
        assert calculate_sma([1.0, 2.0], 0) is None


class TestEMA:
    """Test exponential moving average"""

    def test_ema_seeded_with_sma(self):
        # k = 0.5; seed = mean(1, 2, 3) = 2
        assert ema_series([1.0, 2.0, 3.0, 4.0, 5.0], 3) == [2.0, 3.0, 4.0]

    def test_ema_insufficient_data(self):
        assert ema_series([1.0, 2.0], 3) == []
        assert calculate_ema([1.0, 2.0], 3) is None

    def test_ema_constant_series(self):
        assert calculate_ema([7.0] * 30, 10) == pytest.approx(7.0)

    def test_ema_latest_value(self):
        assert calculate_ema([1.0, 2.0, 3.0, 4.0, 5.0], 3) == 4.0
