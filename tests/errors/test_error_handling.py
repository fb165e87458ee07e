"""Tests for error classification."""

import pytest

from quant_signals.errors import (
    ConfigurationError,
    DataQualityError,
    IndicatorCalculationError,
    InsufficientDataError,
    InvalidBarError,
    MalformedDataError,
    MissingDataError,
    OutOfOrderBarError,
    SystemFailureError,
    TemporalDataError,
)


class TestErrorHierarchy:
    """Test recoverable vs unrecoverable classification"""

    @pytest.mark.parametrize("error_type", [
        TemporalDataError,
        OutOfOrderBarError,
        MissingDataError,
        MalformedDataError,
        InvalidBarError,
        InsufficientDataError,
    ])
    def test_data_quality_errors_are_recoverable(self, error_type):
        error = error_type("bad data")
        assert isinstance(error, DataQualityError)
        assert error.recoverable is True
        assert error.context == {}

    @pytest.mark.parametrize("error_type", [IndicatorCalculationError, ConfigurationError])
    def test_system_failures_are_not_recoverable(self, error_type):
        error = error_type("broken")
        assert isinstance(error, SystemFailureError)
        assert error.recoverable is False

    def test_out_of_order_carries_ordering_details(self):
        error = OutOfOrderBarError(
            "late bar", asset="ETH", timeframe="1m",
            timestamp=10, last_timestamp=20, context={"source": "ws"}
        )
        assert error.asset == "ETH"
        assert error.timestamp == 10
        assert error.last_timestamp == 20
        assert error.context == {"source": "ws"}
        assert str(error) == "late bar"

    def test_invalid_bar_is_malformed_data(self):
        error = InvalidBarError("nan close", field="close", value=float("nan"))
        assert isinstance(error, MalformedDataError)
        assert error.field == "close"

    def test_configuration_error_issues(self):
        assert ConfigurationError("bad").issues == []
        assert ConfigurationError("bad", issues=["x"]).issues == ["x"]

    def test_indicator_error_details(self):
        error = IndicatorCalculationError("nan rsi", indicator="rsi", calculation_input={"key": "ETH:1m"})
        assert error.indicator == "rsi"
        assert error.calculation_input == {"key": "ETH:1m"}
