"""Tests for bar validation at the ingestion boundary"""

import math

import pytest

from quant_signals.data.models import Bar, Timeframe
from quant_signals.data.validators import validate_bar
from quant_signals.errors import DataQualityError, InvalidBarError, MalformedDataError
from conftest import BASE_TS


def _bar(**overrides):
    values = dict(
        asset="ETH",
        timeframe=Timeframe.MINUTE_1,
        timestamp=BASE_TS,
        open=100.0,
        high=105.0,
        low=95.0,
        close=102.0,
        volume=10.0,
    )
    values.update(overrides)
    return Bar(**values)


class TestValidateBar:
    """Test OHLCV invariants"""

    def test_valid_bar_passes(self):
        validate_bar(_bar())

    def test_zero_volume_is_valid(self):
        validate_bar(_bar(volume=0.0))

    def test_flat_bar_is_valid(self):
        validate_bar(_bar(open=1.0, high=1.0, low=1.0, close=1.0))

    @pytest.mark.parametrize("field_name,value", [
        ("open", math.nan),
        ("close", math.inf),
        ("high", -math.inf),
        ("volume", math.nan),
    ])
    def test_non_finite_values_rejected(self, field_name, value):
        with pytest.raises(InvalidBarError) as exc_info:
            validate_bar(_bar(**{field_name: value}))
        assert exc_info.value.field == field_name

    @pytest.mark.parametrize("field_name", ["open", "high", "low", "close"])
    def test_non_positive_prices_rejected(self, field_name):
        with pytest.raises(InvalidBarError) as exc_info:
            validate_bar(_bar(**{field_name: 0.0}))
        assert exc_info.value.field == field_name

    def test_high_below_close_rejected(self):
        with pytest.raises(InvalidBarError) as exc_info:
            validate_bar(_bar(high=101.0, close=102.0))
        assert exc_info.value.field == "high"

    def test_low_above_open_rejected(self):
        with pytest.raises(InvalidBarError) as exc_info:
            validate_bar(_bar(low=100.5))
        assert exc_info.value.field == "low"

    def test_negative_volume_rejected(self):
        with pytest.raises(InvalidBarError):
            validate_bar(_bar(volume=-1.0))

    def test_bad_identity_fields_rejected(self):
        with pytest.raises(InvalidBarError):
            validate_bar(_bar(asset=""))
        with pytest.raises(InvalidBarError):
            validate_bar(_bar(timeframe="1m"))
        with pytest.raises(InvalidBarError):
            validate_bar(_bar(timestamp=-5))
        with pytest.raises(InvalidBarError):
            validate_bar(_bar(timestamp=1.5))
        with pytest.raises(InvalidBarError):
            validate_bar(_bar(close=True))

    def test_invalid_bar_is_recoverable_data_error(self):
        with pytest.raises(DataQualityError) as exc_info:
            validate_bar(_bar(close=math.nan))

        assert isinstance(exc_info.value, MalformedDataError)
        assert exc_info.value.recoverable is True
