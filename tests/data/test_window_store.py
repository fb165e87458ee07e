"""Tests for the rolling window store"""

import pytest

from quant_signals.config.defaults import WindowStoreParams
from quant_signals.data.models import Timeframe, WindowKey
from quant_signals.data.window import RollingWindowStore
from quant_signals.errors import OutOfOrderBarError, TemporalDataError
from conftest import BASE_TS, make_bar, make_bars

ETH_1M = WindowKey("ETH", Timeframe.MINUTE_1)


class TestRollingWindowStore:
    """Test ordered, bounded bar history"""

    def test_window_absent_until_filled(self, store):
        for bar in make_bars([1.0, 2.0]):
            store.append(bar)

        assert store.window(ETH_1M, 3) is None
        assert store.window(ETH_1M, 2) == (1.0, 2.0)

    def test_window_is_trailing_and_ordered(self, store):
        for bar in make_bars([1.0, 2.0, 3.0, 4.0, 5.0]):
            store.append(bar)

        assert store.window(ETH_1M, 3) == (3.0, 4.0, 5.0)
        assert store.window(ETH_1M, 2, field="volume") == (1000.0, 1000.0)

    def test_out_of_order_bar_rejected(self, store):
        store.append(make_bar(10.0, timestamp=BASE_TS + 60_000))

        with pytest.raises(OutOfOrderBarError) as exc_info:
            store.append(make_bar(11.0, timestamp=BASE_TS))

        error = exc_info.value
        assert isinstance(error, TemporalDataError)
        assert error.asset == "ETH"
        assert error.timeframe == "1m"
        assert error.last_timestamp == BASE_TS + 60_000
        assert store.bar_count(ETH_1M) == 1

    def test_duplicate_timestamp_rejected(self, store):
        store.append(make_bar(10.0))
        with pytest.raises(OutOfOrderBarError):
            store.append(make_bar(10.5))
        assert store.last_bar(ETH_1M).close == 10.0

    def test_capacity_evicts_oldest(self):
        store = RollingWindowStore(WindowStoreParams(max_bars=3))
        for bar in make_bars([1.0, 2.0, 3.0, 4.0]):
            store.append(bar)

        assert store.bar_count(ETH_1M) == 3
        assert store.series(ETH_1M) == (2.0, 3.0, 4.0)

    def test_keys_are_independent(self, store):
        store.append(make_bar(10.0, timestamp=BASE_TS + 60_000))
        # Earlier timestamp on another asset and another timeframe is fine
        store.append(make_bar(20.0, timestamp=BASE_TS, asset="BTC"))
        store.append(make_bar(30.0, timestamp=BASE_TS, timeframe=Timeframe.HOUR_1))

        assert len(store.keys()) == 3
        assert store.series(WindowKey("BTC", Timeframe.MINUTE_1)) == (20.0,)
        assert set(store) == {
            ETH_1M,
            WindowKey("BTC", Timeframe.MINUTE_1),
            WindowKey("ETH", Timeframe.HOUR_1),
        }

    def test_unknown_field_and_bad_period(self, store):
        with pytest.raises(ValueError):
            store.window(ETH_1M, 3, field="vwap")
        with pytest.raises(ValueError):
            store.window(ETH_1M, 0)
        with pytest.raises(ValueError):
            store.series(ETH_1M, field="vwap")

    def test_empty_key_reads(self, store):
        assert store.last_bar(ETH_1M) is None
        assert store.bar_count(ETH_1M) == 0
        assert store.series(ETH_1M) == ()

    def test_clear(self, store):
        store.append(make_bar(10.0))
        store.append(make_bar(20.0, asset="BTC"))

        store.clear(ETH_1M)
        assert store.bar_count(ETH_1M) == 0
        assert store.bar_count(WindowKey("BTC", Timeframe.MINUTE_1)) == 1

        store.clear()
        assert store.keys() == []

    def test_lock_is_per_key_and_reentrant(self, store):
        btc = WindowKey("BTC", Timeframe.MINUTE_1)
        assert store.lock(ETH_1M) is store.lock(ETH_1M)
        assert store.lock(ETH_1M) is not store.lock(btc)

        with store.lock(ETH_1M):
            store.append(make_bar(10.0))
            assert store.bar_count(ETH_1M) == 1

    def test_generation_changes_on_every_mutation(self, store):
        seen = [store.generation(ETH_1M)]
        store.append(make_bar(10.0))
        seen.append(store.generation(ETH_1M))
        store.clear(ETH_1M)
        seen.append(store.generation(ETH_1M))
        store.append(make_bar(10.0))
        seen.append(store.generation(ETH_1M))
        store.clear()
        seen.append(store.generation(ETH_1M))

        assert len(set(seen)) == len(seen)

    def test_rollback_restores_evicted_bar(self):
        store = RollingWindowStore(WindowStoreParams(max_bars=3))
        bars = make_bars([1.0, 2.0, 3.0, 4.0])
        for bar in bars[:3]:
            assert store.append(bar) is None

        evicted = store.append(bars[3])
        assert evicted == bars[0]

        assert store.rollback(ETH_1M, evicted) == bars[3]
        assert store.series(ETH_1M) == (1.0, 2.0, 3.0)

    def test_rollback_empty_key(self, store):
        assert store.rollback(ETH_1M) is None
