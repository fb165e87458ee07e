"""
Rolling window store.

Keeps an ordered, bounded buffer of bars per (asset, timeframe). Every
indicator reads its trailing window from here, so the store is the only
place bar history lives.
"""

import threading
from collections import deque
from typing import Iterator, Optional

import structlog

from ..config.defaults import WindowStoreParams
from ..errors import OutOfOrderBarError
from .models import Bar, WindowKey

logger = structlog.get_logger(__name__)

PRICE_FIELDS = ("open", "high", "low", "close", "volume")


class RollingWindowStore:
    """Per-key bounded bar history with strict timestamp ordering."""

    def __init__(self, params: Optional[WindowStoreParams] = None):
        self.params = params or WindowStoreParams()
        self._bars: dict[WindowKey, deque] = {}
        self._locks: dict[WindowKey, threading.RLock] = {}
        # bumped on every mutation and never reset
        self._generations: dict[WindowKey, int] = {}
        self._registry_lock = threading.Lock()

    def lock(self, key: WindowKey) -> threading.RLock:
        """
        Get the exclusive-access lock for a key.

        Hold it across append + recompute so readers never see a half-applied
        update. Locks for different keys are independent.
        """
        with self._registry_lock:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = threading.RLock()
            return lock

    def _get_bars(self, key: WindowKey) -> deque:
        with self._registry_lock:
            bars = self._bars.get(key)
            if bars is None:
                bars = self._bars[key] = deque(maxlen=self.params.max_bars)
            return bars

    def append(self, bar: Bar) -> Optional[Bar]:
        """
        Append a bar to its key's window, evicting the oldest past capacity.

        Returns:
            The evicted bar, or None if the window had room

        Raises:
            OutOfOrderBarError: If the timestamp is not strictly greater than
                the last appended bar for the same key
        """
        key = bar.key
        with self.lock(key):
            bars = self._get_bars(key)
            if bars and bar.timestamp <= bars[-1].timestamp:
                last_ts = bars[-1].timestamp
                logger.warning(
                    "Rejected out-of-order bar",
                    key=str(key),
                    timestamp=bar.timestamp,
                    last_timestamp=last_ts
                )
                raise OutOfOrderBarError(
                    f"Bar timestamp {bar.timestamp} is not after last bar {last_ts} for {key}",
                    asset=bar.asset,
                    timeframe=bar.timeframe.value,
                    timestamp=bar.timestamp,
                    last_timestamp=last_ts,
                )
            evicted = bars[0] if len(bars) == bars.maxlen else None
            bars.append(bar)
            self._bump(key)
            return evicted

    def rollback(self, key: WindowKey, evicted: Optional[Bar] = None) -> Optional[Bar]:
        """
        Undo the most recent append for a key.

        Args:
            key: Key whose last bar is removed
            evicted: Bar returned by that append, restored at the oldest end

        Returns:
            The removed bar, or None if the key was empty
        """
        with self.lock(key):
            bars = self._bars.get(key)
            if not bars:
                return None
            bar = bars.pop()
            if evicted is not None:
                bars.appendleft(evicted)
            self._bump(key)
            return bar

    def generation(self, key: WindowKey) -> int:
        """Counter that changes whenever the key's window changes."""
        with self._registry_lock:
            return self._generations.get(key, 0)

    def _bump(self, key: WindowKey) -> None:
        with self._registry_lock:
            self._generations[key] = self._generations.get(key, 0) + 1

    def window(self, key: WindowKey, period: int, field: str = "close") -> Optional[tuple[float, ...]]:
        """
        Most recent `period` values of a bar field, oldest first.

        Returns:
            Tuple of exactly `period` values, or None if fewer bars exist
        """
        if field not in PRICE_FIELDS:
            raise ValueError(f"Unknown bar field: {field}")
        if period <= 0:
            raise ValueError(f"period must be positive, got {period}")

        with self.lock(key):
            bars = self._bars.get(key)
            if bars is None or len(bars) < period:
                return None
            start = len(bars) - period
            return tuple(getattr(bars[i], field) for i in range(start, len(bars)))

    def series(self, key: WindowKey, field: str = "close") -> tuple[float, ...]:
        """All retained values of a bar field, oldest first."""
        if field not in PRICE_FIELDS:
            raise ValueError(f"Unknown bar field: {field}")
        with self.lock(key):
            return tuple(getattr(bar, field) for bar in self._bars.get(key, ()))

    def last_bar(self, key: WindowKey) -> Optional[Bar]:
        with self.lock(key):
            bars = self._bars.get(key)
            return bars[-1] if bars else None

    def bar_count(self, key: WindowKey) -> int:
        with self.lock(key):
            return len(self._bars.get(key, ()))

    def keys(self) -> list[WindowKey]:
        with self._registry_lock:
            return list(self._bars)

    def __iter__(self) -> Iterator[WindowKey]:
        return iter(self.keys())

    def clear(self, key: Optional[WindowKey] = None) -> None:
        """Drop history for one key, or for every key."""
        if key is None:
            with self._registry_lock:
                for cleared in self._bars:
                    self._generations[cleared] = self._generations.get(cleared, 0) + 1
                self._bars.clear()
            return
        with self.lock(key), self._registry_lock:
            if self._bars.pop(key, None) is not None:
                self._generations[key] = self._generations.get(key, 0) + 1
