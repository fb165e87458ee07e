"""
Data quality error classifications for bar ingestion.

These exceptions categorize the ways a bar can be refused at the ingestion
boundary. Nothing past the window store ever sees a bar that raised one of
these.
"""

from typing import Any, Dict, Optional


class DataQualityError(Exception):
    """Base class for data quality issues the caller can react to."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = True


class TemporalDataError(DataQualityError):
    """Timestamp or sequencing issues in market data."""

    def __init__(self, message: str, timestamp: Optional[int] = None,
                 last_timestamp: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.timestamp = timestamp
        self.last_timestamp = last_timestamp


class OutOfOrderBarError(TemporalDataError):
    """Bar timestamp is not strictly after the last bar for its key."""

    def __init__(self, message: str, asset: Optional[str] = None,
                 timeframe: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.asset = asset
        self.timeframe = timeframe


class MissingDataError(DataQualityError):
    """Required data is completely missing."""

    def __init__(self, message: str, data_type: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.data_type = data_type


class MalformedDataError(DataQualityError):
    """Data exists but is in incorrect format."""

    def __init__(self, message: str, raw_data: Optional[str] = None,
                 expected_format: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.raw_data = raw_data
        self.expected_format = expected_format


class InvalidBarError(MalformedDataError):
    """Bar violates the OHLCV invariants (non-finite, non-positive, inconsistent)."""

    def __init__(self, message: str, field: Optional[str] = None,
                 value: Any = None, **kwargs):
        super().__init__(message, **kwargs)
        self.field = field
        self.value = value


class InsufficientDataError(DataQualityError):
    """Not enough historical data for a calculation the caller insists on."""

    def __init__(self, message: str, required_count: Optional[int] = None,
                 available_count: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.required_count = required_count
        self.available_count = available_count
