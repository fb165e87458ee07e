"""
Error classification for the signal engine.

Data quality errors are raised at the ingestion boundary (bad or out-of-order
bars) and surfaced synchronously to the caller. System failures represent
states the engine cannot compute through, such as non-finite indicator output
or invalid configuration.
"""

from .data_quality import (
    DataQualityError,
    TemporalDataError,
    OutOfOrderBarError,
    MissingDataError,
    MalformedDataError,
    InvalidBarError,
    InsufficientDataError,
)
from .system_failures import (
    SystemFailureError,
    IndicatorCalculationError,
    ConfigurationError,
)

__all__ = [
    # Data Quality Errors
    "DataQualityError",
    "TemporalDataError",
    "OutOfOrderBarError",
    "MissingDataError",
    "MalformedDataError",
    "InvalidBarError",
    "InsufficientDataError",
    # System Failures
    "SystemFailureError",
    "IndicatorCalculationError",
    "ConfigurationError",
]
