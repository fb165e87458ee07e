"""
System failure error classifications.

These exceptions represent conditions the engine cannot compute through and
that typically need a configuration fix or code change to resolve.
"""

from typing import Any, Dict, Optional


class SystemFailureError(Exception):
    """Base class for unrecoverable system failures."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class IndicatorCalculationError(SystemFailureError):
    """Indicator produced a non-finite or out-of-range value."""

    def __init__(self, message: str, indicator: Optional[str] = None,
                 calculation_input: Optional[Dict[str, Any]] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.indicator = indicator
        self.calculation_input = calculation_input


class ConfigurationError(SystemFailureError):
    """Configuration overrides are unknown or fail validation."""

    def __init__(self, message: str, issues: Optional[list] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.issues = issues or []
