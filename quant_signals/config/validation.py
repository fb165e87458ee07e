"""Configuration validation utilities."""

from dataclasses import dataclass, fields
from typing import Any

from .defaults import IndicatorParams


@dataclass(frozen=True)
class ValidationIssue:
    """Represents a configuration validation problem."""
    field: str
    message: str
    value: Any


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


class ConfigValidator:
    """Validates configuration parameters."""

    PERIOD_FIELDS = (
        "sma_period",
        "rsi_period",
        "macd_fast",
        "macd_slow",
        "macd_signal",
        "bollinger_period",
        "stochastic_period",
        "stochastic_signal_period",
    )

    @staticmethod
    def validate_indicator_params(params: dict[str, Any]) -> list[ValidationIssue]:
        """Validate indicator periods."""
        issues = []

        for name in ConfigValidator.PERIOD_FIELDS:
            if name in params and not _is_positive_int(params[name]):
                issues.append(ValidationIssue(
                    field=f"indicators.{name}",
                    message="Must be a positive integer",
                    value=params[name]
                ))

        fast, slow = params.get("macd_fast"), params.get("macd_slow")
        if _is_positive_int(fast) and _is_positive_int(slow) and fast >= slow:
            issues.append(ValidationIssue(
                field="indicators.macd_fast",
                message="Must be smaller than macd_slow",
                value=fast
            ))

        if "bollinger_std_dev" in params:
            value = params["bollinger_std_dev"]
            if not _is_number(value) or value < 0:
                issues.append(ValidationIssue(
                    field="indicators.bollinger_std_dev",
                    message="Must be a non-negative number",
                    value=value
                ))

        return issues

    @staticmethod
    def validate_rule_thresholds(params: dict[str, Any]) -> list[ValidationIssue]:
        """Validate rule thresholds."""
        issues = []

        for name, value in params.items():
            if not _is_number(value) or value < 0:
                issues.append(ValidationIssue(
                    field=f"rules.{name}",
                    message="Must be a non-negative number",
                    value=value
                ))

        for low, high in (("rsi_oversold", "rsi_overbought"),
                          ("stochastic_oversold", "stochastic_overbought"),
                          ("bearish_buy_ratio", "bullish_buy_ratio")):
            low_value, high_value = params.get(low), params.get(high)
            if _is_number(low_value) and _is_number(high_value) and low_value >= high_value:
                issues.append(ValidationIssue(
                    field=f"rules.{low}",
                    message=f"Must be smaller than {high}",
                    value=low_value
                ))

        return issues

    @staticmethod
    def validate_scoring_params(params: dict[str, Any]) -> list[ValidationIssue]:
        """Validate scoring parameters."""
        issues = []

        for name, value in params.items():
            if not _is_number(value) or value < 0:
                issues.append(ValidationIssue(
                    field=f"scoring.{name}",
                    message="Must be a non-negative number",
                    value=value
                ))

        threshold = params.get("detection_threshold")
        if _is_number(threshold) and threshold > 100:
            issues.append(ValidationIssue(
                field="scoring.detection_threshold",
                message="Must be within [0, 100]",
                value=threshold
            ))

        for name in ("evaluation_window_ms", "retention_window_ms"):
            if name in params and not _is_positive_int(params[name]):
                issues.append(ValidationIssue(
                    field=f"scoring.{name}",
                    message="Must be a positive integer",
                    value=params[name]
                ))

        return issues

    @staticmethod
    def validate_social_params(params: dict[str, Any]) -> list[ValidationIssue]:
        """Validate social evidence parameters."""
        issues = []

        scale = params.get("engagement_scale")
        if scale is not None and (not _is_number(scale) or scale <= 0):
            issues.append(ValidationIssue(
                field="social.engagement_scale",
                message="Must be a positive number",
                value=scale
            ))

        weight = params.get("default_weight")
        if weight is not None and (not _is_number(weight) or not 0 <= weight <= 1):
            issues.append(ValidationIssue(
                field="social.default_weight",
                message="Must be a number between 0 and 1",
                value=weight
            ))

        return issues

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationIssue]:
        """Validate complete configuration."""
        issues = []

        indicators = config.get("indicators", {})
        issues.extend(ConfigValidator.validate_indicator_params(indicators))

        if "rules" in config:
            issues.extend(ConfigValidator.validate_rule_thresholds(config["rules"]))

        if "scoring" in config:
            issues.extend(ConfigValidator.validate_scoring_params(config["scoring"]))

        if "social" in config:
            issues.extend(ConfigValidator.validate_social_params(config["social"]))

        max_bars = config.get("window", {}).get("max_bars")
        if max_bars is not None:
            if not _is_positive_int(max_bars):
                issues.append(ValidationIssue(
                    field="window.max_bars",
                    message="Must be a positive integer",
                    value=max_bars
                ))
            elif not issues:
                known = {f.name for f in fields(IndicatorParams)}
                periods = {k: v for k, v in indicators.items() if k in known}
                required = IndicatorParams(**periods).max_lookback() + 1
                if max_bars < required:
                    issues.append(ValidationIssue(
                        field="window.max_bars",
                        message=f"Must retain at least {required} bars for the configured lookbacks",
                        value=max_bars
                    ))

        return issues
