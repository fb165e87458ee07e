"""
Centralized logging configuration for the signal engine.

All components log through structlog so signal decisions and opportunity
transitions come out as structured events, rendered either for a console or
as JSON lines for log shipping.
"""
import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import FilteringBoundLogger


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
    include_caller: bool = False,
    extra_processors: Optional[list] = None
) -> None:
    """
    Configure structlog for the entire application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, output JSON format; otherwise human-readable
        include_timestamp: Include timestamp in log output
        include_caller: Include caller information (filename, line number)
        extra_processors: Additional structlog processors to include
    """
    log_level = getattr(logging, level.upper())

    logging.basicConfig(
        level=log_level,
        stream=sys.stdout,
        format="%(message)s"
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    if include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder(
            parameters=[structlog.processors.CallsiteParameter.FILENAME,
                        structlog.processors.CallsiteParameter.LINENO]
        ))

    if extra_processors:
        processors.extend(extra_processors)

    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance
    """
    return structlog.get_logger(name)


def get_signal_logger(name: str) -> FilteringBoundLogger:
    """Logger bound for rule-engine decisions."""
    return get_logger(name).bind(
        subsystem="signals",
        audit_trail=True
    )


def get_scoring_logger(name: str) -> FilteringBoundLogger:
    """Logger bound for opportunity scoring and lifecycle events."""
    return get_logger(name).bind(
        subsystem="scoring",
        audit_trail=True
    )


def log_signal_decision(
    logger: FilteringBoundLogger,
    asset: str,
    timeframe: str,
    kind: str,
    action: str,
    strength: str,
    reason: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a generated signal with standardized format.

    Args:
        logger: Structlog logger instance
        asset: Asset symbol the signal belongs to
        timeframe: Timeframe of the evaluated window
        kind: Signal kind (RSI, MACD, ...)
        action: BUY, SELL or HOLD
        strength: WEAK, MEDIUM or STRONG
        reason: Human-readable reason
        context: Additional context data
    """
    bound_logger = logger.bind(
        asset=asset,
        timeframe=timeframe,
        signal_kind=kind,
        signal_action=action,
        signal_strength=strength,
        reason=reason,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.info("Signal generated")


def log_opportunity_transition(
    logger: FilteringBoundLogger,
    opportunity_id: str,
    asset: str,
    from_status: Optional[str],
    to_status: str,
    overall_score: float,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log an opportunity lifecycle transition with standardized format.

    Args:
        logger: Structlog logger instance
        opportunity_id: ID of the opportunity
        asset: Asset symbol
        from_status: Previous status (None when newly created)
        to_status: New status
        overall_score: Overall score at the time of the transition
        context: Additional context data
    """
    bound_logger = logger.bind(
        opportunity_id=opportunity_id,
        asset=asset,
        from_status=from_status,
        to_status=to_status,
        overall_score=overall_score,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.info("Opportunity transition")
