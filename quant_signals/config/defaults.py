"""Default configuration parameters for the signal engine."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class IndicatorParams:
    """Indicator lookback periods."""
    sma_period: int = 20
    rsi_period: int = 14

    # MACD
    macd_fast: int = 12
    macd_slow: int = 26
    macd_signal: int = 9

    # Bollinger Bands
    bollinger_period: int = 20
    bollinger_std_dev: float = 2.0

    # Stochastic oscillator
    stochastic_period: int = 14
    stochastic_signal_period: int = 3

    def max_lookback(self) -> int:
        """Bars needed before every indicator is defined."""
        return max(
            self.sma_period,
            self.rsi_period + 1,
            self.macd_slow + self.macd_signal,
            self.bollinger_period,
            self.stochastic_period + self.stochastic_signal_period - 1,
        )


@dataclass(frozen=True)
class RuleThresholds:
    """Fixed thresholds used by the signal rule layer."""
    # Indicator rules
    rsi_overbought: float = 70.0
    rsi_oversold: float = 30.0
    stochastic_overbought: float = 80.0
    stochastic_oversold: float = 20.0

    # Market summary rules
    price_change_pct: float = 10.0                 # |24h change| for PRICE signal
    volume_change_pct: float = 50.0                # |24h vs hourly x24| for VOLUME signal
    sentiment_ratio_deviation: float = 0.3         # |buy/sell - 1| for SENTIMENT signal

    # Trend and sentiment classification
    trend_change_pct: float = 5.0
    bullish_buy_ratio: float = 1.2
    bearish_buy_ratio: float = 0.8


@dataclass(frozen=True)
class ScoringParams:
    """Opportunity scoring parameters."""
    points_per_signal: float = 25.0
    volume_points: float = 25.0
    liquidity_points: float = 25.0
    momentum_points: float = 25.0

    volume_floor: float = 100_000.0                # 24h volume in USD
    liquidity_floor: float = 50_000.0              # pool liquidity in USD

    detection_threshold: float = 60.0
    evaluation_window_ms: int = 5 * 60 * 1000      # idempotence bucket
    retention_window_ms: int = 60 * 60 * 1000      # default expiry horizon


@dataclass(frozen=True)
class SocialParams:
    """Social evidence extraction parameters."""
    engagement_scale: float = 1000.0               # engagement at which confidence saturates
    default_weight: float = 0.7
    default_min_engagement: int = 50
    default_topics: tuple[str, ...] = ("defi", "crypto", "web3", "nft")


@dataclass(frozen=True)
class WindowStoreParams:
    """Rolling window store parameters."""
    max_bars: int = 500                            # retained bars per (asset, timeframe)


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    indicators: IndicatorParams = field(default_factory=IndicatorParams)
    rules: RuleThresholds = field(default_factory=RuleThresholds)
    scoring: ScoringParams = field(default_factory=ScoringParams)
    social: SocialParams = field(default_factory=SocialParams)
    window: WindowStoreParams = field(default_factory=WindowStoreParams)


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        indicators=IndicatorParams(),
        rules=RuleThresholds(),
        scoring=ScoringParams(),
        social=SocialParams(),
        window=WindowStoreParams(),
    )
