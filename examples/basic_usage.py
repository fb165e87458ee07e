#!/usr/bin/env python3
"""
Basic Usage Example - Quant Signals Engine

This script demonstrates the basic usage of the signal engine with simulated
market data. It shows how to:
- Stream bars into the engine and read indicator snapshots and signals
- Derive market signals from a 24h DEX pair summary
- Turn social posts into evidence
- Score assets and detect opportunities

Run: python examples/basic_usage.py
"""

import math
import time

from quant_signals.data.models import Timeframe
from quant_signals.data.parsers import parse_bar, parse_market_summary
from quant_signals.engine import AssetEvidence, SignalEngine
from quant_signals.logging import configure_logging
from quant_signals.scoring.social import collect_evidence, load_influencers, parse_post


def simulated_klines(start_ms: int, count: int, base: float) -> list[list[str]]:
    """Exchange-style kline rows: [ts, open, high, low, close, volume]."""
    rows = []
    close = base
    for i in range(count):
        open_price = close
        close = base * (1 + 0.02 * math.sin(i / 6.0) + 0.001 * i)
        high = max(open_price, close) * 1.002
        low = min(open_price, close) * 0.998
        rows.append([str(start_ms + i * 60_000), f"{open_price:.4f}", f"{high:.4f}",
                     f"{low:.4f}", f"{close:.4f}", str(1000 + 10 * i)])
    return rows


def main():
    configure_logging(level="WARNING")

    print("Quant Signals - Basic Usage Example")
    print("=" * 50)

    engine = SignalEngine()
    now_ms = int(time.time() * 1000)

    print("1. Streaming 60 one-minute bars for ETH...")
    result = None
    for row in simulated_klines(now_ms - 60 * 60_000, 60, 3300.0):
        result = engine.analyze(parse_bar("ETH", Timeframe.MINUTE_1, row))

    snapshot = result.snapshot
    print(f"   RSI: {snapshot.rsi:.2f}")
    print(f"   SMA: {snapshot.sma:.2f}")
    print(f"   Bollinger: {snapshot.bollinger.lower:.2f} / {snapshot.bollinger.middle:.2f} "
          f"/ {snapshot.bollinger.upper:.2f}")
    print(f"   MACD: {snapshot.macd.macd:.4f} signal {snapshot.macd.signal:.4f} "
          f"histogram {snapshot.macd.histogram:.4f}")
    print(f"   Stochastic: %K {snapshot.stochastic.k:.2f} %D {snapshot.stochastic.d:.2f}")
    for signal in result.signals:
        print(f"   -> {signal.kind.value} {signal.action.value} ({signal.strength.name}): {signal.reason}")
    print()

    print("2. Analyzing the 24h market summary...")
    pair = {
        "chainId": "ethereum",
        "priceUsd": "3312.50",
        "priceChange": {"h24": 12.4},
        "volume": {"m5": 90_000, "h1": 800_000, "h6": 6_000_000, "h24": 42_000_000},
        "liquidity": {"usd": 9_500_000},
        "txns": {"h24": {"buys": 5200, "sells": 3100}},
        "marketCap": 398_000_000_000,
    }
    market = parse_market_summary(pair, timestamp=now_ms)
    market_analysis = engine.analyze_market("ETH", market)
    print(f"   Sentiment: {market_analysis.sentiment.value}, volume trend: {market_analysis.volume_trend.value}")
    for signal in market_analysis.signals:
        print(f"   -> {signal.kind.value} {signal.action.value} ({signal.strength.name}): {signal.reason}")
    print()

    print("3. Collecting social evidence...")
    influencers = load_influencers('[{"handle": "defi_dave", "weight": 0.9}]')
    posts = [
        parse_post({"id": "1", "username": "defi_dave", "text": "ETH defi season is back",
                    "timestamp": now_ms // 1000 - 120, "likes": 900, "retweets": 300, "replies": 80}),
        parse_post({"id": "2", "username": "defi_dave", "text": "lunch",
                    "timestamp": now_ms // 1000 - 60, "likes": 5}),
    ]
    evidence = collect_evidence({"defi_dave": posts}, influencers)
    print(f"   {len(evidence)} of {len(posts)} posts became evidence")
    print()

    print("4. Detecting opportunities...")
    signals = list(result.signals) + list(market_analysis.signals)
    opportunities = engine.detect_opportunities(
        [AssetEvidence(asset="ETH", sources=evidence, signals=signals, market=market)],
        now_ms=now_ms,
    )
    if not opportunities:
        print("   No opportunity reached the detection threshold")
    for opportunity in opportunities:
        score = opportunity.score
        print(f"   {opportunity.id}: {opportunity.status.value} overall {score.overall:.1f} "
              f"(social {score.social:.1f}, technical {score.technical:.1f})")
        print(f"   Risks: {', '.join(opportunity.risks)}")
    print()

    print("5. Engine stats:")
    for name, value in engine.get_runtime_stats().items():
        print(f"   {name}: {value}")


if __name__ == "__main__":
    main()
