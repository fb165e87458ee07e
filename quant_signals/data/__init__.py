"""
Data ingestion module.

Canonical bar and market summary models, bar validation, raw payload parsing,
and the rolling window store that all indicator math reads from.
"""
