"""
Utility functions module.

Time Semantics:
- Bar and evidence timestamps are integer milliseconds since the epoch (UTC)
- Market timestamps carried on bars are authoritative for evaluation
- Wall-clock time is only used when the caller supplies no timestamp
"""
