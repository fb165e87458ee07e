"""
Result models produced by the signal engine.
"""
