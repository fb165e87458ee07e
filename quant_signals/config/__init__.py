"""Configuration defaults, loading and validation."""

from .defaults import DefaultConfig, get_default_config

__all__ = ["DefaultConfig", "get_default_config"]
