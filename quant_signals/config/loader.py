"""Configuration loader with 3-tier parameter precedence."""

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional

import yaml

from ..errors import ConfigurationError
from .defaults import (
    DefaultConfig,
    IndicatorParams,
    RuleThresholds,
    ScoringParams,
    SocialParams,
    WindowStoreParams,
    get_default_config,
)
from .validation import ConfigValidator

SECTION_TYPES = {
    "indicators": IndicatorParams,
    "rules": RuleThresholds,
    "scoring": ScoringParams,
    "social": SocialParams,
    "window": WindowStoreParams,
}


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with 3-tier precedence."""

    config_dir: Path
    defaults: DefaultConfig

    @classmethod
    def create(cls, config_dir: Optional[Path] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent / "config"

        return cls(
            config_dir=Path(config_dir),
            defaults=get_default_config(),
        )

    def load_assets_file(self) -> dict[str, Any]:
        """Load the raw per-asset overrides file, empty if absent."""
        assets_file = self.config_dir / "assets.yaml"

        if not assets_file.exists():
            return {}

        with open(assets_file) as f:
            assets_config = yaml.safe_load(f) or {}

        return assets_config.get("assets", {}) or {}

    def load_asset_config(self, asset: str) -> dict[str, Any]:
        """Load asset-specific configuration overrides."""
        return self.load_assets_file().get(asset, {}) or {}

    def merge_config(
        self,
        asset: str,
        overrides: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        """
        Merge configuration with 3-tier precedence.

        Priority order:
        1. Call-site overrides (highest priority)
        2. Asset-specific overrides
        3. Global defaults (lowest priority)
        """
        config = self._dataclass_to_dict(self.defaults)

        config = self._deep_merge(config, self.load_asset_config(asset))

        if overrides:
            config = self._deep_merge(config, overrides)

        return config

    def build_config(
        self,
        asset: str,
        overrides: Optional[dict[str, Any]] = None
    ) -> DefaultConfig:
        """
        Build a validated DefaultConfig for an asset.

        Raises:
            ConfigurationError: On unknown sections/keys or failed validation
        """
        merged = self.merge_config(asset, overrides)

        issues = ConfigValidator.validate_config(merged)
        if issues:
            raise ConfigurationError(
                f"Invalid configuration for {asset}: "
                + "; ".join(f"{i.field}: {i.message}" for i in issues),
                issues=issues,
            )

        return self.from_dict(merged)

    @staticmethod
    def from_dict(config: dict[str, Any]) -> DefaultConfig:
        """Convert a merged configuration dict to a DefaultConfig."""
        unknown_sections = set(config) - set(SECTION_TYPES)
        if unknown_sections:
            raise ConfigurationError(
                f"Unknown configuration sections: {sorted(unknown_sections)}"
            )

        sections = {}
        for name, section_type in SECTION_TYPES.items():
            values = dict(config.get(name, {}))
            known = {f.name for f in fields(section_type)}
            unknown = set(values) - known
            if unknown:
                raise ConfigurationError(
                    f"Unknown keys in '{name}': {sorted(unknown)}"
                )
            if "default_topics" in values:
                values["default_topics"] = tuple(values["default_topics"])
            sections[name] = section_type(**values)

        return DefaultConfig(**sections)

    def _dataclass_to_dict(self, obj: Any) -> dict[str, Any]:
        """Convert nested dataclasses to dictionary."""
        if hasattr(obj, '__dataclass_fields__'):
            result = {}
            for field_name in obj.__dataclass_fields__:
                value = getattr(obj, field_name)
                if hasattr(value, '__dataclass_fields__'):
                    result[field_name] = self._dataclass_to_dict(value)
                else:
                    result[field_name] = value
            return result
        return obj  # type: ignore[no-any-return]

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result
