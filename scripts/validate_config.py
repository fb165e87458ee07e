#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from pathlib import Path
from typing import List

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from quant_signals.config.loader import ConfigLoader
from quant_signals.config.validation import ConfigValidator, ValidationIssue
from quant_signals.errors import ConfigurationError


def validate_asset_config(loader: ConfigLoader, asset: str) -> List[ValidationIssue]:
    """Validate configuration for a specific asset."""
    config = loader.merge_config(asset)
    issues = ConfigValidator.validate_config(config)
    if not issues:
        # catches unknown keys the validator does not look at
        loader.from_dict(config)
    return issues


def main() -> int:
    """Main validation function."""
    print("Validating quant-signals configuration...")

    loader = ConfigLoader.create()
    assets = sorted(loader.load_assets_file()) + ["UNKNOWN-ASSET"]  # last one uses defaults

    all_valid = True
    for asset in assets:
        try:
            issues = validate_asset_config(loader, asset)
        except ConfigurationError as e:
            print(f"[FAIL] {asset}: {e}")
            all_valid = False
            continue

        if issues:
            print(f"[FAIL] {asset}: {len(issues)} validation issue(s)")
            for issue in issues:
                print(f"  - {issue.field}: {issue.message} (value: {issue.value})")
            all_valid = False
        else:
            print(f"[ OK ] {asset}")

    if all_valid:
        print("\nAll configurations are valid")
        return 0

    print("\nConfiguration validation failed")
    return 1


if __name__ == "__main__":
    sys.exit(main())
