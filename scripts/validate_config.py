#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from pathlib import Path

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from spread_app.config.loader import ConfigLoader
from spread_app.config.validation import ConfigValidator
from spread_app.errors import ConfigurationError


def main():
    """Main validation function."""
    config_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else None
    loader = ConfigLoader.create(config_dir)
    print(f"Validating {loader.config_dir / 'spread.yaml'}...")

    try:
        config = loader.merge_config()
    except ConfigurationError as e:
        print(f"Could not load configuration: {e}")
        sys.exit(1)

    errors = ConfigValidator.validate_config(config)
    if errors:
        print(f"Found {len(errors)} validation errors:")
        for error in errors:
            print(f"  - {error.field}: {error.message} (value: {error.value})")
        sys.exit(1)

    pairs = loader.load_trade_combinations()
    print(f"Configuration is valid, {len(pairs)} trade combinations:")
    for pair in pairs:
        print(f"  - {pair}")
    sys.exit(0)


if __name__ == "__main__":
    main()
