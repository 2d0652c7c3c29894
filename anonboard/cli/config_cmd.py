"""
AnonBoard Configuration Command

Non-interactive configuration management: show, validate, initialize and
set individual values.
"""

import logging
from pathlib import Path

from ..config import load_config, create_default_config

logger = logging.getLogger(__name__)


def run_config(args) -> int:
    """
    Run configuration command.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code
    """
    config_path = getattr(args, 'config', Path('config.toml'))

    if getattr(args, 'init', False):
        if config_path.exists():
            print(f"Config file already exists: {config_path}")
            return 1
        create_default_config(config_path)
        print(f"Wrote default configuration to {config_path}")
        return 0

    if getattr(args, 'validate', False):
        config = load_config(config_path)
        errors = config.validate()
        if errors:
            print("Configuration errors:")
            for err in errors:
                print(f"  - {err}")
            return 1
        print("Configuration is valid.")
        return 0

    if getattr(args, 'set', None):
        key, value = args.set
        return set_config_value(config_path, key, value)

    # Default: show
    config = load_config(config_path)
    print(config.to_toml())
    return 0


def set_config_value(config_path: Path, key: str, value: str) -> int:
    """Set a specific configuration value."""
    config = load_config(config_path)

    # Parse dotted key (e.g., "web.port")
    parts = key.split(".")
    obj = config

    for part in parts[:-1]:
        if hasattr(obj, part):
            obj = getattr(obj, part)
        else:
            print(f"Invalid config key: {key}")
            return 1

    final_key = parts[-1]
    if len(parts) < 2 or not hasattr(obj, final_key):
        print(f"Invalid config key: {key}")
        return 1

    # Convert value to appropriate type
    current = getattr(obj, final_key)
    try:
        if isinstance(current, bool):
            value = value.lower() in ('true', '1', 'yes')
        elif isinstance(current, int):
            value = int(value)
    except ValueError:
        print(f"Invalid value for {key}: {value}")
        return 1

    setattr(obj, final_key, value)

    errors = config.validate()
    if errors:
        print("Refusing to save invalid configuration:")
        for err in errors:
            print(f"  - {err}")
        return 1

    config.save(config_path)
    logger.info(f"Config updated: {key}")
    print(f"Set {key} = {value}")
    return 0
