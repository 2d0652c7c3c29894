"""
AnonBoard Entry Point

Usage:
    python -m anonboard                # Run board server
    python -m anonboard config         # Show configuration
    python -m anonboard --help         # Show help
"""

import argparse
import sys
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from . import __version__


def setup_logging(level: str, log_file: str | None = None, max_size_mb: int = 10, backup_count: int = 3):
    """Configure logging for the application."""
    log_format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    handlers: list[logging.Handler] = [logging.StreamHandler()]

    if log_file:
        handlers.append(RotatingFileHandler(
            log_file,
            maxBytes=max_size_mb * 1024 * 1024,
            backupCount=backup_count
        ))

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=log_format,
        handlers=handlers,
        force=True
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="anonboard",
        description="AnonBoard - Anonymous Message Board Backend"
    )
    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"AnonBoard {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=Path("config.toml"),
        help="Path to configuration file (default: config.toml)"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level (default: from config, else INFO)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    config_parser = subparsers.add_parser("config", help="Configuration management")
    config_parser.add_argument("--show", action="store_true", help="Show current config")
    config_parser.add_argument("--validate", action="store_true", help="Validate config")
    config_parser.add_argument("--init", action="store_true", help="Write default config")
    config_parser.add_argument(
        "--set",
        nargs=2,
        metavar=("KEY", "VALUE"),
        help="Set config value"
    )
    return parser


def main(argv: list[str] | None = None):
    """Main entry point for AnonBoard."""
    args = build_parser().parse_args(argv)

    if args.command == "config":
        setup_logging(args.log_level or "INFO")
        from .cli.config_cmd import run_config
        sys.exit(run_config(args))

    from .config import load_config
    from .web.app import create_app

    config = load_config(args.config)
    setup_logging(
        args.log_level or config.logging.level,
        config.logging.file or None,
        config.logging.max_size_mb,
        config.logging.backup_count
    )
    logger = logging.getLogger("anonboard")

    errors = config.validate()
    if errors:
        for err in errors:
            logger.error(f"Config error: {err}")
        sys.exit(1)

    try:
        app = create_app(config)
        logger.info(f"Starting AnonBoard v{__version__} on {config.web.host}:{config.web.port}")
        app.run(host=config.web.host, port=config.web.port, debug=config.web.debug)
    except KeyboardInterrupt:
        logger.info("Shutdown requested")
        sys.exit(0)
    except Exception as e:
        logger.error(f"Fatal error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
