"""
Entry point for Metrics Publisher.

Usage:
    BROKER_URL=tcp://localhost:1883 python -m metrics_publisher
    python -m metrics_publisher --dry-run --category cpu
    python -m metrics_publisher --help
"""

import argparse
import asyncio
import sys

from . import __version__
from .app import DEFAULT_CATEGORIES, run_once
from .config.loader import ConfigError, ConfigLoader
from .logging import LogConfig, get_logger, setup_logging
from .models.metric import Category

logger = get_logger("main")


def validate_config() -> int:
    """Validate environment configuration and print warnings."""
    loader = ConfigLoader()
    try:
        config = loader.load_env()
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    warnings = loader.validate(config)
    if warnings:
        print(f"Configuration warnings ({len(warnings)}):")
        for warning in warnings:
            print(f"  - {warning}")

    fan = config.source.fan_speed
    print("\nConfiguration summary:")
    print(f"  MQTT: {config.mqtt.address} (tls: {'on' if config.mqtt.tls else 'off'})")
    if fan.configured:
        print(f"  Fan speed command: {fan.command or '-'}")
        print(f"  Fan speed file: {fan.file or '-'}")
    else:
        print("  Fan speed: not configured (0 RPM)")
    print(f"  Disk path: {config.source.disk_path}")

    print("\nConfiguration is valid!")
    return 0


def _category(value: str) -> Category:
    try:
        return Category.parse(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="metrics-publisher",
        description="Publish host metrics to Home Assistant via MQTT discovery",
        epilog="Broker and fan speed settings are read from BROKER_URL, "
        "FAN_SPEED_COMMAND and FAN_SPEED_FILE.",
    )

    parser.add_argument(
        "-c", "--category",
        dest="categories",
        action="append",
        type=_category,
        metavar="NAME",
        help="Category to publish, repeatable "
        "(disk, memory, cpu, swap, fan_speed, temperature; default: all)",
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print metrics to the console instead of publishing",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging (INFO level)",
    )

    parser.add_argument(
        "-d", "--debug",
        action="store_true",
        help="Enable debug logging (DEBUG level)",
    )

    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Quiet mode (only errors)",
    )

    parser.add_argument(
        "--log-file",
        metavar="PATH",
        help="Write logs to file",
    )

    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output",
    )

    parser.add_argument(
        "--validate",
        action="store_true",
        help="Validate configuration and exit",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    log_config = LogConfig()

    if args.debug:
        log_config.console_level = "debug"
    elif args.verbose:
        log_config.console_level = "info"
    elif args.quiet:
        log_config.console_level = "error"

    if args.no_color:
        log_config.console_colors = False

    if args.log_file:
        log_config.file_enabled = True
        log_config.file_path = args.log_file

    setup_logging(log_config)

    if args.validate:
        return validate_config()

    categories = args.categories or list(DEFAULT_CATEGORIES)

    try:
        return asyncio.run(run_once(categories, dry_run=args.dry_run))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 0
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
