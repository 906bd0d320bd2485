"""
Peer Maintenance - Main Entry Point.

Scrapes the metrics of the local peer once and prints them in one of the
supported wire encodings.
"""

import argparse
import asyncio
import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional

from .core.config import Config, LoggingConfig, get_default_config_path
from .core.errors import MetricsError
from .core.models import HealthState
from .codec import FORMATS, encode
from .system import System


logger = logging.getLogger(__name__)


def setup_logging(config: LoggingConfig, verbose: bool = False):
    """Configure the root logger from the logging configuration."""
    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    formatter = logging.Formatter(config.format)

    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(formatter)
    root.addHandler(stream_handler)

    if config.file_path:
        file_handler = logging.handlers.RotatingFileHandler(
            config.file_path,
            maxBytes=config.max_file_size_mb * 1024 * 1024,
            backupCount=config.backup_count,
        )
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    root.setLevel(logging.DEBUG if verbose else config.level.upper())


def parse_args(argv: Optional[list] = None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Scrape the resource metrics of the local peer"
    )

    parser.add_argument(
        "-c", "--config",
        default=None,
        help="Path to configuration file (YAML)"
    )

    parser.add_argument(
        "--path",
        default=None,
        help="Block storage directory to measure (overrides configuration)"
    )

    parser.add_argument(
        "-f", "--format",
        choices=FORMATS,
        default="json",
        help="Output encoding (default: json)"
    )

    parser.add_argument(
        "-o", "--output",
        default=None,
        help="Write the encoded output to a file instead of stdout"
    )

    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Seconds before the scrape is abandoned (default: from config)"
    )

    parser.add_argument(
        "--health",
        choices=[state.value for state in HealthState],
        default=None,
        help="Encode a health state instead of scraping metrics"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging"
    )

    parser.add_argument(
        "--generate-config",
        action="store_true",
        help="Generate a sample configuration file"
    )

    return parser.parse_args(argv)


def write_output(payload, output: Optional[str] = None):
    """Write an encoded payload; binary payloads go to stdout as hex."""
    if output:
        mode = "wb" if isinstance(payload, bytes) else "w"
        with open(output, mode) as f:
            f.write(payload)
        logger.info(f"Wrote {len(payload)} bytes to {output}")
    elif isinstance(payload, bytes):
        print(payload.hex())
    else:
        print(payload.rstrip("\n"))


async def main(argv: Optional[list] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    # Generate sample config if requested
    if args.generate_config:
        config = Config()
        config_path = "config/config.yaml"
        Path("config").mkdir(exist_ok=True)
        config.to_yaml(config_path)
        print(f"Generated sample configuration: {config_path}")
        return 0

    # Load configuration
    config_path = args.config or get_default_config_path()
    config = Config.from_yaml(config_path)
    setup_logging(config.logging, args.verbose)
    logger.debug(f"Loaded configuration from {config_path}")

    # Apply command line overrides
    if args.path:
        config.storage.block_store_path = args.path
    if args.timeout is not None:
        config.scrape.timeout_seconds = args.timeout

    if args.health:
        write_output(encode(HealthState.from_name(args.health), args.format), args.output)
        return 0

    system = System(config)
    try:
        snapshot = await system.scrape_metrics(timeout=config.scrape.timeout_seconds)
    except MetricsError as e:
        logger.error(f"Scrape failed: {e}")
        return 1
    except asyncio.TimeoutError:
        logger.error(f"Scrape timed out after {config.scrape.timeout_seconds}s")
        return 1

    write_output(encode(snapshot, args.format), args.output)
    return 0


def run():
    """Entry point for the application."""
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        print("\nInterrupted")
        sys.exit(130)


if __name__ == "__main__":
    run()
