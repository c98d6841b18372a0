#!/usr/bin/env python3
"""
Command-Line Interface

Parses arguments, loads config.json, runs one update pass and maps the
outcome to the process exit code:

    0    all domains up to date
    1    no domains configured, or a fatal error (config, IP detection)
    2    one or more domains failed
    130  interrupted

License: MIT
"""

################################################################################
# IMPORTS & DEPENDENCIES
################################################################################

import argparse
import logging
import os
import sys
from typing import List, Optional

from . import __version__, __software_name__
from .application import Application, EXIT_NO_DOMAINS
from .config import ConfigManager, default_config_path
from .exceptions import ConfigError, NetworkError
from .logger import LoggerManager

EXIT_FATAL = 1
EXIT_INTERRUPTED = 130

################################################################################
# ARGUMENT PARSING
################################################################################

def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse CLI arguments."""
    parser = argparse.ArgumentParser(
        prog='dns-update',
        description='Update provider DNS records to match the current public IP addresses',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                            # Use config.json next to the executable
  %(prog)s --config /etc/dns.json     # Use an explicit configuration file
  DEBUG=1 %(prog)s                    # Verbose output
        """
    )

    parser.add_argument('-v', '--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('-c', '--config', type=str, default=None,
                        help='Path to config.json (default: $DNS_UPDATE_CONFIG or next to the executable)')
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument('--debug', action='store_true', help='Enable debug output')
    verbosity.add_argument('-q', '--quiet', action='store_true', help='Only print warnings and errors')

    return parser.parse_args(argv)


def resolve_log_level(args: argparse.Namespace, config: Optional[ConfigManager]) -> int:
    """CLI flags win over DEBUG=1, DEBUG=1 wins over config, config over the INFO default."""
    if args.debug:
        return logging.DEBUG
    if args.quiet:
        return logging.WARNING
    if os.getenv('DEBUG', '0') == '1':
        return logging.DEBUG
    if config is not None:
        return getattr(logging, config.log_level, logging.INFO)
    return logging.INFO

################################################################################
# MAIN
################################################################################

def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point. Returns the process exit code."""
    args = parse_arguments(argv)
    logger = LoggerManager.get_logger(__software_name__, level=resolve_log_level(args, None))

    config_path = default_config_path(args.config)
    try:
        config = ConfigManager(config_path)
    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        return EXIT_FATAL

    logger = LoggerManager.get_logger(
        __software_name__,
        level=resolve_log_level(args, config),
        use_colors=None if config.console_colors else False,
    )

    logger.debug(f"{__software_name__} {__version__} using {config_path}")

    app = Application(config, logger)
    try:
        outcomes = app.run()
    except NetworkError as e:
        logger.error(f"Cannot determine current IP address: {e}")
        return EXIT_FATAL

    exit_code = app.exit_status(outcomes)
    if exit_code == EXIT_NO_DOMAINS:
        logger.debug("Nothing to do")
    return exit_code


def run() -> None:
    """Console script wrapper around main()."""
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        LoggerManager.get_logger(__software_name__).warning("Interrupted by user")
        sys.exit(EXIT_INTERRUPTED)
    except Exception as e:
        LoggerManager.get_logger(__software_name__).error(f"Unexpected error: {e}", exc_info=True)
        sys.exit(EXIT_FATAL)
