#!/usr/bin/env python3
"""
QTelemetry CLI - Command Line Interface

Entry point for the QTelemetry dashboard when installed as a package.
"""

import sys
import argparse
import yaml
from typing import Optional, List

from qtelemetry.core.app import get_config
from qtelemetry.core.config import (
    DEFAULT_PORT,
    DEFAULT_HOST,
    ConfigError,
    merge_file_config,
    validate_config
)
from qtelemetry.utils.formatters import read_yaml_file
from qtelemetry.utils.logger import get_logger

logger = get_logger(__name__)

def create_parser() -> argparse.ArgumentParser:
    """Create the command line argument parser."""
    parser = argparse.ArgumentParser(
        prog='qtelemetry',
        description='QTelemetry - Simulated Quantum Processor Telemetry Dashboard'
    )

    parser.add_argument(
        '--port',
        type=int,
        default=None,
        help=f'Port number to run the server on (default: {DEFAULT_PORT})'
    )

    parser.add_argument(
        '--host',
        type=str,
        default=None,
        help=f'Host address to bind the server to (default: {DEFAULT_HOST})'
    )

    parser.add_argument(
        '--seed',
        type=int,
        default=None,
        help='Seed for the simulation random sources (default: random)'
    )

    parser.add_argument(
        '--config',
        type=str,
        default=None,
        help='YAML file overriding host, port, seed and simulator intervals'
    )

    parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug mode'
    )

    return parser


def get_default_config(args: argparse.Namespace) -> dict:
    """Build configuration from environment, optional YAML file and command line arguments."""
    config = get_config()

    config_file = args.config or config.get('config_file')
    if config_file:
        try:
            file_data = read_yaml_file(config_file)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Cannot read configuration file {config_file}: {e}") from e
        merge_file_config(config, file_data)
        config['config_file'] = config_file

    if args.host:
        config['host'] = args.host
    if args.port is not None:
        config['port'] = args.port
    if args.seed is not None:
        config['seed'] = args.seed
    if args.debug:
        config['debug'] = args.debug

    config['version'] = __import__("qtelemetry").__version__
    return config


def main(argv: Optional[List[str]] = None) -> None:
    """
    Main entry point for the QTelemetry CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv)
    """
    # Parse command line arguments
    parser = create_parser()
    args = parser.parse_args(argv)

    # Get and validate configuration
    try:
        config = get_default_config(args)
        validate_config(config)
    except ConfigError as e:
        logger.error(f"Configuration validation failed: {e}")
        sys.exit(1)

    # Import here to keep argument parsing fast
    from .core.app import create_app
    from .core.session import DashboardSession
    from .web.routes import register_routes

    session = DashboardSession.from_config(config)
    try:
        logger.info('QTelemetry - CLI - Quantum Telemetry Dashboard')

        # Create Flask application
        app = create_app()
        register_routes(app, config, session)

        session.start()

        # Print startup information
        logger.info('QTelemetry server starting...')
        logger.info(f'Server running on: http://{config["host"]}:{config["port"]}')
        logger.info(f'Simulation seed: {config["seed"]}')
        logger.info(f'Tick intervals: {config["intervals"]}')
        logger.info('Press Ctrl+C to stop the server')

        # The reloader would start a second session in a child process
        app.run(
            host=config['host'],
            port=config['port'],
            debug=config['debug'],
            use_reloader=False,
            threaded=True
        )

    except KeyboardInterrupt:
        logger.error('\nQTelemetry server stopped by user')
    except Exception as e:
        logger.error(f'Error starting QTelemetry server: {e}')
        sys.exit(1)
    finally:
        session.stop()


if __name__ == '__main__':
    main()
