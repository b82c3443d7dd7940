"""
Core Flask application configuration and setup.
"""

import os
from flask import Flask

from ..utils.formatters import uptime_fmt, uptime_humanize
from qtelemetry.utils.logger import get_logger
from .config import (
    DEFAULT_PORT,
    DEFAULT_HOST,
    DEFAULT_INTERVALS,
    DEFAULT_STATUS_BAR,
    DEFAULT_LINKS,
    parse_seed,
    ConfigError
)


logger = get_logger(__name__)


def create_app():
    """Create and configure Flask application."""
    # Get the absolute path to the project root
    project_root = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

    app = Flask(__name__,
                static_url_path='/assets',
                static_folder=os.path.join(project_root, 'assets'),
                template_folder=os.path.join(project_root, 'templates'))

    app.config['APPLICATION_NAME'] = 'QTelemetry'

    # Register template filters
    app.template_filter('uptime')(uptime_fmt)
    app.template_filter('humanize_uptime')(uptime_humanize)

    logger.debug("App module initialized")

    return app


def get_config():
    """Get application configuration from environment variables."""
    port = os.getenv('QT_PORT', DEFAULT_PORT)
    try:
        port = int(port)
    except ValueError as e:
        raise ConfigError(f"QT_PORT must be an integer, got {port!r}") from e

    config = {
        'host': os.getenv('QT_BIND', DEFAULT_HOST),
        'port': port,
        'seed': parse_seed(os.getenv('QT_SEED')),
        'config_file': os.getenv('QT_CONFIG'),
        'intervals': dict(DEFAULT_INTERVALS),
        'status_bar': dict(DEFAULT_STATUS_BAR),
        'links': dict(DEFAULT_LINKS),
        'debug': False,
    }

    return config
