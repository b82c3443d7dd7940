"""
Display and data formatting utilities for QTelemetry.
"""

import json
import yaml
from datetime import datetime, timedelta, timezone
from flask import make_response

import humanize


def pct_fmt(value, decimals=1):
    """Format a fraction in [0, 1] as a percentage string."""
    return f"{value * 100:.{decimals}f}%"


def uptime_fmt(seconds):
    """Format an uptime counter as HH:MM:SS."""
    seconds = int(seconds)
    h = seconds // 3600
    m = (seconds % 3600) // 60
    s = seconds % 60
    return f"{h:02d}:{m:02d}:{s:02d}"


def uptime_humanize(seconds):
    """Humanize an uptime counter (e.g., '3 minutes')."""
    return humanize.naturaldelta(timedelta(seconds=int(seconds)))


def system_time_fmt(timestamp):
    """Format a POSIX timestamp as 'YYYY-MM-DD HH:MM:SS' in UTC."""
    dt = datetime.fromtimestamp(timestamp, tz=timezone.utc)
    return dt.strftime('%Y-%m-%d %H:%M:%S')


def time_of_day_fmt(timestamp_ms):
    """Format a millisecond timestamp as 'HH:MM:SS.mmm' in UTC."""
    dt = datetime.fromtimestamp(timestamp_ms / 1000.0, tz=timezone.utc)
    return dt.strftime('%H:%M:%S.%f')[:12]


def basis_label(index, width=3):
    """Binary basis-state label, e.g. 5 -> '101'."""
    return format(index, 'b').zfill(width)


def read_yaml_file(file_path):
    """Read YAML file."""
    with open(file_path, 'r') as file:
        data = yaml.load(file, Loader=yaml.FullLoader)
    return data


def yaml_response(data):
    """Format YAML as HTTP response."""
    response = make_response(yaml.dump(data, sort_keys=False), 200)
    response.headers.add('Content-type', 'application/x-yaml')
    return response


def json_response(data):
    """Format JSON as HTTP response."""
    response = make_response(json.dumps(data), 200)
    response.headers.add('Content-type', 'application/json')
    return response


def no_cache(response):
    """Prevent caching of live telemetry responses."""
    response.headers['Cache-Control'] = 'no-cache, no-store, must-revalidate'
    response.headers['Pragma'] = 'no-cache'
    response.headers['Expires'] = '0'
    return response
