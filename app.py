#!/usr/bin/env python3
"""
QTelemetry - Simulated Quantum Processor Telemetry Dashboard

Development launcher; equivalent to the installed ``qtelemetry`` command.

    python app.py --port 5010 --seed 7
"""

import sys
import os

# Add the qtelemetry package to Python path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from qtelemetry.cli import main


if __name__ == '__main__':
    main()
