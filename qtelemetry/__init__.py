"""
QTelemetry - Simulated Quantum Processor Telemetry Dashboard

A dashboard that animates telemetry for a fictitious 8-qubit processor.
Every value is generated locally by timer-driven random walks; there is no
quantum backend behind it.

Features:
- Qubit register with Bloch-sphere indicators and a state-vector preview
- Coherence, fidelity and error-rate time series
- Pausable gate-operation feed
- 16x16 probability heatmap with entropy and purity
"""

__version__ = "1.0.0"
__author__ = "Obaro Labs"
