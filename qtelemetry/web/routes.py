"""
Main application routes and endpoints.
"""

from flask import render_template, request, jsonify, make_response, current_app

from ..core.config import get_status_bar, get_links
from ..utils.formatters import yaml_response, json_response, no_cache
from qtelemetry.utils.logger import get_logger

logger = get_logger(__name__)


def get_session():
    """Dashboard session attached to the running application."""
    return current_app.config['QTELEMETRY_SESSION']


def register_routes(app, config, session):
    """Register all application routes."""

    # Store config and session in app for access in routes
    app.config['QTELEMETRY_CONFIG'] = config
    app.config['QTELEMETRY_SESSION'] = session

    def unit_endpoint(name):
        try:
            data = get_session().units[name].snapshot()
            return no_cache(jsonify(data))
        except Exception as e:
            logger.error(f"Error reading {name} telemetry: {str(e)}")
            return jsonify({'status': 'error', 'message': str(e)}), 500

    @app.route("/")
    def dashboard():
        """Main dashboard page; widgets poll the API below."""
        session = get_session()
        config = current_app.config['QTELEMETRY_CONFIG']
        logger.info("Dashboard page loaded")

        response = make_response(render_template('dashboard.html',
                               status_bar=get_status_bar(),
                               links=get_links(),
                               intervals=config['intervals'],
                               clock=session.clock.snapshot(),
                               version=config.get('version')))
        return no_cache(response)

    @app.route("/api/snapshot", methods=['GET'])
    def api_snapshot():
        """All simulator units in one payload; ?format=yaml for YAML."""
        try:
            data = get_session().snapshot()
            if request.args.get('format', 'json').lower() == 'yaml':
                return no_cache(yaml_response(data))
            return no_cache(json_response(data))
        except Exception as e:
            logger.error(f"Error building snapshot: {str(e)}")
            return jsonify({'status': 'error', 'message': str(e)}), 500

    @app.route("/api/qubits", methods=['GET'])
    def api_qubits():
        """Qubit register state and state-vector preview."""
        return unit_endpoint('qubits')

    @app.route("/api/coherence", methods=['GET'])
    def api_coherence():
        """Coherence window and latest metrics."""
        return unit_endpoint('coherence')

    @app.route("/api/gates", methods=['GET'])
    def api_gates():
        """Gate feed log and run state."""
        return unit_endpoint('gates')

    @app.route("/api/probability", methods=['GET'])
    def api_probability():
        """Probability grid, cell colours and statistics."""
        return unit_endpoint('probability')

    @app.route("/api/system", methods=['GET'])
    def api_system():
        """Wall clock, uptime and static status bar."""
        try:
            data = get_session().clock.snapshot()
            data['status_bar'] = get_status_bar()
            return no_cache(jsonify(data))
        except Exception as e:
            logger.error(f"Error reading system clock: {str(e)}")
            return jsonify({'status': 'error', 'message': str(e)}), 500

    @app.route("/api/gates/toggle", methods=['POST'])
    def api_gates_toggle():
        """Pause or resume the gate feed. JSON {"running": bool} sets it explicitly."""
        try:
            gates = get_session().gates
            data = request.get_json(silent=True) or {}
            if 'running' in data:
                if not isinstance(data['running'], bool):
                    logger.warning(f"Invalid running flag: {data['running']!r}")
                    return jsonify({'status': 'error', 'message': "'running' must be a boolean"}), 400
                running = gates.set_running(data['running'])
            else:
                running = gates.toggle()

            logger.info(f"Gate feed {'running' if running else 'paused'} via API")
            return jsonify({'status': 'success', 'running': running})
        except Exception as e:
            logger.error(f"Error toggling gate feed: {str(e)}")
            return jsonify({'status': 'error', 'message': str(e)}), 500
