# test web / routes

import pytest
import yaml

from qtelemetry.core.app import create_app, get_config
from qtelemetry.core.session import DashboardSession
from qtelemetry.web.routes import register_routes

SLOW = {'qubits': 60, 'coherence': 60, 'gates': 60, 'probability': 60, 'clock': 60}


@pytest.fixture
def session():
    session = DashboardSession(seed=99, intervals=SLOW)
    session.start()
    yield session
    session.stop()


@pytest.fixture
def client(session):
    config = get_config()
    config['intervals'] = dict(SLOW)
    config['version'] = 'test'
    app = create_app()
    app.config['TESTING'] = True
    register_routes(app, config, session)
    return app.test_client()


def test_dashboard_page(client):
    response = client.get('/')
    assert response.status_code == 200
    body = response.get_data(as_text=True)
    assert 'Probabilistic State Dashboard' in body
    assert 'QUANTUM PROCESSOR ONLINE' in body
    assert 'title="up a moment"' in body
    assert response.headers['Cache-Control'] == 'no-cache, no-store, must-revalidate'


def test_snapshot_json(client):
    response = client.get('/api/snapshot')
    assert response.status_code == 200
    data = response.get_json()
    assert set(data) == {'qubits', 'coherence', 'gates', 'probability', 'clock'}


def test_snapshot_yaml(client):
    response = client.get('/api/snapshot?format=yaml')
    assert response.status_code == 200
    assert response.headers['Content-type'] == 'application/x-yaml'
    data = yaml.safe_load(response.get_data(as_text=True))
    assert len(data['coherence']['series']) == 50


@pytest.mark.parametrize('path, key', [
    ('/api/qubits', 'qubits'),
    ('/api/coherence', 'series'),
    ('/api/gates', 'operations'),
    ('/api/probability', 'statistics'),
])
def test_unit_endpoints(client, path, key):
    response = client.get(path)
    assert response.status_code == 200
    data = response.get_json()
    assert data['active'] is True
    assert key in data


def test_system_endpoint(client):
    data = client.get('/api/system').get_json()
    assert data['uptime'] == '00:00:00'
    assert data['status_bar']['qubits'] == 8


def test_toggle_gate_feed(client, session):
    response = client.post('/api/gates/toggle')
    assert response.get_json() == {'status': 'success', 'running': False}
    assert not session.gates.scheduled

    response = client.post('/api/gates/toggle', json={'running': True})
    assert response.get_json() == {'status': 'success', 'running': True}
    assert session.gates.scheduled

    response = client.post('/api/gates/toggle', json={'running': True})
    assert response.get_json()['running'] is True


def test_toggle_rejects_bad_input(client):
    response = client.post('/api/gates/toggle', json={'running': 'yes'})
    assert response.status_code == 400
    assert response.get_json()['status'] == 'error'


def test_stopped_session_reports_inactive(client, session):
    session.stop()
    data = client.get('/api/probability').get_json()
    assert data['active'] is False
    assert data['statistics'] is None
