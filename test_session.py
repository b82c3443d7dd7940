# test core / dashboard session and system clock

import pytest

from qtelemetry.core.session import DashboardSession
from qtelemetry.simulators import SystemClock

SLOW = {'qubits': 60, 'coherence': 60, 'gates': 60, 'probability': 60, 'clock': 60}


def epoch():
    return 0.0


def test_same_seed_same_snapshot():
    with DashboardSession(seed=123, intervals=SLOW, clock=epoch) as a, \
            DashboardSession(seed=123, intervals=SLOW, clock=epoch) as b:
        for _ in range(10):
            for session in (a, b):
                for unit in session.units.values():
                    unit.tick()
        assert a.snapshot() == b.snapshot()


def test_units_have_independent_sources():
    session = DashboardSession(seed=5, intervals=SLOW)
    sources = {id(unit.rng) for unit in session.units.values()}
    assert len(sources) == len(session.units)


def test_start_and_stop_all_units():
    session = DashboardSession(seed=1, intervals=SLOW)
    session.start()
    timers = [unit._timer for unit in session.units.values()]
    assert all(t is not None and t.is_alive() for t in timers)
    assert session.active

    session.stop()
    assert not session.active
    assert all(not t.is_alive() for t in timers)
    assert all(not unit.scheduled for unit in session.units.values())
    session.stop()


def test_snapshot_contains_every_unit():
    with DashboardSession(seed=2, intervals=SLOW, clock=epoch) as session:
        snap = session.snapshot()
    assert set(snap) == {'qubits', 'coherence', 'gates', 'probability', 'clock'}
    assert len(snap['qubits']['qubits']) == 8
    assert len(snap['coherence']['series']) == 50
    assert snap['gates']['running'] is True
    assert len(snap['probability']['grid']) == 16
    assert snap['clock']['system_time'] == '1970-01-01 00:00:00'


def test_from_config_uses_intervals():
    session = DashboardSession.from_config({'seed': 3, 'intervals': {'gates': 0.75}})
    assert session.gates.interval == 0.75
    assert session.qubits.interval == 0.1
    assert session.seed == 3


def test_clock_counts_uptime():
    clock = SystemClock(interval=60, clock=lambda: 1700000000.0)
    clock.start()
    try:
        for _ in range(3725):
            clock.tick()
        snap = clock.snapshot()
    finally:
        clock.stop()
    assert snap['uptime_seconds'] == 3725
    assert snap['uptime'] == '01:02:05'
    assert snap['system_time'] == '2023-11-14 22:13:20'
    assert snap['uptime_human'] == 'an hour'
    assert clock.uptime_seconds == 0


def test_timer_drives_ticks():
    session = DashboardSession(seed=4, intervals={**SLOW, 'clock': 0.01})
    session.start()
    try:
        import time
        deadline = time.time() + 2.0
        while session.clock.uptime_seconds < 3 and time.time() < deadline:
            time.sleep(0.01)
        assert session.clock.uptime_seconds >= 3
    finally:
        session.stop()


@pytest.mark.parametrize('name', ['qubits', 'coherence', 'gates', 'probability', 'clock'])
def test_restart_reinitializes(name):
    session = DashboardSession(seed=6, intervals=SLOW)
    unit = session.units[name]
    unit.start()
    unit.stop()
    unit.start()
    try:
        assert unit.active
        assert unit.scheduled
    finally:
        unit.stop()


def run_in_thread(callback):
    import threading
    worker = threading.Thread(target=callback)
    worker.start()
    worker.join()


def test_detached_timer_does_not_tick_after_stop():
    session = DashboardSession(seed=8, intervals=SLOW)
    clock = session.clock
    clock.start()
    old_timer = clock._timer
    clock.stop()
    clock.start()
    try:
        run_in_thread(old_timer.callback)
        assert clock.uptime_seconds == 0
    finally:
        clock.stop()
    run_in_thread(old_timer.callback)
    assert clock.uptime_seconds == 0


def test_timer_replaced_on_resume_is_ignored():
    session = DashboardSession(seed=8, intervals=SLOW)
    gates = session.gates
    gates.start()
    try:
        old_timer = gates._timer
        gates.pause()
        gates.resume()
        assert gates._timer is not old_timer
        run_in_thread(old_timer.callback)
        assert len(gates.log) == 0
    finally:
        gates.stop()


def test_timer_survives_failing_tick():
    import time
    from qtelemetry.simulators import TickTimer

    calls = []

    def flaky():
        calls.append(1)
        if len(calls) == 1:
            raise RuntimeError('tick failed')

    timer = TickTimer(0.01, flaky, name='flaky-timer')
    timer.start()
    try:
        deadline = time.time() + 2.0
        while len(calls) < 3 and time.time() < deadline:
            time.sleep(0.01)
        assert len(calls) >= 3
        assert timer.is_alive()
    finally:
        timer.cancel()
    assert not timer.is_alive()
