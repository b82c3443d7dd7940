# test simulators / coherence time series

from qtelemetry.simulators import CoherenceSample, CoherenceSeriesSimulator, RandomSource


def make_series(seed=21):
    series = CoherenceSeriesSimulator(rng=RandomSource(seed), interval=60)
    series.reset()
    series.active = True
    return series


def test_initial_window():
    series = make_series()
    samples = list(series.samples)
    assert len(samples) == 50
    assert [s.tick for s in samples] == list(range(50))
    for s in samples:
        assert 0.95 - s.tick * 0.008 <= s.coherence <= 0.95 - s.tick * 0.008 + 0.05
        assert 0.99 - s.tick * 0.002 <= s.fidelity <= 0.99 - s.tick * 0.002 + 0.02
        assert 0.01 + s.tick * 0.001 <= s.error_rate <= 0.01 + s.tick * 0.001 + 0.005


def test_window_slides():
    series = make_series()
    for _ in range(1000):
        previous = series.samples[-1]
        series.tick()
        newest = series.samples[-1]
        assert len(series.samples) == 50
        assert newest.tick == previous.tick + 1
        assert newest.coherence >= 0.3
        assert newest.fidelity >= 0.7
        assert 0.0 <= newest.error_rate <= 0.15
    assert series.samples[0].tick == 1000


def test_bounds_hold_at_limits():
    rng = RandomSource(4)
    sample = CoherenceSample(tick=7, coherence=0.3, fidelity=0.7, error_rate=0.15)
    for _ in range(100):
        sample = sample.next(rng)
        assert sample.coherence >= 0.3
        assert sample.fidelity >= 0.7
        assert sample.error_rate == 0.15
    assert sample.tick == 107


def test_latest_formatting():
    series = make_series()
    series.samples.append(CoherenceSample(tick=50, coherence=0.8123, fidelity=0.95678, error_rate=0.01234))
    latest = series.snapshot()['latest']
    assert latest['coherence_pct'] == '81.2%'
    assert latest['fidelity_pct'] == '95.68%'
    assert latest['error_rate_pct'] == '1.234%'
    assert latest['coherence_status'] == 'nominal'

    series.samples.append(CoherenceSample(tick=51, coherence=0.65, fidelity=0.9, error_rate=0.02))
    assert series.snapshot()['latest']['coherence_status'] == 'degraded'


def test_stopped_series_is_empty():
    series = CoherenceSeriesSimulator(rng=RandomSource(2), interval=60)
    with series:
        assert len(series.snapshot()['series']) == 50
    assert series.snapshot() == {'active': False, 'series': [], 'latest': None}
    series.tick()
    assert len(series.samples) == 0


def test_sample_round_trip():
    sample = CoherenceSample.initial(12, RandomSource(8))
    assert CoherenceSample.from_dict(sample.to_dict()) == sample
