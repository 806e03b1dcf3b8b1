import pytest

from runlab.core.errors import NoValidSamples
from runlab.engine.ingestion import ingest, parse_sample


def test_steady_run_summary(make_records):
    # 101 samples every 5 s at 2 m/s -> 1 km in 500 s
    trace = ingest(make_records(101), name="Morning Run")
    s = trace.summary

    assert len(trace.points) == 101
    assert trace.name == "Morning Run"
    assert trace.id == f"run_{int(trace.start_time.timestamp() * 1000)}"
    assert trace.laps == []
    assert s.total_distance == 1000.0
    assert s.elapsed_time == 500.0
    assert s.moving_time == 500.0
    assert s.avg_pace == pytest.approx(500.0)
    assert s.max_pace == pytest.approx(500.0)
    assert s.avg_hr == 150
    assert s.max_hr == 150
    assert s.calories == 70
    assert s.fitness_score == 2
    assert s.intensity_factor == pytest.approx(0.6)
    assert s.aerobic_efficiency == pytest.approx(1000 / (150 * 101) * 100)
    assert s.movement_ratio == pytest.approx(100.0)
    assert s.vam == 0.0
    assert s.variability_index == 1.05
    assert s.gap is None and s.decoupling is None and s.training_effect is None


def test_moving_time_excludes_long_gaps():
    records = [
        {"time": "2025-01-01T07:00:00Z", "distance": 0},
        {"time": "2025-01-01T07:00:10Z", "distance": 50},
        {"time": "2025-01-01T07:00:30Z", "distance": 150},  # 20 s gap
        {"time": "2025-01-01T07:00:45Z", "distance": 200},  # exactly 15 s
    ]
    s = ingest(records).summary
    assert s.moving_time == 25.0
    assert s.elapsed_time == 45.0


def test_slow_pairs_are_not_moving():
    records = [
        {"time": "2025-01-01T07:00:00Z", "distance": 0},
        {"time": "2025-01-01T07:00:10Z", "distance": 2},
    ]
    s = ingest(records).summary
    assert s.moving_time == 0.0
    assert s.avg_pace == 0.0
    assert s.intensity_factor == 0.0
    assert s.vam == 0.0


def test_max_pace_filters_outliers():
    records = [
        {"time": "2025-01-01T07:00:00Z", "distance": 0},
        # 200 m in 10 s -> 50 s/km, GPS jump
        {"time": "2025-01-01T07:00:10Z", "distance": 200},
        # 40 m in 10 s -> 250 s/km
        {"time": "2025-01-01T07:00:20Z", "distance": 240},
        # 25 m in 10 s -> 400 s/km
        {"time": "2025-01-01T07:00:30Z", "distance": 265},
    ]
    assert ingest(records).summary.max_pace == pytest.approx(250.0)


def test_altitude_dropout_keeps_last_known_altitude():
    records = [
        {"time": "2025-01-01T07:00:00Z", "altitude": "100"},
        {"time": "2025-01-01T07:00:01Z", "altitude": None},
        {"time": "2025-01-01T07:00:02Z", "altitude": "105"},
        {"time": "2025-01-01T07:00:03Z", "altitude": "103"},
    ]
    s = ingest(records).summary
    assert s.total_ascent == pytest.approx(5.0)
    assert s.total_descent == pytest.approx(2.0)


def test_unparseable_fields_are_absent_not_zero():
    sample = parse_sample({
        "time": "2025-01-01T07:00:00Z",
        "lat": "abc",
        "lng": "",
        "altitude": "nan",
        "distance": "12.5",
        "hr": "151.6",
    })
    assert sample.lat is None
    assert sample.lng is None
    assert sample.altitude is None
    assert sample.distance == 12.5
    assert sample.hr == 151


def test_non_positive_hr_is_absent():
    assert parse_sample({"time": "2025-01-01T07:00:00Z", "hr": "0"}).hr is None


def test_records_without_time_are_skipped():
    records = [
        {"time": "not a date", "distance": 0},
        {"time": "2025-01-01T07:00:00Z", "distance": 0, "hr": 140},
        {"distance": 10},
        {"time": "2025-01-01T07:00:05Z", "distance": 10, "hr": 142},
    ]
    trace = ingest(records)
    assert len(trace.points) == 2
    assert trace.summary.avg_hr == 141


@pytest.mark.parametrize(
    "stamp, micros",
    [
        ("2025-01-01T07:00:00.5Z", 500000),
        ("2025-01-01T07:00:00.25+00:00", 250000),
        ("2025-01-01T07:00:00.123456789Z", 123456),
    ],
)
def test_fractional_seconds_of_any_width(stamp, micros):
    sample = parse_sample({"time": stamp})
    assert sample is not None
    assert sample.time.microsecond == micros
    assert sample.time.utcoffset().total_seconds() == 0


def test_no_valid_samples_fails():
    with pytest.raises(NoValidSamples):
        ingest([])
    with pytest.raises(NoValidSamples):
        ingest([{"time": ""}, {"hr": 150}])


def test_total_distance_is_last_sample_distance():
    records = [
        {"time": "2025-01-01T07:00:00Z", "distance": 0},
        {"time": "2025-01-01T07:00:05Z", "distance": 10},
        {"time": "2025-01-01T07:00:10Z"},
    ]
    s = ingest(records).summary
    assert s.total_distance == 0.0
    assert s.avg_pace == 0.0
    assert s.calories == 0


def test_no_hr_means_zero_hr_metrics(make_records):
    s = ingest(make_records(20, hr=None)).summary
    assert s.avg_hr == 0
    assert s.max_hr == 0
    assert s.aerobic_efficiency == 0.0
    assert s.fitness_score == 0


def test_input_order_is_kept():
    records = [
        {"time": "2025-01-01T07:00:10Z", "distance": 20},
        {"time": "2025-01-01T07:00:00Z", "distance": 0},
        {"time": "2025-01-01T07:00:20Z", "distance": 40},
    ]
    trace = ingest(records)
    assert [p.distance for p in trace.points] == [20, 0, 40]
    assert 0.0 <= trace.summary.movement_ratio <= 100.0


def test_vam_from_ascent(make_records):
    # 10 m climb over 500 s moving -> 72 m/h
    trace = ingest(make_records(101, altitude=lambda i: 100 + i * 0.1))
    assert trace.summary.total_ascent == pytest.approx(10.0)
    assert trace.summary.vam == pytest.approx(72.0)


def test_constant_overrides(make_records):
    s = ingest(
        make_records(101),
        calories_per_km=100,
        threshold_pace=250,
        variability_index=1.0,
    ).summary
    assert s.calories == 100
    assert s.intensity_factor == pytest.approx(0.5)
    assert s.variability_index == 1.0
