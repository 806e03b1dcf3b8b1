import pytest

from runlab.core.errors import NoValidSamples
from runlab.engine.analysis import analyze, analyze_records
from runlab.engine.ingestion import ingest
from runlab.engine.models import AthleteSettings, ZoneMethod
from runlab.engine.plan_templates import PLANS

ATHLETE = AthleteSettings(max_hr=190, resting_hr=55, method=ZoneMethod.KARVONEN)


def test_analyze_enriches_a_copy(make_records):
    trace = ingest(make_records(240, hr=lambda i: 155 if i < 120 else 165))
    enriched = analyze(trace, ATHLETE)

    assert trace.summary.training_effect is None
    assert trace.summary.decoupling is None
    assert trace.summary.gap is None

    s = enriched.summary
    assert 1.0 <= s.training_effect <= 5.0
    assert s.decoupling > 0
    # flat, 2 m/s -> 500 s/km
    assert s.gap == pytest.approx(500.0)
    assert enriched.compliance is None
    assert enriched.points is trace.points


def test_analyze_is_idempotent(make_records):
    trace = ingest(make_records(150, hr=lambda i: 150 + i % 7, altitude=lambda i: 100 + i % 5))
    once = analyze(trace, ATHLETE)
    twice = analyze(once, ATHLETE)
    assert once.summary == twice.summary


def test_short_traces_have_no_gap_or_decoupling(make_records):
    enriched = analyze(ingest(make_records(10)), ATHLETE)
    assert enriched.summary.gap is None
    assert enriched.summary.decoupling is None
    assert enriched.summary.training_effect is not None


def test_analyze_with_session_attaches_compliance(make_records):
    # 241 samples every 5 s -> 1200 s moving, matching a 20 min session
    session = PLANS["c25k"].session("c25k_w1d1")
    enriched = analyze(ingest(make_records(241)), ATHLETE, session)
    assert enriched.compliance.score == 94
    assert enriched.compliance.session_id == "c25k_w1d1"


def test_analyze_records_runs_the_whole_pipeline(make_records):
    trace = analyze_records(make_records(120), ATHLETE, name="Lunch Run", calories_per_km=100)
    assert trace.name == "Lunch Run"
    # 1.19 km at 100 kcal/km
    assert trace.summary.calories == 119
    assert trace.summary.training_effect is not None


def test_analyze_records_propagates_ingestion_failure():
    with pytest.raises(NoValidSamples):
        analyze_records([], ATHLETE)
