import pytest

from runlab.core.errors import InvalidConfiguration
from runlab.engine.ingestion import ingest
from runlab.engine.models import AthleteSettings, ZoneMethod
from runlab.engine.zones import compute_zones, zone_distribution


def _bounds(bands):
    return [(b.min, b.max) for b in bands]


def test_karvonen_zones():
    athlete = AthleteSettings(max_hr=190, resting_hr=55, method=ZoneMethod.KARVONEN)
    bands = compute_zones(athlete)
    # HRR = 135; Z2 nominal band is [136, 149.5)
    assert _bounds(bands) == [(123, 136), (136, 150), (150, 163), (163, 177), (177, 190)]
    assert [b.label for b in bands] == [
        "Z1 Recovery", "Z2 Aerobic", "Z3 Tempo", "Z4 Threshold", "Z5 Anaerobic",
    ]
    assert all(b.seconds == 0 and b.percentage == 0 for b in bands)


def test_max_hr_zones():
    athlete = AthleteSettings(max_hr=200, resting_hr=50, method="MAX_HR")
    assert _bounds(compute_zones(athlete)) == [
        (100, 120), (120, 140), (140, 160), (160, 180), (180, 200),
    ]


def test_zone_five_tops_out_at_max_hr():
    athlete = AthleteSettings(max_hr=187, resting_hr=48, method=ZoneMethod.KARVONEN)
    assert compute_zones(athlete)[-1].max == 187


@pytest.mark.parametrize(
    "kwargs",
    [
        {"max_hr": 180, "resting_hr": 180},
        {"max_hr": 180, "resting_hr": 190},
        {"max_hr": 0, "resting_hr": 0},
        {"max_hr": 180, "resting_hr": -1},
        {"max_hr": 180, "resting_hr": 50, "method": "ZONES"},
        {"max_hr": 180, "resting_hr": 50, "level": "ELITE"},
        {"max_hr": "abc", "resting_hr": 50},
        {"max_hr": None, "resting_hr": 50},
        {"max_hr": 180, "resting_hr": None},
    ],
)
def test_invalid_configuration_rejected(kwargs):
    with pytest.raises(InvalidConfiguration):
        AthleteSettings(**kwargs)


def test_numeric_strings_are_coerced():
    athlete = AthleteSettings(max_hr="190", resting_hr="55", method="KARVONEN")
    assert (athlete.max_hr, athlete.resting_hr) == (190, 55)
    assert compute_zones(athlete)[0].min == 123


MAX_HR_200 = AthleteSettings(max_hr=200, resting_hr=50, method=ZoneMethod.MAX_HR)


def test_distribution_splits_time_by_pair_average(make_records):
    # 5 samples at 130, 6 at 170 -> 4 s in Z2, 1 s at avg 150 in Z3, 5 s in Z4
    hrs = [130] * 5 + [170] * 6
    trace = ingest(make_records(11, step=1, hr=lambda i: hrs[i]))
    bands = zone_distribution(trace, MAX_HR_200)

    assert [b.seconds for b in bands] == [0, 4, 1, 5, 0]
    assert [b.percentage for b in bands] == pytest.approx([0, 40, 10, 50, 0])
    assert sum(b.percentage for b in bands) == pytest.approx(100.0, abs=0.01)


def test_upper_bound_is_inclusive(make_records):
    # 140 is the top of Z2 ([120, 140]) and also Z3's lower bound
    trace = ingest(make_records(3, step=1, hr=140))
    bands = zone_distribution(trace, MAX_HR_200)
    assert bands[1].seconds == 2
    assert bands[2].seconds == 0


def test_above_max_hr_goes_to_zone_five(make_records):
    trace = ingest(make_records(4, step=2, hr=205))
    bands = zone_distribution(trace, MAX_HR_200)
    assert bands[4].seconds == 6
    assert bands[4].percentage == pytest.approx(100.0)


def test_below_zone_one_is_unclassified(make_records):
    trace = ingest(make_records(10, step=1, hr=90))
    bands = zone_distribution(trace, MAX_HR_200)
    assert all(b.seconds == 0 for b in bands)
    assert all(b.percentage == 0 for b in bands)


def test_gaps_of_thirty_seconds_or_more_are_skipped(make_records):
    assert sum(b.seconds for b in zone_distribution(
        ingest(make_records(3, step=30, hr=150)), MAX_HR_200)) == 0
    assert sum(b.seconds for b in zone_distribution(
        ingest(make_records(3, step=29, hr=150)), MAX_HR_200)) == 58


def test_pairs_missing_hr_are_skipped(make_records):
    hrs = [150, None, 150, 150]
    trace = ingest(make_records(4, step=1, hr=lambda i: hrs[i]))
    bands = zone_distribution(trace, MAX_HR_200)
    assert sum(b.seconds for b in bands) == 1
