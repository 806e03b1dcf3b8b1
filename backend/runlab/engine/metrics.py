"""Derived metrics: grade adjusted pace, aerobic decoupling, training effect.

All functions are pure. The grade curve and the efficiency proxy used for
decoupling are empirical and reproduced as-is.
"""
from __future__ import annotations

from typing import Optional, Sequence

from runlab.core.constants import (
    DECOUPLING_MIN_SAMPLES,
    TRAINING_EFFECT_MAX,
    TRAINING_LOAD_WEIGHTS,
)
from runlab.core.math_utils import round_half_up
from runlab.engine.models import Trace, TrackSample, ZoneBand


def grade_adjusted_pace(p1: TrackSample, p2: TrackSample) -> float:
    """Equivalent flat pace (s/km) between two samples.

    Missing distance or altitude counts as 0. Returns 0 when the samples
    are not separated in both distance and time.
    """
    dist = (p2.distance or 0.0) - (p1.distance or 0.0)
    elev = (p2.altitude or 0.0) - (p1.altitude or 0.0)
    time = (p2.time - p1.time).total_seconds()
    if dist <= 0 or time <= 0:
        return 0.0

    grade = elev / dist
    # The squared term dominates on steep grades, so steep descents also slow GAP
    adj_factor = 1 + (grade * 3) + (grade * grade * 10)
    actual_pace = time / (dist / 1000)
    return actual_pace / adj_factor


def _half_efficiency(points: Sequence[TrackSample]) -> float:
    hr_sum = 0
    dist_sum = 0.0
    time_sum = 0.0
    count = 0
    for i in range(1, len(points)):
        p, prev = points[i], points[i - 1]
        if p.hr and p.distance:
            hr_sum += p.hr
            dist_sum += p.distance - (prev.distance or 0.0)
            time_sum += (p.time - prev.time).total_seconds()
            count += 1
    if count == 0 or dist_sum == 0 or time_sum <= 0:
        return 0.0
    avg_hr = hr_sum / count
    pace_min_per_km = (time_sum / 60) / (dist_sum / 1000)
    return (1 / pace_min_per_km) / avg_hr


def aerobic_decoupling(trace: Trace) -> Optional[float]:
    """Percent drop in pace-per-heartbeat from the first to the second half.

    Positive values mean the second half was less efficient. Returns None
    when the trace is too short or a half has no usable HR/distance data.
    """
    points = trace.points
    if len(points) < DECOUPLING_MIN_SAMPLES:
        return None
    mid = len(points) // 2
    eff1 = _half_efficiency(points[:mid])
    eff2 = _half_efficiency(points[mid:])
    if eff1 == 0 or eff2 == 0:
        return None
    return ((eff1 - eff2) / eff1) * 100


def training_load(zones: Sequence[ZoneBand]) -> float:
    """Weighted minutes of zone 3-5 time."""
    w3, w4, w5 = TRAINING_LOAD_WEIGHTS
    return (zones[2].seconds * w3 + zones[3].seconds * w4 + zones[4].seconds * w5) / 60


def training_effect(zones: Sequence[ZoneBand]) -> float:
    """Map the zone load onto the 1.0-5.0 training effect scale."""
    score = training_load(zones)
    if score < 10:
        effect = 1.0 + score / 10
    elif score < 30:
        effect = 2.0 + (score - 10) / 20
    elif score < 60:
        effect = 3.0 + (score - 30) / 30
    elif score < 120:
        effect = 4.0 + (score - 60) / 60
    else:
        effect = TRAINING_EFFECT_MAX
    return min(TRAINING_EFFECT_MAX, round_half_up(effect, 1))
