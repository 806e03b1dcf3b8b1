"""Heart rate zone model.

Zone bounds are whole bpm. A zone matches an average HR in ``[min, max + 1)``
so the upper bound behaves as an inclusive integer, and time averaging at or
above max HR with no matching zone is credited to zone 5.
"""
from __future__ import annotations

from runlab.core.constants import HR_ZONE_BOUNDS, HR_ZONE_LABELS, ZONE_MAX_GAP_S
from runlab.core.math_utils import round_int
from runlab.engine.models import AthleteSettings, Trace, ZoneBand, ZoneMethod


def _boundary(athlete: AthleteSettings, fraction: float) -> float:
    if athlete.method == ZoneMethod.KARVONEN:
        reserve = athlete.max_hr - athlete.resting_hr
        return athlete.resting_hr + reserve * fraction
    return athlete.max_hr * fraction


def compute_zones(athlete: AthleteSettings) -> list[ZoneBand]:
    """Return the five zone bands for an athlete, with no time credited."""
    bands = []
    for i, label in enumerate(HR_ZONE_LABELS):
        lo = round_int(_boundary(athlete, HR_ZONE_BOUNDS[i]))
        if i == len(HR_ZONE_LABELS) - 1:
            hi = athlete.max_hr
        else:
            hi = round_int(_boundary(athlete, HR_ZONE_BOUNDS[i + 1]))
        bands.append(ZoneBand(zone=i + 1, label=label, min=lo, max=hi))
    return bands


def _find_zone(bands: list[ZoneBand], avg_hr: float) -> int | None:
    for idx, band in enumerate(bands):
        if band.min <= avg_hr < band.max + 1:
            return idx
    return None


def zone_distribution(trace: Trace, athlete: AthleteSettings) -> list[ZoneBand]:
    """Classify the time between consecutive HR samples into zones.

    Only pairs where both samples carry HR and the gap is strictly between 0
    and ZONE_MAX_GAP_S seconds are counted. Percentages are relative to the
    time credited to any zone.
    """
    bands = compute_zones(athlete)
    points = trace.points
    for i in range(1, len(points)):
        a, b = points[i - 1], points[i]
        if a.hr is None or b.hr is None:
            continue
        duration = (b.time - a.time).total_seconds()
        if not 0 < duration < ZONE_MAX_GAP_S:
            continue
        avg_hr = (a.hr + b.hr) / 2
        idx = _find_zone(bands, avg_hr)
        if idx is None and avg_hr >= athlete.max_hr:
            idx = len(bands) - 1
        if idx is not None:
            bands[idx].seconds += duration

    total = sum(band.seconds for band in bands)
    for band in bands:
        band.percentage = (band.seconds / total) * 100 if total > 0 else 0.0
    return bands
