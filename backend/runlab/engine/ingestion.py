"""Trace ingestion.

Turns decoded per-sample records into a Trace with its base Summary. Each
record is a mapping with optional ``time``, ``lat``, ``lng``, ``altitude``,
``distance`` (cumulative meters) and ``hr`` keys whose values may be text or
numbers, exactly as a file adapter extracted them.

Everything is accumulated in a single pass over consecutive sample pairs;
the derived fields are computed from those totals afterwards.
"""
from __future__ import annotations

import math
from typing import Iterable, Mapping, Optional

from loguru import logger

from runlab.core.constants import (
    CALORIES_PER_KM,
    MOVING_MAX_GAP_S,
    MOVING_SPEED_MPS,
    PACE_CEILING_S_PER_KM,
    PACE_FLOOR_S_PER_KM,
    THRESHOLD_PACE_S_PER_KM,
    VARIABILITY_INDEX,
)
from runlab.core.errors import NoValidSamples
from runlab.core.math_utils import round_int
from runlab.core.time_utils import epoch_millis, parse_timestamp
from runlab.engine.models import Summary, Trace, TrackSample


def _parse_float(value) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        out = float(value.strip() if isinstance(value, str) else value)
    except (TypeError, ValueError):
        return None
    return out if math.isfinite(out) else None


def _parse_hr(value) -> Optional[int]:
    # Fractional readings truncate like an integer read ("151.6" -> 151)
    out = _parse_float(value)
    if out is None:
        return None
    bpm = int(out)
    return bpm if bpm > 0 else None


def parse_sample(record: Mapping) -> Optional[TrackSample]:
    """Build a TrackSample from one raw record.

    Numeric fields that do not parse are left as None. A record without a
    usable timestamp is not a sample and yields None.
    """
    time = parse_timestamp(record.get("time"))
    if time is None:
        return None
    return TrackSample(
        time=time,
        lat=_parse_float(record.get("lat")),
        lng=_parse_float(record.get("lng")),
        altitude=_parse_float(record.get("altitude")),
        distance=_parse_float(record.get("distance")),
        hr=_parse_hr(record.get("hr")),
    )


def ingest(
    records: Iterable[Mapping],
    *,
    trace_id: str | None = None,
    name: str | None = None,
    calories_per_km: float = CALORIES_PER_KM,
    threshold_pace: float = THRESHOLD_PACE_S_PER_KM,
    variability_index: float = VARIABILITY_INDEX,
) -> Trace:
    """Parse raw records into a Trace with a populated base Summary.

    Raises NoValidSamples when not a single record carries a timestamp.
    Input order is trusted; samples are never re-sorted.
    """
    points: list[TrackSample] = []
    skipped = 0

    total_ascent = 0.0
    total_descent = 0.0
    last_alt = None
    moving_time = 0.0
    max_pace = 0.0
    hr_sum = 0
    hr_count = 0
    max_hr = 0

    for record in records:
        sample = parse_sample(record)
        if sample is None:
            skipped += 1
            continue

        if points:
            prev = points[-1]
            dt = (sample.time - prev.time).total_seconds()
            dd = (sample.distance or 0.0) - (prev.distance or 0.0)

            # Longer gaps are data gaps, not motion
            if 0 < dt <= MOVING_MAX_GAP_S:
                if dd / dt > MOVING_SPEED_MPS:
                    moving_time += dt
                if dd > 0:
                    pace = dt / (dd / 1000)
                    if PACE_FLOOR_S_PER_KM < pace < PACE_CEILING_S_PER_KM:
                        if max_pace == 0 or pace < max_pace:
                            max_pace = pace

            if sample.altitude is not None and last_alt is not None:
                diff = sample.altitude - last_alt
                if diff > 0:
                    total_ascent += diff
                elif diff < 0:
                    total_descent += -diff

        # A dropout keeps the last known altitude
        if sample.altitude is not None:
            last_alt = sample.altitude
        if sample.hr is not None:
            max_hr = max(max_hr, sample.hr)
            hr_sum += sample.hr
            hr_count += 1
        points.append(sample)

    if not points:
        raise NoValidSamples(f"no valid track samples ({skipped} records skipped)")
    if skipped:
        logger.debug(f"Skipped {skipped} records without a usable timestamp")

    start_time = points[0].time
    total_distance = points[-1].distance or 0.0
    elapsed_time = (points[-1].time - start_time).total_seconds()

    avg_hr = hr_sum / hr_count if hr_count > 0 else 0.0
    avg_pace = (
        moving_time / (total_distance / 1000)
        if moving_time > 0 and total_distance > 0
        else 0.0
    )

    summary = Summary(
        total_distance=total_distance,
        elapsed_time=elapsed_time,
        moving_time=moving_time,
        avg_hr=round_int(avg_hr),
        max_hr=max_hr,
        total_ascent=total_ascent,
        total_descent=total_descent,
        avg_pace=avg_pace,
        max_pace=max_pace,
        calories=round_int((total_distance / 1000) * calories_per_km),
        fitness_score=round_int((avg_hr * (moving_time / 3600)) / 10),
        intensity_factor=threshold_pace / avg_pace if avg_pace > 0 else 0.0,
        variability_index=variability_index,
        aerobic_efficiency=(total_distance / hr_sum) * 100 if hr_sum > 0 else 0.0,
        # Out-of-order timestamps could push this past 100
        movement_ratio=min(100.0, (moving_time / elapsed_time) * 100) if elapsed_time > 0 else 0.0,
        vam=(total_ascent / moving_time) * 3600 if moving_time > 0 else 0.0,
    )

    trace = Trace(
        id=trace_id or f"run_{epoch_millis(start_time)}",
        name=name or "Activity",
        start_time=start_time,
        points=points,
        summary=summary,
    )
    logger.info(
        f"Ingested trace {trace.id}: {len(points)} samples, "
        f"{total_distance:.0f} m, {moving_time:.0f} s moving"
    )
    return trace
