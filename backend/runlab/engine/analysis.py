"""Enrichment pipeline run on every imported trace.

Order matters only for compliance, which reads the training effect.
"""
from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Mapping, Optional

from loguru import logger

from runlab.core.constants import GAP_MIN_SAMPLES, PLAN_INTENSITY_SCORE
from runlab.engine.ingestion import ingest
from runlab.engine.metrics import aerobic_decoupling, grade_adjusted_pace, training_effect
from runlab.engine.models import AthleteSettings, PlanSession, Trace
from runlab.engine.plans import compliance
from runlab.engine.zones import zone_distribution


def analyze(
    trace: Trace,
    athlete: AthleteSettings,
    session: Optional[PlanSession] = None,
    *,
    intensity_score: float = PLAN_INTENSITY_SCORE,
) -> Trace:
    """Return a copy of `trace` with training effect, decoupling, GAP and,
    when a planned session is given, compliance filled in.

    Running it again with the same inputs yields the same values.
    """
    zones = zone_distribution(trace, athlete)
    decoupling = aerobic_decoupling(trace)
    if decoupling is None:
        logger.debug(f"Decoupling not computable for {trace.id} ({len(trace.points)} samples)")

    gap = trace.summary.gap
    if len(trace.points) > GAP_MIN_SAMPLES:
        gap = grade_adjusted_pace(trace.points[0], trace.points[-1])

    summary = replace(
        trace.summary,
        training_effect=training_effect(zones),
        decoupling=decoupling,
        gap=gap,
    )
    enriched = replace(trace, summary=summary)
    if session is not None:
        enriched.compliance = compliance(session, enriched, intensity_score=intensity_score)

    logger.info(
        f"Analyzed {trace.id}: TE {summary.training_effect}, "
        f"decoupling {summary.decoupling}, compliance "
        f"{enriched.compliance.score if enriched.compliance else None}"
    )
    return enriched


def analyze_records(
    records: Iterable[Mapping],
    athlete: AthleteSettings,
    session: Optional[PlanSession] = None,
    *,
    name: str | None = None,
    intensity_score: float = PLAN_INTENSITY_SCORE,
    **ingest_options,
) -> Trace:
    """Ingest raw records and run the enrichment pipeline on the result."""
    trace = ingest(records, name=name, **ingest_options)
    return analyze(trace, athlete, session, intensity_score=intensity_score)
