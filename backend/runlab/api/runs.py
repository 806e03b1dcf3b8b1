from dataclasses import asdict
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile
from loguru import logger
from sqlalchemy.orm import Session

from runlab.adapters.loader import load_records, trace_name
from runlab.api.athlete import _athlete_settings, _get_profile
from runlab.core.config import settings
from runlab.core.errors import NoValidSamples, TraceParseError, UnsupportedFormat
from runlab.core.time_utils import to_local_datetime
from runlab.db import get_db
from runlab.engine.analysis import analyze
from runlab.engine.ingestion import ingest
from runlab.engine.models import PlanSession, Trace
from runlab.engine.plans import get_scaled_plan
from runlab.engine.zones import zone_distribution
from runlab.models.athlete import CompletedSession
from runlab.models.run import Run
from runlab.schemas.run import (
    ComplianceRead,
    RunListItem,
    RunRead,
    SamplePoint,
    SummaryRead,
    ZoneBandRead,
)

router = APIRouter(prefix="/runs", tags=["runs"])


# --------- Engine <-> storage helpers --------- #

def _ingest_options() -> dict:
    return {
        "calories_per_km": settings.calories_per_km,
        "threshold_pace": settings.threshold_pace_s_per_km,
        "variability_index": settings.variability_index,
    }


def _plan_session(
    plan_id: Optional[str], level: str, session_id: Optional[str]
) -> Optional[PlanSession]:
    """Look up a session of `plan_id`, scaled to `level`."""
    if not session_id or not plan_id:
        return None
    plan = get_scaled_plan(plan_id, level)
    return plan.session(session_id) if plan else None


def _points_json(trace: Trace) -> list[dict]:
    return [
        {
            "time": p.time.isoformat(),
            "lat": p.lat,
            "lng": p.lng,
            "altitude": p.altitude,
            "distance": p.distance,
            "hr": p.hr,
        }
        for p in trace.points
    ]


def _apply_trace(run: Run, trace: Trace, plan_id: Optional[str] = None) -> None:
    """Copy an analyzed trace onto its storage row.

    Compliance columns always mirror the trace: a trace analyzed without a
    session clears any earlier score.
    """
    run.trace_id = trace.id
    run.name = trace.name
    run.start_time = trace.start_time
    run.date = to_local_datetime(trace.start_time, settings.timezone).date()
    for key, value in asdict(trace.summary).items():
        setattr(run, key, value)
    if trace.compliance is not None:
        run.compliance_score = trace.compliance.score
        run.compliance_notes = trace.compliance.notes
        run.compliance_session_id = trace.compliance.session_id
        run.compliance_plan_id = plan_id
    else:
        run.compliance_score = None
        run.compliance_notes = None
        run.compliance_session_id = None
        run.compliance_plan_id = None
    run.points = _points_json(trace)


def _reload_trace(run: Run) -> Trace:
    """Rebuild the base trace from the stored samples."""
    return ingest(run.points, trace_id=run.trace_id, name=run.name, **_ingest_options())


def _link_session(db: Session, session_id: str, run_id: int) -> None:
    row = db.query(CompletedSession).filter(CompletedSession.session_id == session_id).first()
    if not row:
        db.add(CompletedSession(session_id=session_id, run_id=run_id))
    else:
        row.run_id = run_id


def _trim_history(db: Session) -> None:
    """Drop runs beyond the `history_limit` most recently imported."""
    stale = (
        db.query(Run)
        .order_by(Run.id.desc())
        .offset(settings.history_limit)
        .all()
    )
    for run in stale:
        db.query(CompletedSession).filter(CompletedSession.run_id == run.id).delete()
        db.delete(run)
    if stale:
        logger.info(f"Trimmed {len(stale)} runs beyond history limit")


def _run_read(run: Run) -> RunRead:
    compliance = None
    if run.compliance_score is not None:
        compliance = ComplianceRead(
            score=run.compliance_score,
            notes=run.compliance_notes or "",
            session_id=run.compliance_session_id,
        )
    return RunRead(
        id=run.id,
        trace_id=run.trace_id,
        name=run.name,
        date=run.date,
        start_time=run.start_time,
        points_count=len(run.points or []),
        summary=SummaryRead.model_validate(run),
        compliance=compliance,
    )


def _get_run(db: Session, run_id: int) -> Run:
    run = db.query(Run).filter(Run.id == run_id).first()
    if not run:
        raise HTTPException(status_code=404, detail="Run not found")
    return run


# --------- Routes --------- #

@router.post("/import", response_model=RunRead)
def import_activity(
    file: UploadFile = File(...),
    session_id: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    """Import a TCX/GPX/FIT file, analyze it and store the run.

    When `session_id` names a session of the active plan, the run is scored
    against it and recorded as that session's completion.
    """
    filename = file.filename or "upload.tcx"
    data = file.file.read()
    try:
        records = load_records(data, filename)
    except (UnsupportedFormat, TraceParseError) as e:
        logger.warning(f"Rejected import {filename}: {e}")
        raise HTTPException(status_code=400, detail=str(e))

    profile = _get_profile(db)
    athlete = _athlete_settings(profile)
    plan_id = profile.active_plan_id
    session = _plan_session(plan_id, profile.level, session_id)
    if session_id and session is None:
        logger.warning(f"Session {session_id} not in active plan; importing without compliance")

    try:
        trace = ingest(records, name=trace_name(filename), **_ingest_options())
    except NoValidSamples as e:
        logger.warning(f"Rejected import {filename}: {e}")
        raise HTTPException(status_code=400, detail=f"Invalid file: {e}")
    trace = analyze(trace, athlete, session, intensity_score=settings.plan_intensity_score)

    run = Run()
    _apply_trace(run, trace, plan_id)
    db.add(run)
    db.flush()
    if trace.compliance is not None:
        _link_session(db, trace.compliance.session_id, run.id)
    _trim_history(db)
    db.commit()
    db.refresh(run)
    logger.info(f"Imported {filename} as run {run.id}")
    return _run_read(run)


@router.get("/", response_model=list[RunListItem])
def list_runs(db: Session = Depends(get_db)):
    return db.query(Run).order_by(Run.start_time.desc(), Run.id.desc()).all()


@router.get("/{run_id}", response_model=RunRead)
def get_run(run_id: int, db: Session = Depends(get_db)):
    return _run_read(_get_run(db, run_id))


@router.get("/{run_id}/points", response_model=list[SamplePoint])
def get_run_points(run_id: int, db: Session = Depends(get_db)):
    return _get_run(db, run_id).points or []


@router.get("/{run_id}/zones", response_model=list[ZoneBandRead])
def get_run_zones(run_id: int, db: Session = Depends(get_db)):
    """Zone distribution using the athlete's current settings."""
    run = _get_run(db, run_id)
    athlete = _athlete_settings(_get_profile(db))
    return zone_distribution(_reload_trace(run), athlete)


@router.post("/{run_id}/reanalyze", response_model=RunRead)
def reanalyze_run(run_id: int, db: Session = Depends(get_db)):
    """Recompute summary and enrichment with the current athlete settings.

    A compliance score is recomputed against the plan it was scored in,
    scaled to the current level, and dropped if that session is gone.
    """
    run = _get_run(db, run_id)
    profile = _get_profile(db)
    athlete = _athlete_settings(profile)
    plan_id = run.compliance_plan_id
    session = _plan_session(plan_id, profile.level, run.compliance_session_id)
    if run.compliance_session_id and session is None:
        logger.warning(
            f"Run {run.id}: session {run.compliance_session_id} no longer resolves; clearing compliance"
        )

    trace = analyze(
        _reload_trace(run), athlete, session,
        intensity_score=settings.plan_intensity_score,
    )
    _apply_trace(run, trace, plan_id)
    if trace.compliance is None:
        db.query(CompletedSession).filter(CompletedSession.run_id == run.id).delete()
    db.commit()
    db.refresh(run)
    return _run_read(run)


@router.delete("/{run_id}")
def delete_run(run_id: int, db: Session = Depends(get_db)):
    run = _get_run(db, run_id)
    db.query(CompletedSession).filter(CompletedSession.run_id == run.id).delete()
    db.delete(run)
    db.commit()
    return {"message": "Run deleted"}
