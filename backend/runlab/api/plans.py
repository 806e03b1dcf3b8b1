from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from loguru import logger
from sqlalchemy.orm import Session

from runlab.api.athlete import _athlete_settings, _get_profile
from runlab.api.runs import _apply_trace, _get_run, _link_session, _reload_trace
from runlab.core.config import settings
from runlab.db import get_db
from runlab.engine.analysis import analyze
from runlab.engine.models import RunnerLevel
from runlab.engine.plan_templates import PLANS
from runlab.engine.plans import get_scaled_plan
from runlab.models.athlete import CompletedSession
from runlab.schemas.plan import PlanListItem, PlanRead, PlanSessionRead
from runlab.schemas.run import ComplianceRead

router = APIRouter(prefix="/plans", tags=["plans"])


@router.get("/", response_model=list[PlanListItem])
def list_plans():
    return [
        PlanListItem(id=p.id, name=p.name, sessions_count=len(p.sessions))
        for p in PLANS.values()
    ]


@router.get("/{plan_id}", response_model=PlanRead)
def get_plan(
    plan_id: str,
    level: Optional[RunnerLevel] = Query(None),
    db: Session = Depends(get_db),
):
    """Template scaled to `level` (default: the athlete's level), with the
    run linked to each completed session."""
    lvl = level or RunnerLevel(_get_profile(db).level)
    plan = get_scaled_plan(plan_id, lvl)
    if plan is None:
        raise HTTPException(status_code=404, detail="Plan not found")

    session_ids = [s.id for s in plan.sessions]
    linked = {
        row.session_id: row.run_id
        for row in db.query(CompletedSession)
        .filter(CompletedSession.session_id.in_(session_ids))
        .all()
    }
    return PlanRead(
        id=plan.id,
        name=plan.name,
        level=lvl,
        sessions=[
            PlanSessionRead(
                id=s.id,
                day=s.day,
                title=s.title,
                description=s.description,
                target_duration=s.target_duration,
                target_zone=s.target_zone,
                linked_run_id=linked.get(s.id),
            )
            for s in plan.sessions
        ],
    )


@router.post("/{plan_id}/sessions/{session_id}/compliance", response_model=ComplianceRead)
def score_session(
    plan_id: str,
    session_id: str,
    run_id: int = Query(...),
    db: Session = Depends(get_db),
):
    """Score a stored run against a planned session and attach the result."""
    run = _get_run(db, run_id)
    profile = _get_profile(db)
    athlete = _athlete_settings(profile)

    plan = get_scaled_plan(plan_id, athlete.level)
    if plan is None:
        raise HTTPException(status_code=404, detail="Plan not found")
    session = plan.session(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found")

    trace = analyze(
        _reload_trace(run), athlete, session,
        intensity_score=settings.plan_intensity_score,
    )
    _apply_trace(run, trace, plan.id)
    _link_session(db, session.id, run.id)
    db.commit()
    logger.info(f"Run {run.id} scored {trace.compliance.score} against {session.id}")
    return ComplianceRead(
        score=trace.compliance.score,
        notes=trace.compliance.notes,
        session_id=trace.compliance.session_id,
    )
