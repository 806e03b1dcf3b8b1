from fastapi import APIRouter, Depends, HTTPException
from loguru import logger
from sqlalchemy.orm import Session

from runlab.core.config import settings
from runlab.core.errors import InvalidConfiguration
from runlab.db import get_db
from runlab.engine.models import AthleteSettings
from runlab.engine.plan_templates import PLANS
from runlab.engine.zones import compute_zones
from runlab.models.athlete import AthleteProfile
from runlab.schemas.athlete import AthleteRead, AthleteUpdate
from runlab.schemas.run import ZoneBandRead

router = APIRouter(prefix="/athlete", tags=["athlete"])


def _get_profile(db: Session) -> AthleteProfile:
    """Return the stored athlete row, seeding it from configuration."""
    row = db.query(AthleteProfile).filter(AthleteProfile.id == 1).first()
    if not row:
        row = AthleteProfile(
            id=1,
            max_hr=settings.max_hr,
            resting_hr=settings.resting_hr,
            method=settings.zone_method.upper(),
            level=settings.level.upper(),
            active_plan_id=settings.active_plan_id,
        )
        db.add(row)
        db.commit()
        db.refresh(row)
    return row


def _athlete_settings(row: AthleteProfile) -> AthleteSettings:
    try:
        return AthleteSettings(
            max_hr=row.max_hr,
            resting_hr=row.resting_hr,
            method=row.method,
            level=row.level,
        )
    except InvalidConfiguration as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.get("", response_model=AthleteRead)
def get_athlete(db: Session = Depends(get_db)):
    return _get_profile(db)


@router.put("", response_model=AthleteRead)
def update_athlete(payload: AthleteUpdate, db: Session = Depends(get_db)):
    row = _get_profile(db)
    data = payload.model_dump(exclude_unset=True)

    max_hr = data.get("max_hr", row.max_hr)
    resting_hr = data.get("resting_hr", row.resting_hr)
    method = data.get("method") or row.method
    level = data.get("level") or row.level
    try:
        AthleteSettings(max_hr=max_hr, resting_hr=resting_hr, method=method, level=level)
    except InvalidConfiguration as e:
        logger.warning(f"Rejected athlete settings: {e}")
        raise HTTPException(status_code=422, detail=str(e))

    if "active_plan_id" in data:
        plan_id = data["active_plan_id"] or None
        if plan_id is not None and plan_id not in PLANS:
            raise HTTPException(status_code=422, detail=f"Unknown plan: {plan_id}")
        row.active_plan_id = plan_id

    row.max_hr = max_hr
    row.resting_hr = resting_hr
    row.method = getattr(method, "value", method)
    row.level = getattr(level, "value", level)
    db.commit()
    db.refresh(row)
    return row


@router.get("/zones", response_model=list[ZoneBandRead])
def get_zones(db: Session = Depends(get_db)):
    return compute_zones(_athlete_settings(_get_profile(db)))
