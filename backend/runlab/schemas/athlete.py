from typing import Optional

from pydantic import BaseModel, ConfigDict

from runlab.engine.models import RunnerLevel, ZoneMethod


class AthleteRead(BaseModel):
    max_hr: int
    resting_hr: int
    method: ZoneMethod
    level: RunnerLevel
    active_plan_id: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class AthleteUpdate(BaseModel):
    """Partial update; omitted fields keep their stored value."""

    max_hr: Optional[int] = None
    resting_hr: Optional[int] = None
    method: Optional[ZoneMethod] = None
    level: Optional[RunnerLevel] = None
    active_plan_id: Optional[str] = None

    # Be lenient with extra fields from clients
    model_config = ConfigDict(extra="ignore")
