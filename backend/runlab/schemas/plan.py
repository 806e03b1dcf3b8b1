from typing import Optional

from pydantic import BaseModel, ConfigDict

from runlab.engine.models import RunnerLevel


class PlanSessionRead(BaseModel):
    id: str
    day: int
    title: str
    description: str
    target_duration: int  # minutes
    target_zone: int
    linked_run_id: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)


class PlanRead(BaseModel):
    id: str
    name: str
    level: RunnerLevel
    sessions: list[PlanSessionRead]


class PlanListItem(BaseModel):
    id: str
    name: str
    sessions_count: int
