from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class ComplianceRead(BaseModel):
    score: int
    notes: str
    session_id: Optional[str] = None


class SummaryRead(BaseModel):
    """Engine summary, SI units (meters, seconds, s/km)."""

    total_distance: float
    elapsed_time: float
    moving_time: float
    avg_hr: int
    max_hr: int
    total_ascent: float
    total_descent: float
    avg_pace: float
    max_pace: float
    calories: int
    fitness_score: int
    intensity_factor: float
    variability_index: float
    aerobic_efficiency: float
    movement_ratio: float
    vam: float
    gap: Optional[float] = None
    decoupling: Optional[float] = None
    training_effect: Optional[float] = None

    model_config = ConfigDict(from_attributes=True)


class RunListItem(BaseModel):
    id: int
    trace_id: str
    name: str
    date: date
    start_time: datetime
    total_distance: float
    moving_time: float
    training_effect: Optional[float] = None
    compliance_score: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)


class RunRead(BaseModel):
    id: int
    trace_id: str
    name: str
    date: date
    start_time: datetime
    points_count: int
    summary: SummaryRead
    compliance: Optional[ComplianceRead] = None


class SamplePoint(BaseModel):
    time: datetime
    lat: Optional[float] = None
    lng: Optional[float] = None
    altitude: Optional[float] = None
    distance: Optional[float] = None
    hr: Optional[int] = None


class ZoneBandRead(BaseModel):
    zone: int
    label: str
    min: int
    max: int
    seconds: float
    percentage: float

    model_config = ConfigDict(from_attributes=True)
