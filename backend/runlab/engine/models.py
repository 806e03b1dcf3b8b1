"""Value objects shared by the analysis engine.

Samples, plans and compliance records are immutable. A Summary is filled in
stages: base fields at ingestion, the optional fields by enrichment, which
always produces a new Trace rather than editing one in place.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

from runlab.core.errors import InvalidConfiguration


class ZoneMethod(str, Enum):
    MAX_HR = "MAX_HR"
    KARVONEN = "KARVONEN"


class RunnerLevel(str, Enum):
    BEGINNER = "BEGINNER"
    INTERMEDIATE = "INTERMEDIATE"
    PRO = "PRO"


@dataclass(frozen=True, slots=True)
class TrackSample:
    time: datetime
    lat: Optional[float] = None
    lng: Optional[float] = None
    altitude: Optional[float] = None  # meters
    distance: Optional[float] = None  # cumulative meters
    hr: Optional[int] = None  # bpm


@dataclass
class Summary:
    total_distance: float = 0.0  # meters
    elapsed_time: float = 0.0  # seconds
    moving_time: float = 0.0  # seconds
    avg_hr: int = 0
    max_hr: int = 0
    total_ascent: float = 0.0
    total_descent: float = 0.0
    avg_pace: float = 0.0  # s/km
    max_pace: float = 0.0  # s/km, fastest
    calories: int = 0
    fitness_score: int = 0
    intensity_factor: float = 0.0
    variability_index: float = 0.0
    aerobic_efficiency: float = 0.0
    movement_ratio: float = 0.0  # percent
    vam: float = 0.0  # m/h
    # Enrichment
    gap: Optional[float] = None
    decoupling: Optional[float] = None
    training_effect: Optional[float] = None


@dataclass(frozen=True)
class ComplianceRecord:
    score: int
    notes: str
    session_id: Optional[str] = None


@dataclass
class Trace:
    id: str
    name: str
    start_time: datetime
    points: list[TrackSample]
    summary: Summary
    laps: list = field(default_factory=list)
    compliance: Optional[ComplianceRecord] = None


@dataclass
class ZoneBand:
    zone: int
    label: str
    min: int
    max: int
    seconds: float = 0.0
    percentage: float = 0.0


@dataclass(frozen=True)
class AthleteSettings:
    max_hr: int
    resting_hr: int = 0
    method: ZoneMethod = ZoneMethod.MAX_HR
    level: RunnerLevel = RunnerLevel.BEGINNER

    def __post_init__(self):
        try:
            object.__setattr__(self, "max_hr", int(self.max_hr))
            object.__setattr__(self, "resting_hr", int(self.resting_hr))
            object.__setattr__(self, "method", ZoneMethod(self.method))
            object.__setattr__(self, "level", RunnerLevel(self.level))
        except (TypeError, ValueError) as e:
            raise InvalidConfiguration(f"invalid athlete settings: {e}") from e
        if self.max_hr <= 0:
            raise InvalidConfiguration("max_hr must be > 0")
        if self.resting_hr < 0:
            raise InvalidConfiguration("resting_hr must be >= 0")
        if self.resting_hr >= self.max_hr:
            raise InvalidConfiguration("resting_hr must be lower than max_hr")


@dataclass(frozen=True)
class PlanSession:
    id: str
    day: int  # 1-based day within the plan cycle
    title: str
    description: str
    target_duration: int  # minutes
    target_zone: int  # 1-5


@dataclass(frozen=True)
class TrainingPlan:
    id: str
    name: str
    sessions: tuple[PlanSession, ...]

    def session(self, session_id: str) -> Optional[PlanSession]:
        for s in self.sessions:
            if s.id == session_id:
                return s
        return None
