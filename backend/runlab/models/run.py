from sqlalchemy import Column, Integer, String, Date, DateTime, Float, JSON
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.sql import func
from runlab.db import Base

JSONType = JSON().with_variant(JSONB, "postgresql")


class Run(Base):
    __tablename__ = "runs"

    id = Column(Integer, primary_key=True, index=True)

    # Engine trace id, e.g. run_1735714800000
    trace_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    start_time = Column(DateTime(timezone=True), nullable=False)
    # Local calendar day of the start (settings.timezone)
    date = Column(Date, nullable=False)

    # Summary, SI units: meters, seconds, s/km
    total_distance = Column(Float, nullable=False, default=0.0)
    elapsed_time = Column(Float, nullable=False, default=0.0)
    moving_time = Column(Float, nullable=False, default=0.0)
    avg_hr = Column(Integer, nullable=False, default=0)
    max_hr = Column(Integer, nullable=False, default=0)
    total_ascent = Column(Float, nullable=False, default=0.0)
    total_descent = Column(Float, nullable=False, default=0.0)
    avg_pace = Column(Float, nullable=False, default=0.0)
    max_pace = Column(Float, nullable=False, default=0.0)
    calories = Column(Integer, nullable=False, default=0)
    fitness_score = Column(Integer, nullable=False, default=0)
    intensity_factor = Column(Float, nullable=False, default=0.0)
    variability_index = Column(Float, nullable=False, default=0.0)
    aerobic_efficiency = Column(Float, nullable=False, default=0.0)
    movement_ratio = Column(Float, nullable=False, default=0.0)
    vam = Column(Float, nullable=False, default=0.0)
    gap = Column(Float, nullable=True)
    decoupling = Column(Float, nullable=True)
    training_effect = Column(Float, nullable=True)

    # Plan compliance, when the run was scored against a session
    compliance_score = Column(Integer, nullable=True)
    compliance_notes = Column(String, nullable=True)
    compliance_session_id = Column(String, nullable=True)
    compliance_plan_id = Column(String, nullable=True)

    # [{time, lat, lng, altitude, distance, hr}]
    points = Column(JSONType, nullable=False)

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
