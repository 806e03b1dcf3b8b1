from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.sql import func
from runlab.db import Base


class AthleteProfile(Base):
    __tablename__ = "athlete_settings"

    # Single-athlete app: one row with id=1
    id = Column(Integer, primary_key=True)

    max_hr = Column(Integer, nullable=False)
    resting_hr = Column(Integer, nullable=False)
    method = Column(String(20), nullable=False)  # MAX_HR, KARVONEN
    level = Column(String(20), nullable=False)  # BEGINNER, INTERMEDIATE, PRO
    active_plan_id = Column(String, nullable=True)

    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )


class CompletedSession(Base):
    __tablename__ = "completed_sessions"

    session_id = Column(String, primary_key=True)
    run_id = Column(Integer, ForeignKey("runs.id", ondelete="CASCADE"), nullable=False, index=True)
