"""Plan scaling and session compliance scoring."""
from __future__ import annotations

from dataclasses import replace
from typing import Mapping, Optional

from runlab.core.constants import (
    COMPLIANCE_DURATION_WEIGHT,
    COMPLIANCE_EXCELLENT_SCORE,
    COMPLIANCE_INTENSITY_WEIGHT,
    FATIGUE_RISK_EFFECT,
    LEVEL_MULTIPLIERS,
    PLAN_INTENSITY_SCORE,
)
from runlab.core.math_utils import round_int
from runlab.engine.models import (
    ComplianceRecord,
    PlanSession,
    RunnerLevel,
    Trace,
    TrainingPlan,
)
from runlab.engine.plan_templates import PLANS


def scale_plan(plan: TrainingPlan, level: RunnerLevel) -> TrainingPlan:
    """Copy of `plan` with every target duration scaled for the runner level."""
    factor = LEVEL_MULTIPLIERS[RunnerLevel(level).value]
    return replace(
        plan,
        sessions=tuple(
            replace(s, target_duration=round_int(s.target_duration * factor))
            for s in plan.sessions
        ),
    )


def get_scaled_plan(
    plan_id: str,
    level: RunnerLevel,
    plans: Mapping[str, TrainingPlan] = PLANS,
) -> Optional[TrainingPlan]:
    # Unknown ids pass through as None; callers validate plan existence
    plan = plans.get(plan_id)
    if plan is None:
        return plan
    return scale_plan(plan, level)


def compliance(
    session: PlanSession,
    trace: Trace,
    *,
    intensity_score: float = PLAN_INTENSITY_SCORE,
) -> ComplianceRecord:
    """Score how closely a completed trace matched a planned session.

    Only duration is compared; the intensity component is a fixed score.
    """
    target = session.target_duration
    duration_diff = abs(trace.summary.moving_time / 60 - target)
    if target > 0:
        duration_score = max(0.0, 100 - (duration_diff / target) * 100)
    else:
        duration_score = 0.0

    score = round_int(
        duration_score * COMPLIANCE_DURATION_WEIGHT
        + intensity_score * COMPLIANCE_INTENSITY_WEIGHT
    )
    if score > COMPLIANCE_EXCELLENT_SCORE:
        notes = "Excellent adherence to plan."
    else:
        notes = "Session intensity or duration deviated."
    effect = trace.summary.training_effect
    if effect is not None and effect > FATIGUE_RISK_EFFECT:
        notes += " High fatigue risk."
    return ComplianceRecord(score=score, notes=notes, session_id=session.id)
