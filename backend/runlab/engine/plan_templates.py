"""Built-in training plan templates (read-only)."""
from runlab.engine.models import PlanSession, TrainingPlan


PLANS: dict[str, TrainingPlan] = {
    "c25k": TrainingPlan(
        id="c25k",
        name="Couch to 5K",
        sessions=(
            PlanSession("c25k_w1d1", 1, "W1D1: Intro", "60s run / 90s walk repeats", 20, 2),
            PlanSession("c25k_w1d2", 3, "W1D2: Consistency", "60s run / 90s walk repeats", 20, 2),
            PlanSession("c25k_w1d3", 5, "W1D3: Push", "60s run / 90s walk repeats", 20, 2),
            PlanSession("c25k_w3d1", 15, "W3D1: Progression", "2 min run / 1 min walk", 25, 2),
            PlanSession("c25k_w5d3", 33, "W5D3: The Wall", "Continuous 20 minute run", 20, 3),
            PlanSession("c25k_final", 63, "Final Graduation", "30-45 minute steady run", 30, 3),
        ),
    ),
    "run10k": TrainingPlan(
        id="run10k",
        name="10K Finisher",
        sessions=(
            PlanSession("10k_w1d1", 1, "Foundation", "Easy base run", 30, 2),
            PlanSession("10k_w2d1", 8, "Intervals", "4x400m fast with rest", 35, 4),
            PlanSession("10k_w4d1", 22, "Threshold Work", "10 min warm up, 15 min Z4", 40, 4),
            PlanSession("10k_long", 14, "Long Run", "Slow steady distance", 50, 2),
        ),
    ),
}
