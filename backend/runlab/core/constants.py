"""Shared analysis constants.

Centralizes the thresholds and fixed factors used by ingestion and the
derived metrics so we can document and adjust them in one place. The
calorie, threshold pace, variability and intensity values are known
simplifications, not physiological ground truth.
"""

# Minimum speed considered "moving" (m/s). ~1.1 mph.
MOVING_SPEED_MPS = 0.5

# Largest gap between samples (s) still treated as continuous motion
MOVING_MAX_GAP_S = 15

# Gaps at or above this (s) are not credited to any HR zone
ZONE_MAX_GAP_S = 30

# Plausible pace window (s/km) for the fastest-pace statistic, ~2 to 20 min/km
PACE_FLOOR_S_PER_KM = 120
PACE_CEILING_S_PER_KM = 1200

# Flat energy cost used for the calorie estimate
CALORIES_PER_KM = 70

# Reference threshold pace (5:00/km) for the intensity factor
THRESHOLD_PACE_S_PER_KM = 300

# No pace variability is computed during ingestion
VARIABILITY_INDEX = 1.05

# Intensity component of plan compliance (zone matching is not implemented)
PLAN_INTENSITY_SCORE = 80

# Heart rate zone breakpoints as fractions of HR max (MAX_HR) or of HR
# reserve above resting (KARVONEN). Z1: [0.50, 0.60), ..., Z5: [0.90, 1.00]
HR_ZONE_BOUNDS = [0.5, 0.6, 0.7, 0.8, 0.9, 1.0]

HR_ZONE_LABELS = [
    "Z1 Recovery",
    "Z2 Aerobic",
    "Z3 Tempo",
    "Z4 Threshold",
    "Z5 Anaerobic",
]

# Load weights (per second of zone time) for Z3, Z4, Z5
TRAINING_LOAD_WEIGHTS = (0.5, 1.5, 3.0)

TRAINING_EFFECT_MAX = 5.0

# Decoupling needs enough samples for two meaningful halves
DECOUPLING_MIN_SAMPLES = 100

# Summary GAP is only reported for traces longer than this many samples
GAP_MIN_SAMPLES = 10

# Plan duration multipliers by runner level
LEVEL_MULTIPLIERS = {
    "BEGINNER": 1.0,
    "INTERMEDIATE": 1.3,
    "PRO": 1.7,
}

COMPLIANCE_DURATION_WEIGHT = 0.7
COMPLIANCE_INTENSITY_WEIGHT = 0.3
COMPLIANCE_EXCELLENT_SCORE = 85
FATIGUE_RISK_EFFECT = 4.5
