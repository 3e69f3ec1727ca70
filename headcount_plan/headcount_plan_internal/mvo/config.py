"""
PURPOSE: Engine constants and runtime defaults for the MVO sizing engine.

RESPONSIBILITIES:
- Fixed engine parameters (availability, noise band, working calendar)
- Simulation defaults (iterations, random seed, worker count), overridable from env
- Candidate window offsets per operation size
- Single responsibility: configuration only, no simulation logic
"""
import os
from typing import Optional


def _int_from_env(name: str, default: Optional[int]) -> Optional[int]:
    value = os.environ.get(name)
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got: {value!r}")


# Fixed engine parameters. These are not caller-configurable.
AVAILABILITY_FACTOR = 0.85  # Share of calendar days actually worked
NOISE_LOW = 0.9  # Day-to-day productivity noise band
NOISE_HIGH = 1.1
WORKING_DAYS_PER_MONTH = 22
HOURS_PER_MONTH = 160  # Salary -> hourly rate for overtime
MEDIUM_RISK_MULTIPLIER = 1.5  # failure_risk <= allowed * 1.5 -> "medium"

# Simulation defaults
NUM_ITERATIONS = _int_from_env("HEADCOUNT_PLAN_ITERATIONS", 5000)
RANDOM_SEED = _int_from_env("HEADCOUNT_PLAN_RANDOM_SEED", None)  # None = fresh entropy
MAX_WORKERS = _int_from_env("HEADCOUNT_PLAN_MAX_WORKERS", None)  # None = run candidates inline

# Candidate window: (below baseline, above baseline)
DEFAULT_OPERATION_SIZE = "medium_standard"
WINDOW_OFFSETS = {
    "small_lean": (1, 3),
    "medium_standard": (2, 5),
    "large_extended": (3, 7),
}
MIN_TESTED_HEADCOUNT = 1

# Operation size -> label used by the work-type minimum lookup
OPERATION_SIZE_LABELS = {
    "small_lean": "Small",
    "medium_standard": "Medium",
    "large_extended": "Large",
}

# Suggestion thresholds
HIGH_TURNOVER_PERCENT = 15.0
NEAR_THRESHOLD_RATIO = 0.8

# Output Configuration
ROUND_PROBABILITY = 2
ROUND_DURATION = 1
ROUND_COST = 2


def get_window_offsets(operation_size: str):
    """Return (lower, upper) offsets around the baseline for an operation size."""
    return WINDOW_OFFSETS.get(operation_size, WINDOW_OFFSETS[DEFAULT_OPERATION_SIZE])
