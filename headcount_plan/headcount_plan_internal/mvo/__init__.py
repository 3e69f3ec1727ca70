"""
Minimum Viable Organization (MVO) sizing engine.

PURPOSE:
    Find the smallest headcount that meets a deadline-risk and budget
    tolerance for one planning unit, by comparing a deterministic baseline
    with Monte Carlo simulations of a window of candidate headcounts.

RESPONSIBILITIES:
    - Triangular sampling of uncertain inputs
    - Deterministic baseline headcount
    - Per-candidate Monte Carlo simulation
    - Candidate rejection and selection
    - Organisation policy floors (governance)
    - Strategy classification and explanation

SRP/DRY CHECK:
    Each submodule has a single responsibility:
    - distributions.py: Sampling from triangular distributions only
    - baseline.py: Deterministic baseline only
    - candidate.py: N-trial simulation of one headcount only
    - selector.py: Window, rejection and tie-break only
    - governance.py: Policy floors only
    - strategy.py: Strategy, explanation and suggestions only
    - engine.py: Wiring the stages together
"""

from .baseline import estimate_baseline
from .candidate import simulate_candidate
from .distributions import TriangularSampler, sample_triangular
from .engine import MVOEngine, identify_mvo
from .errors import (
    InvalidSpecError,
    MVOError,
    NoFeasibleCandidateWarning,
    SimulationCancelledError,
    UnknownPolicyError,
)
from .governance import apply_governance
from .models import (
    Constraints,
    CostVariables,
    OperatingContext,
    PeopleRiskFactors,
    RangeValue,
    WorkloadSpec,
)
from .results import BaselineHeadcount, HeadcountTestResult, MVOResult, RiskLevel, Strategy
from .selector import select_mvo
from .strategy import classify

__version__ = "0.1.0"

__all__ = [
    "sample_triangular",
    "TriangularSampler",
    "estimate_baseline",
    "simulate_candidate",
    "select_mvo",
    "apply_governance",
    "classify",
    "identify_mvo",
    "MVOEngine",
    "RangeValue",
    "Constraints",
    "PeopleRiskFactors",
    "CostVariables",
    "WorkloadSpec",
    "OperatingContext",
    "BaselineHeadcount",
    "HeadcountTestResult",
    "MVOResult",
    "RiskLevel",
    "Strategy",
    "MVOError",
    "InvalidSpecError",
    "UnknownPolicyError",
    "SimulationCancelledError",
    "NoFeasibleCandidateWarning",
]
