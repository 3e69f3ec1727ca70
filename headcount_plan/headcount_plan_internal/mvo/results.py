"""
PURPOSE: Output value objects produced by the MVO sizing engine.

Results are frozen dataclasses. A stage that needs to flag a result
(rejection, governance floor) builds a new value with dataclasses.replace,
so results computed on worker threads are never mutated after creation.

SRP/DRY: Data containers and their to_dict() serialisation only. No simulation.
"""
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from headcount_plan_internal.mvo.config import ROUND_COST, ROUND_DURATION, ROUND_PROBABILITY


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Strategy(str, Enum):
    HIRE_PERMANENT = "hire_permanent"
    HYBRID_PERM_GIG = "hybrid_perm_gig"
    OUTSOURCE = "outsource"
    AUTOMATE = "automate"


def _round(value: float, digits: int) -> float:
    # round() on inf is inf; keep infeasible figures visible to consumers.
    return round(float(value), digits)


@dataclass(frozen=True)
class BaselineCalculation:
    total_workload: float
    average_productivity: float
    available_working_days: float
    formula: str


@dataclass(frozen=True)
class BaselineHeadcount:
    """Deterministic, risk-free headcount estimate.

    Attributes:
        headcount (int): ceil(workload / (productivity * available days)).
        calculation (BaselineCalculation): The inputs that went into the formula.
        rationale (str): Multi-line, human readable explanation.
    """
    headcount: int
    calculation: BaselineCalculation
    rationale: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "headcount": self.headcount,
            "calculation": {
                "total_workload": self.calculation.total_workload,
                "average_productivity": self.calculation.average_productivity,
                "available_working_days": self.calculation.available_working_days,
                "formula": self.calculation.formula,
            },
            "rationale": self.rationale,
        }


@dataclass(frozen=True)
class HeadcountTestResult:
    """Simulation outcome for one candidate headcount.

    Durations are in calendar days, costs in currency units, probabilities
    and failure_risk in percent (0-100).
    """
    headcount: int
    iterations: int
    avg_duration: float
    min_duration: float
    max_duration: float
    p50_duration: float
    p75_duration: float
    p90_duration: float
    avg_cost: float
    min_cost: float
    max_cost: float
    deadline_met_probability: float
    failure_risk: float
    within_budget_probability: float
    risk_level: RiskLevel
    rejected: bool = False
    rejection_reason: Optional[str] = None
    min_headcount_applied: bool = False
    min_headcount_value: Optional[int] = None

    @property
    def success_rate(self) -> float:
        return self.deadline_met_probability

    def with_rejection(self, reason: str) -> "HeadcountTestResult":
        return replace(self, rejected=True, rejection_reason=reason)

    def with_min_headcount(self, value: int) -> "HeadcountTestResult":
        return replace(self, min_headcount_applied=True, min_headcount_value=value)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "headcount": self.headcount,
            "iterations": self.iterations,
            "duration": {
                "avg": _round(self.avg_duration, ROUND_DURATION),
                "min": _round(self.min_duration, ROUND_DURATION),
                "max": _round(self.max_duration, ROUND_DURATION),
                "p50": _round(self.p50_duration, ROUND_DURATION),
                "p75": _round(self.p75_duration, ROUND_DURATION),
                "p90": _round(self.p90_duration, ROUND_DURATION),
            },
            "cost": {
                "avg": _round(self.avg_cost, ROUND_COST),
                "min": _round(self.min_cost, ROUND_COST),
                "max": _round(self.max_cost, ROUND_COST),
            },
            "deadline_met_probability": _round(self.deadline_met_probability, ROUND_PROBABILITY),
            "failure_risk": _round(self.failure_risk, ROUND_PROBABILITY),
            "within_budget_probability": _round(self.within_budget_probability, ROUND_PROBABILITY),
            "risk_level": self.risk_level.value,
            "rejected": self.rejected,
            "rejection_reason": self.rejection_reason,
            "min_headcount_applied": self.min_headcount_applied,
            "min_headcount_value": self.min_headcount_value,
        }


@dataclass(frozen=True)
class Comparison:
    baseline_risk: float
    mvo_risk: float
    cost_delta: float
    time_delta: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "baseline_risk": _round(self.baseline_risk, ROUND_PROBABILITY),
            "mvo_risk": _round(self.mvo_risk, ROUND_PROBABILITY),
            "cost_delta": _round(self.cost_delta, ROUND_COST),
            "time_delta": _round(self.time_delta, ROUND_DURATION),
        }


@dataclass(frozen=True)
class SelectionOutcome:
    """What the selector hands to governance: every tested result plus its pick."""
    baseline: BaselineHeadcount
    baseline_count: int
    test_results: Tuple[HeadcountTestResult, ...]
    selected: HeadcountTestResult
    fallback: bool


@dataclass(frozen=True)
class GovernanceOutcome:
    adjusted_headcount: int
    selected: HeadcountTestResult
    test_results: Tuple[HeadcountTestResult, ...]


@dataclass(frozen=True)
class Classification:
    strategy: Strategy
    explanation: str
    suggestions: Tuple[str, ...]


@dataclass(frozen=True)
class MVOResult:
    """Final outcome of one MVO run.

    Attributes:
        recommended_headcount (int): Headcount after selection and governance.
        baseline_headcount (int): Baseline count after operation-size scaling.
        test_results (tuple): Every simulated candidate, ordered by headcount.
        selected_result (HeadcountTestResult): The recommended candidate.
        fallback (bool): True when no candidate met the constraints and the
            largest tested headcount was returned instead. Consumers should
            present such a result as a warning, not a recommendation.
    """
    recommended_headcount: int
    baseline_headcount: int
    baseline: BaselineHeadcount
    test_results: Tuple[HeadcountTestResult, ...]
    selected_result: HeadcountTestResult
    strategy: Strategy
    explanation: str
    suggestions: Tuple[str, ...]
    comparison: Comparison
    fallback: bool = False
    warnings: Tuple[str, ...] = field(default_factory=tuple)

    def rejected_results(self) -> List[HeadcountTestResult]:
        return [r for r in self.test_results if r.rejected]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "recommended_headcount": self.recommended_headcount,
            "baseline_headcount": self.baseline_headcount,
            "baseline": self.baseline.to_dict(),
            "test_results": [r.to_dict() for r in self.test_results],
            "selected_result": self.selected_result.to_dict(),
            "strategy": self.strategy.value,
            "explanation": self.explanation,
            "suggestions": list(self.suggestions),
            "comparison": self.comparison.to_dict(),
            "fallback": self.fallback,
            "warnings": list(self.warnings),
        }
