"""
Input value objects for the MVO sizing engine.

All models are frozen: the engine reads a WorkloadSpec, it never edits one.
Shape validation (ordered ranges, positive targets) happens here, at
construction time, so the simulation code can assume well-formed input.
"""
from typing import Literal, Optional

from pydantic import BaseModel, Field, model_validator

AutomationLevel = Literal["manual", "partially_automated", "highly_automated"]


class RangeValue(BaseModel):
    """Three-point (minimum, most likely, maximum) uncertainty descriptor."""
    model_config = {"frozen": True}

    minimum: float
    most_likely: float
    maximum: float

    @model_validator(mode="after")
    def _check_order(self) -> "RangeValue":
        if not (self.minimum <= self.most_likely <= self.maximum):
            raise ValueError(
                f"range must satisfy minimum <= most_likely <= maximum, "
                f"got ({self.minimum}, {self.most_likely}, {self.maximum})"
            )
        return self

    @classmethod
    def of(cls, minimum: float, most_likely: float, maximum: float) -> "RangeValue":
        return cls(minimum=minimum, most_likely=most_likely, maximum=maximum)

    @classmethod
    def constant(cls, value: float) -> "RangeValue":
        return cls(minimum=value, most_likely=value, maximum=value)

    @property
    def mean(self) -> float:
        """Mean of the triangular distribution over this range."""
        return (self.minimum + self.most_likely + self.maximum) / 3


class Constraints(BaseModel):
    model_config = {"frozen": True}

    target_completion_days: float = Field(gt=0, description="Deadline in calendar days.")
    max_budget: Optional[float] = Field(default=None, gt=0, description="Budget ceiling; None means unconstrained.")
    allowed_failure_risk_percent: float = Field(ge=0, le=100, description="Tolerated probability (%) of missing the deadline.")


class PeopleRiskFactors(BaseModel):
    """People risks, each expressed in percent."""
    model_config = {"frozen": True}

    absenteeism: RangeValue
    turnover: RangeValue
    learning_curve: RangeValue


class CostVariables(BaseModel):
    model_config = {"frozen": True}

    monthly_salary: RangeValue
    overtime_hours: RangeValue
    overtime_multiplier: float = Field(default=1.5, ge=0)
    training_cost_per_hire: float = Field(default=2000.0, ge=0)


class WorkloadSpec(BaseModel):
    """
    Everything the engine needs to size one planning unit.

    total_work_units and productivity_per_person_per_day are optional at the
    model level because upstream forms may be partially filled in; the
    estimator rejects a spec without them with InvalidSpecError.
    """
    model_config = {"frozen": True}

    total_work_units: Optional[RangeValue] = None
    productivity_per_person_per_day: Optional[RangeValue] = None
    people_risk_factors: PeopleRiskFactors
    cost_variables: CostVariables
    constraints: Constraints
    automation_level: AutomationLevel = "partially_automated"
    work_type_id: Optional[str] = None


class OperatingContext(BaseModel):
    """Organisation context; the keys are resolved against the policy tables."""
    model_config = {"frozen": True}

    planning_type_key: Optional[str] = None
    size_of_operation_key: Optional[str] = None
    existing_headcount: Optional[int] = Field(default=None, ge=0)


DEFAULT_WORKLOAD_SPEC = WorkloadSpec(
    total_work_units=RangeValue.of(1000, 1500, 2000),
    productivity_per_person_per_day=RangeValue.of(10, 15, 20),
    people_risk_factors=PeopleRiskFactors(
        absenteeism=RangeValue.of(3, 5, 10),
        turnover=RangeValue.of(5, 10, 20),
        learning_curve=RangeValue.of(10, 20, 40),
    ),
    cost_variables=CostVariables(
        monthly_salary=RangeValue.of(3500, 5000, 7000),
        overtime_hours=RangeValue.of(0, 10, 30),
        overtime_multiplier=1.5,
        training_cost_per_hire=2000,
    ),
    constraints=Constraints(
        target_completion_days=90,
        allowed_failure_risk_percent=15,
    ),
)
