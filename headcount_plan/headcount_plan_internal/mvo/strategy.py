"""
PURPOSE: Turn the numeric MVO outcome into a staffing strategy, an explanation and suggestions.

SRP/DRY: Single responsibility = classification and narrative only.
         No simulation, no selection, no governance.
"""
from typing import Dict, List, Optional, Sequence

from headcount_plan_internal.mvo.config import HIGH_TURNOVER_PERCENT, NEAR_THRESHOLD_RATIO
from headcount_plan_internal.mvo.models import WorkloadSpec
from headcount_plan_internal.mvo.results import (
    BaselineHeadcount,
    Classification,
    HeadcountTestResult,
    Strategy,
)

STRATEGY_DETAILS: Dict[Strategy, Dict[str, str]] = {
    Strategy.HIRE_PERMANENT: {
        "label": "Hire Permanent Staff",
        "tooltip": "Build or maintain a fully in-house team using permanent employees as the main delivery model.",
    },
    Strategy.HYBRID_PERM_GIG: {
        "label": "Hybrid (Permanent + Contract)",
        "tooltip": "Keep a core permanent team and add contract/project staff to handle peaks or temporary workload.",
    },
    Strategy.OUTSOURCE: {
        "label": "Outsource / Vendor",
        "tooltip": "Use an external vendor to deliver most of the work, with a lean internal team for governance and oversight.",
    },
    Strategy.AUTOMATE: {
        "label": "Automate / Optimize Process",
        "tooltip": "Reduce manual effort by improving process, systems and automation so a smaller team can handle the workload safely.",
    },
}


def choose_strategy(delta: int, automation_level: str) -> Strategy:
    """
    Strategy from the gap between the selected and the baseline headcount.

    - delta <= 1: hire permanent staff
    - 2..3: hybrid permanent / contingent mix
    - > 3 with a manual operating model: automate
    - otherwise: outsource
    """
    if delta <= 1:
        return Strategy.HIRE_PERMANENT
    if delta <= 3:
        return Strategy.HYBRID_PERM_GIG
    if automation_level == "manual":
        return Strategy.AUTOMATE
    return Strategy.OUTSOURCE


def build_explanation(
    baseline: BaselineHeadcount,
    selected: HeadcountTestResult,
    test_results: Sequence[HeadcountTestResult],
    allowed_risk: float,
    fallback: bool = False,
) -> str:
    rejected = [r for r in test_results if r.rejected]
    lines = ["## MVO Identification Analysis", ""]

    lines += [
        "### Baseline Headcount (No-Risk)",
        f"**{baseline.headcount} persons** - Calculated using standard formula without risk buffer.",
        "",
        "### Monte Carlo Simulation Results",
        f"Tested {len(test_results)} headcount scenarios with {selected.iterations:,} iterations each.",
        "",
    ]

    if rejected:
        lines.append("### Rejected Options")
        lines += [f"- **{r.headcount} persons**: {r.rejection_reason}" for r in rejected]
        lines.append("")

    if fallback:
        lines += [
            f"### Warning: No Viable Headcount Found, Showing {selected.headcount} Persons",
            "No tested headcount met the risk and budget constraints. This is the largest "
            "tested option, not a confident recommendation.",
        ]
    else:
        lines += [
            f"### Recommended MVO: {selected.headcount} Persons",
            "This is the **minimum viable organization** that achieves:",
        ]
    lines += [
        f"- {selected.deadline_met_probability:.1f}% probability of meeting deadline",
        f"- {selected.failure_risk:.1f}% failure risk ({allowed_risk:g}% threshold)",
        f"- P90 completion: {selected.p90_duration:.0f} days",
        f"- Average cost: RM{selected.avg_cost:,.0f}",
        "",
    ]
    if selected.min_headcount_applied:
        lines += [
            f"Minimum headcount policy applied: raised to {selected.headcount} persons "
            f"(work-type floor {selected.min_headcount_value}).",
            "",
        ]

    diff = selected.headcount - baseline.headcount
    if diff > 0:
        plural = "s" if diff > 1 else ""
        lines += [
            f"### Why {diff} Additional Person{plural}?",
            "The baseline does not account for:",
            "- People risks (absenteeism, turnover, learning curves)",
            "- Workload variability (min-max ranges)",
            "- Productivity fluctuations",
            f"- Required safety buffer for {100 - allowed_risk:.0f}% confidence",
        ]
    elif diff == 0:
        lines += [
            "### Baseline = MVO",
            "The baseline headcount already provides sufficient buffer to meet risk threshold.",
        ]

    return "\n".join(lines)


def build_suggestions(
    spec: WorkloadSpec,
    baseline: BaselineHeadcount,
    selected: HeadcountTestResult,
) -> List[str]:
    suggestions = []
    diff = selected.headcount - baseline.headcount

    if diff > 2:
        suggestions.append(
            f"Consider automation or process optimization to reduce required headcount "
            f"from {selected.headcount} to closer to baseline {baseline.headcount}"
        )

    if spec.automation_level in ("manual", "partially_automated"):
        suggestions.append("Increase automation level to reduce productivity variance and lower required headcount")

    turnover = spec.people_risk_factors.turnover.most_likely
    if turnover > HIGH_TURNOVER_PERCENT:
        suggestions.append(
            f"High turnover risk ({turnover:g}%) increases headcount needs. "
            f"Focus on retention to optimize team size"
        )

    if selected.failure_risk > spec.constraints.allowed_failure_risk_percent * NEAR_THRESHOLD_RATIO:
        suggestions.append(
            "Current configuration is near risk threshold. Adding 1 more person would reduce failure risk significantly"
        )

    if diff == 0:
        suggestions.append("Baseline headcount already meets risk requirements. No additional buffer needed")

    return suggestions


def classify(
    spec: WorkloadSpec,
    baseline: BaselineHeadcount,
    selected: HeadcountTestResult,
    test_results: Sequence[HeadcountTestResult],
    allowed_risk: float,
    fallback: bool = False,
    baseline_count: Optional[int] = None,
) -> Classification:
    """
    Strategy tag, markdown explanation and qualitative suggestions for one run.

    baseline_count is the baseline after operation-size scaling; when given,
    the strategy gap is measured against it.
    """
    reference = baseline.headcount if baseline_count is None else baseline_count
    strategy = choose_strategy(selected.headcount - reference, spec.automation_level)
    return Classification(
        strategy=strategy,
        explanation=build_explanation(baseline, selected, test_results, allowed_risk, fallback),
        suggestions=tuple(build_suggestions(spec, baseline, selected)),
    )
