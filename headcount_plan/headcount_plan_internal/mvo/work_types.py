"""
Work-type catalog and the minimum-headcount floor derived from it.

get_min_headcount() is the default lookup used by governance. Callers with
their own coefficient table pass any callable with the same signature.
"""
import math
from dataclasses import dataclass
from typing import Callable, Dict, List

WorkTypeMinimumLookup = Callable[[str, str], int]

SIZE_MULTIPLIERS = {
    "Small": 1.0,
    "Medium": 1.5,
    "Large": 2.0,
}


@dataclass(frozen=True)
class WorkType:
    id: str
    name: str
    min_headcount_base: int


def _catalog(*entries) -> Dict[str, WorkType]:
    return {work_type_id: WorkType(work_type_id, name, base) for work_type_id, name, base in entries}


WORK_TYPE_CATALOG: Dict[str, WorkType] = _catalog(
    ("administrative_compliance", "Administrative / Compliance / Documentation", 1),
    ("analysis_reporting", "Analysis / Reporting / Planning", 1),
    ("business_development", "Business Development / Partnerships", 1),
    ("call_centre", "Call Centre / Contact Centre Work", 3),
    ("cleaning_hygiene", "Cleaning / Hygiene / Sanitation Work", 3),
    ("creative_branding", "Creative / Branding / Communications Work", 1),
    ("customer_tenant_support", "Customer / Tenant / Community Support", 2),
    ("event_activation", "Event / Activation / On-ground Execution", 2),
    ("finance_accounting", "Finance / Accounting / Treasury Work", 2),
    ("food_beverage", "Food & Beverage Operations", 3),
    ("governance_risk", "Governance / Risk / Compliance Work", 2),
    ("hospitality_front_desk", "Hospitality / Front Desk / Guest Services", 2),
    ("hr_people_ops", "HR / People Operations", 2),
    ("it_digital_systems", "IT / Digital / Systems Work", 2),
    ("landscaping_groundkeeping", "Landscaping / Groundkeeping Work", 3),
    ("legal_secretarial", "Legal / Company Secretarial Work", 2),
    ("logistics_warehouse", "Logistics / Warehouse / Inventory Handling", 2),
    ("maintenance_engineering", "Maintenance / Technical / Engineering", 3),
    ("marketing_campaigns", "Marketing / Campaign Management", 1),
    ("operational_onsite", "Operational / On-Site Work", 3),
    ("procurement_vendor", "Procurement / Contract / Vendor Management", 2),
    ("project_development", "Project / Development / Delivery Work", 1),
    ("retail_store_ops", "Retail / Outlet / Store Operations", 3),
    ("sales_leasing", "Sales / Leasing / Revenue Work", 1),
    ("security_safety", "Security / Safety / Emergency Response", 3),
    ("transportation_fleet", "Transportation / Fleet / Dispatch Operations", 3),
)


def get_all_work_types() -> List[WorkType]:
    return sorted(WORK_TYPE_CATALOG.values(), key=lambda w: w.name)


def get_min_headcount(work_type_id: str, size_of_operation: str) -> int:
    """
    Minimum headcount for a work type at an operation size ("Small", "Medium", "Large").

    Unknown work types have a floor of 1. Unknown size labels use the Small multiplier.
    """
    work_type = WORK_TYPE_CATALOG.get(work_type_id)
    if work_type is None:
        return 1
    base = work_type.min_headcount_base
    multiplier = SIZE_MULTIPLIERS.get(size_of_operation, 1.0)
    return max(base, math.ceil(base * multiplier))
