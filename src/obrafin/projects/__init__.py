"""
Projects Package

Per-project views: payment-plan milestones, profitability and the
dashboard alert list.
"""

from .payment_plan import (
    PlanRow,
    compute_payment_plan_status,
    normalize_payment_plan,
    plan_total_pct,
)
from .profitability import (
    Alert,
    AlertLevel,
    ProfitabilityReport,
    ProjectProfitability,
    build_alerts,
    compute_project_profitability,
)

__all__ = [
    "Alert",
    "AlertLevel",
    "PlanRow",
    "ProfitabilityReport",
    "ProjectProfitability",
    "build_alerts",
    "compute_payment_plan_status",
    "compute_project_profitability",
    "normalize_payment_plan",
    "plan_total_pct",
]
