from .run import (
    RunResult,
    approve_run,
    calculate_run,
    collect_reimbursements,
    is_reimbursable,
    mark_run_paid,
    period_end,
    select_effective_salary,
)

__all__ = [
    "RunResult",
    "approve_run",
    "calculate_run",
    "collect_reimbursements",
    "is_reimbursable",
    "mark_run_paid",
    "period_end",
    "select_effective_salary",
]
