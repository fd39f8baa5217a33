from .amortization import (
    InvalidTermsError,
    PaymentSplit,
    ScheduleRow,
    build_schedule,
    compute_monthly_installment,
    recover_initial_principal,
    split_payment,
)
from .ledger import SaleLedger
from .plans import PaymentMethod, PaymentPlan, quote_plan
from .reports import (
    CommissionRow,
    DashboardSummary,
    RankingRow,
    SaleRecord,
    commission_report,
    dashboard_summary,
    marketing_rankings,
)
from .status import PaymentStatus, PaymentStatusInfo, classify, classify_payment_status

__all__ = [
    "InvalidTermsError",
    "PaymentSplit",
    "ScheduleRow",
    "build_schedule",
    "compute_monthly_installment",
    "recover_initial_principal",
    "split_payment",
    "SaleLedger",
    "PaymentMethod",
    "PaymentPlan",
    "quote_plan",
    "SaleRecord",
    "CommissionRow",
    "RankingRow",
    "DashboardSummary",
    "commission_report",
    "marketing_rankings",
    "dashboard_summary",
    "PaymentStatus",
    "PaymentStatusInfo",
    "classify",
    "classify_payment_status",
]
