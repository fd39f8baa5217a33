from .installment import (
    InstallmentQuoteRequest,
    PaymentPlanRead,
    PrincipalRecoveryRead,
    PrincipalRecoveryRequest,
    ScheduleRead,
    ScheduleRequest,
    ScheduleRowRead,
)
from .menu import MenuItemRead, MenuRead, MenuSectionRead
from .report import (
    CommissionReportRequest,
    CommissionRowRead,
    DashboardSummaryRead,
    RankingRequest,
    RankingRowRead,
    SaleRecordIn,
    SummaryRequest,
)
from .sale import (
    PaymentCreate,
    PaymentPreviewRead,
    PaymentPreviewRequest,
    PaymentStatusRead,
    SaleStatusRequest,
    SaleSummaryRead,
    SaleTerms,
)
from .user import RemoteUser

__all__ = [
    "InstallmentQuoteRequest",
    "PaymentPlanRead",
    "ScheduleRequest",
    "ScheduleRowRead",
    "ScheduleRead",
    "PrincipalRecoveryRequest",
    "PrincipalRecoveryRead",
    "MenuItemRead",
    "MenuSectionRead",
    "MenuRead",
    "SaleRecordIn",
    "CommissionReportRequest",
    "CommissionRowRead",
    "RankingRequest",
    "RankingRowRead",
    "SummaryRequest",
    "DashboardSummaryRead",
    "SaleTerms",
    "SaleStatusRequest",
    "PaymentStatusRead",
    "PaymentPreviewRequest",
    "PaymentPreviewRead",
    "PaymentCreate",
    "SaleSummaryRead",
    "RemoteUser",
]
