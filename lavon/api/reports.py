from datetime import date

from fastapi import APIRouter, HTTPException, status

from ..finance.reports import SaleRecord, commission_report, dashboard_summary, marketing_rankings
from ..schemas.report import (
    CommissionReportRequest,
    CommissionRowRead,
    DashboardSummaryRead,
    RankingRequest,
    RankingRowRead,
    SaleRecordIn,
    SummaryRequest,
)
from .dependencies import SettingsDep

router = APIRouter()


def _records(sales: list[SaleRecordIn]) -> list[SaleRecord]:
    return [SaleRecord(**sale.model_dump()) for sale in sales]


@router.post("/commissions", response_model=list[CommissionRowRead])
async def commissions_endpoint(
    payload: CommissionReportRequest, settings: SettingsDep
) -> list[CommissionRowRead]:
    try:
        rows = commission_report(
            _records(payload.sales), payload.year, payload.month, rate=settings.commission_rate
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return [CommissionRowRead.model_validate(row) for row in rows]


@router.post("/rankings", response_model=list[RankingRowRead])
async def rankings_endpoint(payload: RankingRequest) -> list[RankingRowRead]:
    return [RankingRowRead.model_validate(row) for row in marketing_rankings(_records(payload.sales))]


@router.post("/summary", response_model=DashboardSummaryRead)
async def summary_endpoint(payload: SummaryRequest) -> DashboardSummaryRead:
    summary = dashboard_summary(_records(payload.sales), payload.today or date.today())
    return DashboardSummaryRead.model_validate(summary)
