from fastapi import APIRouter, HTTPException, status

from ..finance import build_schedule, quote_plan, recover_initial_principal
from ..formatting import format_idr
from ..schemas.installment import (
    InstallmentQuoteRequest,
    PaymentPlanRead,
    PrincipalRecoveryRead,
    PrincipalRecoveryRequest,
    ScheduleRead,
    ScheduleRequest,
    ScheduleRowRead,
)
from .dependencies import SettingsDep

router = APIRouter()


@router.post("/quote", response_model=PaymentPlanRead)
async def quote_endpoint(payload: InstallmentQuoteRequest, settings: SettingsDep) -> PaymentPlanRead:
    """Quote the upfront payment and monthly installment for a unit."""
    try:
        plan = quote_plan(
            payload.price,
            payload.payment_method,
            deposit=payload.deposit,
            installment_count=payload.installment_count,
            interest_rate=payload.interest_rate,
            booking_fee=settings.kpr_booking_fee,
            down_payment_ratio=settings.kpr_down_payment_ratio,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    response = PaymentPlanRead.model_validate(plan)
    response.monthly_installment_display = format_idr(plan.monthly_installment)
    response.remaining_balance_display = format_idr(plan.remaining_balance)
    return response


@router.post("/schedule", response_model=ScheduleRead)
async def schedule_endpoint(payload: ScheduleRequest) -> ScheduleRead:
    try:
        rows = build_schedule(
            payload.price, payload.deposit, payload.installment_count, payload.interest_rate
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return ScheduleRead(
        monthly_installment=rows[0].payment if rows else 0.0,
        total_interest=sum(row.interest for row in rows),
        rows=[ScheduleRowRead.model_validate(row) for row in rows],
    )


@router.post("/principal", response_model=PrincipalRecoveryRead)
async def principal_endpoint(payload: PrincipalRecoveryRequest) -> PrincipalRecoveryRead:
    """Recover the financed amount behind a stored monthly installment."""
    try:
        principal = recover_initial_principal(
            payload.monthly_installment, payload.installment_count, payload.interest_rate
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return PrincipalRecoveryRead(initial_principal=principal)
