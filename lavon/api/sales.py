from datetime import date
from typing import Annotated, Optional

import httpx
from fastapi import APIRouter, HTTPException, Query, status

from ..finance.status import classify
from ..schemas.sale import (
    PaymentCreate,
    PaymentPreviewRead,
    PaymentPreviewRequest,
    PaymentStatusRead,
    SaleStatusRequest,
    SaleSummaryRead,
)
from ..services import (
    fetch_sale_summary,
    ledger_from_terms,
    list_sale_summaries,
    preview_payment,
    record_payment,
)
from .dependencies import ApiClientDep, SettingsDep, remote_error

router = APIRouter()


@router.post("/status", response_model=PaymentStatusRead)
async def sale_status_endpoint(payload: SaleStatusRequest, settings: SettingsDep) -> PaymentStatusRead:
    """Classify a sale as Paid, Overdue, Due Soon, Normal or Process."""
    try:
        ledger = ledger_from_terms(payload)
        info = classify(ledger, payload.today or date.today(), due_soon_days=settings.due_soon_days)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return PaymentStatusRead.model_validate(info)


@router.post("/payment-preview", response_model=PaymentPreviewRead)
async def payment_preview_endpoint(payload: PaymentPreviewRequest) -> PaymentPreviewRead:
    try:
        return preview_payment(payload, payload.add_payment)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.get("", response_model=list[SaleSummaryRead])
async def list_sales_endpoint(
    client: ApiClientDep,
    settings: SettingsDep,
    page: Annotated[int, Query(ge=1)] = 1,
    search: Optional[str] = Query(default=None),
    sale_status: Optional[str] = Query(default=None, alias="status"),
) -> list[SaleSummaryRead]:
    try:
        return await list_sale_summaries(
            client,
            date.today(),
            page=page,
            search=search,
            status=sale_status,
            due_soon_days=settings.due_soon_days,
        )
    except httpx.HTTPError as exc:
        raise remote_error(exc) from exc


@router.get("/{sale_id}/summary", response_model=SaleSummaryRead)
async def sale_summary_endpoint(
    sale_id: int, client: ApiClientDep, settings: SettingsDep
) -> SaleSummaryRead:
    try:
        return await fetch_sale_summary(
            client, sale_id, date.today(), due_soon_days=settings.due_soon_days
        )
    except httpx.HTTPError as exc:
        raise remote_error(exc) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc


@router.post("/{sale_id}/payments", response_model=SaleSummaryRead)
async def add_payment_endpoint(
    sale_id: int,
    payload: PaymentCreate,
    client: ApiClientDep,
    settings: SettingsDep,
) -> SaleSummaryRead:
    """Add a payment to a sale through the sales API."""
    try:
        return await record_payment(
            client,
            sale_id,
            payload.amount,
            date.today(),
            price=payload.price,
            due_soon_days=settings.due_soon_days,
        )
    except httpx.HTTPError as exc:
        raise remote_error(exc) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
