from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..finance.status import PaymentStatus


class SaleTerms(BaseModel):
    """Sale figures as the sales API stores them."""

    model_config = ConfigDict(extra="ignore")

    price: float = Field(ge=0, allow_inf_nan=False)
    payment_amount: float = Field(default=0, ge=0, allow_inf_nan=False)
    cicilan_count: int = Field(default=0, ge=0, le=600)
    interest_rate: float = Field(default=0, ge=0, le=100, allow_inf_nan=False)
    monthly_installment: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)
    paid_principal: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)
    paid_interest: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)
    sale_date: Optional[date] = None
    booking_date: Optional[date] = None


class SaleStatusRequest(SaleTerms):
    today: Optional[date] = None


class PaymentStatusRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    status: PaymentStatus
    label: str
    color: str
    next_due_date: Optional[date]
    overdue_installments: int = 0


class PaymentPreviewRequest(SaleTerms):
    add_payment: float = Field(gt=0, allow_inf_nan=False)


class PaymentPreviewRead(BaseModel):
    existing_payment: float
    add_payment: float
    total_paid: float
    remaining_balance: float
    paid_off: bool
    interest_portion: float
    principal_portion: float
    remaining_balance_display: str


class PaymentCreate(BaseModel):
    amount: float = Field(gt=0, allow_inf_nan=False)
    price: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)


class SaleSummaryRead(BaseModel):
    id: Optional[int | str] = None
    customer_name: Optional[str] = None
    cluster_type: Optional[str] = None
    price: float
    payment_amount: float
    cicilan_count: int
    interest_rate: float
    monthly_installment: float
    remaining_balance: float
    paid_off: bool
    paid_principal: float
    paid_interest: float
    status: str
    payment_status_info: PaymentStatusRead
