from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from ..finance.plans import PaymentMethod


class InstallmentQuoteRequest(BaseModel):
    """Terms entered on the create-customer / create-sale forms."""

    price: float = Field(ge=0, allow_inf_nan=False)
    payment_method: PaymentMethod = PaymentMethod.CASH_BERTAHAP
    deposit: float = Field(default=0, ge=0, allow_inf_nan=False)
    installment_count: int = Field(default=12, ge=0, le=600)
    interest_rate: float = Field(default=0, ge=0, le=100, allow_inf_nan=False)


class PaymentPlanRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    method: PaymentMethod
    price: float
    initial_payment: float
    installment_count: int
    interest_rate: float
    monthly_installment: float
    booking_fee: float
    down_payment: float
    bank_loan: float
    remaining_balance: float
    total_payable: float
    total_interest: float
    monthly_installment_display: str = ""
    remaining_balance_display: str = ""


class ScheduleRequest(BaseModel):
    price: float = Field(ge=0, allow_inf_nan=False)
    deposit: float = Field(default=0, ge=0, allow_inf_nan=False)
    installment_count: int = Field(ge=0, le=600)
    interest_rate: float = Field(default=0, ge=0, le=100, allow_inf_nan=False)


class ScheduleRowRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    number: int
    payment: float
    interest: float
    principal: float
    balance: float


class ScheduleRead(BaseModel):
    monthly_installment: float
    total_interest: float
    rows: list[ScheduleRowRead]


class PrincipalRecoveryRequest(BaseModel):
    monthly_installment: float = Field(ge=0, allow_inf_nan=False)
    installment_count: int = Field(ge=0, le=600)
    interest_rate: float = Field(default=0, ge=0, le=100, allow_inf_nan=False)


class PrincipalRecoveryRead(BaseModel):
    initial_principal: float
