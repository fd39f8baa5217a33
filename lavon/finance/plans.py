from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .amortization import InvalidTermsError, compute_monthly_installment, validate_amount


DEFAULT_KPR_BOOKING_FEE = 10_000_000.0
DEFAULT_KPR_DOWN_PAYMENT_RATIO = 0.10


class PaymentMethod(str, Enum):
    CASH_BERTAHAP = "cash_bertahap"
    KPR = "kpr"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            normalized = value.strip().lower().replace(" ", "_")
            for member in cls:
                if member.value == normalized:
                    return member
        return None


@dataclass(frozen=True)
class PaymentPlan:
    """Upfront and financed amounts for a sale under one payment method."""

    method: PaymentMethod
    price: float
    initial_payment: float
    installment_count: int
    interest_rate: float
    monthly_installment: float
    booking_fee: float = 0.0
    down_payment: float = 0.0
    bank_loan: float = 0.0

    @property
    def remaining_balance(self) -> float:
        return max(self.price - self.initial_payment, 0.0)

    @property
    def total_payable(self) -> float:
        """Everything the buyer pays in-house, interest included."""
        if self.method is PaymentMethod.KPR:
            return self.initial_payment
        if self.installment_count == 0:
            return self.initial_payment
        return self.initial_payment + self.monthly_installment * self.installment_count

    @property
    def total_interest(self) -> float:
        if self.method is PaymentMethod.KPR or self.monthly_installment == 0:
            return 0.0
        return max(self.total_payable - self.price, 0.0)


def quote_plan(
    price: float,
    method: PaymentMethod | str = PaymentMethod.CASH_BERTAHAP,
    *,
    deposit: float = 0.0,
    installment_count: int = 0,
    interest_rate: float = 0.0,
    booking_fee: float = DEFAULT_KPR_BOOKING_FEE,
    down_payment_ratio: float = DEFAULT_KPR_DOWN_PAYMENT_RATIO,
) -> PaymentPlan:
    """Quote a sale.

    KPR sales only collect the booking fee in-house; the down payment and the
    bank loan are reported for reference and no installment schedule exists.
    Cash Bertahap sales amortize ``price - deposit`` over ``installment_count``
    months at ``interest_rate``.
    """
    try:
        method = PaymentMethod(method)
    except ValueError as exc:
        raise InvalidTermsError(f"Unknown payment method '{method}'.") from exc

    if method is PaymentMethod.KPR:
        price = validate_amount("Price", price)
        booking_fee = validate_amount("Booking fee", booking_fee)
        return PaymentPlan(
            method=method,
            price=price,
            initial_payment=booking_fee,
            installment_count=0,
            interest_rate=0.0,
            monthly_installment=0.0,
            booking_fee=booking_fee,
            down_payment=price * down_payment_ratio,
            bank_loan=price * (1 - down_payment_ratio),
        )

    monthly = compute_monthly_installment(price, deposit, installment_count, interest_rate)
    return PaymentPlan(
        method=method,
        price=float(price),
        initial_payment=float(deposit),
        installment_count=int(installment_count),
        interest_rate=float(interest_rate),
        monthly_installment=monthly,
    )
