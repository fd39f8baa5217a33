"""Fixed-payment amortization for in-house installment sales.

Rates are nominal annual percentages (``11.5`` means 11.5% a year) and are
compounded monthly. All amounts are plain floats at full precision; rounding
for display belongs to :mod:`lavon.formatting`.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

_EPS = 1e-6


class InvalidTermsError(ValueError):
    """Raised when sale or installment terms cannot be amortized."""


@dataclass(frozen=True)
class ScheduleRow:
    number: int
    payment: float
    interest: float
    principal: float
    balance: float


@dataclass(frozen=True)
class PaymentSplit:
    """How a single payment is applied against an outstanding loan."""

    interest: float
    principal: float
    excess: float = 0.0


def validate_amount(name: str, value: object) -> float:
    if isinstance(value, (bool, str, bytes)):
        raise InvalidTermsError(f"{name} must be a number.")
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise InvalidTermsError(f"{name} must be a number.") from exc
    if not math.isfinite(number):
        raise InvalidTermsError(f"{name} must be a finite number.")
    if number < 0:
        raise InvalidTermsError(f"{name} must not be negative.")
    return number


def validate_term(value: object) -> int:
    if isinstance(value, bool):
        raise InvalidTermsError("Installment count must be a whole number of months.")
    if isinstance(value, float):
        if not math.isfinite(value) or not value.is_integer():
            raise InvalidTermsError("Installment count must be a whole number of months.")
        value = int(value)
    if not isinstance(value, int):
        raise InvalidTermsError("Installment count must be a whole number of months.")
    if value < 0:
        raise InvalidTermsError("Installment count must not be negative.")
    return value


def monthly_rate(annual_rate_percent: float) -> float:
    """Convert a nominal annual percentage into the periodic monthly rate."""
    return (validate_amount("Interest rate", annual_rate_percent) / 12) / 100


def _compound_growth(r: float, term_months: int) -> float:
    """Return ``(1 + r) ** n - 1`` without cancellation for rates close to zero."""
    if r == 0:
        return 0.0
    return math.expm1(term_months * math.log1p(r))


def compute_monthly_installment(
    principal: float,
    deposit: float,
    term_months: int,
    annual_rate_percent: float,
) -> float:
    """Return the fixed monthly payment that amortizes ``principal - deposit``.

    Returns 0 when the deposit covers the principal or when there are no
    installments left to spread the loan over.
    """
    principal = validate_amount("Principal", principal)
    deposit = validate_amount("Deposit", deposit)
    term_months = validate_term(term_months)
    r = monthly_rate(annual_rate_percent)

    loan = principal - deposit
    if loan <= 0 or term_months == 0:
        return 0.0
    interest_free = loan / term_months
    growth_minus_one = _compound_growth(r, term_months)
    if growth_minus_one == 0:
        return interest_free

    payment = loan * r * (growth_minus_one + 1) / growth_minus_one
    # Rounding at tiny rates may land a hair under the interest-free payment.
    return max(payment, interest_free)


def recover_initial_principal(
    monthly_payment: float,
    term_months: int,
    annual_rate_percent: float,
) -> float:
    """Return the loan amount implied by a known installment (present value of the annuity)."""
    monthly_payment = validate_amount("Monthly installment", monthly_payment)
    term_months = validate_term(term_months)
    r = monthly_rate(annual_rate_percent)

    if term_months == 0:
        return 0.0
    if r == 0:
        return monthly_payment * term_months
    discount = -math.expm1(-term_months * math.log1p(r))
    return min(monthly_payment * discount / r, monthly_payment * term_months)


def split_payment(balance: float, amount: float, annual_rate_percent: float) -> PaymentSplit:
    """Split one payment into the interest accrued on ``balance`` and principal."""
    balance = validate_amount("Outstanding principal", balance)
    amount = validate_amount("Payment amount", amount)
    r = monthly_rate(annual_rate_percent)

    interest = min(amount, balance * r)
    principal = min(amount - interest, balance)
    excess = amount - interest - principal
    return PaymentSplit(interest=interest, principal=principal, excess=max(excess, 0.0))


def build_schedule(
    principal: float,
    deposit: float,
    term_months: int,
    annual_rate_percent: float,
) -> list[ScheduleRow]:
    """Full month-by-month schedule for the financed part of a sale."""
    payment = compute_monthly_installment(principal, deposit, term_months, annual_rate_percent)
    if payment == 0:
        return []

    r = monthly_rate(annual_rate_percent)
    term_months = validate_term(term_months)
    balance = float(principal) - float(deposit)
    rows: list[ScheduleRow] = []
    for number in range(1, term_months + 1):
        interest = balance * r
        principal_paid = payment - interest
        if number == term_months or principal_paid > balance:
            principal_paid = balance
        balance -= principal_paid
        if balance < _EPS:
            balance = 0.0
        rows.append(
            ScheduleRow(
                number=number,
                payment=interest + principal_paid,
                interest=interest,
                principal=principal_paid,
                balance=balance,
            )
        )
    return rows


__all__ = [
    "InvalidTermsError",
    "PaymentSplit",
    "ScheduleRow",
    "build_schedule",
    "compute_monthly_installment",
    "monthly_rate",
    "recover_initial_principal",
    "validate_amount",
    "validate_term",
    "split_payment",
]
