"""Payment status classification for installment sales."""

from __future__ import annotations

import calendar
import math
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional

from .amortization import recover_initial_principal, validate_amount, validate_term
from .ledger import SaleLedger

DEFAULT_DUE_SOON_DAYS = 7

# Tolerance for float residue when counting covered installments.
_COVERAGE_EPS = 1e-6


class PaymentStatus(str, Enum):
    PAID = "Paid"
    OVERDUE = "Overdue"
    DUE_SOON = "Due Soon"
    NORMAL = "Normal"
    PROCESS = "Process"


_COLORS = {
    PaymentStatus.PAID: "green",
    PaymentStatus.OVERDUE: "red",
    PaymentStatus.DUE_SOON: "yellow",
    PaymentStatus.NORMAL: "blue",
    PaymentStatus.PROCESS: "gray",
}


@dataclass(frozen=True)
class PaymentStatusInfo:
    status: PaymentStatus
    label: str
    color: str
    next_due_date: Optional[date] = None
    overdue_installments: int = 0


def add_months(source: date, months: int) -> date:
    """Return a new date shifted by a number of months, clamping the day."""
    month = source.month - 1 + months
    year = source.year + month // 12
    month = month % 12 + 1
    day = min(source.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def due_date(start_date: date, installment_number: int) -> date:
    """Due date of installment ``installment_number`` (1-based), one month apart from the sale."""
    return add_months(start_date, installment_number)


def covered_installments(
    price: float,
    total_paid: float,
    installment_count: int,
    monthly_installment: float,
    interest_rate: float = 0.0,
) -> int:
    """How many scheduled installments the payments so far account for.

    The upfront deposit is whatever part of the price the installment
    schedule does not finance; only payments beyond it count towards
    installments.
    """
    if monthly_installment <= 0:
        return 0
    financed = recover_initial_principal(monthly_installment, installment_count, interest_rate)
    deposit = max(price - financed, 0.0)
    towards_installments = total_paid - deposit
    covered = math.floor(towards_installments / monthly_installment + _COVERAGE_EPS)
    return min(max(covered, 0), installment_count)


def classify_payment_status(
    price: float,
    total_paid: float,
    installment_count: int,
    monthly_installment: float,
    start_date: Optional[date],
    today: date,
    *,
    interest_rate: float = 0.0,
    due_soon_days: int = DEFAULT_DUE_SOON_DAYS,
) -> PaymentStatusInfo:
    """Place a sale in one of the payment states as of ``today``.

    Installment ``k`` falls due ``k`` months after ``start_date``. Pass the
    sale's ``interest_rate`` when the installment carries interest so the
    financed part of the price is recovered correctly.
    """
    price = validate_amount("Price", price)
    total_paid = validate_amount("Total paid", total_paid)
    installment_count = validate_term(installment_count)
    monthly_installment = validate_amount("Monthly installment", monthly_installment)

    remaining = price - total_paid
    if remaining <= 0:
        return _info(PaymentStatus.PAID, "Paid Off")

    if installment_count == 0 or monthly_installment == 0 or start_date is None:
        return _info(PaymentStatus.PROCESS, "In Process")

    covered = covered_installments(
        price, total_paid, installment_count, monthly_installment, interest_rate
    )
    next_number = min(covered + 1, installment_count)
    next_due = due_date(start_date, next_number)

    if next_due < today:
        overdue = sum(
            1
            for number in range(next_number, installment_count + 1)
            if due_date(start_date, number) < today
        )
        noun = "installment" if overdue == 1 else "installments"
        return _info(
            PaymentStatus.OVERDUE,
            f"Overdue ({overdue} {noun})",
            next_due,
            overdue_installments=overdue,
        )

    days_left = (next_due - today).days
    if days_left <= due_soon_days:
        label = "Due today" if days_left == 0 else f"Due in {days_left} day{'s' if days_left != 1 else ''}"
        return _info(PaymentStatus.DUE_SOON, label, next_due)

    return _info(PaymentStatus.NORMAL, "On Track", next_due)


def classify(
    ledger: SaleLedger, today: date, *, due_soon_days: int = DEFAULT_DUE_SOON_DAYS
) -> PaymentStatusInfo:
    return classify_payment_status(
        ledger.price,
        ledger.total_paid,
        ledger.installment_count,
        ledger.monthly_installment,
        ledger.start_date,
        today,
        interest_rate=ledger.interest_rate,
        due_soon_days=due_soon_days,
    )


def _info(
    status: PaymentStatus,
    label: str,
    next_due_date: Optional[date] = None,
    *,
    overdue_installments: int = 0,
) -> PaymentStatusInfo:
    return PaymentStatusInfo(
        status=status,
        label=label,
        color=_COLORS[status],
        next_due_date=next_due_date,
        overdue_installments=overdue_installments,
    )
