from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from .amortization import (
    InvalidTermsError,
    PaymentSplit,
    compute_monthly_installment,
    recover_initial_principal,
    split_payment,
    validate_amount,
    validate_term,
)

logger = logging.getLogger(__name__)


@dataclass
class SaleLedger:
    """Running account of one unit sale.

    ``deposit`` is everything collected upfront (booking fee, down payment);
    ``installment_paid`` accumulates the payments made afterwards and is split
    into ``paid_principal`` and ``paid_interest`` as each payment arrives.
    """

    price: float
    deposit: float = 0.0
    installment_count: int = 0
    interest_rate: float = 0.0
    start_date: Optional[date] = None
    installment_paid: float = 0.0
    paid_principal: float = 0.0
    paid_interest: float = 0.0
    monthly_installment: float = field(default=0.0)

    @classmethod
    def open(
        cls,
        price: float,
        *,
        deposit: float = 0.0,
        installment_count: int = 0,
        interest_rate: float = 0.0,
        start_date: Optional[date] = None,
    ) -> "SaleLedger":
        """Create a ledger for a new sale and fix its monthly installment."""
        monthly = compute_monthly_installment(price, deposit, installment_count, interest_rate)
        return cls(
            price=float(price),
            deposit=float(deposit),
            installment_count=validate_term(installment_count),
            interest_rate=float(interest_rate),
            start_date=start_date,
            monthly_installment=monthly,
        )

    @classmethod
    def from_installment(
        cls,
        price: float,
        total_paid: float,
        *,
        monthly_installment: float,
        installment_count: int,
        interest_rate: float = 0.0,
        start_date: Optional[date] = None,
        paid_principal: Optional[float] = None,
        paid_interest: Optional[float] = None,
    ) -> "SaleLedger":
        """Rebuild a ledger from stored figures when the deposit was not kept.

        The financed amount is recovered from the stored installment; the
        deposit is what the price leaves over. Without a stored split, the
        installment payments are replayed against the schedule.
        """
        price = validate_amount("Price", price)
        total_paid = validate_amount("Total paid", total_paid)
        loan = recover_initial_principal(monthly_installment, installment_count, interest_rate)
        deposit = min(max(price - loan, 0.0), total_paid)
        ledger = cls(
            price=price,
            deposit=deposit,
            installment_count=validate_term(installment_count),
            interest_rate=validate_amount("Interest rate", interest_rate),
            start_date=start_date,
            monthly_installment=float(monthly_installment),
        )
        installment_paid = total_paid - deposit
        if paid_principal is not None and paid_interest is not None:
            ledger.installment_paid = installment_paid
            ledger.paid_principal = validate_amount("Paid principal", paid_principal)
            ledger.paid_interest = validate_amount("Paid interest", paid_interest)
        else:
            ledger._replay(installment_paid)
        return ledger

    @property
    def loan_amount(self) -> float:
        return max(self.price - self.deposit, 0.0)

    @property
    def total_paid(self) -> float:
        return self.deposit + self.installment_paid

    @property
    def remaining_balance(self) -> float:
        """Amount still owed on the price; never negative."""
        return max(self.price - self.total_paid, 0.0)

    @property
    def is_paid_off(self) -> bool:
        return self.price - self.total_paid <= 0

    @property
    def outstanding_principal(self) -> float:
        return max(self.loan_amount - self.paid_principal, 0.0)

    def add_payment(self, amount: float) -> PaymentSplit:
        """Record a payment and return how it was split."""
        amount = validate_amount("Payment amount", amount)
        if amount <= 0:
            raise InvalidTermsError("Payment amount must be greater than zero.")

        split = split_payment(self.outstanding_principal, amount, self.interest_rate)
        self.installment_paid += amount
        self.paid_interest += split.interest
        self.paid_principal += split.principal + split.excess
        return split

    def edit_terms(
        self,
        *,
        price: Optional[float] = None,
        deposit: Optional[float] = None,
        interest_rate: Optional[float] = None,
        installment_count: Optional[int] = None,
    ) -> float:
        """Change the agreed terms and recompute the monthly installment.

        The principal/interest split of payments already recorded is kept as
        it was booked.
        """
        if price is not None:
            self.price = validate_amount("Price", price)
        if deposit is not None:
            deposit = validate_amount("Deposit", deposit)
            if deposit < self.deposit:
                raise InvalidTermsError("Deposit cannot be lowered once it has been collected.")
            self.deposit = deposit
        if interest_rate is not None:
            self.interest_rate = validate_amount("Interest rate", interest_rate)
        if installment_count is not None:
            self.installment_count = validate_term(installment_count)

        previous = self.monthly_installment
        self.monthly_installment = compute_monthly_installment(
            self.price, self.deposit, self.installment_count, self.interest_rate
        )
        logger.debug(
            "Recomputed monthly installment %.2f -> %.2f", previous, self.monthly_installment
        )
        return self.monthly_installment

    def _replay(self, installment_paid: float) -> None:
        remaining = installment_paid
        step = self.monthly_installment
        while remaining > 0:
            if step > 0 and self.outstanding_principal > 0:
                chunk = min(step, remaining)
            else:
                chunk = remaining
            self.add_payment(chunk)
            remaining -= chunk
