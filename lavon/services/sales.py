from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import date
from typing import Any, Optional

from ..client import SalesApiClient
from ..finance.amortization import InvalidTermsError
from ..finance.ledger import SaleLedger
from ..finance.status import DEFAULT_DUE_SOON_DAYS, classify
from ..formatting import format_idr
from ..schemas.sale import (
    PaymentPreviewRead,
    PaymentStatusRead,
    SaleSummaryRead,
    SaleTerms,
)

logger = logging.getLogger(__name__)


def ledger_from_terms(terms: SaleTerms) -> SaleLedger:
    """Rebuild the running ledger of a stored sale.

    Sales that kept their agreed installment are reconstructed from it; older
    records without one treat everything paid so far as the deposit.
    """
    start_date = terms.sale_date or terms.booking_date
    if terms.monthly_installment and terms.cicilan_count > 0:
        return SaleLedger.from_installment(
            terms.price,
            terms.payment_amount,
            monthly_installment=terms.monthly_installment,
            installment_count=terms.cicilan_count,
            interest_rate=terms.interest_rate,
            start_date=start_date,
            paid_principal=terms.paid_principal,
            paid_interest=terms.paid_interest,
        )
    return SaleLedger.open(
        terms.price,
        deposit=terms.payment_amount,
        installment_count=terms.cicilan_count,
        interest_rate=terms.interest_rate,
        start_date=start_date,
    )


def summarize_sale(
    record: Mapping[str, Any],
    today: date,
    *,
    due_soon_days: int = DEFAULT_DUE_SOON_DAYS,
) -> SaleSummaryRead:
    """Attach installment, balance and payment status figures to a sale record."""
    terms = SaleTerms.model_validate(record)
    ledger = ledger_from_terms(terms)
    info = classify(ledger, today, due_soon_days=due_soon_days)

    customer = record.get("customer") or {}
    cluster = record.get("cluster") or {}
    return SaleSummaryRead(
        id=record.get("id"),
        customer_name=customer.get("name") if isinstance(customer, Mapping) else None,
        cluster_type=cluster.get("type") if isinstance(cluster, Mapping) else None,
        price=ledger.price,
        payment_amount=ledger.total_paid,
        cicilan_count=ledger.installment_count,
        interest_rate=ledger.interest_rate,
        monthly_installment=ledger.monthly_installment,
        remaining_balance=ledger.remaining_balance,
        paid_off=ledger.is_paid_off,
        paid_principal=ledger.paid_principal,
        paid_interest=ledger.paid_interest,
        status="Paid" if ledger.is_paid_off else "Process",
        payment_status_info=PaymentStatusRead.model_validate(info),
    )


def preview_payment(terms: SaleTerms, amount: float) -> PaymentPreviewRead:
    """What the sale looks like once ``amount`` is added to what was paid."""
    if amount <= 0:
        raise InvalidTermsError("Payment amount must be greater than zero.")
    ledger = ledger_from_terms(terms)
    existing = ledger.total_paid
    split = ledger.add_payment(amount)
    remaining = ledger.remaining_balance
    return PaymentPreviewRead(
        existing_payment=existing,
        add_payment=amount,
        total_paid=ledger.total_paid,
        remaining_balance=remaining,
        paid_off=ledger.is_paid_off,
        interest_portion=split.interest,
        principal_portion=split.principal + split.excess,
        remaining_balance_display="PAID OFF" if ledger.is_paid_off else format_idr(remaining),
    )


async def fetch_sale_summary(
    client: SalesApiClient,
    sale_id: int | str,
    today: date,
    *,
    due_soon_days: int = DEFAULT_DUE_SOON_DAYS,
) -> SaleSummaryRead:
    record = await client.get_sale(sale_id)
    return summarize_sale(record, today, due_soon_days=due_soon_days)


async def list_sale_summaries(
    client: SalesApiClient,
    today: date,
    *,
    page: int = 1,
    search: Optional[str] = None,
    status: Optional[str] = None,
    due_soon_days: int = DEFAULT_DUE_SOON_DAYS,
) -> list[SaleSummaryRead]:
    payload = await client.list_sales(page=page, search=search, status=status)
    records = payload.get("data", []) if isinstance(payload, Mapping) else payload
    summaries = []
    for record in records:
        try:
            summaries.append(summarize_sale(record, today, due_soon_days=due_soon_days))
        except ValueError:
            logger.warning("Skipping sale %s with unusable terms", record.get("id"), exc_info=True)
    return summaries


async def record_payment(
    client: SalesApiClient,
    sale_id: int | str,
    amount: float,
    today: date,
    *,
    price: Optional[float] = None,
    due_soon_days: int = DEFAULT_DUE_SOON_DAYS,
) -> SaleSummaryRead:
    """Forward a payment to the sales API and summarize the updated sale."""
    if amount <= 0:
        raise InvalidTermsError("Payment amount must be greater than zero.")
    record = await client.add_payment(sale_id, amount=amount, price=price)
    logger.info("Recorded payment of %s on sale %s", format_idr(amount), sale_id)
    return summarize_sale(record, today, due_soon_days=due_soon_days)
