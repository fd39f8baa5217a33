from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from typing import Optional

from .amortization import InvalidTermsError
from .status import add_months

DEFAULT_COMMISSION_RATE = 0.012


@dataclass(frozen=True)
class SaleRecord:
    """A closed sale as reported by the sales API."""

    marketer_id: int
    marketer_name: str
    price: float
    sale_date: date
    customer_id: Optional[int] = None
    marketer_email: Optional[str] = None


@dataclass(frozen=True)
class CommissionRow:
    marketer_id: int
    name: str
    email: Optional[str]
    sales_count: int
    total_sales_value: float
    commission: float


@dataclass(frozen=True)
class RankingRow:
    marketer_id: int
    name: str
    email: Optional[str]
    sales_count: int
    sales_sum_price: float


@dataclass(frozen=True)
class DashboardSummary:
    total_revenue: float
    total_orders: int
    total_customers: int
    monthly_growth_rate: Optional[float]


def _group_by_marketer(sales: Iterable[SaleRecord]) -> dict[int, list[SaleRecord]]:
    grouped: dict[int, list[SaleRecord]] = defaultdict(list)
    for sale in sales:
        grouped[sale.marketer_id].append(sale)
    return grouped


def commission_report(
    sales: Iterable[SaleRecord],
    year: int,
    month: int,
    *,
    rate: float = DEFAULT_COMMISSION_RATE,
) -> list[CommissionRow]:
    """Commission owed to each marketer for sales closed in ``year``/``month``."""
    if not 1 <= month <= 12:
        raise InvalidTermsError("Month must be between 1 and 12.")
    in_month = [s for s in sales if s.sale_date.year == year and s.sale_date.month == month]

    rows = []
    for marketer_id, items in _group_by_marketer(in_month).items():
        total = sum(s.price for s in items)
        rows.append(
            CommissionRow(
                marketer_id=marketer_id,
                name=items[0].marketer_name,
                email=items[0].marketer_email,
                sales_count=len(items),
                total_sales_value=total,
                commission=total * rate,
            )
        )
    rows.sort(key=lambda row: (-row.commission, row.name))
    return rows


def marketing_rankings(sales: Iterable[SaleRecord]) -> list[RankingRow]:
    rows = [
        RankingRow(
            marketer_id=marketer_id,
            name=items[0].marketer_name,
            email=items[0].marketer_email,
            sales_count=len(items),
            sales_sum_price=sum(s.price for s in items),
        )
        for marketer_id, items in _group_by_marketer(sales).items()
    ]
    rows.sort(key=lambda row: (-row.sales_count, -row.sales_sum_price, row.name))
    return rows


def dashboard_summary(sales: Iterable[SaleRecord], today: date) -> DashboardSummary:
    """Headline figures; growth compares this month's revenue with last month's."""
    sales = list(sales)
    previous = add_months(today.replace(day=1), -1)

    def revenue_in(month_start: date) -> float:
        return sum(
            s.price
            for s in sales
            if (s.sale_date.year, s.sale_date.month) == (month_start.year, month_start.month)
        )

    current_revenue = revenue_in(today.replace(day=1))
    previous_revenue = revenue_in(previous)
    growth = None
    if previous_revenue > 0:
        growth = (current_revenue - previous_revenue) / previous_revenue * 100

    return DashboardSummary(
        total_revenue=sum(s.price for s in sales),
        total_orders=len(sales),
        total_customers=len({s.customer_id for s in sales if s.customer_id is not None}),
        monthly_growth_rate=growth,
    )
