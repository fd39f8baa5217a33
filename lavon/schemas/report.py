from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class SaleRecordIn(BaseModel):
    marketer_id: int
    marketer_name: str = Field(max_length=255)
    marketer_email: Optional[str] = Field(default=None, max_length=255)
    customer_id: Optional[int] = None
    price: float = Field(ge=0, allow_inf_nan=False)
    sale_date: date


class CommissionReportRequest(BaseModel):
    year: int = Field(ge=2000, le=2100)
    month: int = Field(ge=1, le=12)
    sales: list[SaleRecordIn] = Field(default_factory=list)


class CommissionRowRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    marketer_id: int
    name: str
    email: Optional[str]
    sales_count: int
    total_sales_value: float
    commission: float


class RankingRequest(BaseModel):
    sales: list[SaleRecordIn] = Field(default_factory=list)


class RankingRowRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    marketer_id: int
    name: str
    email: Optional[str]
    sales_count: int
    sales_sum_price: float


class SummaryRequest(BaseModel):
    sales: list[SaleRecordIn] = Field(default_factory=list)
    today: Optional[date] = None


class DashboardSummaryRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_revenue: float
    total_orders: int
    total_customers: int
    monthly_growth_rate: Optional[float]
