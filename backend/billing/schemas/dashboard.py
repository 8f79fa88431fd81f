from pydantic import BaseModel
from typing import List
from datetime import date

from billing.schemas.common import MoneyAmount


class MonthlyRevenue(BaseModel):
    month: str  # YYYY-MM
    revenue: MoneyAmount


class DashboardStats(BaseModel):
    as_of: date
    total_revenue: MoneyAmount
    overdue_count: int
    draft_count: int
    monthly_revenue_trend: List[MonthlyRevenue]
