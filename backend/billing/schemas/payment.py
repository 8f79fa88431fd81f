from pydantic import BaseModel, Field
from typing import Optional
from datetime import date, datetime
from decimal import Decimal

from billing.schemas.common import MoneyAmount


class PaymentCreate(BaseModel):
    amount: Decimal = Field(..., gt=0, description="Amount in major units, e.g. 130.00")
    payment_date: date
    method: str = Field(..., min_length=1)
    reference: Optional[str] = None
    notes: Optional[str] = None


class PaymentResponse(BaseModel):
    id: int
    document_id: int
    amount: MoneyAmount
    payment_date: date
    method: str
    reference: Optional[str]
    notes: Optional[str]
    created_at: Optional[datetime]

    class Config:
        from_attributes = True
