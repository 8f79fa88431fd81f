from pydantic import BaseModel, Field
from typing import Optional
from decimal import Decimal


class SettingsUpdate(BaseModel):
    """Writable settings. Numbering counters are owned by the numbering service."""
    company_name: Optional[str] = None
    company_email: Optional[str] = None
    company_address: Optional[str] = None
    company_phone: Optional[str] = None
    bank_details: Optional[str] = None
    tax_rate: Optional[Decimal] = Field(None, ge=0, decimal_places=3)
    currency_symbol: Optional[str] = Field(None, min_length=1)
    invoice_prefix: Optional[str] = Field(None, min_length=1, pattern=r"^[A-Za-z0-9_]+$")
    primary_color: Optional[str] = None
    font_family: Optional[str] = None
    background_opacity: Optional[float] = Field(None, ge=0, le=1)

    class Config:
        extra = "forbid"


class SettingsResponse(BaseModel):
    company_name: Optional[str] = None
    company_email: Optional[str] = None
    company_address: Optional[str] = None
    company_phone: Optional[str] = None
    bank_details: Optional[str] = None
    tax_rate: Decimal
    currency_symbol: str
    invoice_prefix: str
    quotation_prefix: str
    next_invoice_number: int
    next_quote_number: int
    primary_color: Optional[str] = None
    font_family: Optional[str] = None
    background_opacity: Optional[float] = None
