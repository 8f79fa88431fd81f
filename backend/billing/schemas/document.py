from pydantic import BaseModel, Field, model_validator
from typing import Annotated, Any, Dict, List, Literal, Optional, Union
from datetime import date, datetime
from decimal import Decimal

from billing.models.enums import DocumentStatus, DocumentType
from billing.schemas.common import MoneyAmount
from billing.schemas.payment import PaymentResponse


class LineItemInput(BaseModel):
    description: str
    quantity: Decimal = Field(..., ge=0, decimal_places=4)
    unit_price: Decimal = Field(..., description="Price per unit in major units, e.g. 50.00")


class LineItemResponse(BaseModel):
    id: int
    position: int
    description: str
    quantity: Decimal
    unit_price: MoneyAmount
    line_total: MoneyAmount

    class Config:
        from_attributes = True


class DocumentCreate(BaseModel):
    client_id: int
    type: DocumentType
    name: Optional[str] = None
    issue_date: Optional[date] = None  # Defaults to today
    due_date: Optional[date] = None
    items: List[LineItemInput] = []
    tax_rate: Optional[Decimal] = Field(None, ge=0, decimal_places=3)  # Falls back to the configured default
    notes: Optional[str] = None
    design_config: Optional[Dict[str, Any]] = None


# --- Update commands ---------------------------------------------------------
# An update is a list of commands, at most one per field group. The document
# service checks the state machine for StatusChange and the draft-only edit
# lock for FinancialEdit; MetadataEdit is allowed in any status.


class StatusChange(BaseModel):
    kind: Literal["status"] = "status"
    status: DocumentStatus


class FinancialEdit(BaseModel):
    kind: Literal["financial"] = "financial"
    items: Optional[List[LineItemInput]] = None  # Replaces the stored items wholesale
    tax_rate: Optional[Decimal] = Field(None, ge=0, decimal_places=3)

    @model_validator(mode="after")
    def _requires_a_change(self):
        if self.items is None and self.tax_rate is None:
            raise ValueError("financial edit must set items and/or tax_rate")
        return self


class MetadataEdit(BaseModel):
    """Only fields present in the payload are applied; an explicit null clears an optional field."""
    kind: Literal["metadata"] = "metadata"
    name: Optional[str] = Field(None, min_length=1)
    issue_date: Optional[date] = None
    due_date: Optional[date] = None
    notes: Optional[str] = None
    design_config: Optional[Dict[str, Any]] = None

    @model_validator(mode="after")
    def _required_fields_not_cleared(self):
        for field in ("name", "issue_date"):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be cleared")
        return self

    def changes(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True, exclude={"kind"})


UpdateCommand = Annotated[
    Union[StatusChange, FinancialEdit, MetadataEdit],
    Field(discriminator="kind"),
]


class DocumentUpdate(BaseModel):
    commands: List[UpdateCommand] = Field(..., min_length=1)

    @model_validator(mode="after")
    def _one_command_per_kind(self):
        kinds = [command.kind for command in self.commands]
        if len(kinds) != len(set(kinds)):
            raise ValueError("each command kind may appear at most once per update")
        return self

    @classmethod
    def of(cls, *commands) -> "DocumentUpdate":
        return cls(commands=list(commands))

    def command(self, command_type):
        for command in self.commands:
            if isinstance(command, command_type):
                return command
        return None


# --- Responses -----------------------------------------------------------------


class DocumentListResponse(BaseModel):
    id: int
    number: str
    name: str
    type: DocumentType
    status: DocumentStatus
    client_id: int
    client_name: Optional[str] = None
    issue_date: date
    due_date: Optional[date]
    grand_total: MoneyAmount
    amount_paid: MoneyAmount
    balance_due: MoneyAmount
    created_at: Optional[datetime]

    class Config:
        from_attributes = True


class DocumentResponse(BaseModel):
    id: int
    number: str
    name: str
    type: DocumentType
    status: DocumentStatus
    client_id: int
    client_name: Optional[str] = None
    issue_date: date
    due_date: Optional[date]
    notes: Optional[str]
    tax_rate: Decimal
    subtotal: MoneyAmount
    tax_total: MoneyAmount
    grand_total: MoneyAmount
    amount_paid: MoneyAmount
    balance_due: MoneyAmount
    overpaid_amount: MoneyAmount
    design_config: Optional[Dict[str, Any]]
    created_at: Optional[datetime]
    updated_at: Optional[datetime]
    line_items: List[LineItemResponse] = []
    payments: List[PaymentResponse] = []

    class Config:
        from_attributes = True
