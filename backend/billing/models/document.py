from sqlalchemy import (
    Column, Integer, String, Text, Numeric, ForeignKey, DateTime, Date, JSON, Enum, CheckConstraint
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from billing.database import Base
from billing.models.enums import DocumentStatus, DocumentType
from billing.models.types import MoneyType
from billing.utils.money import Money
from billing.utils.totals import TAX_RATE_PLACES


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class Document(Base):
    """An invoice or a quotation. Totals are a cache owned by the document service."""
    __tablename__ = "documents"
    __table_args__ = (
        CheckConstraint("amount_paid >= 0", name="ck_documents_amount_paid_nonneg"),
        CheckConstraint("balance_due >= 0", name="ck_documents_balance_due_nonneg"),
        CheckConstraint("tax_rate >= 0", name="ck_documents_tax_rate_nonneg"),
    )

    id = Column(Integer, primary_key=True, index=True)
    client_id = Column(Integer, ForeignKey("clients.id", ondelete="RESTRICT"), nullable=False, index=True)
    number = Column(String, nullable=False, unique=True, index=True)  # INV-0001, QT-0001
    name = Column(String, nullable=False)
    type = Column(
        Enum(DocumentType, native_enum=False, values_callable=_enum_values, length=20),
        nullable=False,
        index=True,
    )
    status = Column(
        Enum(DocumentStatus, native_enum=False, values_callable=_enum_values, length=20),
        nullable=False,
        default=DocumentStatus.DRAFT,
        index=True,
    )
    issue_date = Column(Date, nullable=False)
    due_date = Column(Date, nullable=True)
    notes = Column(Text, nullable=True)
    tax_rate = Column(Numeric(6, TAX_RATE_PLACES), nullable=False, default=0)  # percentage, e.g. 15.000

    # Derived amounts, recomputed by the document service only
    subtotal = Column(MoneyType, nullable=False, default=Money.zero)
    tax_total = Column(MoneyType, nullable=False, default=Money.zero)
    grand_total = Column(MoneyType, nullable=False, default=Money.zero)
    amount_paid = Column(MoneyType, nullable=False, default=Money.zero)
    balance_due = Column(MoneyType, nullable=False, default=Money.zero)

    design_config = Column(JSON, nullable=True)  # Presentation metadata, opaque to the ledger
    version = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    client = relationship("Client", back_populates="documents")
    line_items = relationship(
        "LineItem",
        back_populates="document",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="LineItem.position",
    )
    payments = relationship(
        "Payment",
        back_populates="document",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Payment.id",
    )

    __mapper_args__ = {"version_id_col": version}

    @property
    def client_name(self):
        return self.client.name if self.client else None

    @property
    def overpaid_amount(self) -> Money:
        return (self.amount_paid - self.grand_total).clamp_non_negative()
