from sqlalchemy import Column, Integer, String, Text, ForeignKey, DateTime, Date, CheckConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from billing.database import Base
from billing.models.types import MoneyType


class Payment(Base):
    """Append-only record of money received against an invoice."""
    __tablename__ = "payments"
    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_payments_amount_positive"),
    )

    id = Column(Integer, primary_key=True, index=True)
    document_id = Column(Integer, ForeignKey("documents.id", ondelete="CASCADE"), nullable=False, index=True)
    amount = Column(MoneyType, nullable=False)
    payment_date = Column("date", Date, nullable=False)
    method = Column(String, nullable=False)  # bank_transfer, cash, card, ...
    reference = Column(String, nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    document = relationship("Document", back_populates="payments")
