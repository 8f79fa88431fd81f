from sqlalchemy import Column, Integer, String, Numeric, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from billing.database import Base
from billing.models.types import MoneyType
from billing.utils.totals import QUANTITY_PLACES


class LineItem(Base):
    __tablename__ = "line_items"
    __table_args__ = (
        CheckConstraint("quantity >= 0", name="ck_line_items_quantity_nonneg"),
    )

    id = Column(Integer, primary_key=True, index=True)
    document_id = Column(Integer, ForeignKey("documents.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False)
    description = Column(String, nullable=False)
    quantity = Column(Numeric(12, QUANTITY_PLACES), nullable=False)
    unit_price = Column(MoneyType, nullable=False)
    line_total = Column(MoneyType, nullable=False)  # unit_price * quantity, rounded per line

    # Relationships
    document = relationship("Document", back_populates="line_items")
