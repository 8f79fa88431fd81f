"""
Query Service - Read-side projections of the ledger.
"""
import logging
from collections import defaultdict
from datetime import date
from typing import List, Optional
from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload, selectinload

from billing.config import settings
from billing.exceptions import NotFoundError
from billing.models.document import Document
from billing.models.enums import DocumentStatus, DocumentType
from billing.schemas.dashboard import DashboardStats, MonthlyRevenue
from billing.utils.money import Money

logger = logging.getLogger(__name__)

REVENUE_STATUSES = (DocumentStatus.PAID, DocumentStatus.PARTIALLY_PAID)
SETTLED_STATUSES = (DocumentStatus.PAID, DocumentStatus.VOID)


class QueryService:
    """Service for listing documents and computing dashboard statistics"""

    def list_documents(
        self,
        db: Session,
        document_type: Optional[DocumentType] = None,
        status: Optional[DocumentStatus] = None,
        client_id: Optional[int] = None,
    ) -> List[Document]:
        """All documents newest first, with the client loaded for its display name."""
        query = db.query(Document).options(joinedload(Document.client))

        if document_type:
            query = query.filter(Document.type == document_type)
        if status:
            query = query.filter(Document.status == status)
        if client_id:
            query = query.filter(Document.client_id == client_id)

        return query.order_by(Document.created_at.desc(), Document.id.desc()).all()

    def get_document(self, document_id: int, db: Session) -> Document:
        """Single document with line items and payment history attached."""
        document = db.query(Document).options(
            joinedload(Document.client),
            selectinload(Document.line_items),
            selectinload(Document.payments),
        ).filter(Document.id == document_id).first()

        if document is None:
            raise NotFoundError("Document", document_id)
        return document

    def get_dashboard_stats(self, db: Session, as_of: Optional[date] = None) -> DashboardStats:
        """
        Aggregate figures for the dashboard.

        Revenue counts the grand total of paid documents and the paid portion
        of partially paid ones. Overdue counts documents of either type that
        are neither paid nor void and whose due date is before ``as_of``.
        """
        as_of = as_of or date.today()

        rows = db.query(
            Document.issue_date,
            Document.status,
            Document.grand_total,
            Document.amount_paid,
        ).filter(Document.status.in_(REVENUE_STATUSES)).all()

        total_revenue = Money.zero()
        revenue_by_month = defaultdict(Money.zero)
        for issue_date, status, grand_total, amount_paid in rows:
            revenue = grand_total if status == DocumentStatus.PAID else amount_paid
            total_revenue = total_revenue + revenue
            month = issue_date.strftime("%Y-%m")
            revenue_by_month[month] = revenue_by_month[month] + revenue

        recent_months = sorted(revenue_by_month)[-settings.revenue_trend_months:]
        trend = [MonthlyRevenue(month=month, revenue=revenue_by_month[month]) for month in recent_months]

        overdue_count = db.query(func.count(Document.id)).filter(
            Document.status.notin_(SETTLED_STATUSES),
            Document.due_date.isnot(None),
            Document.due_date < as_of,
        ).scalar()

        draft_count = db.query(func.count(Document.id)).filter(
            Document.status == DocumentStatus.DRAFT
        ).scalar()

        return DashboardStats(
            as_of=as_of,
            total_revenue=total_revenue,
            overdue_count=overdue_count or 0,
            draft_count=draft_count or 0,
            monthly_revenue_trend=trend,
        )


# Singleton instance
query_service = QueryService()
