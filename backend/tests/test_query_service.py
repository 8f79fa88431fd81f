from datetime import date
from decimal import Decimal

import pytest

from billing.exceptions import NotFoundError
from billing.models.enums import DocumentStatus, DocumentType
from billing.schemas.client import ClientCreate
from billing.schemas.document import DocumentCreate, LineItemInput
from billing.schemas.payment import PaymentCreate
from billing.services.client_service import client_service
from billing.services.document_service import document_service
from billing.services.query_service import query_service
from billing.utils.money import Money


def make_invoice(db, client_id, amount, issue_date, due_date=None, document_type=DocumentType.INVOICE):
    return document_service.create_document(DocumentCreate(
        client_id=client_id,
        type=document_type,
        issue_date=issue_date,
        due_date=due_date,
        items=[LineItemInput(description="Work", quantity=Decimal("1"), unit_price=Decimal(amount))],
        tax_rate=Decimal("0"),
    ), db)


def settle(db, document, amount):
    document_service.change_status(document.id, DocumentStatus.SENT, db)
    return document_service.add_payment(document.id, PaymentCreate(
        amount=Decimal(amount), payment_date=document.issue_date, method="card"
    ), db)


def test_list_documents_newest_first_with_client_name(db, client_record):
    other = client_service.create_client(ClientCreate(name="Zenith Labs"), db)
    first = make_invoice(db, client_record.id, "10.00", date(2026, 1, 1))
    second = make_invoice(db, other.id, "20.00", date(2026, 1, 2))

    documents = query_service.list_documents(db)

    assert [d.id for d in documents] == [second.id, first.id]
    assert [d.client_name for d in documents] == ["Zenith Labs", "Acme Trading"]


def test_list_documents_filters(db, client_record):
    make_invoice(db, client_record.id, "10.00", date(2026, 1, 1))
    quote = make_invoice(db, client_record.id, "10.00", date(2026, 1, 1), document_type=DocumentType.QUOTATION)

    quotations = query_service.list_documents(db, document_type=DocumentType.QUOTATION)
    assert [d.id for d in quotations] == [quote.id]
    assert len(query_service.list_documents(db, status=DocumentStatus.DRAFT)) == 2


def test_get_document_attaches_items_and_payments(db, client_record):
    document = make_invoice(db, client_record.id, "80.00", date(2026, 2, 1))
    settle(db, document, "30.00")

    fetched = query_service.get_document(document.id, db)

    assert len(fetched.line_items) == 1
    assert [p.amount for p in fetched.payments] == [Money.from_decimal("30.00")]


def test_get_missing_document(db):
    with pytest.raises(NotFoundError):
        query_service.get_document(77, db)


def test_dashboard_stats(db, client_record):
    paid = make_invoice(db, client_record.id, "100.00", date(2026, 1, 15))
    settle(db, paid, "100.00")

    partial = make_invoice(db, client_record.id, "200.00", date(2026, 2, 10), due_date=date(2026, 3, 1))
    settle(db, partial, "50.00")

    overdue_sent = make_invoice(db, client_record.id, "30.00", date(2026, 2, 20), due_date=date(2026, 3, 5))
    document_service.change_status(overdue_sent.id, DocumentStatus.SENT, db)

    make_invoice(db, client_record.id, "40.00", date(2026, 3, 1), due_date=date(2026, 12, 1))  # draft, not due

    void = make_invoice(db, client_record.id, "60.00", date(2026, 1, 2), due_date=date(2026, 2, 1))
    document_service.change_status(void.id, DocumentStatus.VOID, db)

    make_invoice(db, client_record.id, "70.00", date(2026, 1, 2), due_date=date(2026, 2, 1),
                 document_type=DocumentType.QUOTATION)

    stats = query_service.get_dashboard_stats(db, as_of=date(2026, 3, 10))

    assert stats.total_revenue == Decimal("150.00")
    assert stats.overdue_count == 3  # partial, overdue_sent and the past-due draft quotation
    assert stats.draft_count == 2  # draft invoice and quotation
    assert [(m.month, m.revenue) for m in stats.monthly_revenue_trend] == [
        ("2026-01", Decimal("100.00")),
        ("2026-02", Decimal("50.00")),
    ]


def test_overdue_count_includes_quotations(db, client_record):
    quote = make_invoice(db, client_record.id, "80.00", date(2026, 1, 2), due_date=date(2026, 1, 10),
                         document_type=DocumentType.QUOTATION)
    document_service.change_status(quote.id, DocumentStatus.SENT, db)

    voided = make_invoice(db, client_record.id, "90.00", date(2026, 1, 2), due_date=date(2026, 1, 10),
                          document_type=DocumentType.QUOTATION)
    document_service.change_status(voided.id, DocumentStatus.VOID, db)

    stats = query_service.get_dashboard_stats(db, as_of=date(2026, 6, 1))

    assert stats.overdue_count == 1


def test_revenue_trend_keeps_most_recent_months(db, client_record):
    for month in range(1, 10):
        document = make_invoice(db, client_record.id, "10.00", date(2025, month, 1))
        settle(db, document, "10.00")

    trend = query_service.get_dashboard_stats(db, as_of=date(2025, 12, 31)).monthly_revenue_trend

    assert [m.month for m in trend] == [f"2025-{m:02d}" for m in range(4, 10)]
