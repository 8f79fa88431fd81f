"""
Seed script to generate synthetic clients, invoices, quotations and payments for demo purposes
"""
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy.orm import Session
from billing.database import SessionLocal, engine, Base
from billing.models.client import Client
from billing.models.enums import DocumentStatus, DocumentType
from billing.schemas.client import ClientCreate
from billing.schemas.document import DocumentCreate, LineItemInput
from billing.schemas.payment import PaymentCreate
from billing.services.client_service import client_service
from billing.services.document_service import document_service
from decimal import Decimal
from datetime import date, timedelta
from faker import Faker
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

fake = Faker()


def create_clients(db: Session, count: int = 8) -> list[Client]:
    """Create synthetic clients"""
    clients = []
    for _ in range(count):
        clients.append(client_service.create_client(ClientCreate(
            name=fake.company(),
            email=fake.company_email(),
            phone=fake.phone_number(),
            address=fake.address(),
            tax_id=fake.bothify(text='##-#######'),
        ), db))
    return clients


def random_items() -> list[LineItemInput]:
    return [
        LineItemInput(
            description=fake.catch_phrase(),
            quantity=Decimal(str(fake.random_int(min=1, max=20))),
            unit_price=Decimal(str(round(fake.random.uniform(10.0, 500.0), 2))),
        )
        for _ in range(fake.random_int(min=1, max=5))
    ]


def create_invoices(db: Session, clients: list[Client], count: int = 20) -> None:
    """Create invoices spread over the last six months, some sent and (partially) paid"""
    today = date.today()
    for _ in range(count):
        issue_date = today - timedelta(days=fake.random_int(min=0, max=180))
        document = document_service.create_document(DocumentCreate(
            client_id=fake.random_element(elements=clients).id,
            type=DocumentType.INVOICE,
            name=fake.bs().title(),
            issue_date=issue_date,
            due_date=issue_date + timedelta(days=30),
            items=random_items(),
        ), db)

        outcome = fake.random_element(elements=('draft', 'sent', 'partial', 'paid'))
        if outcome == 'draft':
            continue

        document_service.change_status(document.id, DocumentStatus.SENT, db)
        if outcome == 'sent':
            continue

        grand_total = document.grand_total.to_decimal()
        amount = grand_total if outcome == 'paid' else (grand_total / 2).quantize(Decimal('0.01'))
        document_service.add_payment(document.id, PaymentCreate(
            amount=amount,
            payment_date=issue_date + timedelta(days=fake.random_int(min=1, max=30)),
            method=fake.random_element(elements=('bank_transfer', 'card', 'cash')),
            reference=fake.bothify(text='REF-########'),
        ), db)


def create_quotations(db: Session, clients: list[Client], count: int = 6) -> None:
    """Create quotations, some approved"""
    for _ in range(count):
        document = document_service.create_document(DocumentCreate(
            client_id=fake.random_element(elements=clients).id,
            type=DocumentType.QUOTATION,
            items=random_items(),
        ), db)
        if fake.boolean():
            document_service.change_status(document.id, DocumentStatus.SENT, db)
            document_service.change_status(document.id, DocumentStatus.APPROVED, db)


def main():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        clients = create_clients(db)
        create_invoices(db, clients)
        create_quotations(db, clients)
        logger.info(f"Seeded {len(clients)} clients with invoices and quotations")
    finally:
        db.close()


if __name__ == "__main__":
    main()
