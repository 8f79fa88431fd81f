from datetime import date
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import billing.models  # noqa: F401
from billing.database import Base, create_ledger_engine, get_db
from billing.main import app
from billing.models.enums import DocumentType
from billing.schemas.client import ClientCreate
from billing.schemas.document import DocumentCreate, LineItemInput
from billing.services.client_service import client_service


@pytest.fixture
def engine():
    engine = create_ledger_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client_record(db):
    return client_service.create_client(ClientCreate(name="Acme Trading", email="accounts@acme.test"), db)


@pytest.fixture
def scenario_a_items():
    return [
        LineItemInput(description="Consulting hours", quantity=Decimal("2"), unit_price=Decimal("50.00")),
        LineItemInput(description="Setup fee", quantity=Decimal("1"), unit_price=Decimal("100.00")),
    ]


@pytest.fixture
def invoice_data(client_record, scenario_a_items):
    return DocumentCreate(
        client_id=client_record.id,
        type=DocumentType.INVOICE,
        issue_date=date(2026, 3, 2),
        due_date=date(2026, 4, 1),
        items=scenario_a_items,
        tax_rate=Decimal("15"),
    )


@pytest.fixture
def quotation_data(client_record, scenario_a_items):
    return DocumentCreate(
        client_id=client_record.id,
        type=DocumentType.QUOTATION,
        issue_date=date(2026, 3, 2),
        items=scenario_a_items,
        tax_rate=Decimal("15"),
    )


@pytest.fixture
def api(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
