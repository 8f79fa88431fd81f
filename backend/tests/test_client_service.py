import pytest
from pydantic import ValidationError

from billing.exceptions import NotFoundError, ReferentialIntegrityError
from billing.models.client import Client
from billing.schemas.client import ClientCreate, ClientUpdate
from billing.services.client_service import client_service
from billing.services.document_service import document_service


def test_create_and_get(db):
    created = client_service.create_client(ClientCreate(name="Blue Fern Studio", tax_id="4455"), db)

    fetched = client_service.get_client(created.id, db)
    assert fetched.name == "Blue Fern Studio"
    assert fetched.tax_id == "4455"
    assert fetched.email is None


def test_list_newest_first(db):
    first = client_service.create_client(ClientCreate(name="First"), db)
    second = client_service.create_client(ClientCreate(name="Second"), db)

    assert [c.id for c in client_service.list_clients(db)] == [second.id, first.id]


def test_partial_update_only_touches_given_fields(db, client_record):
    updated = client_service.update_client(client_record.id, ClientUpdate(phone="+27 21 555 0101"), db)

    assert updated.phone == "+27 21 555 0101"
    assert updated.name == "Acme Trading"
    assert updated.email == "accounts@acme.test"


def test_update_rejects_clearing_name_and_unknown_fields():
    with pytest.raises(ValidationError):
        ClientUpdate(name=None)
    with pytest.raises(ValidationError):
        ClientUpdate(id=5)


def test_missing_client(db):
    with pytest.raises(NotFoundError):
        client_service.get_client(999, db)
    with pytest.raises(NotFoundError):
        client_service.delete_client(999, db)


def test_delete_unreferenced_client(db, client_record):
    client_id = client_record.id
    client_service.delete_client(client_id, db)
    assert db.get(Client, client_id) is None


def test_delete_refused_while_documents_reference_client(db, client_record, invoice_data):
    document_service.create_document(invoice_data, db)

    with pytest.raises(ReferentialIntegrityError):
        client_service.delete_client(client_record.id, db)

    assert client_service.get_client(client_record.id, db).name == "Acme Trading"


def test_store_enforces_restrict_on_client_delete(db, client_record, invoice_data):
    """The foreign key refuses the delete even without the service check"""
    from sqlalchemy.exc import IntegrityError

    document_service.create_document(invoice_data, db)
    db.delete(client_service.get_client(client_record.id, db))
    with pytest.raises(IntegrityError):
        db.flush()
    db.rollback()
