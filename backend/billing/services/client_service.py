"""
Client Service - CRUD for clients with referential integrity on delete.
"""
import logging
from typing import List
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from billing.database import transaction
from billing.exceptions import NotFoundError, ReferentialIntegrityError
from billing.models.client import Client
from billing.models.document import Document
from billing.schemas.client import ClientCreate, ClientUpdate

logger = logging.getLogger(__name__)


class ClientService:
    """Service for managing clients"""

    def list_clients(self, db: Session) -> List[Client]:
        return db.query(Client).order_by(Client.created_at.desc(), Client.id.desc()).all()

    def get_client(self, client_id: int, db: Session) -> Client:
        client = db.get(Client, client_id)
        if client is None:
            raise NotFoundError("Client", client_id)
        return client

    def create_client(self, data: ClientCreate, db: Session) -> Client:
        with transaction(db):
            client = Client(**data.model_dump())
            db.add(client)

        logger.info(f"Created client {client.id}: {client.name}")
        return client

    def update_client(self, client_id: int, data: ClientUpdate, db: Session) -> Client:
        changes = data.model_dump(exclude_unset=True)

        with transaction(db):
            client = self.get_client(client_id, db)
            for field, value in changes.items():
                setattr(client, field, value)

        logger.info(f"Updated client {client_id}: {sorted(changes)}")
        return client

    def delete_client(self, client_id: int, db: Session) -> None:
        """Delete a client. Refused while any document references it."""
        with transaction(db):
            client = self.get_client(client_id, db)

            document_count = db.query(func.count(Document.id)).filter(
                Document.client_id == client_id
            ).scalar()
            if document_count:
                logger.warning(f"Refused to delete client {client_id}: {document_count} document(s) reference it")
                raise ReferentialIntegrityError(
                    f"Client {client_id} still has {document_count} document(s); delete or reassign them first"
                )

            db.delete(client)
            try:
                db.flush()
            except IntegrityError as e:
                # A document was inserted after the count above
                raise ReferentialIntegrityError(f"Client {client_id} is referenced by documents") from e

        logger.info(f"Deleted client {client_id}")


# Singleton instance
client_service = ClientService()
