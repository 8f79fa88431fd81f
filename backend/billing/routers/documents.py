"""
Documents Router - Invoices and quotations
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from billing.database import get_db
from billing.models.enums import DocumentStatus, DocumentType
from billing.schemas.document import (
    DocumentCreate,
    DocumentListResponse,
    DocumentResponse,
    DocumentUpdate,
    StatusChange,
)
from billing.schemas.payment import PaymentCreate
from billing.services.document_service import document_service
from billing.services.query_service import query_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/documents", tags=["documents"])


@router.get("", response_model=List[DocumentListResponse])
def list_documents(
    type: Optional[DocumentType] = Query(None, description="Filter by document type"),
    status: Optional[DocumentStatus] = Query(None, description="Filter by status"),
    client_id: Optional[int] = Query(None, description="Filter by client ID"),
    db: Session = Depends(get_db)
):
    """List documents newest first, with client names"""
    return query_service.list_documents(db, document_type=type, status=status, client_id=client_id)


@router.get("/{document_id}", response_model=DocumentResponse)
def get_document(document_id: int, db: Session = Depends(get_db)):
    """Get a document with its line items and payments"""
    return query_service.get_document(document_id, db)


@router.post("", response_model=DocumentResponse, status_code=201)
def create_document(data: DocumentCreate, db: Session = Depends(get_db)):
    """Create a draft invoice or quotation"""
    return document_service.create_document(data, db)


@router.patch("/{document_id}", response_model=DocumentResponse)
def update_document(document_id: int, update: DocumentUpdate, db: Session = Depends(get_db)):
    """Apply status, financial and metadata commands in one transaction"""
    return document_service.update_document(document_id, update, db)


@router.post("/{document_id}/status", response_model=DocumentResponse)
def change_status(document_id: int, change: StatusChange, db: Session = Depends(get_db)):
    """Move a document to another status"""
    return document_service.change_status(document_id, change.status, db)


@router.post("/{document_id}/payments", response_model=DocumentResponse, status_code=201)
def add_payment(document_id: int, payment: PaymentCreate, db: Session = Depends(get_db)):
    """Record a payment against a sent invoice"""
    return document_service.add_payment(document_id, payment, db)


@router.delete("/{document_id}", status_code=204)
def delete_document(document_id: int, db: Session = Depends(get_db)):
    """Delete a draft or void document"""
    document_service.delete_document(document_id, db)
    return Response(status_code=204)
