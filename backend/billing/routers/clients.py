from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from typing import List
from billing.database import get_db
from billing.schemas.client import ClientCreate, ClientUpdate, ClientResponse
from billing.services.client_service import client_service

router = APIRouter(prefix="/api/clients", tags=["clients"])


@router.get("", response_model=List[ClientResponse])
def list_clients(db: Session = Depends(get_db)):
    """List all clients, newest first"""
    return client_service.list_clients(db)


@router.get("/{client_id}", response_model=ClientResponse)
def get_client(client_id: int, db: Session = Depends(get_db)):
    """Get a single client"""
    return client_service.get_client(client_id, db)


@router.post("", response_model=ClientResponse, status_code=status.HTTP_201_CREATED)
def create_client(data: ClientCreate, db: Session = Depends(get_db)):
    """Create a client"""
    return client_service.create_client(data, db)


@router.patch("/{client_id}", response_model=ClientResponse)
def update_client(client_id: int, data: ClientUpdate, db: Session = Depends(get_db)):
    """Update the fields present in the payload"""
    return client_service.update_client(client_id, data, db)


@router.delete("/{client_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_client(client_id: int, db: Session = Depends(get_db)):
    """Delete a client that no document references"""
    client_service.delete_client(client_id, db)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
