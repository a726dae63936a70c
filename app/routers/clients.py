# app/routers/clients.py
"""Client records, same access shape as vehicles."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import Optional
from app.auth import get_caller
from app.database import get_db
from app.schemas.client import ClientCreate, ClientOut, ClientUpdate
from app.services import client_service
from app.services.access_control import CallerContext

router = APIRouter()


@router.get("/clients", response_model=list[ClientOut], summary="List clients")
def list_clients(search: Optional[str] = None, db: Session = Depends(get_db),
                 caller: CallerContext = Depends(get_caller)):
    """Search matches last name, first name, email or phone."""
    return client_service.list_clients(db, caller, search=search)


@router.get("/clients/{client_id}", response_model=ClientOut)
def get_client(client_id: str, db: Session = Depends(get_db),
               caller: CallerContext = Depends(get_caller)):
    return client_service.get_client(db, caller, client_id)


@router.post("/clients", response_model=ClientOut, status_code=201)
def create_client(body: ClientCreate, db: Session = Depends(get_db),
                  caller: CallerContext = Depends(get_caller)):
    return client_service.create_client(db, caller, body.model_dump())


@router.put("/clients/{client_id}", response_model=ClientOut)
def update_client(client_id: str, body: ClientUpdate, db: Session = Depends(get_db),
                  caller: CallerContext = Depends(get_caller)):
    return client_service.update_client(db, caller, client_id, body.model_dump(exclude_unset=True))


@router.delete("/clients/{client_id}")
def delete_client(client_id: str, db: Session = Depends(get_db),
                  caller: CallerContext = Depends(get_caller)):
    client_service.delete_client(db, caller, client_id)
    return {"status": "removed", "client_id": client_id}
