# app/routers/garages.py
"""Garages: admins manage all, members see their own."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.auth import get_caller
from app.database import get_db
from app.schemas.garage import GarageCreate, GarageOut, GarageUpdate
from app.services import garage_service
from app.services.access_control import CallerContext

router = APIRouter()


@router.get("/garages", response_model=list[GarageOut], summary="List visible garages")
def list_garages(db: Session = Depends(get_db), caller: CallerContext = Depends(get_caller)):
    return garage_service.list_garages(db, caller)


@router.get("/garages/{garage_id}", response_model=GarageOut)
def get_garage(garage_id: str, db: Session = Depends(get_db),
               caller: CallerContext = Depends(get_caller)):
    return garage_service.get_garage(db, caller, garage_id)


@router.post("/garages", response_model=GarageOut, status_code=201, summary="Create a garage (admin)")
def create_garage(body: GarageCreate, db: Session = Depends(get_db),
                  caller: CallerContext = Depends(get_caller)):
    return garage_service.create_garage(db, caller, body.model_dump())


@router.put("/garages/{garage_id}", response_model=GarageOut, summary="Update a garage (admin)")
def update_garage(garage_id: str, body: GarageUpdate, db: Session = Depends(get_db),
                  caller: CallerContext = Depends(get_caller)):
    return garage_service.update_garage(db, caller, garage_id, body.model_dump(exclude_unset=True))


@router.delete("/garages/{garage_id}", summary="Delete a garage and everything it owns (admin)")
def delete_garage(garage_id: str, db: Session = Depends(get_db),
                  caller: CallerContext = Depends(get_caller)):
    """Cascades to the garage's vehicles, clients and sales; its profiles become unassigned."""
    garage_service.delete_garage(db, caller, garage_id)
    return {"status": "deleted", "garage_id": garage_id}
