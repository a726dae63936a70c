"""Sales: recorded by any garage member for their own garage, corrected by managers."""

from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse
from sqlalchemy.orm import Session
from typing import Optional
from app.auth import get_caller
from app.database import get_db
from app.schemas.sale import SaleCreate, SaleOut, SaleUpdate
from app.services import sale_service
from app.services.access_control import CallerContext

router = APIRouter()


@router.get("/sales", response_model=list[SaleOut], summary="Sales history, newest first")
def list_sales(limit: Optional[int] = Query(None, ge=1), db: Session = Depends(get_db),
               caller: CallerContext = Depends(get_caller)):
    sales = sale_service.list_sales(db, caller, limit=limit)
    return [sale_service.present_sale(caller, s) for s in sales]


@router.get("/sales/{sale_id}", response_model=SaleOut)
def get_sale(sale_id: str, db: Session = Depends(get_db),
             caller: CallerContext = Depends(get_caller)):
    return sale_service.present_sale(caller, sale_service.get_sale(db, caller, sale_id))


@router.post("/sales", response_model=SaleOut, status_code=201, summary="Record a sale")
def create_sale(body: SaleCreate, db: Session = Depends(get_db),
                caller: CallerContext = Depends(get_caller)):
    """Marks the sold vehicle unavailable when the caller may update it."""
    sale = sale_service.create_sale(db, caller, body.model_dump(exclude_none=True))
    return sale_service.present_sale(caller, sale)


@router.put("/sales/{sale_id}", response_model=SaleOut)
def update_sale(sale_id: str, body: SaleUpdate, db: Session = Depends(get_db),
                caller: CallerContext = Depends(get_caller)):
    sale = sale_service.update_sale(db, caller, sale_id, body.model_dump(exclude_unset=True))
    return sale_service.present_sale(caller, sale)


@router.delete("/sales/{sale_id}", summary="Sales cannot be deleted")
def delete_sale(sale_id: str, db: Session = Depends(get_db),
                caller: CallerContext = Depends(get_caller)):
    sale_service.delete_sale(db, caller, sale_id)


@router.get("/sales/{sale_id}/invoice", response_class=PlainTextResponse, summary="Plain-text invoice")
def get_invoice(sale_id: str, db: Session = Depends(get_db),
                caller: CallerContext = Depends(get_caller)):
    sale = sale_service.get_sale(db, caller, sale_id)
    return PlainTextResponse(
        sale_service.render_invoice(caller, sale),
        headers={"Content-Disposition": f'attachment; filename="invoice-{sale.id[:8]}.txt"'},
    )
