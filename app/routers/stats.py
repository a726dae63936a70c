# app/routers/stats.py
"""Dashboard counters and sales statistics, scoped to what the caller can see."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional
from app.auth import get_caller
from app.database import get_db
from app.schemas.sale import DashboardOut, SalesStatsOut
from app.services import report_service
from app.services.access_control import CallerContext

router = APIRouter()


@router.get("/stats/dashboard", response_model=DashboardOut, summary="Inventory, clients, revenue")
def get_dashboard(db: Session = Depends(get_db), caller: CallerContext = Depends(get_caller)):
    return report_service.get_dashboard(db, caller)


@router.get("/stats/sales", response_model=SalesStatsOut, summary="Sales by month and fuel type")
def get_sales_stats(months: Optional[int] = Query(None, ge=1), db: Session = Depends(get_db),
                    caller: CallerContext = Depends(get_caller)):
    return report_service.get_sales_statistics(db, caller, months=months)
